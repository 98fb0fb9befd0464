# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Constants and types for dealing transparently with gzip compression"""

from __future__ import annotations

import gzip
import io
import typing as ty

if ty.TYPE_CHECKING:
    ModeRB = ty.Literal['rb']
    ModeWB = ty.Literal['wb']
    Mode = ty.Union[ModeRB, ModeWB]

#: First two bytes of every gzip stream
GZIP_MAGIC = b'\x1f\x8b'


class DeterministicGzipFile(gzip.GzipFile):
    """Deterministic variant of GzipFile

    This writer does not add filename information to the header, and defaults
    to a modification time (``mtime``) of 0 seconds, so writing the same data
    twice gives identical files.
    """

    def __init__(
        self,
        filename: str | None = None,
        mode: Mode | None = None,
        compresslevel: int = 9,
        fileobj: io.FileIO | None = None,
        mtime: int = 0,
    ):
        if mode is None:
            mode = 'rb'
        modestr: str = mode

        if 'b' not in modestr:
            modestr = f'{mode}b'
        if fileobj is None:
            if filename is None:
                raise TypeError('Must define either fileobj or filename')
            fileobj = self.myfileobj = ty.cast('io.FileIO', open(filename, modestr))
        super().__init__(
            filename='',
            mode=modestr,
            compresslevel=compresslevel,
            fileobj=fileobj,
            mtime=mtime,
        )


def gzip_open(
    filename: str,
    mode: Mode = 'rb',
    compresslevel: int = 9,
    mtime: int = 0,
) -> gzip.GzipFile:
    """Open a gzip file for reading or writing.

    Parameters
    ----------
    filename : str
        Path of file to open.
    mode : str
        Opening mode - either ``rb`` or ``wb``.
    compresslevel: int
        Compression level when writing.
    mtime: int
        Modification time stored in the header when writing a file.  Ignored
        when reading.
    """
    return DeterministicGzipFile(filename, mode, compresslevel, mtime=mtime)


def is_gzip_bytes(binaryblock: bytes) -> bool:
    """True if `binaryblock` starts with the gzip magic number"""
    return binaryblock[:2] == GZIP_MAGIC
