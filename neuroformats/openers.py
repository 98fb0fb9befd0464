# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Context manager opener for plain and gzip-compressed files"""

from __future__ import annotations

import os
import typing as ty

from ._compression import gzip_open

if ty.TYPE_CHECKING:
    from types import TracebackType


class Opener:
    r"""Class to open, and context-manage, plain or gzip-compressed files

    Parameters
    ----------
    filename : str or os.PathLike
        file to open
    mode : str, optional
        ``'rb'`` (default) or ``'wb'``
    use_gzip : bool, optional
        If True, read or write through a gzip stream.  When writing, the
        compression level is ``default_compresslevel``.
    """

    #: default compression level when writing gz files
    default_compresslevel = 1

    def __init__(self, filename, mode='rb', use_gzip=False):
        filename = os.fspath(filename)
        if use_gzip:
            self.fobj = gzip_open(filename, mode, compresslevel=self.default_compresslevel)
        else:
            self.fobj = open(filename, mode)

    def read(self, size: int = -1, /) -> bytes:
        return self.fobj.read(size)

    def write(self, b: bytes, /) -> int | None:
        return self.fobj.write(b)

    def close(self, /) -> None:
        return self.fobj.close()

    def __enter__(self):
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
