# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Position-tracking reads and writes over an in-memory byte buffer

All codecs load a whole file into memory, decompressing it first if it is
gzip-wrapped, then walk through the bytes with a :class:`ByteCursor`.  Writing
goes the other way: fields are appended to a growable cursor, and the finished
buffer is written out in one go, gzip-compressed if requested.

>>> cur = ByteCursor(endianness='>')
>>> cur.write_int32(7)
>>> cur.write_float32(0.5)
>>> cur.seek(0)
>>> cur.read_int32(), cur.read_float32()
(7, 0.5)
"""

from __future__ import annotations

import os

import numpy as np

from ._compression import is_gzip_bytes
from .errors import FormatError, TruncatedDataError
from .openers import Opener
from .volumeutils import endian_codes


class ByteCursor:
    """Byte buffer with a read / write position and a fixed byte order

    Parameters
    ----------
    data : bytes-like, optional
        Initial buffer content.  The buffer grows as needed on writes.
    endianness : str, optional
        Byte order for multi-byte numbers - anything that
        :data:`neuroformats.volumeutils.endian_codes` understands, e.g. ``'>'``,
        ``'big'``, ``'<'`` or ``'little'``.  Default is big endian.
    filename : str, optional
        Name of the file the data came from, used in error messages.
    """

    def __init__(self, data=b'', endianness='>', filename=None):
        self._buf = bytearray(data)
        self.endianness = endian_codes[endianness]
        self.filename = None if filename is None else os.fspath(filename)
        self._pos = 0

    @classmethod
    def from_file(klass, filename, endianness='>'):
        """Load all bytes of `filename`, decompressing gzip data if present"""
        return klass(read_file_bytes(filename), endianness, filename=filename)

    def __len__(self):
        return len(self._buf)

    @property
    def position(self):
        return self._pos

    @property
    def remaining(self):
        """Number of bytes between the current position and the end"""
        return len(self._buf) - self._pos

    def seek(self, pos):
        if not 0 <= pos <= len(self._buf):
            raise ValueError(f'Position {pos} outside buffer of length {len(self._buf)}')
        self._pos = pos

    def getvalue(self):
        """Return full buffer content as bytes"""
        return bytes(self._buf)

    def _dtype(self, code):
        return np.dtype(code).newbyteorder(self.endianness)

    # Reading

    def read_bytes(self, n):
        """Read exactly `n` raw bytes, advancing the position"""
        if n < 0:
            raise FormatError.for_field('count', '>= 0', n, self.filename)
        if n > self.remaining:
            raise TruncatedDataError(n, self.remaining, self._pos, self.filename)
        start = self._pos
        self._pos += n
        return bytes(self._buf[start : self._pos])

    def skip(self, n):
        """Advance position by `n` bytes, without interpreting them"""
        self.read_bytes(n)

    def peek(self, n):
        """Return up to `n` bytes from the current position, without advancing"""
        return bytes(self._buf[self._pos : self._pos + n])

    def read_array(self, dtype, count):
        """Read `count` values of numpy `dtype` in the cursor byte order

        Returns a writeable 1D array in native byte order.
        """
        dt = self._dtype(dtype)
        count = int(count)
        if count < 0:
            raise FormatError.for_field('count', '>= 0', count, self.filename)
        raw = self.read_bytes(dt.itemsize * count)
        return np.frombuffer(raw, dtype=dt).astype(dt.newbyteorder('='))

    def _read_scalar(self, dtype):
        return self.read_array(dtype, 1)[0].item()

    def read_uint8(self):
        return self._read_scalar('u1')

    def read_int16(self):
        return self._read_scalar('i2')

    def read_uint16(self):
        return self._read_scalar('u2')

    def read_int32(self):
        return self._read_scalar('i4')

    def read_uint32(self):
        return self._read_scalar('u4')

    def read_float32(self):
        return self._read_scalar('f4')

    def _decode(self, raw, encoding):
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as err:
            raise FormatError(
                f'Cannot decode {raw!r} as {encoding}',
                field='string',
                expected=encoding,
                actual=raw,
                filename=self.filename,
            ) from err

    def read_string(self, length, encoding='utf-8'):
        """Read a string of exactly `length` bytes

        Trailing NUL bytes, as written by C programs, are dropped.
        """
        raw = self.read_bytes(length)
        return self._decode(raw.rstrip(b'\x00'), encoding)

    def read_line(self, encoding='utf-8'):
        """Read a string up to, and excluding, the next newline byte

        The newline itself is consumed.
        """
        end = self._buf.find(b'\n', self._pos)
        if end == -1:
            # +1 for the newline we did not find
            raise TruncatedDataError(self.remaining + 1, self.remaining, self._pos, self.filename)
        raw = self.read_bytes(end - self._pos)
        self._pos += 1
        return self._decode(raw, encoding)

    # Writing

    def write_bytes(self, data):
        """Write raw `data` at the current position, growing the buffer"""
        data = bytes(data)
        end = self._pos + len(data)
        self._buf[self._pos : end] = data
        self._pos = end

    def write_array(self, values, dtype):
        """Write `values` as numpy `dtype` in the cursor byte order"""
        arr = np.asarray(values).astype(self._dtype(dtype))
        self.write_bytes(arr.tobytes(order='C'))

    def write_uint8(self, value):
        self.write_array([value], 'u1')

    def write_int16(self, value):
        self.write_array([value], 'i2')

    def write_uint16(self, value):
        self.write_array([value], 'u2')

    def write_int32(self, value):
        self.write_array([value], 'i4')

    def write_uint32(self, value):
        self.write_array([value], 'u4')

    def write_float32(self, value):
        self.write_array([value], 'f4')

    def write_string(self, s, encoding='utf-8'):
        """Write `s` without terminator or length prefix"""
        self.write_bytes(s if isinstance(s, bytes) else s.encode(encoding))

    def write_line(self, s, encoding='utf-8'):
        """Write `s` followed by a newline byte"""
        self.write_string(s, encoding)
        self.write_bytes(b'\n')

    def write_zeros(self, n):
        self.write_bytes(b'\x00' * n)


def read_file_bytes(filename):
    """Read the whole of `filename` into memory

    If the file content starts with the gzip magic number, it is decompressed,
    whatever the file extension.

    Parameters
    ----------
    filename : str or os.PathLike
        file to read

    Returns
    -------
    data : bytes
        the (decompressed) file content
    """
    use_gzip = is_gzip_bytes(peek_file(filename, 2))
    with Opener(filename, 'rb', use_gzip=use_gzip) as fobj:
        return fobj.read()


def peek_file(filename, nbytes, decompress=False):
    """Return the first `nbytes` of `filename` without reading the rest

    Used to sniff the gzip magic number before a full read.

    Parameters
    ----------
    filename : str or os.PathLike
        file to look into
    nbytes : int
        maximum number of bytes to return; fewer are returned for short files
    decompress : bool, optional
        If True, and the file is gzip-compressed, return the first bytes of
        the decompressed stream instead.
    """
    with Opener(filename, 'rb', use_gzip=False) as fobj:
        head = fobj.read(max(nbytes, 2))
    if decompress and is_gzip_bytes(head):
        with Opener(filename, 'rb', use_gzip=True) as fobj:
            head = fobj.read(nbytes)
    return head[:nbytes]


def write_file_bytes(filename, data, compress=False):
    """Write `data` to `filename`, gzip-compressed if `compress` is True"""
    with Opener(filename, 'wb', use_gzip=compress) as fobj:
        fobj.write(bytes(data))
