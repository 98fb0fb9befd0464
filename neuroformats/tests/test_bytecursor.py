"""Test byte cursor reads and writes, and whole-file helpers"""

import gzip

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from ..bytecursor import ByteCursor, peek_file, read_file_bytes, write_file_bytes
from ..errors import FormatError, TruncatedDataError
from ..openers import Opener
from ..tmpdirs import InTemporaryDirectory


def test_scalars():
    for endianness, expected in (('>', b'\x00\x00\x01\x02'), ('<', b'\x02\x01\x00\x00')):
        cur = ByteCursor(endianness=endianness)
        cur.write_int32(258)
        assert cur.getvalue() == expected
        cur.write_int16(-2)
        cur.write_uint16(65535)
        cur.write_uint8(7)
        cur.write_uint32(2**32 - 1)
        cur.write_float32(-0.25)
        cur.seek(0)
        assert cur.read_int32() == 258
        assert cur.read_int16() == -2
        assert cur.read_uint16() == 65535
        assert cur.read_uint8() == 7
        assert cur.read_uint32() == 2**32 - 1
        assert cur.read_float32() == -0.25
        assert cur.remaining == 0
        assert cur.position == len(cur) == 4 + 2 + 2 + 1 + 4 + 4


def test_endianness_aliases():
    assert ByteCursor(endianness='big').endianness == '>'
    assert ByteCursor(endianness='little').endianness == '<'
    with pytest.raises(KeyError):
        ByteCursor(endianness='middle')


def test_arrays():
    cur = ByteCursor(endianness='>')
    cur.write_array([1.5, 2.5, -3], 'f4')
    assert cur.getvalue() == np.array([1.5, 2.5, -3], dtype='>f4').tobytes()
    cur.seek(0)
    arr = cur.read_array('f4', 3)
    assert_array_equal(arr, [1.5, 2.5, -3])
    assert arr.dtype.isnative
    # returned arrays can be modified
    arr[0] = 0
    assert cur.read_array('i4', 0).shape == (0,)


def test_truncation():
    cur = ByteCursor(b'\x00\x01\x02', filename='short.bin')
    with pytest.raises(TruncatedDataError) as excinfo:
        cur.read_int32()
    err = excinfo.value
    assert (err.needed, err.available, err.position) == (4, 3, 0)
    assert err.filename == 'short.bin'
    # failed read does not move position
    assert cur.position == 0
    assert cur.read_uint8() == 0
    with pytest.raises(TruncatedDataError):
        cur.read_array('u1', 3)
    with pytest.raises(FormatError) as excinfo:
        cur.read_bytes(-1)
    assert (excinfo.value.field, excinfo.value.actual) == ('count', -1)
    assert excinfo.value.filename == 'short.bin'
    with pytest.raises(FormatError):
        cur.read_array('i4', -2)
    assert cur.position == 1
    with pytest.raises(ValueError):
        cur.seek(4)


def test_strings_and_lines():
    cur = ByteCursor()
    cur.write_line('created by me')
    cur.write_line('')
    cur.write_string('abc\x00\x00')
    cur.write_zeros(2)
    cur.seek(0)
    assert cur.read_line() == 'created by me'
    assert cur.read_line() == ''
    assert cur.peek(3) == b'abc'
    assert cur.read_string(5) == 'abc'
    with pytest.raises(TruncatedDataError):
        cur.read_line()
    cur.skip(2)
    assert cur.remaining == 0


def test_undecodable_strings():
    cur = ByteCursor(b'caf\xe9\x00\ncaf\xe9\n', filename='names.bin')
    with pytest.raises(FormatError) as excinfo:
        cur.read_string(5)
    assert excinfo.value.actual == b'caf\xe9'
    assert excinfo.value.filename == 'names.bin'
    cur.seek(0)
    assert cur.read_string(5, encoding='latin-1') == 'caf\xe9'
    cur.skip(1)
    with pytest.raises(FormatError):
        cur.read_line()
    cur.seek(6)
    assert cur.read_line(encoding='latin-1') == 'caf\xe9'


def test_file_helpers():
    data = b'\xff\xff\xfe some bytes'
    with InTemporaryDirectory():
        write_file_bytes('plain', data)
        write_file_bytes('packed', data, compress=True)
        with open('packed', 'rb') as fobj:
            assert gzip.decompress(fobj.read()) == data
        assert read_file_bytes('plain') == data
        assert read_file_bytes('packed') == data
        assert peek_file('plain', 3) == b'\xff\xff\xfe'
        assert peek_file('packed', 2) == b'\x1f\x8b'
        assert peek_file('packed', 3, decompress=True) == b'\xff\xff\xfe'
        assert peek_file('plain', 100) == data
        cur = ByteCursor.from_file('packed')
        assert cur.filename == 'packed'
        assert cur.getvalue() == data
        # gzip magic is sniffed from the content, not the extension
        write_file_bytes('packed.mgh', data, compress=True)
        assert read_file_bytes('packed.mgh') == data
        write_file_bytes('empty', b'')
        assert read_file_bytes('empty') == b''


def test_opener():
    with InTemporaryDirectory():
        with Opener('test.gz', 'wb', use_gzip=True) as fobj:
            fobj.write(b'some data')
        with open('test.gz', 'rb') as fobj:
            packed = fobj.read()
        # deterministic header: no mtime
        assert packed[:2] == b'\x1f\x8b'
        assert packed[4:8] == b'\x00\x00\x00\x00'
        with Opener('test.gz') as fobj:
            assert fobj.read(2) == b'\x1f\x8b'
        with Opener('test.gz', use_gzip=True) as fobj:
            assert fobj.read() == b'some data'
        with Opener('plain', 'wb') as fobj:
            fobj.write(b'some data')
        with Opener('plain') as fobj:
            assert fobj.read() == b'some data'
