"""Tests for mghformat reading writing"""

import os
import struct

import numpy as np
import pytest
from numpy.testing import assert_almost_equal, assert_array_almost_equal, assert_array_equal

from ..._compression import GZIP_MAGIC
from ...bytecursor import ByteCursor
from ...errors import FormatError, TruncatedDataError, ValidationError
from ...tests.neuroformats_data import needs_subject_data, subject_path
from ...tmpdirs import InTemporaryDirectory
from .. import mghformat as mgh
from ..mghformat import DATA_OFFSET, MGHHeader, Volume, load, save, volume_from_bytes


def _header_bytes(version=1, dims=(2, 2, 2, 1), code=0, dof=0, ras_good=0):
    block = struct.pack('>i4iiih', version, *dims, code, dof, ras_good)
    return block + b'\x00' * (DATA_OFFSET - len(block))


@pytest.mark.parametrize(
    'data_type, dtype',
    [('uchar', np.uint8), ('short', np.int16), ('int', np.int32), ('float', np.float32)],
)
def test_round_trip(data_type, dtype):
    # every on-disk type holds these values exactly
    arr = np.arange(24).reshape((2, 3, 4))
    vol = Volume(arr, data_type=data_type)
    assert vol.shape == (2, 3, 4, 1)
    with InTemporaryDirectory():
        save(vol, 'test.mgh')
        assert os.path.getsize('test.mgh') == DATA_OFFSET + 24 * np.dtype(dtype).itemsize
        vol2 = load('test.mgh')
    assert vol2.header.get_data_dtype() == data_type
    assert vol2.header.get_data_shape() == (2, 3, 4, 1)
    assert_array_equal(vol2.data[..., 0], arr)
    expected_float = np.float64 if data_type == 'int' else np.float32
    assert vol2.data.dtype == expected_float


def test_data_bytes():
    arr = np.arange(8, dtype=np.float32).reshape((2, 2, 2))
    vol = Volume(arr, data_type='short')
    with InTemporaryDirectory():
        save(vol, 'test.mgh')
        with open('test.mgh', 'rb') as fobj:
            contents = fobj.read()
        assert contents[:DATA_OFFSET] == _header_bytes(code=4)
        assert contents[DATA_OFFSET:] == arr.astype('>i2').tobytes()
        # Fortran order puts the first axis fastest
        save(vol, 'test_f.mgh', order='F')
        with open('test_f.mgh', 'rb') as fobj:
            contents = fobj.read()
        assert contents[DATA_OFFSET:] == arr.astype('>i2').tobytes(order='F')
        assert_array_equal(load('test_f.mgh', order='F').data, vol.data)
        assert not np.array_equal(load('test_f.mgh').data, vol.data)


def test_narrowing_truncates():
    arr = np.array([1.7, -1.7, 256.0, 300.5, -129.5, 70000.0])
    with InTemporaryDirectory():
        save(Volume(arr, data_type='uchar'), 'uchar.mgh')
        save(Volume(arr, data_type='short'), 'short.mgh')
        uchar = load('uchar.mgh').data.ravel()
        short = load('short.mgh').data.ravel()
    assert_array_equal(uchar, [1, 255, 0, 44, 127, 112])
    assert_array_equal(short, [1, -1, 256, 300, -129, 4464])


def test_mgz():
    arr = np.arange(60, dtype=np.float32).reshape((3, 4, 5))
    vol = Volume(arr)
    with InTemporaryDirectory():
        save(vol, 'test.mgh')
        save(vol, 'test.mgz')
        with open('test.mgz', 'rb') as fobj:
            assert fobj.read(2) == GZIP_MAGIC
        with open('test.mgh', 'rb') as fobj:
            assert fobj.read(2) != GZIP_MAGIC
        mgh_vol = load('test.mgh')
        mgz_vol = load('test.mgz')
        # compression found from the content, not the name
        os.rename('test.mgz', 'renamed.mgh')
        renamed = load('renamed.mgh')
    for other in (mgz_vol, renamed):
        assert_array_equal(other.data, mgh_vol.data)
        assert other.header.dims == mgh_vol.header.dims


def test_ras_fields():
    delta = (1.5, 2.0, 2.5)
    Mdc = np.array([[0, 1, 0], [1, 0, 0], [0, 0, -1]])
    Pxyz_c = (10.0, -20.0, 30.5)
    hdr = MGHHeader((2, 2, 2, 1), 'float', ras_good=1, delta=delta, Mdc=Mdc, Pxyz_c=Pxyz_c)
    block = hdr.to_bytes()
    assert len(block) == DATA_OFFSET
    with InTemporaryDirectory():
        save(Volume(np.zeros((2, 2, 2)), hdr), 'test.mgh')
        hdr2 = load('test.mgh').header
    assert hdr2.ras_good == 1
    assert_array_equal(hdr2.delta, delta)
    assert_array_equal(hdr2.Mdc, Mdc)
    assert_array_equal(hdr2.Pxyz_c, Pxyz_c)
    assert hdr2.get_zooms() == delta
    # Without the flag, the RAS fields are neither written nor read
    hdr.ras_good = 0
    assert hdr.to_bytes()[30:] == b'\x00' * (DATA_OFFSET - 30)
    hdr3 = MGHHeader.from_cursor(ByteCursor(hdr.to_bytes()))
    assert hdr3.delta is None
    assert hdr3.Mdc is None
    assert hdr3.get_zooms() == (1.0, 1.0, 1.0)


def test_ras_good_defaults():
    hdr = MGHHeader((2, 2, 2, 1), ras_good=1)
    vol = volume_from_bytes(hdr.to_bytes() + b'\x00' * 32)
    assert_array_equal(vol.header.delta, [1, 1, 1])
    assert_array_equal(vol.header.Mdc, [[-1, 0, 0], [0, 0, 1], [0, -1, 0]])
    assert_array_equal(vol.header.Pxyz_c, [0, 0, 0])


def test_get_affine():
    hdr = MGHHeader((4, 6, 8, 1))
    assert_array_equal(
        hdr.get_affine(),
        [[-1, 0, 0, 2], [0, 0, -1, 4], [0, 1, 0, -3], [0, 0, 0, 1]],
    )
    hdr = MGHHeader((256, 256, 256, 1), ras_good=1, delta=(2, 2, 2), Pxyz_c=(1, 2, 3))
    affine = hdr.get_affine()
    assert_array_equal(affine[:3, :3], np.array(mgh._DEFAULT_MDC).T * 2)
    # voxel at the volume center maps to Pxyz_c
    center = affine.dot([128, 128, 128, 1])
    assert_array_almost_equal(center[:3], [1, 2, 3])


def test_get_vox2ras_tkr():
    hdr = MGHHeader((256, 256, 256, 1))
    assert_array_equal(
        hdr.get_vox2ras_tkr(),
        [[-1, 0, 0, 128], [0, 0, 1, -128], [0, -1, 0, 128], [0, 0, 0, 1]],
    )


def test_footer():
    footer = {'tr': 2300.0, 'flip_angle': 0.5, 'te': 2.5, 'ti': 900.0, 'fov': 256.0}
    hdr = MGHHeader((2, 1, 1, 1), footer=footer)
    with InTemporaryDirectory():
        save(Volume(np.ones(2), hdr), 'test.mgz')
        hdr2 = load('test.mgz').header
        save(Volume(np.ones(2)), 'plain.mgz')
        assert load('plain.mgz').header.footer is None
    for name, value in footer.items():
        assert_almost_equal(hdr2.footer[name], value)


def test_bad_header():
    with pytest.raises(FormatError) as excinfo:
        volume_from_bytes(_header_bytes(version=2) + b'\x00' * 8)
    assert excinfo.value.field == 'MGH format version'
    assert excinfo.value.actual == 2
    with pytest.raises(FormatError) as excinfo:
        volume_from_bytes(_header_bytes(code=2) + b'\x00' * 8)
    assert excinfo.value.actual == 2
    with pytest.raises(FormatError):
        volume_from_bytes(_header_bytes(dims=(2, -1, 1, 1)))
    with pytest.raises(TruncatedDataError):
        volume_from_bytes(_header_bytes() + b'\x00' * 7)
    with pytest.raises(TruncatedDataError):
        volume_from_bytes(b'\x00\x00\x00\x01')


def test_header_data_types():
    hdr = MGHHeader()
    assert hdr.get_data_dtype() == 'float'
    assert hdr.get_data_code() == 3
    for code, label, nbytes in ((0, 'uchar', 1), (4, 'short', 2), (1, 'int', 4)):
        hdr.set_data_dtype(label)
        assert hdr.get_data_code() == code
        assert hdr.get_data_bytespervox() == nbytes
        hdr.set_data_dtype(code)
        assert hdr.get_data_dtype() == label
    with pytest.raises(ValueError):
        hdr.set_data_dtype('double')
    hdr = MGHHeader.from_data_shape((3, 4), 'short')
    assert hdr.get_data_shape() == (3, 4, 1, 1)
    assert hdr.get_data_size() == 24
    with pytest.raises(ValueError):
        MGHHeader.from_data_shape((1, 2, 3, 4, 5))


def test_shape_mismatch():
    vol = Volume(np.zeros((2, 2, 2)), MGHHeader((3, 3, 3, 1)))
    with pytest.raises(ValidationError):
        vol.validate()
    with InTemporaryDirectory():
        with pytest.raises(ValidationError):
            save(vol, 'test.mgh')
        assert not os.path.exists('test.mgh')


@needs_subject_data
def test_golden_brain():
    for fname in ('brain.mgh', 'brain.mgz'):
        vol = load(subject_path('mri', fname))
        hdr = vol.header
        assert hdr.get_data_shape() == (256, 256, 256, 1)
        assert hdr.get_data_dtype() == 'uchar'
        assert hdr.ras_good == 1
        assert vol.data[99, 99, 99, 0] == 77
        assert vol.data[109, 109, 109, 0] == 71
        assert vol.data[0, 0, 0, 0] == 0
    with InTemporaryDirectory():
        save(vol, 'brain.mgz')
        vol2 = load('brain.mgz')
    assert_array_equal(vol2.data, vol.data)
    assert_array_equal(vol2.header.Mdc, hdr.Mdc)
