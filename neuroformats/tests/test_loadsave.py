"""Testing loadsave module"""

import pathlib

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from ..errors import UnsupportedFormatError
from ..filename_parser import MeshFormat, VolumeFormat
from ..freesurfer import Annotation, ColorTable, LabelSet, ScalarField, Volume
from ..loadsave import (
    load_annot,
    load_label,
    load_mesh,
    load_morph,
    load_volume,
    save_annot,
    save_label,
    save_mesh,
    save_morph,
    save_volume,
)
from ..mesh import Mesh
from ..tmpdirs import InTemporaryDirectory


def _head(fname, n):
    with open(fname, 'rb') as fobj:
        return fobj.read(n)


def test_mesh_dispatch():
    cube = Mesh.generate_cube()
    with InTemporaryDirectory():
        for fname, head in (
            ('lh.white', b'\xff\xff\xfe'),
            ('cube.ply', b'ply'),
            ('cube.obj', b'o m'),
            ('cube.mz3', b'MZ'),
        ):
            save_mesh(cube, fname)
            assert _head(fname, len(head)) == head
            mesh = load_mesh(pathlib.Path(fname))
            assert_array_equal(mesh.vertices, cube.vertices)
            assert_array_equal(mesh.faces, cube.faces)
        # explicit format wins over the extension
        save_mesh(cube, 'cube.dat', format='ply')
        assert _head('cube.dat', 3) == b'ply'
        assert load_mesh('cube.dat', format=MeshFormat.PLY).num_faces == 12
        save_mesh(cube, 'cube1.obj', one_based=True)
        assert_array_equal(load_mesh('cube1.obj', one_based=True).faces, cube.faces)


def test_mesh_options():
    bad = Mesh([[0, 0, 0]], [[0, 1, 2]])
    colors = np.full((8, 3), 7, dtype=np.uint8)
    with InTemporaryDirectory():
        with pytest.raises(ValueError):
            save_mesh(bad, 'bad.ply', validate=True)
        save_mesh(Mesh.generate_cube(), 'colored.ply', vertex_colors=colors)
        with open('colored.ply') as fobj:
            assert 'property uchar red' in fobj.read()
        with pytest.raises(UnsupportedFormatError):
            save_mesh(bad, 'bad.stl', format='stl')


def test_morph_dispatch():
    field = ScalarField([1.0, 2.5, -3.0])
    with InTemporaryDirectory():
        save_morph(field, 'lh.thickness')
        assert _head('lh.thickness', 3) == b'\xff\xff\xff'
        save_morph(field, 'thickness.csv', with_index=True)
        with open('thickness.csv') as fobj:
            assert fobj.readline() == '0,1.0\n'
        for fname in ('lh.thickness', 'thickness.csv'):
            assert_array_equal(load_morph(fname).data, field.data)


def test_label_dispatch():
    label = LabelSet([1, 5], [0.5, 1], [2, 3], [4, 5], [0, 1])
    with InTemporaryDirectory():
        save_label(label, 'lh.test.label', comment='# my label')
        with open('lh.test.label') as fobj:
            assert fobj.readline() == '# my label\n'
        save_label(label, 'test.csv', with_header=False)
        for fname in ('lh.test.label', 'test.csv'):
            label2 = load_label(fname)
            assert_array_equal(label2.index, label.index)
            assert_array_equal(label2.x, label.x)


def test_annot_dispatch():
    ctab = ColorTable([0], ['unknown'], [1], [2], [3], [0])
    annot = Annotation([0, 1], ctab.label * 2, ctab)
    with InTemporaryDirectory():
        save_annot(annot, 'lh.test.annot')
        annot2 = load_annot('lh.test.annot')
        assert_array_equal(annot2.labels, annot.labels)
        assert annot2.colortable.name == ['unknown']
        save_annot(annot, 'aparc.csv')
        with open('aparc.csv') as fobj:
            assert fobj.readline() == 'vertex_index,vertex_label\n'
        with pytest.raises(UnsupportedFormatError) as excinfo:
            load_annot('aparc.csv')
    assert excinfo.value.valid == ('annot',)


def test_volume_dispatch():
    vol = Volume(np.arange(8).reshape((2, 2, 2)), data_type='uchar')
    with InTemporaryDirectory():
        save_volume(vol, 'brain.mgh')
        save_volume(vol, 'brain.mgz')
        save_volume(vol, 'other.mgh', format=VolumeFormat.MGZ)
        assert _head('brain.mgh', 4) == b'\x00\x00\x00\x01'
        assert _head('brain.mgz', 2) == b'\x1f\x8b'
        assert _head('other.mgh', 2) == b'\x1f\x8b'
        for fname in ('brain.mgh', 'brain.mgz', 'other.mgh'):
            assert_array_equal(load_volume(fname).data, vol.data)
        with pytest.raises(UnsupportedFormatError):
            load_volume('brain.nii', format='nii')
