import os

import numpy as np
from numpy.testing import assert_array_equal

from neuroformats.cmdline.subject import grayscale, main
from neuroformats.freesurfer import (
    Annotation,
    ColorTable,
    ScalarField,
    write_annot,
    write_geometry,
    write_morph_data,
)
from neuroformats.loadsave import load_mesh
from neuroformats.mesh import Mesh


def _make_subject(subjects_dir, subject='bert'):
    sdir = os.path.join(subjects_dir, subject)
    os.makedirs(os.path.join(sdir, 'surf'))
    os.makedirs(os.path.join(sdir, 'label'))
    cube = Mesh.generate_cube()
    write_geometry(os.path.join(sdir, 'surf', 'lh.white'), cube)
    write_morph_data(os.path.join(sdir, 'surf', 'lh.sulc'), ScalarField(np.linspace(-1, 1, 8)))
    ctab = ColorTable()
    ctab.append(0, 'unknown', 25, 5, 25)
    ctab.append(1, 'precentral', 60, 20, 220)
    labels = np.array(ctab.label)[np.arange(8) % 2]
    annot = Annotation(np.arange(8), labels, ctab)
    write_annot(os.path.join(sdir, 'label', 'lh.aparc.annot'), annot)
    return sdir


def test_grayscale():
    gray = grayscale([0, 5, 10])
    assert gray.dtype == np.uint8
    assert_array_equal(gray[:, 0], [0, 128, 255])
    assert_array_equal(gray[:, 0], gray[:, 2])
    assert_array_equal(grayscale([3, 3]), np.zeros((2, 3)))


def test_summary(tmpdir, capsys):
    subjects_dir = str(tmpdir)
    _make_subject(subjects_dir)
    assert main([subjects_dir, 'bert']) == 0
    out = capsys.readouterr().out
    assert 'Read 8 vertices and 12 faces' in out
    assert 'Read 2 regions' in out
    assert 'Read 8 per-vertex values from the sulc file' in out
    # measure files are optional
    assert main(f'{subjects_dir} bert --measure thickness'.split()) == 0
    assert 'thickness' not in capsys.readouterr().out


def test_ply_export(tmpdir, capsys):
    subjects_dir = str(tmpdir)
    _make_subject(subjects_dir)
    outdir = os.path.join(subjects_dir, 'out')
    assert main([subjects_dir, 'bert', '--outdir', outdir]) == 0
    capsys.readouterr()
    for fname in ('lh.white.aparc.ply', 'lh.white.sulc.ply'):
        mesh = load_mesh(os.path.join(outdir, fname))
        assert mesh.num_vertices == 8
        assert mesh.num_faces == 12
    with open(os.path.join(outdir, 'lh.white.aparc.ply')) as fobj:
        lines = fobj.read().splitlines()
    body = lines[lines.index('end_header') + 1 :]
    # vertex 1 is in precentral
    assert body[1].split()[3:] == ['60', '20', '220']


def test_missing_dirs(tmpdir, capsys):
    missing = os.path.join(str(tmpdir), 'nothing')
    assert main([missing, 'bert']) == 1
    assert 'does not exist' in capsys.readouterr().err
    assert main([str(tmpdir), 'bert']) == 1
    assert 'subject directory' in capsys.readouterr().err
