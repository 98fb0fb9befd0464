#!python
# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""
Summarize one hemisphere of a FreeSurfer subject, optionally exporting
vertex-colored PLY meshes
"""

import argparse
import os
import sys

import numpy as np

from neuroformats.loadsave import load_annot, load_mesh, load_morph, save_mesh


def _get_parser():
    """Return command-line argument parser."""
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument('subjects_dir', help='FreeSurfer SUBJECTS_DIR holding the subject directory.')
    p.add_argument('subject', help="Subject identifier, e.g. 'bert'.")
    p.add_argument(
        '--hemi',
        default='lh',
        choices=('lh', 'rh'),
        help='Hemisphere to summarize',
    )
    p.add_argument(
        '--measure',
        default='sulc',
        help='Per-vertex morphometry file to read from surf/, e.g. thickness',
    )
    p.add_argument(
        '--outdir',
        default=None,
        help='If given, write PLY meshes colored by annotation and measure to this directory',
    )
    return p


def grayscale(values):
    """Map `values` to uint8 RGB gray levels, scaling the range to [0, 255]"""
    values = np.asarray(values, dtype=float)
    vmin, vmax = values.min(), values.max()
    scaled = np.zeros_like(values) if vmax == vmin else (values - vmin) / (vmax - vmin)
    gray = np.round(scaled * 255).astype(np.uint8)
    return np.column_stack((gray, gray, gray))


def main(args=None):
    """Main program function."""
    parser = _get_parser()
    opts = parser.parse_args(args)

    if not os.path.isdir(opts.subjects_dir):
        print(f'ERROR: subjects_dir {opts.subjects_dir!r} does not exist.', file=sys.stderr)
        return 1
    subject_dir = os.path.join(opts.subjects_dir, opts.subject)
    if not os.path.isdir(subject_dir):
        print(f'ERROR: subject directory {subject_dir!r} does not exist.', file=sys.stderr)
        return 1

    hemi = opts.hemi
    mesh = load_mesh(os.path.join(subject_dir, 'surf', f'{hemi}.white'))
    print(f'Read {mesh.num_vertices} vertices and {mesh.num_faces} faces from the surface file.')
    annot = load_annot(os.path.join(subject_dir, 'label', f'{hemi}.aparc.annot'))
    print(f'Read {annot.num_regions} regions from the annotation file.')
    morph_path = os.path.join(subject_dir, 'surf', f'{hemi}.{opts.measure}')
    morph = None
    if os.path.isfile(morph_path):
        morph = load_morph(morph_path)
        print(
            f'Read {morph.num_vertices} per-vertex values from the {opts.measure} file '
            f'(range {morph.data.min():.3f} to {morph.data.max():.3f}).'
        )

    if opts.outdir is not None:
        os.makedirs(opts.outdir, exist_ok=True)
        annot_ply = os.path.join(opts.outdir, f'{hemi}.white.aparc.ply')
        save_mesh(mesh, annot_ply, vertex_colors=annot.vertex_colors_rgb())
        print(f'Wrote mesh colored by annotation to {annot_ply}')
        if morph is not None:
            morph_ply = os.path.join(opts.outdir, f'{hemi}.white.{opts.measure}.ply')
            save_mesh(mesh, morph_ply, vertex_colors=grayscale(morph.data))
            print(f'Wrote mesh colored by {opts.measure} to {morph_ply}')
    return 0
