# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Utilities to load and save meshes, morphometry, labels, annotations, volumes

Each ``load_*`` / ``save_*`` pair takes a ``format`` argument: a member of
the matching format enum in :mod:`neuroformats.filename_parser`, its name, or
``'auto'`` (the default) to pick the format from the file extension.
"""
from __future__ import annotations

import typing as ty

from . import asciimesh, surfice
from .errors import UnsupportedFormatError
from .filename_parser import (
    AUTO,
    AnnotFormat,
    LabelFormat,
    MeshFormat,
    ScalarFormat,
    VolumeFormat,
    resolve_format,
)
from .freesurfer import io as fsio
from .freesurfer import mghformat

if ty.TYPE_CHECKING:
    from .filename_parser import FileSpec
    from .freesurfer import Annotation, LabelSet, ScalarField, Volume
    from .mesh import Mesh


def _unsupported(fmt, family, direction, valid=None):
    valid = family.names() if valid is None else valid
    return UnsupportedFormatError(fmt.value, valid, kind=f'format for {direction}')


def load_mesh(filename: FileSpec, format=AUTO, **kwargs) -> Mesh:
    """Load triangular mesh from `filename`

    Parameters
    ----------
    filename : str or os.PathLike
        mesh file
    format : {'auto', 'surf', 'ply', 'obj', 'mz3'} or MeshFormat, optional
        file format.  ``'auto'`` (default) picks the format from the file
        extension, and falls back to the FreeSurfer binary surface format
        for unknown or missing extensions (e.g. ``lh.white``).
    **kwargs : keyword arguments
        passed to the format reader, e.g. ``one_based=True`` for OBJ files

    Returns
    -------
    mesh : Mesh
    """
    fmt = resolve_format(MeshFormat, filename, format)
    if fmt is MeshFormat.SURF:
        return fsio.read_geometry(filename, **kwargs)
    elif fmt is MeshFormat.PLY:
        return asciimesh.read_ply(filename, **kwargs)
    elif fmt is MeshFormat.OBJ:
        return asciimesh.read_obj(filename, **kwargs)
    elif fmt is MeshFormat.MZ3:
        return surfice.read_mz3(filename, **kwargs).mesh
    raise _unsupported(fmt, MeshFormat, 'reading')


def save_mesh(
    mesh: Mesh, filename: FileSpec, format=AUTO, validate=False, vertex_colors=None, **kwargs
) -> None:
    """Save `mesh` to `filename`

    Parameters
    ----------
    mesh : Mesh
        mesh to write
    filename : str or os.PathLike
        output file
    format : {'auto', 'surf', 'ply', 'obj', 'mz3'} or MeshFormat, optional
        file format, see :func:`load_mesh`
    validate : bool, optional
        If True, call ``mesh.validate()`` before writing anything.  Face
        indices are not checked otherwise.
    vertex_colors : None or array-like, optional
        per-vertex colors, shape (N, 3) or (N, 4), values in [0, 255].  Only
        written to PLY and MZ3 files; ignored for the other formats.
    **kwargs : keyword arguments
        passed to the format writer
    """
    fmt = resolve_format(MeshFormat, filename, format)
    if validate:
        mesh.validate()
    if fmt is MeshFormat.SURF:
        fsio.write_geometry(filename, mesh, **kwargs)
    elif fmt is MeshFormat.PLY:
        asciimesh.write_ply(filename, mesh, vertex_colors=vertex_colors, **kwargs)
    elif fmt is MeshFormat.OBJ:
        asciimesh.write_obj(filename, mesh, **kwargs)
    elif fmt is MeshFormat.MZ3:
        surfice.write_mz3(filename, surfice.Mz3(mesh, vertex_colors=vertex_colors), **kwargs)
    else:
        raise _unsupported(fmt, MeshFormat, 'writing')


def load_morph(filename: FileSpec, format=AUTO) -> ScalarField:
    """Load per-vertex data from FreeSurfer curv file or CSV file"""
    fmt = resolve_format(ScalarFormat, filename, format)
    if fmt is ScalarFormat.CURV:
        return fsio.read_morph_data(filename)
    elif fmt is ScalarFormat.CSV:
        return fsio.read_morph_csv(filename)
    raise _unsupported(fmt, ScalarFormat, 'reading')


def save_morph(field: ScalarField, filename: FileSpec, format=AUTO, **kwargs) -> None:
    """Save per-vertex data `field`

    `kwargs` (``with_header``, ``with_index``) only apply to CSV output.
    """
    fmt = resolve_format(ScalarFormat, filename, format)
    if fmt is ScalarFormat.CURV:
        fsio.write_morph_data(filename, field)
    elif fmt is ScalarFormat.CSV:
        fsio.write_morph_csv(filename, field, **kwargs)
    else:
        raise _unsupported(fmt, ScalarFormat, 'writing')


def load_label(filename: FileSpec, format=AUTO) -> LabelSet:
    """Load label from FreeSurfer label file or CSV file"""
    fmt = resolve_format(LabelFormat, filename, format)
    if fmt is LabelFormat.LABEL:
        return fsio.read_label(filename)
    elif fmt is LabelFormat.CSV:
        return fsio.read_label_csv(filename)
    raise _unsupported(fmt, LabelFormat, 'reading')


def save_label(label: LabelSet, filename: FileSpec, format=AUTO, **kwargs) -> None:
    """Save `label`; `kwargs` go to the format writer"""
    fmt = resolve_format(LabelFormat, filename, format)
    if fmt is LabelFormat.LABEL:
        fsio.write_label(filename, label, **kwargs)
    elif fmt is LabelFormat.CSV:
        fsio.write_label_csv(filename, label, **kwargs)
    else:
        raise _unsupported(fmt, LabelFormat, 'writing')


def load_annot(filename: FileSpec, format=AUTO) -> Annotation:
    """Load annotation from FreeSurfer annot file

    CSV files only hold vertex labels, without a color table, so they cannot
    be loaded.
    """
    fmt = resolve_format(AnnotFormat, filename, format)
    if fmt is AnnotFormat.ANNOT:
        return fsio.read_annot(filename)
    raise _unsupported(fmt, AnnotFormat, 'reading', valid=(AnnotFormat.ANNOT.value,))


def save_annot(annot: Annotation, filename: FileSpec, format=AUTO, **kwargs) -> None:
    """Save annotation; CSV output holds vertex indices and labels only"""
    fmt = resolve_format(AnnotFormat, filename, format)
    if fmt is AnnotFormat.ANNOT:
        fsio.write_annot(filename, annot)
    elif fmt is AnnotFormat.CSV:
        fsio.write_annot_csv(filename, annot, **kwargs)
    else:
        raise _unsupported(fmt, AnnotFormat, 'writing')


def load_volume(filename: FileSpec, format=AUTO, order='C') -> Volume:
    """Load MGH or MGZ volume

    Compressed and uncompressed files are both detected from the file
    content, so `format` does not change what is read.  See
    :func:`neuroformats.freesurfer.mghformat.load` for `order`.
    """
    fmt = resolve_format(VolumeFormat, filename, format)
    if fmt in (VolumeFormat.MGH, VolumeFormat.MGZ):
        return mghformat.load(filename, order=order)
    raise _unsupported(fmt, VolumeFormat, 'reading')


def save_volume(volume: Volume, filename: FileSpec, format=AUTO, order='C') -> None:
    """Save volume as MGH (uncompressed) or MGZ (gzip-compressed)"""
    fmt = resolve_format(VolumeFormat, filename, format)
    if fmt is VolumeFormat.MGH:
        mghformat.save(volume, filename, compress=False, order=order)
    elif fmt is VolumeFormat.MGZ:
        mghformat.save(volume, filename, compress=True, order=order)
    else:
        raise _unsupported(fmt, VolumeFormat, 'writing')
