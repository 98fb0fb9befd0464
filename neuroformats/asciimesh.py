# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Text mesh formats: ASCII PLY and Wavefront OBJ

Only the subset of each format needed to exchange triangular meshes is
supported.  PLY files must be ASCII, with the vertex element (x, y, z, and
optionally further per-vertex properties such as colors) before the face
element.  Of OBJ files, only ``v`` and ``f`` lines are read.

OBJ face indices are 1-based by convention.  By default both :func:`read_obj`
and :func:`write_obj` use 0-based indices, like all other formats here; pass
``one_based=True`` for files to be exchanged with other software.
"""

import io

import numpy as np

from .bytecursor import read_file_bytes, write_file_bytes
from .errors import FormatError
from .imageglobals import logger
from .info import __version__
from .mesh import Mesh


def _read_lines(filepath):
    return read_file_bytes(filepath).decode('utf-8').splitlines()


def _loadtxt(lines, filepath, what, **kwargs):
    if not lines:
        return np.zeros((0, 3))
    try:
        return np.loadtxt(lines, ndmin=2, **kwargs)
    except ValueError as err:
        raise FormatError(f'Could not parse {what}: {err}', field=what, filename=filepath) from err


def _element_count(line, filepath):
    try:
        return int(line.split()[2])
    except (IndexError, ValueError):
        raise FormatError.for_field(
            'PLY element line', 'element <name> <count>', line, filepath
        ) from None


def read_ply(filepath):
    """Read triangular mesh from ASCII PLY file

    Per-vertex properties after x, y, z (such as colors) are skipped.

    Parameters
    ----------
    filepath : str or os.PathLike
        PLY file

    Returns
    -------
    mesh : Mesh
    """
    lines = _read_lines(filepath)
    filepath = str(filepath)
    if not lines or lines[0].strip() != 'ply':
        raise FormatError.for_field('PLY signature', 'ply', lines[0] if lines else '', filepath)
    try:
        end_header = next(i for i, line in enumerate(lines) if line.strip() == 'end_header')
    except StopIteration:
        raise FormatError(
            'PLY header has no end_header line', field='end_header', filename=filepath
        ) from None
    header = lines[1:end_header]
    if not any(line.startswith('format ascii') for line in header):
        raise FormatError('Only ASCII PLY files are supported', field='format', filename=filepath)
    counts = {}
    for line in header:
        for element in ('vertex', 'face'):
            if line.startswith(f'element {element}'):
                counts[element] = _element_count(line, filepath)
    for element in ('vertex', 'face'):
        if element not in counts:
            raise FormatError(
                f'PLY header has no "element {element}" line', field=element, filename=filepath
            )
    nvert, nface = counts['vertex'], counts['face']
    body = lines[end_header + 1 :]
    if len(body) < nvert + nface:
        raise FormatError.for_field('PLY body line count', nvert + nface, len(body), filepath)
    vertices = _loadtxt(body[:nvert], filepath, 'PLY vertices', usecols=(0, 1, 2))
    faces = _loadtxt(body[nvert : nvert + nface], filepath, 'PLY faces', dtype=np.int64)
    if nface:
        if faces.shape[1] != 4 or np.any(faces[:, 0] != 3):
            raise FormatError('PLY faces must all be triangles', field='faces', filename=filepath)
        faces = faces[:, 1:]
    logger.debug('Read PLY mesh %s: %d vertices, %d faces', filepath, nvert, nface)
    return Mesh(vertices, faces)


def ply_string(mesh, vertex_colors=None):
    """Mesh (and optional uint8 RGB `vertex_colors`) as ASCII PLY text"""
    if vertex_colors is not None:
        vertex_colors = np.asarray(vertex_colors)
        if vertex_colors.shape[0] != mesh.num_vertices:
            raise ValueError(
                f'Got {vertex_colors.shape[0]} vertex colors for {mesh.num_vertices} vertices'
            )
        vertex_colors = vertex_colors[:, :3]
    header = [
        'ply',
        'format ascii 1.0',
        f'comment Generated by neuroformats {__version__}',
        f'element vertex {mesh.num_vertices}',
        'property float x',
        'property float y',
        'property float z',
    ]
    if vertex_colors is not None:
        header += ['property uchar red', 'property uchar green', 'property uchar blue']
    header += [
        f'element face {mesh.num_faces}',
        'property list uchar int vertex_indices',
        'end_header',
    ]
    out = io.StringIO()
    out.write('\n'.join(header) + '\n')
    # float32 values need 9 significant digits to round-trip
    if vertex_colors is None:
        np.savetxt(out, mesh.vertices, fmt='%.9g')
    else:
        rows = np.column_stack((mesh.vertices, vertex_colors))
        np.savetxt(out, rows, fmt=['%.9g'] * 3 + ['%d'] * 3)
    faces = np.column_stack((np.full(mesh.num_faces, 3), mesh.faces))
    np.savetxt(out, faces, fmt='%d')
    return out.getvalue()


def write_ply(filepath, mesh, vertex_colors=None):
    """Write `mesh` as ASCII PLY file

    Parameters
    ----------
    filepath : str or os.PathLike
        output file
    mesh : Mesh
    vertex_colors : None or array-like, shape (N, 3) or (N, 4), optional
        RGB colors in [0, 255], one row per vertex.  A fourth column is
        dropped.

    Raises
    ------
    ValueError
        if the number of colors differs from the number of vertices
    """
    write_file_bytes(filepath, ply_string(mesh, vertex_colors).encode('ascii'))


def read_obj(filepath, one_based=False):
    """Read triangular mesh from ``v`` and ``f`` lines of OBJ file

    Texture and normal indices (``f 1/1/1 2/2/2 3/3/3``) are dropped.

    Parameters
    ----------
    filepath : str or os.PathLike
        OBJ file
    one_based : bool, optional
        If True, subtract 1 from the face indices in the file.

    Returns
    -------
    mesh : Mesh
    """
    vert_lines, face_lines = [], []
    for line in _read_lines(filepath):
        fields = line.split()
        if not fields:
            continue
        if fields[0] == 'v':
            vert_lines.append(' '.join(fields[1:4]))
        elif fields[0] == 'f':
            if len(fields) != 4:
                raise FormatError.for_field(
                    'OBJ face vertex count', 3, len(fields) - 1, str(filepath)
                )
            face_lines.append(' '.join(f.split('/')[0] for f in fields[1:]))
    vertices = _loadtxt(vert_lines, str(filepath), 'OBJ vertices')
    faces = _loadtxt(face_lines, str(filepath), 'OBJ faces', dtype=np.int64)
    if one_based:
        faces = faces - 1
    return Mesh(vertices, faces)


def obj_string(mesh, one_based=False):
    """Mesh as OBJ text; see :func:`write_obj`"""
    out = io.StringIO()
    out.write('o mesh\n')
    np.savetxt(out, mesh.vertices, fmt='v %.9g %.9g %.9g')
    np.savetxt(out, mesh.faces + (1 if one_based else 0), fmt='f %d %d %d')
    return out.getvalue()


def write_obj(filepath, mesh, one_based=False):
    """Write `mesh` as OBJ file

    Parameters
    ----------
    filepath : str or os.PathLike
        output file
    mesh : Mesh
    one_based : bool, optional
        If True, add 1 to the face indices, as most OBJ readers expect.
        Default writes the 0-based indices unchanged.
    """
    write_file_bytes(filepath, obj_string(mesh, one_based).encode('ascii'))
