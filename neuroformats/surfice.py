# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Read / write Surf Ice MZ3 mesh files

MZ3 is a little-endian binary format holding a mesh, optionally with one RGBA
color and one float32 value per vertex.  A 16 byte header is followed by the
blocks flagged in its attribute field, in this order: faces (3 x int32),
vertices (3 x float32), colors (4 x uint8) and scalars (float32).  Files are
often gzip-compressed without a change of extension.
"""

import numpy as np

from .bytecursor import ByteCursor, write_file_bytes
from .errors import FormatError
from .imageglobals import logger
from .mesh import Mesh

header_dtd = [
    ('magic', 'S2'),  # 0; 0x5a4d (little endian) == "MZ"
    ('attr', 'u2'),  # 2; Attributes bitfield reporting stored data
    ('nface', 'u4'),  # 4; Number of faces
    ('nvert', 'u4'),  # 8; Number of vertices
    ('nskip', 'u4'),  # 12; Number of bytes to skip (for future header extensions)
]
header_dtype = np.dtype(header_dtd).newbyteorder('<')

MZ3_MAGIC = b'MZ'
ATTR_FACES = 1
ATTR_VERTICES = 2
ATTR_RGBA = 4
ATTR_SCALAR = 8
# Anything above (e.g. 16, float64 scalars) is not supported
ATTR_MAX = 15


class Mz3:
    """Mesh with optional per-vertex colors and values

    Parameters
    ----------
    mesh : Mesh, optional
    vertex_colors : None or array-like, shape (N, 3) or (N, 4), optional
        RGB(A) colors in [0, 255].  Missing alpha is set to 255 (opaque).
    per_vertex_data : None or array-like, shape (N,), optional
        one value per vertex
    """

    def __init__(self, mesh=None, vertex_colors=None, per_vertex_data=None):
        self.mesh = Mesh() if mesh is None else mesh
        if vertex_colors is not None:
            vertex_colors = np.asarray(vertex_colors)
            if vertex_colors.ndim != 2 or vertex_colors.shape[1] not in (3, 4):
                raise ValueError(
                    f'Vertex colors must have shape (N, 3) or (N, 4), not {vertex_colors.shape}'
                )
            if vertex_colors.shape[1] == 3:
                alpha = np.full((vertex_colors.shape[0], 1), 255)
                vertex_colors = np.hstack((vertex_colors, alpha))
            vertex_colors = vertex_colors.astype(np.uint8)
        self.vertex_colors = vertex_colors
        if per_vertex_data is not None:
            per_vertex_data = np.asarray(per_vertex_data, dtype=np.float32).ravel()
        self.per_vertex_data = per_vertex_data

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.mesh!r} attr={self.attr}>'

    @property
    def attr(self):
        """Attribute bitfield for the blocks present"""
        attr = 0
        if self.mesh.num_faces:
            attr |= ATTR_FACES
        if self.mesh.num_vertices:
            attr |= ATTR_VERTICES
        if self.vertex_colors is not None:
            attr |= ATTR_RGBA
        if self.per_vertex_data is not None:
            attr |= ATTR_SCALAR
        return attr


def _nvert_block(name, nvert, got):
    if got != nvert:
        raise ValueError(f'Got {got} {name} for {nvert} vertices')


def read_mz3(filepath):
    """Read MZ3 file, plain or gzip-compressed

    Returns
    -------
    mz3 : Mz3

    Raises
    ------
    FormatError
        if the magic number is wrong or the attribute field flags data
        types that are not supported
    """
    cursor = ByteCursor.from_file(filepath, '<')
    hdr = np.frombuffer(cursor.read_bytes(header_dtype.itemsize), dtype=header_dtype)[0]
    if hdr['magic'] != MZ3_MAGIC:
        raise FormatError.for_field(
            'MZ3 magic number', MZ3_MAGIC.hex(' '), bytes(hdr['magic']).hex(' '), cursor.filename
        )
    attr, nface, nvert, nskip = (int(hdr[f]) for f in ('attr', 'nface', 'nvert', 'nskip'))
    if attr > ATTR_MAX:
        raise FormatError.for_field('MZ3 attributes', f'<= {ATTR_MAX}', attr, cursor.filename)
    cursor.skip(nskip)
    faces = vertices = colors = scalars = None
    if attr & ATTR_FACES:
        faces = cursor.read_array('i4', nface * 3).reshape(-1, 3)
    if attr & ATTR_VERTICES:
        vertices = cursor.read_array('f4', nvert * 3).reshape(-1, 3)
    if attr & ATTR_RGBA:
        colors = cursor.read_array('u1', nvert * 4).reshape(-1, 4)
    if attr & ATTR_SCALAR:
        scalars = cursor.read_array('f4', nvert)
    logger.debug(
        'Read MZ3 %s: attr %d, %d vertices, %d faces', cursor.filename, attr, nvert, nface
    )
    return Mz3(Mesh(vertices, faces), colors, scalars)


def write_mz3(filepath, mz3, compress=False):
    """Write `mz3` to `filepath`

    Parameters
    ----------
    filepath : str or os.PathLike
        output file
    mz3 : Mz3
    compress : bool, optional
        If True, gzip-compress the file.  Surf Ice reads both variants.
    """
    mesh = mz3.mesh
    nvert = mesh.num_vertices
    if mz3.vertex_colors is not None:
        _nvert_block('vertex colors', nvert, len(mz3.vertex_colors))
    if mz3.per_vertex_data is not None:
        _nvert_block('per vertex values', nvert, len(mz3.per_vertex_data))
    hdr = np.zeros((), dtype=header_dtype)
    hdr['magic'] = MZ3_MAGIC
    hdr['attr'] = mz3.attr
    hdr['nface'] = mesh.num_faces
    hdr['nvert'] = nvert
    cursor = ByteCursor(hdr.tobytes(), endianness='<')
    cursor.seek(len(cursor))
    if mesh.num_faces:
        cursor.write_array(mesh.faces.reshape(-1), 'i4')
    if nvert:
        cursor.write_array(mesh.vertices.reshape(-1), 'f4')
    if mz3.vertex_colors is not None:
        cursor.write_array(mz3.vertex_colors.reshape(-1), 'u1')
    if mz3.per_vertex_data is not None:
        cursor.write_array(mz3.per_vertex_data, 'f4')
    write_file_bytes(filepath, cursor.getvalue(), compress=compress)
