# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Triangular mesh container

A :class:`Mesh` holds an ``(N, 3)`` float32 array of vertex coordinates and an
``(M, 3)`` int32 array of 0-based vertex indices, one row per triangle.  The
codecs do not check that face indices point at existing vertices; call
:meth:`Mesh.validate` (or pass ``validate=True`` to a writer) for that.
"""

import numpy as np

from .errors import ValidationError

_CUBE_VERTICES = (
    (0, 0, 0),
    (1, 0, 0),
    (1, 1, 0),
    (0, 1, 0),
    (0, 0, 1),
    (1, 0, 1),
    (1, 1, 1),
    (0, 1, 1),
)
_CUBE_FACES = (
    (0, 1, 2),
    (0, 2, 3),
    (0, 1, 4),
    (1, 4, 5),
    (1, 2, 5),
    (2, 5, 6),
    (2, 3, 6),
    (3, 6, 7),
    (3, 0, 7),
    (0, 4, 7),
    (4, 5, 6),
    (4, 6, 7),
)


def _as_rows(values, dtype):
    arr = np.asarray(values if values is not None else [], dtype=dtype)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=dtype)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f'Expecting array of shape (n, 3), got {arr.shape}')
    return arr


class Mesh:
    """Triangular surface mesh

    Parameters
    ----------
    vertices : array-like, shape (N, 3), optional
        vertex coordinates.  Stored as float32.
    faces : array-like, shape (M, 3), optional
        0-based vertex indices of each triangle.  Stored as int32.
    created_line : str or None, optional
        first metadata line of a FreeSurfer surface file.  If None, writers
        generate a ``created by <user> on <date>`` stamp.
    comment_line : str, optional
        second metadata line of a FreeSurfer surface file.
    """

    def __init__(self, vertices=None, faces=None, created_line=None, comment_line=''):
        self.vertices = _as_rows(vertices, np.float32)
        self.faces = _as_rows(faces, np.int32)
        self.created_line = created_line
        self.comment_line = comment_line

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.num_vertices} vertices, {self.num_faces} faces>'

    @property
    def num_vertices(self):
        return self.vertices.shape[0]

    @property
    def num_faces(self):
        return self.faces.shape[0]

    def add_vertex(self, vertex):
        """Append one ``(x, y, z)`` vertex"""
        row = np.asarray(vertex, dtype=np.float32).reshape(1, 3)
        self.vertices = np.vstack((self.vertices, row))

    def add_face(self, face):
        """Append one triangle given as three vertex indices"""
        row = np.asarray(face, dtype=np.int32).reshape(1, 3)
        self.faces = np.vstack((self.faces, row))

    def validate(self):
        """Check array shapes and that all face indices refer to vertices

        Raises
        ------
        ValidationError
            if the vertex or face array has the wrong shape, or any face index
            is negative or not smaller than the vertex count
        """
        for name, arr in (('vertices', self.vertices), ('faces', self.faces)):
            if arr.ndim != 2 or arr.shape[1] != 3:
                raise ValidationError(f'Mesh {name} must have shape (n, 3), not {arr.shape}')
        if self.num_faces == 0:
            return
        fmin, fmax = int(self.faces.min()), int(self.faces.max())
        if fmin < 0 or fmax >= self.num_vertices:
            raise ValidationError(
                f'Face indices must be in range [0, {self.num_vertices}), '
                f'found values in [{fmin}, {fmax}]'
            )

    @classmethod
    def generate_cube(klass):
        """Unit cube with one corner at the origin, made of 12 triangles"""
        return klass(_CUBE_VERTICES, _CUBE_FACES)
