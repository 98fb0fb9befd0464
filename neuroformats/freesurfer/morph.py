# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Per-vertex morphometry data such as cortical thickness or curvature"""

import numpy as np


class ScalarField:
    """One float value per mesh vertex

    Parameters
    ----------
    data : array-like
        values, one per vertex.  Stored as 1D float32.
    num_faces : int, optional
        face count of the mesh the data belongs to.  Only informational; it
        is written to, and read from, the file header.
    values_per_vertex : int, optional
        must be 1 for data read from or written to curv files.
    """

    def __init__(self, data=(), num_faces=0, values_per_vertex=1):
        self.data = np.asarray(data, dtype=np.float32).ravel()
        self.num_faces = int(num_faces)
        self.values_per_vertex = int(values_per_vertex)

    def __repr__(self):
        return f'<{self.__class__.__name__} with {self.num_vertices} values>'

    def __len__(self):
        return self.num_vertices

    @property
    def num_vertices(self):
        return len(self.data)

    def to_csv(self, with_header=False, with_index=False):
        """Values as text, one per line

        Parameters
        ----------
        with_header : bool, optional
            If True, start with a ``value`` (or ``vertex_index,value``) line.
        with_index : bool, optional
            If True, prefix each value with its vertex index and a comma.
        """
        lines = []
        if with_header:
            lines.append('vertex_index,value' if with_index else 'value')
        values = [repr(float(v)) for v in self.data]
        if with_index:
            values = [f'{i},{v}' for i, v in enumerate(values)]
        lines.extend(values)
        return ''.join(line + '\n' for line in lines)
