# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Cortical parcellation: a region label for every vertex"""

import numpy as np

from ..errors import ValidationError


class Annotation:
    """Vertex to region mapping with its color table

    Parameters
    ----------
    vertices : array-like of int
        vertex indices, usually ``0 .. N - 1``
    labels : array-like of int
        packed region label of each vertex; see
        :mod:`neuroformats.freesurfer.colortable`
    colortable : ColorTable or None, optional
        regions of the parcellation.  Most software cannot read annotation
        files without one.
    """

    def __init__(self, vertices=(), labels=(), colortable=None):
        self.vertices = np.asarray(vertices, dtype=np.int32).ravel()
        self.labels = np.asarray(labels, dtype=np.int32).ravel()
        self.colortable = colortable

    def __repr__(self):
        return (
            f'<{self.__class__.__name__} with {self.num_vertices} vertices, '
            f'{self.num_regions} regions>'
        )

    @property
    def num_vertices(self):
        return len(self.vertices)

    @property
    def num_regions(self):
        """Number of distinct labels assigned to vertices"""
        return len(np.unique(self.labels))

    def add_vertex(self, vertex, label):
        self.vertices = np.append(self.vertices, np.int32(vertex))
        self.labels = np.append(self.labels, np.int32(label))

    def validate(self):
        """Check annotation consistency

        Raises
        ------
        ValidationError
            if the vertex and label arrays differ in length, the color table
            is inconsistent, or the number of distinct labels differs from the
            number of color table regions
        """
        if len(self.vertices) != len(self.labels):
            raise ValidationError(
                f'Annotation has {len(self.vertices)} vertex indices '
                f'but {len(self.labels)} labels'
            )
        if self.colortable is None:
            return
        self.colortable.validate()
        if self.num_regions != self.colortable.num_regions:
            raise ValidationError(
                f'Annotation uses {self.num_regions} distinct labels, but the '
                f'color table has {self.colortable.num_regions} regions'
            )

    def vertex_colors_rgb(self, fill=(0, 0, 0)):
        """Color of each vertex from its region in the color table

        Parameters
        ----------
        fill : sequence of 3 int, optional
            color for vertices whose label is not in the color table (or for
            all vertices, if there is no color table)

        Returns
        -------
        colors : ndarray of uint8, shape (num_vertices, 3)
        """
        colors = np.empty((self.num_vertices, 3), dtype=np.uint8)
        colors[:] = fill
        ctab = self.colortable
        if ctab is None:
            return colors
        # Later duplicates must not override the first matching region
        for label, rgb in reversed(list(zip(ctab.label, zip(ctab.red, ctab.green, ctab.blue)))):
            colors[self.labels == label] = rgb
        return colors

    def region_names(self):
        """Region name of each vertex, None where the label is unknown"""
        if self.colortable is None:
            return [None] * self.num_vertices
        names = dict(zip(reversed(self.colortable.label), reversed(self.colortable.name)))
        return [names.get(int(label)) for label in self.labels]

    def to_csv(self, with_header=True):
        """Vertex indices and labels as comma separated text

        The color table is not included; see
        :meth:`~neuroformats.freesurfer.colortable.ColorTable.to_csv`.
        """
        lines = ['vertex_index,vertex_label'] if with_header else []
        lines.extend(f'{v},{lab}' for v, lab in zip(self.vertices, self.labels))
        return ''.join(line + '\n' for line in lines)
