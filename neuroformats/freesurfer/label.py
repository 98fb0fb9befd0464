# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Sparse set of labeled vertices or voxels"""

import numpy as np

from ..errors import ValidationError

_FIELDS = ('index', 'x', 'y', 'z', 'value')


class LabelSet:
    """Vertices (or voxels) belonging to a labeled structure

    Parameters
    ----------
    index : array-like of int
        vertex or voxel indices of the label members
    x, y, z : array-like, optional
        original coordinates of each member.  Default zeros.
    value : array-like, optional
        scalar value of each member.  Default zeros.

    Notes
    -----
    The five attributes are parallel arrays; nothing stops callers from
    giving them different lengths, so call :meth:`validate` before relying on
    that.
    """

    def __init__(self, index=(), x=None, y=None, z=None, value=None):
        self.index = np.asarray(index, dtype=np.int64).ravel()
        n = len(self.index)
        self.x, self.y, self.z, self.value = (
            np.zeros(n) if arr is None else np.asarray(arr, dtype=np.float64).ravel()
            for arr in (x, y, z, value)
        )

    @classmethod
    def from_indices(klass, index):
        """Label with `index` members, zero coordinates and values"""
        return klass(index)

    def __repr__(self):
        return f'<{self.__class__.__name__} with {self.size()} entries>'

    def __len__(self):
        return self.size()

    def size(self):
        """Number of label members"""
        return len(self.index)

    def validate(self):
        """Raise ValidationError if the parallel arrays differ in length"""
        lengths = {field: len(getattr(self, field)) for field in _FIELDS}
        if len(set(lengths.values())) != 1:
            raise ValidationError(f'Label fields differ in length: {lengths}')

    def membership(self, n):
        """Dense mask of label members

        Parameters
        ----------
        n : int
            total number of vertices (or voxels) of the mesh (or volume)

        Returns
        -------
        mask : ndarray of bool, shape (n,)
            True at each position listed in ``self.index``.

        Raises
        ------
        ValidationError
            if `n` is smaller than the label size, or an index is outside
            ``[0, n)``
        """
        if n < self.size():
            raise ValidationError(
                f'Total element count {n} must be at least the label size {self.size()}'
            )
        if self.size() and (self.index.min() < 0 or self.index.max() >= n):
            raise ValidationError(f'Label indices must be in range [0, {n})')
        mask = np.zeros(n, dtype=bool)
        mask[self.index] = True
        return mask

    def to_csv(self, with_header=True):
        """Label as comma separated text, one ``index,x,y,z,value`` line per member"""
        lines = [','.join(_FIELDS)] if with_header else []
        for i, x, y, z, v in zip(self.index, self.x, self.y, self.z, self.value):
            lines.append(f'{int(i)},{float(x)!r},{float(y)!r},{float(z)!r},{float(v)!r}')
        return ''.join(line + '\n' for line in lines)
