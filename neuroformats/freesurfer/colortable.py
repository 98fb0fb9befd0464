# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Color lookup table of a FreeSurfer annotation

Each region of a parcellation has a structure id, a name, a color and a packed
integer label.  The label is what an annotation file stores per vertex, so a
vertex is assigned to the region whose label matches.

There are two ways of packing colors into a label:

* :func:`pack_rgb` - ``red + green * 2**8 + blue * 2**16``.  This is what
  FreeSurfer writes, and what :func:`neuroformats.freesurfer.io.read_annot`
  uses.
* :func:`pack_rgba` - as :func:`pack_rgb`, plus ``alpha * 2**24``.  Used by
  :func:`neuroformats.freesurfer.io.read_colortable`.

The two give different labels for any region with a non-zero fourth channel,
so they are kept as separate functions.

Color tables store *transparency* (0 is opaque, 255 fully transparent).  Most
graphics software expects *alpha*, which is ``255 - transparency``; methods
returning four channels take an ``as_transparency`` flag to select between
the two.
"""

import numpy as np

from ..errors import ValidationError


def pack_rgb(red, green, blue):
    """Packed 3-channel label for color(s) `red`, `green`, `blue`

    Works on scalars and arrays.

    Examples
    --------
    >>> pack_rgb(220, 20, 10)
    660700
    """
    red, green, blue = (np.asarray(c, dtype=np.int64) for c in (red, green, blue))
    packed = red + green * 256 + blue * 65536
    return packed.item() if packed.ndim == 0 else packed


def pack_rgba(red, green, blue, alpha):
    """Packed 4-channel label; as :func:`pack_rgb` plus ``alpha * 2**24``

    Examples
    --------
    >>> pack_rgba(220, 20, 10, 0)
    660700
    >>> pack_rgba(220, 20, 10, 1)
    17437916
    """
    packed = np.asarray(pack_rgb(red, green, blue), dtype=np.int64)
    packed = packed + np.asarray(alpha, dtype=np.int64) * 16777216
    return packed.item() if packed.ndim == 0 else packed


def unpack_rgb(label):
    """Red, green, blue channels from 3-channel packed `label`

    Inverse of :func:`pack_rgb` for channels in [0, 255].

    Examples
    --------
    >>> unpack_rgb(660700)
    (220, 20, 10)
    """
    label = int(label)
    return (label % 256, (label // 256) % 256, (label // 65536) % 256)


class ColorTable:
    """Ordered list of named, colored regions

    Parameters
    ----------
    structure_id, name, red, green, blue, transparency : sequence, optional
        per-region attributes; all must have the same length
    label : sequence, optional
        packed label of each region.  Default is to compute it from the
        channels with :func:`pack_rgb`.
    """

    compute_label_from_rgb = staticmethod(pack_rgb)
    compute_label_from_rgba = staticmethod(pack_rgba)
    compute_rgb_from_label = staticmethod(unpack_rgb)

    def __init__(
        self,
        structure_id=(),
        name=(),
        red=(),
        green=(),
        blue=(),
        transparency=(),
        label=None,
    ):
        self.structure_id = [int(v) for v in structure_id]
        self.name = [str(v) for v in name]
        self.red = [int(v) for v in red]
        self.green = [int(v) for v in green]
        self.blue = [int(v) for v in blue]
        self.transparency = [int(v) for v in transparency]
        if label is None:
            label = [pack_rgb(*rgb) for rgb in zip(self.red, self.green, self.blue)]
        self.label = [int(v) for v in label]

    def __repr__(self):
        return f'<{self.__class__.__name__} with {self.num_regions} regions>'

    def __len__(self):
        return self.num_regions

    @property
    def num_regions(self):
        return len(self.structure_id)

    def append(self, structure_id, name, red, green, blue, transparency=0, label=None):
        """Add region at the end of the table

        If `label` is None, it is computed with :func:`pack_rgb`.
        """
        self.structure_id.append(int(structure_id))
        self.name.append(str(name))
        self.red.append(int(red))
        self.green.append(int(green))
        self.blue.append(int(blue))
        self.transparency.append(int(transparency))
        self.label.append(int(pack_rgb(red, green, blue) if label is None else label))

    def validate(self):
        """Raise ValidationError unless all attribute lists have equal length
        and all channel values are in [0, 255]"""
        lengths = {
            'structure_id': len(self.structure_id),
            'name': len(self.name),
            'red': len(self.red),
            'green': len(self.green),
            'blue': len(self.blue),
            'transparency': len(self.transparency),
            'label': len(self.label),
        }
        if len(set(lengths.values())) != 1:
            raise ValidationError(f'Color table attributes differ in length: {lengths}')
        for channel in ('red', 'green', 'blue', 'transparency'):
            values = getattr(self, channel)
            if any(not 0 <= v <= 255 for v in values):
                raise ValidationError(f'Color table {channel} values must be in [0, 255]')

    def colors_rgb(self):
        """Flat array of red, green, blue values of all regions

        Returns
        -------
        colors : ndarray, shape (3 * num_regions,)
            ``colors.reshape(-1, 3)`` gives one row per region.
        """
        return np.column_stack((self.red, self.green, self.blue)).astype(int).ravel()

    def colors_rgba(self, as_transparency=False):
        """Flat array of red, green, blue, alpha values of all regions

        Parameters
        ----------
        as_transparency : bool, optional
            If True, the fourth channel is the stored transparency; otherwise
            (default) it is alpha, ``255 - transparency``.

        Returns
        -------
        colors : ndarray, shape (4 * num_regions,)
        """
        fourth = np.asarray(self.transparency, dtype=int)
        if not as_transparency:
            fourth = 255 - fourth
        return np.column_stack((self.red, self.green, self.blue, fourth)).astype(int).ravel()

    def _index_of(self, label):
        try:
            return self.label.index(int(label))
        except ValueError:
            return None

    def get_rgb_for_label(self, label):
        """``(red, green, blue)`` of first region with `label`, None if absent"""
        idx = self._index_of(label)
        if idx is None:
            return None
        return (self.red[idx], self.green[idx], self.blue[idx])

    def get_rgba_for_label(self, label, as_transparency=False):
        """As :meth:`get_rgb_for_label` with a fourth channel

        See :meth:`colors_rgba` for `as_transparency`.
        """
        idx = self._index_of(label)
        if idx is None:
            return None
        fourth = self.transparency[idx]
        if not as_transparency:
            fourth = 255 - fourth
        return (self.red[idx], self.green[idx], self.blue[idx], fourth)

    def get_name_for_label(self, label):
        idx = self._index_of(label)
        return None if idx is None else self.name[idx]

    def to_csv(self, with_header=True):
        """Color table as comma separated text, one line per region"""
        lines = ['structure_id,name,red,green,blue,transparency,label'] if with_header else []
        for row in zip(
            self.structure_id,
            self.name,
            self.red,
            self.green,
            self.blue,
            self.transparency,
            self.label,
        ):
            lines.append(','.join(str(v) for v in row))
        return ''.join(line + '\n' for line in lines)
