# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Filename parsing and file format selection

Every group of related formats is a closed :class:`enum.Enum`.  Readers and
writers take a ``format`` argument that may be a member of that enum, its name
as a string, or ``'auto'``, which picks the format from the file extension.
:func:`resolve_format` does this translation in one place.
"""

from __future__ import annotations

import enum
import os
import typing as ty

from .errors import UnsupportedFormatError

if ty.TYPE_CHECKING:
    FileSpec = ty.Union[str, os.PathLike]

AUTO = 'auto'


def splitext_addext(
    filename: FileSpec,
    addexts: ty.Sequence[str] = ('.gz',),
    match_case: bool = False,
) -> tuple[str, str, str]:
    """Split ``/pth/fname.ext.gz`` into ``/pth/fname, .ext, .gz``

    where ``.gz`` may be any of passed `addext` trailing suffixes.

    Parameters
    ----------
    filename : str or os.PathLike
       filename that may end in any or none of `addexts`
    addexts : sequence of str, optional
       trailing suffixes (usually compression suffixes) to split off first
    match_case : bool, optional
       If True, match case of `addexts` and `filename`, otherwise do
       case-insensitive match.

    Returns
    -------
    froot : str
       Root of filename - e.g. ``/pth/fname`` in example above
    ext : str
       Extension, where extension is not in `addexts` - e.g. ``.ext`` in
       example above
    addext : str
       Any suffixes appearing in `addext` occurring at end of filename

    Examples
    --------
    >>> splitext_addext('fname.ext.gz')
    ('fname', '.ext', '.gz')
    >>> splitext_addext('fname.ext')
    ('fname', '.ext', '')
    >>> splitext_addext('/pth.d/lh')
    ('/pth.d/lh', '', '')
    """
    filename = os.fspath(filename)
    dirname, basename = os.path.split(filename)
    for ext in addexts:
        if basename.endswith(ext) if match_case else basename.lower().endswith(ext.lower()):
            extpos = -len(ext)
            basename, addext = basename[:extpos], basename[extpos:]
            break
    else:
        addext = ''
    # os.path.splitext() behaves unexpectedly when filename starts with '.'
    extpos = basename.rfind('.')
    if extpos < 0 or basename.strip('.') == '':
        root, ext = basename, ''
    else:
        root, ext = basename[:extpos], basename[extpos:]
    return (os.path.join(dirname, root), ext, addext)


class FormatFamily(enum.Enum):
    """Base for the enumerations of related file formats

    Subclasses define members whose values are the lower case format names,
    and two class level hooks (set after the class body, as enums do not
    allow plain class attributes): ``_extensions``, a mapping of lower case
    extensions to members, and ``_default``, the member used when the
    extension is not recognized.
    """

    @classmethod
    def names(klass):
        return tuple(member.value for member in klass)

    @classmethod
    def from_filename(klass, filename):
        """Format implied by extension of `filename`, or the family default"""
        _, ext, addext = splitext_addext(filename)
        extensions = klass._extensions
        for candidate in ((ext + addext).lower(), addext.lower(), ext.lower()):
            if candidate and candidate in extensions:
                return extensions[candidate]
        return klass._default


class MeshFormat(FormatFamily):
    """Triangular mesh formats"""

    SURF = 'surf'
    PLY = 'ply'
    OBJ = 'obj'
    MZ3 = 'mz3'


class ScalarFormat(FormatFamily):
    """Per-vertex scalar (morphometry) formats"""

    CURV = 'curv'
    CSV = 'csv'


class LabelFormat(FormatFamily):
    """Label (sparse vertex / voxel subset) formats"""

    LABEL = 'label'
    CSV = 'csv'


class AnnotFormat(FormatFamily):
    """Annotation (parcellation) formats"""

    ANNOT = 'annot'
    CSV = 'csv'


class VolumeFormat(FormatFamily):
    """Volume formats"""

    MGH = 'mgh'
    MGZ = 'mgz'


MeshFormat._extensions = {
    '.ply': MeshFormat.PLY,
    '.obj': MeshFormat.OBJ,
    '.mz3': MeshFormat.MZ3,
}
# FreeSurfer surfaces usually have no extension, e.g. ``lh.white``
MeshFormat._default = MeshFormat.SURF
ScalarFormat._extensions = {'.csv': ScalarFormat.CSV}
ScalarFormat._default = ScalarFormat.CURV
LabelFormat._extensions = {'.csv': LabelFormat.CSV}
LabelFormat._default = LabelFormat.LABEL
AnnotFormat._extensions = {'.csv': AnnotFormat.CSV}
AnnotFormat._default = AnnotFormat.ANNOT
VolumeFormat._extensions = {
    '.mgz': VolumeFormat.MGZ,
    '.mgh.gz': VolumeFormat.MGZ,
    '.mgh': VolumeFormat.MGH,
}
VolumeFormat._default = VolumeFormat.MGH


def resolve_format(family, filename, fmt=AUTO):
    """Return member of enum `family` for `fmt`

    Parameters
    ----------
    family : subclass of FormatFamily
        e.g. :class:`MeshFormat`
    filename : str or os.PathLike
        file to be read or written; only used when `fmt` is ``'auto'``
    fmt : str or `family` member, optional
        ``'auto'`` (default) selects by file extension; otherwise a member of
        `family` or its (case-insensitive) name.

    Returns
    -------
    member : `family` member

    Raises
    ------
    UnsupportedFormatError
        if `fmt` is neither ``'auto'`` nor a name in `family`

    Examples
    --------
    >>> resolve_format(MeshFormat, 'lh.white')
    <MeshFormat.SURF: 'surf'>
    >>> resolve_format(MeshFormat, 'cube.PLY')
    <MeshFormat.PLY: 'ply'>
    >>> resolve_format(VolumeFormat, 'brain.mgh', 'mgz')
    <VolumeFormat.MGZ: 'mgz'>
    """
    if isinstance(fmt, family):
        return fmt
    if not isinstance(fmt, str):
        raise UnsupportedFormatError(fmt, (AUTO,) + family.names())
    key = fmt.lower()
    if key == AUTO:
        return family.from_filename(filename)
    try:
        return family(key)
    except ValueError:
        raise UnsupportedFormatError(fmt, (AUTO,) + family.names()) from None
