# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Read / write FreeSurfer geometry, morphometry, label, annotation formats

All binary formats here are big-endian.  Readers load the whole file, and
transparently decompress it if it starts with the gzip magic number.
"""

import getpass
import time

import numpy as np

from ..bytecursor import ByteCursor, read_file_bytes, write_file_bytes
from ..errors import FormatError
from ..imageglobals import logger
from ..mesh import Mesh
from .annot import Annotation
from .colortable import ColorTable, pack_rgb, pack_rgba
from .label import LabelSet
from .morph import ScalarField

_ANNOT_DT = '>i4'
"""Data type for Freesurfer `.annot` files.

Used by :func:`read_annot` and :func:`write_annot`.  All data (apart from
strings) in an `.annot` file is stored as big-endian int32.
"""

TRIANGLE_MAGIC = b'\xff\xff\xfe'
NEW_VERSION_MAGIC = b'\xff\xff\xff'
ANNOT_CTAB_VERSION = -2
ANNOT_CTAB_FILENAME = 'NOFILE'


def _check_magic(cursor, expected, what):
    magic = cursor.read_bytes(len(expected))
    if magic != expected:
        raise FormatError.for_field(
            f'{what} magic number', expected.hex(' '), magic.hex(' '), cursor.filename
        )


def _fs_stamp():
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = 'unknown'
    return f'created by {user} on {time.ctime()}'


def _check_line(line, what):
    if '\n' in line:
        raise ValueError(f'{what} line must not contain newlines')
    return line


def read_geometry(filepath):
    """Read a triangular format Freesurfer surface mesh

    Parameters
    ----------
    filepath : str or os.PathLike
        Path to surface file.

    Returns
    -------
    mesh : Mesh
        vertices, faces and the two metadata lines of the file header
    """
    cursor = ByteCursor.from_file(filepath, '>')
    _check_magic(cursor, TRIANGLE_MAGIC, 'surface')
    created_line = cursor.read_line()
    comment_line = cursor.read_line()
    vnum = cursor.read_int32()
    fnum = cursor.read_int32()
    coords = cursor.read_array('f4', vnum * 3).reshape(-1, 3)
    faces = cursor.read_array('i4', fnum * 3).reshape(-1, 3)
    logger.debug('Read surface %s: %d vertices, %d faces', cursor.filename, vnum, fnum)
    return Mesh(coords, faces, created_line=created_line, comment_line=comment_line)


def write_geometry(filepath, mesh, validate=False):
    """Write a triangular format Freesurfer surface mesh

    Parameters
    ----------
    filepath : str or os.PathLike
        Path to surface file.
    mesh : Mesh
        mesh to write.  If ``mesh.created_line`` is None, a line ``created by
        <user> on <date>`` is written in its place.
    validate : bool, optional
        If True, check face indices with ``mesh.validate()`` first.
    """
    if validate:
        mesh.validate()
    created_line = mesh.created_line
    if created_line is None:
        created_line = _fs_stamp()
    cursor = ByteCursor(endianness='>')
    cursor.write_bytes(TRIANGLE_MAGIC)
    cursor.write_line(_check_line(created_line, 'created'))
    cursor.write_line(_check_line(mesh.comment_line or '', 'comment'))
    cursor.write_int32(mesh.num_vertices)
    cursor.write_int32(mesh.num_faces)
    cursor.write_array(mesh.vertices.reshape(-1), 'f4')
    cursor.write_array(mesh.faces.reshape(-1), 'i4')
    write_file_bytes(filepath, cursor.getvalue())


def read_morph_data(filepath):
    """Read a Freesurfer morphometry data file.

    This function reads in what Freesurfer internally calls "curv" file types,
    (e.g. ?h. curv, ?h.thickness), but as that has the potential to cause
    confusion where ?h.curv denotes a particular measurement, we instead call
    the data "morphometry".

    Parameters
    ----------
    filepath : str or os.PathLike
        Path to morphometry file

    Returns
    -------
    field : ScalarField
        one value per vertex

    Raises
    ------
    FormatError
        for the old (pre 2005) curv format, or a values-per-vertex count
        other than 1
    """
    cursor = ByteCursor.from_file(filepath, '>')
    _check_magic(cursor, NEW_VERSION_MAGIC, 'curv')
    vnum = cursor.read_int32()
    fnum = cursor.read_int32()
    vals_per_vertex = cursor.read_int32()
    if vals_per_vertex != 1:
        raise FormatError.for_field('values per vertex', 1, vals_per_vertex, cursor.filename)
    data = cursor.read_array('f4', vnum)
    logger.debug('Read morphometry data %s: %d values', cursor.filename, vnum)
    return ScalarField(data, num_faces=fnum, values_per_vertex=vals_per_vertex)


def write_morph_data(filepath, field):
    """Write Freesurfer morphometry data `field` to `filepath`

    Parameters
    ----------
    filepath : str or os.PathLike
        Path to morphometry file to be written
    field : ScalarField
        The header fields are written as stored; note :func:`read_morph_data`
        only accepts files with a values-per-vertex count of 1.
    """
    vnum = field.num_vertices
    i4info = np.iinfo('i4')
    if vnum > i4info.max:
        raise ValueError('Too many values for morphometry file')
    if not i4info.min <= field.num_faces <= i4info.max:
        raise ValueError(f'Argument fnum must be between {i4info.min} and {i4info.max}')
    cursor = ByteCursor(endianness='>')
    cursor.write_bytes(NEW_VERSION_MAGIC)
    cursor.write_int32(vnum)
    cursor.write_int32(field.num_faces)
    cursor.write_int32(field.values_per_vertex)
    cursor.write_array(field.data, 'f4')
    write_file_bytes(filepath, cursor.getvalue())


def _read_text(filepath):
    return read_file_bytes(filepath).decode('utf-8')


def _write_text(filepath, text):
    write_file_bytes(filepath, text.encode('utf-8'))


def _parse_rows(lines, ncols, filepath, what):
    """Parse whitespace or comma separated `lines` into float array

    `ncols` is the sequence of allowed column counts.
    """
    if not lines:
        return np.zeros((0, ncols[0]))
    try:
        rows = np.loadtxt(lines, delimiter=',' if ',' in lines[0] else None, ndmin=2)
    except ValueError as err:
        raise FormatError(f'Could not parse {what}: {err}', field=what, filename=filepath) from err
    if rows.shape[1] not in ncols:
        raise FormatError.for_field(
            f'{what} column count', ' or '.join(map(str, ncols)), rows.shape[1], filepath
        )
    return rows


def _is_number(token):
    try:
        float(token)
    except ValueError:
        return False
    return True


def _csv_data_lines(text):
    """Non-blank lines of CSV `text`, without a leading header line"""
    lines = [line for line in text.splitlines() if line.strip()]
    if lines and not _is_number(lines[0].split(',')[0]):
        lines = lines[1:]
    return lines


def read_morph_csv(filepath):
    """Read morphometry data from comma separated text

    Each line holds a value, or a vertex index and a value.  A header line is
    skipped if present.

    Returns
    -------
    field : ScalarField
    """
    lines = _csv_data_lines(_read_text(filepath))
    rows = _parse_rows(lines, (1, 2), str(filepath), 'morphometry')
    return ScalarField(rows[:, -1])


def write_morph_csv(filepath, field, with_header=False, with_index=False):
    """Write `field` as comma separated text; see ``ScalarField.to_csv``"""
    _write_text(filepath, field.to_csv(with_header=with_header, with_index=with_index))


def read_label(filepath):
    """Load in a Freesurfer .label file.

    The first line is a comment, the second the number of entries.  Each
    following line holds a vertex (or voxel) index, x, y, z coordinates and a
    value, separated by any amount of whitespace.

    Parameters
    ----------
    filepath : str or os.PathLike
        Path to label file.

    Returns
    -------
    label : LabelSet

    Raises
    ------
    FormatError
        if the entry count line does not match the number of entries
    """
    lines = _read_text(filepath).splitlines()
    filepath = str(filepath)
    if len(lines) < 2:
        raise FormatError.for_field('label header', 'comment and count lines', lines, filepath)
    try:
        declared = int(lines[1].split()[0])
    except (IndexError, ValueError):
        raise FormatError.for_field('label entry count', 'integer', lines[1], filepath) from None
    data_lines = [line for line in lines[2:] if line.strip()]
    if len(data_lines) != declared:
        raise FormatError.for_field('label entry count', declared, len(data_lines), filepath)
    rows = _parse_rows(data_lines, (5,), filepath, 'label')
    logger.debug('Read label %s: %d entries', filepath, declared)
    return LabelSet(rows[:, 0].astype(np.int64), rows[:, 1], rows[:, 2], rows[:, 3], rows[:, 4])


def write_label(filepath, label, comment=None):
    """Write `label` in Freesurfer .label format

    Parameters
    ----------
    filepath : str or os.PathLike
        Path to label file to be written
    label : LabelSet
    comment : str, optional
        text for the first line.  Default is a generated comment.
    """
    if comment is None:
        comment = '#!ascii label , from subject  vox2ras=TkReg'
    lines = [_check_line(comment, 'comment'), str(label.size())]
    for idx, x, y, z, val in zip(label.index, label.x, label.y, label.z, label.value):
        lines.append(f'{int(idx)}  {float(x)!r}  {float(y)!r}  {float(z)!r} {float(val)!r}')
    _write_text(filepath, ''.join(line + '\n' for line in lines))


def read_label_csv(filepath):
    """Read label from ``index,x,y,z,value`` lines, optionally with header"""
    lines = _csv_data_lines(_read_text(filepath))
    rows = _parse_rows(lines, (5,), str(filepath), 'label')
    return LabelSet(rows[:, 0].astype(np.int64), rows[:, 1], rows[:, 2], rows[:, 3], rows[:, 4])


def write_label_csv(filepath, label, with_header=True):
    _write_text(filepath, label.to_csv(with_header=with_header))


def _read_annot_ctab(cursor, pack):
    """Read color table of annotation at `cursor`

    `cursor` is positioned after the color table version marker.  `pack` is
    the function used to compute region labels from the four channels.
    """
    n_entries = cursor.read_int32()
    if n_entries < 0:
        raise FormatError.for_field('color table entry count', '>= 0', n_entries, cursor.filename)
    # Name of the color table file the annotation was made with; not kept
    cursor.skip(cursor.read_int32())
    n_entries_dup = cursor.read_int32()
    if n_entries_dup < 0:
        raise FormatError.for_field(
            'duplicated color table entry count', '>= 0', n_entries_dup, cursor.filename
        )
    if n_entries_dup != n_entries:
        logger.warning(
            'Color table entry counts do not match (%d versus %d); using %d',
            n_entries,
            n_entries_dup,
            n_entries_dup,
        )
    ctab = ColorTable()
    for _ in range(n_entries_dup):
        structure_id = cursor.read_int32()
        name = cursor.read_string(cursor.read_int32())
        red, green, blue, transparency = cursor.read_array('i4', 4).tolist()
        label = pack(red, green, blue, transparency)
        ctab.append(structure_id, name, red, green, blue, transparency, label=label)
    return ctab


def _rgb_label(red, green, blue, transparency):
    return pack_rgb(red, green, blue)


def _decode_annot(cursor, pack):
    vnum = cursor.read_int32()
    pairs = cursor.read_array('i4', vnum * 2).reshape(-1, 2)
    has_ctab = cursor.read_int32()
    if has_ctab != 1:
        raise FormatError(
            f'Annotation has no color table (flag {has_ctab}); only annotations '
            'with a color table are supported',
            field='color table flag',
            expected=1,
            actual=has_ctab,
            filename=cursor.filename,
        )
    version = cursor.read_int32()
    if version > 0:
        raise FormatError(
            'Annotation color table is in the old format, which is not supported',
            field='color table version',
            expected=ANNOT_CTAB_VERSION,
            actual=version,
            filename=cursor.filename,
        )
    if version != ANNOT_CTAB_VERSION:
        raise FormatError.for_field(
            'color table version', ANNOT_CTAB_VERSION, version, cursor.filename
        )
    ctab = _read_annot_ctab(cursor, pack)
    return Annotation(pairs[:, 0], pairs[:, 1], ctab)


def read_annot(filepath):
    """Read in a Freesurfer annotation from a ``.annot`` file.

    An ``.annot`` file contains a sequence of vertices with a label (also known
    as an "annotation value") associated with each vertex, and then a sequence
    of colors corresponding to each label.

    Of the "old-style" and "new-style" color table layouts, only the
    new-style layout (version marker -2) is supported.

    Region labels are computed from the red, green and blue channels only
    (:func:`~neuroformats.freesurfer.colortable.pack_rgb`), matching the
    per-vertex labels FreeSurfer stores.

    See:
     * https://surfer.nmr.mgh.harvard.edu/fswiki/LabelsClutsAnnotationFiles#Annotation
     * https://github.com/freesurfer/freesurfer/blob/dev/matlab/read_annotation.m

    Parameters
    ----------
    filepath : str or os.PathLike
        Path to annotation file.

    Returns
    -------
    annot : Annotation

    Raises
    ------
    FormatError
        if the file has no color table, or an old-style color table
    """
    cursor = ByteCursor.from_file(filepath, '>')
    annot = _decode_annot(cursor, _rgb_label)
    logger.debug(
        'Read annotation %s: %d vertices, %d color table regions',
        cursor.filename,
        annot.num_vertices,
        annot.colortable.num_regions,
    )
    return annot


def read_colortable(filepath):
    """Read only the color table of annotation file `filepath`

    Unlike :func:`read_annot`, region labels are computed from all four
    channels with :func:`~neuroformats.freesurfer.colortable.pack_rgba`,
    using the stored transparency as the fourth channel.  For regions with
    non-zero transparency, these labels do not match the vertex labels of
    the annotation.

    Returns
    -------
    ctab : ColorTable
    """
    cursor = ByteCursor.from_file(filepath, '>')
    return _decode_annot(cursor, pack_rgba).colortable


def write_annot(filepath, annot):
    """Write out a "new-style" Freesurfer annotation file.

    Note that the color table ``annot.colortable`` is written as is, and
    vertex labels are not checked against it.

    Parameters
    ----------
    filepath : str or os.PathLike
        Path to annotation file to be written
    annot : Annotation
        If ``annot.colortable`` is None, a "no color table" flag is written
        and a warning logged, as most software cannot read such files.
    """
    cursor = ByteCursor(endianness='>')

    def write_string(s):
        s = s.encode('utf-8') + b'\x00'
        cursor.write_int32(len(s))
        cursor.write_bytes(s)

    # vtxct
    cursor.write_int32(annot.num_vertices)
    # vno, label
    pairs = np.column_stack((annot.vertices, annot.labels))
    cursor.write_array(pairs.reshape(-1), _ANNOT_DT)

    ctab = annot.colortable
    if ctab is None:
        logger.warning(
            'Writing annotation %s without a color table; most software '
            'will not be able to read this file',
            filepath,
        )
        cursor.write_int32(0)
    else:
        # tag
        cursor.write_int32(1)
        # ctabversion
        cursor.write_int32(ANNOT_CTAB_VERSION)
        # maxstruc
        cursor.write_int32(ctab.num_regions)
        # File of LUT is unknown.
        write_string(ANNOT_CTAB_FILENAME)
        # num_entries
        cursor.write_int32(ctab.num_regions)
        for i in range(ctab.num_regions):
            cursor.write_int32(ctab.structure_id[i])
            write_string(ctab.name[i])
            cursor.write_array(
                [ctab.red[i], ctab.green[i], ctab.blue[i], ctab.transparency[i]], _ANNOT_DT
            )
    write_file_bytes(filepath, cursor.getvalue())


def write_annot_csv(filepath, annot, with_header=True):
    """Write vertex indices and labels of `annot` as comma separated text"""
    _write_text(filepath, annot.to_csv(with_header=with_header))
