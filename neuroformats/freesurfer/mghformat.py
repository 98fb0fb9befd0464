# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Header and volume reading / writing functions for MGH image format

An MGH file is a 284 byte header, followed by the voxel data and an optional
footer with scan parameters.  MGZ files are the same bytes, gzip-compressed.
See https://surfer.nmr.mgh.harvard.edu/fswiki/FsTutorial/MghFormat
"""

import numpy as np

from ..bytecursor import ByteCursor, write_file_bytes
from ..errors import FormatError, ValidationError
from ..filename_parser import splitext_addext
from ..imageglobals import logger
from ..volumeutils import Recoder, truncate_to_dtype

# mgh header
DATA_OFFSET = 284
# Note that mgh data is strictly big endian ( hence the > sign )
header_dtd = [
    ('version', '>i4'),  # 0; must be 1
    ('dims', '>i4', (4,)),  # 4; width, height, depth, nframes
    ('type', '>i4'),  # 20; data type
    ('dof', '>i4'),  # 24; degrees of freedom
    ('goodRASFlag', '>i2'),  # 28; Mdc, Pxyz_c fields valid
    ('delta', '>f4', (3,)),  # 30; zooms (X, Y, Z)
    ('Mdc', '>f4', (3, 3)),  # 42; TRANSPOSE of direction cosine matrix
    ('Pxyz_c', '>f4', (3,)),  # 78; mm from (0, 0, 0) RAS to vol center
]
# Optional footer. Also has more stuff after this, optionally
footer_dtd = [
    ('tr', '>f4'),  # 0; repetition time
    ('flip_angle', '>f4'),  # 4; flip angle
    ('te', '>f4'),  # 8; echo time
    ('ti', '>f4'),  # 12; inversion time
    ('fov', '>f4'),  # 16; field of view (unused)
]

header_dtype = np.dtype(header_dtd)
footer_dtype = np.dtype(footer_dtd)
# Bytes of the header up to, and including, the RAS flag
_RAS_FLAG_END = header_dtype.fields['delta'][1]

# code, label, on-disk dtype, bytes per voxel, FreeSurfer name, in-memory dtype
_dtdefs = (
    (0, 'uchar', '>u1', '1', 'MRI_UCHAR', np.float32),
    (4, 'short', '>i2', '2', 'MRI_SHORT', np.float32),
    # float32 cannot hold all int32 values exactly
    (1, 'int', '>i4', '4', 'MRI_INT', np.float64),
    (3, 'float', '>f4', '4', 'MRI_FLOAT', np.float32),
)

# make full code alias bank, including dtype column
data_type_codes = Recoder(
    _dtdefs, fields=('code', 'label', 'dtype', 'bytespervox', 'mritype', 'float_dtype')
)

_DEFAULT_DELTA = (1.0, 1.0, 1.0)
_DEFAULT_MDC = ((-1, 0, 0), (0, 0, 1), (0, -1, 0))
_DEFAULT_PXYZ_C = (0.0, 0.0, 0.0)


class MGHHeader:
    """Header of MGH / MGZ volume

    Parameters
    ----------
    dims : sequence of 4 int, optional
        width, height, depth, number of frames
    data_type : int or str, optional
        data type code or label: 0 / ``'uchar'``, 1 / ``'int'``, 3 /
        ``'float'`` or 4 / ``'short'``
    dof : int, optional
        degrees of freedom
    ras_good : int, optional
        RAS flag.  The voxel sizes (`delta`), direction cosines (`Mdc`) and
        center (`Pxyz_c`) are only stored in the file if this is 1.
    delta, Mdc, Pxyz_c : array-like or None, optional
        voxel sizes (3,), direction cosines (3, 3) as stored in the file, and
        RAS coordinates of the volume center (3,).  None for unknown.
    footer : None or dict, optional
        scan parameters ``tr, flip_angle, te, ti, fov`` stored after the data
    """

    _data_type_codes = data_type_codes

    def __init__(
        self,
        dims=(1, 1, 1, 1),
        data_type='float',
        dof=0,
        ras_good=0,
        delta=None,
        Mdc=None,
        Pxyz_c=None,
        footer=None,
        version=1,
    ):
        self.version = int(version)
        self.dims = tuple(int(d) for d in dims)
        if len(self.dims) != 4:
            raise ValueError(f'MGH header needs 4 dimensions, got {self.dims}')
        self.set_data_dtype(data_type)
        self.dof = int(dof)
        self.ras_good = int(ras_good)
        self.delta = None if delta is None else np.asarray(delta, dtype=np.float32).reshape(3)
        self.Mdc = None if Mdc is None else np.asarray(Mdc, dtype=np.float32).reshape(3, 3)
        self.Pxyz_c = None if Pxyz_c is None else np.asarray(Pxyz_c, dtype=np.float32).reshape(3)
        self.footer = footer

    def __repr__(self):
        return (
            f'<{self.__class__.__name__} dims={self.dims} '
            f'type={self.get_data_dtype()} ras_good={self.ras_good}>'
        )

    @classmethod
    def from_data_shape(klass, shape, data_type='float', **kwargs):
        """Header for data of `shape`, padded with 1s to 4 dimensions"""
        shape = tuple(shape)
        if not 1 <= len(shape) <= 4:
            raise ValueError(f'MGH data must have 1 to 4 dimensions, not {len(shape)}')
        return klass(shape + (1,) * (4 - len(shape)), data_type, **kwargs)

    @classmethod
    def from_cursor(klass, cursor):
        """Read header from `cursor`, leaving it at the start of the data

        Raises
        ------
        FormatError
            for an unknown version or data type, or negative dimensions
        """
        binaryblock = cursor.read_bytes(DATA_OFFSET)
        hdr = np.frombuffer(binaryblock[: header_dtype.itemsize], dtype=header_dtype)[0]
        version = int(hdr['version'])
        if version != 1:
            raise FormatError.for_field('MGH format version', 1, version, cursor.filename)
        code = int(hdr['type'])
        if code not in klass._data_type_codes.value_set():
            raise FormatError.for_field(
                'MGH data type',
                tuple(klass._data_type_codes.value_set()),
                code,
                cursor.filename,
            )
        dims = tuple(int(d) for d in hdr['dims'])
        if min(dims) < 0:
            raise FormatError.for_field('MGH dimensions', 'non-negative', dims, cursor.filename)
        ras_good = int(hdr['goodRASFlag'])
        kwargs = {}
        if ras_good == 1:
            kwargs = dict(delta=hdr['delta'], Mdc=hdr['Mdc'], Pxyz_c=hdr['Pxyz_c'])
        return klass(dims, code, int(hdr['dof']), ras_good, **kwargs)

    def to_bytes(self):
        """Binary header block, always `DATA_OFFSET` bytes long"""
        hdr = np.zeros((), dtype=header_dtype)
        hdr['version'] = self.version
        hdr['dims'] = self.dims
        hdr['type'] = self.get_data_code()
        hdr['dof'] = self.dof
        hdr['goodRASFlag'] = self.ras_good
        if self.ras_good == 1:
            hdr['delta'] = _DEFAULT_DELTA if self.delta is None else self.delta
            hdr['Mdc'] = _DEFAULT_MDC if self.Mdc is None else self.Mdc
            hdr['Pxyz_c'] = _DEFAULT_PXYZ_C if self.Pxyz_c is None else self.Pxyz_c
            block = hdr.tobytes()
        else:
            block = hdr.tobytes()[:_RAS_FLAG_END]
        return block + b'\x00' * (DATA_OFFSET - len(block))

    def get_data_code(self):
        return self._data_type_codes.code[self._data_type]

    def get_data_dtype(self):
        """Label of on-disk data type, e.g. ``'uchar'``"""
        return self._data_type_codes.label[self._data_type]

    def set_data_dtype(self, datatype):
        """Set on-disk data type from code or label"""
        if datatype not in self._data_type_codes:
            raise ValueError(
                f'MGH data type {datatype!r} not supported; use one of '
                f'{tuple(self._data_type_codes.value_set("label"))}'
            )
        self._data_type = self._data_type_codes.code[datatype]

    def get_data_shape(self):
        return self.dims

    def get_data_bytespervox(self):
        return int(self._data_type_codes.bytespervox[self._data_type])

    def get_data_size(self):
        """Number of bytes of the data section"""
        return self.get_data_bytespervox() * int(np.prod(self.dims))

    def get_zooms(self):
        """Voxel sizes, (1, 1, 1) if not stored"""
        return tuple(float(d) for d in (_DEFAULT_DELTA if self.delta is None else self.delta))

    def get_affine(self):
        """Get the affine transform from the header information.

        MGH format doesn't store the transform directly. Instead it's gleaned
        from the zooms ( delta ), direction cosines ( Mdc ), RAS centers (
        Pxyz_c ) and the dimensions.  Unknown fields take FreeSurfer's
        defaults (coronal orientation, 1 mm voxels, center at the origin).
        """
        delta = np.array(self.get_zooms())
        Mdc = np.array(_DEFAULT_MDC if self.Mdc is None else self.Mdc, dtype=float)
        Pxyz_c = np.array(_DEFAULT_PXYZ_C if self.Pxyz_c is None else self.Pxyz_c, dtype=float)
        MdcD = Mdc.T * delta
        vol_center = MdcD.dot(self.dims[:3]) / 2
        affine = np.eye(4)
        affine[:3, :3] = MdcD
        affine[:3, 3] = Pxyz_c - vol_center
        return affine

    def get_vox2ras_tkr(self):
        """Get the vox2ras-tkr transform. See "Torig" here:
        https://surfer.nmr.mgh.harvard.edu/fswiki/CoordinateSystems
        """
        ds = np.array(self.get_zooms())
        ns = np.array(self.dims[:3]) * ds / 2.0
        return np.array(
            [
                [-ds[0], 0, 0, ns[0]],
                [0, 0, ds[2], -ns[2]],
                [0, -ds[1], 0, ns[1]],
                [0, 0, 0, 1],
            ],
            dtype=np.float32,
        )


def _read_footer(cursor):
    if cursor.remaining < footer_dtype.itemsize:
        return None
    ftr = np.frombuffer(cursor.read_bytes(footer_dtype.itemsize), dtype=footer_dtype)[0]
    return {name: float(ftr[name]) for name in footer_dtype.names}


class Volume:
    """MGH header plus 4D array of voxel values

    Whatever the on-disk data type, values are held as floats: float64 for
    ``'int'`` data, float32 otherwise.  Values are converted to the on-disk
    type when writing.

    Parameters
    ----------
    data : array-like
        voxel values with 1 to 4 dimensions; padded to 4 dimensions with
        trailing axes of length 1
    header : MGHHeader, optional
        header; default is a header matching the shape of `data`, with data
        type `data_type`
    data_type : int or str, optional
        on-disk data type when `header` is None
    """

    def __init__(self, data, header=None, data_type='float'):
        data = np.asarray(data)
        if header is None:
            header = MGHHeader.from_data_shape(data.shape, data_type)
        self.header = header
        float_dtype = data_type_codes.float_dtype[header.get_data_code()]
        self.data = data.reshape(data.shape + (1,) * (4 - data.ndim)).astype(float_dtype)

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.header!r}>'

    @property
    def shape(self):
        return self.data.shape

    def validate(self):
        """Raise ValidationError if data shape does not match header dimensions"""
        if self.data.shape != self.header.get_data_shape():
            raise ValidationError(
                f'Data should be shape {self.header.get_data_shape()}, not {self.data.shape}'
            )


def volume_from_bytes(data, filename=None, order='C'):
    """Decode uncompressed MGH bytes `data`; see :func:`load`"""
    cursor = ByteCursor(data, '>', filename=filename)
    return _decode(cursor, order)


def _decode(cursor, order):
    header = MGHHeader.from_cursor(cursor)
    dtype = data_type_codes.dtype[header.get_data_code()]
    nvox = int(np.prod(header.dims))
    raw = cursor.read_array(dtype, nvox)
    header.footer = _read_footer(cursor)
    logger.debug(
        'Read MGH volume %s: dims %s, type %s',
        cursor.filename,
        header.dims,
        header.get_data_dtype(),
    )
    return Volume(raw.reshape(header.dims, order=order), header)


def load(filename, order='C'):
    """Load MGH or MGZ volume from `filename`

    Compression is detected from the file content, not the extension.

    Parameters
    ----------
    filename : str or os.PathLike
        volume file
    order : {'C', 'F'}, optional
        order of the voxel values in the file.  'C' (default): the first
        dimension varies slowest.  'F': the first dimension varies fastest,
        as written by FreeSurfer.

    Returns
    -------
    volume : Volume
    """
    return _decode(ByteCursor.from_file(filename, '>'), order)


def volume_to_bytes(volume, order='C'):
    """Encode `volume` as uncompressed MGH bytes; see :func:`save`"""
    volume.validate()
    header = volume.header
    dtype = data_type_codes.dtype[header.get_data_code()]
    cursor = ByteCursor(header.to_bytes(), '>')
    cursor.seek(len(cursor))
    cursor.write_bytes(truncate_to_dtype(volume.data, dtype).tobytes(order=order))
    if header.footer is not None:
        cursor.write_array([header.footer.get(name, 0) for name in footer_dtype.names], '>f4')
    return cursor.getvalue()


def save(volume, filename, compress=None, order='C'):
    """Save `volume` as MGH or MGZ

    Parameters
    ----------
    volume : Volume
    filename : str or os.PathLike
        output file
    compress : None or bool, optional
        If None (default), compress for ``.mgz`` and ``.gz`` extensions.
    order : {'C', 'F'}, optional
        voxel order; see :func:`load`

    Raises
    ------
    ValidationError
        if the data shape does not match the header dimensions
    """
    if compress is None:
        _, ext, addext = splitext_addext(filename)
        compress = ext.lower() == '.mgz' or addext.lower() == '.gz'
    write_file_bytes(filename, volume_to_bytes(volume, order), compress=compress)
