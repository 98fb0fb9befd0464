# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Code tables and numeric helpers shared by the binary codecs"""

import sys

import numpy as np

sys_is_le = sys.byteorder == 'little'
native_code = '<' if sys_is_le else '>'
swapped_code = '>' if sys_is_le else '<'

_endian_codes = (  # numpy code, aliases
    ('<', 'little', 'l', 'le', 'L', 'LE'),
    ('>', 'big', 'BIG', 'b', 'be', 'B', 'BE'),
    (native_code, 'native', 'n', 'N', '=', '|', 'i', 'I'),
    (swapped_code, 'swapped', 's', 'S', '!'),
)


class Recoder:
    """class to return canonical code(s) from code or aliases

    >>> codes = ((1, 'label1', 'one', 'first'), (2, 'label2', 'two'))
    >>> recodes = Recoder(codes, fields=('code', 'label'))
    >>> recodes.code['first']
    1
    >>> recodes.code['label1']
    1
    >>> recodes.label[2]
    'label2'
    >>> recodes[2]
    2
    """

    def __init__(self, codes, fields=('code',), map_maker=dict):
        """Create recoder object

        ``codes`` give a sequence of code, alias sequences
        ``fields`` are names by which the entries in these sequences can be
        accessed.

        By default ``fields`` gives the first column the name "code".  The
        first column is the vector of first entries in each of the sequences
        found in ``codes``.  Thence you can get the equivalent first column
        value with ob.code[value], where value can be a first column value, or
        a value in any of the other columns in that sequence.

        Parameters
        ----------
        codes : sequence of sequences
            Each sequence defines values (codes) that are equivalent
        fields : {('code',) string sequence}, optional
            names by which elements in sequences can be accessed
        map_maker: callable, optional
            constructor for dict-like objects used to store key value pairs.
        """
        self.fields = tuple(fields)
        self.field1 = {}  # a placeholder for the check below
        for name in fields:
            if name in self.__dict__:
                raise KeyError(f'Input name {name} already in object dict')
            self.__dict__[name] = map_maker()
        self.field1 = self.__dict__[fields[0]]
        self.add_codes(codes)

    def add_codes(self, code_syn_seqs):
        """Add codes to object

        Parameters
        ----------
        code_syn_seqs : sequence
            sequence of sequences, where each sequence ``S = code_syn_seqs[n]``
            gives values in the same order as ``self.fields``.
        """
        for code_syns in code_syn_seqs:
            # Add all the aliases
            for alias in code_syns:
                # For all defined fields, make every value in the sequence be
                # an entry to return matching index value.
                for field_ind, field_name in enumerate(self.fields):
                    self.__dict__[field_name][alias] = code_syns[field_ind]

    def __getitem__(self, key):
        """Return value from field1 dictionary (first column of values)"""
        return self.field1[key]

    def __contains__(self, key):
        """True if field1 in recoder contains `key`"""
        try:
            self.field1[key]
        except (KeyError, TypeError):
            return False
        return True

    def keys(self):
        """Return all available code and alias values"""
        return self.field1.keys()

    def value_set(self, name=None):
        """Return set of possible returned values for column

        By default, the column is the first column.

        >>> codes = ((1, 'one'), (2, 'two'), (1, 'repeat value'))
        >>> Recoder(codes).value_set() == {1, 2}
        True
        """
        d = self.field1 if name is None else self.__dict__[name]
        # dict preserves insertion order, so this is ordered as entered
        return dict.fromkeys(d.values()).keys()


# Endian code aliases
endian_codes = Recoder(_endian_codes)


def truncate_to_dtype(arr, dtype):
    """Narrow float `arr` to integer or float `dtype` by host-style truncation

    Floats go through unchanged apart from the precision change.  For integer
    types values are first truncated toward zero, then wrapped modulo
    ``2 ** nbits`` (what a C cast of an in-range-of-int64 value does).  NaN
    becomes 0.

    Parameters
    ----------
    arr : array-like
        values to convert
    dtype : numpy dtype specifier
        target type, possibly with byte order

    Returns
    -------
    out : ndarray
        array of type `dtype`

    Examples
    --------
    >>> truncate_to_dtype([1.7, -1.7, 256.0, 300.5], np.uint8)
    array([  1, 255,   0,  44], dtype=uint8)
    """
    dtype = np.dtype(dtype)
    arr = np.asarray(arr)
    if dtype.kind == 'f':
        return arr.astype(dtype)
    # int64 -> narrower int casts wrap modulo 2 ** nbits
    as_int = np.trunc(np.nan_to_num(arr.astype(np.float64), nan=0.0)).astype(np.int64)
    return as_int.astype(dtype)
