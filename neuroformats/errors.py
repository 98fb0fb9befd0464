# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Exceptions raised by the format codecs

``FormatError`` covers anything wrong with the bytes of a file (bad magic
numbers, unknown version markers, count mismatches).  ``TruncatedDataError``
is the special case of a file ending before a field could be read.
``ValidationError`` is only raised by explicit ``validate()`` calls on the data
model objects.  ``UnsupportedFormatError`` is raised for format names that no
reader or writer knows about.
"""


class NeuroFormatError(Exception):
    """Base class for all errors raised by neuroformats"""


class FormatError(NeuroFormatError, ValueError):
    """File content violates the format definition

    Parameters
    ----------
    message : str
        Human readable description of the problem.
    field : str, optional
        Name of the offending field.
    expected : object, optional
        Value (or description of the values) the format requires.
    actual : object, optional
        Value found in the file.
    filename : str, optional
        File the bytes came from, if known.
    """

    def __init__(self, message, field=None, expected=None, actual=None, filename=None):
        self.field = field
        self.expected = expected
        self.actual = actual
        self.filename = filename
        if filename is not None:
            message = f'{message} (file {filename!r})'
        super().__init__(message)

    @classmethod
    def for_field(klass, field, expected, actual, filename=None):
        """Build error for a field that does not hold the `expected` value"""
        return klass(
            f'Invalid {field}: expected {expected}, got {actual}',
            field=field,
            expected=expected,
            actual=actual,
            filename=filename,
        )


class TruncatedDataError(FormatError):
    """Input ended before an expected field could be read"""

    def __init__(self, needed, available, position, filename=None):
        self.needed = needed
        self.available = available
        self.position = position
        super().__init__(
            f'Unexpected end of data at byte {position}: '
            f'needed {needed} bytes, {available} left',
            field='data',
            expected=needed,
            actual=available,
            filename=filename,
        )


class ValidationError(NeuroFormatError, ValueError):
    """Data model object is internally inconsistent"""


class UnsupportedFormatError(NeuroFormatError, ValueError):
    """Format name or format member not supported for this operation"""

    def __init__(self, fmt, valid, kind='format'):
        self.fmt = fmt
        self.valid = tuple(valid)
        super().__init__(
            f'Unknown {kind} {fmt!r}; valid values are {", ".join(map(repr, self.valid))}'
        )
