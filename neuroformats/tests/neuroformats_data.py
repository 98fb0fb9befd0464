"""Functions / decorators for finding / requiring neuroformats-data directory
"""

import unittest
from os import environ, listdir
from os.path import dirname, exists, isdir
from os.path import join as pjoin
from os.path import realpath


def get_neuroformats_data():
    """Return path to neuroformats-data or empty string if missing

    First use ``NEUROFORMATS_DATA_DIR`` environment variable.

    If this variable is missing then look for data in directory below package
    directory.
    """
    neuroformats_data = environ.get('NEUROFORMATS_DATA_DIR')
    if neuroformats_data is None:
        mod = __import__('neuroformats')
        containing_path = dirname(dirname(realpath(mod.__file__)))
        neuroformats_data = pjoin(containing_path, 'neuroformats-data')
    return neuroformats_data if isdir(neuroformats_data) else ''


def needs_neuroformats_data(subdir=None):
    """Decorator for tests needing neuroformats-data

    Parameters
    ----------
    subdir : None or str
        Subdirectory we need in neuroformats-data directory.  If None, only
        require neuroformats-data directory itself.

    Returns
    -------
    skip_dec : decorator
        Decorator skipping tests if required directory not present
    """
    neuroformats_data = get_neuroformats_data()
    if neuroformats_data == '':
        return unittest.skip('Need neuroformats-data directory for this test')
    if subdir is None:
        return lambda x: x
    required_path = pjoin(neuroformats_data, subdir)
    # Path should not be empty
    have_files = exists(required_path) and len(listdir(required_path)) > 0
    return unittest.skipUnless(have_files, f'Need files in {required_path} for these tests')


def subject_path(*parts):
    """Path below the ``subjects_dir/subject1`` example subject"""
    return pjoin(get_neuroformats_data(), 'subjects_dir', 'subject1', *parts)


needs_subject_data = needs_neuroformats_data(pjoin('subjects_dir', 'subject1'))
