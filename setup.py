#!/usr/bin/env python
# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""
Setuptools entrypoint

Static metadata lives in ``neuroformats/info.py``, which is exec'd here rather
than imported, so that installing does not need numpy.

This file should not be run directly. To install, use:

    pip install .

To build a package for distribution, use:

    pip install --upgrade build
    python -m build

"""

import os

from setuptools import find_packages, setup

info = {}
with open(os.path.join('neuroformats', 'info.py')) as fobj:
    exec(fobj.read(), info)

setup(
    name='neuroformats',
    version=info['__version__'],
    description='Read and write FreeSurfer neuroimaging file formats',
    long_description=info['long_description'],
    long_description_content_type='text/x-rst',
    license='MIT',
    python_requires='>=3.11',
    packages=find_packages(include=['neuroformats', 'neuroformats.*']),
    install_requires=['numpy>=1.22'],
    extras_require={'test': ['pytest']},
    entry_points={
        'console_scripts': ['neuroformats-subject=neuroformats.cmdline.subject:main'],
    },
    classifiers=[
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering',
    ],
)
