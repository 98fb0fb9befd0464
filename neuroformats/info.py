"""Define static neuroformats metadata for neuroformats

The long description parameter is used in the neuroformats top-level
docstring, and as the package description in ``setup.py``.
We exec this file in several places, so it cannot import neuroformats or use
relative imports.
"""

__version__ = '0.3.0'

# Note: this long_description is the canonical place to edit this text.
long_description = """
Read and write access to FreeSurfer_ neuroimaging file formats:

* surface meshes (``lh.white``, ...), plus the PLY, OBJ and Surf Ice MZ3 mesh
  formats;
* per-vertex morphometry data ("curv" files such as ``lh.thickness``);
* labels (``lh.cortex.label``);
* annotations / parcellations with their color tables (``lh.aparc.annot``);
* MGH_ and MGZ volumes.

Data are made available as NumPy arrays on small container objects (``Mesh``,
``ScalarField``, ``LabelSet``, ``Annotation``, ``Volume``).

.. _Freesurfer: https://surfer.nmr.mgh.harvard.edu
.. _MGH: https://surfer.nmr.mgh.harvard.edu/fswiki/FsTutorial/MghFormat

Installation
============

To install from a source checkout, run::

   pip install .

When working on neuroformats itself, install in "editable" mode, with the
test dependencies::

   pip install -e .[test]

Testing
=======

To test an installed version of neuroformats, run pytest_::

    pytest --pyargs neuroformats

Some tests need the FreeSurfer example subject ``subject1``.  Point the
``NEUROFORMATS_DATA_DIR`` environment variable at the directory holding it to
run them; otherwise they are skipped.

.. _pytest: https://docs.pytest.org

License
=======

neuroformats is licensed under the terms of the MIT license.  For more
information, please see the COPYING file.
"""
