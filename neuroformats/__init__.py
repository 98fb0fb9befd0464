# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##

from .info import __version__
from .info import long_description as __doc__

__doc__ += """
Quickstart
==========

::

   import neuroformats as nf

   mesh = nf.load_mesh('subject1/surf/lh.white')
   thickness = nf.load_morph('subject1/surf/lh.thickness')
   annot = nf.load_annot('subject1/label/lh.aparc.annot')
   brain = nf.load_volume('subject1/mri/brain.mgz')

   print(mesh.num_vertices, thickness.data.mean(), annot.num_regions)

   colors = annot.vertex_colors_rgb()
   nf.save_mesh(mesh, 'lh_white_aparc.ply', vertex_colors=colors)
"""

# module imports
from . import errors, imageglobals

# object imports
from .errors import (
    FormatError,
    NeuroFormatError,
    TruncatedDataError,
    UnsupportedFormatError,
    ValidationError,
)
from .filename_parser import AnnotFormat, LabelFormat, MeshFormat, ScalarFormat, VolumeFormat
from .freesurfer import Annotation, ColorTable, LabelSet, MGHHeader, ScalarField, Volume
from .loadsave import (
    load_annot,
    load_label,
    load_mesh,
    load_morph,
    load_volume,
    save_annot,
    save_label,
    save_mesh,
    save_morph,
    save_volume,
)
from .mesh import Mesh
from .surfice import Mz3
