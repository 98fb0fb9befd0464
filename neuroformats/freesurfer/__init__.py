"""Reading functions for freesurfer files"""

from .annot import Annotation
from .colortable import ColorTable, pack_rgb, pack_rgba, unpack_rgb
from .io import (
    read_annot,
    read_colortable,
    read_geometry,
    read_label,
    read_morph_data,
    write_annot,
    write_geometry,
    write_label,
    write_morph_data,
)
from .label import LabelSet
from .mghformat import MGHHeader, Volume
from .morph import ScalarField
