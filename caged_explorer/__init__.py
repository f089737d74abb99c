"""CAGED Explorer: fretboard geometry for the CAGED system."""

from .clusters import cluster_frets, compute_hover_ranges
from .fretboard import generate_scale, shift_notes
from .frying_pan import three_two_bars, visible_pans
from .note_types import FretCluster, HoverRegion, Note
from .scales import SCALE, SHAPE_ORDER
from .shapes import assign_shapes, find_shapes

__version__ = "0.1.0"

__all__ = [
    "generate_scale",
    "assign_shapes",
    "find_shapes",
    "cluster_frets",
    "shift_notes",
    "compute_hover_ranges",
    "visible_pans",
    "three_two_bars",
    "Note",
    "FretCluster",
    "HoverRegion",
    "SCALE",
    "SHAPE_ORDER",
]
