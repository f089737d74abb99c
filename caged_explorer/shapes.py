"""Assignment of pentatonic positions to the five CAGED shapes."""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .fretboard import notes_by_string, pos_key
from .logger import get_logger
from .note_types import Note
from .scales import SHAPE_ORDER, TUNING

# Get logger for this module
logger = get_logger(__name__)

ShapeMap = Dict[Tuple[int, int], List[str]]


def shape_offset(effective_key: int, scale_semitones: Sequence[int]) -> int:
    """Rotation of the shape cycle for a key.

    The scale is laid out on the lowest string at the reference key; every
    degree that would wrap past the octave when shifted by ``effective_key``
    moves the cycle start back by one shape.
    """
    effective_key %= 12
    canon = sorted((semi - TUNING[0] + 12) % 12 for semi in scale_semitones)
    wrap_count = sum(1 for fret in canon if fret >= 12 - effective_key)
    return (5 - wrap_count) % 5


def assign_shapes(
    penta_notes: Iterable[Note], effective_key: int, scale_semitones: Sequence[int]
) -> ShapeMap:
    """Assign CAGED shapes to pentatonic note positions.

    On each string, pentatonic notes cycle through C, A, G, E, D in fret order.
    The shape at index i owns the notes at positions i and i+1, so every note
    except the first on a string is shared by two adjacent shapes. All strings
    share the same rotation because the shapes span consistent regions across
    the whole neck.

    Args:
        penta_notes: Pentatonic notes for the key
        effective_key: Key the notes were generated in
        scale_semitones: Semitone offsets of the scale (e.g. [0, 2, 4, 7, 9])

    Returns:
        Mapping of (string, fret) to the one or two shapes owning it
    """
    offset = shape_offset(effective_key, scale_semitones)
    logger.debug(f"Shape cycle for key {effective_key % 12} starts at {SHAPE_ORDER[offset]}")

    shape_map: ShapeMap = {}
    for string, notes in notes_by_string(penta_notes).items():
        for i, note in enumerate(notes):
            shapes = shape_map.setdefault(pos_key(string, note.fret), [])
            cur_shape = SHAPE_ORDER[(i + offset) % 5]
            if cur_shape not in shapes:
                shapes.append(cur_shape)
            if i > 0:
                prev_shape = SHAPE_ORDER[(i - 1 + offset) % 5]
                if prev_shape not in shapes:
                    shapes.append(prev_shape)
    return shape_map


def find_shapes(shape_map: ShapeMap, string: int, fret: int) -> Optional[List[str]]:
    """Look up the shapes owning a position.

    Positions missing from the map (a ♭3 or a blue note next to a pentatonic
    tone) fall back to the nearest mapped position on the same string. Equal
    distances keep the entry met first in map order.

    Returns:
        The owning shapes, or None when the string has no mapped positions
    """
    direct = shape_map.get(pos_key(string, fret))
    if direct:
        return direct

    best = None
    best_dist = None
    for (key_string, key_fret), shapes in shape_map.items():
        if key_string != string:
            continue
        dist = abs(key_fret - fret)
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best = shapes
    if best is None:
        logger.warning(f"No shape data for string {string}")
    else:
        logger.debug(f"S{string}F{fret} not mapped; nearest neighbour gives {best}")
    return best


def shapes_adjacent(first: str, second: str) -> bool:
    """Whether two shapes are neighbours in the cyclic C-A-G-E-D order."""
    diff = abs(SHAPE_ORDER.index(first) - SHAPE_ORDER.index(second))
    return diff in (1, 4)
