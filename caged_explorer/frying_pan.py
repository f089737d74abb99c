"""Frying-pan / 3:2 overlay geometry.

The pentatonic scale also decomposes into two-string "pans" (two notes per
string) with a one-string "handle" that extends the pan to three notes on the
handle string. Pans are defined once at the reference key, where the shapes
of C major and A minor pentatonic coincide, and moved to other keys by adding
the key to every fret.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .logger import get_logger
from .note_types import Bar, Note, PanInstance, PanTemplate
from .scales import NUM_FRETS

# Get logger for this module
logger = get_logger(__name__)

HANDLE_DIRECTIONS = ("left", "right")

# Two octaves so any 15-fret window is covered after shifting
FRYING_PAN: Dict[str, Tuple[PanTemplate, ...]] = {
    "left": (
        PanTemplate((6, 5), 10, 12, 6, 8, "left"),
        PanTemplate((4, 3), 12, 14, 4, 10, "left"),
        PanTemplate((2, 1), 3, 5, 2, 1, "left"),
        PanTemplate((6, 5), 22, 24, 6, 20, "left"),
        PanTemplate((4, 3), 24, 26, 4, 22, "left"),
        PanTemplate((2, 1), 15, 17, 2, 13, "left"),
    ),
    "right": (
        PanTemplate((6, 5), 3, 5, 5, 7, "right"),
        PanTemplate((4, 3), 5, 7, 3, 9, "right"),
        PanTemplate((2, 1), 8, 10, 1, 12, "right"),
        PanTemplate((6, 5), 15, 17, 5, 19, "right"),
        PanTemplate((4, 3), 17, 19, 3, 21, "right"),
        PanTemplate((2, 1), 20, 22, 1, 24, "right"),
    ),
}


def _in_range(fret: int, max_fret: int) -> bool:
    return 0 <= fret <= max_fret


def visible_pans(
    key: int,
    directions: Optional[Sequence[str]] = None,
    max_fret: int = NUM_FRETS,
) -> List[PanInstance]:
    """Pans that reach the displayed neck for a key.

    Each template is tried at shifts ``key`` and ``key - 12``; a shifted pan is
    kept when any of its pan edges or its handle fret is on the neck. A
    second-octave template shifted down lands on its first-octave twin, so
    pans with the same geometry are kept once.

    Args:
        key: Major key index (the pans follow the key, not the relative minor)
        directions: Handle directions to include, both by default
        max_fret: Highest displayed fret

    Raises:
        ValueError: If a direction is not 'left' or 'right'
    """
    key %= 12
    directions = HANDLE_DIRECTIONS if directions is None else tuple(directions)
    for direction in directions:
        if direction not in FRYING_PAN:
            raise ValueError(f"Unknown handle direction: {direction!r}")

    pans = []
    seen = set()
    for shift in (key, key - 12):
        for direction in directions:
            for template in FRYING_PAN[direction]:
                pan = PanInstance(template, shift)
                geometry = (pan.pair, pan.pan_min, pan.handle_string, pan.handle_fret)
                if geometry in seen:
                    continue
                if any(
                    _in_range(f, max_fret)
                    for f in (pan.pan_min, pan.pan_max, pan.handle_fret)
                ):
                    seen.add(geometry)
                    pans.append(pan)
    logger.debug(f"{len(pans)} pans visible for key {key}")
    return pans


def three_two_bars(pan: PanInstance, max_fret: int = NUM_FRETS) -> List[Bar]:
    """Split a pan into its 3-note handle bar and 2-note partner bar.

    The 3-note bar runs along the handle string from the handle to the far
    edge of the pan; the 2-note bar covers the pan on the other string. Bars
    with an end off the neck are dropped whole.
    """
    if pan.handle_dir == "left":
        three = Bar(pan.handle_string, pan.handle_fret, pan.pan_max, notes=3)
    else:
        three = Bar(pan.handle_string, pan.pan_min, pan.handle_fret, notes=3)
    two = Bar(pan.template.other_string, pan.pan_min, pan.pan_max, notes=2)
    return [
        bar
        for bar in (three, two)
        if _in_range(bar.lo, max_fret) and _in_range(bar.hi, max_fret)
    ]


def pans_covering(pans: Iterable[PanInstance], notes: Iterable[Note]) -> List[PanInstance]:
    """Keep the pans whose body holds at least one of the notes."""
    notes = list(notes)
    return [pan for pan in pans if any(pan.holds(n.string, n.fret) for n in notes)]


def on_neck(pan: PanInstance, max_fret: int = NUM_FRETS) -> bool:
    """Whether the pan body itself overlaps the displayed neck."""
    return pan.pan_max >= 0 and pan.pan_min <= max_fret
