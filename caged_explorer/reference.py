"""Reference-key fretboard tables.

Every table here describes effective key 0 (C major / C minor) across two
octaves; other keys are reached with :func:`caged_explorer.fretboard.shift_notes`.
The tables are derived from the note generator on first use and cached.
"""

from functools import lru_cache
from typing import Dict, List, Sequence, Tuple

from .clusters import (
    DEFAULT_GAP_THRESHOLD,
    PARTIAL_RATIO,
    canonical_span,
    classify_clusters,
    cluster_frets,
)
from .fretboard import generate_scale, notes_by_string, shift_notes, sort_notes
from .logger import get_logger
from .note_types import FretCluster, Note
from .scales import (
    BLUES_SCALE,
    CHORDS,
    NUM_FRETS,
    PENTA_SCALE,
    SHAPE_ORDER,
    TRIAD_SCALE,
    check_quality,
    chord_fret_span,
    get_scale,
    shape_shift,
    string_number,
)

# Get logger for this module
logger = get_logger(__name__)

# Two octaves of frets so every shape appears whole at least once
REFERENCE_MAX_FRET = 27

ShapeTable = Dict[str, Tuple[Note, ...]]


def chord_center(shape: str) -> float:
    """Middle of a shape's open major chord, moved to key 0."""
    lo, hi = chord_fret_span(shape)
    return (lo + hi) / 2 + shape_shift(shape)


def _closest_pair(frets: List[int], center: float) -> Tuple[int, int]:
    best_i = 0
    best_dist = None
    for i in range(len(frets) - 1):
        dist = abs((frets[i] + frets[i + 1]) / 2 - center)
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best_i = i
    return frets[best_i], frets[best_i + 1]


def compute_penta_box(penta_notes: Sequence[Note], center: float) -> List[Note]:
    """The two consecutive pentatonic notes per string closest to ``center``."""
    box = []
    for string_notes in notes_by_string(penta_notes).values():
        by_fret = {n.fret: n for n in string_notes}
        for fret in _closest_pair(sorted(by_fret), center):
            box.append(by_fret[fret])
    return box


@lru_cache(maxsize=None)
def penta_box(quality: str) -> ShapeTable:
    """Pentatonic box positions per shape, both octaves."""
    check_quality(quality)
    notes = generate_scale(0, get_scale(PENTA_SCALE[quality]), REFERENCE_MAX_FRET)
    table = {}
    for shape in SHAPE_ORDER:
        center = chord_center(shape)
        box = compute_penta_box(notes, center) + compute_penta_box(notes, center + 12)
        table[shape] = tuple(sort_notes(set(box)))
        logger.debug(f"{quality} {shape} box centred on fret {center:g}: {len(table[shape])} notes")
    return table


@lru_cache(maxsize=None)
def triad_shape(quality: str) -> ShapeTable:
    """Chord tones of each shape's open fingering moved to key 0, both octaves."""
    check_quality(quality)
    notes = generate_scale(0, get_scale(TRIAD_SCALE[quality]), REFERENCE_MAX_FRET)
    labels = {(n.string, n.fret): n.interval for n in notes}
    table = {}
    for shape in SHAPE_ORDER:
        shift = shape_shift(shape)
        tones = []
        for idx, fret in enumerate(CHORDS[quality][shape]):
            if fret is None:
                continue
            string = string_number(idx)
            for placed in (fret + shift, fret + shift + 12):
                tones.append(Note(string, placed, labels[(string, placed)]))
        table[shape] = tuple(sort_notes(tones))
    return table


@lru_cache(maxsize=None)
def blues_shape(quality: str) -> ShapeTable:
    """Blue notes lying inside each shape's two-octave pentatonic span.

    The span is deliberately coarse; callers bind the notes to an octave
    occurrence with :func:`caged_explorer.clusters.bound_to_clusters`.
    """
    check_quality(quality)
    notes = generate_scale(0, get_scale(BLUES_SCALE[quality]), REFERENCE_MAX_FRET)
    boxes = penta_box(quality)
    table = {}
    for shape in SHAPE_ORDER:
        frets = [n.fret for n in boxes[shape]]
        lo, hi = min(frets), max(frets)
        table[shape] = tuple(sort_notes(n for n in notes if lo <= n.fret <= hi))
    return table


@lru_cache(maxsize=None)
def shape_fret_ranges(quality: str) -> Dict[str, Tuple[FretCluster, ...]]:
    """Clusters of triad and pentatonic frets per shape at key 0."""
    triads = triad_shape(quality)
    boxes = penta_box(quality)
    return {
        shape: tuple(cluster_frets(n.fret for n in triads[shape] + boxes[shape]))
        for shape in SHAPE_ORDER
    }


def shape_notes(
    quality: str, shape: str, triads: bool = True, pentatonic: bool = True
) -> List[Note]:
    """Reference notes of one shape for the selected note types."""
    notes = []
    if triads:
        notes.extend(triad_shape(quality)[shape])
    if pentatonic:
        notes.extend(penta_box(quality)[shape])
    return notes


def build_shape_ranges(
    effective_key: int,
    qualities: Sequence[str],
    triads: bool = True,
    pentatonic: bool = True,
    max_fret: int = NUM_FRETS,
    gap_threshold: int = DEFAULT_GAP_THRESHOLD,
    partial_ratio: float = PARTIAL_RATIO,
) -> Dict[str, List[FretCluster]]:
    """Clusters of every shape at a key, with partial fragments flagged.

    The notes of all ``qualities`` are clustered together; the reference span
    comes from the first quality alone at key 0.
    """
    if not qualities:
        raise ValueError("At least one quality is required")
    ranges = {}
    for shape in SHAPE_ORDER:
        notes = [
            n for q in qualities for n in shape_notes(q, shape, triads, pentatonic)
        ]
        shifted = shift_notes(notes, effective_key, max_fret)
        reference = shape_notes(qualities[0], shape, triads, pentatonic)
        span = canonical_span((n.fret for n in reference), gap_threshold)
        ranges[shape] = classify_clusters(
            (n.fret for n in shifted), span, partial_ratio, gap_threshold
        )
    return ranges
