"""Placement of scale tones on the fretboard."""

from typing import Dict, Iterable, List, Sequence, Set, Tuple

from .logger import get_logger
from .note_types import Note, ScaleDegree
from .scales import NUM_FRETS, TUNING, string_number

# Get logger for this module
logger = get_logger(__name__)


def pos_key(string: int, fret: int) -> Tuple[int, int]:
    """Key identifying a fretboard position in shape maps and dedup sets."""
    return (string, fret)


def generate_scale(
    root_key: int, degrees: Sequence[ScaleDegree], max_fret: int = NUM_FRETS
) -> List[Note]:
    """Place a scale's notes on every string.

    Notes are placed directly at their frets, every octave from the lowest
    non-negative fret up to ``max_fret``.

    Args:
        root_key: Root pitch in semitones from C (reduced modulo 12)
        degrees: The scale degree set
        max_fret: Highest fret to emit

    Returns:
        Notes grouped by string (6 first) then by degree; callers sort if needed
    """
    root_key %= 12
    notes = []
    for idx, open_semi in enumerate(TUNING):
        string = string_number(idx)
        for degree in degrees:
            note_semi = (root_key + degree.semi) % 12
            base_fret = (note_semi - open_semi + 12) % 12
            for fret in range(base_fret, max_fret + 1, 12):
                notes.append(Note(string, fret, degree.interval))
    return notes


def notes_by_string(notes: Iterable[Note]) -> Dict[int, List[Note]]:
    """Group notes by string, each group sorted by fret."""
    by_string: Dict[int, List[Note]] = {}
    for note in notes:
        by_string.setdefault(note.string, []).append(note)
    for string_notes in by_string.values():
        string_notes.sort(key=lambda n: n.fret)
    return by_string


def shift_notes(
    notes: Iterable[Note], effective_key: int, max_fret: int = NUM_FRETS
) -> List[Note]:
    """Transpose a reference-key (key 0) note table to ``effective_key``.

    Every note is moved up by ``effective_key`` and down by
    ``effective_key - 12`` so a two-octave table fills the whole neck.
    Results outside ``[0, max_fret]`` are dropped and positions reached by
    both shifts are kept once.
    """
    effective_key %= 12
    notes = list(notes)
    shifted = [
        note.shifted(shift)
        for shift in (effective_key, effective_key - 12)
        for note in notes
        if 0 <= note.fret + shift <= max_fret
    ]
    return dedupe_notes(shifted)


def sort_notes(notes: Iterable[Note]) -> List[Note]:
    """Sort by string descending (6 first), then fret ascending."""
    return sorted(notes, key=lambda n: (-n.string, n.fret))


def dedupe_notes(notes: Iterable[Note]) -> List[Note]:
    """Drop repeated positions, keeping the first note at each."""
    seen: Set[Tuple[int, int]] = set()
    unique = []
    for note in notes:
        key = pos_key(note.string, note.fret)
        if key not in seen:
            seen.add(key)
            unique.append(note)
    return unique
