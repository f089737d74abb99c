"""Interval tables, tuning and chord fingerings for the CAGED system."""

from typing import Dict, List, Optional, Tuple

from .note_types import ScaleDegree

NUM_FRETS = 15

# Guitar tuning: semitones from C for each string (6 to 1)
TUNING: Tuple[int, ...] = (4, 9, 2, 7, 11, 4)  # E, A, D, G, B, E

NUM_STRINGS = len(TUNING)

NOTES: Tuple[str, ...] = (
    "C", "C#", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B",
)

# Alternate spellings accepted when parsing a key name
_KEY_ALIASES = {
    "Db": 1, "D#": 3, "Gb": 6, "G#": 8, "A#": 10,
    "C♯": 1, "D♭": 1, "D♯": 3, "E♭": 3, "F♯": 6, "G♭": 6,
    "G♯": 8, "A♭": 8, "A♯": 10, "B♭": 10,
}

# Scale intervals (semitones from root + interval label)
SCALE: Dict[str, Tuple[ScaleDegree, ...]] = {
    "triadMaj": (ScaleDegree(0, "R"), ScaleDegree(4, "3"), ScaleDegree(7, "5")),
    "triadMin": (ScaleDegree(0, "R"), ScaleDegree(3, "♭3"), ScaleDegree(7, "5")),
    "pentaMaj": (
        ScaleDegree(0, "R"),
        ScaleDegree(2, "2"),
        ScaleDegree(4, "3"),
        ScaleDegree(7, "5"),
        ScaleDegree(9, "6"),
    ),
    "pentaMin": (
        ScaleDegree(0, "R"),
        ScaleDegree(3, "♭3"),
        ScaleDegree(5, "4"),
        ScaleDegree(7, "5"),
        ScaleDegree(10, "♭7"),
    ),
    "bluesAdd": (ScaleDegree(6, "♭5"),),
    # The blue note layered over the major pentatonic
    "bluesMaj": (ScaleDegree(3, "♭3"),),
}

INTERVAL_SEMITONES: Dict[str, int] = {
    "R": 0, "2": 2, "♭3": 3, "3": 4, "4": 5, "♭5": 6, "5": 7, "6": 9, "♭7": 10,
}

QUALITIES = ("major", "minor")

# Scale families per quality
TRIAD_SCALE = {"major": "triadMaj", "minor": "triadMin"}
PENTA_SCALE = {"major": "pentaMaj", "minor": "pentaMin"}
BLUES_SCALE = {"major": "bluesMaj", "minor": "bluesAdd"}

SHAPE_ORDER: Tuple[str, ...] = ("C", "A", "G", "E", "D")

# Pitch of each open chord's root
SHAPE_ROOT_SEMI: Dict[str, int] = {"C": 0, "D": 2, "E": 4, "G": 7, "A": 9}

# Open chord fingerings, strings 6 to 1 (None = muted)
CHORD_MAJ: Dict[str, Tuple[Optional[int], ...]] = {
    "C": (None, 3, 2, 0, 1, 0),
    "A": (None, 0, 2, 2, 2, 0),
    "G": (3, 2, 0, 0, 0, 3),
    "E": (0, 2, 2, 1, 0, 0),
    "D": (None, None, 0, 2, 3, 2),
}

CHORD_MIN: Dict[str, Tuple[Optional[int], ...]] = {
    "C": (None, 3, 1, 0, 1, None),
    "A": (None, 0, 2, 2, 1, 0),
    "G": (3, 1, 0, 0, 3, 3),
    "E": (0, 2, 2, 0, 0, 0),
    "D": (None, None, 0, 2, 3, 1),
}

CHORDS = {"major": CHORD_MAJ, "minor": CHORD_MIN}

# Which shapes align with which frying-pan orientation
SHAPE_ORIENTATION: Dict[str, str] = {
    "C": "right", "A": "right", "G": "right",  # Right-hand: handle toward bridge
    "E": "left", "D": "left",  # Left-hand: handle toward nut
}

# A relative minor sits nine semitones above its major
RELATIVE_MINOR_OFFSET = 9


def string_number(tuning_index: int) -> int:
    """Convert an index into TUNING to a string number (6 = low E)."""
    return NUM_STRINGS - tuning_index


def open_semitone(string: int) -> int:
    """Open-string pitch of a string number, in semitones from C."""
    return TUNING[NUM_STRINGS - string]


def get_scale(name: str) -> Tuple[ScaleDegree, ...]:
    """Look up a scale degree set by family name.

    Raises:
        ValueError: If the family is unknown
    """
    try:
        return SCALE[name]
    except KeyError:
        raise ValueError(
            f"Unknown scale family: {name!r} (expected one of {', '.join(SCALE)})"
        ) from None


def scale_semitones(name: str) -> List[int]:
    return [degree.semi for degree in get_scale(name)]


def check_quality(quality: str) -> str:
    if quality not in QUALITIES:
        raise ValueError(f"Unknown quality: {quality!r} (expected 'major' or 'minor')")
    return quality


def chord_fret_span(shape: str) -> Tuple[int, int]:
    """Lowest and highest fretted position of a shape's open major chord."""
    frets = [f for f in CHORD_MAJ[shape] if f is not None]
    return min(frets), max(frets)


def shape_shift(shape: str, key: int = 0) -> int:
    """Frets to move a shape's open chord so its root becomes ``key``."""
    return (key - SHAPE_ROOT_SEMI[shape] + 12) % 12


def effective_key(key_index: int, minor: bool = False) -> int:
    """The key used for note placement; a minor key uses its relative major's row."""
    key_index %= 12
    return (key_index + RELATIVE_MINOR_OFFSET) % 12 if minor else key_index


def note_name(interval: str, key: int) -> str:
    """Name the pitch an interval lands on in a key.

    Examples:
        >>> note_name("R", 0)
        'C'
        >>> note_name("♭3", 9)
        'C'
    """
    return NOTES[(key + INTERVAL_SEMITONES[interval]) % 12]


def key_index(name: str) -> int:
    """Parse a key name ('F#', 'Bb', 'e') or a number ('7') into 0..11.

    Raises:
        ValueError: If the name is not a recognised pitch class
    """
    text = str(name).strip()
    if text.lstrip("-").isdigit():
        return int(text) % 12
    if text[:1]:
        text = text[0].upper() + text[1:]
    if text in NOTES:
        return NOTES.index(text)
    if text in _KEY_ALIASES:
        return _KEY_ALIASES[text]
    raise ValueError(f"Unknown key: {name!r}")
