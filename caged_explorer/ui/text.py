"""Plain-text fretboard diagrams for the terminal."""

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..note_types import FretCluster, HoverRegion, Note, PanInstance
from ..scales import NUM_FRETS, NUM_STRINGS, note_name

STRING_NAMES = {6: "E", 5: "A", 4: "D", 3: "G", 2: "B", 1: "e"}

CELL_WIDTH = 4


def interval_label(note: Note) -> str:
    return note.interval


def note_label(key: int) -> Callable[[Note], str]:
    """Label notes by pitch name in ``key``."""
    return lambda note: note_name(note.interval, key)


def render_fretboard(
    notes: Iterable[Note],
    num_frets: int = NUM_FRETS,
    label: Optional[Callable[[Note], str]] = None,
) -> str:
    """Draw notes on six string rows, string 1 on top and the nut on the left."""
    label = label or interval_label
    cells: Dict[int, Dict[int, str]] = {s: {} for s in range(1, NUM_STRINGS + 1)}
    for note in notes:
        if 0 <= note.fret <= num_frets:
            cells[note.string][note.fret] = label(note)

    header = "   " + "".join(str(f).center(CELL_WIDTH) for f in range(num_frets + 1))
    lines = [header]
    for string in range(1, NUM_STRINGS + 1):
        row = []
        for fret in range(num_frets + 1):
            text = cells[string].get(fret)
            fill = " " if fret == 0 else "-"
            row.append((text or fill).center(CELL_WIDTH, fill))
        lines.append(f"{STRING_NAMES[string]} |" + "|".join(row) + "|")
    return "\n".join(lines)


def render_ranges(shape_ranges: Dict[str, List[FretCluster]], shape_order: Sequence[str]) -> str:
    lines = []
    for shape in shape_order:
        parts = [
            f"{c.lo}-{c.hi}{' (partial)' if c.partial else ''}"
            for c in shape_ranges.get(shape, [])
        ]
        lines.append(f"{shape}: {', '.join(parts) or '-'}")
    return "\n".join(lines)


def render_hover(regions: Iterable[HoverRegion]) -> str:
    return "\n".join(
        f"{r.shape}[{r.ci}] frets {r.lo}-{r.hi}: hover {r.hover_lo:g} to {r.hover_hi:g}"
        for r in regions
    )


def describe_pan(pan: PanInstance) -> str:
    lower, upper = pan.pair
    return (
        f"{pan.handle_dir:>5} pan on strings {lower}/{upper}, frets {pan.pan_min}-{pan.pan_max}, "
        f"handle on string {pan.handle_string} at fret {pan.handle_fret}"
    )


def chord_tone_label(chord_tones: Set[Tuple[int, int]]) -> Callable[[Note], str]:
    """Interval labels, bracketed where a position is a chord tone."""

    def label(note: Note) -> str:
        if (note.string, note.fret) in chord_tones:
            return f"[{note.interval}]"
        return note.interval

    return label
