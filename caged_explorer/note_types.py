"""Type definitions for the CAGED Explorer project."""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Note:
    """A scale tone placed on the fretboard, labelled by its interval."""

    string: int  # 1 is the highest-pitched string
    fret: int  # 0 for the open string
    interval: str  # Scale degree relative to the key (e.g., 'R', '♭3', '5')

    def shifted(self, frets: int) -> "Note":
        return Note(self.string, self.fret + frets, self.interval)


@dataclass(frozen=True)
class ScaleDegree:
    """One entry of a scale degree set."""

    semi: int  # Semitones above the root
    interval: str


@dataclass(frozen=True)
class FretCluster:
    """A contiguous, inclusive range of frets.

    ``partial`` is set when the cluster is a boundary-clipped fragment of a
    shape rather than a complete occurrence of it.
    """

    lo: int
    hi: int
    partial: bool = False

    @property
    def span(self) -> int:
        return self.hi - self.lo

    @property
    def center(self) -> float:
        return (self.lo + self.hi) / 2

    def contains(self, fret: int, margin: int = 0) -> bool:
        return self.lo - margin <= fret <= self.hi + margin


@dataclass(frozen=True)
class HoverRegion:
    """The interactive area assigned to one full cluster of a shape."""

    shape: str
    ci: int  # Index of the cluster within its shape's cluster list
    lo: int
    hi: int
    center: float
    hover_lo: float
    hover_hi: float


@dataclass(frozen=True)
class PanTemplate:
    """A frying-pan region defined at the reference key (C major / A minor)."""

    pair: Tuple[int, int]  # Adjacent string pair, lower-pitched string first
    pan_min: int
    pan_max: int
    handle_string: int
    handle_fret: int
    handle_dir: str  # 'left' (toward the nut) or 'right' (toward the bridge)

    @property
    def other_string(self) -> int:
        """The string of the pair that does not carry the handle."""
        return self.pair[1] if self.handle_string == self.pair[0] else self.pair[0]


@dataclass(frozen=True)
class PanInstance:
    """A frying-pan template moved to a key by a fret shift."""

    template: PanTemplate
    shift: int

    @property
    def pair(self) -> Tuple[int, int]:
        return self.template.pair

    @property
    def lower_string(self) -> int:
        return self.template.pair[0]

    @property
    def upper_string(self) -> int:
        return self.template.pair[1]

    @property
    def pan_min(self) -> int:
        return self.template.pan_min + self.shift

    @property
    def pan_max(self) -> int:
        return self.template.pan_max + self.shift

    @property
    def handle_string(self) -> int:
        return self.template.handle_string

    @property
    def handle_fret(self) -> int:
        return self.template.handle_fret + self.shift

    @property
    def handle_dir(self) -> str:
        return self.template.handle_dir

    def holds(self, string: int, fret: int) -> bool:
        """Whether a position lies inside the pan body."""
        return string in self.pair and self.pan_min <= fret <= self.pan_max


@dataclass(frozen=True)
class Bar:
    """One bar of a 3:2 decomposition: a fret range on a single string."""

    string: int
    lo: int
    hi: int
    notes: int = field(default=2)  # 3 for the handle-string bar, 2 otherwise
