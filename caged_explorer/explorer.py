"""Derived fretboard contents for a set of explorer settings."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from .clusters import (
    BLUES_MARGIN,
    DEFAULT_GAP_THRESHOLD,
    PARTIAL_RATIO,
    bound_to_clusters,
    cluster_frets,
    compute_hover_ranges,
)
from .fretboard import pos_key, shift_notes
from .frying_pan import pans_covering, visible_pans
from .logger import get_logger
from .note_types import FretCluster, HoverRegion, Note, PanInstance
from .reference import blues_shape, build_shape_ranges, penta_box, triad_shape
from .scales import NUM_FRETS, SHAPE_ORDER, SHAPE_ORIENTATION, check_quality, effective_key

# Get logger for this module
logger = get_logger(__name__)

SCALE_MODES = ("off", "penta", "blues")
SHAPE_CHOICES = SHAPE_ORDER + ("all", "off")


@dataclass(frozen=True)
class ExplorerSettings:
    """What the learner has selected."""

    key_index: int = 0  # Major key, or the row of the key grid for a minor key
    minor_key: bool = False
    active_shape: str = "C"  # A shape, 'all' or 'off'
    show_triads: bool = True
    triad_quality: str = "major"
    scale_mode: str = "off"  # 'off', 'penta' or 'blues'
    penta_quality: str = "major"
    show_frying_pan: bool = False

    def validate(self) -> "ExplorerSettings":
        """Check every field, raising ValueError on the first bad one."""
        if self.active_shape not in SHAPE_CHOICES:
            raise ValueError(f"Unknown shape: {self.active_shape!r}")
        if self.scale_mode not in SCALE_MODES:
            raise ValueError(f"Unknown scale mode: {self.scale_mode!r}")
        check_quality(self.triad_quality)
        check_quality(self.penta_quality)
        return self


class FretboardView:
    """Everything the fretboard diagram draws for one set of settings.

    All values are computed from the settings alone; a new view is built
    whenever the settings change. The keyword arguments mirror the
    ``fretboard`` configuration section.
    """

    def __init__(
        self,
        settings: ExplorerSettings,
        num_frets: int = NUM_FRETS,
        gap_threshold: int = DEFAULT_GAP_THRESHOLD,
        partial_ratio: float = PARTIAL_RATIO,
        blues_margin: int = BLUES_MARGIN,
    ):
        self.settings = settings.validate()
        self.num_frets = num_frets
        self.gap_threshold = gap_threshold
        self.partial_ratio = partial_ratio
        self.blues_margin = blues_margin

    @property
    def effective_key(self) -> int:
        return effective_key(self.settings.key_index, self.settings.minor_key)

    @property
    def visible_shapes(self) -> Tuple[str, ...]:
        if self.settings.active_shape in ("all", "off"):
            return SHAPE_ORDER
        return (self.settings.active_shape,)

    @property
    def show_pentatonic(self) -> bool:
        return self.settings.scale_mode != "off"

    def _shifted(self, table: Dict[str, Tuple[Note, ...]]) -> Dict[str, List[Note]]:
        return {
            shape: shift_notes(table[shape], self.effective_key, self.num_frets)
            for shape in self.visible_shapes
        }

    def triad_notes(self) -> Dict[str, List[Note]]:
        """Triad tones per visible shape, or nothing when triads are hidden."""
        if not self.settings.show_triads:
            return {}
        return self._shifted(triad_shape(self.settings.triad_quality))

    def penta_notes_by_shape(self, quality: Optional[str] = None) -> Dict[str, List[Note]]:
        return self._shifted(penta_box(quality or self.settings.penta_quality))

    def blues_notes_by_shape(self) -> Dict[str, List[Note]]:
        if self.settings.scale_mode != "blues":
            return {}
        return self._shifted(blues_shape(self.settings.penta_quality))

    def triad_positions(self) -> Set[Tuple[int, int]]:
        return {
            pos_key(n.string, n.fret)
            for notes in self.triad_notes().values()
            for n in notes
        }

    def pentatonic_notes(self) -> List[Note]:
        """Scale tones to draw as small dots.

        Positions already drawn as triad tones are skipped. In blues mode each
        shape's blue notes are kept only next to that shape's own pentatonic
        clusters, so a blue note never shows up an octave away from its box.
        """
        if not self.show_pentatonic:
            return []
        taken = self.triad_positions()
        penta = self.penta_notes_by_shape()
        blues = self.blues_notes_by_shape()

        seen: Set[Tuple[int, int]] = set()
        out = []

        def add(note: Note) -> None:
            key = pos_key(note.string, note.fret)
            if key not in seen and key not in taken:
                seen.add(key)
                out.append(note)

        for shape in self.visible_shapes:
            for note in penta[shape]:
                add(note)
            if blues:
                clusters = cluster_frets((n.fret for n in penta[shape]), self.gap_threshold)
                for note in bound_to_clusters(blues[shape], clusters, self.blues_margin):
                    add(note)
        return out

    def range_qualities(self) -> List[str]:
        """Qualities whose notes bound the shape ranges, triad quality first."""
        qualities = [self.settings.triad_quality]
        if self.settings.penta_quality not in qualities:
            qualities.append(self.settings.penta_quality)
        return qualities

    def shape_ranges(self) -> Dict[str, List[FretCluster]]:
        """Clusters per shape for labels and background highlights.

        Blue notes are left out because they bridge the gap between octaves.
        """
        return build_shape_ranges(
            self.effective_key,
            self.range_qualities(),
            triads=self.settings.show_triads,
            pentatonic=self.show_pentatonic,
            max_fret=self.num_frets,
            gap_threshold=self.gap_threshold,
            partial_ratio=self.partial_ratio,
        )

    def hover_ranges(self) -> List[HoverRegion]:
        return compute_hover_ranges(self.shape_ranges(), SHAPE_ORDER)

    def frying_pans(self) -> List[PanInstance]:
        """Pans to overlay; only offered when every shape is shown.

        Pans follow the selected key row rather than the effective key, since
        minor pentatonic boxes sit three semitones from their relative major.
        """
        if not self.settings.show_frying_pan or self.settings.active_shape != "all":
            return []
        return visible_pans(self.settings.key_index, max_fret=self.num_frets)

    def pans_for_shape(self, shape: str, aligned: bool = False) -> List[PanInstance]:
        """Pans holding at least one pentatonic note of a shape, either quality.

        With ``aligned`` only pans whose handle points the shape's own way are
        considered (C, A and G toward the bridge, E and D toward the nut).
        """
        directions = [SHAPE_ORIENTATION[shape]] if aligned else None
        pans = visible_pans(self.settings.key_index, directions, self.num_frets)
        notes = []
        for quality in ("major", "minor"):
            notes.extend(
                shift_notes(penta_box(quality)[shape], self.effective_key, self.num_frets)
            )
        kept = pans_covering(pans, notes)
        logger.debug(f"{len(kept)} of {len(pans)} pans touch shape {shape}")
        return kept
