"""Fret clustering, partial-cluster detection and hover regions."""

from typing import Dict, Iterable, List, Sequence

import numpy as np

from .logger import get_logger
from .note_types import FretCluster, HoverRegion, Note

# Get logger for this module
logger = get_logger(__name__)

# No single shape spans more than ~5 frets, while octave repeats sit >= 7 apart
DEFAULT_GAP_THRESHOLD = 6

# Clusters narrower than this share of the reference span are neck-edge fragments
PARTIAL_RATIO = 0.7

# Blue notes may sit this many frets outside their shape's clusters
BLUES_MARGIN = 1


def cluster_frets(
    frets: Iterable[int], gap_threshold: int = DEFAULT_GAP_THRESHOLD
) -> List[FretCluster]:
    """Group fret numbers into contiguous ranges.

    A new cluster starts wherever two consecutive sorted frets are more than
    ``gap_threshold`` apart.

    Examples:
        >>> cluster_frets([1, 3, 15, 17])
        [FretCluster(lo=1, hi=3, partial=False), FretCluster(lo=15, hi=17, partial=False)]
    """
    values = np.sort(np.fromiter(frets, dtype=int))
    if values.size == 0:
        return []
    breaks = np.flatnonzero(np.diff(values) > gap_threshold) + 1
    return [
        FretCluster(int(chunk[0]), int(chunk[-1])) for chunk in np.split(values, breaks)
    ]


def canonical_span(
    frets: Iterable[int], gap_threshold: int = DEFAULT_GAP_THRESHOLD
) -> int:
    """Span of the first cluster of a shape's reference-key frets (0 if empty)."""
    clusters = cluster_frets(frets, gap_threshold)
    return clusters[0].span if clusters else 0


def classify_clusters(
    frets: Iterable[int],
    canonical: float,
    ratio: float = PARTIAL_RATIO,
    gap_threshold: int = DEFAULT_GAP_THRESHOLD,
) -> List[FretCluster]:
    """Cluster a shape's frets and flag fragments cut off by the neck edges."""
    return [
        FretCluster(c.lo, c.hi, partial=c.span < canonical * ratio)
        for c in cluster_frets(frets, gap_threshold)
    ]


def compute_hover_ranges(
    shape_ranges: Dict[str, List[FretCluster]], shape_order: Sequence[str]
) -> List[HoverRegion]:
    """Tile the full clusters of all shapes into non-overlapping hover regions.

    Regions are ordered by cluster center. Each boundary is the midpoint
    between neighbouring centers; the outermost regions end at their own
    cluster's edges.
    """
    full = [
        (shape, ci, cluster)
        for shape in shape_order
        for ci, cluster in enumerate(shape_ranges.get(shape, []))
        if not cluster.partial
    ]
    full.sort(key=lambda item: item[2].center)

    regions = []
    for i, (shape, ci, cluster) in enumerate(full):
        center = cluster.center
        if i == 0:
            hover_lo = cluster.lo
        else:
            hover_lo = (full[i - 1][2].center + center) / 2
        if i == len(full) - 1:
            hover_hi = cluster.hi
        else:
            hover_hi = (center + full[i + 1][2].center) / 2
        regions.append(
            HoverRegion(shape, ci, cluster.lo, cluster.hi, center, hover_lo, hover_hi)
        )
    return regions


def bound_to_clusters(
    notes: Iterable[Note], clusters: Sequence[FretCluster], margin: int = BLUES_MARGIN
) -> List[Note]:
    """Keep notes lying within ``margin`` frets of any cluster."""
    notes = list(notes)
    kept = [n for n in notes if any(c.contains(n.fret, margin) for c in clusters)]
    if len(kept) < len(notes):
        logger.debug(f"Dropped {len(notes) - len(kept)} notes outside {clusters}")
    return kept


def shape_centroid(notes: Iterable[Note]) -> float:
    """Mean fret of a set of notes (NaN when empty)."""
    frets = [n.fret for n in notes]
    if not frets:
        return float("nan")
    return float(np.mean(frets))
