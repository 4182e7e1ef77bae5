"""Equal-spacing detection.

For each axis the static elements are ordered by their leading edge and the
dragged box is tried at every insertion index, lowest first. A trial is
accepted when its gaps contain a repeating distance (at least two gaps agree
within the tolerance) and the gaps adjacent to the dragged box follow that
distance. Only the first accepted trial per axis is reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.cluster.hierarchy import fcluster, linkage

from .config import SnapColors
from .geometry import BoundingBox
from .logging_utils import apply_debug_logging
from .types import DistanceGuideline, DistanceMarker, ElementRef, Orientation

logger = logging.getLogger(__name__)

MIN_MATCHING_GAPS = 2


@dataclass(frozen=True)
class _Slot:
    element_id: str
    box: BoundingBox
    is_dragged: bool = False


@dataclass(frozen=True)
class AxisPattern:
    orientation: Orientation
    insertion_index: int
    pattern_distance: float
    gaps: Tuple[float, ...]
    guidelines: Tuple[DistanceGuideline, ...]
    markers: Tuple[DistanceMarker, ...]

    @property
    def pending(self) -> Tuple[DistanceGuideline, ...]:
        return tuple(g for g in self.guidelines if g.is_pending)


@dataclass(frozen=True)
class PatternResult:
    horizontal: Optional[AxisPattern] = None
    vertical: Optional[AxisPattern] = None

    @property
    def patterns(self) -> Tuple[AxisPattern, ...]:
        return tuple(p for p in (self.horizontal, self.vertical) if p is not None)

    @property
    def distance_guidelines(self) -> Tuple[DistanceGuideline, ...]:
        return tuple(g for p in self.patterns for g in p.guidelines)

    @property
    def distance_markers(self) -> Tuple[DistanceMarker, ...]:
        return tuple(m for p in self.patterns for m in p.markers)


def cluster_gaps(gaps: Sequence[float], tolerance: float) -> List[List[int]]:
    """Group gap indices whose values chain together within ``tolerance``.

    Single-linkage clustering: two gaps share a cluster when a chain of gaps,
    each within ``tolerance`` of the next, connects them. Clusters are ordered
    by their first member.
    """

    if len(gaps) == 0:
        return []
    if len(gaps) == 1:
        return [[0]]
    values = np.asarray(gaps, dtype=float).reshape(-1, 1)
    labels = fcluster(linkage(values, method="single"), t=tolerance, criterion="distance")
    clusters: Dict[int, List[int]] = {}
    for idx, label in enumerate(labels.tolist()):
        clusters.setdefault(label, []).append(idx)
    return sorted(clusters.values(), key=lambda members: members[0])


def pattern_distance(gaps: Sequence[float], tolerance: float) -> Optional[float]:
    """Average of the largest gap cluster; the earliest cluster wins ties."""

    best: Optional[List[int]] = None
    for members in cluster_gaps(gaps, tolerance):
        if best is None or len(members) > len(best):
            best = members
    if best is None:
        return None
    return float(np.mean([gaps[i] for i in best]))


def _extent(box: BoundingBox, orientation: Orientation) -> Tuple[float, float]:
    if orientation == "horizontal":
        return box.left, box.right
    return box.top, box.bottom


def _cross_center(box: BoundingBox, orientation: Orientation) -> float:
    return box.center.y if orientation == "horizontal" else box.center.x


def sequence_gaps(boxes: Sequence[BoundingBox], orientation: Orientation) -> List[float]:
    """Trailing-to-leading gaps between consecutive boxes, overlaps clamped to 0."""

    gaps: List[float] = []
    for current, nxt in zip(boxes, boxes[1:]):
        gaps.append(max(0.0, _extent(nxt, orientation)[0] - _extent(current, orientation)[1]))
    return gaps


def _emit(
    orientation: Orientation,
    sequence: Sequence[_Slot],
    gaps: Sequence[float],
    matching: Sequence[int],
    colors: SnapColors,
) -> Tuple[Tuple[DistanceGuideline, ...], Tuple[DistanceMarker, ...]]:
    tag = "x" if orientation == "horizontal" else "y"
    guidelines: List[DistanceGuideline] = []
    markers: List[DistanceMarker] = []
    for idx in matching:
        first, second = sequence[idx], sequence[idx + 1]
        start = _extent(first.box, orientation)[1]
        end = max(start, _extent(second.box, orientation)[0])
        pending = first.is_dragged or second.is_dragged
        guide = DistanceGuideline(
            id=f"d{tag}-{idx}",
            orientation=orientation,
            start=start,
            end=end,
            distance=gaps[idx],
            involved_element_ids=(first.element_id, second.element_id),
            is_pending=pending,
            offset=(_cross_center(first.box, orientation) + _cross_center(second.box, orientation)) / 2,
            color=colors.pending_distance if pending else colors.distance,
        )
        guidelines.append(guide)
        markers.append(
            DistanceMarker(
                id=f"m{tag}-{idx}",
                position=guide.midpoint,
                distance_value=gaps[idx],
                is_pending=pending,
            )
        )
    return tuple(guidelines), tuple(markers)


def analyze_axis(
    dragged_box: BoundingBox,
    dragged_id: str,
    statics: Sequence[Tuple[ElementRef, BoundingBox]],
    orientation: Orientation,
    tolerance: float,
    colors: Optional[SnapColors] = None,
) -> Optional[AxisPattern]:
    colors = colors or SnapColors()
    ordered = sorted(
        (_Slot(ref.id, box) for ref, box in statics),
        key=lambda slot: _extent(slot.box, orientation)[0],
    )
    count = len(ordered)
    if count < MIN_MATCHING_GAPS:
        return None
    dragged = _Slot(dragged_id, dragged_box, is_dragged=True)

    for index in range(count + 1):
        sequence = ordered[:index] + [dragged] + ordered[index:]
        gaps = sequence_gaps([slot.box for slot in sequence], orientation)
        distance = pattern_distance(gaps, tolerance)
        # touching or overlapping neighbours are not a rhythm
        if distance is None or distance <= 0:
            continue
        matching = [i for i, gap in enumerate(gaps) if abs(gap - distance) <= tolerance]
        if len(matching) < MIN_MATCHING_GAPS:
            continue
        adjacent = [i for i in (index - 1, index) if 0 <= i < len(gaps)]
        if any(i not in matching for i in adjacent):
            continue
        guidelines, markers = _emit(orientation, sequence, gaps, matching, colors)
        logger.debug(
            "%s spacing pattern %.3f at insertion index %d (%d gaps)",
            orientation,
            distance,
            index,
            len(matching),
        )
        return AxisPattern(
            orientation=orientation,
            insertion_index=index,
            pattern_distance=distance,
            gaps=tuple(gaps),
            guidelines=guidelines,
            markers=markers,
        )
    return None


def analyze_patterns(
    dragged_box: BoundingBox,
    dragged_id: str,
    statics: Sequence[Tuple[ElementRef, BoundingBox]],
    tolerance: float,
    colors: Optional[SnapColors] = None,
) -> PatternResult:
    """Run the equal-spacing search on both axes."""

    return PatternResult(
        horizontal=analyze_axis(dragged_box, dragged_id, statics, "horizontal", tolerance, colors),
        vertical=analyze_axis(dragged_box, dragged_id, statics, "vertical", tolerance, colors),
    )


__all__ = [
    "MIN_MATCHING_GAPS",
    "AxisPattern",
    "PatternResult",
    "cluster_gaps",
    "pattern_distance",
    "sequence_gaps",
    "analyze_axis",
    "analyze_patterns",
]


apply_debug_logging(globals(), logger=logger)
