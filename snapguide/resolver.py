"""Nearest-candidate snapping, resolved independently per axis."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .alignment import alignment_points
from .config import SnapColors
from .geometry import BoundingBox, Point
from .logging_utils import apply_debug_logging
from .types import AlignmentPoint, Guideline, Orientation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisMatch:
    """Best candidate on one axis.

    ``offset`` is what must be added to the proposed coordinate so that the
    dragged point lands exactly on the candidate coordinate.
    """

    orientation: Orientation
    distance: float
    offset: float
    dragged: AlignmentPoint
    candidate: AlignmentPoint

    @property
    def position(self) -> float:
        return self.candidate.x if self.orientation == "vertical" else self.candidate.y


@dataclass(frozen=True)
class SnapResolution:
    point: Point
    x_match: Optional[AxisMatch] = None
    y_match: Optional[AxisMatch] = None
    guidelines: Tuple[Guideline, ...] = field(default_factory=tuple)

    @property
    def snapped(self) -> bool:
        return self.x_match is not None or self.y_match is not None

    @property
    def snapped_element_ids(self) -> Tuple[str, ...]:
        ids: List[str] = []
        for match in (self.x_match, self.y_match):
            if match is None or match.candidate.element_id is None:
                continue
            if match.candidate.element_id not in ids:
                ids.append(match.candidate.element_id)
        return tuple(ids)


def nearest_on_axis(
    dragged: np.ndarray, candidates: np.ndarray, radius: float
) -> Optional[Tuple[int, int, float]]:
    """Return ``(candidate_index, dragged_index, distance)`` of the closest pair.

    Pairs are scanned candidate-major, so among equal distances the earliest
    candidate in pool order wins (``argmin`` keeps the first minimum).
    Non-finite coordinates never match.
    """

    if candidates.size == 0 or dragged.size == 0:
        return None
    distances = np.abs(candidates[:, None] - dragged[None, :])
    distances = np.where(np.isfinite(distances), distances, np.inf)
    flat_index = int(np.argmin(distances))
    cand_idx, drag_idx = np.unravel_index(flat_index, distances.shape)
    best = float(distances[cand_idx, drag_idx])
    if not np.isfinite(best) or best > radius:
        return None
    return int(cand_idx), int(drag_idx), best


def _guideline(match: AxisMatch, colors: SnapColors) -> Guideline:
    candidate = match.candidate
    prefix = "v" if match.orientation == "vertical" else "h"
    owner = candidate.element_id if candidate.element_id is not None else "grid"
    return Guideline(
        id=f"{prefix}-{candidate.role}-{owner}",
        orientation=match.orientation,
        position=match.position,
        color=colors.grid if candidate.origin == "grid" else colors.guideline,
        visible=True,
        role=candidate.role,
        element_id=candidate.element_id,
    )


def resolve_snap(
    dragged_box: BoundingBox,
    pool: Sequence[AlignmentPoint],
    detection_radius: float,
    colors: Optional[SnapColors] = None,
) -> SnapResolution:
    """Snap ``dragged_box`` (already at its proposed position) against ``pool``.

    X and Y are matched independently and may come from different candidates.
    The returned point is the corrected top-left corner of the box.
    """

    colors = colors or SnapColors()
    proposed = dragged_box.origin
    dragged_points = alignment_points(dragged_box)
    if not pool:
        return SnapResolution(point=proposed)

    drag_xy = np.array([p.point.as_tuple() for p in dragged_points], dtype=float)
    cand_xy = np.array([p.point.as_tuple() for p in pool], dtype=float)

    matches: List[Optional[AxisMatch]] = []
    for axis, orientation in ((0, "vertical"), (1, "horizontal")):
        found = nearest_on_axis(drag_xy[:, axis], cand_xy[:, axis], detection_radius)
        if found is None:
            matches.append(None)
            continue
        cand_idx, drag_idx, distance = found
        offset = float(cand_xy[cand_idx, axis] - drag_xy[drag_idx, axis])
        matches.append(
            AxisMatch(
                orientation=orientation,  # type: ignore[arg-type]
                distance=distance,
                offset=offset,
                dragged=dragged_points[drag_idx],
                candidate=pool[cand_idx],
            )
        )

    x_match, y_match = matches
    dx = x_match.offset if x_match is not None else 0.0
    dy = y_match.offset if y_match is not None else 0.0
    guidelines = tuple(_guideline(m, colors) for m in (x_match, y_match) if m is not None)
    if guidelines:
        logger.debug(
            "Snapped %s -> offset (%.3f, %.3f) via %s",
            proposed,
            dx,
            dy,
            ", ".join(g.id for g in guidelines),
        )
    return SnapResolution(
        point=proposed.translate(dx, dy),
        x_match=x_match,
        y_match=y_match,
        guidelines=guidelines,
    )


__all__ = ["AxisMatch", "SnapResolution", "nearest_on_axis", "resolve_snap"]


apply_debug_logging(globals(), logger=logger)
