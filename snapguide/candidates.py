"""Candidate pool assembly from other elements and the grid lattice."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .alignment import alignment_points
from .config import SnappingConfig
from .geometry import BoundingBox, Point
from .shapes import GeometrySource
from .types import AlignmentPoint, ElementId, ElementKind, ElementRef

logger = logging.getLogger(__name__)

MAX_GRID_POINTS = 50_000

ExcludedKey = Tuple[ElementId, ElementKind]


def static_elements(
    source: GeometrySource, exclude: Iterable[ExcludedKey] = ()
) -> List[Tuple[ElementRef, BoundingBox]]:
    """Unlocked, resolvable elements other than ``exclude``, stably ordered by id."""

    excluded: Set[ExcludedKey] = set(exclude)
    refs = sorted(source.list_elements(), key=lambda ref: ref.id)
    result: List[Tuple[ElementRef, BoundingBox]] = []
    for ref in refs:
        if (ref.id, ref.kind) in excluded or ref.locked:
            continue
        box = source.get_bounding_box(ref.id, ref.kind)
        if box is None:
            continue
        result.append((ref, box))
    return result


def _lattice(start: float, stop: float, step: float) -> np.ndarray:
    first = math.floor(start / step)
    last = math.ceil(stop / step)
    return np.arange(first, last + 1, dtype=float) * step


def grid_points(region: BoundingBox, grid_size: float) -> List[AlignmentPoint]:
    """Lattice points at multiples of ``grid_size`` fully covering ``region``."""

    if grid_size <= 0:
        return []
    xs = _lattice(region.left, region.right, grid_size)
    ys = _lattice(region.top, region.bottom, grid_size)
    if xs.size * ys.size > MAX_GRID_POINTS:
        logger.warning(
            "Grid of %dx%d points exceeds %d; skipping grid candidates",
            xs.size,
            ys.size,
            MAX_GRID_POINTS,
        )
        return []
    gx, gy = np.meshgrid(xs, ys)
    return [
        AlignmentPoint(point=Point(x, y), role="grid", origin="grid")
        for x, y in zip(gx.ravel().tolist(), gy.ravel().tolist())
    ]


def build_candidate_pool(
    source: GeometrySource,
    exclude: Iterable[ExcludedKey],
    config: SnappingConfig,
    *,
    statics: Optional[List[Tuple[ElementRef, BoundingBox]]] = None,
) -> List[AlignmentPoint]:
    """Flatten the alignment points of every other element plus optional grid points."""

    if statics is None:
        statics = static_elements(source, exclude)
    pool: List[AlignmentPoint] = []
    if config.show_dynamic_guides:
        for ref, box in statics:
            pool.extend(alignment_points(box, ref.id, ref.kind))
    if config.show_grid_guides:
        region = source.visible_region()
        if region is not None:
            pool.extend(grid_points(region, config.grid_size))
    logger.debug("Candidate pool: %d points from %d elements", len(pool), len(statics))
    return pool


__all__ = ["MAX_GRID_POINTS", "static_elements", "grid_points", "build_candidate_pool"]
