"""Engine façade driving one snapping tick per host movement event."""

from __future__ import annotations

import copy
import logging
import math
import time
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .alignment import projection_lines
from .candidates import build_candidate_pool, static_elements
from .config import SnappingConfig, config_to_dict, merge_config
from .geometry import BoundingBox, Point, union_boxes
from .patterns import PatternResult, analyze_patterns
from .resolver import SnapResolution, resolve_snap
from .shapes import GeometrySource
from .state import ActiveSnapState, SnapListener, Unsubscribe
from .types import ActiveSnap, DebugProjection, ElementId, ElementKind

logger = logging.getLogger(__name__)

PointLike = Union[Point, Tuple[float, float], Sequence[float]]
Clock = Callable[[], float]

SELECTION_ID = "selection"


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(x, y)


class GuidelineEngine:
    """Alignment and equal-spacing snapping for one editor document.

    The host constructs the engine with its geometry source, calls
    :meth:`resolve` on every movement tick and applies the returned point.
    Renderers subscribe to receive the current :class:`ActiveSnap` (or
    ``None``). The engine is not reentrant; ticks must be serialised by the
    caller.
    """

    def __init__(
        self,
        source: GeometrySource,
        config: Optional[Union[SnappingConfig, Mapping[str, Any]]] = None,
        *,
        clock: Clock = monotonic_ms,
    ) -> None:
        self._source = source
        self._clock = clock
        self._state = ActiveSnapState()
        if config is None:
            self._config = SnappingConfig()
        elif isinstance(config, SnappingConfig):
            self._config = merge_config(SnappingConfig(), config_to_dict(config))
        else:
            self._config = merge_config(SnappingConfig(), config)
        logger.info(
            "Guideline engine ready (radius=%s, grid=%s, distance guides=%s)",
            self._config.detection_radius,
            self._config.show_grid_guides,
            self._config.show_distance_guides,
        )

    # -- configuration -------------------------------------------------

    def get_config(self) -> SnappingConfig:
        return copy.deepcopy(self._config)

    def update_config(self, updates: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> SnappingConfig:
        """Merge ``updates`` into the config; invalid values are clamped or ignored."""

        merged_updates = dict(updates or {})
        merged_updates.update(kwargs)
        self._config = merge_config(self._config, merged_updates)
        logger.info("Snapping config updated: %s", sorted(merged_updates))
        if not self._config.enabled:
            self._state.clear()
        return self.get_config()

    # -- listeners and state -------------------------------------------

    def subscribe(self, listener: SnapListener) -> Unsubscribe:
        return self._state.subscribe(listener)

    @property
    def active_snap(self) -> Optional[ActiveSnap]:
        return self._state.current

    def current_snap(self, now: Optional[float] = None) -> Optional[ActiveSnap]:
        """The active snap unless it is older than ``snap_duration``.

        Expiry is advisory: an expired snap is hidden here but stays in the
        slot until the next tick or :meth:`end_operation`.
        """

        snap = self._state.current
        if snap is None:
            return None
        now = self._clock() if now is None else now
        if snap.is_expired(now, self._config.snap_duration):
            return None
        return snap

    def end_operation(self) -> None:
        """Drag released: drop any guides and go idle."""

        if self._state.clear():
            logger.info("Snap operation ended")

    # -- resolution ----------------------------------------------------

    def resolve(self, element_id: ElementId, kind: ElementKind, proposed: PointLike) -> Point:
        """Return the corrected top-left position for the dragged element."""

        point = as_point(proposed)
        box = self._source.get_bounding_box(element_id, kind)
        if box is None:
            logger.debug("No geometry for dragged %s %s; not snapping", kind, element_id)
            self._state.clear()
            return point
        return self._resolve_box(box, element_id, [(element_id, kind)], point)

    def resolve_selection(
        self, elements: Iterable[Tuple[ElementId, ElementKind]], proposed: PointLike
    ) -> Point:
        """Snap the union box of several elements moved together.

        ``proposed`` is the new top-left corner of the union box.
        """

        point = as_point(proposed)
        members = list(elements)
        box = union_boxes(self._source.get_bounding_box(eid, kind) for eid, kind in members)
        if box is None:
            logger.debug("Selection of %d element(s) has no geometry; not snapping", len(members))
            self._state.clear()
            return point
        if len(members) == 1:
            return self._resolve_box(box, members[0][0], members, point)
        return self._resolve_box(box, SELECTION_ID, members, point)

    def _resolve_box(
        self,
        box: BoundingBox,
        dragged_id: str,
        exclude: Sequence[Tuple[ElementId, ElementKind]],
        proposed: Point,
    ) -> Point:
        config = self._config
        if not config.enabled:
            self._state.clear()
            return proposed
        if not (math.isfinite(proposed.x) and math.isfinite(proposed.y)):
            logger.warning("Ignoring non-finite proposed position %s for %s", proposed, dragged_id)
            self._state.clear()
            return proposed

        moved = box.moved_to(proposed)
        statics = static_elements(self._source, exclude)
        pool = build_candidate_pool(self._source, exclude, config, statics=statics)
        resolution: SnapResolution = resolve_snap(
            moved, pool, config.detection_radius, config.colors
        )
        patterns = PatternResult()
        if config.show_distance_guides:
            patterns = analyze_patterns(
                moved, dragged_id, statics, config.distance_tolerance, config.colors
            )

        if not (resolution.guidelines or patterns.distance_guidelines):
            self._state.clear()
            return proposed

        self._state.publish(
            ActiveSnap(
                guidelines=resolution.guidelines,
                distance_guidelines=patterns.distance_guidelines,
                distance_markers=patterns.distance_markers,
                snap_point=resolution.point,
                target_point=proposed,
                timestamp=self._clock(),
                snapped_element_ids=resolution.snapped_element_ids,
            )
        )
        return resolution.point

    # -- debugging -----------------------------------------------------

    def debug_projections(
        self,
        dragged: Optional[Tuple[ElementId, ElementKind, PointLike]] = None,
    ) -> List[DebugProjection]:
        """Projection lines of every unlocked element, plus the dragged box when given."""

        exclude: List[Tuple[ElementId, ElementKind]] = []
        projections: List[DebugProjection] = []
        if dragged is not None:
            element_id, kind, proposed = dragged
            exclude.append((element_id, kind))
            box = self._source.get_bounding_box(element_id, kind)
            if box is not None:
                moved = box.moved_to(as_point(proposed))
                projections.extend(projection_lines(moved, element_id, is_moving=True))
        for ref, box in static_elements(self._source, exclude):
            projections.extend(projection_lines(box, ref.id))
        return projections


__all__ = ["GuidelineEngine", "SELECTION_ID", "monotonic_ms", "as_point"]
