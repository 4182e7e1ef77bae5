"""Records exchanged between the snapping stages and handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple
from typing import Literal

from .geometry import Point

ElementId = str
ElementKind = str

Orientation = Literal["horizontal", "vertical"]
PointOrigin = Literal["dynamic", "grid"]
AlignmentRole = Literal[
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
    "top-center",
    "bottom-center",
    "left-center",
    "right-center",
    "center",
    "grid",
]
ProjectionKind = Literal["edge", "center", "midpoint"]


@dataclass(frozen=True)
class ElementRef:
    """Identity of one positionable element as listed by the host."""

    id: ElementId
    kind: ElementKind
    locked: bool = False

    def matches(self, element_id: ElementId, kind: ElementKind) -> bool:
        return self.id == element_id and self.kind == kind


@dataclass(frozen=True)
class AlignmentPoint:
    """Snap candidate derived from a bounding box or the grid lattice."""

    point: Point
    role: AlignmentRole
    origin: PointOrigin = "dynamic"
    element_id: Optional[ElementId] = None
    element_kind: Optional[ElementKind] = None

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y


@dataclass(frozen=True)
class Guideline:
    """Straight line marking a single-axis alignment match.

    ``position`` is the shared coordinate: an x value for vertical lines and a
    y value for horizontal ones.
    """

    id: str
    orientation: Orientation
    position: float
    color: str
    visible: bool = True
    role: Optional[AlignmentRole] = None
    element_id: Optional[ElementId] = None


@dataclass(frozen=True)
class DistanceGuideline:
    """One measured gap of a detected equal-spacing sequence.

    ``start`` and ``end`` lie on the measuring axis; ``offset`` is the
    cross-axis coordinate the renderer draws the measuring line at.
    """

    id: str
    orientation: Orientation
    start: float
    end: float
    distance: float
    involved_element_ids: Tuple[ElementId, ...]
    is_pending: bool
    offset: float = 0.0
    color: str = ""

    @property
    def midpoint(self) -> Point:
        middle = (self.start + self.end) / 2
        if self.orientation == "horizontal":
            return Point(middle, self.offset)
        return Point(self.offset, middle)


@dataclass(frozen=True)
class DistanceMarker:
    id: str
    position: Point
    distance_value: float
    is_pending: bool = False


@dataclass(frozen=True)
class DebugProjection:
    id: str
    element_id: ElementId
    orientation: Orientation
    position: float
    projection: ProjectionKind
    is_moving: bool


@dataclass(frozen=True)
class ActiveSnap:
    """Outcome of one movement tick, replaced wholesale on every tick.

    ``snap_point`` is the corrected position handed back to the host and
    ``target_point`` the position it proposed. ``timestamp`` is in
    milliseconds of the engine clock.
    """

    guidelines: Tuple[Guideline, ...]
    distance_guidelines: Tuple[DistanceGuideline, ...]
    distance_markers: Tuple[DistanceMarker, ...]
    snap_point: Point
    target_point: Point
    timestamp: float
    snapped_element_ids: Tuple[ElementId, ...] = field(default_factory=tuple)

    @property
    def has_guides(self) -> bool:
        return bool(self.guidelines or self.distance_guidelines)

    def is_expired(self, now: float, snap_duration: float) -> bool:
        return now - self.timestamp > snap_duration


__all__ = [
    "ElementId",
    "ElementKind",
    "Orientation",
    "PointOrigin",
    "AlignmentRole",
    "ProjectionKind",
    "ElementRef",
    "AlignmentPoint",
    "Guideline",
    "DistanceGuideline",
    "DistanceMarker",
    "DebugProjection",
    "ActiveSnap",
]
