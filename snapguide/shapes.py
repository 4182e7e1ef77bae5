"""Geometry lookup for heterogeneous element kinds.

The engine only depends on :class:`GeometrySource`. :class:`ShapeStore` is a
small in-memory implementation where every element kind computes its own
bounding box, which is what the editor host, the CLI and the tests use.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Set, Tuple, Union, runtime_checkable

from .geometry import BoundingBox, Point, bounds_of_points, union_boxes
from .types import ElementId, ElementKind, ElementRef

logger = logging.getLogger(__name__)

ShapeKey = Tuple[ElementKind, ElementId]

DEFAULT_FONT_SIZE = 16.0
DEFAULT_USE_SIZE = 100.0


@runtime_checkable
class GeometrySource(Protocol):
    """What the engine needs from the host's shape store."""

    def list_elements(self) -> Sequence[ElementRef]:
        ...

    def get_bounding_box(self, element_id: ElementId, kind: ElementKind) -> Optional[BoundingBox]:
        ...

    def visible_region(self) -> Optional[BoundingBox]:
        ...


@dataclass(frozen=True)
class PathCommand:
    """One path command; control points only exist on curve commands."""

    x: Optional[float] = None
    y: Optional[float] = None
    x1: Optional[float] = None
    y1: Optional[float] = None
    x2: Optional[float] = None
    y2: Optional[float] = None

    def coordinates(self) -> List[Tuple[float, float]]:
        if self.x is None or self.y is None:
            return []
        coords = [(self.x, self.y)]
        if self.x1 is not None and self.y1 is not None:
            coords.append((self.x1, self.y1))
        if self.x2 is not None and self.y2 is not None:
            coords.append((self.x2, self.y2))
        return coords

    def translated(self, dx: float, dy: float) -> "PathCommand":
        def shift(value: Optional[float], delta: float) -> Optional[float]:
            return None if value is None else value + delta

        return PathCommand(
            shift(self.x, dx),
            shift(self.y, dy),
            shift(self.x1, dx),
            shift(self.y1, dy),
            shift(self.x2, dx),
            shift(self.y2, dy),
        )


@dataclass
class Shape:
    id: ElementId
    locked: bool = False

    kind = "shape"

    def bounds(self, store: "ShapeStore") -> Optional[BoundingBox]:
        raise NotImplementedError

    def translated(self, dx: float, dy: float) -> "Shape":
        raise NotImplementedError

    @property
    def ref(self) -> ElementRef:
        return ElementRef(self.id, self.kind, self.locked)


@dataclass
class PathShape(Shape):
    commands: List[PathCommand] = field(default_factory=list)

    kind = "path"

    def bounds(self, store: "ShapeStore") -> Optional[BoundingBox]:
        return bounds_of_points(xy for cmd in self.commands for xy in cmd.coordinates())

    def translated(self, dx: float, dy: float) -> "PathShape":
        return dataclasses.replace(self, commands=[cmd.translated(dx, dy) for cmd in self.commands])


@dataclass
class TextShape(Shape):
    """Text anchored at its baseline; the box is estimated from the font size."""

    x: float = 0.0
    y: float = 0.0
    content: Union[str, Sequence[str]] = ""
    font_size: float = DEFAULT_FONT_SIZE

    kind = "text"

    def lines(self) -> List[str]:
        if isinstance(self.content, str):
            return [self.content]
        return list(self.content)

    def bounds(self, store: "ShapeStore") -> Optional[BoundingBox]:
        size = self.font_size or DEFAULT_FONT_SIZE
        if not math.isfinite(size) or size < 0:
            logger.debug("Text %s has unusable font size %r", self.id, self.font_size)
            return None
        lines = self.lines()
        width = max((len(line) for line in lines), default=0) * size * 0.6
        height = max(len(lines), 1) * size * 1.2
        return BoundingBox(self.x, self.y - height * 0.8, width, height)

    def translated(self, dx: float, dy: float) -> "TextShape":
        return dataclasses.replace(self, x=self.x + dx, y=self.y + dy)


@dataclass
class ImageShape(Shape):
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    kind = "image"

    def bounds(self, store: "ShapeStore") -> Optional[BoundingBox]:
        return BoundingBox(self.x, self.y, self.width, self.height)

    def translated(self, dx: float, dy: float) -> "ImageShape":
        return dataclasses.replace(self, x=self.x + dx, y=self.y + dy)


@dataclass
class UseShape(Shape):
    """Symbol instance; missing placement falls back to the origin and a 100x100 box."""

    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    kind = "use"

    def bounds(self, store: "ShapeStore") -> Optional[BoundingBox]:
        return BoundingBox(
            self.x or 0.0,
            self.y or 0.0,
            self.width or DEFAULT_USE_SIZE,
            self.height or DEFAULT_USE_SIZE,
        )

    def translated(self, dx: float, dy: float) -> "UseShape":
        return dataclasses.replace(self, x=(self.x or 0.0) + dx, y=(self.y or 0.0) + dy)


@dataclass
class GroupShape(Shape):
    children: List[ShapeKey] = field(default_factory=list)

    kind = "group"

    def bounds(self, store: "ShapeStore") -> Optional[BoundingBox]:
        return store._group_bounds(self, set())

    def translated(self, dx: float, dy: float) -> "GroupShape":
        # children carry their own coordinates; ShapeStore.move_by shifts them
        return self


class ShapeStore:
    """Insertion-ordered in-memory shape collection implementing :class:`GeometrySource`."""

    def __init__(self, shapes: Iterable[Shape] = (), viewport: Optional[BoundingBox] = None):
        self._shapes: Dict[ShapeKey, Shape] = {}
        self.viewport = viewport
        for shape in shapes:
            self.add(shape)

    def __len__(self) -> int:
        return len(self._shapes)

    def __contains__(self, key: object) -> bool:
        return key in self._shapes

    def add(self, shape: Shape) -> Shape:
        key = (shape.kind, shape.id)
        if key in self._shapes:
            raise ValueError(f"duplicate {shape.kind} element {shape.id!r}")
        self._shapes[key] = shape
        return shape

    def remove(self, element_id: ElementId, kind: ElementKind) -> None:
        self._shapes.pop((kind, element_id), None)

    def get(self, element_id: ElementId, kind: ElementKind) -> Optional[Shape]:
        return self._shapes.get((kind, element_id))

    def set_locked(self, element_id: ElementId, kind: ElementKind, locked: bool = True) -> None:
        shape = self._shapes[(kind, element_id)]
        shape.locked = locked

    def list_elements(self) -> List[ElementRef]:
        return [shape.ref for shape in self._shapes.values()]

    def get_bounding_box(self, element_id: ElementId, kind: ElementKind) -> Optional[BoundingBox]:
        shape = self._shapes.get((kind, element_id))
        if shape is None:
            return None
        try:
            return shape.bounds(self)
        except ValueError as exc:
            logger.warning("Ignoring geometry of %s %s: %s", kind, element_id, exc)
            return None

    def visible_region(self) -> Optional[BoundingBox]:
        return self.viewport

    def move_to(self, element_id: ElementId, kind: ElementKind, point: Point) -> None:
        """Translate an element so that its bounding box starts at ``point``."""

        box = self.get_bounding_box(element_id, kind)
        if box is None:
            logger.debug("Cannot move %s %s without geometry", kind, element_id)
            return
        self.move_by(element_id, kind, point.x - box.x, point.y - box.y)

    def move_by(self, element_id: ElementId, kind: ElementKind, dx: float, dy: float) -> None:
        self._move_by((kind, element_id), dx, dy, set())

    def _move_by(self, key: ShapeKey, dx: float, dy: float, seen: Set[ShapeKey]) -> None:
        if key in seen or key not in self._shapes:
            return
        seen.add(key)
        shape = self._shapes[key]
        if isinstance(shape, GroupShape):
            for child_kind, child_id in shape.children:
                self._move_by((child_kind, child_id), dx, dy, seen)
            return
        self._shapes[key] = shape.translated(dx, dy)

    def _group_bounds(self, group: GroupShape, seen: Set[ShapeKey]) -> Optional[BoundingBox]:
        key = (group.kind, group.id)
        if key in seen:
            logger.warning("Group %s contains itself; ignoring the cycle", group.id)
            return None
        seen = seen | {key}
        boxes: List[Optional[BoundingBox]] = []
        for child_kind, child_id in group.children:
            child = self._shapes.get((child_kind, child_id))
            if child is None:
                continue
            if isinstance(child, GroupShape):
                boxes.append(self._group_bounds(child, seen))
            else:
                boxes.append(child.bounds(self))
        return union_boxes(boxes)


__all__ = [
    "GeometrySource",
    "PathCommand",
    "Shape",
    "PathShape",
    "TextShape",
    "ImageShape",
    "UseShape",
    "GroupShape",
    "ShapeStore",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_USE_SIZE",
]
