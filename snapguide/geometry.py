"""Plain 2-D value types shared by every stage of the snapping pipeline.

Bounding boxes are axis aligned and always derived fresh from the host's shape
data; nothing in this module caches geometry between movement ticks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class Point:
    """Immutable canvas coordinate."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def translate(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box with its origin at the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        width = float(self.width)
        height = float(self.height)
        if not (math.isfinite(float(self.x)) and math.isfinite(float(self.y))):
            raise ValueError(f"bounding box origin must be finite (got {self.x}, {self.y})")
        if not (math.isfinite(width) and math.isfinite(height)):
            raise ValueError("bounding box size must be finite")
        if width < 0 or height < 0:
            raise ValueError(f"bounding box size must be non-negative (got {width}x{height})")
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    def moved_to(self, point: Point) -> "BoundingBox":
        """Return the same-sized box with its top-left corner at ``point``."""

        return BoundingBox(point.x, point.y, self.width, self.height)

    def translate(self, dx: float, dy: float) -> "BoundingBox":
        return BoundingBox(self.x + dx, self.y + dy, self.width, self.height)

    @classmethod
    def from_extents(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> "BoundingBox":
        return cls(min_x, min_y, max_x - min_x, max_y - min_y)


def union_boxes(boxes: Iterable[Optional[BoundingBox]]) -> Optional[BoundingBox]:
    """Return the smallest box enclosing every non-``None`` box, or ``None``."""

    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for box in boxes:
        if box is None:
            continue
        min_x = min(min_x, box.left)
        min_y = min(min_y, box.top)
        max_x = max(max_x, box.right)
        max_y = max(max_y, box.bottom)
    if min_x == math.inf:
        return None
    return BoundingBox.from_extents(min_x, min_y, max_x, max_y)


def bounds_of_points(points: Iterable[Tuple[float, float]]) -> Optional[BoundingBox]:
    """Return the box spanned by raw ``(x, y)`` pairs, ``None`` when empty."""

    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for x, y in points:
        min_x = min(min_x, float(x))
        min_y = min(min_y, float(y))
        max_x = max(max_x, float(x))
        max_y = max(max_y, float(y))
    if min_x == math.inf:
        return None
    return BoundingBox.from_extents(min_x, min_y, max_x, max_y)


__all__ = ["Point", "BoundingBox", "union_boxes", "bounds_of_points"]
