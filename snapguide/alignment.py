"""Canonical alignment points and projection lines of a bounding box."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .geometry import BoundingBox, Point
from .types import AlignmentPoint, AlignmentRole, DebugProjection, ElementId, ElementKind

ALIGNMENT_ROLES: Tuple[AlignmentRole, ...] = (
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
    "top-center",
    "bottom-center",
    "left-center",
    "right-center",
    "center",
)


def alignment_points(
    box: BoundingBox,
    element_id: Optional[ElementId] = None,
    element_kind: Optional[ElementKind] = None,
) -> List[AlignmentPoint]:
    """Return the nine alignment points of ``box`` in ``ALIGNMENT_ROLES`` order.

    Degenerate boxes keep all nine points even though some of them coincide.
    """

    cx = box.x + box.width / 2
    cy = box.y + box.height / 2
    coords = (
        (box.left, box.top),
        (box.right, box.top),
        (box.left, box.bottom),
        (box.right, box.bottom),
        (cx, box.top),
        (cx, box.bottom),
        (box.left, cy),
        (box.right, cy),
        (cx, cy),
    )
    return [
        AlignmentPoint(
            point=Point(x, y),
            role=role,
            origin="dynamic",
            element_id=element_id,
            element_kind=element_kind,
        )
        for role, (x, y) in zip(ALIGNMENT_ROLES, coords)
    ]


def projection_lines(
    box: BoundingBox, element_id: ElementId, *, is_moving: bool = False
) -> List[DebugProjection]:
    """Vertical and horizontal lines through the edges, centre and quarter points of ``box``."""

    tag = "moving" if is_moving else "static"
    cx = box.center.x
    cy = box.center.y
    specs = (
        ("v-left", "vertical", box.left, "edge"),
        ("v-right", "vertical", box.right, "edge"),
        ("h-top", "horizontal", box.top, "edge"),
        ("h-bottom", "horizontal", box.bottom, "edge"),
        ("v-center", "vertical", cx, "center"),
        ("h-center", "horizontal", cy, "center"),
        ("v-midleft", "vertical", box.left + (cx - box.left) / 2, "midpoint"),
        ("v-midright", "vertical", cx + (box.right - cx) / 2, "midpoint"),
        ("h-midtop", "horizontal", box.top + (cy - box.top) / 2, "midpoint"),
        ("h-midbottom", "horizontal", cy + (box.bottom - cy) / 2, "midpoint"),
    )
    return [
        DebugProjection(
            id=f"debug-{name}-{tag}-{element_id}",
            element_id=element_id,
            orientation=orientation,  # type: ignore[arg-type]
            position=position,
            projection=projection,  # type: ignore[arg-type]
            is_moving=is_moving,
        )
        for name, orientation, position, projection in specs
    ]


__all__ = ["ALIGNMENT_ROLES", "alignment_points", "projection_lines"]
