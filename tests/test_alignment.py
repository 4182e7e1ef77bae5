import numpy as np
import pytest

from snapguide.alignment import ALIGNMENT_ROLES, alignment_points, projection_lines
from snapguide.geometry import BoundingBox, Point


def test_nine_points_with_roles():
    box = BoundingBox(0, 0, 100, 50)
    points = alignment_points(box, 'a', 'image')

    assert len(points) == 9
    assert [p.role for p in points] == list(ALIGNMENT_ROLES)
    by_role = {p.role: p.point for p in points}
    assert by_role['top-left'] == Point(0, 0)
    assert by_role['bottom-right'] == Point(100, 50)
    assert by_role['top-center'] == Point(50, 0)
    assert by_role['right-center'] == Point(100, 25)
    assert by_role['center'] == Point(50, 25)
    assert all(p.origin == 'dynamic' and p.element_id == 'a' for p in points)


@pytest.mark.parametrize(
    'box',
    [
        BoundingBox(0, 0, 100, 50),
        BoundingBox(-30.5, 12.25, 7, 300),
        BoundingBox(4, 4, 0, 0),
        BoundingBox(10, -10, 0, 25),
    ],
)
def test_centroid_matches_box_center(box):
    points = alignment_points(box)
    coords = np.array([p.point.as_tuple() for p in points])
    centroid = coords.mean(axis=0)

    assert len(points) == 9
    assert centroid[0] == pytest.approx(box.center.x)
    assert centroid[1] == pytest.approx(box.center.y)


def test_degenerate_box_keeps_coinciding_points():
    points = alignment_points(BoundingBox(7, 7, 0, 0))
    assert len(points) == 9
    assert {p.point for p in points} == {Point(7, 7)}


def test_projection_lines_cover_edges_centres_and_midpoints():
    lines = projection_lines(BoundingBox(0, 0, 40, 20), 'a', is_moving=True)

    assert len(lines) == 10
    assert all(line.is_moving for line in lines)
    vertical = sorted(line.position for line in lines if line.orientation == 'vertical')
    horizontal = sorted(line.position for line in lines if line.orientation == 'horizontal')
    assert vertical == [0, 10, 20, 30, 40]
    assert horizontal == [0, 5, 10, 15, 20]
    assert lines[0].id == 'debug-v-left-moving-a'
