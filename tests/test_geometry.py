import math

import pytest

from snapguide.geometry import BoundingBox, Point, bounds_of_points, union_boxes


def test_point_coerces_to_float_and_translates():
    p = Point(1, 2)
    assert isinstance(p.x, float)
    assert p.translate(2.5, -1) == Point(3.5, 1.0)


def test_bounding_box_edges_and_center():
    box = BoundingBox(10, 20, 30, 40)
    assert (box.left, box.top, box.right, box.bottom) == (10.0, 20.0, 40.0, 60.0)
    assert box.center == Point(25, 40)
    assert box.moved_to(Point(0, 0)) == BoundingBox(0, 0, 30, 40)


@pytest.mark.parametrize('width, height', [(-1, 5), (5, -0.5)])
def test_bounding_box_rejects_negative_size(width, height):
    with pytest.raises(ValueError):
        BoundingBox(0, 0, width, height)


def test_degenerate_box_is_allowed():
    box = BoundingBox(5, 5, 0, 0)
    assert box.center == Point(5, 5)


def test_union_skips_missing_boxes():
    union = union_boxes([BoundingBox(0, 0, 10, 10), None, BoundingBox(20, -5, 5, 5)])
    assert union == BoundingBox(0, -5, 25, 15)
    assert union_boxes([None, None]) is None


def test_bounds_of_points():
    assert bounds_of_points([]) is None
    assert bounds_of_points([(3, 4), (-1, 10)]) == BoundingBox(-1, 4, 4, 6)


@pytest.mark.parametrize('x, y', [(math.nan, 0), (0, math.inf), (-math.inf, math.nan)])
def test_bounding_box_rejects_non_finite_origin(x, y):
    with pytest.raises(ValueError, match='origin must be finite'):
        BoundingBox(x, y, 10, 10)
