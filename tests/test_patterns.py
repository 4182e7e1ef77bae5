import pytest

from snapguide.config import SnapColors
from snapguide.geometry import BoundingBox, Point
from snapguide.patterns import (
    analyze_axis,
    analyze_patterns,
    cluster_gaps,
    pattern_distance,
    sequence_gaps,
)
from snapguide.types import ElementRef


def _thin_row(*xs):
    """Zero-width markers on one row so the gap equals the x distance."""

    return [
        (ElementRef(f'e{idx}', 'image'), BoundingBox(x, 0, 0, 10))
        for idx, x in enumerate(xs)
    ]


def test_cluster_groups_gaps_within_tolerance():
    assert cluster_gaps([10, 10.4, 21], 1) == [[0, 1], [2]]
    assert pattern_distance([10, 10.4, 21], 1) == pytest.approx(10.2)


def test_cluster_is_transitive_chain():
    assert cluster_gaps([10, 10.8, 11.6, 30], 1) == [[0, 1, 2], [3]]


def test_cluster_edge_cases():
    assert cluster_gaps([], 1) == []
    assert cluster_gaps([4], 1) == [[0]]
    assert pattern_distance([], 1) is None


def test_largest_cluster_wins_and_earliest_breaks_ties():
    assert pattern_distance([50, 10, 10, 10, 50.5], 1) == pytest.approx(10)
    assert pattern_distance([5, 5, 20, 20], 1) == pytest.approx(5)


def test_sequence_gaps_clamp_overlaps():
    boxes = [BoundingBox(0, 0, 10, 10), BoundingBox(5, 0, 10, 10), BoundingBox(30, 0, 10, 10)]
    assert sequence_gaps(boxes, 'horizontal') == [0.0, 15.0]
    assert sequence_gaps(boxes, 'vertical') == [0.0, 0.0]


def test_appending_to_the_end_of_a_rhythm():
    statics = _thin_row(0, 10, 20)
    dragged = BoundingBox(30, 0, 0, 10)

    pattern = analyze_axis(dragged, 'drag', statics, 'horizontal', 1)

    assert pattern is not None
    assert pattern.insertion_index == 3
    assert pattern.pattern_distance == pytest.approx(10)
    assert len(pattern.guidelines) == 3
    (pending,) = pattern.pending
    assert pending.distance == pytest.approx(10)
    assert pending.involved_element_ids == ('e2', 'drag')
    assert (pending.start, pending.end) == (20, 30)


def test_inserting_between_splits_into_two_pending_gaps():
    statics = _thin_row(0, 10, 20)
    dragged = BoundingBox(5, 0, 0, 10)

    pattern = analyze_axis(dragged, 'drag', statics, 'horizontal', 1)

    assert pattern is not None
    assert pattern.insertion_index == 1
    assert [g.distance for g in pattern.pending] == [pytest.approx(5), pytest.approx(5)]
    assert all(g.is_pending for g in pattern.guidelines)


def test_split_also_found_with_default_tolerance():
    pattern = analyze_axis(BoundingBox(5, 0, 0, 10), 'drag', _thin_row(0, 10, 20), 'horizontal', 5)
    assert pattern is not None
    assert pattern.insertion_index == 1
    assert len(pattern.pending) == 2


def test_irregular_spacing_has_no_pattern():
    statics = _thin_row(0, 10, 35)
    assert analyze_axis(BoundingBox(100, 0, 0, 10), 'drag', statics, 'horizontal', 1) is None


def test_needs_two_static_elements():
    statics = _thin_row(0)
    assert analyze_axis(BoundingBox(10, 0, 0, 10), 'drag', statics, 'horizontal', 1) is None


def test_overlapping_row_is_not_a_vertical_rhythm():
    result = analyze_patterns(BoundingBox(30, 0, 0, 10), 'drag', _thin_row(0, 10, 20), 1)
    assert result.horizontal is not None
    assert result.vertical is None


def test_vertical_stack():
    statics = [
        (ElementRef('top', 'image'), BoundingBox(0, 0, 20, 10)),
        (ElementRef('mid', 'image'), BoundingBox(0, 25, 20, 10)),
    ]
    dragged = BoundingBox(0, 50, 20, 10)

    pattern = analyze_axis(dragged, 'drag', statics, 'vertical', 1)

    assert pattern is not None
    assert pattern.orientation == 'vertical'
    assert pattern.insertion_index == 2
    assert [g.distance for g in pattern.guidelines] == [15, 15]
    assert pattern.guidelines[1].midpoint == Point(10, 42.5)


def test_markers_and_colors():
    colors = SnapColors(distance='fixed', pending_distance='pending')
    result = analyze_patterns(BoundingBox(30, 0, 0, 10), 'drag', _thin_row(0, 10, 20), 1, colors)

    guides = result.distance_guidelines
    markers = result.distance_markers
    assert len(guides) == len(markers) == 3
    assert [g.color for g in guides] == ['fixed', 'fixed', 'pending']
    assert markers[-1].position == Point(25, 5)
    assert markers[-1].distance_value == pytest.approx(10)
    assert markers[-1].is_pending
    assert [m.id for m in markers] == ['mx-0', 'mx-1', 'mx-2']
