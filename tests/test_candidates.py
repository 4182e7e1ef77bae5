from snapguide.candidates import MAX_GRID_POINTS, build_candidate_pool, grid_points, static_elements
from snapguide.config import SnappingConfig
from snapguide.geometry import BoundingBox, Point
from snapguide.shapes import ImageShape, PathShape, ShapeStore


def _store(viewport=None):
    return ShapeStore(
        [
            ImageShape('b', x=50, y=0, width=10, height=10),
            ImageShape('a', x=0, y=0, width=10, height=10),
            ImageShape('locked', locked=True, x=0, y=100, width=10, height=10),
            PathShape('empty'),
        ],
        viewport=viewport,
    )


def test_static_elements_skip_excluded_locked_and_empty():
    statics = static_elements(_store(), [('b', 'image')])
    assert [ref.id for ref, _ in statics] == ['a']


def test_static_elements_sorted_by_id():
    statics = static_elements(_store())
    assert [ref.id for ref, _ in statics] == ['a', 'b']


def test_exclusion_matches_id_and_kind():
    store = ShapeStore([ImageShape('x', width=1, height=1), PathShape('x')])
    statics = static_elements(store, [('x', 'path')])
    assert [(ref.id, ref.kind) for ref, _ in statics] == [('x', 'image')]


def test_pool_contains_nine_points_per_element():
    pool = build_candidate_pool(_store(), [('b', 'image')], SnappingConfig())
    assert len(pool) == 9
    assert {p.element_id for p in pool} == {'a'}


def test_dynamic_guides_can_be_disabled():
    config = SnappingConfig(show_dynamic_guides=False)
    assert build_candidate_pool(_store(), [], config) == []


def test_grid_lattice_covers_region():
    points = grid_points(BoundingBox(5, -3, 30, 20), 10)
    xs = sorted({p.x for p in points})
    ys = sorted({p.y for p in points})

    assert xs == [0, 10, 20, 30, 40]
    assert ys == [-10, 0, 10, 20]
    assert len(points) == len(xs) * len(ys)
    assert all(p.origin == 'grid' and p.role == 'grid' for p in points)


def test_grid_points_appended_after_elements():
    store = _store(viewport=BoundingBox(0, 0, 40, 40))
    config = SnappingConfig(show_grid_guides=True, grid_size=20)
    pool = build_candidate_pool(store, [], config)

    assert [p.origin for p in pool[:18]] == ['dynamic'] * 18
    grid = pool[18:]
    assert len(grid) == 9
    assert grid[0].point == Point(0, 0)


def test_grid_needs_visible_region():
    config = SnappingConfig(show_grid_guides=True, show_dynamic_guides=False)
    assert build_candidate_pool(_store(), [], config) == []


def test_oversized_grid_is_skipped():
    assert grid_points(BoundingBox(0, 0, 10_000, 10_000), 1) == []
    assert MAX_GRID_POINTS < 10_001 * 10_001
