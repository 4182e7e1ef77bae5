import math

import pytest

from snapguide.config import SnapColors, SnapConfigError, SnappingConfig, merge_config


def test_defaults():
    config = SnappingConfig()
    assert config.enabled
    assert config.detection_radius == 4
    assert config.snap_duration == 200
    assert config.grid_size == 20
    assert config.show_dynamic_guides and not config.show_grid_guides
    assert config.colors == SnapColors()


def test_merge_returns_new_object():
    base = SnappingConfig()
    merged = merge_config(base, {'detection_radius': 8})
    assert merged.detection_radius == 8
    assert base.detection_radius == 4


def test_camel_case_aliases():
    merged = merge_config(
        SnappingConfig(),
        {'detectionRadius': 6, 'showDistanceGuides': True, 'guidelineColor': '#123456'},
    )
    assert merged.detection_radius == 6
    assert merged.show_distance_guides
    assert merged.colors.guideline == '#123456'


@pytest.mark.parametrize(
    'key, value, expected',
    [
        ('detection_radius', -3, 0.0),
        ('snap_duration', -10, 0.0),
        ('distance_tolerance', -1, 0.0),
        ('grid_size', 0, 1.0),
        ('grid_size', -20, 1.0),
    ],
)
def test_invalid_numbers_are_clamped(key, value, expected):
    merged = merge_config(SnappingConfig(), {key: value})
    assert getattr(merged, key) == expected


@pytest.mark.parametrize(
    'updates',
    [
        {'detection_radius': 'far'},
        {'detection_radius': math.nan},
        {'grid_size': math.inf},
        {'detection_radius': -math.inf},
        {'detection_radius': True},
        {'enabled': 'yes'},
        {'no_such_option': 1},
        {'colors': 'red'},
        {'colors': {'unknown': '#fff'}},
    ],
)
def test_bad_values_are_ignored(updates):
    merged = merge_config(SnappingConfig(), updates)
    assert merged == SnappingConfig()


def test_strict_mode_raises():
    with pytest.raises(SnapConfigError):
        merge_config(SnappingConfig(), {'no_such_option': 1}, strict=True)
    with pytest.raises(SnapConfigError):
        merge_config(SnappingConfig(), {'grid_size': 'big'}, strict=True)
    with pytest.raises(SnapConfigError, match='finite'):
        merge_config(SnappingConfig(), {'gridSize': math.inf}, strict=True)


def test_partial_colors_merge():
    merged = merge_config(SnappingConfig(), {'colors': {'distance': '#0f0', 'pendingDistance': '#f00'}})
    assert merged.colors.distance == '#0f0'
    assert merged.colors.pending_distance == '#f00'
    assert merged.colors.guideline == SnapColors().guideline
