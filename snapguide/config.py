"""Snapping configuration and the merge helper used by the engine."""

from __future__ import annotations

import copy
import dataclasses
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class SnapConfigError(ValueError):
    """Raised in strict mode when a configuration value cannot be used."""


@dataclass
class SnapColors:
    guideline: str = "rgba(255,95,95,1)"
    grid: str = "#2196f3"
    distance: str = "#00aa00"
    pending_distance: str = "#ff9800"


@dataclass
class SnappingConfig:
    """Tunables for one engine instance.

    ``detection_radius``, ``distance_tolerance`` and ``grid_size`` are in canvas
    units; ``snap_duration`` is in milliseconds.
    """

    enabled: bool = True
    detection_radius: float = 4.0
    snap_duration: float = 200.0
    distance_tolerance: float = 5.0
    grid_size: float = 20.0
    show_dynamic_guides: bool = True
    show_grid_guides: bool = False
    show_distance_guides: bool = False
    colors: SnapColors = field(default_factory=SnapColors)


_NUMERIC_MINIMUMS: Dict[str, float] = {
    "detection_radius": 0.0,
    "snap_duration": 0.0,
    "distance_tolerance": 0.0,
    "grid_size": 1.0,
}

_BOOLEAN_FIELDS = {"enabled", "show_dynamic_guides", "show_grid_guides", "show_distance_guides"}

_ALIASES: Dict[str, str] = {
    "detectionRadius": "detection_radius",
    "snapDuration": "snap_duration",
    "distanceTolerance": "distance_tolerance",
    "gridSize": "grid_size",
    "showDynamicGuides": "show_dynamic_guides",
    "showGridGuides": "show_grid_guides",
    "showDistanceGuides": "show_distance_guides",
    "guidelineColor": "colors.guideline",
    "gridColor": "colors.grid",
    "distanceGuideColor": "colors.distance",
    "pendingDistanceColor": "colors.pending_distance",
}

_COLOR_FIELDS = {f.name for f in dataclasses.fields(SnapColors)}
_COLOR_ALIASES = {"pendingDistance": "pending_distance"}


def _reject(message: str, strict: bool) -> None:
    if strict:
        raise SnapConfigError(message)
    logger.warning("Ignoring snapping config update: %s", message)


def _coerce_number(key: str, value: Any, strict: bool) -> Optional[float]:
    if isinstance(value, bool):
        _reject(f"{key} must be numeric (got {value!r})", strict)
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        _reject(f"{key} must be numeric (got {value!r})", strict)
        return None
    if not math.isfinite(number):
        _reject(f"{key} must be finite (got {value!r})", strict)
        return None
    minimum = _NUMERIC_MINIMUMS[key]
    if number < minimum:
        logger.info("Clamping %s=%s to minimum %s", key, number, minimum)
        number = minimum
    return number


def _merge_colors(colors: SnapColors, updates: Any, strict: bool) -> SnapColors:
    if isinstance(updates, SnapColors):
        return copy.deepcopy(updates)
    if not isinstance(updates, Mapping):
        _reject(f"colors must be a mapping (got {updates!r})", strict)
        return colors
    merged = copy.deepcopy(colors)
    for raw_key, value in updates.items():
        key = _COLOR_ALIASES.get(raw_key, raw_key)
        if key not in _COLOR_FIELDS:
            _reject(f"unknown color {raw_key!r}", strict)
            continue
        if not isinstance(value, str) or not value:
            _reject(f"color {raw_key!r} must be a non-empty string", strict)
            continue
        setattr(merged, key, value)
    return merged


def merge_config(
    config: SnappingConfig, updates: Mapping[str, Any], *, strict: bool = False
) -> SnappingConfig:
    """Return a new config with ``updates`` applied on top of ``config``.

    Keys may be snake_case field names or the camelCase names used by the
    editor host. Negative sizes are clamped to their minimum; unknown keys and
    uncoercible values are logged and skipped unless ``strict`` is set.
    """

    merged = copy.deepcopy(config)
    for raw_key, value in updates.items():
        key = _ALIASES.get(raw_key, raw_key)
        if key.startswith("colors."):
            merged.colors = _merge_colors(merged.colors, {key.split(".", 1)[1]: value}, strict)
        elif key == "colors":
            merged.colors = _merge_colors(merged.colors, value, strict)
        elif key in _NUMERIC_MINIMUMS:
            number = _coerce_number(key, value, strict)
            if number is not None:
                setattr(merged, key, number)
        elif key in _BOOLEAN_FIELDS:
            if not isinstance(value, bool):
                _reject(f"{raw_key} must be boolean (got {value!r})", strict)
                continue
            setattr(merged, key, value)
        else:
            _reject(f"unknown option {raw_key!r}", strict)
    return merged


def config_to_dict(config: SnappingConfig) -> Dict[str, Any]:
    return dataclasses.asdict(config)


__all__ = [
    "SnapConfigError",
    "SnapColors",
    "SnappingConfig",
    "merge_config",
    "config_to_dict",
]
