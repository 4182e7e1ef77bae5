"""JSON scene documents for the developer CLI and tests."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from .geometry import BoundingBox
from .shapes import GroupShape, ImageShape, PathCommand, PathShape, Shape, ShapeStore, TextShape, UseShape


class SceneFormatError(ValueError):
    pass


def _number(entry: Mapping[str, Any], key: str, where: str, default: Any = ...) -> Any:
    if key not in entry or entry[key] is None:
        if default is ...:
            raise SceneFormatError(f"{where}: missing {key!r}")
        return default
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneFormatError(f"{where}: {key!r} must be a number (got {value!r})")
    if not math.isfinite(value):
        raise SceneFormatError(f"{where}: {key!r} must be finite (got {value!r})")
    return float(value)


def _path_commands(entry: Mapping[str, Any], where: str) -> List[PathCommand]:
    commands: List[PathCommand] = []
    for idx, raw in enumerate(entry.get("points", [])):
        if not isinstance(raw, (list, tuple)) or len(raw) != 2:
            raise SceneFormatError(f"{where}: path points must be [x, y] pairs")
        point = dict(zip(("x", "y"), raw))
        commands.append(
            PathCommand(
                x=_number(point, "x", f"{where} point {idx}"),
                y=_number(point, "y", f"{where} point {idx}"),
            )
        )
    for idx, raw in enumerate(entry.get("commands", [])):
        if not isinstance(raw, Mapping):
            raise SceneFormatError(f"{where}: command {idx} must be an object")
        fields = {k: _number(raw, k, f"{where} command {idx}", None) for k in ("x", "y", "x1", "y1", "x2", "y2")}
        commands.append(PathCommand(**fields))
    return commands


def shape_from_dict(entry: Mapping[str, Any], index: int = 0) -> Shape:
    where = f"element {index}"
    if not isinstance(entry, Mapping):
        raise SceneFormatError(f"{where}: expected an object")
    element_id = entry.get("id")
    if not isinstance(element_id, str) or not element_id:
        raise SceneFormatError(f"{where}: 'id' must be a non-empty string")
    kind = entry.get("kind")
    locked = bool(entry.get("locked", False))
    where = f"{kind} {element_id!r}"

    if kind == "path":
        return PathShape(element_id, locked, commands=_path_commands(entry, where))
    if kind == "text":
        content = entry.get("content", "")
        if not isinstance(content, (str, list)):
            raise SceneFormatError(f"{where}: 'content' must be a string or list of lines")
        font_size = _number(entry, "font_size", where, 16.0)
        if font_size <= 0:
            raise SceneFormatError(f"{where}: font_size must be positive (got {font_size:g})")
        return TextShape(
            element_id,
            locked,
            x=_number(entry, "x", where),
            y=_number(entry, "y", where),
            content=content,
            font_size=font_size,
        )
    if kind == "image":
        width = _number(entry, "width", where)
        height = _number(entry, "height", where)
        if width < 0 or height < 0:
            raise SceneFormatError(f"{where}: image size must be non-negative")
        return ImageShape(
            element_id,
            locked,
            x=_number(entry, "x", where),
            y=_number(entry, "y", where),
            width=width,
            height=height,
        )
    if kind == "use":
        return UseShape(
            element_id,
            locked,
            x=_number(entry, "x", where, None),
            y=_number(entry, "y", where, None),
            width=_number(entry, "width", where, None),
            height=_number(entry, "height", where, None),
        )
    if kind == "group":
        children = []
        for child in entry.get("children", []):
            if not isinstance(child, Mapping) or "id" not in child or "kind" not in child:
                raise SceneFormatError(f"{where}: children must be {{id, kind}} objects")
            children.append((str(child["kind"]), str(child["id"])))
        return GroupShape(element_id, locked, children=children)
    raise SceneFormatError(f"{where}: unknown element kind {kind!r}")


def scene_from_dict(document: Mapping[str, Any]) -> ShapeStore:
    if not isinstance(document, Mapping):
        raise SceneFormatError("scene document must be an object")
    viewport = None
    raw_viewport = document.get("viewport")
    if raw_viewport is not None:
        if not isinstance(raw_viewport, Mapping):
            raise SceneFormatError("viewport must be an object")
        try:
            viewport = BoundingBox(
                _number(raw_viewport, "x", "viewport", 0.0),
                _number(raw_viewport, "y", "viewport", 0.0),
                _number(raw_viewport, "width", "viewport"),
                _number(raw_viewport, "height", "viewport"),
            )
        except SceneFormatError:
            raise
        except ValueError as exc:
            raise SceneFormatError(f"viewport: {exc}") from exc
    store = ShapeStore(viewport=viewport)
    elements = document.get("elements", [])
    if not isinstance(elements, list):
        raise SceneFormatError("'elements' must be a list")
    for idx, entry in enumerate(elements):
        try:
            store.add(shape_from_dict(entry, idx))
        except SceneFormatError:
            raise
        except ValueError as exc:
            raise SceneFormatError(f"element {idx}: {exc}") from exc
    return store


def load_scene(path: Union[str, Path]) -> ShapeStore:
    text = Path(path).read_text(encoding="utf-8")
    try:
        document: Dict[str, Any] = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SceneFormatError(f"{path}: invalid JSON ({exc})") from exc
    return scene_from_dict(document)


__all__ = ["SceneFormatError", "shape_from_dict", "scene_from_dict", "load_scene"]
