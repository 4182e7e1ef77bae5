import argparse
import dataclasses
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from snapguide import GuidelineEngine, Point, SceneFormatError, load_scene

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_point(value: str) -> Point:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y (got {value!r})")
    try:
        return Point(float(parts[0]), float(parts[1]))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected numeric X,Y (got {value!r})") from exc


def _parse_member(value: str) -> Tuple[str, str]:
    element_id, sep, kind = value.partition(":")
    if not sep or not element_id or not kind:
        raise argparse.ArgumentTypeError(f"expected ID:KIND (got {value!r})")
    return element_id, kind


def _parse_config(value: Optional[str]) -> Dict[str, Any]:
    if not value:
        return {}
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"--config is not valid JSON: {exc}")
    if not isinstance(parsed, dict):
        raise SystemExit("--config must be a JSON object")
    return parsed


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {key: _jsonable(val) for key, val in dataclasses.asdict(value).items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(val) for key, val in value.items()}
    return value


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Resolve one snapping tick against a scene")
    parser.add_argument("scene", help="Path to the JSON scene document")
    parser.add_argument("--drag", help="Id of the dragged element")
    parser.add_argument("--kind", default="image", help="Kind of the dragged element (default: image)")
    parser.add_argument(
        "--selection",
        action="append",
        type=_parse_member,
        default=[],
        metavar="ID:KIND",
        help="Move several elements together; repeat for each member",
    )
    parser.add_argument("--to", required=True, type=_parse_point, help="Proposed top-left position X,Y")
    parser.add_argument("--config", help="JSON object merged into the snapping config")
    parser.add_argument(
        "--projections",
        action="store_true",
        help="Also print the debug projection lines",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if not args.drag and not args.selection:
        parser.error("one of --drag or --selection is required")

    try:
        store = load_scene(args.scene)
    except (OSError, SceneFormatError) as exc:
        logger.error("Cannot load scene %s: %s", args.scene, exc)
        raise SystemExit(1)

    engine = GuidelineEngine(store, _parse_config(args.config))
    notifications: List[bool] = []
    engine.subscribe(lambda snap: notifications.append(snap is not None))

    if args.selection:
        corrected = engine.resolve_selection(args.selection, args.to)
    else:
        corrected = engine.resolve(args.drag, args.kind, args.to)

    snap = engine.active_snap
    report: Dict[str, Any] = {
        "proposed": _jsonable(args.to),
        "corrected": _jsonable(corrected),
        "snapped": snap is not None,
        "guidelines": _jsonable(snap.guidelines) if snap else [],
        "distance_guidelines": _jsonable(snap.distance_guidelines) if snap else [],
        "distance_markers": _jsonable(snap.distance_markers) if snap else [],
        "notifications": len(notifications),
    }
    if args.projections:
        dragged = (args.drag, args.kind, args.to) if args.drag else None
        report["projections"] = _jsonable(engine.debug_projections(dragged))
    print(json.dumps(report, indent=2))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
