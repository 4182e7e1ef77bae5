"""Opt-in call tracing for the per-tick snapping stages.

Modules call :func:`apply_debug_logging` on their namespace at import time.
The wrappers only format anything when their logger is enabled for DEBUG, so
the hot path stays untouched in normal operation.
"""

from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .geometry import BoundingBox, Point
from .types import AlignmentPoint

F = TypeVar("F", bound=Callable[..., Any])

_WRAPPED_FLAG = "_snap_debug_wrapped"

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxstring = 80


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def summarize(value: Any, *, max_items: int = 4) -> str:
    """Short, log-friendly rendering of engine values."""

    if isinstance(value, Point):
        return f"Point({_fmt(value.x)}, {_fmt(value.y)})"
    if isinstance(value, BoundingBox):
        return (
            f"BoundingBox({_fmt(value.x)}, {_fmt(value.y)}, "
            f"{_fmt(value.width)}x{_fmt(value.height)})"
        )
    if isinstance(value, AlignmentPoint):
        owner = value.element_id or value.origin
        return f"{value.role}@{owner}({_fmt(value.x)}, {_fmt(value.y)})"
    if isinstance(value, np.ndarray):
        if value.size == 0:
            return f"ndarray(shape={value.shape})"
        return (
            f"ndarray(shape={value.shape}, min={_fmt(float(value.min()))}, "
            f"max={_fmt(float(value.max()))})"
        )
    if isinstance(value, (list, tuple)):
        head = [summarize(item, max_items=max_items) for item in value[:max_items]]
        if len(value) > max_items:
            head.append(f"... {len(value) - max_items} more")
        open_br, close_br = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        return open_br + ", ".join(head) + close_br
    return _repr.repr(value)


def _describe_call(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = [summarize(arg) for arg in args]
    parts.extend(f"{key}={summarize(val)}" for key, val in kwargs.items())
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(logger: logging.Logger, *, name: Optional[str] = None) -> Callable[[F], F]:
    """Decorator logging entry arguments and the result at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, _WRAPPED_FLAG, False):
            return func
        label = name or getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("-> %s(%s)", label, _describe_call(args, kwargs))
            result = func(*args, **kwargs)
            logger.debug("<- %s = %s", label, summarize(result))
            return result

        setattr(wrapper, _WRAPPED_FLAG, True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public functions defined in ``namespace`` with :func:`debug_log_call`.

    Private helpers (leading underscore) and names in ``skip`` are left alone.
    """

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name or __name__)
    skipped: Set[str] = set(skip or ())
    for attr, value in list(namespace.items()):
        if attr.startswith("_") or attr in skipped:
            continue
        if inspect.isfunction(value) and value.__module__ == module_name:
            namespace[attr] = debug_log_call(logger, name=attr)(value)


__all__ = ["summarize", "debug_log_call", "apply_debug_logging"]
