"""The single active-snap slot and its listeners."""

from __future__ import annotations

import itertools
import logging
from typing import Callable, Dict, Optional

from .types import ActiveSnap

logger = logging.getLogger(__name__)

SnapListener = Callable[[Optional[ActiveSnap]], None]
Unsubscribe = Callable[[], None]


class ActiveSnapState:
    """Two-state holder: idle (``None``) or active (one :class:`ActiveSnap`).

    Listeners are called synchronously on idle->active, active->active and
    active->idle. They may subscribe or unsubscribe from inside a callback;
    each notification pass iterates over a snapshot of the registrations.
    """

    def __init__(self) -> None:
        self._snap: Optional[ActiveSnap] = None
        self._listeners: Dict[int, SnapListener] = {}
        self._tokens = itertools.count()

    @property
    def current(self) -> Optional[ActiveSnap]:
        return self._snap

    @property
    def is_active(self) -> bool:
        return self._snap is not None

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: SnapListener) -> Unsubscribe:
        token = next(self._tokens)
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    def publish(self, snap: ActiveSnap) -> None:
        """Replace the slot wholesale and notify."""

        self._snap = snap
        self._notify()

    def clear(self) -> bool:
        """Go idle; returns ``False`` when already idle (no notification)."""

        if self._snap is None:
            return False
        self._snap = None
        self._notify()
        return True

    def _notify(self) -> None:
        snap = self._snap
        listeners = list(self._listeners.values())
        logger.debug("Notifying %d listener(s) active=%s", len(listeners), snap is not None)
        for listener in listeners:
            listener(snap)


__all__ = ["SnapListener", "Unsubscribe", "ActiveSnapState"]
