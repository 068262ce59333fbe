"""
Event Dispatcher

EventDispatcher: in-process notification sink. Listeners are called in
priority order; emit() is fire-and-forget, so a listener that raises is
logged and the remaining listeners still run.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# ── Event names ───────────────────────────────────────────────────────────────
EVENT_LOAD_FAILURE = "extension.load_failure"
EVENT_SYSTEM_INIT = "system.init"
EVENT_SYSTEM_LOADED = "system.loaded"

Listener = Callable[[str, Any], Any]


@dataclass(frozen=True)
class LoadFailureEvent:
    """Payload emitted when an extension fails to load."""

    name: str


class EventDispatcher:
    """Registry of event listeners keyed by event name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[int, int, Listener]]] = defaultdict(list)
        self._counter = 0

    def on(self, event_name: str, listener: Listener, priority: int = 0) -> None:
        """Subscribe a listener; higher priority runs first, ties in registration order."""
        self._counter += 1
        self._listeners[event_name].append((-priority, self._counter, listener))
        self._listeners[event_name].sort(key=lambda entry: entry[:2])

    def listeners(self, event_name: str) -> list[Listener]:
        return [listener for _, _, listener in self._listeners.get(event_name, [])]

    def emit(self, event_name: str, payload: Any = None) -> None:
        """
        Notify every listener of event_name.

        Exceptions are caught and logged; nothing is returned to the caller.
        """
        for listener in self.listeners(event_name):
            try:
                listener(event_name, payload)
            except Exception as exc:
                logger.warning("Listener %r for %s raised: %s", listener, event_name, exc)
