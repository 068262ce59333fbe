"""
Extension Boot Orchestrator

Loads each configured extension through a repository and invokes its
boot hook. Load failures are isolated per extension: they are reported
to the notification sink as `extension.load_failure` and boot moves on
to the next name. Exceptions raised by a boot hook itself are not
caught and end the whole boot sequence.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Protocol

from cms_system.exceptions import ExtensionLoadError
from cms_system.extensions.events import EVENT_LOAD_FAILURE, LoadFailureEvent

if TYPE_CHECKING:
    from cms_system.extensions.repository import ExtensionRepository

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def emit(self, event_name: str, payload: Any = None) -> None: ...


def dedupe(names: Iterable[str]) -> list[str]:
    """Drop repeated names, keeping the first occurrence of each."""
    return list(dict.fromkeys(names))


class BootList:
    """Ordered set of extension names collected while the app is configured."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: dict[str, None] = dict.fromkeys(names)

    def add(self, *names: str) -> None:
        for name in names:
            self._names.setdefault(name, None)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return f"BootList({list(self._names)!r})"


class ExtensionBootOrchestrator:
    def __init__(self, repository: ExtensionRepository, sink: NotificationSink) -> None:
        self.repository = repository
        self.sink = sink

    def boot(self, names: Iterable[str], app: Any) -> list[str]:
        """
        Load and boot every unique name in first-seen order.

        Returns the names whose boot hook was invoked.
        """
        booted: list[str] = []

        for name in dedupe(names):
            try:
                handle = self.repository.load(name)
            except ExtensionLoadError as exc:
                logger.warning(
                    "Extension %s failed to load: %s",
                    name,
                    exc.reason or exc.message,
                    extra={"extension": name},
                )
                self.sink.emit(EVENT_LOAD_FAILURE, LoadFailureEvent(name))
                continue

            handle.boot(app)
            booted.append(name)
            logger.info("Extension booted: %s", name, extra={"extension": name})

        return booted
