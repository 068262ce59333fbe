"""
Extension Base Classes

ExtensionMeta: declarative metadata for an extension (name, version, requirements).
ExtensionBase: abstract base class all extensions must subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass
class ExtensionMeta:
    """
    Declarative metadata describing an extension.

    Attributes:
        name:        Machine-readable slug, e.g. "seo", "cache".
        version:     Semver string, e.g. "1.0.0".
        description: Human-readable description.
        author:      Extension author (defaults to "CMS Core Team").
        require:     Names of other extensions that must be present.
    """

    name: str
    version: str
    description: str = ""
    author: str = "CMS Core Team"
    require: list[str] = field(default_factory=list)


@runtime_checkable
class ExtensionHandle(Protocol):
    """Anything returned by a repository that can be booted."""

    def boot(self, app: Any) -> None: ...


class ExtensionBase(ABC):
    """
    Abstract base class for CMS extensions.

    Subclasses must implement the `meta` property. `boot` defaults to a
    no-op so extensions without startup work only declare metadata.
    """

    @property
    @abstractmethod
    def meta(self) -> ExtensionMeta:
        """Return the extension's metadata."""
        ...

    def boot(self, app: Any) -> None:  # noqa: B027
        """
        Called once after the extension has been loaded.

        Override to register routes, event listeners or services on the
        application. Exceptions raised here are not caught by the boot
        orchestrator.
        """
