"""
Script Registry

ScriptDescriptor: one registered script with its declared dependencies.
ScriptRegistry:   ordered mapping of script name → descriptor. Insertion
                  order is the declared load order.
ScriptQueue:      ordered list of script names to be emitted. Only
                  registered names can be queued.

Both are populated while a response is rendered and consumed once by the
asset dependency scheduler at the end of the request.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from cms_system.assets.resolver import resolve
from cms_system.exceptions import InvalidDependencyError, ScriptNotRegisteredError


@dataclass
class ScriptDescriptor:
    """
    A registered script.

    Attributes:
        name:            Unique key within the registry.
        dependencies:    Names that must be loaded before this script. Kept
                         ordered and free of duplicates.
        loader_provider: True when the script is served through the AMD
                         module loader.
        source:          Optional URL or path of the script.
    """

    name: str
    dependencies: list[str] = field(default_factory=list)
    loader_provider: bool = False
    source: str | None = None

    def __post_init__(self) -> None:
        declared, self.dependencies = self.dependencies, []
        for dependency in declared:
            self.add_dependency(dependency)

    def add_dependency(self, dependency: str) -> None:
        if dependency == self.name:
            raise InvalidDependencyError(self.name, dependency)
        if dependency not in self.dependencies:
            self.dependencies.append(dependency)


class ScriptQueue:
    def __init__(self, registry: ScriptRegistry) -> None:
        self._registry = registry
        self._names: list[str] = []

    def enqueue(self, name: str) -> None:
        """Append `name` unless it is already queued; an existing entry is not moved."""
        if name not in self._registry:
            raise ScriptNotRegisteredError(name)
        if name not in self._names:
            self._names.append(name)

    def dequeue(self, name: str) -> None:
        if name in self._names:
            self._names.remove(name)

    def index(self, name: str) -> int:
        return self._names.index(name)

    def as_list(self) -> list[str]:
        return list(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return f"ScriptQueue({self._names!r})"


class ScriptRegistry:
    def __init__(self) -> None:
        self._scripts: dict[str, ScriptDescriptor] = {}
        self.queue = ScriptQueue(self)

    def register(
        self,
        name: str,
        source: str | None = None,
        dependencies: Iterable[str] = (),
        loader_provider: bool = False,
    ) -> ScriptDescriptor:
        """Register (or replace in place) the descriptor for `name`."""
        script = ScriptDescriptor(
            name=name,
            dependencies=list(dependencies),
            loader_provider=loader_provider,
            source=source,
        )
        self._scripts[name] = script
        return script

    def add(
        self,
        name: str,
        source: str | None = None,
        dependencies: Iterable[str] = (),
        loader_provider: bool = False,
    ) -> ScriptDescriptor:
        """Register a script and queue it."""
        script = self.register(name, source, dependencies, loader_provider)
        self.queue.enqueue(name)
        return script

    def get(self, name: str) -> ScriptDescriptor | None:
        return self._scripts.get(name)

    def names(self) -> list[str]:
        return list(self._scripts)

    def resolve_dependencies(self, script: ScriptDescriptor) -> set[str]:
        return resolve(script, self)

    def __iter__(self) -> Iterator[ScriptDescriptor]:
        return iter(list(self._scripts.values()))

    def __len__(self) -> int:
        return len(self._scripts)

    def __contains__(self, name: object) -> bool:
        return name in self._scripts
