"""Transitive dependency resolution over a script registry."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cms_system.assets.scripts import ScriptDescriptor, ScriptRegistry


def resolve(script: ScriptDescriptor, registry: ScriptRegistry) -> set[str]:
    """
    Return every dependency name reachable from `script`.

    Names without a registered descriptor are kept as leaves. Names seen
    before are not expanded again, so cycles terminate.
    """
    resolved: set[str] = set()
    pending = deque(script.dependencies)

    while pending:
        name = pending.popleft()
        if name in resolved:
            continue
        resolved.add(name)

        dependency = registry.get(name)
        if dependency is not None:
            pending.extend(dep for dep in dependency.dependencies if dep not in resolved)

    return resolved
