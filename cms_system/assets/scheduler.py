"""
Asset Dependency Scheduler

Runs once per response. Scripts that transitively depend on the module
loader are moved behind the loader-served scripts so the loader is on the
page before anything that needs it.

This is a single corrective pass rather than a topological sort. Only one
level is repaired: a dependent is moved after every loader-served script,
but a loader-served script is not itself moved after its own late-found
dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cms_system.config import settings

if TYPE_CHECKING:
    from cms_system.assets.scripts import ScriptQueue, ScriptRegistry

logger = logging.getLogger(__name__)


def fixup(registry: ScriptRegistry, queue: ScriptQueue, loader_name: str = "requirejs") -> bool:
    """
    Reorder `queue` so scripts needing `loader_name` come after loader-served scripts.

    Returns False without touching anything when no script depends on the
    loader; True once the queue has been corrected.
    """
    providers = []
    dependents = []

    for script in registry:
        if script.loader_provider:
            providers.append(script)
        elif loader_name in registry.resolve_dependencies(script):
            dependents.append(script)

    if not dependents:
        return False

    for script in providers:
        if script.name != loader_name:
            script.add_dependency(loader_name)
        queue.enqueue(script.name)

    for script in dependents:
        queue.dequeue(script.name)
        queue.enqueue(script.name)

    logger.debug(
        "Requeued %d script(s) behind %s",
        len(dependents),
        loader_name,
        extra={"script_queue": queue.as_list()},
    )
    return True


class AssetDependencyScheduler:
    """Applies `fixup` to a registry's queue once per unit of work."""

    def __init__(self, loader_name: str | None = None) -> None:
        self.loader_name = loader_name or settings.asset_loader_name

    def run(self, registry: ScriptRegistry) -> bool:
        return fixup(registry, registry.queue, self.loader_name)
