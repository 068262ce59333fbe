"""
Script assets: registry, queue, dependency resolution and the per-response
loader ordering pass.
"""

from .resolver import resolve
from .scheduler import AssetDependencyScheduler, fixup
from .scripts import ScriptDescriptor, ScriptQueue, ScriptRegistry

__all__ = [
    "AssetDependencyScheduler",
    "ScriptDescriptor",
    "ScriptQueue",
    "ScriptRegistry",
    "fixup",
    "resolve",
]
