"""
CMS Extension System

Public API:
    ExtensionMeta              — extension metadata dataclass
    ExtensionBase              — abstract base class for extensions
    ExtensionBootOrchestrator  — load + boot with per-extension load-failure isolation
    BootList                   — ordered set of names to boot
    EventDispatcher            — notification sink for extension/system events
    StaticExtensionRepository  — explicit name → factory registry
    ManifestExtensionRepository — extension.json manifest loader
"""

from .base import ExtensionBase, ExtensionHandle, ExtensionMeta
from .boot import BootList, ExtensionBootOrchestrator, dedupe
from .events import EVENT_LOAD_FAILURE, EventDispatcher, LoadFailureEvent
from .repository import ExtensionManifest, ManifestExtensionRepository, StaticExtensionRepository

__all__ = [
    "EVENT_LOAD_FAILURE",
    "BootList",
    "EventDispatcher",
    "ExtensionBase",
    "ExtensionBootOrchestrator",
    "ExtensionHandle",
    "ExtensionManifest",
    "ExtensionMeta",
    "LoadFailureEvent",
    "ManifestExtensionRepository",
    "StaticExtensionRepository",
    "dedupe",
]
