"""
System Provider

Registers the system services on a FastAPI application and boots the
configured extensions.

register(app) → app.state.settings / events / extensions / extensions_boot
boot(app)     → boot every name in app.state.extensions_boot, then install
                the request middlewares
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cms_system.config import Settings, settings as default_settings
from cms_system.extensions.boot import BootList, ExtensionBootOrchestrator
from cms_system.extensions.events import EventDispatcher
from cms_system.extensions.repository import ExtensionRepository, ManifestExtensionRepository
from cms_system.middleware.assets import AssetFixupMiddleware
from cms_system.middleware.system import SystemRequestMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


class SystemProvider:
    def __init__(
        self,
        settings: Settings | None = None,
        repository: ExtensionRepository | None = None,
        events: EventDispatcher | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.repository = repository or ManifestExtensionRepository(self.settings.extensions_dir)
        self.events = events or EventDispatcher()

    def register(self, app: FastAPI) -> None:
        app.state.settings = self.settings
        app.state.events = self.events
        app.state.extensions = self.repository
        app.state.extensions_boot = BootList(self.settings.extensions_boot)
        app.state.storage_path = self.settings.storage_path

    def boot(self, app: FastAPI) -> list[str]:
        orchestrator = ExtensionBootOrchestrator(self.repository, self.events)
        booted = orchestrator.boot(app.state.extensions_boot, app)
        logger.info("Extension boot complete — %d of %d booted", len(booted), len(app.state.extensions_boot))

        app.add_middleware(AssetFixupMiddleware, loader_name=self.settings.asset_loader_name)
        app.add_middleware(
            SystemRequestMiddleware,
            dispatcher=self.events,
            admin_prefix=self.settings.admin_path_prefix,
        )
        return booted
