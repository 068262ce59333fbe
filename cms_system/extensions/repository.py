"""
Extension Repositories

Resolve an extension name to a bootable handle.

StaticExtensionRepository:   explicit name → factory registry; extensions
                             register themselves at import time.
ManifestExtensionRepository: reads `<extensions_path>/<name>/extension.json`
                             and imports the entry point it names.

Both raise ExtensionLoadError for anything that prevents a handle from
being produced. The boot orchestrator catches only that error.
"""

from __future__ import annotations

import importlib.util
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, Field, ValidationError, field_validator

from cms_system.exceptions import ExtensionLoadError
from cms_system.extensions.base import ExtensionHandle

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "extension.json"

ExtensionFactory = Callable[[], ExtensionHandle]


class ExtensionRepository(Protocol):
    def load(self, name: str) -> ExtensionHandle: ...


# ── Static registry ───────────────────────────────────────────────────────────


class StaticExtensionRepository:
    """In-process registry of extension factories keyed by name."""

    def __init__(self) -> None:
        self._factories: dict[str, ExtensionFactory] = {}

    def register(self, name: str, factory: ExtensionFactory | None = None) -> Any:
        """
        Register a factory for `name`.

        Usable directly (`repo.register("seo", SeoExtension)`) or as a
        class decorator (`@repo.register("seo")`).
        """
        if factory is None:

            def decorator(obj: ExtensionFactory) -> ExtensionFactory:
                self._factories[name] = obj
                return obj

            return decorator

        self._factories[name] = factory
        return factory

    def names(self) -> list[str]:
        return list(self._factories)

    def load(self, name: str) -> ExtensionHandle:
        factory = self._factories.get(name)
        if factory is None:
            raise ExtensionLoadError(name, "not registered")
        try:
            handle = factory()
        except ExtensionLoadError:
            raise
        except Exception as exc:
            raise ExtensionLoadError(name, str(exc)) from exc

        if not isinstance(handle, ExtensionHandle):
            raise ExtensionLoadError(name, f"{type(handle).__name__} has no boot() hook")

        meta = getattr(handle, "meta", None)
        missing = [req for req in getattr(meta, "require", []) if req not in self._factories]
        if missing:
            raise ExtensionLoadError(name, f"unmet requirement(s): {', '.join(missing)}")
        return handle


# ── Manifest-based repository ─────────────────────────────────────────────────


class ExtensionManifest(BaseModel):
    """Schema of `<extensions_path>/<name>/extension.json`."""

    name: str
    version: str = "1.0.0"
    description: str = ""
    main: str
    require: list[str] = Field(default_factory=list)

    @field_validator("main")
    @classmethod
    def validate_main(cls, value: str) -> str:
        module, sep, attr = value.partition(":")
        if not sep or not module or not attr:
            msg = "main must be of the form 'module:attribute'"
            raise ValueError(msg)
        return value


class ManifestExtensionRepository:
    """Loads extensions from manifest directories under a root path."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._loaded: dict[str, ExtensionHandle] = {}

    def has(self, name: str) -> bool:
        return (self.path / name / MANIFEST_FILENAME).is_file()

    def read_manifest(self, name: str) -> ExtensionManifest:
        manifest_path = self.path / name / MANIFEST_FILENAME
        if not manifest_path.is_file():
            raise ExtensionLoadError(name, f"missing manifest {manifest_path}")

        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise ExtensionLoadError(name, f"unreadable manifest: {exc}") from exc

        try:
            manifest = ExtensionManifest.model_validate(data)
        except ValidationError as exc:
            raise ExtensionLoadError(name, f"invalid manifest: {exc.error_count()} error(s)") from exc

        if manifest.name != name:
            raise ExtensionLoadError(name, f"manifest declares name '{manifest.name}'")
        return manifest

    def load(self, name: str) -> ExtensionHandle:
        if name in self._loaded:
            return self._loaded[name]

        manifest = self.read_manifest(name)

        missing = [req for req in manifest.require if not self.has(req)]
        if missing:
            raise ExtensionLoadError(name, f"unmet requirement(s): {', '.join(missing)}")

        handle = self._instantiate(name, manifest)
        self._loaded[name] = handle
        logger.debug("Extension loaded: %s v%s", name, manifest.version)
        return handle

    def _instantiate(self, name: str, manifest: ExtensionManifest) -> ExtensionHandle:
        module_name, attr = manifest.main.split(":", 1)
        py_path = self.path / name / f"{module_name}.py"
        if not py_path.is_file():
            raise ExtensionLoadError(name, f"{py_path} not found")

        spec = importlib.util.spec_from_file_location(f"cms_ext_{name}_{module_name}", py_path)
        if spec is None or spec.loader is None:
            raise ExtensionLoadError(name, f"cannot import {py_path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[spec.name] = module
        try:
            spec.loader.exec_module(module)
            target = getattr(module, attr)
            handle = target() if isinstance(target, type) else target
        except Exception as exc:
            sys.modules.pop(spec.name, None)
            raise ExtensionLoadError(name, f"{type(exc).__name__}: {exc}") from exc

        if not isinstance(handle, ExtensionHandle):
            raise ExtensionLoadError(name, f"{manifest.main} has no boot() hook")
        return handle
