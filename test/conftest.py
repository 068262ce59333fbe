"""
Pytest configuration and fixtures for the CMS system core tests
"""

import json
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from cms_system.assets.scripts import ScriptRegistry
from cms_system.extensions.base import ExtensionBase, ExtensionMeta
from cms_system.extensions.events import EventDispatcher


class RecordingExtension(ExtensionBase):
    """Extension that records each boot call into a shared list."""

    def __init__(self, name: str, calls: list, require: list[str] | None = None):
        self._meta = ExtensionMeta(name=name, version="1.0.0", require=require or [])
        self.calls = calls

    @property
    def meta(self) -> ExtensionMeta:
        return self._meta

    def boot(self, app):
        self.calls.append((self._meta.name, app))


@pytest.fixture
def boot_calls() -> list:
    return []


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def emitted(dispatcher):
    """List of (event_name, payload) captured from every event the dispatcher emits."""
    captured = []
    original_emit = dispatcher.emit

    def record(event_name, payload=None):
        captured.append((event_name, payload))
        original_emit(event_name, payload)

    dispatcher.emit = record
    return captured


@pytest.fixture
def registry() -> ScriptRegistry:
    return ScriptRegistry()


@pytest.fixture
def write_extension(tmp_path):
    """Create `<tmp_path>/<name>/extension.json` and an optional module file."""

    def _write(name: str, manifest: dict | str | None = None, module: str | None = None, module_name: str = "main"):
        ext_dir = tmp_path / name
        ext_dir.mkdir(parents=True, exist_ok=True)
        if manifest is None:
            manifest = {"name": name, "main": f"{module_name}:Extension"}
        text = manifest if isinstance(manifest, str) else json.dumps(manifest)
        (ext_dir / "extension.json").write_text(text, encoding="utf-8")
        if module is not None:
            (ext_dir / f"{module_name}.py").write_text(module, encoding="utf-8")
        return ext_dir

    return _write


BOOTABLE_MODULE = """
BOOTED = []


class Extension:
    def boot(self, app):
        BOOTED.append(app)
"""


@pytest.fixture
def bootable_module() -> str:
    return BOOTABLE_MODULE


@pytest.fixture
def extensions_path(tmp_path) -> Path:
    return tmp_path
