"""
Application wiring tests — SystemProvider and create_app()
"""

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from cms_system.assets.scripts import ScriptRegistry
from cms_system.config import Settings
from cms_system.extensions.boot import BootList
from cms_system.extensions.events import EVENT_LOAD_FAILURE, EventDispatcher
from cms_system.extensions.repository import ManifestExtensionRepository, StaticExtensionRepository
from cms_system.middleware.assets import SCRIPT_QUEUE_HEADER, get_scripts
from cms_system.provider import SystemProvider
from main import create_app


def _settings(tmp_path, **overrides) -> Settings:
    return Settings(_env_file=None, app_path=tmp_path, **overrides)


class PageExtension:
    """Adds a route that registers loader-dependent scripts out of order."""

    def boot(self, app: FastAPI) -> None:
        @app.get("/page")
        async def page(scripts: ScriptRegistry = Depends(get_scripts)):
            scripts.register("amd-gallery", loader_provider=True)
            scripts.register("gallery", dependencies=["requirejs"])
            scripts.queue.enqueue("gallery")
            return {"ok": True}


class TestSystemProvider:
    def test_register_populates_app_state(self, tmp_path):
        app = FastAPI()
        settings = _settings(tmp_path, extensions_boot=["seo", "seo", "cache"])
        provider = SystemProvider(settings=settings)

        provider.register(app)

        assert app.state.settings is settings
        assert isinstance(app.state.events, EventDispatcher)
        assert isinstance(app.state.extensions, ManifestExtensionRepository)
        assert isinstance(app.state.extensions_boot, BootList)
        assert list(app.state.extensions_boot) == ["seo", "cache"]
        assert app.state.storage_path == f"{tmp_path}/storage"

    def test_default_repository_reads_extensions_dir(self, tmp_path):
        provider = SystemProvider(settings=_settings(tmp_path, extensions_path="ext"))
        assert provider.repository.path == tmp_path / "ext"

    def test_boot_list_can_grow_before_boot(self, tmp_path):
        calls = []

        class Recording:
            def __init__(self, name):
                self.name = name

            def boot(self, app):
                calls.append(self.name)

        repo = StaticExtensionRepository()
        repo.register("seo", lambda: Recording("seo"))
        repo.register("cache", lambda: Recording("cache"))

        app = FastAPI()
        provider = SystemProvider(settings=_settings(tmp_path, extensions_boot=["seo"]), repository=repo)
        provider.register(app)
        app.state.extensions_boot.add("cache", "seo")

        assert provider.boot(app) == ["seo", "cache"]
        assert calls == ["seo", "cache"]

    def test_load_failure_reported_on_app_events(self, tmp_path):
        app = FastAPI()
        provider = SystemProvider(settings=_settings(tmp_path, extensions_boot=["missing"]))
        provider.register(app)
        failed = []
        app.state.events.on(EVENT_LOAD_FAILURE, lambda name, event: failed.append(event.name))

        assert provider.boot(app) == []
        assert failed == ["missing"]


class TestCreateApp:
    def test_booted_extension_route_gets_fixup(self, tmp_path):
        repo = StaticExtensionRepository()
        repo.register("pages", PageExtension)
        app = create_app(_settings(tmp_path, extensions_boot=["pages"]), repository=repo)

        response = TestClient(app).get("/page")

        assert response.status_code == 200
        assert response.headers[SCRIPT_QUEUE_HEADER] == "amd-gallery,gallery"
        assert response.headers["X-Request-ID"]

    def test_missing_extension_does_not_block_startup(self, tmp_path):
        repo = StaticExtensionRepository()
        repo.register("pages", PageExtension)
        app = create_app(_settings(tmp_path, extensions_boot=["ghost", "pages"]), repository=repo)

        with TestClient(app) as client:
            assert client.get("/page").status_code == 200

    def test_manifest_extension_booted(self, tmp_path, write_extension):
        module = (
            "from fastapi import FastAPI\n\n\n"
            "class Extension:\n"
            "    def boot(self, app: FastAPI):\n"
            "        @app.get('/hello')\n"
            "        async def hello():\n"
            "            return {'hello': 'world'}\n"
        )
        write_extension("hello", module=module)
        app = create_app(_settings(tmp_path, extensions_path=str(tmp_path), extensions_boot=["hello"]))

        assert TestClient(app).get("/hello").json() == {"hello": "world"}

    def test_settings_applied(self, tmp_path):
        app = create_app(_settings(tmp_path, app_name="Test CMS", app_version="9.9.9"))
        assert app.title == "Test CMS"
        assert app.version == "9.9.9"
