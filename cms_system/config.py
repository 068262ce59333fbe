from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "CMS System"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Paths
    app_path: Path = Path.cwd()
    app_storage: str = "storage"
    extensions_path: str = "extensions"

    # Extensions booted at startup, in order
    extensions_boot: list[str] = []

    # Dependency name satisfied by the AMD module loader script
    asset_loader_name: str = "requirejs"

    admin_path_prefix: str = "/admin"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("app_storage", mode="before")
    @classmethod
    def normalize_storage(cls, value: str | None) -> str:
        return (value or "storage").lstrip("/")

    @property
    def storage_path(self) -> str:
        return f"{self.app_path}/{self.app_storage}".rstrip("/")

    @property
    def extensions_dir(self) -> Path:
        path = Path(self.extensions_path)
        return path if path.is_absolute() else self.app_path / path


settings = Settings()
