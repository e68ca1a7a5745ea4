"""
Configuration Management.

Loads settings from fsqlctl/config/settings/*.yaml, overrides from the
environment, and the persisted host to token mapping from the application
directory.

Settings (YAML, shipped with the package):
    application.yaml   - API endpoint, headers, timeouts, REPL behavior
    logging.yaml       - Logging configuration

Environment (FSQL_ prefix):
    FSQL_TOKEN         - Bearer token or API key
    FSQL_CONFIG_DIR    - Override for the application directory

Credentials (YAML, written by ``fsqlctl --save``):
    <app dir>/config.yaml
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from fsqlctl.core.config_schema import (
    ApplicationSchema,
    CredentialFileSchema,
    LoggingSchema,
)
from fsqlctl.core.exceptions import ConfigurationError

APP_NAME = "fsqlctl"
SETTINGS_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"
CREDENTIALS_FILENAME = "config.yaml"
CREDENTIALS_MODE = 0o600


def load_yaml_config(filename: str, settings_dir: Path | None = None) -> dict[str, Any]:
    """Load a YAML configuration file from fsqlctl/config/settings/."""
    config_path = (settings_dir or SETTINGS_DIR) / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Overrides read from the environment. Only tokens and paths."""

    token: str | None = None
    config_dir: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="FSQL_",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached environment settings."""
    return Settings()


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_app_dir() -> Path:
    """
    Directory holding the credential store and log files.

    Follows the platform convention (XDG on Linux, Application Support on
    macOS, %APPDATA% on Windows) unless FSQL_CONFIG_DIR is set.
    """
    override = get_settings().config_dir
    if override is not None:
        return override.expanduser()
    return Path(typer.get_app_dir(APP_NAME))


def build_api_url(host: str, path: str, port: int) -> str:
    """Build the translation endpoint URL."""
    return f"https://{host}:{port}/{path.lstrip('/')}"


class CredentialStore:
    """
    Persisted mapping of API hostnames to tokens.

    Loaded once at startup and passed to whoever needs it. Nothing is
    written back unless save() is called explicitly.

    Usage:
        store = CredentialStore.load()
        token = store.get_token("api.dev.query.ai")
        store.set_token("api.dev.query.ai", "eyJ...")
        store.save()
    """

    def __init__(self, path: Path, api_keys: dict[str, str] | None = None) -> None:
        self.path = path
        self._api_keys: dict[str, str] = dict(api_keys or {})

    @classmethod
    def default_path(cls) -> Path:
        return get_app_dir() / CREDENTIALS_FILENAME

    @classmethod
    def load(cls, path: Path | None = None) -> "CredentialStore":
        """
        Load the store from disk.

        A missing file yields an empty store.

        Raises:
            ConfigurationError: If the file cannot be read or is malformed
        """
        path = path or cls.default_path()
        if not path.exists():
            return cls(path)

        try:
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            parsed = CredentialFileSchema.model_validate(raw)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ConfigurationError(f"Could not load credentials from {path}: {e}") from e

        return cls(path, parsed.api_keys)

    def save(self) -> None:
        """
        Write the store to disk, creating the parent directory if needed.

        The file is created owner-only and is never readable by others,
        not even while it is being written.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        content = CredentialFileSchema(api_keys=self._api_keys).model_dump(by_alias=True)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CREDENTIALS_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                # O_CREAT's mode only applies to new files
                self.path.chmod(CREDENTIALS_MODE)
                yaml.safe_dump(content, f, default_flow_style=False, sort_keys=True)
        except OSError as e:
            raise ConfigurationError(f"Could not save credentials to {self.path}: {e}") from e

    def get_token(self, host: str) -> str | None:
        return self._api_keys.get(host)

    def set_token(self, host: str, token: str) -> None:
        self._api_keys[host] = token

    @property
    def hosts(self) -> list[str]:
        return sorted(self._api_keys)
