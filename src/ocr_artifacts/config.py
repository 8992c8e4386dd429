# src/ocr_artifacts/config.py
from __future__ import annotations

import logging
import pickle
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional, cast
import contextvars

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource

from .catalog import DEFAULT_VERSION_ID
from .exceptions import ConfigError
from .paths import LoadStrategy, OcrConfig, PathOverrides

__all__ = [
    "AppSettings",
    "ConfigError",
    "LoggingSettings",
    "StorageSettings",
    "clear_settings_cache",
    "config_from_settings",
    "configure_logging",
    "get_settings",
]


# ---------------------------------------------------------------------------
# Config file support (context + loader)
# ---------------------------------------------------------------------------

_CONFIG_FILE_CTX: contextvars.ContextVar[Path | None] = contextvars.ContextVar(
    "OCR_ARTIFACTS_CONFIG_FILE_CTX",
    default=None,
)


def _find_default_config_file() -> Path | None:
    """Look for config file in current working directory."""
    cwd = Path.cwd()
    for name in ("config.toml", "config.yaml", "config.yml"):
        p = cwd / name
        if p.is_file():
            return p
    return None


def _load_toml(path: Path) -> dict[str, Any]:
    import tomllib

    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} did not parse into a dict")
    return cast(dict[str, Any], data)


def _load_yaml(path: Path) -> dict[str, Any]:
    import yaml

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} did not parse into a dict")
    return cast(dict[str, Any], data)


def _load_config_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix == ".toml":
        return _load_toml(path)
    if suffix in {".yaml", ".yml"}:
        return _load_yaml(path)
    raise ConfigError(f"Unsupported config file type: {path} (expected .toml/.yaml/.yml)")


class _ConfigFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source that loads from an optional config file, just above defaults."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        # Not used; we provide a full dict in __call__.
        raise NotImplementedError

    def __call__(self) -> dict[str, Any]:
        path = _CONFIG_FILE_CTX.get()
        if path is None:
            return {}

        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        return _load_config_file(path)


@contextmanager
def _config_file_context(path: Path | None) -> Any:
    token = _CONFIG_FILE_CTX.set(path)
    try:
        yield
    finally:
        _CONFIG_FILE_CTX.reset(token)


# ─────────────────────────────────────────────────────────────
# Section configs
# ─────────────────────────────────────────────────────────────


class LoggingSettings(BaseModel):
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    format: str = "%(asctime)-20s %(name)-30s %(levelname)-8s: %(message)s"


class StorageSettings(BaseModel):
    local_root: Path = Field(
        Path("."),
        description="Directory holding the writable models directory (downloads land here).",
    )
    models_dir: str = Field("models", description="Name of the models directory under local_root.")
    bundled_package: str = Field(
        "ocr_artifacts.assets",
        description="Package whose data files make up the bundled (read-only) store.",
    )
    bundled_dir: Optional[Path] = Field(
        default=None,
        description="Directory used as bundled store instead of bundled_package.",
    )
    encoding: str = Field("utf-8", description="Encoding used to read dictionary files.")


# ─────────────────────────────────────────────────────────────
# Top-level settings
# ─────────────────────────────────────────────────────────────


class AppSettings(BaseSettings):
    """
    Application configuration for ocr-artifacts.

    Precedence (highest → lowest):

    1. Init kwargs (tests/overrides)
    2. Environment variables (prefix OCR_ARTIFACTS_, nested delimiter __)
    3. .env and .env.local
    4. Config file
    5. Defaults in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="OCR_ARTIFACTS_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Earlier sources override later sources.
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            _ConfigFileSettingsSource(settings_cls),
        )

    default_version: str = Field(DEFAULT_VERSION_ID, description="Model version used when none is selected.")
    load_strategy: LoadStrategy = Field(LoadStrategy.FILE_FIRST, description="Default load strategy.")

    logging: LoggingSettings = LoggingSettings()
    storage: StorageSettings = StorageSettings()
    # Process-wide path overrides; installed into the config registry by entry points.
    paths: PathOverrides = PathOverrides()


@lru_cache(maxsize=16)
def _get_settings_cached(config_file_str: str | None, overrides_blob: bytes) -> AppSettings:
    overrides = pickle.loads(overrides_blob)
    config_path = Path(config_file_str) if config_file_str is not None else None
    with _config_file_context(config_path):
        return AppSettings(**overrides)


def get_settings(*, config_file: str | Path | None = None, **overrides: Any) -> AppSettings:
    """
    Cached accessor for process-wide settings.

    `overrides` are init kwargs → highest precedence (handy in tests).

    If `config_file` is None, we look in CWD for: config.toml, config.yaml, config.yml.
    If none found, config-file source is disabled and defaults apply.
    """
    resolved: Path | None
    if config_file is None:
        resolved = _find_default_config_file()
    else:
        resolved = Path(config_file)

    overrides_blob = pickle.dumps(overrides, protocol=pickle.HIGHEST_PROTOCOL)
    return _get_settings_cached(str(resolved) if resolved is not None else None, overrides_blob)


def clear_settings_cache() -> None:
    _get_settings_cached.cache_clear()


def configure_logging(settings: LoggingSettings) -> None:
    """Apply level and format to the root logger. Call from entry points only."""
    logging.basicConfig(level=settings.level, format=settings.format, force=True)


def config_from_settings(settings: AppSettings) -> OcrConfig:
    """Build the process-wide OcrConfig described by settings."""
    return OcrConfig(path_overrides=settings.paths, load_strategy=settings.load_strategy)
