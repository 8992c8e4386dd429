# src/ocr_artifacts/cli/commands.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ocr_artifacts.catalog import CATALOG, lookup
from ocr_artifacts.config import AppSettings, config_from_settings, configure_logging, get_settings
from ocr_artifacts.loader import ArtifactLoader
from ocr_artifacts.paths import LoadStrategy, PathOverrides, ResolvedPathSet
from ocr_artifacts.registry import global_registry
from ocr_artifacts.resolver import resolve, validate

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class CommonOptions(BaseModel):
    config_file: Optional[str] = Field(None, description="Optional config file (toml/yaml).")
    loglevel: Optional[LogLevel] = Field(None, description="Logging level override.")


class VersionsCommand(CommonOptions):
    pass


class ResolveCommand(CommonOptions):
    version: Optional[str] = Field(None, description="Model version id, e.g. V4 (default from settings).")
    det_path: Optional[str] = Field(None, description="Detector model path override.")
    cls_path: Optional[str] = Field(None, description="Classifier model path override.")
    rec_path: Optional[str] = Field(None, description="Recognizer model path override.")
    dict_path: Optional[str] = Field(None, description="Dictionary file path override.")

    def overrides(self) -> Optional[PathOverrides]:
        o = PathOverrides(
            det_path=self.det_path,
            cls_path=self.cls_path,
            rec_path=self.rec_path,
            dict_path=self.dict_path,
        )
        if o == PathOverrides():
            return None
        return o


class ValidateCommand(ResolveCommand):
    strategy: Optional[LoadStrategy] = Field(None, description="Load strategy (default from settings).")


def _prepare(command: CommonOptions) -> AppSettings:
    overrides: dict[str, object] = {}
    if command.loglevel is not None:
        overrides["logging"] = {"level": command.loglevel}

    settings = get_settings(config_file=command.config_file, **overrides)
    configure_logging(settings.logging)
    global_registry.set(config_from_settings(settings))
    return settings


def _resolve(command: ResolveCommand, settings: AppSettings) -> ResolvedPathSet:
    version = lookup(command.version or settings.default_version)
    global_config = global_registry.get()
    return resolve(
        command.overrides(),
        version,
        global_overrides=global_config.path_overrides if global_config is not None else None,
    )


def handle_versions(command: VersionsCommand) -> int:
    _prepare(command)
    for v in CATALOG.values():
        origin = "bundled" if v.is_bundled else "download"
        print(f"{v.id}\t{v.display_name}\t{origin}\t{v.det_name}\t{v.cls_name}\t{v.rec_name}\t{v.dict_name}")
    return 0


def handle_resolve(command: ResolveCommand) -> int:
    settings = _prepare(command)
    for role, rp in _resolve(command, settings).items():
        print(f"{role.value}\t{rp.path}\tabsolute={rp.is_absolute}\tsource={rp.source.value}")
    return 0


def handle_validate(command: ValidateCommand) -> int:
    settings = _prepare(command)
    strategy = command.strategy or settings.load_strategy
    loader = ArtifactLoader.from_settings(settings.storage)

    result = validate(_resolve(command, settings), strategy, loader)
    if result.ok:
        print(f"OK ({strategy.value})")
        return 0
    for err in result.errors:
        print(f"{err.role.value}\t{err.message}")
    return 1
