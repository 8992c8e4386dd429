# src/ocr_artifacts/registry.py
"""
Process-wide default OcrConfig.

The registry holds one immutable OcrConfig snapshot. Replacing it is a single
reference assignment, so a reader sees either the old or the new config and
never a mix. Concurrent set() calls race; the last write wins.

Resolution code should read the registry once per call (see get()) and pass
the snapshot along instead of consulting the registry per role.
"""
from __future__ import annotations

from typing import Optional

from .paths import OcrConfig


class ConfigRegistry:
    __slots__ = ("_config",)

    def __init__(self, config: Optional[OcrConfig] = None):
        self._config = config

    def set(self, config: OcrConfig) -> None:
        if not isinstance(config, OcrConfig):
            raise TypeError(f"Expected OcrConfig, got {type(config)!r}")
        self._config = config

    def get(self) -> Optional[OcrConfig]:
        return self._config

    def clear(self) -> None:
        self._config = None

    def has(self) -> bool:
        return self._config is not None


# Shared instance used when callers do not inject their own registry.
global_registry = ConfigRegistry()


def set_global_config(config: OcrConfig) -> None:
    global_registry.set(config)


def get_global_config() -> Optional[OcrConfig]:
    return global_registry.get()


def clear_global_config() -> None:
    global_registry.clear()


def has_global_config() -> bool:
    return global_registry.has()
