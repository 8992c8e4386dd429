# src/ocr_artifacts/storage.py
"""
The two stores artifacts can be read from, and the probes that read them.

LocalStore
    Writable directory on disk (the downloader saves files here). Absolute
    paths are used verbatim, relative paths live under ``<root>/models``.

BundledStore
    Read-only files shipped with the application, by default the package data
    of ``ocr_artifacts.assets``. Only relative paths can be addressed.

A probe never raises: a missing file or any error while opening it is logged
and reported as None, which lets the loader fall back to the other store.
"""
from __future__ import annotations

import logging
import os
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Callable, Optional, TextIO, TypeVar

from .exceptions import ConfigError
from .paths import SEPARATOR, ResolvedPath

logger = logging.getLogger(__name__)

T = TypeVar("T")
Reader = Callable[[Traversable], T]

DEFAULT_MODELS_DIR = "models"
DEFAULT_ENCODING = "utf-8"


def read_bytes(entry: Traversable) -> bytes:
    return entry.read_bytes()


def text_reader(encoding: str = DEFAULT_ENCODING) -> Reader[TextIO]:
    def _open_text(entry: Traversable) -> TextIO:
        return entry.open("r", encoding=encoding, errors="replace")  # type: ignore[return-value]

    return _open_text


class LocalStore:
    name = "local"

    def __init__(self, root: str | Path, models_dir: str = DEFAULT_MODELS_DIR):
        self.root = Path(root)
        self.models_dir = models_dir

    @property
    def artifacts_root(self) -> Path:
        return self.root / self.models_dir

    def address(self, path: str, is_absolute: bool) -> Path:
        if is_absolute:
            return Path(path)
        return self.artifacts_root / path

    def locate(self, resolved: ResolvedPath) -> Path:
        return self.address(resolved.path, resolved.is_absolute)

    def contains(self, name: str) -> bool:
        """True if a relative `name` already exists under the artifacts root."""
        return (self.artifacts_root / name).is_file()

    def is_readable(self, resolved: ResolvedPath) -> bool:
        p = self.address(resolved.path, resolved.is_absolute)
        try:
            return p.is_file() and os.access(p, os.R_OK)
        except (OSError, ValueError):
            return False

    def __repr__(self) -> str:
        return f"LocalStore(artifacts_root={str(self.artifacts_root)!r})"


class BundledStore:
    name = "bundled"

    def __init__(self, root: Traversable):
        self.root = root

    @classmethod
    def from_package(cls, package: str) -> "BundledStore":
        try:
            root = resources.files(package)
        except Exception as e:
            raise ConfigError(f"Bundled artifact package '{package}' cannot be imported: {e}") from e
        return cls(root)

    @classmethod
    def from_directory(cls, path: str | Path) -> "BundledStore":
        return cls(Path(path))

    def locate(self, resolved: ResolvedPath) -> Optional[Traversable]:
        if resolved.is_absolute:
            return None
        parts = [p for p in resolved.path.split(SEPARATOR) if p]
        if not parts or ".." in parts:
            return None
        return self.root.joinpath(*parts)

    def is_readable(self, resolved: ResolvedPath) -> bool:
        entry = self.locate(resolved)
        if entry is None:
            return False
        try:
            with entry.open("rb"):
                return True
        except Exception:
            return False

    def __repr__(self) -> str:
        return f"BundledStore(root={str(self.root)!r})"


Store = LocalStore | BundledStore


def _probe(store: Store, resolved: ResolvedPath, reader: Reader[T]) -> Optional[T]:
    entry = store.locate(resolved)
    if entry is None:
        logger.debug("%s store cannot address %s", store.name, resolved.path)
        return None

    try:
        if not entry.is_file():
            logger.debug("Artifact not found in %s store: %s", store.name, entry)
            return None
        logger.info("Loading artifact from %s store: %s", store.name, entry)
        return reader(entry)
    except Exception as e:
        logger.warning("Failed to read %s from %s store: %s", entry, store.name, e)
        return None


def probe_local(store: LocalStore, resolved: ResolvedPath, reader: Reader[T]) -> Optional[T]:
    return _probe(store, resolved, reader)


def probe_bundled(store: BundledStore, resolved: ResolvedPath, reader: Reader[T]) -> Optional[T]:
    # Bundled files are addressed by relative path only; do not touch the store.
    if resolved.is_absolute:
        logger.debug("Cannot load absolute path from bundled store: %s", resolved.path)
        return None
    return _probe(store, resolved, reader)
