# src/ocr_artifacts/loader.py
from __future__ import annotations

import logging
from typing import Optional, TextIO, TypeVar

from .config import StorageSettings
from .exceptions import ArtifactLoadFailure
from .paths import LoadStrategy, ResolvedPath, Role
from .storage import (
    BundledStore,
    LocalStore,
    Reader,
    probe_bundled,
    probe_local,
    read_bytes,
    text_reader,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOCAL = "local"
BUNDLED = "bundled"

# Stores tried per strategy, in order. ONLY strategies never fall back.
STRATEGY_SOURCES: dict[LoadStrategy, tuple[str, ...]] = {
    LoadStrategy.FILE_FIRST: (LOCAL, BUNDLED),
    LoadStrategy.ASSETS_FIRST: (BUNDLED, LOCAL),
    LoadStrategy.FILE_ONLY: (LOCAL,),
    LoadStrategy.ASSETS_ONLY: (BUNDLED,),
}


class ArtifactLoader:
    """
    Loads model bytes and dictionary text from the local and bundled stores.

    Each load tries the stores in the order given by the strategy and returns
    the first hit. ArtifactLoadFailure is raised only when every store the
    strategy allows came up empty.
    """

    def __init__(self, local: LocalStore, bundled: BundledStore, *, encoding: str = "utf-8"):
        self.local = local
        self.bundled = bundled
        self.encoding = encoding

    @classmethod
    def from_settings(cls, s: StorageSettings) -> "ArtifactLoader":
        local = LocalStore(s.local_root, models_dir=s.models_dir)
        if s.bundled_dir is not None:
            bundled = BundledStore.from_directory(s.bundled_dir)
        else:
            bundled = BundledStore.from_package(s.bundled_package)
        return cls(local, bundled, encoding=s.encoding)

    # -----------------------------
    # Loading
    # -----------------------------

    def load_bytes(self, role: Role, resolved: ResolvedPath, strategy: LoadStrategy) -> bytes:
        """Load a model file."""
        return self._load(role, resolved, strategy, read_bytes)

    def load_text(self, role: Role, resolved: ResolvedPath, strategy: LoadStrategy) -> TextIO:
        """
        Open the dictionary file as a buffered text stream.

        The caller owns the returned stream and must close it.
        """
        return self._load(role, resolved, strategy, text_reader(self.encoding))

    def _load(self, role: Role, resolved: ResolvedPath, strategy: LoadStrategy, reader: Reader[T]) -> T:
        logger.info("Loading %s from %s with strategy %s", role.value, resolved.path, strategy.value)
        for source in STRATEGY_SOURCES[strategy]:
            result = self._probe(source, resolved, reader)
            if result is not None:
                return result
        raise ArtifactLoadFailure(role, resolved.path, strategy)

    def _probe(self, source: str, resolved: ResolvedPath, reader: Reader[T]) -> Optional[T]:
        if source == LOCAL:
            return probe_local(self.local, resolved, reader)
        return probe_bundled(self.bundled, resolved, reader)

    # -----------------------------
    # Accessibility checks (no content read)
    # -----------------------------

    def can_load(self, resolved: ResolvedPath, strategy: LoadStrategy) -> bool:
        for source in STRATEGY_SOURCES[strategy]:
            if source == LOCAL and self.local.is_readable(resolved):
                return True
            if source == BUNDLED and not resolved.is_absolute and self.bundled.is_readable(resolved):
                return True
        return False
