# src/ocr_artifacts/downloads.py
"""
Boundary to the downloader and preference-store collaborators.

The network transport and the persisted preference live outside this package;
they are described here as protocols. What this module owns is deciding which
files a version still needs in the local store and turning per-file progress
into one overall, non-decreasing progress value.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol

from .catalog import ModelVersion, lookup
from .paths import Role
from .storage import LocalStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class Downloader(Protocol):
    def fetch(self, url: str, destination: Path, on_progress: ProgressCallback) -> None:
        """Write `url` to `destination`, reporting progress in [0, 1]. Raise on failure."""
        ...


class PreferenceStore(Protocol):
    def get_selected_version_id(self) -> str: ...

    def set_selected_version_id(self, version_id: str) -> None: ...


def selected_version(store: PreferenceStore) -> ModelVersion:
    return lookup(store.get_selected_version_id())


@dataclass(frozen=True, slots=True)
class PlannedDownload:
    role: Role
    url: str
    file_name: str


@dataclass(frozen=True, slots=True)
class DownloadResult:
    success: bool
    message: Optional[str] = None


def _remote_sources(version: ModelVersion) -> list[PlannedDownload]:
    out: list[PlannedDownload] = []
    for role, url, name in (
        (Role.DET, version.det_source_url, version.det_name),
        (Role.REC, version.rec_source_url, version.rec_name),
        (Role.DICT, version.dict_source_url, version.dict_name),
    ):
        if url:
            out.append(PlannedDownload(role=role, url=url, file_name=name))
    return out


def pending_downloads(version: ModelVersion, local: LocalStore) -> list[PlannedDownload]:
    """Remote files of `version` that are not in the local store yet."""
    return [p for p in _remote_sources(version) if not local.contains(p.file_name)]


def is_version_downloaded(version: ModelVersion, local: LocalStore) -> bool:
    if version.is_bundled:
        return True
    return not pending_downloads(version, local)


def download_version(
    version: ModelVersion,
    local: LocalStore,
    downloader: Downloader,
    on_progress: Optional[ProgressCallback] = None,
) -> DownloadResult:
    """
    Fetch the missing files of `version` into the local store, one after another.

    File i of n reports into the range [i/n, (i+1)/n]. Collaborator errors are
    logged and returned as a failed DownloadResult.
    """
    report = on_progress or (lambda _p: None)
    planned = pending_downloads(version, local)
    if not planned:
        logger.info("All models for %s already exist", version.display_name)
        report(1.0)
        return DownloadResult(success=True)

    logger.info("Downloading %d files for %s", len(planned), version.display_name)
    local.artifacts_root.mkdir(parents=True, exist_ok=True)

    share = 1.0 / len(planned)
    reported = 0.0

    def _scaled(base: float) -> ProgressCallback:
        def _cb(fraction: float) -> None:
            nonlocal reported
            value = base + min(max(fraction, 0.0), 1.0) * share
            if value > reported:
                reported = value
                report(value)

        return _cb

    for index, item in enumerate(planned):
        destination = local.artifacts_root / item.file_name
        logger.info("Downloading %s from %s", item.file_name, item.url)
        try:
            downloader.fetch(item.url, destination, _scaled(index * share))
        except Exception as e:
            logger.error("Failed to download models for %s: %s", version.display_name, e)
            # a partial file would count as downloaded
            destination.unlink(missing_ok=True)
            return DownloadResult(success=False, message=str(e) or type(e).__name__)

    if reported < 1.0:
        report(1.0)
    logger.info("All models for %s downloaded successfully", version.display_name)
    return DownloadResult(success=True)
