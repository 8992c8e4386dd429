from __future__ import annotations

from pathlib import Path

import pytest

from ocr_artifacts.config import clear_settings_cache
from ocr_artifacts.loader import ArtifactLoader
from ocr_artifacts.registry import clear_global_config
from ocr_artifacts.storage import BundledStore, LocalStore


def write_file(directory: Path, name: str, content: bytes | str) -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        path.write_text(content, encoding="utf-8")
    else:
        path.write_bytes(content)
    return path


@pytest.fixture(autouse=True)
def _reset_process_state():
    clear_global_config()
    clear_settings_cache()
    yield
    clear_global_config()
    clear_settings_cache()


@pytest.fixture
def local_root(tmp_path: Path) -> Path:
    root = tmp_path / "files"
    (root / "models").mkdir(parents=True)
    return root


@pytest.fixture
def models_dir(local_root: Path) -> Path:
    return local_root / "models"


@pytest.fixture
def bundled_dir(tmp_path: Path) -> Path:
    d = tmp_path / "assets"
    d.mkdir()
    return d


@pytest.fixture
def local_store(local_root: Path) -> LocalStore:
    return LocalStore(local_root)


@pytest.fixture
def bundled_store(bundled_dir: Path) -> BundledStore:
    return BundledStore.from_directory(bundled_dir)


@pytest.fixture
def loader(local_store: LocalStore, bundled_store: BundledStore) -> ArtifactLoader:
    return ArtifactLoader(local_store, bundled_store)
