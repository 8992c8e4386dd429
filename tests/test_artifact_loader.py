from __future__ import annotations

import pickle
from pathlib import Path

import pytest

from ocr_artifacts.exceptions import ArtifactLoadFailure, OcrArtifactsError
from ocr_artifacts.loader import STRATEGY_SOURCES, ArtifactLoader
from ocr_artifacts.paths import LoadStrategy, PathSource, ResolvedPath, Role

from conftest import write_file

ALL_STRATEGIES = list(LoadStrategy)


def _rel(path: str) -> ResolvedPath:
    return ResolvedPath(path=path, is_absolute=False, source=PathSource.VERSION_DEFAULT)


def _abs(path: str | Path) -> ResolvedPath:
    return ResolvedPath(path=str(path), is_absolute=True, source=PathSource.CUSTOM)


@pytest.fixture
def both(models_dir: Path, bundled_dir: Path) -> ResolvedPath:
    write_file(models_dir, "det.onnx", b"LOCAL")
    write_file(bundled_dir, "det.onnx", b"BUNDLED")
    return _rel("det.onnx")


def test_every_strategy_has_sources() -> None:
    assert set(STRATEGY_SOURCES) == set(LoadStrategy)


def test_file_first_prefers_local(loader: ArtifactLoader, both: ResolvedPath) -> None:
    assert loader.load_bytes(Role.DET, both, LoadStrategy.FILE_FIRST) == b"LOCAL"


def test_assets_first_prefers_bundled(loader: ArtifactLoader, both: ResolvedPath) -> None:
    assert loader.load_bytes(Role.DET, both, LoadStrategy.ASSETS_FIRST) == b"BUNDLED"


def test_only_strategies_pick_their_store(loader: ArtifactLoader, both: ResolvedPath) -> None:
    assert loader.load_bytes(Role.DET, both, LoadStrategy.FILE_ONLY) == b"LOCAL"
    assert loader.load_bytes(Role.DET, both, LoadStrategy.ASSETS_ONLY) == b"BUNDLED"


def test_file_first_falls_back_to_bundled(loader: ArtifactLoader, bundled_dir: Path) -> None:
    write_file(bundled_dir, "det.onnx", b"BUNDLED")
    assert loader.load_bytes(Role.DET, _rel("det.onnx"), LoadStrategy.FILE_FIRST) == b"BUNDLED"


def test_assets_first_falls_back_to_local(loader: ArtifactLoader, models_dir: Path) -> None:
    write_file(models_dir, "det.onnx", b"LOCAL")
    assert loader.load_bytes(Role.DET, _rel("det.onnx"), LoadStrategy.ASSETS_FIRST) == b"LOCAL"


def test_file_only_does_not_fall_back(loader: ArtifactLoader, bundled_dir: Path) -> None:
    write_file(bundled_dir, "rec.onnx", b"BUNDLED")
    rp = _rel("rec.onnx")

    with pytest.raises(ArtifactLoadFailure) as ei:
        loader.load_bytes(Role.REC, rp, LoadStrategy.FILE_ONLY)
    assert ei.value.role is Role.REC
    assert ei.value.path == "rec.onnx"
    assert ei.value.strategy is LoadStrategy.FILE_ONLY

    assert loader.load_bytes(Role.REC, rp, LoadStrategy.ASSETS_ONLY) == b"BUNDLED"


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_missing_everywhere_fails(loader: ArtifactLoader, strategy: LoadStrategy) -> None:
    with pytest.raises(ArtifactLoadFailure) as ei:
        loader.load_bytes(Role.CLS, _rel("cls.onnx"), strategy)
    assert ei.value.strategy is strategy
    assert isinstance(ei.value, OcrArtifactsError)


def test_absolute_path_under_assets_only_fails_without_bundled_access(
    local_store, models_dir: Path, tmp_path: Path
) -> None:
    class ExplodingBundled:
        name = "bundled"

        def locate(self, resolved):
            raise AssertionError("bundled store accessed")

    det = write_file(tmp_path / "sdcard", "det.onnx", b"EXTERNAL")
    loader = ArtifactLoader(local_store, ExplodingBundled())  # type: ignore[arg-type]

    with pytest.raises(ArtifactLoadFailure) as ei:
        loader.load_bytes(Role.DET, _abs(det), LoadStrategy.ASSETS_ONLY)
    assert ei.value.path == str(det)
    assert ei.value.strategy is LoadStrategy.ASSETS_ONLY

    # ASSETS_FIRST skips the bundled store and falls back to the absolute local file.
    assert loader.load_bytes(Role.DET, _abs(det), LoadStrategy.ASSETS_FIRST) == b"EXTERNAL"


def test_load_text_returns_open_stream(loader: ArtifactLoader, models_dir: Path, bundled_dir: Path) -> None:
    write_file(models_dir, "keys.txt", "local-a\nlocal-b\n")
    write_file(bundled_dir, "keys.txt", "bundled\n")

    with loader.load_text(Role.DICT, _rel("keys.txt"), LoadStrategy.FILE_FIRST) as stream:
        assert [line.rstrip("\n") for line in stream] == ["local-a", "local-b"]

    with loader.load_text(Role.DICT, _rel("keys.txt"), LoadStrategy.ASSETS_ONLY) as stream:
        assert stream.read() == "bundled\n"


def test_load_text_missing_fails(loader: ArtifactLoader) -> None:
    with pytest.raises(ArtifactLoadFailure) as ei:
        loader.load_text(Role.DICT, _rel("keys.txt"), LoadStrategy.FILE_FIRST)
    assert ei.value.role is Role.DICT


def test_failure_message_and_pickling() -> None:
    exc = ArtifactLoadFailure(Role.DET, "/sdcard/det.onnx", LoadStrategy.ASSETS_ONLY)
    assert str(exc) == "Failed to load det artifact from '/sdcard/det.onnx' with strategy ASSETS_ONLY"

    clone = pickle.loads(pickle.dumps(exc))
    assert (clone.role, clone.path, clone.strategy) == (exc.role, exc.path, exc.strategy)


def test_can_load(loader: ArtifactLoader, models_dir: Path, bundled_dir: Path) -> None:
    write_file(bundled_dir, "cls.onnx", b"x")
    rp = _rel("cls.onnx")
    assert loader.can_load(rp, LoadStrategy.FILE_FIRST) is True
    assert loader.can_load(rp, LoadStrategy.ASSETS_ONLY) is True
    assert loader.can_load(rp, LoadStrategy.FILE_ONLY) is False
