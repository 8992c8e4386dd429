# src/ocr_artifacts/artifacts.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .catalog import ModelVersion
from .loader import ArtifactLoader
from .paths import LoadStrategy, OcrConfig, ResolvedPathSet, Role
from .registry import ConfigRegistry, global_registry
from .resolver import resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ArtifactSet:
    """Everything an inference engine needs for one model version."""

    version: ModelVersion
    paths: ResolvedPathSet
    strategy: LoadStrategy
    det: bytes
    cls: bytes
    rec: bytes
    keys: tuple[str, ...]


def effective_strategy(config: Optional[OcrConfig], global_config: Optional[OcrConfig]) -> LoadStrategy:
    if config is not None:
        return config.load_strategy
    if global_config is not None:
        return global_config.load_strategy
    return LoadStrategy.FILE_FIRST


def load_artifacts(
    version: ModelVersion,
    config: Optional[OcrConfig] = None,
    *,
    loader: ArtifactLoader,
    registry: Optional[ConfigRegistry] = None,
) -> ArtifactSet:
    """
    Resolve and load the three models and the dictionary for `version`.

    The registry is read once; its config fills in roles the instance config
    leaves open. Loads run sequentially and the first ArtifactLoadFailure
    propagates.
    """
    global_config = (registry if registry is not None else global_registry).get()
    strategy = effective_strategy(config, global_config)

    paths = resolve(
        config.path_overrides if config is not None else None,
        version,
        global_overrides=global_config.path_overrides if global_config is not None else None,
    )

    det = loader.load_bytes(Role.DET, paths.det, strategy)
    cls = loader.load_bytes(Role.CLS, paths.cls, strategy)
    rec = loader.load_bytes(Role.REC, paths.rec, strategy)
    with loader.load_text(Role.DICT, paths.dictionary, strategy) as stream:
        keys = tuple(line.rstrip("\r\n") for line in stream)

    logger.info("Loaded %d dictionary entries for %s", len(keys), version.display_name)
    return ArtifactSet(version=version, paths=paths, strategy=strategy, det=det, cls=cls, rec=rec, keys=keys)
