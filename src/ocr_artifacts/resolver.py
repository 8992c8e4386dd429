# src/ocr_artifacts/resolver.py
"""
Resolve the four artifact paths for a model version and check they can be loaded.

Precedence per role (highest → lowest):

1. per-call overrides (instance config)
2. global overrides (the registry's config)
3. default file name of the model version
"""
from __future__ import annotations

import logging
from typing import Optional

from .catalog import ModelVersion
from .loader import ArtifactLoader
from .paths import (
    ROLES,
    LoadStrategy,
    PathOverrides,
    PathSource,
    ResolvedPath,
    ResolvedPathSet,
    Role,
    RoleError,
    ValidationResult,
    is_absolute_path,
)

logger = logging.getLogger(__name__)


def version_default_name(version: ModelVersion, role: Role) -> str:
    if role is Role.DET:
        return version.det_name
    if role is Role.CLS:
        return version.cls_name
    if role is Role.REC:
        return version.rec_name
    return version.dict_name


def _effective(overrides: Optional[PathOverrides], role: Role) -> Optional[str]:
    if overrides is None:
        return None
    value = overrides.for_role(role)
    if value is None or not value.strip():
        return None
    return value


def resolve_single(
    role: Role,
    version: ModelVersion,
    overrides: Optional[PathOverrides] = None,
    global_overrides: Optional[PathOverrides] = None,
) -> ResolvedPath:
    for candidate, source in (
        (_effective(overrides, role), PathSource.CUSTOM),
        (_effective(global_overrides, role), PathSource.GLOBAL_DEFAULT),
    ):
        if candidate is not None:
            absolute = is_absolute_path(candidate)
            logger.info(
                "Resolved %s path: %s (absolute=%s, source=%s)", role.value, candidate, absolute, source.value
            )
            return ResolvedPath(path=candidate, is_absolute=absolute, source=source)

    name = version_default_name(version, role)
    logger.info("Resolved %s path: %s (absolute=False, source=%s)", role.value, name, PathSource.VERSION_DEFAULT.value)
    return ResolvedPath(path=name, is_absolute=False, source=PathSource.VERSION_DEFAULT)


def resolve(
    overrides: Optional[PathOverrides],
    version: ModelVersion,
    *,
    global_overrides: Optional[PathOverrides] = None,
) -> ResolvedPathSet:
    """
    Merge overrides with the version defaults into one path per role.

    Pure function: no store is touched and it cannot fail. Blank overrides
    count as absent.
    """
    logger.info(
        "Resolving model paths for version %s (custom=%s, global=%s)",
        version.display_name,
        overrides is not None,
        global_overrides is not None,
    )
    return ResolvedPathSet(
        det=resolve_single(Role.DET, version, overrides, global_overrides),
        cls=resolve_single(Role.CLS, version, overrides, global_overrides),
        rec=resolve_single(Role.REC, version, overrides, global_overrides),
        dictionary=resolve_single(Role.DICT, version, overrides, global_overrides),
    )


def validate(paths: ResolvedPathSet, strategy: LoadStrategy, loader: ArtifactLoader) -> ValidationResult:
    """
    Check every role is accessible under `strategy` without reading content.

    All roles are checked; failures are reported in role order det, cls, rec, dict.
    """
    logger.info("Validating model paths with strategy %s", strategy.value)
    errors: list[RoleError] = []

    for role in ROLES:
        resolved = paths.get(role)
        if loader.can_load(resolved, strategy):
            logger.info("Validated %s path: %s", role.value, resolved.path)
            continue
        message = f"Cannot load {role.value} artifact from {resolved.path} with strategy {strategy.value}"
        logger.warning(message)
        errors.append(RoleError(role=role, message=message))

    return ValidationResult(errors=tuple(errors))
