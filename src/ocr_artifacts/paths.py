# src/ocr_artifacts/paths.py
"""
Value types shared by path resolution and artifact loading.

Paths come in two forms:

- absolute: starts with "/", e.g. "/sdcard/models/det.onnx". Only the local
  store can serve these.
- relative: e.g. "det_v4.onnx". The local store looks under its artifacts root
  (``<local_root>/models/``), the bundled store at its own root.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from .catalog import ModelVersion

SEPARATOR = "/"


class Role(str, Enum):
    DET = "det"
    CLS = "cls"
    REC = "rec"
    DICT = "dict"


# Fixed order used for resolution, validation and reporting.
ROLES: tuple[Role, ...] = (Role.DET, Role.CLS, Role.REC, Role.DICT)


class LoadStrategy(str, Enum):
    """
    Order in which the two stores are tried, and whether falling back is allowed.

    FILE_FIRST   local store, then bundled store (default)
    ASSETS_FIRST bundled store, then local store
    FILE_ONLY    local store only
    ASSETS_ONLY  bundled store only
    """

    FILE_FIRST = "FILE_FIRST"
    ASSETS_FIRST = "ASSETS_FIRST"
    FILE_ONLY = "FILE_ONLY"
    ASSETS_ONLY = "ASSETS_ONLY"


class PathSource(str, Enum):
    CUSTOM = "CUSTOM"
    GLOBAL_DEFAULT = "GLOBAL_DEFAULT"
    VERSION_DEFAULT = "VERSION_DEFAULT"


def is_absolute_path(path: str) -> bool:
    return path.startswith(SEPARATOR)


class PathOverrides(BaseModel):
    """
    Optional per-role path overrides.

    Empty or whitespace-only values are stored as None so that they behave
    exactly like an override that was never given.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    det_path: Optional[str] = Field(default=None, description="Detector model path.")
    cls_path: Optional[str] = Field(default=None, description="Classifier model path.")
    rec_path: Optional[str] = Field(default=None, description="Recognizer model path.")
    dict_path: Optional[str] = Field(default=None, description="Dictionary file path.")

    # noinspection PyNestedDecorators
    @field_validator("det_path", "cls_path", "rec_path", "dict_path")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v

    def for_role(self, role: Role) -> Optional[str]:
        return getattr(self, f"{role.value}_path")

    @classmethod
    def all_paths(
        cls,
        base_dir: str,
        *,
        det_name: str,
        cls_name: str,
        rec_name: str,
        dict_name: str,
    ) -> "PathOverrides":
        """Place all four files in one directory (trailing "/" on base_dir is ignored)."""
        base = base_dir.rstrip(SEPARATOR)
        return cls(
            det_path=f"{base}/{det_name}",
            cls_path=f"{base}/{cls_name}",
            rec_path=f"{base}/{rec_name}",
            dict_path=f"{base}/{dict_name}",
        )

    @classmethod
    def from_version(cls, base_dir: str, version: ModelVersion) -> "PathOverrides":
        """
        Use the default file names of `version`, located in `base_dir`.

        e.g. from_version("/sdcard/ocr_v4", lookup("V4")) yields
        "/sdcard/ocr_v4/ch_PP-OCRv4_det_infer.onnx" for the detector, and so on.
        """
        return cls.all_paths(
            base_dir,
            det_name=version.det_name,
            cls_name=version.cls_name,
            rec_name=version.rec_name,
            dict_name=version.dict_name,
        )


class OcrConfig(BaseModel):
    """Path overrides plus load strategy; None overrides means version defaults."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path_overrides: Optional[PathOverrides] = None
    load_strategy: LoadStrategy = LoadStrategy.FILE_FIRST


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    path: str
    is_absolute: bool
    source: PathSource


@dataclass(frozen=True, slots=True)
class ResolvedPathSet:
    det: ResolvedPath
    cls: ResolvedPath
    rec: ResolvedPath
    dictionary: ResolvedPath

    def get(self, role: Role) -> ResolvedPath:
        if role is Role.DICT:
            return self.dictionary
        return getattr(self, role.value)

    def items(self) -> Iterator[tuple[Role, ResolvedPath]]:
        for role in ROLES:
            yield role, self.get(role)


@dataclass(frozen=True, slots=True)
class RoleError:
    role: Role
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Success when `errors` is empty; otherwise one entry per failing role, in role order."""

    errors: tuple[RoleError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def failed_roles(self) -> list[Role]:
        return [e.role for e in self.errors]
