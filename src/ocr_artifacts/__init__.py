try:
    from ._version import version as __version__  # populated by setuptools-scm
except ModuleNotFoundError:
    __version__ = "0.0.0"

from .artifacts import ArtifactSet, load_artifacts
from .catalog import CATALOG, DEFAULT_VERSION_ID, ModelVersion, lookup
from .exceptions import ArtifactLoadFailure, ConfigError, OcrArtifactsError
from .loader import ArtifactLoader
from .paths import (
    LoadStrategy,
    OcrConfig,
    PathOverrides,
    PathSource,
    ResolvedPath,
    ResolvedPathSet,
    Role,
    RoleError,
    ValidationResult,
)
from .registry import ConfigRegistry, global_registry
from .resolver import resolve, validate
from .storage import BundledStore, LocalStore

__all__ = [
    "__version__",
    # catalog
    "CATALOG",
    "DEFAULT_VERSION_ID",
    "ModelVersion",
    "lookup",
    # values
    "LoadStrategy",
    "OcrConfig",
    "PathOverrides",
    "PathSource",
    "ResolvedPath",
    "ResolvedPathSet",
    "Role",
    "RoleError",
    "ValidationResult",
    # registry
    "ConfigRegistry",
    "global_registry",
    # resolution / loading
    "resolve",
    "validate",
    "ArtifactLoader",
    "BundledStore",
    "LocalStore",
    "ArtifactSet",
    "load_artifacts",
    # errors
    "OcrArtifactsError",
    "ConfigError",
    "ArtifactLoadFailure",
]
