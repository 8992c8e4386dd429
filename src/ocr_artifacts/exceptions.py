from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .paths import LoadStrategy, Role


class OcrArtifactsError(Exception):
    pass


class ConfigError(OcrArtifactsError):
    """Configuration-related error."""
    pass


class ArtifactLoadFailure(OcrArtifactsError):
    """
    Raised when no source allowed by the load strategy yields the artifact.

    Carries the role, the resolved path and the strategy so callers can decide
    whether to switch strategy, fetch the artifact remotely, or give up.
    """

    def __init__(self, role: Role, path: str, strategy: LoadStrategy):
        self.role = role
        self.path = path
        self.strategy = strategy
        super().__init__(
            f"Failed to load {role.value} artifact from '{path}' with strategy {strategy.value}"
        )

    def __reduce__(self):
        return type(self), (self.role, self.path, self.strategy)
