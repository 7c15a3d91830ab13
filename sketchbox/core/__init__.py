from .errors import (
    ArtifactCopyError,
    BoardNotFoundError,
    BuildError,
    BuildOutputReadError,
    ConfigError,
    DirectoryCreationError,
    FileSystemError,
    InvalidInstanceError,
    MissingBoardError,
    PlatformNotInstalledError,
    SketchboxError,
    SketchLoadError,
    SketchPathMissingError,
    StageExecutionError,
)
from .logging import setup_logging


__all__ = [
    "setup_logging",
    "SketchboxError",
    "ConfigError",
    "FileSystemError",
    "BuildError",
    "InvalidInstanceError",
    "SketchPathMissingError",
    "SketchLoadError",
    "MissingBoardError",
    "BoardNotFoundError",
    "PlatformNotInstalledError",
    "DirectoryCreationError",
    "StageExecutionError",
    "BuildOutputReadError",
    "ArtifactCopyError",
]
