"""Error hierarchy for Sketchbox.

Every error carries a human readable message plus an optional ``context``
dictionary holding the identifiers (board, sketch, paths) and the underlying
cause, so callers can log and report failures without parsing messages.
"""

from pathlib import Path
from typing import Any


class SketchboxError(Exception):
    """Base exception for all Sketchbox errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(SketchboxError):
    """Raised when configuration cannot be loaded or is invalid."""


class FileSystemError(SketchboxError):
    """Raised when a file system operation fails."""


class BuildError(SketchboxError):
    """Base class for errors raised by the compile pipeline."""


class InvalidInstanceError(BuildError):
    """No package manager instance backs the request."""

    def __init__(self, instance_id: int) -> None:
        super().__init__("invalid instance", {"instance_id": instance_id})
        self.instance_id = instance_id


class SketchPathMissingError(BuildError):
    """The request does not name a sketch."""

    def __init__(self) -> None:
        super().__init__("missing sketch path")


class SketchLoadError(BuildError):
    """The sketch path cannot be opened as a sketch."""

    def __init__(self, sketch_path: Path | str, cause: str) -> None:
        super().__init__(
            f"opening sketch: {cause}",
            {"sketch_path": str(sketch_path), "cause": cause},
        )
        self.sketch_path = Path(sketch_path)
        self.cause = cause


class MissingBoardError(BuildError):
    """No board identifier could be derived from the request or the sketch."""

    def __init__(self, sketch_path: Path | str | None = None) -> None:
        context = {"sketch_path": str(sketch_path)} if sketch_path else {}
        super().__init__("no board provided", context)


class BoardNotFoundError(BuildError):
    """The board identifier does not match any known board."""

    def __init__(self, identifier: str, cause: str) -> None:
        super().__init__(
            f"board '{identifier}' not found: {cause}",
            {"identifier": identifier, "cause": cause},
        )
        self.identifier = identifier
        self.cause = cause


class PlatformNotInstalledError(BuildError):
    """The platform owning the board is unknown or not installed."""

    def __init__(self, package: str, architecture: str) -> None:
        super().__init__(
            "platform not installed",
            {"package": package, "architecture": architecture},
        )
        self.package = package
        self.architecture = architecture


class DirectoryCreationError(BuildError):
    """A build directory requested by the caller cannot be created."""

    def __init__(self, kind: str, path: Path, cause: str) -> None:
        super().__init__(
            f"cannot create {kind} directory: {cause}",
            {"kind": kind, "path": str(path), "cause": cause},
        )
        self.kind = kind
        self.path = path


class StageExecutionError(BuildError):
    """The delegated build stage failed."""

    def __init__(
        self, stage: str, message: str, return_code: int | None = None
    ) -> None:
        super().__init__(message, {"stage": stage, "return_code": return_code})
        self.stage = stage
        self.return_code = return_code


class BuildOutputReadError(BuildError):
    """The build output directory cannot be listed during export."""

    def __init__(self, path: Path, cause: str) -> None:
        super().__init__(
            f"reading build directory: {cause}",
            {"path": str(path), "cause": cause},
        )
        self.path = path


class ArtifactCopyError(BuildError):
    """A build artifact cannot be copied to the export destination."""

    def __init__(self, source: Path, destination: Path, cause: str) -> None:
        super().__init__(
            f"copying output file: {cause}",
            {"source": str(source), "destination": str(destination), "cause": cause},
        )
        self.source = source
        self.destination = destination


def create_file_error(
    path: Path,
    operation: str,
    error: Exception,
    details: dict[str, Any] | None = None,
) -> FileSystemError:
    """Build a FileSystemError describing a failed file operation.

    Args:
        path: Path the operation was applied to
        operation: Name of the adapter operation
        error: Original exception
        details: Extra context for the error

    Returns:
        FileSystemError with path, operation and cause in its context
    """
    context: dict[str, Any] = {
        "path": str(path),
        "operation": operation,
        "error_type": type(error).__name__,
        "cause": str(error),
    }
    if details:
        context.update(details)
    return FileSystemError(f"{operation} failed for {path}: {error}", context)
