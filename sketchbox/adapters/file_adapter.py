"""File adapter for abstracting file system operations."""

import logging
import shutil
from pathlib import Path

from sketchbox.core.errors import FileSystemError, create_file_error
from sketchbox.protocols import FileAdapterProtocol


logger = logging.getLogger(__name__)


class FileSystemAdapter:
    """File system adapter implementation."""

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        try:
            logger.debug("Reading text file: %s", path)
            with path.open(mode="r", encoding=encoding) as f:
                content = f.read()
            logger.debug("Successfully read %d characters from %s", len(content), path)
            return content
        except FileNotFoundError as e:
            error = create_file_error(path, "read_text", e, {"encoding": encoding})
            logger.debug("File not found: %s", path)
            raise error from e
        except PermissionError as e:
            error = create_file_error(path, "read_text", e, {"encoding": encoding})
            logger.error("Permission denied reading file: %s", path)
            raise error from e
        except (OSError, UnicodeDecodeError) as e:
            error = create_file_error(path, "read_text", e, {"encoding": encoding})
            logger.error("Error reading file %s: %s", path, e)
            raise error from e

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def is_file(self, path: Path) -> bool:
        """Check if a path is a file."""
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        """Create a directory."""
        try:
            logger.debug("Creating directory: %s", path)
            path.mkdir(parents=parents, exist_ok=exist_ok)
        except PermissionError as e:
            error = create_file_error(
                path, "mkdir", e, {"parents": parents, "exist_ok": exist_ok}
            )
            logger.error("Permission denied creating directory: %s", path)
            raise error from e
        except OSError as e:
            error = create_file_error(
                path, "mkdir", e, {"parents": parents, "exist_ok": exist_ok}
            )
            logger.error("Error creating directory %s: %s", path, e)
            raise error from e

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file from source to destination."""
        try:
            # Ensure destination directory exists
            self.mkdir(dst.parent)

            logger.debug("Copying file: %s -> %s", src, dst)
            shutil.copy2(src, dst)
        except FileNotFoundError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Source file not found: %s", src)
            raise error from e
        except PermissionError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Permission denied copying file: %s -> %s", src, dst)
            raise error from e
        except FileSystemError:
            # Let FileSystemError from mkdir pass through
            raise
        except OSError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Error copying file %s to %s: %s", src, dst, e)
            raise error from e

    def list_directory(self, path: Path) -> list[Path]:
        """List all items in a directory, sorted by name."""
        try:
            logger.debug("Listing directory contents: %s", path)
            if not self.is_dir(path):
                error = create_file_error(
                    path, "list_directory", NotADirectoryError("Not a directory"), {}
                )
                logger.error("Path is not a directory: %s", path)
                raise error

            items = sorted(path.iterdir())
            logger.debug("Found %d items in %s", len(items), path)
            return items
        except FileSystemError:
            raise
        except OSError as e:
            error = create_file_error(path, "list_directory", e, {})
            logger.error("Error listing directory %s: %s", path, e)
            raise error from e


def create_file_adapter() -> FileAdapterProtocol:
    """Create a file adapter with default implementation."""
    return FileSystemAdapter()
