"""Protocol definition for file system operations."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileAdapterProtocol(Protocol):
    """Protocol for file system operations used by the compile pipeline."""

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read text content from a file.

        Raises:
            FileSystemError: If file cannot be read
        """
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check if a path is a file."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        ...

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        """Create a directory.

        Raises:
            FileSystemError: If directory cannot be created
        """
        ...

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file from source to destination.

        Raises:
            FileSystemError: If file cannot be copied
        """
        ...

    def list_directory(self, path: Path) -> list[Path]:
        """List all items in a directory.

        Raises:
            FileSystemError: If directory cannot be accessed
        """
        ...
