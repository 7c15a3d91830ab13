"""Sketch domain models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class Sketch:
    """A sketch loaded from disk.

    Attributes:
        full_path: Sketch directory
        name: Sketch name, the directory name
        main_file: Primary sketch source file
        default_fqbn: Board recorded in the sketch metadata, if any
    """

    full_path: Path
    name: str
    main_file: Path
    default_fqbn: str | None = None
