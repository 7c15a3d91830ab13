"""Artifact export plan."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExportPlan:
    """Where build outputs come from and how they are renamed.

    Attributes:
        canonical_basename: Primary output name without extension, e.g. ``sketch.ino``
        extension: Primary output extension, e.g. ``.hex``
        source_dir: Build output directory holding the primary output
        destination_dir: Directory artifacts are copied to
        destination_basename: Name prefix for copied artifacts
    """

    canonical_basename: str
    extension: str
    source_dir: Path
    destination_dir: Path
    destination_basename: str

    @property
    def primary_output(self) -> Path:
        return self.source_dir / (self.canonical_basename + self.extension)

    @property
    def debug_symbols(self) -> Path:
        return self.source_dir / (self.canonical_basename + ".elf")

    def destination_for(self, variant_infix: str) -> Path:
        """Destination path for an output whose name continues with ``variant_infix``."""
        return self.destination_dir / (self.destination_basename + variant_infix)
