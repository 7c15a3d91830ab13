"""Build artifact export."""

from .exporter import (
    ArtifactExporter,
    create_artifact_exporter,
    sanitize_fqbn,
    split_output_name,
)


__all__ = [
    "ArtifactExporter",
    "create_artifact_exporter",
    "sanitize_fqbn",
    "split_output_name",
]
