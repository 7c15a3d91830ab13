"""Compile response model."""

from pathlib import Path

from pydantic import Field

from sketchbox.models.base import SketchboxBaseModel


class CompileResponse(SketchboxBaseModel):
    """Result of a successful compile.

    ``exported_files`` is empty for show-properties, preprocess and dry-run
    requests.
    """

    stage: str
    exported_files: list[Path] = Field(default_factory=list)
