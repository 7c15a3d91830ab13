"""Build stage selection models."""

from dataclasses import dataclass
from enum import Enum

from sketchbox.compilation.properties import BuildProperties


class BuildStage(str, Enum):
    """The three build stages a compile request can run."""

    SHOW_PROPERTIES = "show_properties"
    PREPROCESS = "preprocess"
    FULL_BUILD = "full_build"


@dataclass
class StageResult:
    """Outcome of a successful stage.

    Only a full build produces build properties; the other stages produce
    no artifacts.
    """

    stage: BuildStage
    build_properties: BuildProperties | None = None

    @property
    def produces_artifacts(self) -> bool:
        return self.stage is BuildStage.FULL_BUILD
