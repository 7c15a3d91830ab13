"""Build stage selection and dispatch."""

import logging

from sketchbox.compilation.models import (
    BuildConfig,
    BuildStage,
    CompileRequest,
    StageResult,
)
from sketchbox.protocols import BuildEngineProtocol


logger = logging.getLogger(__name__)


def select_stage(request: CompileRequest) -> BuildStage:
    """Choose the stage a request runs.

    Show-properties wins over preprocess, which wins over a full build.
    """
    if request.show_properties:
        return BuildStage.SHOW_PROPERTIES
    if request.preprocess:
        return BuildStage.PREPROCESS
    return BuildStage.FULL_BUILD


class StageDispatcher:
    """Run exactly one build stage on the build engine.

    Stage errors are propagated as raised by the engine.
    """

    def __init__(self, engine: BuildEngineProtocol) -> None:
        self.engine = engine

    def dispatch(self, config: BuildConfig, stage: BuildStage) -> StageResult:
        logger.debug("Dispatching %s stage for %s", stage.value, config.fqbn)

        if stage is BuildStage.SHOW_PROPERTIES:
            self.engine.run_show_properties(config)
            return StageResult(stage)

        if stage is BuildStage.PREPROCESS:
            self.engine.run_preprocess(config)
            return StageResult(stage)

        build_properties = self.engine.run_full_build(config)
        return StageResult(stage, build_properties=build_properties)


def create_stage_dispatcher(engine: BuildEngineProtocol) -> StageDispatcher:
    """Create a stage dispatcher driving ``engine``."""
    return StageDispatcher(engine)
