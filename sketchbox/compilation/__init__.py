"""Compilation domain: board resolution, build configuration, stage dispatch
and artifact export for compile requests.
"""

from .artifacts import ArtifactExporter, create_artifact_exporter
from .board_resolver import BoardResolver, create_board_resolver, select_board_identifier
from .config_assembler import BuildConfigAssembler, create_build_config_assembler
from .models import (
    BuildConfig,
    BuildEnvironment,
    BuildStage,
    CompileRequest,
    CompileResponse,
    ExportPlan,
    StageResult,
    WarningsLevel,
)
from .properties import BuildProperties, expand_props, merge_build_properties
from .services import CompileService, create_compile_service
from .stage_dispatcher import StageDispatcher, create_stage_dispatcher, select_stage


__all__ = [
    "ArtifactExporter",
    "BoardResolver",
    "BuildConfig",
    "BuildConfigAssembler",
    "BuildEnvironment",
    "BuildProperties",
    "BuildStage",
    "CompileRequest",
    "CompileResponse",
    "CompileService",
    "ExportPlan",
    "StageDispatcher",
    "StageResult",
    "WarningsLevel",
    "create_artifact_exporter",
    "create_board_resolver",
    "create_build_config_assembler",
    "create_compile_service",
    "create_stage_dispatcher",
    "expand_props",
    "merge_build_properties",
    "select_board_identifier",
    "select_stage",
]
