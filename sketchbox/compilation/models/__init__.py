"""Compilation domain models."""

from .build_config import (
    ARDUINO_API_VERSION,
    CORE_CACHE_DIR_NAME,
    DEBUG_LEVEL_DEBUG,
    DEBUG_LEVEL_DEFAULT,
    BuildConfig,
)
from .build_environment import BuildEnvironment
from .compile_request import CompileRequest, WarningsLevel
from .compile_response import CompileResponse
from .export_plan import ExportPlan
from .stage import BuildStage, StageResult


__all__ = [
    "ARDUINO_API_VERSION",
    "CORE_CACHE_DIR_NAME",
    "DEBUG_LEVEL_DEBUG",
    "DEBUG_LEVEL_DEFAULT",
    "BuildConfig",
    "BuildEnvironment",
    "BuildStage",
    "CompileRequest",
    "CompileResponse",
    "ExportPlan",
    "StageResult",
    "WarningsLevel",
]
