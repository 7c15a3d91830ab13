"""Assembled build configuration consumed by the build engine."""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from sketchbox.board.models import FQBN, ResolvedBoard
from sketchbox.compilation.models.compile_request import WarningsLevel
from sketchbox.utils.build_log_middleware import BuildLogSink


# Debug levels handed to the build engine
DEBUG_LEVEL_DEBUG = 100
DEBUG_LEVEL_DEFAULT = 5

ARDUINO_API_VERSION = "10607"

CORE_CACHE_DIR_NAME = "arduino-core-cache"


@dataclass(frozen=True)
class BuildConfig:
    """Read-only configuration for one compile invocation.

    Directory lists are ordered search paths. The streams and the log sink
    belong to the caller. ``core_build_cache_path`` is shared by every
    compile on the machine; locking around it is the build engine's job.
    """

    board: ResolvedBoard
    sketch_location: Path
    hardware_dirs: tuple[Path, ...]
    builtin_tools_dirs: tuple[Path, ...]
    builtin_libraries_dirs: tuple[Path, ...]
    other_libraries_dirs: tuple[Path, ...]
    build_path: Path | None
    build_cache_path: Path | None
    core_build_cache_path: Path
    exec_stdout: TextIO
    exec_stderr: TextIO
    log_sink: BuildLogSink
    jobs: int = 0
    debug_level: int = DEBUG_LEVEL_DEFAULT
    verbose: bool = False
    quiet: bool = False
    optimize_for_debug: bool = False
    warnings_level: WarningsLevel = WarningsLevel.NONE
    usb_vid_pid: str = ""
    arduino_api_version: str = ARDUINO_API_VERSION
    custom_build_properties: tuple[str, ...] = ()
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @property
    def fqbn(self) -> FQBN:
        return self.board.fqbn
