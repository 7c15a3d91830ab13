"""Assembly of the immutable build configuration."""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from sketchbox.adapters import create_file_adapter
from sketchbox.board.models import ResolvedBoard
from sketchbox.compilation.models import (
    DEBUG_LEVEL_DEBUG,
    DEBUG_LEVEL_DEFAULT,
    BuildConfig,
    BuildEnvironment,
    CompileRequest,
    WarningsLevel,
)
from sketchbox.compilation.ide_libraries import find_ide_libraries_dir
from sketchbox.compilation.properties import merge_build_properties
from sketchbox.core.errors import DirectoryCreationError, FileSystemError
from sketchbox.protocols import FileAdapterProtocol
from sketchbox.sketch.models import Sketch
from sketchbox.utils.build_log_middleware import BuildLogSink


logger = logging.getLogger(__name__)

# Properties every build gets; request properties are applied after these
DEFAULT_BUILD_PROPERTIES = ("build.warn_data_percentage=75",)


class BuildConfigAssembler:
    """Build a BuildConfig from a request, its board and the environment."""

    def __init__(
        self,
        environment: BuildEnvironment,
        file_adapter: FileAdapterProtocol | None = None,
        ide_libraries_lookup: Callable[[Path], Path | None] = find_ide_libraries_dir,
    ) -> None:
        self.environment = environment
        self.file_adapter = file_adapter or create_file_adapter()
        self.ide_libraries_lookup = ide_libraries_lookup

    def assemble(
        self,
        request: CompileRequest,
        board: ResolvedBoard,
        sketch: Sketch,
        out_stream: TextIO,
        err_stream: TextIO,
        debug: bool = False,
        cancel_event: threading.Event | None = None,
    ) -> BuildConfig:
        """Assemble the configuration for one compile.

        Raises:
            DirectoryCreationError: If the build path or build cache path
                cannot be created
        """
        build_path = self._ensure_directory("build", request.build_path)
        build_cache_path = self._ensure_directory(
            "build cache", request.build_cache_path
        )

        other_libraries_dirs = (
            *(Path(library) for library in request.libraries),
            self.environment.libraries_dir,
        )
        logger.debug(
            "Assembling build config for %s (build path: %s)", board.fqbn, build_path
        )

        return BuildConfig(
            board=board,
            sketch_location=sketch.full_path,
            hardware_dirs=self.environment.hardware_dirs,
            builtin_tools_dirs=self.environment.builtin_tools_dirs,
            builtin_libraries_dirs=self._builtin_libraries_dirs(),
            other_libraries_dirs=other_libraries_dirs,
            build_path=build_path,
            build_cache_path=build_cache_path,
            core_build_cache_path=self.environment.core_cache_dir,
            exec_stdout=out_stream,
            exec_stderr=err_stream,
            log_sink=BuildLogSink(stdout=out_stream, stderr=err_stream),
            jobs=request.jobs,
            debug_level=DEBUG_LEVEL_DEBUG if debug else DEBUG_LEVEL_DEFAULT,
            verbose=request.verbose,
            quiet=request.quiet,
            optimize_for_debug=request.optimize_for_debug,
            warnings_level=WarningsLevel(request.warnings),
            usb_vid_pid=request.vid_pid,
            custom_build_properties=tuple(
                merge_build_properties(
                    DEFAULT_BUILD_PROPERTIES, request.build_properties
                )
            ),
            cancel_event=cancel_event or threading.Event(),
        )

    def _ensure_directory(self, kind: str, value: str) -> Path | None:
        """Create a requested directory if absent; empty means not requested."""
        if not value:
            return None
        path = Path(value)
        try:
            self.file_adapter.mkdir(path, parents=True, exist_ok=True)
        except FileSystemError as e:
            raise DirectoryCreationError(
                kind, path, str(e.context.get("cause", e))
            ) from e
        return path

    def _builtin_libraries_dirs(self) -> tuple[Path, ...]:
        preferences_file = self.environment.preferences_file
        if preferences_file is None:
            return ()
        ide_libraries_dir = self.ide_libraries_lookup(preferences_file)
        if ide_libraries_dir is None:
            return ()
        return (ide_libraries_dir,)


def create_build_config_assembler(
    environment: BuildEnvironment,
    file_adapter: FileAdapterProtocol | None = None,
) -> BuildConfigAssembler:
    """Create a build config assembler for ``environment``."""
    return BuildConfigAssembler(environment, file_adapter=file_adapter)
