"""Build engine driving an ``arduino-builder`` compatible executable."""

import hashlib
import logging
import tempfile
from pathlib import Path

from sketchbox.compilation.models import BuildConfig, BuildStage
from sketchbox.compilation.properties import BuildProperties
from sketchbox.core.errors import StageExecutionError
from sketchbox.utils.stream_process import (
    CommandCancelledError,
    OutputMiddleware,
    run_command,
)


logger = logging.getLogger(__name__)

STAGE_FLAGS = {
    BuildStage.SHOW_PROPERTIES: "-dump-prefs",
    BuildStage.PREPROCESS: "-preprocess",
    BuildStage.FULL_BUILD: "-compile",
}


class CaptureMiddleware(OutputMiddleware[str]):
    """Keep stdout lines and forward stderr to the build log sink."""

    def __init__(self, config: BuildConfig) -> None:
        self.config = config

    def process(self, line: str, stream_type: str) -> str:
        if stream_type == "stderr":
            self.config.log_sink.process(line, stream_type)
        return line


def is_property_line(line: str) -> bool:
    """Whether a dump line holds a ``key=value`` pair with a non-empty key."""
    key, sep, _ = line.partition("=")
    return bool(sep and key.strip())


def default_build_path(sketch_location: Path) -> Path:
    """Per-sketch build directory used when none is requested."""
    digest = hashlib.md5(str(sketch_location).encode("utf-8")).hexdigest().upper()
    return Path(tempfile.gettempdir()) / f"arduino-sketch-{digest}"


class ArduinoBuilderEngine:
    """Run build stages through ``arduino-builder``.

    Output is streamed to the config's log sink. A full build is followed by
    a property dump so the caller can locate the produced artifacts.
    """

    def __init__(self, builder_path: str = "arduino-builder") -> None:
        self.builder_path = builder_path

    def run_show_properties(self, config: BuildConfig) -> None:
        self._run(BuildStage.SHOW_PROPERTIES, config)

    def run_preprocess(self, config: BuildConfig) -> None:
        self._run(BuildStage.PREPROCESS, config)

    def run_full_build(self, config: BuildConfig) -> BuildProperties:
        self._run(BuildStage.FULL_BUILD, config)

        lines = self._run(
            BuildStage.FULL_BUILD,
            config,
            flag=STAGE_FLAGS[BuildStage.SHOW_PROPERTIES],
            middleware=CaptureMiddleware(config),
            action="build properties dump after compile",
        )
        return BuildProperties.from_lines(
            (line for line in lines if is_property_line(line)),
            source="build properties dump",
        )

    def build_command(self, config: BuildConfig, flag: str) -> list[str]:
        """Build the command line for one builder invocation."""
        build_path = config.build_path or default_build_path(config.sketch_location)

        cmd = [self.builder_path, flag, "-logger", "human"]
        for hardware_dir in config.hardware_dirs:
            cmd += ["-hardware", str(hardware_dir)]
        for tools_dir in config.builtin_tools_dirs:
            cmd += ["-tools", str(tools_dir)]
        for library_dir in config.builtin_libraries_dirs:
            cmd += ["-built-in-libraries", str(library_dir)]
        for library_dir in config.other_libraries_dirs:
            cmd += ["-libraries", str(library_dir)]

        build_cache = config.build_cache_path or config.core_build_cache_path
        cmd += ["-fqbn", str(config.fqbn)]
        cmd += ["-build-path", str(build_path)]
        cmd += ["-build-cache", str(build_cache)]
        cmd += ["-core-api-version", config.arduino_api_version]
        cmd += ["-warnings", config.warnings_level.value]
        cmd += ["-debug-level", str(config.debug_level)]
        if config.jobs > 0:
            cmd += ["-jobs", str(config.jobs)]
        if config.usb_vid_pid:
            cmd += ["-vid-pid", config.usb_vid_pid]
        for assignment in config.custom_build_properties:
            cmd += ["-prefs", assignment]
        if config.verbose:
            cmd.append("-verbose")
        if config.quiet:
            cmd.append("-quiet")
        if config.optimize_for_debug:
            cmd.append("-optimize-for-debug")

        cmd.append(str(config.sketch_location))
        return cmd

    def _run(
        self,
        stage: BuildStage,
        config: BuildConfig,
        flag: str | None = None,
        middleware: OutputMiddleware[str] | None = None,
        action: str | None = None,
    ) -> list[str]:
        if config.build_path is None:
            default_build_path(config.sketch_location).mkdir(
                parents=True, exist_ok=True
            )

        cmd = self.build_command(config, flag or STAGE_FLAGS[stage])
        try:
            return_code, stdout, _ = run_command(
                cmd,
                middleware=middleware or config.log_sink,
                cancel_event=config.cancel_event,
            )
        except CommandCancelledError as e:
            raise StageExecutionError(stage.value, "build cancelled") from e
        except FileNotFoundError as e:
            raise StageExecutionError(
                stage.value, f"build engine not found: {self.builder_path}"
            ) from e

        if return_code != 0:
            logger.debug("%s exited with %d", self.builder_path, return_code)
            description = action or stage.value.replace("_", " ")
            raise StageExecutionError(
                stage.value,
                f"{description} failed with exit code {return_code}",
                return_code,
            )
        return stdout


def create_arduino_builder_engine(
    builder_path: str = "arduino-builder",
) -> ArduinoBuilderEngine:
    """Create a build engine for the given executable."""
    return ArduinoBuilderEngine(builder_path)
