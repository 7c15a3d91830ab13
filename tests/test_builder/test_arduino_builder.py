"""Tests for the arduino-builder build engine."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from sketchbox.builder import (
    ArduinoBuilderEngine,
    create_arduino_builder_engine,
    default_build_path,
)
from sketchbox.compilation.models import BuildConfig, WarningsLevel
from sketchbox.core.errors import StageExecutionError
from sketchbox.protocols import BuildEngineProtocol
from sketchbox.utils.build_log_middleware import BuildLogSink
from sketchbox.utils.stream_process import CommandCancelledError


RUN_COMMAND = "sketchbox.builder.arduino_builder.run_command"


def _config(tmp_path: Path, board, **overrides) -> BuildConfig:
    out = io.StringIO()
    err = io.StringIO()
    values = {
        "board": board,
        "sketch_location": tmp_path / "Blink",
        "hardware_dirs": (Path("/hw/packages"), Path("/hw/user")),
        "builtin_tools_dirs": (Path("/tools"),),
        "builtin_libraries_dirs": (Path("/ide/libraries"),),
        "other_libraries_dirs": (Path("/libs/extra"), Path("/home/me/Arduino/libraries")),
        "build_path": tmp_path / "build",
        "build_cache_path": None,
        "core_build_cache_path": Path("/tmp/arduino-core-cache"),
        "exec_stdout": out,
        "exec_stderr": err,
        "log_sink": BuildLogSink(out, err),
        "custom_build_properties": ("build.warn_data_percentage=75",),
    }
    values.update(overrides)
    return BuildConfig(**values)


class TestBuildCommand:
    """Test command line construction."""

    def setup_method(self):
        self.engine = ArduinoBuilderEngine("/usr/bin/arduino-builder")

    def test_implements_protocol(self):
        assert isinstance(self.engine, BuildEngineProtocol)

    def test_full_command(self, tmp_path, uno_board):
        config = _config(
            tmp_path,
            uno_board,
            jobs=2,
            verbose=True,
            optimize_for_debug=True,
            warnings_level=WarningsLevel.MORE,
            usb_vid_pid="2341_0043",
        )

        cmd = self.engine.build_command(config, "-compile")

        assert cmd[:4] == ["/usr/bin/arduino-builder", "-compile", "-logger", "human"]
        assert cmd[-1] == str(tmp_path / "Blink")
        joined = " ".join(cmd)
        assert "-hardware /hw/packages -hardware /hw/user" in joined
        assert "-tools /tools" in joined
        assert "-built-in-libraries /ide/libraries" in joined
        assert "-libraries /libs/extra -libraries /home/me/Arduino/libraries" in joined
        assert "-fqbn arduino:avr:uno" in joined
        assert f"-build-path {tmp_path / 'build'}" in joined
        assert "-build-cache /tmp/arduino-core-cache" in joined
        assert "-core-api-version 10607" in joined
        assert "-warnings more" in joined
        assert "-debug-level 5" in joined
        assert "-jobs 2" in joined
        assert "-vid-pid 2341_0043" in joined
        assert "-prefs build.warn_data_percentage=75" in joined
        assert "-verbose" in cmd
        assert "-optimize-for-debug" in cmd
        assert "-quiet" not in cmd

    def test_optional_flags_omitted(self, tmp_path, uno_board):
        cmd = self.engine.build_command(_config(tmp_path, uno_board), "-compile")

        assert "-jobs" not in cmd
        assert "-vid-pid" not in cmd
        assert "-verbose" not in cmd

    def test_request_build_cache_takes_precedence(self, tmp_path, uno_board):
        config = _config(tmp_path, uno_board, build_cache_path=tmp_path / "cache")

        cmd = self.engine.build_command(config, "-compile")

        assert cmd[cmd.index("-build-cache") + 1] == str(tmp_path / "cache")

    def test_default_build_path(self, tmp_path, uno_board):
        config = _config(tmp_path, uno_board, build_path=None)

        cmd = self.engine.build_command(config, "-compile")

        expected = default_build_path(tmp_path / "Blink")
        assert cmd[cmd.index("-build-path") + 1] == str(expected)
        assert expected.name.startswith("arduino-sketch-")
        assert expected == default_build_path(tmp_path / "Blink")


class TestStages:
    """Test stage execution through run_command."""

    def setup_method(self):
        self.engine = create_arduino_builder_engine("arduino-builder")

    def test_show_properties_uses_dump_prefs(self, tmp_path, uno_board):
        config = _config(tmp_path, uno_board)

        with patch(RUN_COMMAND, return_value=(0, [], [])) as mock_run:
            self.engine.run_show_properties(config)

        cmd = mock_run.call_args.args[0]
        assert cmd[1] == "-dump-prefs"
        assert mock_run.call_args.kwargs["middleware"] is config.log_sink
        assert mock_run.call_args.kwargs["cancel_event"] is config.cancel_event

    def test_preprocess(self, tmp_path, uno_board):
        with patch(RUN_COMMAND, return_value=(0, [], [])) as mock_run:
            self.engine.run_preprocess(_config(tmp_path, uno_board))

        assert mock_run.call_args.args[0][1] == "-preprocess"

    def test_full_build_returns_dumped_properties(self, tmp_path, uno_board):
        dump = [
            "Using board 'uno' from platform in folder: /hw",
            "build.path=/tmp/build",
            "recipe.output.tmp_file={build.project_name}.hex",
        ]

        with patch(RUN_COMMAND, side_effect=[(0, [], []), (0, dump, [])]) as mock_run:
            props = self.engine.run_full_build(_config(tmp_path, uno_board))

        flags = [call.args[0][1] for call in mock_run.call_args_list]
        assert flags == ["-compile", "-dump-prefs"]
        assert props.as_dict() == {
            "build.path": "/tmp/build",
            "recipe.output.tmp_file": "{build.project_name}.hex",
        }

    def test_non_zero_exit(self, tmp_path, uno_board):
        with (
            patch(RUN_COMMAND, return_value=(1, [], ["error: expected ';'"])),
            pytest.raises(StageExecutionError) as exc_info,
        ):
            self.engine.run_full_build(_config(tmp_path, uno_board))

        assert exc_info.value.return_code == 1
        assert exc_info.value.stage == "full_build"
        assert str(exc_info.value) == "full build failed with exit code 1"

    def test_banner_lines_in_dump_are_ignored(self, tmp_path, uno_board):
        dump = ["build.path=/x", "=== Compiling ===", "recipe.output.tmp_file=a.hex"]

        with patch(RUN_COMMAND, side_effect=[(0, [], []), (0, dump, [])]):
            props = self.engine.run_full_build(_config(tmp_path, uno_board))

        assert props.as_dict() == {
            "build.path": "/x",
            "recipe.output.tmp_file": "a.hex",
        }

    def test_property_dump_failure_after_compile(self, tmp_path, uno_board):
        with (
            patch(RUN_COMMAND, side_effect=[(0, [], []), (2, [], [])]),
            pytest.raises(StageExecutionError) as exc_info,
        ):
            self.engine.run_full_build(_config(tmp_path, uno_board))

        assert exc_info.value.return_code == 2
        assert str(exc_info.value) == (
            "build properties dump after compile failed with exit code 2"
        )

    def test_missing_executable(self, tmp_path, uno_board):
        with (
            patch(RUN_COMMAND, side_effect=FileNotFoundError("arduino-builder")),
            pytest.raises(StageExecutionError, match="build engine not found"),
        ):
            self.engine.run_preprocess(_config(tmp_path, uno_board))

    def test_cancelled(self, tmp_path, uno_board):
        with (
            patch(RUN_COMMAND, side_effect=CommandCancelledError("cancelled")),
            pytest.raises(StageExecutionError, match="build cancelled"),
        ):
            self.engine.run_show_properties(_config(tmp_path, uno_board))
