"""Tests for BuildConfigAssembler."""

import io
import threading
from pathlib import Path
from unittest.mock import Mock

import pytest

from sketchbox.compilation.config_assembler import (
    DEFAULT_BUILD_PROPERTIES,
    BuildConfigAssembler,
    create_build_config_assembler,
)
from sketchbox.compilation.models import (
    ARDUINO_API_VERSION,
    DEBUG_LEVEL_DEBUG,
    DEBUG_LEVEL_DEFAULT,
    BuildEnvironment,
    WarningsLevel,
)
from sketchbox.core.errors import DirectoryCreationError, create_file_error


class TestBuildConfigAssembler:
    """Test build configuration assembly."""

    def setup_method(self):
        self.out = io.StringIO()
        self.err = io.StringIO()

    def _assembler(self, environment, **kwargs):
        kwargs.setdefault("ide_libraries_lookup", lambda _: None)
        return BuildConfigAssembler(environment, **kwargs)

    def test_round_trip_of_request_fields(
        self, tmp_path: Path, build_environment, make_request, uno_board, sample_sketch
    ):
        request = make_request(
            build_path=str(tmp_path / " build "),
            build_cache_path=str(tmp_path / " cache "),
            export_file=str(tmp_path / "out" / " x.hex "),
            libraries=(" /libs/a", "/libs/b "),
            build_properties=("build.extra_flags=-DX",),
            verbose=True,
            optimize_for_debug=True,
            warnings=WarningsLevel.ALL,
            jobs=4,
            vid_pid="2341_0043",
        )

        config = self._assembler(build_environment).assemble(
            request, uno_board, sample_sketch, self.out, self.err
        )

        assert config.board is uno_board
        assert config.fqbn is uno_board.fqbn
        assert config.sketch_location == sample_sketch.full_path
        assert config.hardware_dirs == build_environment.hardware_dirs
        assert config.builtin_tools_dirs == build_environment.builtin_tools_dirs
        assert config.other_libraries_dirs == (
            Path(" /libs/a"),
            Path("/libs/b "),
            build_environment.libraries_dir,
        )
        assert str(config.build_path) == request.build_path == str(tmp_path / " build ")
        assert config.build_cache_path == tmp_path / " cache "
        assert request.export_file == str(tmp_path / "out" / " x.hex ")
        assert config.core_build_cache_path == build_environment.core_cache_dir
        assert config.verbose is True
        assert config.quiet is False
        assert config.optimize_for_debug is True
        assert config.warnings_level is WarningsLevel.ALL
        assert config.jobs == 4
        assert config.usb_vid_pid == "2341_0043"
        assert config.arduino_api_version == ARDUINO_API_VERSION
        assert config.exec_stdout is self.out
        assert config.exec_stderr is self.err

    def test_requested_directories_are_created(
        self, tmp_path: Path, build_environment, make_request, uno_board, sample_sketch
    ):
        request = make_request(
            build_path=str(tmp_path / "a" / "build"),
            build_cache_path=str(tmp_path / "b" / "cache"),
        )

        self._assembler(build_environment).assemble(
            request, uno_board, sample_sketch, self.out, self.err
        )

        assert (tmp_path / "a" / "build").is_dir()
        assert (tmp_path / "b" / "cache").is_dir()

    def test_empty_paths_stay_unset(
        self, build_environment, make_request, uno_board, sample_sketch
    ):
        config = self._assembler(build_environment).assemble(
            make_request(), uno_board, sample_sketch, self.out, self.err
        )

        assert config.build_path is None
        assert config.build_cache_path is None

    def test_default_properties_precede_request_properties(
        self, build_environment, make_request, uno_board, sample_sketch
    ):
        request = make_request(build_properties=("build.warn_data_percentage=90",))

        config = self._assembler(build_environment).assemble(
            request, uno_board, sample_sketch, self.out, self.err
        )

        assert config.custom_build_properties == (
            *DEFAULT_BUILD_PROPERTIES,
            "build.warn_data_percentage=90",
        )

    def test_debug_level(
        self, build_environment, make_request, uno_board, sample_sketch
    ):
        assembler = self._assembler(build_environment)

        normal = assembler.assemble(
            make_request(), uno_board, sample_sketch, self.out, self.err
        )
        debug = assembler.assemble(
            make_request(), uno_board, sample_sketch, self.out, self.err, debug=True
        )

        assert normal.debug_level == DEBUG_LEVEL_DEFAULT == 5
        assert debug.debug_level == DEBUG_LEVEL_DEBUG == 100

    def test_build_directory_failure(
        self, build_environment, make_request, uno_board, sample_sketch, mock_file_adapter
    ):
        mock_file_adapter.mkdir.side_effect = create_file_error(
            Path("/readonly/build"), "mkdir", PermissionError("Permission denied")
        )
        assembler = self._assembler(build_environment, file_adapter=mock_file_adapter)

        with pytest.raises(DirectoryCreationError) as exc_info:
            assembler.assemble(
                make_request(build_path="/readonly/build"),
                uno_board,
                sample_sketch,
                self.out,
                self.err,
            )

        assert str(exc_info.value) == "cannot create build directory: Permission denied"
        assert exc_info.value.kind == "build"

    def test_build_cache_directory_failure(
        self, build_environment, make_request, uno_board, sample_sketch, mock_file_adapter
    ):
        def _mkdir(path, parents=True, exist_ok=True):
            if path == Path("/readonly/cache"):
                raise create_file_error(path, "mkdir", OSError("Read-only file system"))

        mock_file_adapter.mkdir.side_effect = _mkdir
        assembler = self._assembler(build_environment, file_adapter=mock_file_adapter)

        with pytest.raises(DirectoryCreationError, match="cannot create build cache directory"):
            assembler.assemble(
                make_request(build_path="/tmp/ok", build_cache_path="/readonly/cache"),
                uno_board,
                sample_sketch,
                self.out,
                self.err,
            )

    def test_ide_libraries_from_preferences(
        self, tmp_path: Path, make_request, uno_board, sample_sketch
    ):
        environment = BuildEnvironment(
            hardware_dirs=(),
            builtin_tools_dirs=(),
            libraries_dir=tmp_path / "libraries",
            core_cache_dir=tmp_path / "core",
            preferences_file=tmp_path / "preferences.txt",
        )
        lookup = Mock(return_value=Path("/opt/arduino/libraries"))

        config = BuildConfigAssembler(environment, ide_libraries_lookup=lookup).assemble(
            make_request(), uno_board, sample_sketch, self.out, self.err
        )

        lookup.assert_called_once_with(tmp_path / "preferences.txt")
        assert config.builtin_libraries_dirs == (Path("/opt/arduino/libraries"),)

    def test_no_ide_libraries(
        self, build_environment, make_request, uno_board, sample_sketch
    ):
        config = self._assembler(build_environment).assemble(
            make_request(), uno_board, sample_sketch, self.out, self.err
        )

        assert config.builtin_libraries_dirs == ()

    def test_log_sink_writes_to_caller_streams(
        self, build_environment, make_request, uno_board, sample_sketch
    ):
        config = self._assembler(build_environment).assemble(
            make_request(), uno_board, sample_sketch, self.out, self.err
        )

        config.log_sink.info("compiling")
        config.log_sink.warning("careful")

        assert self.out.getvalue() == "compiling\n"
        assert self.err.getvalue() == "careful\n"
        assert not self.out.closed

    def test_cancel_event_is_passed_through(
        self, build_environment, make_request, uno_board, sample_sketch
    ):
        cancel_event = threading.Event()

        config = self._assembler(build_environment).assemble(
            make_request(),
            uno_board,
            sample_sketch,
            self.out,
            self.err,
            cancel_event=cancel_event,
        )

        assert config.cancel_event is cancel_event

    def test_factory(self, build_environment, mock_file_adapter):
        assembler = create_build_config_assembler(build_environment, mock_file_adapter)

        assert assembler.environment is build_environment
        assert assembler.file_adapter is mock_file_adapter
