"""Core test fixtures for the sketchbox project."""

import json
import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from sketchbox.board.models import FQBN, Platform, ResolvedBoard
from sketchbox.compilation.models import (
    BuildConfig,
    BuildEnvironment,
    CompileRequest,
)
from sketchbox.compilation.properties import BuildProperties
from sketchbox.config.models import SketchboxSettings
from sketchbox.core.logging import configure_structlog
from sketchbox.protocols import (
    FileAdapterProtocol,
    PackageManagerProtocol,
)
from sketchbox.sketch.models import Sketch


UNO_BOARDS_TXT = """\
# Arduino AVR boards
uno.name=Arduino Uno
uno.build.mcu=atmega328p
nano.name=Arduino Nano
nano.menu.cpu.atmega328=ATmega328P
nano.menu.cpu.atmega168=ATmega168
"""


# ---- Base Fixtures ----


@pytest.fixture(autouse=True, scope="session")
def configure_test_logging() -> None:
    """Route structlog events through stdlib logging like the CLI does."""
    configure_structlog(logging.DEBUG)


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep user config files and SKETCHBOX_ variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("SKETCHBOX_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_file_adapter() -> Mock:
    """Create a mock file adapter for testing."""
    adapter = Mock(spec=FileAdapterProtocol)
    return adapter


@pytest.fixture
def mock_package_manager() -> Mock:
    """Package manager knowing arduino:avr:uno on an installed platform."""
    package_manager = Mock(spec=PackageManagerProtocol)
    package_manager.find_board.side_effect = FQBN.parse
    package_manager.find_platform.side_effect = lambda package, arch: Platform(
        package=package, architecture=arch, version="1.8.6"
    )
    package_manager.is_installed.return_value = True
    return package_manager


# ---- Sketch Fixtures ----


@pytest.fixture
def sketch_dir(tmp_path: Path) -> Path:
    """Create a minimal ``Blink`` sketch folder."""
    directory = tmp_path / "Blink"
    directory.mkdir()
    (directory / "Blink.ino").write_text(
        "void setup() {}\nvoid loop() {}\n", encoding="utf-8"
    )
    return directory


@pytest.fixture
def sample_sketch(sketch_dir: Path) -> Sketch:
    return Sketch(
        full_path=sketch_dir,
        name="Blink",
        main_file=sketch_dir / "Blink.ino",
    )


@pytest.fixture
def uno_board() -> ResolvedBoard:
    return ResolvedBoard(
        fqbn=FQBN("arduino", "avr", "uno"),
        platform=Platform("arduino", "avr", version="1.8.6"),
        identifier="arduino:avr:uno",
    )


@pytest.fixture
def make_request() -> Callable[..., CompileRequest]:
    """Factory for compile requests with sensible defaults."""

    def _make_request(**overrides: Any) -> CompileRequest:
        data: dict[str, Any] = {"instance_id": 1, "board": "arduino:avr:uno"}
        data.update(overrides)
        return CompileRequest(**data)

    return _make_request


# ---- Environment Fixtures ----


@pytest.fixture
def arduino_data_dir(tmp_path: Path) -> Path:
    """Data directory with an installed arduino:avr platform.

    ``arduino:samd`` is listed in the package index but not installed.
    """
    data_dir = tmp_path / "arduino15"
    platform_dir = data_dir / "packages" / "arduino" / "hardware" / "avr" / "1.8.6"
    platform_dir.mkdir(parents=True)
    (platform_dir / "boards.txt").write_text(UNO_BOARDS_TXT, encoding="utf-8")

    index = {
        "packages": [
            {
                "name": "arduino",
                "platforms": [
                    {"architecture": "avr", "version": "1.8.6"},
                    {"architecture": "samd", "version": "1.8.13"},
                ],
            }
        ]
    }
    (data_dir / "package_index.json").write_text(json.dumps(index), encoding="utf-8")
    return data_dir


@pytest.fixture
def sample_settings(tmp_path: Path, arduino_data_dir: Path) -> SketchboxSettings:
    return SketchboxSettings(
        data_dir=arduino_data_dir,
        user_dir=tmp_path / "Arduino",
        core_cache_dir=tmp_path / "core-cache",
    )


@pytest.fixture
def build_environment(tmp_path: Path) -> BuildEnvironment:
    return BuildEnvironment(
        hardware_dirs=(tmp_path / "hardware",),
        builtin_tools_dirs=(tmp_path / "tools",),
        libraries_dir=tmp_path / "Arduino" / "libraries",
        core_cache_dir=tmp_path / "core-cache",
        preferences_file=None,
    )


class FakeBuildEngine:
    """Build engine writing a canned set of outputs into the build path."""

    def __init__(
        self,
        output_files: tuple[str, ...] = ("sketch.ino.hex", "sketch.ino.elf"),
        tmp_file: str = "sketch.ino.hex",
    ) -> None:
        self.output_files = output_files
        self.tmp_file = tmp_file
        self.calls: list[str] = []
        self.configs: list[BuildConfig] = []

    def run_show_properties(self, config: BuildConfig) -> None:
        self.calls.append("show_properties")
        self.configs.append(config)
        config.log_sink.info(f"build.fqbn={config.fqbn}")

    def run_preprocess(self, config: BuildConfig) -> None:
        self.calls.append("preprocess")
        self.configs.append(config)
        config.log_sink.info("void setup() {}")

    def run_full_build(self, config: BuildConfig) -> BuildProperties:
        self.calls.append("full_build")
        self.configs.append(config)
        assert config.build_path is not None
        for name in self.output_files:
            (config.build_path / name).write_text(name, encoding="utf-8")
        return BuildProperties(
            {
                "build.path": str(config.build_path),
                "recipe.output.tmp_file": self.tmp_file,
            }
        )


@pytest.fixture
def fake_engine() -> FakeBuildEngine:
    return FakeBuildEngine()
