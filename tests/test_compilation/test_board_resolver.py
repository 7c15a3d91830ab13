"""Tests for board selection and resolution."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from sketchbox.board.models import FQBN, Platform
from sketchbox.compilation.board_resolver import (
    BoardResolver,
    create_board_resolver,
    select_board_identifier,
)
from sketchbox.core.errors import (
    BoardNotFoundError,
    MissingBoardError,
    PlatformNotInstalledError,
)
from sketchbox.sketch.models import Sketch


def _sketch(default_fqbn: str | None = None) -> Sketch:
    return Sketch(
        full_path=Path("/sketches/Blink"),
        name="Blink",
        main_file=Path("/sketches/Blink/Blink.ino"),
        default_fqbn=default_fqbn,
    )


class TestSelectBoardIdentifier:
    """Test board field priority."""

    def test_board_field_wins(self, make_request):
        request = make_request(board="arduino:avr:uno", fqbn="arduino:avr:nano")

        identifier = select_board_identifier(request, _sketch("arduino:samd:zero"))

        assert identifier == "arduino:avr:uno"

    def test_deprecated_fqbn_field_used_when_board_empty(self, make_request):
        request = make_request(board="", fqbn="arduino:avr:nano")

        identifier = select_board_identifier(request, _sketch("arduino:samd:zero"))

        assert identifier == "arduino:avr:nano"

    def test_sketch_default_used_last(self, make_request):
        request = make_request(board="", fqbn="")

        identifier = select_board_identifier(request, _sketch("arduino:samd:zero"))

        assert identifier == "arduino:samd:zero"

    def test_missing_board(self, make_request):
        request = make_request(board="", fqbn="")

        with pytest.raises(MissingBoardError, match="no board provided"):
            select_board_identifier(request, _sketch())

    def test_missing_board_without_sketch(self, make_request):
        request = make_request(board="", fqbn="", sketch_path="/sketches/Blink")

        with pytest.raises(MissingBoardError):
            select_board_identifier(request, None)


class TestBoardResolver:
    """Test BoardResolver against a package manager."""

    def setup_method(self):
        self.package_manager = Mock()
        self.package_manager.find_board.side_effect = FQBN.parse
        self.platform = Platform("arduino", "avr", version="1.8.6")
        self.package_manager.find_platform.return_value = self.platform
        self.package_manager.is_installed.return_value = True
        self.resolver = BoardResolver(self.package_manager)

    def test_resolve_success(self, make_request):
        board = self.resolver.resolve(
            make_request(board="arduino:avr:nano:cpu=atmega328"), _sketch()
        )

        assert board.fqbn == FQBN("arduino", "avr", "nano", {"cpu": "atmega328"})
        assert board.platform is self.platform
        assert board.identifier == "arduino:avr:nano:cpu=atmega328"
        self.package_manager.find_platform.assert_called_once_with("arduino", "avr")

    def test_lookup_failure_becomes_board_not_found(self):
        self.package_manager.find_board.side_effect = LookupError("no such board")

        with pytest.raises(BoardNotFoundError) as exc_info:
            self.resolver.resolve_identifier("arduino:avr:nope")

        assert "arduino:avr:nope" in str(exc_info.value)
        assert "no such board" in str(exc_info.value)
        assert exc_info.value.identifier == "arduino:avr:nope"

    def test_malformed_identifier_becomes_board_not_found(self):
        with pytest.raises(BoardNotFoundError):
            self.resolver.resolve_identifier("uno")

    def test_unknown_platform(self):
        self.package_manager.find_platform.return_value = None

        with pytest.raises(PlatformNotInstalledError, match="platform not installed"):
            self.resolver.resolve_identifier("acme:risc:board")

    def test_known_but_not_installed_platform(self):
        self.package_manager.is_installed.return_value = False

        with pytest.raises(PlatformNotInstalledError) as exc_info:
            self.resolver.resolve_identifier("arduino:samd:zero")

        assert exc_info.value.package == "arduino"
        assert exc_info.value.architecture == "samd"

    def test_factory(self):
        resolver = create_board_resolver(self.package_manager)

        assert isinstance(resolver, BoardResolver)
        assert resolver.package_manager is self.package_manager
