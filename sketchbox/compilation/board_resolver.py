"""Board resolution for compile requests."""

import logging

from sketchbox.board.models import ResolvedBoard
from sketchbox.compilation.models import CompileRequest
from sketchbox.core.errors import (
    BoardNotFoundError,
    MissingBoardError,
    PlatformNotInstalledError,
)
from sketchbox.protocols import PackageManagerProtocol
from sketchbox.sketch.models import Sketch


logger = logging.getLogger(__name__)


def select_board_identifier(request: CompileRequest, sketch: Sketch | None) -> str:
    """Pick the board identifier for a request.

    Priority: the ``board`` field, then the deprecated ``fqbn`` field, then the
    default board recorded in the sketch metadata.

    Raises:
        MissingBoardError: If none of the sources provides a board
    """
    identifier = request.board
    if not identifier:
        # Deprecated field kept working for old clients
        identifier = request.fqbn
    if not identifier and sketch is not None and sketch.default_fqbn:
        identifier = sketch.default_fqbn
    if not identifier:
        raise MissingBoardError(sketch.full_path if sketch else request.sketch_path)
    return identifier


class BoardResolver:
    """Resolve a board identifier to an installed platform target."""

    def __init__(self, package_manager: PackageManagerProtocol) -> None:
        self.package_manager = package_manager

    def resolve(self, request: CompileRequest, sketch: Sketch | None) -> ResolvedBoard:
        """Resolve the board a request should be compiled for.

        Raises:
            MissingBoardError: If no board identifier is available
            BoardNotFoundError: If the identifier matches no known board
            PlatformNotInstalledError: If the owning platform is unknown or not installed
        """
        identifier = select_board_identifier(request, sketch)
        return self.resolve_identifier(identifier)

    def resolve_identifier(self, identifier: str) -> ResolvedBoard:
        try:
            fqbn = self.package_manager.find_board(identifier)
        except (LookupError, ValueError) as e:
            raise BoardNotFoundError(identifier, str(e)) from e

        platform = self.package_manager.find_platform(fqbn.package, fqbn.architecture)
        if platform is None or not self.package_manager.is_installed(platform):
            logger.debug(
                "Platform %s:%s for board %s is not installed",
                fqbn.package,
                fqbn.architecture,
                identifier,
            )
            raise PlatformNotInstalledError(fqbn.package, fqbn.architecture)

        logger.debug("Resolved board %s to %s", identifier, fqbn)
        return ResolvedBoard(fqbn=fqbn, platform=platform, identifier=identifier)


def create_board_resolver(package_manager: PackageManagerProtocol) -> BoardResolver:
    """Create a board resolver backed by ``package_manager``."""
    return BoardResolver(package_manager)
