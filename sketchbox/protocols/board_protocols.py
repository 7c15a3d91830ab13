"""Protocol definitions for board and platform lookup."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from sketchbox.board.models import FQBN, Platform


@runtime_checkable
class PackageManagerProtocol(Protocol):
    """Board and platform lookup capability."""

    def find_board(self, identifier: str) -> "FQBN":
        """Look up a board identifier in the board index.

        Raises:
            LookupError: If no board matches the identifier
        """
        ...

    def find_platform(self, package: str, architecture: str) -> "Platform | None":
        """Find a known platform, or None if the package index has no record of it."""
        ...

    def is_installed(self, platform: "Platform") -> bool:
        """Check if a platform is installed locally."""
        ...


@runtime_checkable
class PackageManagerRegistryProtocol(Protocol):
    """Maps request instance ids to package manager instances."""

    def get_package_manager(self, instance_id: int) -> PackageManagerProtocol | None:
        """Return the package manager backing ``instance_id``, if any."""
        ...
