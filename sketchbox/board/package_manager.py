"""Board and platform lookup over installed hardware folders."""

import json
import logging
import re
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from sketchbox.board.models import FQBN, Platform
from sketchbox.compilation.properties import BuildProperties


if TYPE_CHECKING:
    from sketchbox.config.models import SketchboxSettings
    from sketchbox.protocols import PackageManagerProtocol


logger = logging.getLogger(__name__)

BOARDS_FILE = "boards.txt"
PACKAGE_INDEX_PATTERN = "package_*index.json"


def _version_key(version: str) -> tuple[tuple[int, str], ...]:
    """Sort key ordering ``1.8.10`` after ``1.8.9``."""
    return tuple(
        (int(part), "") if part.isdigit() else (-1, part)
        for part in re.split(r"[.\-+]", version)
    )


class DirectoryPackageManager:
    """Package manager reading platforms straight from disk.

    Two folder layouts are recognised under each hardware directory:

    - installed packages: ``<pkg>/hardware/<arch>/<version>/boards.txt``,
      the highest version wins;
    - sketchbook hardware: ``<pkg>/<arch>/boards.txt``.

    Platforms listed in ``package_*index.json`` files of the data directory
    are known but only count as installed when found on disk.
    """

    def __init__(self, data_dir: Path, hardware_dirs: Sequence[Path]) -> None:
        self.data_dir = data_dir
        self.hardware_dirs = list(hardware_dirs)
        self._installed: dict[tuple[str, str], Platform] | None = None
        self._known: set[tuple[str, str]] | None = None
        self._boards: dict[tuple[str, str], BuildProperties] = {}

    @property
    def installed_platforms(self) -> dict[tuple[str, str], Platform]:
        if self._installed is None:
            self._installed = self._scan_installed()
        return self._installed

    @property
    def known_platforms(self) -> set[tuple[str, str]]:
        if self._known is None:
            self._known = self._load_package_indexes()
        return self._known

    def find_board(self, identifier: str) -> FQBN:
        """Parse ``identifier`` and check it against the installed boards.

        Boards of platforms that are not installed cannot be checked; the
        parsed FQBN is returned and platform lookup decides.

        Raises:
            ValueError: If the identifier is not a valid FQBN
            LookupError: If the platform is installed but lacks the board or option
        """
        fqbn = FQBN.parse(identifier)
        platform = self.installed_platforms.get((fqbn.package, fqbn.architecture))
        if platform is None:
            return fqbn

        boards = self._platform_boards(platform)
        if f"{fqbn.board_id}.name" not in boards:
            raise LookupError(
                f"board {fqbn.board_id} not found in platform {platform.reference}"
            )
        for option, value in fqbn.configs.items():
            if f"{fqbn.board_id}.menu.{option}.{value}" not in boards:
                raise LookupError(
                    f"invalid value '{value}' for option '{option}' of board {fqbn.board_id}"
                )
        return fqbn

    def find_platform(self, package: str, architecture: str) -> Platform | None:
        key = (package, architecture)
        if key in self.installed_platforms:
            return self.installed_platforms[key]
        if key in self.known_platforms:
            return Platform(package=package, architecture=architecture)
        return None

    def is_installed(self, platform: Platform) -> bool:
        return (platform.package, platform.architecture) in self.installed_platforms

    def _platform_boards(self, platform: Platform) -> BuildProperties:
        key = (platform.package, platform.architecture)
        if key not in self._boards:
            boards_file = (platform.install_dir or Path()) / BOARDS_FILE
            try:
                self._boards[key] = BuildProperties.load(boards_file)
            except (OSError, ValueError) as e:
                raise LookupError(f"cannot read {boards_file}: {e}") from e
        return self._boards[key]

    def _scan_installed(self) -> dict[tuple[str, str], Platform]:
        platforms: dict[tuple[str, str], Platform] = {}
        for hardware_dir in self.hardware_dirs:
            if not hardware_dir.is_dir():
                logger.debug("Skipping missing hardware directory: %s", hardware_dir)
                continue
            for package_dir in sorted(p for p in hardware_dir.iterdir() if p.is_dir()):
                if (package_dir / "hardware").is_dir():
                    found = self._scan_versioned_package(package_dir)
                else:
                    found = self._scan_sketchbook_package(package_dir)
                for platform in found:
                    key = (platform.package, platform.architecture)
                    if key in platforms:
                        logger.debug(
                            "Platform %s already found, ignoring %s",
                            platform.reference,
                            platform.install_dir,
                        )
                        continue
                    platforms[key] = platform

        logger.debug("Found %d installed platforms", len(platforms))
        return platforms

    def _scan_versioned_package(self, package_dir: Path) -> list[Platform]:
        platforms = []
        for arch_dir in sorted((package_dir / "hardware").iterdir()):
            if not arch_dir.is_dir():
                continue
            versions = [
                v for v in arch_dir.iterdir() if (v / BOARDS_FILE).is_file()
            ]
            if not versions:
                continue
            latest = max(versions, key=lambda v: _version_key(v.name))
            platforms.append(
                Platform(
                    package=package_dir.name,
                    architecture=arch_dir.name,
                    version=latest.name,
                    install_dir=latest,
                )
            )
        return platforms

    def _scan_sketchbook_package(self, package_dir: Path) -> list[Platform]:
        return [
            Platform(
                package=package_dir.name,
                architecture=arch_dir.name,
                install_dir=arch_dir,
            )
            for arch_dir in sorted(package_dir.iterdir())
            if (arch_dir / BOARDS_FILE).is_file()
        ]

    def _load_package_indexes(self) -> set[tuple[str, str]]:
        known: set[tuple[str, str]] = set()
        if not self.data_dir.is_dir():
            return known

        for index_file in sorted(self.data_dir.glob(PACKAGE_INDEX_PATTERN)):
            try:
                index = json.loads(index_file.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable package index %s: %s", index_file, e)
                continue

            packages = index.get("packages") if isinstance(index, dict) else None
            if not isinstance(packages, list):
                logger.warning("Ignoring malformed package index %s", index_file)
                continue

            for package in packages:
                if not isinstance(package, dict):
                    logger.warning(
                        "Ignoring malformed package entry in %s: %r", index_file, package
                    )
                    continue
                platforms = package.get("platforms")
                for platform in platforms if isinstance(platforms, list) else []:
                    if not isinstance(platform, dict):
                        continue
                    architecture = platform.get("architecture")
                    if package.get("name") and architecture:
                        known.add((package["name"], architecture))

        logger.debug("Loaded %d known platforms from package indexes", len(known))
        return known


class PackageManagerRegistry:
    """Registry of package manager instances addressed by id."""

    def __init__(self) -> None:
        self._instances: dict[int, "PackageManagerProtocol"] = {}
        self._next_id = 1

    def register(self, package_manager: "PackageManagerProtocol") -> int:
        instance_id = self._next_id
        self._instances[instance_id] = package_manager
        self._next_id += 1
        return instance_id

    def get_package_manager(self, instance_id: int) -> "PackageManagerProtocol | None":
        return self._instances.get(instance_id)


def create_package_manager(settings: "SketchboxSettings") -> DirectoryPackageManager:
    """Create a package manager over the configured hardware directories."""
    return DirectoryPackageManager(settings.data_dir, settings.hardware_dirs)
