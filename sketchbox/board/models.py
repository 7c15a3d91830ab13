"""Board domain models."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class FQBN:
    """Fully qualified board name.

    Rendered as ``package:architecture:board_id`` followed by
    ``:option=value,option=value`` when board options are set.
    """

    package: str
    architecture: str
    board_id: str
    configs: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, value: str) -> "FQBN":
        """Parse an FQBN string.

        Raises:
            ValueError: If the string is not a valid FQBN
        """
        parts = value.strip().split(":")
        if len(parts) < 3 or len(parts) > 4:
            raise ValueError(f"invalid fqbn: {value}")
        package, architecture, board_id = parts[:3]
        if not package or not architecture or not board_id:
            raise ValueError(f"invalid fqbn: {value}")

        configs: dict[str, str] = {}
        if len(parts) == 4:
            for option in parts[3].split(","):
                key, sep, option_value = option.partition("=")
                if not sep or not key:
                    raise ValueError(f"invalid fqbn config: {option}")
                configs[key] = option_value
        return cls(package, architecture, board_id, configs)

    def without_config(self) -> "FQBN":
        """Return a copy with the board options cleared."""
        return FQBN(self.package, self.architecture, self.board_id)

    def __str__(self) -> str:
        base = f"{self.package}:{self.architecture}:{self.board_id}"
        if not self.configs:
            return base
        options = ",".join(f"{key}={value}" for key, value in self.configs.items())
        return f"{base}:{options}"


@dataclass
class Platform:
    """A hardware platform identified by package and architecture."""

    package: str
    architecture: str
    version: str | None = None
    install_dir: Path | None = None

    @property
    def reference(self) -> str:
        return f"{self.package}:{self.architecture}"


@dataclass
class ResolvedBoard:
    """A board resolved to an installed platform."""

    fqbn: FQBN
    platform: Platform
    identifier: str
