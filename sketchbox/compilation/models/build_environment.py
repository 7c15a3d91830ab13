"""Process-wide directories feeding the build configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from sketchbox.config.models import SketchboxSettings


@dataclass(frozen=True)
class BuildEnvironment:
    """Directory settings shared by every compile in this process."""

    hardware_dirs: tuple[Path, ...]
    builtin_tools_dirs: tuple[Path, ...]
    libraries_dir: Path
    core_cache_dir: Path
    preferences_file: Path | None = None

    @classmethod
    def from_settings(cls, settings: "SketchboxSettings") -> "BuildEnvironment":
        return cls(
            hardware_dirs=tuple(settings.hardware_dirs),
            builtin_tools_dirs=tuple(settings.bundle_tools_dirs),
            libraries_dir=settings.libraries_dir,
            core_cache_dir=settings.core_cache_dir,
            preferences_file=settings.preferences_file,
        )
