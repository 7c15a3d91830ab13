"""User configuration models."""

import tempfile
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from sketchbox.compilation.models.build_config import CORE_CACHE_DIR_NAME


def _split_paths(v: Any) -> list[Path]:
    if isinstance(v, str):
        return [Path(path.strip()) for path in v.split(",") if path.strip()]
    if isinstance(v, list | tuple):
        return [Path(str(path).strip()) for path in v if str(path).strip()]
    return []


class SketchboxSettings(BaseSettings):
    """Process-wide settings with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables (``SKETCHBOX_`` prefix)
    2. Constructor arguments (config file data)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="SKETCHBOX_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override file configuration."""
        return (env_settings, init_settings)

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".arduino15",
        description="Directory holding installed packages and IDE preferences",
    )
    user_dir: Path = Field(
        default_factory=lambda: Path.home() / "Arduino",
        description="Sketchbook directory holding user hardware and libraries",
    )
    extra_hardware_dirs: Annotated[list[Path], NoDecode] = Field(
        default_factory=list,
        description="Additional hardware directories searched after the defaults",
    )
    bundle_tools_dirs: Annotated[list[Path], NoDecode] = Field(
        default_factory=list,
        description="Tool directories bundled with an IDE installation",
    )
    core_cache_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / CORE_CACHE_DIR_NAME,
        description="Core object cache shared by every compile",
    )
    builder_path: str = Field(
        default="arduino-builder",
        description="Build engine executable",
    )
    log_level: str = "WARNING"

    @field_validator("extra_hardware_dirs", "bundle_tools_dirs", mode="before")
    @classmethod
    def decode_path_list(cls, v: Any) -> list[Path]:
        return _split_paths(v)

    @field_validator("data_dir", "user_dir", "core_cache_dir", mode="before")
    @classmethod
    def expand_user_path(cls, v: Any) -> Any:
        if isinstance(v, str | Path):
            return Path(v).expanduser()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def packages_dir(self) -> Path:
        return self.data_dir / "packages"

    @property
    def libraries_dir(self) -> Path:
        """Default user libraries directory."""
        return self.user_dir / "libraries"

    @property
    def hardware_dirs(self) -> list[Path]:
        """Hardware search list: installed packages, sketchbook hardware, extras."""
        return [self.packages_dir, self.user_dir / "hardware", *self.extra_hardware_dirs]

    @property
    def preferences_file(self) -> Path:
        return self.data_dir / "preferences.txt"
