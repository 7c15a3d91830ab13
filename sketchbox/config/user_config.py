"""
User configuration management for Sketchbox.

This module handles user-specific configuration settings with multiple sources:
1. Environment variables (highest precedence)
2. Command-line provided config file
3. Config file in current directory
4. User's XDG config directory
5. Default values (lowest precedence)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sketchbox.config.models import SketchboxSettings
from sketchbox.core.errors import ConfigError


logger = logging.getLogger(__name__)

# Environment variable prefix
ENV_PREFIX = "SKETCHBOX_"


class UserConfig:
    """Manages user-specific configuration for Sketchbox.

    Values come from the first YAML file found on the search path; Pydantic
    Settings layers ``SKETCHBOX_*`` environment variables on top.
    """

    def __init__(self, cli_config_path: str | Path | None = None) -> None:
        """
        Initialize the user configuration handler.

        Args:
            cli_config_path: Optional config file path provided via CLI

        Raises:
            ConfigError: If the config file is unreadable or holds invalid values
        """
        self._cli_config_path = (
            Path(cli_config_path).expanduser().resolve() if cli_config_path else None
        )
        self._config_paths = self._generate_config_paths()
        self.config_path: Path | None = None
        self._config = self._load_config()

    def _generate_config_paths(self) -> list[Path]:
        """Generate a list of config paths to search in order of precedence."""
        config_paths = []

        if self._cli_config_path:
            config_paths.append(self._cli_config_path)

        config_paths.extend([Path.cwd() / "sketchbox.yaml", Path.cwd() / ".sketchbox.yml"])

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        config_home = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
        config_paths.extend(
            [config_home / "sketchbox" / "config.yaml", config_home / "sketchbox" / "config.yml"]
        )

        return config_paths

    def _read_config_file(self, path: Path) -> dict[str, Any]:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML in config file {path}: {e}", {"path": str(path)}
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Cannot read config file {path}: {e}", {"path": str(path)}
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping", {"path": str(path)}
            )
        return data

    def _load_config(self) -> SketchboxSettings:
        """Load configuration from the first config file found and the environment."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Config search paths: %s", [str(p) for p in self._config_paths]
            )
            env_vars = {k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)}
            logger.debug("Found %d Sketchbox environment variables", len(env_vars))

        if self._cli_config_path and not self._cli_config_path.exists():
            raise ConfigError(
                f"Config file not found: {self._cli_config_path}",
                {"path": str(self._cli_config_path)},
            )

        config_data: dict[str, Any] = {}
        for path in self._config_paths:
            if path.is_file():
                config_data = self._read_config_file(path)
                self.config_path = path
                logger.debug("Loaded user configuration from %s", path)
                break
        else:
            logger.debug("No user configuration file found, using defaults")

        try:
            return SketchboxSettings(**config_data)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid configuration: {e}",
                {"path": str(self.config_path) if self.config_path else None},
            ) from e

    @property
    def settings(self) -> SketchboxSettings:
        return self._config

    def get_log_level_int(self) -> int:
        """Get the configured log level as a ``logging`` module constant."""
        return int(getattr(logging, self._config.log_level, logging.WARNING))


def create_user_config(cli_config_path: str | Path | None = None) -> UserConfig:
    """
    Create a UserConfig instance.

    Args:
        cli_config_path: Optional config file path provided via CLI

    Returns:
        Configured UserConfig instance
    """
    return UserConfig(cli_config_path=cli_config_path)
