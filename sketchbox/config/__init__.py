"""Configuration for Sketchbox."""

from .models import SketchboxSettings
from .user_config import UserConfig, create_user_config


__all__ = [
    "SketchboxSettings",
    "UserConfig",
    "create_user_config",
]
