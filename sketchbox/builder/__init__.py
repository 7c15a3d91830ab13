"""Build engine implementations."""

from .arduino_builder import (
    ArduinoBuilderEngine,
    create_arduino_builder_engine,
    default_build_path,
)


__all__ = [
    "ArduinoBuilderEngine",
    "create_arduino_builder_engine",
    "default_build_path",
]
