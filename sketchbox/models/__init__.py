"""Shared model base classes."""

from .base import SketchboxBaseModel


__all__ = ["SketchboxBaseModel"]
