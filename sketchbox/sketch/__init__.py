"""Sketch loading."""

from .loader import FilesystemSketchLoader, create_sketch_loader
from .models import Sketch


__all__ = ["FilesystemSketchLoader", "Sketch", "create_sketch_loader"]
