"""Sketchbox - sketch compilation and artifact export."""

from importlib.metadata import distribution

from .compilation.models import CompileRequest, CompileResponse, WarningsLevel


__version__ = distribution(__package__ or "sketchbox").version

__all__ = [
    "CompileRequest",
    "CompileResponse",
    "WarningsLevel",
    "__version__",
]

# Import CLI after setting __version__ to avoid circular imports
from .cli import app, main


__all__ += ["app", "main"]
