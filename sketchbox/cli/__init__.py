"""Command line interface for Sketchbox."""

from sketchbox.cli.app import app, main


__all__ = ["app", "main"]
