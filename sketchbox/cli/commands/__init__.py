"""CLI command modules."""

import typer

from sketchbox.cli.commands.compile import register_commands as register_compile_commands


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app.

    Args:
        app: The main Typer app
    """
    register_compile_commands(app)
