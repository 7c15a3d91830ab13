"""Main CLI application for Sketchbox."""

import logging
import sys
from importlib.metadata import distribution
from typing import Annotated

import typer

from sketchbox.cli.decorators.error_handling import print_stack_trace_if_verbose
from sketchbox.config.user_config import UserConfig, create_user_config
from sketchbox.core.errors import ConfigError
from sketchbox.core.logging import setup_logging


__all__ = ["app", "main", "__version__", "setup_logging"]


__version__ = distribution("sketchbox").version

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        verbose: int = 0,
        debug: bool = False,
        log_file: str | None = None,
        config_file: str | None = None,
    ):
        """Initialize AppContext.

        Args:
            verbose: Verbosity level
            debug: Whether debug logging was requested
            log_file: Path to log file
            config_file: Path to configuration file
        """
        self.verbose = verbose
        self.debug = debug
        self.log_file = log_file
        self.config_file = config_file

        self.user_config: UserConfig = create_user_config(cli_config_path=config_file)


app = typer.Typer(
    name="sketchbox",
    help=f"""Sketchbox sketch compiler v{__version__}

Compiles sketches for the installed board platforms and exports the
resulting binaries next to the sketch.

Common workflows:
  • Build a sketch:       sketchbox compile Blink -b arduino:avr:uno
  • Show build settings:  sketchbox compile Blink -b arduino:avr:uno --show-properties
  • Export elsewhere:     sketchbox compile Blink -b arduino:avr:uno -o out/blink.hex""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging and debug builds"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """Sketchbox sketch compiler."""
    if version:
        print(f"Sketchbox v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    try:
        app_context = AppContext(
            verbose=verbose, debug=debug, log_file=log_file, config_file=config_file
        )
    except ConfigError as e:
        setup_logging(level=logging.WARNING)
        logger.error("Configuration error: %s", e)
        raise typer.Exit(1) from e
    ctx.obj = app_context

    log_level = logging.WARNING
    if debug:
        log_level = logging.DEBUG
    elif verbose == 1:
        log_level = logging.INFO
    elif verbose >= 2:
        log_level = logging.DEBUG
    elif log_file is None:
        log_level = app_context.user_config.get_log_level_int()

    setup_logging(level=log_level, log_file=log_file)

    if app_context.user_config.config_path:
        logger.debug("Using configuration file %s", app_context.user_config.config_path)


def main() -> int:
    """Main CLI entry point."""
    exit_code = 0

    try:
        from sketchbox.cli.commands import register_all_commands

        register_all_commands(app)

        app()

    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose()
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
