"""Compile command for Sketchbox CLI."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from sketchbox.cli.app import AppContext
from sketchbox.cli.decorators import handle_errors
from sketchbox.cli.helpers import print_list_item, print_success_message
from sketchbox.compilation.models import CompileRequest, WarningsLevel
from sketchbox.services import create_default_compile_service


logger = logging.getLogger(__name__)


@handle_errors
def compile_command(
    ctx: typer.Context,
    sketch: Annotated[
        Path | None,
        typer.Argument(
            help="Sketch folder or a file inside it (default: current directory)",
        ),
    ] = None,
    fqbn: Annotated[
        str,
        typer.Option(
            "-b", "--fqbn", help="Fully qualified board name, e.g. arduino:avr:uno"
        ),
    ] = "",
    show_properties: Annotated[
        bool,
        typer.Option("--show-properties", help="Show build properties instead of compiling"),
    ] = False,
    preprocess: Annotated[
        bool,
        typer.Option("--preprocess", help="Print preprocessed code to stdout"),
    ] = False,
    build_path: Annotated[
        str,
        typer.Option("--build-path", help="Directory for compiled files"),
    ] = "",
    build_cache_path: Annotated[
        str,
        typer.Option("--build-cache-path", help="Directory for cached core objects"),
    ] = "",
    build_properties: Annotated[
        list[str] | None,
        typer.Option(
            "--build-property",
            help="Override a build property (key=value), may be repeated",
        ),
    ] = None,
    warnings: Annotated[
        WarningsLevel,
        typer.Option("--warnings", help="Compiler warnings level"),
    ] = WarningsLevel.NONE,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Verbose build output"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", help="Suppress build output"),
    ] = False,
    vid_pid: Annotated[
        str,
        typer.Option("--vid-pid", help="USB VID_PID used to select board variants"),
    ] = "",
    output: Annotated[
        str,
        typer.Option(
            "-o",
            "--output",
            help="Export file name, e.g. out/blink.hex (default: next to the sketch)",
        ),
    ] = "",
    libraries: Annotated[
        list[str] | None,
        typer.Option("--libraries", help="Extra library directory, may be repeated"),
    ] = None,
    optimize_for_debug: Annotated[
        bool,
        typer.Option("--optimize-for-debug", help="Optimize the build for debugging"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Build but do not export the binaries"),
    ] = False,
    jobs: Annotated[
        int,
        typer.Option("-j", "--jobs", min=0, help="Parallel jobs, 0 for default"),
    ] = 0,
) -> None:
    """Compile a sketch and export its binaries.

    Without --output the binaries are written next to the sketch, named
    after the sketch and the board, e.g. Blink.arduino.avr.uno.hex.

    \b
    Examples:
        sketchbox compile Blink -b arduino:avr:uno
        sketchbox compile Blink -b arduino:avr:uno --build-property build.extra_flags=-DDEBUG
        sketchbox compile Blink -b arduino:avr:uno -o out/blink.hex
    """
    app_context: AppContext = ctx.obj
    settings = app_context.user_config.settings

    service, instance_id = create_default_compile_service(settings)

    sketch_path = sketch if sketch is not None else Path.cwd()
    request = CompileRequest(
        instance_id=instance_id,
        board=fqbn,
        sketch_path=str(sketch_path),
        build_path=build_path,
        build_cache_path=build_cache_path,
        export_file=output,
        libraries=tuple(libraries or ()),
        build_properties=tuple(build_properties or ()),
        show_properties=show_properties,
        preprocess=preprocess,
        dry_run=dry_run,
        verbose=verbose,
        quiet=quiet,
        optimize_for_debug=optimize_for_debug,
        warnings=warnings,
        jobs=jobs,
        vid_pid=vid_pid,
    )
    logger.debug("Compiling %s", request.sketch_path)

    response = service.compile(
        request, sys.stdout, sys.stderr, debug=app_context.debug
    )

    if response.exported_files:
        print_success_message("Sketch compiled")
        for exported in response.exported_files:
            print_list_item(str(exported))
    elif dry_run and not (show_properties or preprocess):
        print_success_message("Sketch compiled (dry run, nothing exported)")


def register_commands(app: typer.Typer) -> None:
    """Register compile command with the main app.

    Args:
        app: The main Typer app
    """
    app.command(name="compile")(compile_command)
