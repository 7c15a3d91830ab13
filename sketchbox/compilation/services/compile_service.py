"""Compile service orchestrating the compile pipeline."""

import threading
from pathlib import Path
from typing import TextIO

from sketchbox.compilation.artifacts.exporter import (
    ArtifactExporter,
    create_artifact_exporter,
)
from sketchbox.compilation.board_resolver import BoardResolver
from sketchbox.compilation.config_assembler import (
    BuildConfigAssembler,
    create_build_config_assembler,
)
from sketchbox.compilation.models import (
    BuildEnvironment,
    CompileRequest,
    CompileResponse,
)
from sketchbox.compilation.stage_dispatcher import StageDispatcher, select_stage
from sketchbox.core.errors import InvalidInstanceError, SketchPathMissingError
from sketchbox.core.structlog_logger import get_struct_logger
from sketchbox.protocols import (
    BuildEngineProtocol,
    FileAdapterProtocol,
    PackageManagerRegistryProtocol,
    SketchLoaderProtocol,
)


logger = get_struct_logger(__name__)


class CompileService:
    """Run compile requests: resolve, assemble, build, export.

    The steps run strictly in order and nothing is retried. Export only
    happens after a successful full build that is not a dry run.
    """

    def __init__(
        self,
        package_managers: PackageManagerRegistryProtocol,
        sketch_loader: SketchLoaderProtocol,
        assembler: BuildConfigAssembler,
        dispatcher: StageDispatcher,
        exporter: ArtifactExporter,
    ) -> None:
        self.package_managers = package_managers
        self.sketch_loader = sketch_loader
        self.assembler = assembler
        self.dispatcher = dispatcher
        self.exporter = exporter

    def compile(
        self,
        request: CompileRequest,
        out_stream: TextIO,
        err_stream: TextIO,
        debug: bool = False,
        cancel_event: threading.Event | None = None,
    ) -> CompileResponse:
        """Compile the sketch described by ``request``.

        Progress is written to ``out_stream`` and ``err_stream``, which stay
        open. ``cancel_event`` is handed to the build engine.

        Raises:
            BuildError: Any pipeline failure, see ``sketchbox.core.errors``
        """
        tags = {
            "board": request.board,
            "fqbn": request.fqbn,
            "sketch_path": request.sketch_path,
            "show_properties": request.show_properties,
            "preprocess": request.preprocess,
            "build_properties": ",".join(request.build_properties),
            "warnings": request.warnings,
            "verbose": request.verbose,
            "quiet": request.quiet,
            "vid_pid": request.vid_pid,
            "export_file": request.export_file,
            "jobs": request.jobs,
            "libraries": ",".join(request.libraries),
        }
        success = False
        try:
            response = self._compile(
                request, out_stream, err_stream, debug, cancel_event
            )
            success = True
            return response
        finally:
            logger.debug("compile_finished", success=success, **tags)

    def _compile(
        self,
        request: CompileRequest,
        out_stream: TextIO,
        err_stream: TextIO,
        debug: bool,
        cancel_event: threading.Event | None,
    ) -> CompileResponse:
        package_manager = self.package_managers.get_package_manager(
            request.instance_id
        )
        if package_manager is None:
            raise InvalidInstanceError(request.instance_id)

        logger.debug(
            "compile_started", sketch_path=request.sketch_path, fqbn=request.fqbn
        )
        if not request.sketch_path:
            raise SketchPathMissingError()
        sketch = self.sketch_loader.load_sketch(Path(request.sketch_path))

        board = BoardResolver(package_manager).resolve(request, sketch)

        config = self.assembler.assemble(
            request,
            board,
            sketch,
            out_stream,
            err_stream,
            debug=debug,
            cancel_event=cancel_event,
        )

        stage = select_stage(request)
        result = self.dispatcher.dispatch(config, stage)

        # --preprocess and --show-properties stop here
        if not result.produces_artifacts or result.build_properties is None:
            return CompileResponse(stage=stage.value)

        if request.dry_run:
            logger.info("export_skipped", reason="dry_run", sketch=sketch.name)
            return CompileResponse(stage=stage.value)

        exported = self.exporter.export_build(
            result.build_properties, board.fqbn, sketch, request.export_file
        )

        logger.info(
            "compile_succeeded",
            sketch=sketch.name,
            board=board.identifier,
            exported=len(exported),
        )
        return CompileResponse(stage=stage.value, exported_files=exported)


def create_compile_service(
    package_managers: PackageManagerRegistryProtocol,
    sketch_loader: SketchLoaderProtocol,
    engine: BuildEngineProtocol,
    environment: BuildEnvironment,
    file_adapter: FileAdapterProtocol | None = None,
) -> CompileService:
    """Create a compile service from its collaborators.

    Args:
        package_managers: Instance registry for board lookup
        sketch_loader: Sketch source
        engine: Build engine running the stages
        environment: Process-wide build directories
        file_adapter: File operations adapter

    Returns:
        Configured CompileService instance
    """
    return CompileService(
        package_managers=package_managers,
        sketch_loader=sketch_loader,
        assembler=create_build_config_assembler(environment, file_adapter),
        dispatcher=StageDispatcher(engine),
        exporter=create_artifact_exporter(file_adapter),
    )
