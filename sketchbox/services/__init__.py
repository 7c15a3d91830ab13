"""Services package wiring the default collaborators together."""

from sketchbox.board.package_manager import PackageManagerRegistry, create_package_manager
from sketchbox.builder import create_arduino_builder_engine
from sketchbox.compilation.models import BuildEnvironment
from sketchbox.compilation.services import CompileService, create_compile_service
from sketchbox.config.models import SketchboxSettings
from sketchbox.sketch import create_sketch_loader


def create_default_compile_service(
    settings: SketchboxSettings,
) -> tuple[CompileService, int]:
    """Create a compile service backed by the on-disk package manager.

    Returns:
        The service and the instance id to put in compile requests
    """
    registry = PackageManagerRegistry()
    instance_id = registry.register(create_package_manager(settings))

    service = create_compile_service(
        package_managers=registry,
        sketch_loader=create_sketch_loader(),
        engine=create_arduino_builder_engine(settings.builder_path),
        environment=BuildEnvironment.from_settings(settings),
    )
    return service, instance_id


__all__ = [
    "CompileService",
    "create_compile_service",
    "create_default_compile_service",
]
