"""Artifact exporter for successful builds."""

import logging
from pathlib import Path

from sketchbox.adapters import create_file_adapter
from sketchbox.board.models import FQBN
from sketchbox.compilation.models import ExportPlan
from sketchbox.compilation.properties import BuildProperties
from sketchbox.core.errors import (
    ArtifactCopyError,
    BuildOutputReadError,
    FileSystemError,
)
from sketchbox.protocols import FileAdapterProtocol
from sketchbox.sketch.models import Sketch


logger = logging.getLogger(__name__)

PRIMARY_OUTPUT_TEMPLATE = "{build.path}/{recipe.output.tmp_file}"


def sanitize_fqbn(fqbn: FQBN) -> str:
    """Render an FQBN as a filename suffix, e.g. ``arduino.avr.uno``.

    Board options are dropped so they do not end up in file names.
    """
    return str(fqbn.without_config()).replace(":", ".")


def split_output_name(output_path: Path) -> tuple[str, str]:
    """Split a primary output path into ``(basename, extension)``.

    ``/build/sketch.ino.hex`` gives ``("sketch.ino", ".hex")``.
    """
    extension = output_path.suffix
    name = output_path.name
    return name[: len(name) - len(extension)], extension


class ArtifactExporter:
    """Copy build outputs next to the sketch under a canonical name.

    The primary output ``sketch.ino.hex`` and its variants such as
    ``sketch.ino.with_bootloader.hex`` are copied to
    ``<dest>/<Sketch>.<package>.<arch>.<board>.hex`` and
    ``<dest>/<Sketch>.<package>.<arch>.<board>.with_bootloader.hex``, plus the
    ``.elf`` debug symbols when present. A failed copy aborts the export and
    leaves earlier copies in place.
    """

    def __init__(self, file_adapter: FileAdapterProtocol | None = None) -> None:
        self.file_adapter = file_adapter or create_file_adapter()

    def plan_export(
        self,
        build_properties: BuildProperties,
        fqbn: FQBN,
        sketch: Sketch,
        export_file: str = "",
    ) -> ExportPlan:
        """Work out source, destination and names for an export."""
        output_path = Path(build_properties.expand(PRIMARY_OUTPUT_TEMPLATE))
        canonical_basename, extension = split_output_name(output_path)

        if export_file:
            export_path = Path(export_file)
            destination_dir = export_path.parent
            destination_basename = export_path.name
            if extension and destination_basename.endswith(extension):
                destination_basename = destination_basename[: -len(extension)]
        else:
            if self.file_adapter.is_dir(sketch.full_path):
                destination_dir = sketch.full_path
            else:
                destination_dir = sketch.full_path.parent
            destination_basename = f"{sketch.name}.{sanitize_fqbn(fqbn)}"

        return ExportPlan(
            canonical_basename=canonical_basename,
            extension=extension,
            source_dir=output_path.parent,
            destination_dir=destination_dir,
            destination_basename=destination_basename,
        )

    def find_variants(self, plan: ExportPlan) -> list[Path]:
        """List build outputs named ``<canonical_basename>.*<extension>``.

        Raises:
            BuildOutputReadError: If the build output directory cannot be listed
        """
        try:
            entries = self.file_adapter.list_directory(plan.source_dir)
        except FileSystemError as e:
            raise BuildOutputReadError(
                plan.source_dir, str(e.context.get("cause", e))
            ) from e

        prefix = plan.canonical_basename + "."
        return [
            entry
            for entry in entries
            if entry.name.startswith(prefix) and entry.name.endswith(plan.extension)
        ]

    def export(self, plan: ExportPlan) -> list[Path]:
        """Copy the outputs described by ``plan``.

        Returns:
            Destination paths of the copied files

        Raises:
            BuildOutputReadError: If the build output directory cannot be listed
            ArtifactCopyError: If any file cannot be copied
        """
        exported: list[Path] = []

        for source in self.find_variants(plan):
            variant_infix = source.name[len(plan.canonical_basename) :]
            destination = plan.destination_for(variant_infix)
            self._copy(source, destination)
            exported.append(destination)

        elf_source = plan.debug_symbols
        if self.file_adapter.exists(elf_source):
            elf_destination = plan.destination_for(".elf")
            self._copy(elf_source, elf_destination)
            exported.append(elf_destination)

        logger.info(
            "Exported %d artifacts to %s", len(exported), plan.destination_dir
        )
        return exported

    def export_build(
        self,
        build_properties: BuildProperties,
        fqbn: FQBN,
        sketch: Sketch,
        export_file: str = "",
    ) -> list[Path]:
        """Plan and run an export in one step."""
        plan = self.plan_export(build_properties, fqbn, sketch, export_file)
        return self.export(plan)

    def _copy(self, source: Path, destination: Path) -> None:
        logger.debug("Copying sketch build output: %s -> %s", source, destination)
        try:
            self.file_adapter.copy_file(source, destination)
        except FileSystemError as e:
            raise ArtifactCopyError(
                source, destination, str(e.context.get("cause", e))
            ) from e


def create_artifact_exporter(
    file_adapter: FileAdapterProtocol | None = None,
) -> ArtifactExporter:
    """Create an artifact exporter with the default file adapter."""
    return ArtifactExporter(file_adapter=file_adapter)
