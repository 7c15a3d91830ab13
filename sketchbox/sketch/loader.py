"""Sketch loading from the file system."""

import json
import logging
from pathlib import Path

from sketchbox.core.errors import SketchLoadError
from sketchbox.sketch.models import Sketch


logger = logging.getLogger(__name__)

MAIN_FILE_EXTENSIONS = (".ino", ".pde")
METADATA_FILE = "sketch.json"


class FilesystemSketchLoader:
    """Load sketches laid out as ``<Name>/<Name>.ino``.

    The path may point at the sketch folder or at any file inside it. The
    optional ``sketch.json`` metadata file records a default board under
    ``cpu.fqbn``.
    """

    def load_sketch(self, path: Path) -> Sketch:
        """Load the sketch at ``path``.

        Raises:
            SketchLoadError: If the path does not exist, has no main file or
                carries unreadable metadata
        """
        if not path.exists():
            raise SketchLoadError(path, f"no such file or directory: {path}")

        sketch_dir = path if path.is_dir() else path.parent
        sketch_dir = sketch_dir.absolute()
        name = sketch_dir.name

        main_file = self._find_main_file(sketch_dir, name)
        if main_file is None:
            raise SketchLoadError(
                path, f"no valid sketch found in {sketch_dir}: missing {name}.ino"
            )

        sketch = Sketch(
            full_path=sketch_dir,
            name=name,
            main_file=main_file,
            default_fqbn=self._read_default_fqbn(sketch_dir),
        )
        logger.debug("Loaded sketch %s from %s", sketch.name, sketch.full_path)
        return sketch

    def _find_main_file(self, sketch_dir: Path, name: str) -> Path | None:
        for extension in MAIN_FILE_EXTENSIONS:
            candidate = sketch_dir / f"{name}{extension}"
            if candidate.is_file():
                return candidate
        return None

    def _read_default_fqbn(self, sketch_dir: Path) -> str | None:
        metadata_file = sketch_dir / METADATA_FILE
        if not metadata_file.is_file():
            return None

        try:
            metadata = json.loads(metadata_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise SketchLoadError(
                sketch_dir, f"reading sketch metadata {metadata_file}: {e}"
            ) from e

        cpu = metadata.get("cpu") if isinstance(metadata, dict) else None
        fqbn = cpu.get("fqbn") if isinstance(cpu, dict) else None
        return fqbn or None


def create_sketch_loader() -> FilesystemSketchLoader:
    """Create the default sketch loader."""
    return FilesystemSketchLoader()
