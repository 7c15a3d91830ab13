"""Protocol definitions for sketch loading."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from sketchbox.sketch.models import Sketch


@runtime_checkable
class SketchLoaderProtocol(Protocol):
    """Sketch discovery and metadata source."""

    def load_sketch(self, path: Path) -> Sketch:
        """Load the sketch at ``path``.

        Raises:
            SketchLoadError: If the path is not a readable sketch
        """
        ...
