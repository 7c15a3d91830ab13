"""Legacy Arduino IDE preferences lookup."""

import logging
from pathlib import Path

from sketchbox.compilation.properties import BuildProperties


logger = logging.getLogger(__name__)

HARDWARE_PATH_SUFFIX = ".hardwarepath"


def find_ide_libraries_dir(preferences_file: Path) -> Path | None:
    """Locate the libraries bundled with a legacy Arduino IDE installation.

    The IDE records its hardware folder in ``preferences.txt`` under
    ``last.ide.<version>.hardwarepath``. Records from several IDE versions may
    coexist; the lexicographically greatest key is taken as the most recent.
    The libraries folder sits next to the hardware folder.

    Returns:
        The IDE libraries directory, or None when no IDE record is available
    """
    try:
        preferences = BuildProperties.load(preferences_file)
    except (OSError, ValueError) as e:
        logger.debug("No IDE preferences at %s: %s", preferences_file, e)
        return None

    last_ide = preferences.sub_tree("last").sub_tree("ide")
    path_variants = sorted(
        key for key in last_ide.keys() if key.endswith(HARDWARE_PATH_SUFFIX)
    )
    if not path_variants:
        logger.debug("No IDE hardware path recorded in %s", preferences_file)
        return None

    ide_hardware_path = last_ide[path_variants[-1]]
    if not ide_hardware_path:
        return None

    libraries_dir = Path(ide_hardware_path).parent / "libraries"
    logger.debug("Found IDE libraries directory: %s", libraries_dir)
    return libraries_dir
