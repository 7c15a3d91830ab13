"""Fixtures for CLI tests."""

import logging
from collections.abc import Generator

import pytest

from sketchbox.cli import app
from sketchbox.cli.commands import register_all_commands
from sketchbox.core.logging import configure_structlog


# Register commands with the app before running tests
register_all_commands(app)


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Undo the logging setup done by the CLI callback."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    configure_structlog(logging.DEBUG)
