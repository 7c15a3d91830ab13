"""Process execution and streaming output handling.

This module provides tools for running subprocesses and handling their output
streams. Output lines are handed to a middleware object as they arrive, which
is how build engine progress reaches the caller's streams in real time.

Example:
    ```python
    from sketchbox.utils.stream_process import run_command, DefaultOutputMiddleware

    return_code, stdout, stderr = run_command(
        ["arduino-builder", "-version"], middleware=DefaultOutputMiddleware()
    )
    ```
"""

import logging
import shlex
import subprocess
import threading
from threading import Thread
from typing import Any, Generic, TypeAlias, TypeVar, cast


logger = logging.getLogger(__name__)

T = TypeVar("T")  # Type of processed output

# Type alias for the result of run_command
ProcessResult: TypeAlias = tuple[int, list[T], list[T]]  # (return_code, stdout, stderr)

# How often a running process checks the cancellation event, in seconds
CANCEL_POLL_INTERVAL = 0.1


class CommandCancelledError(Exception):
    """Raised when a command is terminated through its cancellation event."""


class OutputMiddleware(Generic[T]):
    """Base class for processing command output streams.

    Type parameter T represents the return type of the process method,
    allowing middleware to transform strings into other types if needed.
    """

    def process(self, line: str, stream_type: str) -> T:
        """Process a line of output from a subprocess stream.

        Args:
            line: A line of text from the process output
            stream_type: Either "stdout" or "stderr"

        Returns:
            Processed output of type T
        """
        raise NotImplementedError()


class DefaultOutputMiddleware(OutputMiddleware[str]):
    """Simple middleware that prints output with optional prefixes."""

    def __init__(self, stdout_prefix: str = "", stderr_prefix: str = "ERROR: ") -> None:
        self.stdout_prefix = stdout_prefix
        self.stderr_prefix = stderr_prefix

    def process(self, line: str, stream_type: str) -> str:
        prefix = self.stdout_prefix if stream_type == "stdout" else self.stderr_prefix
        print(f"{prefix}{line}")
        return line


def run_command(
    cmd: str | list[str],
    middleware: OutputMiddleware[T] | None = None,
    cancel_event: threading.Event | None = None,
) -> ProcessResult[T]:
    """Run a command and process its output through middleware.

    Args:
        cmd: Command to run, either as a string or list of arguments
        middleware: Optional middleware for processing output (uses DefaultOutputMiddleware if None)
        cancel_event: When set while the command runs, the process is terminated

    Returns:
        Tuple containing the return code, processed stdout lines and
        processed stderr lines

    Raises:
        CommandCancelledError: If the cancellation event was set
    """
    if middleware is None:
        # Cast is needed because T is unbound at this point
        middleware = cast(OutputMiddleware[T], DefaultOutputMiddleware())

    if isinstance(cmd, str):
        cmd = shlex.split(cmd)

    logger.debug("Running command: %s", shlex.join(cmd))
    process = subprocess.Popen(
        cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, bufsize=1
    )

    def stream_output(stream: Any, stream_type: str) -> list[T]:
        captured: list[T] = []
        for line in iter(stream.readline, ""):
            if line:
                processed = middleware.process(line.rstrip(), stream_type)
                if processed is not None:
                    captured.append(processed)
        stream.close()
        return captured

    stdout_lines: list[T] = []
    stderr_lines: list[T] = []

    stdout_thread = Thread(
        target=lambda: stdout_lines.extend(stream_output(process.stdout, "stdout")),
        daemon=True,
    )
    stderr_thread = Thread(
        target=lambda: stderr_lines.extend(stream_output(process.stderr, "stderr")),
        daemon=True,
    )
    stdout_thread.start()
    stderr_thread.start()

    cancelled = False
    if cancel_event is None:
        return_code = process.wait()
    else:
        while True:
            try:
                return_code = process.wait(timeout=CANCEL_POLL_INTERVAL)
                break
            except subprocess.TimeoutExpired:
                if cancel_event.is_set():
                    logger.debug("Cancellation requested, terminating %s", cmd[0])
                    process.terminate()
                    return_code = process.wait()
                    cancelled = True
                    break

    stdout_thread.join()
    stderr_thread.join()

    if cancelled:
        raise CommandCancelledError(f"{cmd[0]} cancelled")

    return return_code, stdout_lines, stderr_lines
