"""Build log sink forwarding engine output to caller-provided streams."""

from threading import Lock
from typing import TextIO

from sketchbox.utils.stream_process import OutputMiddleware


class BuildLogSink(OutputMiddleware[str]):
    """Middleware that writes build output lines to the caller's streams.

    stdout lines go to ``stdout``, stderr lines to ``stderr``. The streams
    belong to the caller and are flushed but never closed here.

    Thread-safe, since stdout and stderr are drained on separate threads.
    """

    def __init__(self, stdout: TextIO, stderr: TextIO) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self._lock = Lock()

    def process(self, line: str, stream_type: str) -> str:
        stream = self.stdout if stream_type == "stdout" else self.stderr
        with self._lock:
            stream.write(line + "\n")
            stream.flush()
        return line

    def info(self, message: str) -> None:
        """Write an informational message to the output stream."""
        self.process(message, "stdout")

    def warning(self, message: str) -> None:
        """Write a warning message to the error stream."""
        self.process(message, "stderr")
