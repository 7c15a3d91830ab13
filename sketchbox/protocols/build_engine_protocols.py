"""Protocol definitions for the delegated build engine."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from sketchbox.compilation.models import BuildConfig
    from sketchbox.compilation.properties import BuildProperties


@runtime_checkable
class BuildEngineProtocol(Protocol):
    """The three build stages the compile pipeline delegates to.

    Each stage writes progress to the streams held by the config and raises
    an error on failure. Cancellation is signalled through
    ``config.cancel_event``.
    """

    def run_show_properties(self, config: "BuildConfig") -> None:
        """Parse hardware and dump the build properties."""
        ...

    def run_preprocess(self, config: "BuildConfig") -> None:
        """Run the sketch preprocessor only."""
        ...

    def run_full_build(self, config: "BuildConfig") -> "BuildProperties":
        """Compile and link the sketch, returning the build properties."""
        ...
