"""Compile request model."""

from enum import Enum

from pydantic import ConfigDict, Field, field_validator

from sketchbox.models.base import SketchboxBaseModel


class WarningsLevel(str, Enum):
    """Compiler warnings level passed to the build engine."""

    NONE = "none"
    DEFAULT = "default"
    MORE = "more"
    ALL = "all"


class CompileRequest(SketchboxBaseModel):
    """Immutable description of a compile request.

    The board may be given through ``board`` or the deprecated ``fqbn``
    field; when both are empty the sketch's default board is used.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)

    instance_id: int = 1
    board: str = ""
    fqbn: str = Field(default="", description="Deprecated, use board")
    sketch_path: str = ""
    build_path: str = ""
    build_cache_path: str = ""
    export_file: str = ""
    libraries: tuple[str, ...] = ()
    build_properties: tuple[str, ...] = ()

    show_properties: bool = False
    preprocess: bool = False
    dry_run: bool = False
    verbose: bool = False
    quiet: bool = False
    optimize_for_debug: bool = False
    warnings: WarningsLevel = WarningsLevel.NONE
    jobs: int = Field(default=0, ge=0, description="Parallel jobs, 0 for engine default")
    vid_pid: str = ""

    @field_validator("build_properties")
    @classmethod
    def validate_build_properties(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Require ``key=value`` assignments."""
        for assignment in v:
            key, sep, _ = assignment.partition("=")
            if not sep or not key.strip():
                raise ValueError(
                    f"Build property must be in key=value form: {assignment!r}"
                )
        return v

    @field_validator("vid_pid")
    @classmethod
    def validate_vid_pid(cls, v: str) -> str:
        """Accept an empty filter or ``VID_PID`` hex pairs."""
        if not v:
            return v
        vid, sep, pid = v.partition("_")
        if not sep or not vid or not pid:
            raise ValueError(f"VID/PID must be in VID_PID form: {v!r}")
        try:
            int(vid, 16)
            int(pid, 16)
        except ValueError:
            raise ValueError(f"VID/PID must be hexadecimal: {v!r}") from None
        return v
