"""Build properties: an ordered ``key=value`` map with template expansion.

Arduino platform files (``boards.txt``, ``platform.txt``, ``preferences.txt``)
and the property dump of the build engine all share the same flat format::

    # comment
    build.path=/tmp/build
    recipe.output.tmp_file={build.project_name}.hex

Values may reference other keys with ``{key}`` placeholders which are
resolved by :meth:`BuildProperties.expand`.
"""

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path


logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]+)\}")

# Nested placeholders are resolved in repeated passes, capped to stop cycles
MAX_EXPANSION_PASSES = 10


class BuildProperties:
    """Ordered string-keyed property map."""

    def __init__(
        self, entries: Mapping[str, str] | Iterable[tuple[str, str]] | None = None
    ) -> None:
        self._entries: dict[str, str] = {}
        if entries is not None:
            items = entries.items() if isinstance(entries, Mapping) else entries
            for key, value in items:
                self.set(key, value)

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: str = "<string>") -> "BuildProperties":
        """Parse ``key=value`` lines, ignoring blanks and ``#`` comments.

        Raises:
            ValueError: If a non-comment line has no ``=`` separator
        """
        properties = cls()
        for number, raw_line in enumerate(lines, start=1):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            key, sep, value = line.partition("=")
            if not sep or not key.strip():
                raise ValueError(
                    f"invalid property line {number} in {source}: {raw_line!r}"
                )
            properties.set(key.strip(), value.strip())
        return properties

    @classmethod
    def from_text(cls, text: str, source: str = "<string>") -> "BuildProperties":
        return cls.from_lines(text.splitlines(), source)

    @classmethod
    def load(cls, path: Path) -> "BuildProperties":
        """Load a properties file.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is malformed
        """
        logger.debug("Loading properties from %s", path)
        text = path.read_text(encoding="utf-8")
        return cls.from_text(text, source=str(path))

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._entries.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value

    def keys(self) -> list[str]:
        return list(self._entries)

    def items(self) -> list[tuple[str, str]]:
        return list(self._entries.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def sub_tree(self, prefix: str) -> "BuildProperties":
        """Return the entries under ``prefix.`` with the prefix removed."""
        head = prefix + "."
        return BuildProperties(
            (key[len(head) :], value)
            for key, value in self._entries.items()
            if key.startswith(head)
        )

    def expand(self, template: str) -> str:
        """Replace ``{key}`` placeholders with their values.

        Unknown placeholders are left untouched.
        """

        def _substitute(match: re.Match[str]) -> str:
            value = self._entries.get(match.group(1))
            return match.group(0) if value is None else value

        result = template
        for _ in range(MAX_EXPANSION_PASSES):
            expanded = PLACEHOLDER_PATTERN.sub(_substitute, result)
            if expanded == result:
                break
            result = expanded
        return result

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BuildProperties):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"BuildProperties({self._entries!r})"


def expand_props(template: str, properties: BuildProperties) -> str:
    """Expand ``template`` against ``properties``."""
    return properties.expand(template)


def merge_build_properties(
    defaults: Iterable[str], overrides: Iterable[str]
) -> list[str]:
    """Merge ``key=value`` property assignments, defaults first.

    The build engine applies assignments in order with the last one winning,
    so placing defaults first lets explicit overrides take precedence.
    """
    return [*defaults, *overrides]
