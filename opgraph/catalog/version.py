from __future__ import annotations

import re
from dataclasses import dataclass, field

from opgraph.core.result import Err, Ok, Result
from opgraph.catalog.errors import CatalogError


_STRICT_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")
_MINOR_LINE_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)$")


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """A released MAJOR.MINOR.PATCH version.

    Ordering and equality use the numeric triple only. `text` keeps the input
    spelling, which is what gets embedded into bundle names and skipRanges.
    """

    major: int
    minor: int
    patch: int
    text: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.text or f"{self.major}.{self.minor}.{self.patch}"

    @property
    def minor_line(self) -> tuple[int, int]:
        return (self.major, self.minor)

    def y_stream(self) -> Version:
        """The patch-zero version of this minor line."""
        return Version(self.major, self.minor, 0)

    def add_minors(self, n: int) -> Version:
        return Version(self.major, self.minor + n, 0)


def parse_version(text: str) -> Result[Version, CatalogError]:
    m = _STRICT_RE.match(text)
    if m is None:
        return Err(
            CatalogError(
                kind="invalid_version",
                message=f"invalid semantic version: {text!r}",
                hint="Expected MAJOR.MINOR.PATCH with no prefix, pre-release or build metadata",
            )
        )
    return Ok(Version(int(m.group(1)), int(m.group(2)), int(m.group(3)), text))


def parse_minor_line(text: str) -> tuple[int, int] | None:
    """Parse "MAJOR.MINOR" into a (major, minor) key."""
    m = _MINOR_LINE_RE.match(text)
    if m is None:
        return None
    return (int(m.group(1)), int(m.group(2)))
