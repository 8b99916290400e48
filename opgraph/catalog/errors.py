"""Error payload for the catalog bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

CatalogErrorKind = Literal[
    "invalid_document",
    "invalid_version",
    "invalid_image",
    "unsorted_versions",
    "duplicate_version",
    "missing_predecessor",
    "invalid_exceptions",
    "internal",
    "io",
]


@dataclass(frozen=True, slots=True)
class CatalogError:
    """Canonical catalog error.

    `message` names the offending input item; `hint` says what to change.
    """

    kind: CatalogErrorKind
    message: str
    hint: str | None = None

    def at(self, location: str) -> CatalogError:
        """Return a copy with `location: ` prefixed to the message."""
        return CatalogError(kind=self.kind, message=f"{location}: {self.message}", hint=self.hint)
