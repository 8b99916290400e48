from __future__ import annotations

import base64
from pathlib import Path

from opgraph.core.result import Err, Ok, Result
from opgraph.catalog.errors import CatalogError
from opgraph.catalog.model import Icon

_MEDIA_TYPES = {
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def load_icon(path: Path, media_type: str | None = None) -> Result[Icon, CatalogError]:
    """Read an icon file into the base64 payload of the package record."""
    resolved = media_type or _MEDIA_TYPES.get(path.suffix.lower())
    if resolved is None:
        return Err(
            CatalogError(
                kind="invalid_document",
                message=f"unknown icon type: {path.name}",
                hint="Use a .png/.svg/.jpg icon or set package.icon_media_type",
            )
        )
    try:
        data = path.read_bytes()
    except OSError as e:
        return Err(CatalogError(kind="io", message=f"failed to read icon: {e}", hint=str(path)))
    return Ok(Icon(base64data=base64.b64encode(data).decode("ascii"), media_type=resolved))
