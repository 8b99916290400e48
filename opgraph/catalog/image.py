"""Container image reference validation.

Follows the reference grammar used by container registries:

    [domain[:port]/]path[/path...][:tag][@algorithm:hex]

Bundles must be content-addressed, so a reference without a digest is
rejected even when it is otherwise well formed.
"""

from __future__ import annotations

import re

from opgraph.core.result import Err, Ok, Result
from opgraph.catalog.errors import CatalogError

_COMPONENT = r"[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*"
_DOMAIN_PART = r"(?:[a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])"
_DOMAIN = rf"(?:{_DOMAIN_PART}(?:\.{_DOMAIN_PART})*|\[[0-9a-fA-F:]+\])(?::[0-9]+)?"
_TAG = r"[\w][\w.-]{0,127}"
_DIGEST = r"[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}"

_REFERENCE_RE = re.compile(
    rf"^(?P<name>(?:{_DOMAIN}/)?{_COMPONENT}(?:/{_COMPONENT})*)"
    rf"(?::(?P<tag>{_TAG}))?"
    rf"(?:@(?P<digest>{_DIGEST}))?$"
)
_NAME_MAX_LENGTH = 255


def validate_image_reference(image: str) -> Result[str, CatalogError]:
    """Return the reference unchanged if it is digest-qualified."""
    m = _REFERENCE_RE.match(image)
    if m is None or len(m.group("name")) > _NAME_MAX_LENGTH:
        return Err(
            CatalogError(
                kind="invalid_image",
                message=f"cannot parse string as container image reference: {image!r}",
            )
        )
    if m.group("digest") is None:
        return Err(
            CatalogError(
                kind="invalid_image",
                message=f"image reference does not include a digest: {image}",
                hint="Pin the bundle image as <repository>@sha256:<hex>",
            )
        )
    return Ok(image)
