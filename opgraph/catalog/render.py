"""Serialize a catalog template to YAML."""

from __future__ import annotations

from pathlib import Path

import yaml

from opgraph.core.result import Err, Ok, Result
from opgraph.catalog.errors import CatalogError
from opgraph.catalog.model import CatalogTemplate
from opgraph.platform.files import atomic_write_text

HEADER_RULE = "-" * 75
HEADER_LINES = (
    "This file is generated by `opgraph generate` from the bundle list.",
    "Do not edit it by hand; change the bundle list and regenerate instead.",
)


class _CatalogDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_CatalogDumper.add_representer(str, _represent_str)


def render_catalog(template: CatalogTemplate) -> str:
    header = "\n".join(f"# {line}" for line in (HEADER_RULE, *HEADER_LINES, HEADER_RULE))
    body = yaml.dump(
        template.to_dict(),
        Dumper=_CatalogDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        # Never fold long scalars such as the base64 icon.
        width=float("inf"),
    )
    return f"{header}\n{body}"


def write_catalog(template: CatalogTemplate, path: Path) -> Result[bool, CatalogError]:
    """Write the rendered template; Ok(False) means the file was already current."""
    try:
        changed = atomic_write_text(path, render_catalog(template))
    except OSError as e:
        return Err(
            CatalogError(kind="io", message=f"failed to write catalog: {e}", hint=str(path))
        )
    return Ok(changed)
