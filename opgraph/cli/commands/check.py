from __future__ import annotations

from pathlib import Path

import typer

from opgraph.cli.commands._helpers import unwrap_or_exit
from opgraph.cli.context import build_context
from opgraph.output.console import Style
from opgraph.services.generate import CatalogService


def check(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to opgraph.toml (default: ./opgraph.toml)."
    ),
    input_path: Path | None = typer.Option(None, "--input", "-i", help="Bundle list YAML."),
) -> None:
    """Validate the bundle list and exception table without writing anything."""
    ctx = build_context(config)
    service = CatalogService(config=ctx.config, console=ctx.console, input_path=input_path)

    unwrap_or_exit(service.exceptions(), ctx)
    summary = unwrap_or_exit(service.summarize(), ctx)

    ctx.console.print(f"versions: {summary.versions}", Style.DIM)
    ctx.console.print(f"minor lines: {summary.minor_lines}", Style.DIM)
    ctx.console.print(f"broken versions: {summary.broken}", Style.DIM)
    ctx.console.print(
        f"unsupported (< {summary.oldest_supported}): {summary.unsupported}", Style.DIM
    )
    if summary.newest is None:
        ctx.console.warning("bundle list has no images")
        return
    ctx.console.success(f"bundle list is valid (newest: {summary.newest})")
