from __future__ import annotations

from pathlib import Path

import typer

from opgraph.cli.commands._helpers import unwrap_or_exit
from opgraph.cli.context import build_context
from opgraph.services.generate import CatalogService


def generate(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to opgraph.toml (default: ./opgraph.toml)."
    ),
    input_path: Path | None = typer.Option(None, "--input", "-i", help="Bundle list YAML."),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Catalog template to write."
    ),
    icon: Path | None = typer.Option(None, "--icon", help="Package icon file."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the catalog template instead of writing it."
    ),
) -> None:
    """Compile the bundle list into an OLM catalog template."""
    ctx = build_context(config, stderr=dry_run)

    service = CatalogService(
        config=ctx.config,
        console=ctx.console,
        input_path=input_path,
        output_path=output_path,
        icon_path=icon,
    )
    report = unwrap_or_exit(service.generate(dry_run=dry_run), ctx)

    if dry_run:
        typer.echo(report.text, nl=False)
