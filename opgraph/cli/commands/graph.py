from __future__ import annotations

from pathlib import Path

import typer

from opgraph.catalog.model import CHANNEL_SCHEMA, CatalogTemplate, Channel, ChannelEntry
from opgraph.cli.commands._helpers import unwrap_or_exit
from opgraph.cli.context import CLIContext, build_context
from opgraph.output.console import Style
from opgraph.services.generate import CatalogService


def graph(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to opgraph.toml (default: ./opgraph.toml)."
    ),
    input_path: Path | None = typer.Option(None, "--input", "-i", help="Bundle list YAML."),
    icon: Path | None = typer.Option(None, "--icon", help="Package icon file."),
    channel: str | None = typer.Option(None, "--channel", help="Only show this channel."),
) -> None:
    """Show the computed channels and upgrade edges."""
    ctx = build_context(config)
    service = CatalogService(
        config=ctx.config, console=ctx.console, input_path=input_path, icon_path=icon
    )
    template = unwrap_or_exit(service.compile(), ctx)

    deprecated = deprecated_channels(template)
    shown = 0
    for c in template.channels:
        if channel is not None and c.name != channel:
            continue
        _print_channel(ctx, c, deprecated=c.name in deprecated)
        shown += 1

    if channel is not None and shown == 0:
        ctx.console.error(f"unknown channel: {channel}")
        raise typer.Exit(code=1)


def deprecated_channels(template: CatalogTemplate) -> set[str]:
    return {e.name for e in template.deprecations.entries if e.schema == CHANNEL_SCHEMA}


def _print_channel(ctx: CLIContext, channel: Channel, *, deprecated: bool) -> None:
    suffix = " (deprecated)" if deprecated else ""
    ctx.console.header(f"{channel.name}{suffix}")
    if not channel.entries:
        ctx.console.print("  (no entries)", Style.DIM)
    for entry in channel.entries:
        ctx.console.print(f"  {_describe(entry)}")


def _describe(entry: ChannelEntry) -> str:
    parts = [entry.name]
    if entry.replaces is not None:
        parts.append(f"replaces {entry.replaces}")
    parts.append(f"skipRange '{entry.skip_range}'")
    if entry.skips:
        parts.append(f"skips {', '.join(entry.skips)}")
    return " | ".join(parts)
