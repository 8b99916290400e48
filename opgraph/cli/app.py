from __future__ import annotations

import typer

from opgraph import __version__
from opgraph.cli.commands.check import check
from opgraph.cli.commands.generate import generate
from opgraph.cli.commands.graph import graph


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(generate)
app.command()(check)
app.command()(graph)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Compile released operator bundles into an OLM update graph."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
