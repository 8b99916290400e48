"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from opgraph.catalog.errors import CatalogError
from opgraph.core.result import Err, Result
from opgraph.output.errors import catalog_error_exit_code, print_catalog_error

if TYPE_CHECKING:
    from opgraph.cli.context import CLIContext


T = TypeVar("T")


def unwrap_or_exit(result: Result[T, CatalogError], ctx: CLIContext) -> T:
    """Return the value of an Ok, or report the error and exit.

    The exit code follows the error kind (input, config, I/O, internal).
    """
    if isinstance(result, Err):
        print_catalog_error(result.error, ctx.console)
        raise typer.Exit(code=catalog_error_exit_code(result.error))
    return result.value
