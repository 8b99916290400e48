"""Error presentation utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opgraph.catalog.errors import CatalogError
from opgraph.core.config import ConfigError
from opgraph.core.errors import ErrorCode
from opgraph.output.console import Style

if TYPE_CHECKING:
    from opgraph.output.console import ConsoleProtocol

__all__ = ["print_catalog_error", "catalog_error_exit_code", "print_config_error"]


def print_catalog_error(error: CatalogError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def print_config_error(error: ConfigError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.path is not None:
        console.print(f"hint: check {error.path}", Style.DIM)


def catalog_error_exit_code(error: CatalogError) -> int:
    match error.kind:
        case "invalid_exceptions":
            return int(ErrorCode.CONFIG_ERROR)
        case "io":
            return int(ErrorCode.IO_ERROR)
        case "internal":
            return int(ErrorCode.INTERNAL_ERROR)
        case _:
            return int(ErrorCode.INPUT_ERROR)
