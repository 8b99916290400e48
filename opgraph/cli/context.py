from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from opgraph.core.config import DEFAULT_CONFIG_FILE, Config, load_config_or_default
from opgraph.core.errors import ErrorCode
from opgraph.core.result import Err
from opgraph.output.console import ConsoleProtocol, RichConsole
from opgraph.output.errors import print_config_error

CONFIG_ENV = "OPGRAPH_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    config_path: Path
    console: ConsoleProtocol


def config_path_from_env() -> Path:
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_FILE


def build_context(config_path: Path | None = None, *, stderr: bool = False) -> CLIContext:
    console = RichConsole(stderr=stderr)
    path = config_path or config_path_from_env()

    result = load_config_or_default(path)
    if isinstance(result, Err):
        print_config_error(result.error, console)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(config=result.value, config_path=path, console=console)
