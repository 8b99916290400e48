"""Typed configuration loading.

opgraph.toml layout:

    [package]
    name = "rhacs-operator"
    channel_family = "rhacs"
    icon = "icon.png"

    [paths]
    input = "bundles.yaml"
    output = "catalog-template.yaml"

    [exceptions]
    schema = 1
    rootless_versions = ["3.62.0", "4.0.0"]

The [exceptions] table is kept raw here and interpreted by the catalog layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "PackageConfig",
    "PathsConfig",
    "DEFAULT_CONFIG_FILE",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CONFIG_FILE = "opgraph.toml"

DEFAULT_PACKAGE_NAME = "rhacs-operator"
DEFAULT_CHANNEL_FAMILY = "rhacs"
DEFAULT_ICON = "icon.png"
DEFAULT_INPUT = "bundles.yaml"
DEFAULT_OUTPUT = "catalog-template.yaml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PackageConfig:
    """Identity of the generated OLM package."""

    name: str = DEFAULT_PACKAGE_NAME
    channel_family: str = DEFAULT_CHANNEL_FAMILY
    icon: str = DEFAULT_ICON
    icon_media_type: str | None = None


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Input and output locations, relative to the config file."""

    input: str = DEFAULT_INPUT
    output: str = DEFAULT_OUTPUT


def _empty_table() -> StrDict:
    return {}


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    package: PackageConfig = field(default_factory=PackageConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    exceptions: StrDict = field(default_factory=_empty_table)
    base_dir: Path = field(default_factory=Path)

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, base_dir: Path | None = None) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        package: StrDict = get_table(data, "package") or {}
        paths: StrDict = get_table(data, "paths") or {}

        return cls(
            package=PackageConfig(
                name=get_str(package, "name") or DEFAULT_PACKAGE_NAME,
                channel_family=get_str(package, "channel_family") or DEFAULT_CHANNEL_FAMILY,
                icon=get_str(package, "icon") or DEFAULT_ICON,
                icon_media_type=get_str(package, "icon_media_type"),
            ),
            paths=PathsConfig(
                input=get_str(paths, "input") or DEFAULT_INPUT,
                output=get_str(paths, "output") or DEFAULT_OUTPUT,
            ),
            exceptions=get_table(data, "exceptions") or {},
            base_dir=base_dir or Path(),
        )

    def resolve(self, relative: str) -> Path:
        """Resolve a configured path against the config file's directory."""
        p = Path(relative).expanduser()
        if p.is_absolute():
            return p
        return self.base_dir / p


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to opgraph.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Config.from_dict(result.value, base_dir=path.parent))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the defaults.

    A file that exists and is broken is still an error.
    """
    if not path.exists():
        return Ok(Config(base_dir=path.parent))
    return load_config(path)
