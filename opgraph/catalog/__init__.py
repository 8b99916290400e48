"""Version-to-update-graph compiler."""

from .assembler import compile_catalog
from .channels import ChannelNaming, assign_channels
from .deprecations import mark_deprecations
from .edges import build_entry, bundle_name
from .errors import CatalogError
from .exceptions import ExceptionTable
from .loader import parse_bundle_list, read_bundle_list
from .model import BundleImage, CatalogTemplate, Channel, ChannelEntry, VersionCatalog
from .render import render_catalog, write_catalog
from .version import Version, parse_version

__all__ = [
    "BundleImage",
    "CatalogError",
    "CatalogTemplate",
    "Channel",
    "ChannelEntry",
    "ChannelNaming",
    "ExceptionTable",
    "Version",
    "VersionCatalog",
    "assign_channels",
    "build_entry",
    "bundle_name",
    "compile_catalog",
    "mark_deprecations",
    "parse_bundle_list",
    "parse_version",
    "read_bundle_list",
    "render_catalog",
    "write_catalog",
]
