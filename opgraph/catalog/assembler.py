"""Compose the catalog template from a validated version catalog."""

from __future__ import annotations

from opgraph.core.result import Err, Ok, Result
from opgraph.catalog.channels import ChannelNaming, assign_channels
from opgraph.catalog.deprecations import mark_deprecations
from opgraph.catalog.errors import CatalogError
from opgraph.catalog.exceptions import ExceptionTable
from opgraph.catalog.model import (
    STABLE_CHANNEL,
    BundleEntry,
    CatalogTemplate,
    Icon,
    Package,
    VersionCatalog,
)


def compile_catalog(
    catalog: VersionCatalog,
    *,
    naming: ChannelNaming,
    icon: Icon,
    exceptions: ExceptionTable | None = None,
) -> Result[CatalogTemplate, CatalogError]:
    """Compile `catalog` into package, channels, deprecations and bundles.

    Pure: the same catalog and exception table always give an equal template.
    """
    table = exceptions or ExceptionTable()

    channels = assign_channels(catalog, naming=naming, exceptions=table)
    if isinstance(channels, Err):
        return channels

    deprecations = mark_deprecations(
        package=naming.package,
        channels=channels.value,
        versions=catalog.versions,
        oldest_supported_version=catalog.oldest_supported_version,
        supported_channel_count=table.supported_channel_count,
    )

    template = CatalogTemplate(
        package=Package(name=naming.package, icon=icon, default_channel=STABLE_CHANNEL),
        channels=channels.value,
        deprecations=deprecations,
        bundles=tuple(BundleEntry(image=b.image) for b in catalog.images),
    )

    if template.channel(STABLE_CHANNEL) is None or len(template.bundles) != len(catalog.images):
        return Err(CatalogError(kind="internal", message="assembled catalog is incomplete"))
    return Ok(template)
