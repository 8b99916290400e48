"""Deprecation markers for channels and bundles."""

from __future__ import annotations

from collections.abc import Sequence

from opgraph.catalog.edges import bundle_name
from opgraph.catalog.model import (
    BUNDLE_SCHEMA,
    CHANNEL_SCHEMA,
    LATEST_CHANNEL,
    Channel,
    DeprecationEntry,
    Deprecations,
)
from opgraph.catalog.version import Version

LATEST_CHANNEL_MESSAGE = (
    "The `latest` channel is no longer supported.  Please switch to the `stable` channel.\n"
)
CHANNEL_MESSAGE = (
    "This version is no longer supported. Please switch to the `stable` channel "
    "or a channel for a version that is still supported.\n"
)
BUNDLE_MESSAGE = (
    "This version is no longer supported. Please upgrade to a supported version "
    "using the `stable` channel.\n"
)


def mark_deprecations(
    *,
    package: str,
    channels: Sequence[Channel],
    versions: Sequence[Version],
    oldest_supported_version: Version,
    supported_channel_count: int | None = None,
) -> Deprecations:
    """Deprecate `latest`, then old y-stream channels, then old bundles.

    A y-stream channel is old when its minor line starts below
    `oldest_supported_version`; with `supported_channel_count` set, every
    y-stream channel but the newest N is old as well.
    """
    entries: list[DeprecationEntry] = [
        DeprecationEntry(schema=CHANNEL_SCHEMA, name=LATEST_CHANNEL, message=LATEST_CHANNEL_MESSAGE)
    ]

    y_streams = sorted(
        (c for c in channels if c.y_stream is not None),
        key=lambda c: c.y_stream or Version(0, 0, 0),
    )
    keep_from = 0
    if supported_channel_count is not None:
        keep_from = max(0, len(y_streams) - supported_channel_count)

    for i, channel in enumerate(y_streams):
        assert channel.y_stream is not None
        if channel.y_stream < oldest_supported_version or i < keep_from:
            entries.append(
                DeprecationEntry(schema=CHANNEL_SCHEMA, name=channel.name, message=CHANNEL_MESSAGE)
            )

    for version in sorted(versions):
        if version < oldest_supported_version:
            entries.append(
                DeprecationEntry(
                    schema=BUNDLE_SCHEMA,
                    name=bundle_name(package, version),
                    message=BUNDLE_MESSAGE,
                )
            )

    return Deprecations(package=package, entries=tuple(entries))
