"""Upgrade edges of a single channel entry."""

from __future__ import annotations

from collections.abc import Iterable

from opgraph.catalog.exceptions import ExceptionTable
from opgraph.catalog.model import ChannelEntry
from opgraph.catalog.version import Version


def bundle_name(package: str, version: Version) -> str:
    return f"{package}.v{version}"


def skip_range(version: Version, floor: Version) -> str:
    return f">= {floor.major}.{floor.minor}.0 < {version}"


def skipped_broken_versions(
    version: Version,
    broken_versions: Iterable[Version],
    retention_minors: int,
) -> list[Version]:
    """Broken versions that `version` may upgrade over.

    A broken X.Y.Z stays skippable for every version above it and below
    X.(Y+retention).0, then drops out for good.
    """
    return [
        b
        for b in sorted(broken_versions)
        if b < version < b.add_minors(retention_minors)
    ]


def build_entry(
    *,
    package: str,
    version: Version,
    predecessor: Version | None,
    floor: Version,
    broken_versions: Iterable[Version],
    exceptions: ExceptionTable,
) -> ChannelEntry:
    """Build the channel entry for `version`.

    `predecessor` is ignored for rootless versions and may only be None for
    them; callers check that before building.
    """
    replaces: str | None = None
    if version not in exceptions.rootless_versions and predecessor is not None:
        replaces = bundle_name(package, predecessor)

    skips: tuple[str, ...] = ()
    if version not in exceptions.skip_exempt_versions:
        skips = tuple(
            bundle_name(package, b)
            for b in skipped_broken_versions(
                version, broken_versions, exceptions.skip_retention_minors
            )
        )

    return ChannelEntry(
        version=version,
        name=bundle_name(package, version),
        skip_range=skip_range(version, floor),
        replaces=replaces,
        skips=skips,
    )
