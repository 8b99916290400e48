"""Catalog data model.

Input side: BundleImage and VersionCatalog. Output side: the OLM basic template
objects (package, channel, deprecations, bundle). Output objects render to plain
dicts in the key order OLM tooling emits them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from opgraph.core.result import Err, Ok, Result
from opgraph.catalog.errors import CatalogError
from opgraph.catalog.version import Version

TEMPLATE_SCHEMA = "olm.template.basic"
PACKAGE_SCHEMA = "olm.package"
CHANNEL_SCHEMA = "olm.channel"
DEPRECATIONS_SCHEMA = "olm.deprecations"
BUNDLE_SCHEMA = "olm.bundle"

LATEST_CHANNEL = "latest"
STABLE_CHANNEL = "stable"


@dataclass(frozen=True, slots=True)
class BundleImage:
    version: Version
    image: str


@dataclass(frozen=True, slots=True)
class VersionCatalog:
    """Ascending, duplicate-free bundle images plus support metadata.

    Build it with `build_version_catalog`, which checks the ordering.
    """

    images: tuple[BundleImage, ...]
    oldest_supported_version: Version
    broken_versions: frozenset[Version] = frozenset()

    @property
    def versions(self) -> tuple[Version, ...]:
        return tuple(b.version for b in self.images)


def build_version_catalog(
    *,
    images: list[BundleImage],
    oldest_supported_version: Version,
    broken_versions: frozenset[Version] = frozenset(),
) -> Result[VersionCatalog, CatalogError]:
    for i in range(1, len(images)):
        prev = images[i - 1].version
        cur = images[i].version
        if cur == prev:
            return Err(
                CatalogError(
                    kind="duplicate_version",
                    message=f"images[{i}]: duplicate version {cur} (also images[{i - 1}])",
                    hint="Each version must appear exactly once",
                )
            )
        if cur < prev:
            return Err(
                CatalogError(
                    kind="unsorted_versions",
                    message=f"images[{i}]: version {cur} comes after {prev}",
                    hint="List images in ascending version order",
                )
            )

    return Ok(
        VersionCatalog(
            images=tuple(images),
            oldest_supported_version=oldest_supported_version,
            broken_versions=broken_versions,
        )
    )


@dataclass(frozen=True, slots=True)
class ChannelEntry:
    version: Version
    name: str
    skip_range: str
    replaces: str | None = None
    skips: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {"name": self.name}
        if self.replaces is not None:
            out["replaces"] = self.replaces
        out["skipRange"] = self.skip_range
        if self.skips:
            out["skips"] = list(self.skips)
        return out


@dataclass(frozen=True, slots=True)
class Channel:
    name: str
    package: str
    entries: tuple[ChannelEntry, ...]
    # Opening version of a y-stream channel; None for latest/stable.
    y_stream: Version | None = None

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "schema": CHANNEL_SCHEMA,
            "name": self.name,
            "package": self.package,
        }
        if self.entries:
            out["entries"] = [e.to_dict() for e in self.entries]
        return out


@dataclass(frozen=True, slots=True)
class DeprecationEntry:
    schema: str
    name: str
    message: str

    def to_dict(self) -> dict[str, object]:
        return {
            "reference": {"schema": self.schema, "name": self.name},
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class Deprecations:
    package: str
    entries: tuple[DeprecationEntry, ...]

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {"schema": DEPRECATIONS_SCHEMA, "package": self.package}
        if self.entries:
            out["entries"] = [e.to_dict() for e in self.entries]
        return out


@dataclass(frozen=True, slots=True)
class Icon:
    base64data: str
    media_type: str


@dataclass(frozen=True, slots=True)
class Package:
    name: str
    icon: Icon
    default_channel: str = STABLE_CHANNEL

    def to_dict(self) -> dict[str, object]:
        return {
            "schema": PACKAGE_SCHEMA,
            "name": self.name,
            "defaultChannel": self.default_channel,
            "icon": {"base64data": self.icon.base64data, "mediatype": self.icon.media_type},
        }


@dataclass(frozen=True, slots=True)
class BundleEntry:
    image: str

    def to_dict(self) -> dict[str, object]:
        return {"schema": BUNDLE_SCHEMA, "image": self.image}


@dataclass(frozen=True, slots=True)
class CatalogTemplate:
    package: Package
    channels: tuple[Channel, ...]
    deprecations: Deprecations
    bundles: tuple[BundleEntry, ...] = field(default=())

    def to_dict(self) -> dict[str, object]:
        entries: list[dict[str, object]] = [self.package.to_dict()]
        entries.extend(c.to_dict() for c in self.channels)
        entries.append(self.deprecations.to_dict())
        entries.extend(b.to_dict() for b in self.bundles)
        return {"schema": TEMPLATE_SCHEMA, "entries": entries}

    def channel(self, name: str) -> Channel | None:
        for c in self.channels:
            if c.name == name:
                return c
        return None
