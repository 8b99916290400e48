"""Versioned table of historical exceptions to the channel algorithm.

The update graph of a long-lived operator carries decisions that no general
rule explains: two eras each start from a version with no predecessor, one
minor line never got its own channel, a few patch releases had to stay
visible to later channels. Those live here as data so the compiler itself
stays rule-based. Defaults reproduce the published rhacs-operator graph.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from opgraph.core.result import Err, Ok, Result
from opgraph.core.structured import get_int, get_str, get_str_list
from opgraph.catalog.errors import CatalogError
from opgraph.catalog.version import Version, parse_minor_line, parse_version

EXCEPTIONS_SCHEMA = 1


def _v(text: str) -> Version:
    parsed = parse_version(text)
    assert isinstance(parsed, Ok), text
    return parsed.value


@dataclass(frozen=True, slots=True)
class ExceptionTable:
    schema: int = EXCEPTIONS_SCHEMA
    # Floor used for skipRanges before any persistent version exists.
    initial_floor: Version = _v("3.61.0")
    rootless_versions: frozenset[Version] = frozenset({_v("3.62.0"), _v("4.0.0")})
    # Minor lines whose entries join the channel of the line before them.
    merged_minor_lines: frozenset[tuple[int, int]] = frozenset({(3, 63)})
    pinned_persistent: frozenset[Version] = frozenset({_v("4.1.1"), _v("4.1.2"), _v("4.1.3")})
    # From this version on, every entry is carried into later channels.
    persistent_threshold: Version | None = _v("4.7.0")
    persistent_reset_version: Version | None = _v("4.0.0")
    latest_transition_version: Version | None = _v("4.0.0")
    skip_retention_minors: int = 2
    skip_exempt_versions: frozenset[Version] = frozenset()
    supported_channel_count: int | None = None

    def is_persistent(self, version: Version) -> bool:
        if version.patch == 0 or version in self.pinned_persistent:
            return True
        return self.persistent_threshold is not None and version >= self.persistent_threshold

    def is_merged(self, version: Version) -> bool:
        return version.minor_line in self.merged_minor_lines

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[ExceptionTable, CatalogError]:
        """Build a table from an `[exceptions]` TOML table.

        Keys that are absent keep their default; present keys replace it.
        """
        default = cls()

        if "schema" in data and get_int(data, "schema") != EXCEPTIONS_SCHEMA:
            return _invalid(
                f"unsupported exceptions schema: {data.get('schema')!r}",
                hint=f"Expected schema = {EXCEPTIONS_SCHEMA}",
            )

        initial_floor = _version_field(data, "initial_floor", default.initial_floor)
        if isinstance(initial_floor, Err):
            return initial_floor
        threshold = _optional_version_field(
            data, "persistent_threshold", default.persistent_threshold
        )
        if isinstance(threshold, Err):
            return threshold
        reset = _optional_version_field(
            data, "persistent_reset_version", default.persistent_reset_version
        )
        if isinstance(reset, Err):
            return reset
        transition = _optional_version_field(
            data, "latest_transition_version", default.latest_transition_version
        )
        if isinstance(transition, Err):
            return transition

        rootless = _version_set_field(data, "rootless_versions", default.rootless_versions)
        if isinstance(rootless, Err):
            return rootless
        pinned = _version_set_field(data, "pinned_persistent", default.pinned_persistent)
        if isinstance(pinned, Err):
            return pinned
        skip_exempt = _version_set_field(
            data, "skip_exempt_versions", default.skip_exempt_versions
        )
        if isinstance(skip_exempt, Err):
            return skip_exempt
        merged = _minor_lines_field(data, "merged_minor_lines", default.merged_minor_lines)
        if isinstance(merged, Err):
            return merged

        retention = default.skip_retention_minors
        if "skip_retention_minors" in data:
            value = get_int(data, "skip_retention_minors")
            if value is None or value < 1:
                return _invalid("skip_retention_minors must be a positive integer")
            retention = value

        channel_count = default.supported_channel_count
        if "supported_channel_count" in data:
            value = get_int(data, "supported_channel_count")
            if value is None or value < 1:
                return _invalid("supported_channel_count must be a positive integer")
            channel_count = value

        return Ok(
            cls(
                initial_floor=initial_floor.value,
                rootless_versions=rootless.value,
                merged_minor_lines=merged.value,
                pinned_persistent=pinned.value,
                persistent_threshold=threshold.value,
                persistent_reset_version=reset.value,
                latest_transition_version=transition.value,
                skip_retention_minors=retention,
                skip_exempt_versions=skip_exempt.value,
                supported_channel_count=channel_count,
            )
        )


def _invalid(message: str, hint: str | None = None) -> Err[CatalogError]:
    return Err(CatalogError(kind="invalid_exceptions", message=message, hint=hint))


def _parse_field_version(key: str, text: str) -> Result[Version, CatalogError]:
    parsed = parse_version(text)
    if isinstance(parsed, Err):
        return Err(
            CatalogError(kind="invalid_exceptions", message=f"{key}: {parsed.error.message}")
        )
    return parsed


def _version_field(
    data: Mapping[str, object], key: str, default: Version
) -> Result[Version, CatalogError]:
    if key not in data:
        return Ok(default)
    text = get_str(data, key)
    if text is None:
        return _invalid(f"{key} must be a version string")
    return _parse_field_version(key, text)


def _optional_version_field(
    data: Mapping[str, object], key: str, default: Version | None
) -> Result[Version | None, CatalogError]:
    if key not in data:
        return Ok(default)
    # An empty string switches the rule off.
    if data.get(key) == "":
        return Ok(None)
    return _version_field(data, key, Version(0, 0, 0))


def _version_set_field(
    data: Mapping[str, object], key: str, default: frozenset[Version]
) -> Result[frozenset[Version], CatalogError]:
    if key not in data:
        return Ok(default)
    items = get_str_list(data, key)
    if items is None:
        return _invalid(f"{key} must be a list of version strings")
    out: set[Version] = set()
    for i, text in enumerate(items):
        parsed = _parse_field_version(f"{key}[{i}]", text)
        if isinstance(parsed, Err):
            return parsed
        out.add(parsed.value)
    return Ok(frozenset(out))


def _minor_lines_field(
    data: Mapping[str, object], key: str, default: frozenset[tuple[int, int]]
) -> Result[frozenset[tuple[int, int]], CatalogError]:
    if key not in data:
        return Ok(default)
    items = get_str_list(data, key)
    if items is None:
        return _invalid(f"{key} must be a list of \"MAJOR.MINOR\" strings")
    out: set[tuple[int, int]] = set()
    for i, text in enumerate(items):
        line = parse_minor_line(text)
        if line is None:
            return _invalid(f"{key}[{i}]: invalid minor line {text!r}", hint="Expected MAJOR.MINOR")
        out.add(line)
    return Ok(frozenset(out))
