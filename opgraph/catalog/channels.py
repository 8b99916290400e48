"""Partition an ascending version list into OLM channels.

One pass over the versions, threading a `_PassState` value from step to step:

- each (major, minor) line gets a y-stream channel `<family>-<major>.<minor>`,
  except minor lines the exception table merges into the previous channel;
- a new y-stream channel starts with every persistent entry seen so far
  (patch-zero, pinned, or at/after the persistent threshold), and its
  skipRange floor is the newest persistent version before it. A merged line
  moves the floor the same way without opening a channel;
- the persistent list is emptied once, at the reset version;
- `latest` is a frozen copy of the history taken when the transition version
  is reached, `stable` is the whole history emitted after the last version.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from opgraph.core.result import Err, Ok, Result
from opgraph.catalog.edges import build_entry
from opgraph.catalog.errors import CatalogError
from opgraph.catalog.exceptions import ExceptionTable
from opgraph.catalog.model import (
    LATEST_CHANNEL,
    STABLE_CHANNEL,
    Channel,
    ChannelEntry,
    VersionCatalog,
)
from opgraph.catalog.version import Version


@dataclass(frozen=True, slots=True)
class ChannelNaming:
    package: str
    family: str

    def y_stream(self, version: Version) -> str:
        return f"{self.family}-{version.major}.{version.minor}"


@dataclass(frozen=True, slots=True)
class _Segment:
    opener: Version
    entries: tuple[ChannelEntry, ...]


@dataclass(frozen=True, slots=True)
class _PassState:
    previous: Version | None
    floor: Version
    last_persistent: Version
    persistent: tuple[ChannelEntry, ...] = ()
    segment: _Segment | None = None
    channels: tuple[Channel, ...] = ()
    history: tuple[ChannelEntry, ...] = ()
    persistent_reset: bool = False
    latest_emitted: bool = False


def assign_channels(
    catalog: VersionCatalog,
    *,
    naming: ChannelNaming,
    exceptions: ExceptionTable,
) -> Result[tuple[Channel, ...], CatalogError]:
    """Compute every channel for the catalog, `stable` last."""
    state = _PassState(
        previous=None,
        floor=exceptions.initial_floor,
        last_persistent=exceptions.initial_floor,
    )
    for version in catalog.versions:
        stepped = _step(
            state,
            version,
            naming=naming,
            exceptions=exceptions,
            broken_versions=catalog.broken_versions,
        )
        if isinstance(stepped, Err):
            return stepped
        state = stepped.value

    return _finish(state, naming)


def _step(
    state: _PassState,
    version: Version,
    *,
    naming: ChannelNaming,
    exceptions: ExceptionTable,
    broken_versions: Iterable[Version],
) -> Result[_PassState, CatalogError]:
    if state.previous is not None and version == state.previous:
        return Err(
            CatalogError(
                kind="duplicate_version",
                message=f"version {version} appears more than once",
                hint="Each version must appear exactly once",
            )
        )
    if state.previous is not None and version < state.previous:
        return Err(
            CatalogError(
                kind="unsorted_versions",
                message=f"version {version} is not greater than {state.previous}",
                hint="Versions must be strictly ascending",
            )
        )
    if state.previous is None and version not in exceptions.rootless_versions:
        return Err(
            CatalogError(
                kind="missing_predecessor",
                message=f"version {version} replaces a version that is not in the catalog",
                hint="The oldest version must be listed in rootless_versions",
            )
        )

    reset = exceptions.persistent_reset_version
    if not state.persistent_reset and reset is not None and version >= reset:
        state = replace(state, persistent=(), persistent_reset=True)

    segment = state.segment
    opens = segment is None or (
        version.minor_line != segment.opener.minor_line and not exceptions.is_merged(version)
    )
    if opens:
        closed = _close_segment(state, naming)
        if isinstance(closed, Err):
            return closed
        state = closed.value

    transition = exceptions.latest_transition_version
    if not state.latest_emitted and transition is not None and version >= transition:
        latest = Channel(name=LATEST_CHANNEL, package=naming.package, entries=state.history)
        state = replace(state, channels=(*state.channels, latest), latest_emitted=True)

    starts_line = state.previous is None or version.minor_line != state.previous.minor_line
    if opens:
        state = replace(
            state,
            floor=state.last_persistent,
            segment=_Segment(opener=version, entries=state.persistent),
        )
    elif starts_line:
        # A merged minor line stays in the open channel but still moves the floor.
        state = replace(state, floor=state.last_persistent)

    entry = build_entry(
        package=naming.package,
        version=version,
        predecessor=state.previous,
        floor=state.floor,
        broken_versions=broken_versions,
        exceptions=exceptions,
    )

    assert state.segment is not None
    state = replace(
        state,
        previous=version,
        segment=replace(state.segment, entries=(*state.segment.entries, entry)),
        history=(*state.history, entry),
    )
    if exceptions.is_persistent(version):
        state = replace(
            state,
            persistent=(*state.persistent, entry),
            last_persistent=version,
        )
    return Ok(state)


def _close_segment(state: _PassState, naming: ChannelNaming) -> Result[_PassState, CatalogError]:
    segment = state.segment
    if segment is None:
        return Ok(state)
    if not segment.entries:
        return Err(
            CatalogError(
                kind="internal",
                message=f"channel {naming.y_stream(segment.opener)} closed without entries",
            )
        )
    channel = Channel(
        name=naming.y_stream(segment.opener),
        package=naming.package,
        entries=segment.entries,
        y_stream=segment.opener.y_stream(),
    )
    return Ok(replace(state, segment=None, channels=(*state.channels, channel)))


def _finish(state: _PassState, naming: ChannelNaming) -> Result[tuple[Channel, ...], CatalogError]:
    closed = _close_segment(state, naming)
    if isinstance(closed, Err):
        return closed
    stable = Channel(name=STABLE_CHANNEL, package=naming.package, entries=state.history)
    return Ok((*closed.value.channels, stable))
