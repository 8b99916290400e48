from __future__ import annotations

from opgraph.core.result import Err, Ok
from opgraph.catalog.assembler import compile_catalog
from opgraph.catalog.channels import ChannelNaming
from opgraph.catalog.exceptions import ExceptionTable
from opgraph.catalog.model import BundleImage, CatalogTemplate, Icon, VersionCatalog
from opgraph.catalog.render import render_catalog
from opgraph.catalog.version import Version, parse_version

NAMING = ChannelNaming(package="rhacs-operator", family="rhacs")
ICON = Icon(base64data="aWNvbg==", media_type="image/png")

HISTORY = [
    "3.62.0", "3.62.1", "3.63.0", "3.63.1", "3.64.0", "3.64.1", "3.64.2",
    "3.74.0", "3.74.9", "4.0.0", "4.0.1", "4.1.0", "4.1.1", "4.1.2", "4.1.3",
    "4.2.0", "4.2.1", "4.3.0", "4.6.0", "4.6.7", "4.7.0", "4.7.1", "4.7.4",
    "4.8.0", "4.8.1", "5.0.0", "5.0.1",
]  # fmt: skip


def _v(text: str) -> Version:
    parsed = parse_version(text)
    assert isinstance(parsed, Ok)
    return parsed.value


def _image(i: int) -> str:
    return f"example.com/bundle@sha256:{i:064x}"


def _catalog(
    versions: list[str], *, oldest: str = "4.0.0", broken: list[str] | None = None
) -> VersionCatalog:
    return VersionCatalog(
        images=tuple(BundleImage(version=_v(t), image=_image(i)) for i, t in enumerate(versions)),
        oldest_supported_version=_v(oldest),
        broken_versions=frozenset(_v(b) for b in broken or []),
    )


def _compile(catalog: VersionCatalog) -> CatalogTemplate:
    result = compile_catalog(catalog, naming=NAMING, icon=ICON)
    assert isinstance(result, Ok), result
    return result.value


def test_worked_example() -> None:
    template = _compile(_catalog(["3.62.0", "3.62.1", "4.0.0", "4.0.1"]))
    doc = template.to_dict()

    assert doc["schema"] == "olm.template.basic"
    entries = doc["entries"]
    assert isinstance(entries, list)
    schemas = [e["schema"] for e in entries]
    assert schemas == [
        "olm.package",
        "olm.channel",
        "olm.channel",
        "olm.channel",
        "olm.channel",
        "olm.deprecations",
        "olm.bundle",
        "olm.bundle",
        "olm.bundle",
        "olm.bundle",
    ]
    assert entries[0] == {
        "schema": "olm.package",
        "name": "rhacs-operator",
        "defaultChannel": "stable",
        "icon": {"base64data": "aWNvbg==", "mediatype": "image/png"},
    }
    assert [e["name"] for e in entries[1:5]] == ["rhacs-3.62", "latest", "rhacs-4.0", "stable"]
    assert entries[1]["entries"] == [
        {"name": "rhacs-operator.v3.62.0", "skipRange": ">= 3.61.0 < 3.62.0"},
        {
            "name": "rhacs-operator.v3.62.1",
            "replaces": "rhacs-operator.v3.62.0",
            "skipRange": ">= 3.61.0 < 3.62.1",
        },
    ]
    assert [r["reference"]["name"] for r in entries[5]["entries"]] == [
        "latest",
        "rhacs-3.62",
        "rhacs-operator.v3.62.0",
        "rhacs-operator.v3.62.1",
    ]
    assert [b["image"] for b in entries[6:]] == [_image(i) for i in range(4)]


def test_every_version_is_in_one_y_stream_and_in_stable() -> None:
    template = _compile(_catalog(HISTORY, broken=["4.1.0", "4.6.7"]))
    stable = template.channel("stable")
    assert stable is not None
    assert [e.version for e in stable.entries] == [_v(t) for t in HISTORY]

    owners: dict[Version, list[str]] = {}
    for channel in template.channels:
        if channel.y_stream is None:
            continue
        # Entries carried over from earlier lines do not count as ownership.
        for entry in channel.entries:
            if entry.version.minor_line == channel.y_stream.minor_line or (
                entry.version.minor_line == (3, 63) and channel.name == "rhacs-3.62"
            ):
                owners.setdefault(entry.version, []).append(channel.name)

    assert sorted(owners) == [_v(t) for t in HISTORY]
    assert all(len(names) == 1 for names in owners.values())


def test_replaces_chain_descends_to_a_root() -> None:
    template = _compile(_catalog(HISTORY))
    stable = template.channel("stable")
    assert stable is not None
    by_name = {e.name: e for e in stable.entries}

    for entry in stable.entries:
        current = entry
        while current.replaces is not None:
            predecessor = by_name[current.replaces]
            assert predecessor.version < current.version
            current = predecessor
        assert current.version in {_v("3.62.0"), _v("4.0.0")}


def test_broken_version_leaves_skips_after_two_minor_lines() -> None:
    template = _compile(_catalog(HISTORY, broken=["4.1.0"]))
    stable = template.channel("stable")
    assert stable is not None
    for entry in stable.entries:
        expected = _v("4.1.0") < entry.version < _v("4.3.0")
        assert ("rhacs-operator.v4.1.0" in entry.skips) is expected, entry.name


def test_compiling_twice_gives_identical_output() -> None:
    catalog = _catalog(HISTORY, broken=["4.1.0"])
    assert render_catalog(_compile(catalog)) == render_catalog(_compile(catalog))


def test_custom_exception_table() -> None:
    table = ExceptionTable(
        initial_floor=_v("0.9.0"),
        rootless_versions=frozenset({_v("1.0.0")}),
        merged_minor_lines=frozenset(),
        pinned_persistent=frozenset(),
        persistent_threshold=None,
        persistent_reset_version=None,
        latest_transition_version=None,
    )
    naming = ChannelNaming(package="demo-operator", family="demo")
    catalog = _catalog(["1.0.0", "1.0.1", "1.1.0"], oldest="1.1.0")
    result = compile_catalog(catalog, naming=naming, icon=ICON, exceptions=table)
    assert isinstance(result, Ok)
    template = result.value
    assert [c.name for c in template.channels] == ["demo-1.0", "demo-1.1", "stable"]
    assert template.channels[0].entries[0].skip_range == ">= 0.9.0 < 1.0.0"
    assert [e.name for e in template.deprecations.entries] == [
        "latest",
        "demo-1.0",
        "demo-operator.v1.0.0",
        "demo-operator.v1.0.1",
    ]


def test_failure_produces_no_template() -> None:
    result = compile_catalog(_catalog(["4.1.0"]), naming=NAMING, icon=ICON)
    assert isinstance(result, Err)
    assert result.error.kind == "missing_predecessor"
