from __future__ import annotations

from pathlib import Path

import pytest

from opgraph.core.result import Err, Ok
from opgraph.catalog.loader import parse_bundle_list, read_bundle_list
from opgraph.catalog.version import Version

D1 = "sha256:6cdcf20771f9c46640b466f804190d00eaf2e59caee6d420436e78b283d177bf"
D2 = "sha256:7fd7595e6a61352088f9a3a345be03a6c0b9caa0bbc5ddd8c61ba1d38b2c3b8e"
D3 = "sha256:272e3d6e2f7f207b3d3866d8be00715e6a6086d50b110c45662d99d217d48dbc"

VALID = f"""\
oldest_supported_version: 4.0.0
broken_versions:
  - 4.1.0
images:
  - image: example.com/image@{D1}
    version: 3.62.0
  - image: example.com/image@{D2}
    version: 4.0.0
  - image: example.com/image@{D3}
    version: 4.1.0
"""


def test_valid_bundle_list(tmp_path: Path) -> None:
    path = tmp_path / "bundles.yaml"
    path.write_text(VALID, encoding="utf-8")

    result = read_bundle_list(path)
    assert isinstance(result, Ok)
    catalog = result.value
    assert catalog.oldest_supported_version == Version(4, 0, 0)
    assert catalog.broken_versions == frozenset({Version(4, 1, 0)})
    assert catalog.versions == (Version(3, 62, 0), Version(4, 0, 0), Version(4, 1, 0))
    assert catalog.images[0].image == f"example.com/image@{D1}"


def test_missing_file_is_io_error(tmp_path: Path) -> None:
    result = read_bundle_list(tmp_path / "missing.yaml")
    assert isinstance(result, Err)
    assert result.error.kind == "io"


def test_errors_name_the_file(tmp_path: Path) -> None:
    path = tmp_path / "bundles.yaml"
    path.write_text(VALID.replace("    version: 4.0.0", "    version: 4.0"), encoding="utf-8")
    result = read_bundle_list(path)
    assert isinstance(result, Err)
    assert result.error.message.startswith("bundles.yaml: images[1].version")


def test_broken_versions_are_optional() -> None:
    text = f"oldest_supported_version: 4.0.0\nimages:\n  - image: a.io/b@{D1}\n    version: 4.0.0\n"
    result = parse_bundle_list(text)
    assert isinstance(result, Ok)
    assert result.value.broken_versions == frozenset()


@pytest.mark.parametrize(
    ("text", "kind", "fragment"),
    [
        ("images: [", "invalid_document", "failed to unmarshal YAML"),
        ("- 1\n- 2\n", "invalid_document", "document root must be a mapping"),
        (
            VALID.replace("oldest_supported_version: 4.0.0", "oldest_supported_version: latest"),
            "invalid_version",
            "invalid oldest_supported_version",
        ),
        (
            VALID.replace("  - 4.1.0\n", "  - four\n"),
            "invalid_version",
            "invalid item in broken_versions[0]",
        ),
        (
            VALID.replace("version: 3.62.0", "version: 3.62.0-rc.1"),
            "invalid_version",
            "invalid semantic version",
        ),
        (
            VALID.replace("oldest_supported_version: 4.0.0", "oldest_supported_version: v4.0.0"),
            "invalid_version",
            "invalid semantic version",
        ),
        (
            VALID.replace(f"example.com/image@{D2}", "example.com/image:4.0.0"),
            "invalid_image",
            "image reference does not include a digest",
        ),
        (
            VALID.replace("version: 4.1.0", "version: 3.63.0"),
            "unsorted_versions",
            "images[2]",
        ),
        (
            VALID.replace("version: 4.1.0", "version: 4.0.0"),
            "duplicate_version",
            "duplicate version 4.0.0",
        ),
        ("oldest_supported_version: 4.0.0\n", "invalid_document", "images must be a list"),
        (
            "oldest_supported_version: 4.0.0\nimages:\n  - just-a-string\n",
            "invalid_document",
            "images[0]",
        ),
    ],
)
def test_invalid_bundle_lists(text: str, kind: str, fragment: str) -> None:
    result = parse_bundle_list(text)
    assert isinstance(result, Err)
    assert result.error.kind == kind
    assert fragment in result.error.message


def test_non_utf8_bundle_list_is_invalid_document(tmp_path: Path) -> None:
    path = tmp_path / "bundles.yaml"
    path.write_bytes(b"oldest_supported_version: \xff\xfe\n")

    result = read_bundle_list(path)
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_document"
    assert result.error.message.startswith("bundles.yaml: ")
