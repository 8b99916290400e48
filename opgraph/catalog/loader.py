"""Read and validate the bundle list document.

Expected shape:

    oldest_supported_version: 4.5.0
    broken_versions:
      - 4.1.0
    images:
      - image: registry.example.com/bundle@sha256:<hex>
        version: 4.0.0
"""

from __future__ import annotations

from pathlib import Path

import yaml

from opgraph.core.result import Err, Ok, Result, collect
from opgraph.core.structured import as_obj_list, as_str_dict
from opgraph.catalog.errors import CatalogError
from opgraph.catalog.image import validate_image_reference
from opgraph.catalog.model import BundleImage, VersionCatalog, build_version_catalog
from opgraph.catalog.version import Version, parse_version


def read_bundle_list(path: Path) -> Result[VersionCatalog, CatalogError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            CatalogError(kind="io", message=f"failed to read bundle list: {e}", hint=str(path))
        )
    except UnicodeDecodeError as e:
        return Err(
            CatalogError(
                kind="invalid_document",
                message=f"{path.name}: bundle list is not valid UTF-8: {e}",
            )
        )

    parsed = parse_bundle_list(text)
    if isinstance(parsed, Err):
        return Err(parsed.error.at(path.name))
    return parsed


def parse_bundle_list(text: str) -> Result[VersionCatalog, CatalogError]:
    try:
        obj: object = yaml.safe_load(text)
    except yaml.YAMLError as e:
        return _invalid_document(f"failed to unmarshal YAML: {e}")

    doc = as_str_dict(obj)
    if doc is None:
        return _invalid_document("document root must be a mapping")

    oldest = _version_item(
        doc.get("oldest_supported_version"), "invalid oldest_supported_version"
    )
    if isinstance(oldest, Err):
        return oldest

    raw_broken = doc.get("broken_versions")
    items: list[object] = []
    if raw_broken is not None:
        listed = as_obj_list(raw_broken)
        if listed is None:
            return _invalid_document("broken_versions must be a list of versions")
        items = listed
    broken = collect(
        [
            _version_item(item, f"invalid item in broken_versions[{i}]")
            for i, item in enumerate(items)
        ]
    )
    if isinstance(broken, Err):
        return broken

    raw_images = as_obj_list(doc.get("images"))
    if raw_images is None:
        return _invalid_document("images must be a list of {image, version} entries")

    images = collect([_bundle_image(item, f"images[{i}]") for i, item in enumerate(raw_images)])
    if isinstance(images, Err):
        return images

    return build_version_catalog(
        images=images.value,
        oldest_supported_version=oldest.value,
        broken_versions=frozenset(broken.value),
    )


def _bundle_image(item: object, location: str) -> Result[BundleImage, CatalogError]:
    entry = as_str_dict(item)
    if entry is None:
        return _invalid_document(f"{location}: expected a mapping with image and version")

    version = _version_item(entry.get("version"), f"{location}.version")
    if isinstance(version, Err):
        return version

    image = entry.get("image")
    if not isinstance(image, str) or not image.strip():
        return _invalid_document(f"{location}.image: missing image reference")
    checked = validate_image_reference(image.strip())
    if isinstance(checked, Err):
        return Err(checked.error.at(f"{location}.image"))

    return Ok(BundleImage(version=version.value, image=checked.value))


def _version_item(value: object, location: str) -> Result[Version, CatalogError]:
    if not isinstance(value, str):
        # YAML reads `4.1` as a float and a bare `4` as an int.
        return Err(
            CatalogError(
                kind="invalid_version",
                message=f"{location}: expected a version string, got {value!r}",
                hint="Quote the value or write it as MAJOR.MINOR.PATCH",
            )
        )
    parsed = parse_version(value.strip())
    if isinstance(parsed, Err):
        return Err(parsed.error.at(location))
    return parsed


def _invalid_document(message: str) -> Err[CatalogError]:
    return Err(CatalogError(kind="invalid_document", message=message))
