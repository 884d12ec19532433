"""Manifest parsing and caching APIs."""

from .cache import ManifestCache
from .io import manifest_from_payload, parse_manifest, read_manifest, serialize_manifest

__all__ = [
    "ManifestCache",
    "manifest_from_payload",
    "parse_manifest",
    "read_manifest",
    "serialize_manifest",
]
