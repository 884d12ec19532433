"""Public package entrypoint for Vite manifest preload resolution."""

from .collector import ChunkCollector, create_chunk_collector
from .errors import ConfigurationError, ErrorCode, MissingChunkError, PreloadError
from .graph import walk
from .manifest import ManifestCache, manifest_from_payload, parse_manifest, read_manifest
from .models import LEGACY_POLYFILL_ID, ChunkRecord, Manifest, PreloadRecord
from .observability import StructuredLogger
from .options import CollectorOptions, is_production
from .render import create_html_tag, create_link_header, create_single_link_header, sort_preloads
from .report import PreloadReport
from .resolve import ResolveContext, classify_asset, resolve_chunks

__all__ = [
    "ChunkCollector",
    "ChunkRecord",
    "CollectorOptions",
    "ConfigurationError",
    "ErrorCode",
    "LEGACY_POLYFILL_ID",
    "Manifest",
    "ManifestCache",
    "MissingChunkError",
    "PreloadError",
    "PreloadRecord",
    "PreloadReport",
    "ResolveContext",
    "StructuredLogger",
    "classify_asset",
    "create_chunk_collector",
    "create_html_tag",
    "create_link_header",
    "create_single_link_header",
    "is_production",
    "manifest_from_payload",
    "parse_manifest",
    "read_manifest",
    "resolve_chunks",
    "sort_preloads",
    "walk",
]
