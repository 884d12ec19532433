"""Fold walked chunks into an ordered, href-deduplicated preload map."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from pathlib import PurePosixPath

from vite_preload.models import LEGACY_POLYFILL_ID, AssetKind, ChunkRecord, PreloadRecord

IMAGE_EXTENSIONS = ("png", "jpg", "webp", "svg")
FONT_EXTENSIONS = ("woff2", "woff", "ttf")


@dataclass(frozen=True, slots=True)
class ResolveContext:
    entry: str
    polyfill_id: str = LEGACY_POLYFILL_ID
    preload_fonts: bool = True
    preload_assets: bool = False
    nonce: str = ""
    async_script: bool = False


def classify_asset(path: str) -> tuple[AssetKind, str] | None:
    """Return ``(as, mime type)`` for a preloadable asset, or ``None``."""
    ext = PurePosixPath(path).suffix[1:]
    if ext in IMAGE_EXTENSIONS:
        return "image", "image/svg+xml" if ext == "svg" else f"image/{ext}"
    if ext in FONT_EXTENSIONS:
        return "font", f"font/{ext}"
    return None


def resolve_chunks(
    chunks: Mapping[str, ChunkRecord],
    preloads: MutableMapping[str, PreloadRecord],
    context: ResolveContext,
) -> None:
    """Register preload records for *chunks* into *preloads*.

    *preloads* is keyed by href and shared across calls; an href that is
    already present is never replaced. Chunks are visited in the order of
    *chunks*, which for :func:`vite_preload.graph.walk` output is the
    depth-first discovery order.
    """
    for chunk in chunks.values():
        if chunk.file in preloads:
            continue

        is_polyfill = chunk.source_id == context.polyfill_id
        is_primary = chunk.source_id == context.entry
        comment = f"chunk: {chunk.name}, isEntry: {chunk.is_entry}"

        # Only the entry and the polyfill bootstrap are <script type="module">.
        preloads[chunk.file] = PreloadRecord(
            rel="module" if is_primary or is_polyfill else "modulepreload",
            href=chunk.file,
            is_entry=chunk.is_entry,
            nonce=context.nonce,
            # The polyfill must run before the entry, so it is never async.
            async_script=context.async_script and not is_polyfill,
            comment=comment,
        )

        for css_file in chunk.css:
            if css_file in preloads:
                continue
            preloads[css_file] = PreloadRecord(
                rel="stylesheet",
                href=css_file,
                is_entry=chunk.is_entry,
                nonce=context.nonce,
                comment=comment,
            )

        if not context.preload_fonts and not context.preload_assets:
            continue

        for asset in chunk.assets:
            if asset in preloads:
                continue
            classified = classify_asset(asset)
            if classified is None:
                continue
            kind, mime_type = classified
            if kind == "image" and not context.preload_assets:
                continue
            if kind == "font" and not context.preload_fonts:
                continue
            preloads[asset] = PreloadRecord(
                rel="preload",
                href=asset,
                as_=kind,
                type=mime_type,
                comment=f"Asset from chunk {chunk.name}: {chunk.file}",
            )


__all__ = [
    "FONT_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "ResolveContext",
    "classify_asset",
    "resolve_chunks",
]
