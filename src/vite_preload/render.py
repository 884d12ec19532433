"""Ordering and rendering of resolved preload records.

See https://vitejs.dev/guide/backend-integration for how the emitted tags map
onto a hand-written template.
"""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from vite_preload.models import PreloadRecord

_RELATION_RANK = {
    "stylesheet": 0,
    "module": 1,
    "modulepreload": 2,
}
_FONT_RANK = 3
_OTHER_RANK = 4


def _rank(record: PreloadRecord) -> int:
    if record.rel == "preload":
        return _FONT_RANK if record.as_ == "font" else _OTHER_RANK
    return _RELATION_RANK[record.rel]


def sort_preloads(records: Iterable[PreloadRecord]) -> list[PreloadRecord]:
    """Return records in presentation order without touching the input.

    Entry records come first, then stylesheets, scripts, module preloads,
    fonts and other assets. The sort is stable, so records of equal rank keep
    their insertion order (the polyfill stays ahead of the entry script).
    """
    return sorted(records, key=lambda record: (not record.is_entry, _rank(record)))


def create_html_tag(record: PreloadRecord) -> str | None:
    href = escape(record.href, quote=True)
    nonce = f' nonce="{escape(record.nonce, quote=True)}"' if record.nonce else ""
    if record.rel == "module":
        async_attr = " async" if record.async_script else ""
        return f'<script type="module" src="{href}" crossorigin{nonce}{async_attr}></script>'
    if record.rel == "modulepreload":
        return f'<link rel="modulepreload" href="{href}" crossorigin{nonce}>'
    if record.rel == "stylesheet":
        return f'<link rel="stylesheet" href="{href}" crossorigin{nonce}>'
    if record.rel == "preload" and record.as_ is not None:
        type_attr = f' type="{escape(record.type, quote=True)}"' if record.type else ""
        # Fonts are always fetched in CORS mode.
        crossorigin = " crossorigin" if record.as_ == "font" else ""
        return f'<link rel="preload" href="{href}" as="{record.as_}"{type_attr}{crossorigin}>'
    return None


def create_single_link_header(record: PreloadRecord) -> str | None:
    """Return one ``Link`` header value, or ``None`` for entry scripts."""
    if record.rel == "modulepreload":
        return f"<{record.href}>; rel=modulepreload; crossorigin"
    if record.rel == "stylesheet":
        return f"<{record.href}>; rel=preload; as=style; crossorigin"
    if record.rel == "preload" and record.as_ is not None:
        parts = [f"<{record.href}>", "rel=preload", f"as={record.as_}"]
        if record.type:
            parts.append(f'type="{record.type}"')
        if record.as_ == "font":
            parts.append("crossorigin")
        return "; ".join(parts)
    return None


def create_link_header(records: Iterable[PreloadRecord]) -> str:
    values = [create_single_link_header(record) for record in records]
    return ", ".join(value for value in values if value is not None)


__all__ = [
    "create_html_tag",
    "create_link_header",
    "create_single_link_header",
    "sort_preloads",
]
