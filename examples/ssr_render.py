"""Inject preload hints into a server-rendered page.

Usage:
    NODE_ENV=production python examples/ssr_render.py
"""

from __future__ import annotations

from pathlib import Path

from vite_preload import CollectorOptions, ManifestCache, create_chunk_collector

MANIFEST = Path(__file__).resolve().parent / "manifest.json"

# One cache per process; invalidate() after deploying a new build.
manifest_cache = ManifestCache()


def render_page(rendered_modules: list[str]) -> tuple[str, list[str]]:
    collector = create_chunk_collector(
        CollectorOptions(manifest=MANIFEST, preload_assets=True, nonce="%NONCE%"),
        cache=manifest_cache,
    )
    for module_id in rendered_modules:
        collector.collect(module_id)

    head = collector.get_tags(include_entry=True)
    html = f"<!doctype html>\n<html>\n<head>\n{head}\n</head>\n<body></body>\n</html>"
    return html, collector.get_link_headers()


if __name__ == "__main__":
    page, link_headers = render_page(["src/pages/Browse/index.tsx"])
    for value in link_headers:
        print(f"Link: {value}")
    print()
    print(page)
