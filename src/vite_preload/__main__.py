"""CLI for inspecting the preloads of a Vite manifest.

Usage:
    python -m vite_preload dist/.vite/manifest.json
    python -m vite_preload dist/.vite/manifest.json --format header
    python -m vite_preload dist/.vite/manifest.json --format report --module src/pages/Browse.tsx
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from vite_preload.collector import create_chunk_collector
from vite_preload.errors import PreloadError
from vite_preload.options import DEFAULT_ENTRY, PRODUCTION_MODE, CollectorOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vite_preload",
        description="Print preload hints for a Vite manifest",
    )
    parser.add_argument("manifest", help="Path to the Vite manifest.json")
    parser.add_argument("--entry", default=DEFAULT_ENTRY, help="Entry module id")
    parser.add_argument(
        "--module",
        action="append",
        default=[],
        help="Additional module id rendered on the page (repeatable)",
    )
    parser.add_argument(
        "--format",
        choices=("tags", "header", "report"),
        default="tags",
        help="Output format",
    )
    parser.add_argument("--include-entry", action="store_true", help="Include entry tags")
    parser.add_argument("--preload-assets", action="store_true", help="Preload images")
    parser.add_argument("--no-preload-fonts", action="store_true", help="Skip font preloads")
    parser.add_argument("--nonce", default="", help="Nonce for scripts and stylesheets")
    parser.add_argument("--async-script", action="store_true", help="Mark entry script async")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    options = CollectorOptions(
        manifest=args.manifest,
        entry=args.entry,
        preload_fonts=not args.no_preload_fonts,
        preload_assets=args.preload_assets,
        nonce=args.nonce,
        async_script=args.async_script,
    )
    try:
        collector = create_chunk_collector(options, mode=PRODUCTION_MODE)
        for module_id in args.module:
            collector.collect(module_id)
    except PreloadError as exc:
        print(f"error[{exc.code}]: {exc}", file=sys.stderr)
        return 1

    if args.format == "tags":
        output = collector.get_tags(include_entry=args.include_entry)
    elif args.format == "header":
        output = collector.get_link_header()
    else:
        output = collector.report().to_json().rstrip("\n")
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
