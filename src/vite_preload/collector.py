"""Per-render chunk collector and its guarded factory."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from vite_preload.errors import ConfigurationError
from vite_preload.graph import walk
from vite_preload.manifest import ManifestCache, manifest_from_payload, read_manifest
from vite_preload.models import LEGACY_POLYFILL_ID, ChunkRecord, Manifest, PreloadRecord
from vite_preload.observability import StructuredLogger
from vite_preload.options import CollectorOptions, ManifestSource, is_production
from vite_preload.render import (
    create_html_tag,
    create_link_header,
    create_single_link_header,
    sort_preloads,
)
from vite_preload.report import PreloadReport
from vite_preload.resolve import ResolveContext, resolve_chunks


class ChunkCollector:
    """Collect the preload hints one page render needs.

    Construction resolves the legacy polyfill bootstrap (when the manifest has
    one) and then the entry module, so the polyfill always comes first.
    Further modules rendered on the page are added with :meth:`collect`.
    Once collection is over the collector is read-only.
    """

    def __init__(
        self,
        manifest: Manifest,
        entry: str,
        *,
        preload_fonts: bool = True,
        preload_assets: bool = False,
        nonce: str = "",
        async_script: bool = False,
        polyfill_id: str = LEGACY_POLYFILL_ID,
        logger: StructuredLogger | None = None,
    ) -> None:
        self.manifest = manifest
        self.entry = entry
        self.context = ResolveContext(
            entry=entry,
            polyfill_id=polyfill_id,
            preload_fonts=preload_fonts,
            preload_assets=preload_assets,
            nonce=nonce,
            async_script=async_script,
        )
        self.logger = logger if logger is not None else StructuredLogger()
        self.module_ids: list[str] = []
        self.preloads: dict[str, PreloadRecord] = {}

        self._collect_modules(polyfill_id)
        self._collect_modules(entry)

    def collect(self, module_id: str) -> None:
        """Register a module rendered on the page and resolve its chunks."""
        if module_id not in self.module_ids:
            self.module_ids.append(module_id)
        self._collect_modules(module_id)

    def get_chunks(self) -> list[PreloadRecord]:
        return sort_preloads(self.preloads.values())

    def get_resolved_preloads(self) -> list[PreloadRecord]:
        return self.get_chunks()

    def get_tags(self, *, include_entry: bool = False) -> str:
        """Return the HTML tags for preload hints and stylesheets.

        Entry tags are left out unless *include_entry* is set: when Vite
        transforms ``index.html`` at build time the template already has them.
        """
        tags: list[str] = []
        for record in self.get_chunks():
            if record.is_entry and not include_entry:
                continue
            tag = create_html_tag(record)
            if tag is not None:
                tags.append(tag)
        return "\n".join(tags)

    def get_link_header(self) -> str:
        """Return a single ``Link`` header value covering every chunk."""
        return create_link_header(self.get_chunks())

    def get_link_headers(self) -> list[str]:
        values = [create_single_link_header(record) for record in self.get_chunks()]
        return [value for value in values if value is not None]

    def report(self) -> PreloadReport:
        return PreloadReport(
            entry=self.entry,
            module_ids=tuple(self.module_ids),
            preloads=tuple(self.get_chunks()),
            logs=tuple(dict(record) for record in self.logger.records),
        )

    def _collect_modules(self, module_id: str) -> None:
        # A reported module missing from the manifest was merged into another
        # chunk, e.g. by build.rollupOptions.output.experimentalMinChunkSize.
        if module_id not in self.manifest or module_id in self.preloads:
            self.logger.log(
                operation="collect_skip",
                module=module_id,
                entry=self.entry,
                message="Module has no chunk of its own or is already collected.",
                level="debug",
            )
            return

        before = len(self.preloads)
        chunks = walk(self.manifest, module_id)
        resolve_chunks(chunks, self.preloads, self.context)
        self.logger.log(
            operation="collect_complete",
            module=module_id,
            entry=self.entry,
            message="Resolved module preloads.",
            extra={"chunks": len(chunks), "added": len(self.preloads) - before},
        )


def create_chunk_collector(
    options: CollectorOptions,
    *,
    mode: str | None = None,
    cache: ManifestCache | None = None,
    logger: StructuredLogger | None = None,
) -> ChunkCollector:
    """Create a chunk collector, failing fast on a misconfigured manifest.

    Preloads are only computed in production (*mode*, defaulting to
    ``NODE_ENV``). Elsewhere the collector has an empty manifest and yields
    no records. A manifest path is read through *cache* when one is given.
    """
    logger = logger if logger is not None else StructuredLogger()
    manifest: Manifest = {}
    entry = options.entry or "index.html"

    if is_production(mode):
        if not options.manifest:
            raise ConfigurationError(
                "options.manifest must be provided in production either as a path or object.",
                hint="Set build.manifest: true in your vite config to generate it.",
                context={"operation": "create_chunk_collector"},
            )
        manifest = _load_manifest(options.manifest, cache)
        if entry not in manifest:
            raise ConfigurationError(
                f'Vite manifest.json does not contain key "{entry}".',
                context={"operation": "create_chunk_collector", "entry": entry},
            )
        if not manifest[entry].is_entry:
            raise ConfigurationError(
                f'Module "{entry}" is not an entry module.',
                hint="Pass the id of a module listed in build.rollupOptions.input.",
                context={"operation": "create_chunk_collector", "entry": entry},
            )
    else:
        logger.log(
            operation="gate_disabled",
            module=None,
            entry=entry,
            message="Preload computation is disabled outside production.",
        )

    return ChunkCollector(
        manifest,
        entry,
        preload_fonts=options.preload_fonts,
        preload_assets=options.preload_assets,
        nonce=options.nonce,
        async_script=options.async_script,
        polyfill_id=options.polyfill_id,
        logger=logger,
    )


def _load_manifest(source: ManifestSource, cache: ManifestCache | None) -> dict[str, ChunkRecord]:
    if isinstance(source, (str, Path)):
        if cache is not None:
            return cache.load(source)
        return read_manifest(source)
    if isinstance(source, Mapping):
        return manifest_from_payload(source)
    raise ConfigurationError(
        "options.manifest must be a path or a mapping.",
        context={"type": type(source).__name__},
    )


__all__ = ["ChunkCollector", "create_chunk_collector"]
