import json
from pathlib import Path
from typing import Any

import pytest

from vite_preload import ChunkCollector, CollectorOptions, create_chunk_collector
from vite_preload.errors import ConfigurationError, MissingChunkError
from vite_preload.manifest import ManifestCache
from vite_preload.models import ChunkRecord


def test_collector_resolves_polyfill_before_entry(manifest: dict[str, ChunkRecord]) -> None:
    collector = ChunkCollector(manifest, "index.html", async_script=True)

    assert list(collector.preloads) == [
        "assets/polyfills-legacy-p1.js",
        "assets/index-abc.js",
        "assets/index-abc.css",
        "assets/inter-1.woff2",
        "assets/vendor-v1.js",
    ]
    polyfill = collector.preloads["assets/polyfills-legacy-p1.js"]
    assert polyfill.rel == "module"
    assert polyfill.async_script is False
    assert collector.preloads["assets/index-abc.js"].async_script is True


def test_collector_without_polyfill_is_not_an_error(manifest: dict[str, ChunkRecord]) -> None:
    del manifest["vite/legacy-polyfills"]
    collector = ChunkCollector(manifest, "index.html")

    assert next(iter(collector.preloads)) == "assets/index-abc.js"


def test_dynamic_imports_are_not_preloaded(manifest: dict[str, ChunkRecord]) -> None:
    collector = ChunkCollector(manifest, "index.html")

    assert "assets/Browse-b1.js" not in collector.preloads
    assert "assets/Card-c1.js" not in collector.preloads


def test_collect_adds_rendered_module_chunks(manifest: dict[str, ChunkRecord]) -> None:
    collector = ChunkCollector(manifest, "index.html", preload_assets=True)
    collector.collect("src/pages/Browse.tsx")

    assert collector.module_ids == ["src/pages/Browse.tsx"]
    browse = collector.preloads["assets/Browse-b1.js"]
    assert browse.rel == "modulepreload"
    assert browse.is_entry is False
    assert collector.preloads["assets/Card-c1.css"].rel == "stylesheet"
    assert collector.preloads["assets/hero-h1.png"].as_ == "image"
    assert collector.preloads["assets/logo-l1.svg"].type == "image/svg+xml"
    assert "assets/notes-n1.txt" not in collector.preloads
    # Shared vendor chunk keeps its entry-path record.
    assert collector.preloads["assets/vendor-v1.js"].is_entry is True


def test_collect_twice_is_idempotent(manifest: dict[str, ChunkRecord]) -> None:
    once = ChunkCollector(manifest, "index.html")
    once.collect("src/pages/Browse.tsx")
    twice = ChunkCollector(manifest, "index.html")
    twice.collect("src/pages/Browse.tsx")
    twice.collect("src/pages/Browse.tsx")

    assert list(twice.preloads.items()) == list(once.preloads.items())
    assert twice.module_ids == ["src/pages/Browse.tsx"]


def test_collect_unknown_module_is_a_noop(manifest: dict[str, ChunkRecord]) -> None:
    collector = ChunkCollector(manifest, "index.html")
    before = dict(collector.preloads)

    collector.collect("src/components/Inlined.tsx")

    assert collector.preloads == before
    skipped = collector.logger.records_for_module("src/components/Inlined.tsx")
    assert [record["operation"] for record in skipped] == ["collect_skip"]


def test_collect_missing_static_import_fails(manifest: dict[str, ChunkRecord]) -> None:
    manifest["src/pages/Broken.tsx"] = ChunkRecord(
        id="src/pages/Broken.tsx", file="assets/Broken.js", imports=("_gone.js",)
    )
    collector = ChunkCollector(manifest, "index.html")

    with pytest.raises(MissingChunkError):
        collector.collect("src/pages/Broken.tsx")


def test_cyclic_manifest_yields_one_record_per_chunk() -> None:
    manifest = {
        "index.html": ChunkRecord(id="index.html", file="i.js", is_entry=True, imports=("a",)),
        "a": ChunkRecord(id="a", file="a.js", imports=("b",)),
        "b": ChunkRecord(id="b", file="b.js", imports=("a",)),
    }
    collector = ChunkCollector(manifest, "index.html")

    assert [record.href for record in collector.get_chunks()] == ["i.js", "a.js", "b.js"]


def test_get_chunks_orders_entry_records_first(manifest: dict[str, ChunkRecord]) -> None:
    collector = ChunkCollector(manifest, "index.html")
    collector.collect("src/pages/Browse.tsx")

    records = collector.get_resolved_preloads()
    flags = [record.is_entry for record in records]
    assert flags == sorted(flags, reverse=True)
    scripts = [record.href for record in records if record.rel == "module"]
    assert scripts == ["assets/polyfills-legacy-p1.js", "assets/index-abc.js"]


def test_get_tags_excludes_entry_unless_requested(manifest: dict[str, ChunkRecord]) -> None:
    collector = ChunkCollector(manifest, "index.html", nonce="abc")
    collector.collect("src/pages/Browse.tsx")

    tags = collector.get_tags()
    assert "index-abc.js" not in tags
    assert '<link rel="modulepreload" href="assets/Browse-b1.js" crossorigin nonce="abc">' in tags

    all_tags = collector.get_tags(include_entry=True)
    assert (
        '<script type="module" src="assets/index-abc.js" crossorigin nonce="abc"></script>'
        in all_tags
    )


def test_link_headers_skip_module_scripts(manifest: dict[str, ChunkRecord]) -> None:
    collector = ChunkCollector(manifest, "index.html")

    headers = collector.get_link_headers()
    assert "<assets/vendor-v1.js>; rel=modulepreload; crossorigin" in headers
    assert not any("index-abc.js" in header for header in headers)
    assert collector.get_link_header() == ", ".join(headers)


def _production(options: CollectorOptions, **kwargs: Any) -> ChunkCollector:
    return create_chunk_collector(options, mode="production", **kwargs)


def test_factory_requires_manifest_in_production() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        _production(CollectorOptions())
    assert "options.manifest must be provided" in str(excinfo.value)


def test_factory_rejects_missing_entry(manifest_payload: dict[str, Any]) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        _production(CollectorOptions(manifest=manifest_payload, entry="src/main.tsx"))
    assert 'does not contain key "src/main.tsx"' in str(excinfo.value)


def test_factory_rejects_non_entry_module(manifest_payload: dict[str, Any]) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        _production(CollectorOptions(manifest=manifest_payload, entry="_vendor.js"))
    assert "is not an entry module" in str(excinfo.value)


def test_factory_builds_collector_from_payload(manifest_payload: dict[str, Any]) -> None:
    collector = _production(
        CollectorOptions(manifest=manifest_payload, preload_fonts=False, nonce="n")
    )

    assert collector.entry == "index.html"
    assert "assets/inter-1.woff2" not in collector.preloads
    assert all(
        record.nonce == "n" for record in collector.preloads.values() if record.rel != "preload"
    )


def test_factory_reads_manifest_through_cache(
    tmp_path: Path, manifest_payload: dict[str, Any]
) -> None:
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(manifest_payload), encoding="utf-8")
    cache = ManifestCache()

    first = _production(CollectorOptions(manifest=path), cache=cache)
    path.unlink()
    second = _production(CollectorOptions(manifest=str(path)), cache=cache)

    assert second.manifest is first.manifest
    assert list(second.preloads) == list(first.preloads)


def test_factory_is_disabled_outside_production(manifest_payload: dict[str, Any]) -> None:
    collector = create_chunk_collector(CollectorOptions(), mode="development")

    assert collector.manifest == {}
    assert collector.get_chunks() == []
    assert collector.get_tags(include_entry=True) == ""
    collector.collect("src/pages/Browse.tsx")
    assert collector.preloads == {}
    assert collector.logger.records[0]["operation"] == "gate_disabled"


def test_factory_reads_mode_from_environment(
    monkeypatch: pytest.MonkeyPatch, manifest_payload: dict[str, Any]
) -> None:
    monkeypatch.setenv("NODE_ENV", "production")
    with pytest.raises(ConfigurationError):
        create_chunk_collector(CollectorOptions())

    monkeypatch.setenv("NODE_ENV", "test")
    assert create_chunk_collector(CollectorOptions()).preloads == {}
