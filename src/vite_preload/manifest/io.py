"""Vite manifest parser and loader."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from vite_preload.errors import ConfigurationError
from vite_preload.models import ChunkRecord, Manifest


def parse_manifest(raw: str) -> dict[str, ChunkRecord]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("Invalid manifest JSON.", hint=str(exc)) from exc
    return manifest_from_payload(payload)


def manifest_from_payload(payload: Any) -> dict[str, ChunkRecord]:
    """Convert a decoded ``manifest.json`` object into typed chunk records.

    Entries that are already :class:`ChunkRecord` instances are kept as-is.
    Key order is preserved.
    """
    if not isinstance(payload, Mapping):
        raise ConfigurationError(
            "Invalid manifest payload type.",
            hint="The manifest must be a JSON object keyed by module id.",
        )
    manifest: dict[str, ChunkRecord] = {}
    for key, item in payload.items():
        if not isinstance(key, str):
            raise ConfigurationError("Invalid manifest key.", context={"key": repr(key)})
        if isinstance(item, ChunkRecord):
            manifest[key] = item
            continue
        manifest[key] = _parse_chunk(key, item)
    return manifest


def read_manifest(path: str | Path) -> dict[str, ChunkRecord]:
    manifest_path = Path(path)
    try:
        raw = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(
            "Manifest does not exist.",
            hint="Set build.manifest: true in your vite config and run a production build.",
            context={"path": str(manifest_path)},
        ) from exc
    return parse_manifest(raw)


def serialize_manifest(manifest: Manifest) -> str:
    payload = {key: _chunk_payload(chunk) for key, chunk in manifest.items()}
    return json.dumps(payload, indent=2) + "\n"


def _parse_chunk(key: str, item: Any) -> ChunkRecord:
    if not isinstance(item, Mapping):
        raise ConfigurationError("Invalid manifest entry.", context={"module": key})
    return ChunkRecord(
        id=key,
        file=_required_str(item, "file", key),
        src=_optional_str(item, "src", key),
        name=_optional_str(item, "name", key),
        is_entry=_optional_bool(item, "isEntry", key),
        is_dynamic_entry=_optional_bool(item, "isDynamicEntry", key),
        imports=_optional_str_list(item, "imports", key),
        dynamic_imports=_optional_str_list(item, "dynamicImports", key),
        css=_optional_str_list(item, "css", key),
        assets=_optional_str_list(item, "assets", key),
    )


def _chunk_payload(chunk: ChunkRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {"file": chunk.file}
    if chunk.src is not None:
        payload["src"] = chunk.src
    if chunk.name is not None:
        payload["name"] = chunk.name
    if chunk.is_entry:
        payload["isEntry"] = True
    if chunk.is_dynamic_entry:
        payload["isDynamicEntry"] = True
    for field_name, value in (
        ("imports", chunk.imports),
        ("dynamicImports", chunk.dynamic_imports),
        ("css", chunk.css),
        ("assets", chunk.assets),
    ):
        if value:
            payload[field_name] = list(value)
    return payload


def _required_str(payload: Mapping[str, Any], key: str, module: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(
            f"Invalid manifest `{key}` value.",
            context={"module": module},
        )
    return value


def _optional_str(payload: Mapping[str, Any], key: str, module: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Invalid manifest `{key}` value.",
            context={"module": module},
        )
    return value


def _optional_bool(payload: Mapping[str, Any], key: str, module: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"Invalid manifest `{key}` value.",
            context={"module": module},
        )
    return value


def _optional_str_list(payload: Mapping[str, Any], key: str, module: str) -> tuple[str, ...]:
    value = payload.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigurationError(
            f"Invalid manifest `{key}` list.",
            context={"module": module},
        )
    return tuple(value)
