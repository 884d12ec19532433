"""Deterministic export of a resolved preload set."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import cbor2

from vite_preload.models import PreloadRecord


@dataclass(frozen=True, slots=True)
class PreloadReport:
    entry: str
    module_ids: tuple[str, ...] = ()
    preloads: tuple[PreloadRecord, ...] = ()
    logs: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    schema_version: int = 1

    def to_json(self, path: str | Path | None = None) -> str:
        payload = self._payload()
        encoded = json.dumps(payload, indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        payload = self._payload()
        encoded = cbor2.dumps(payload, canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def hrefs(self) -> list[str]:
        return [record.href for record in self.preloads]

    def _payload(self) -> dict[str, object]:
        return {
            "schema_version": self.schema_version,
            "entry": self.entry,
            "module_ids": list(self.module_ids),
            "preloads": [record.to_dict() for record in self.preloads],
            "logs": [dict(record) for record in self.logs],
        }
