"""Core typed dataclasses for manifest chunks and resolved preload hints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

Relation = Literal["module", "modulepreload", "stylesheet", "preload"]
AssetKind = Literal["image", "font"]

LEGACY_POLYFILL_ID = "vite/legacy-polyfills"


@dataclass(frozen=True, slots=True)
class ChunkRecord:
    """One entry of a Vite ``manifest.json``.

    ``imports`` are static imports and are walked eagerly. ``dynamic_imports``
    are kept for completeness but are never followed: lazily imported chunks
    are the application's job to load.
    """

    id: str
    file: str
    src: str | None = None
    name: str | None = None
    is_entry: bool = False
    is_dynamic_entry: bool = False
    imports: tuple[str, ...] = ()
    dynamic_imports: tuple[str, ...] = ()
    css: tuple[str, ...] = ()
    assets: tuple[str, ...] = ()

    @property
    def source_id(self) -> str:
        """Module id the chunk was built from, falling back to its manifest key."""
        return self.src if self.src is not None else self.id


Manifest = Mapping[str, ChunkRecord]


@dataclass(frozen=True, slots=True)
class PreloadRecord:
    rel: Relation
    href: str
    is_entry: bool = False
    nonce: str = ""
    async_script: bool = False
    as_: AssetKind | None = None
    type: str | None = None
    comment: str = ""

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "rel": self.rel,
            "href": self.href,
            "is_entry": self.is_entry,
        }
        if self.nonce:
            payload["nonce"] = self.nonce
        if self.async_script:
            payload["async"] = True
        if self.as_ is not None:
            payload["as"] = self.as_
        if self.type is not None:
            payload["type"] = self.type
        if self.comment:
            payload["comment"] = self.comment
        return payload


__all__ = [
    "AssetKind",
    "ChunkRecord",
    "LEGACY_POLYFILL_ID",
    "Manifest",
    "PreloadRecord",
    "Relation",
]
