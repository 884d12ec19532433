"""Collector options and the production environment gate."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vite_preload.models import LEGACY_POLYFILL_ID

PRODUCTION_MODE = "production"
MODE_ENV_VAR = "NODE_ENV"
DEFAULT_ENTRY = "index.html"

ManifestSource = Mapping[str, Any] | str | Path


@dataclass(frozen=True, slots=True)
class CollectorOptions:
    """Per-render options for :func:`vite_preload.create_chunk_collector`.

    ``manifest`` is either a parsed Vite manifest (raw JSON payload or
    :class:`~vite_preload.models.ChunkRecord` mapping) or a path to
    ``manifest.json``. It may be omitted outside production, where no
    preloads are computed. This is not the ``ssr-manifest.json``.

    ``async_script`` sets ``async`` on the entry ``<script type="module">``;
    the polyfill bootstrap is never async.
    """

    manifest: ManifestSource | None = None
    entry: str = DEFAULT_ENTRY
    preload_fonts: bool = True
    preload_assets: bool = False
    nonce: str = ""
    async_script: bool = False
    polyfill_id: str = LEGACY_POLYFILL_ID


def current_mode() -> str | None:
    return os.environ.get(MODE_ENV_VAR)


def is_production(mode: str | None = None) -> bool:
    """Return whether preload computation is active for *mode*.

    When *mode* is ``None`` the ``NODE_ENV`` environment variable is used.
    """
    if mode is None:
        mode = current_mode()
    return mode == PRODUCTION_MODE
