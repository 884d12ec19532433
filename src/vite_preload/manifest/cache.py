"""Explicit manifest cache shared across renders."""

from __future__ import annotations

from pathlib import Path

from vite_preload.manifest.io import read_manifest
from vite_preload.models import ChunkRecord


class ManifestCache:
    """Hold the first successfully read manifest until invalidated.

    The manifest is immutable build output, so once a read succeeds every
    later ``load`` returns the same mapping, whatever path it is given.
    Create one at startup and pass it to every collector; call
    :meth:`invalidate` after a rebuild.
    """

    def __init__(self) -> None:
        self._manifest: dict[str, ChunkRecord] | None = None
        self._path: Path | None = None

    @property
    def loaded(self) -> bool:
        return self._manifest is not None

    @property
    def path(self) -> Path | None:
        """Return the path the cached manifest was read from."""
        return self._path

    def load(self, path: str | Path) -> dict[str, ChunkRecord]:
        if self._manifest is not None:
            return self._manifest
        manifest_path = Path(path)
        manifest = read_manifest(manifest_path)
        self._manifest = manifest
        self._path = manifest_path
        return manifest

    def invalidate(self) -> None:
        self._manifest = None
        self._path = None
