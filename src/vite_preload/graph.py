"""Static import graph traversal over a Vite manifest."""

from __future__ import annotations

from dataclasses import replace

from vite_preload.errors import MissingChunkError
from vite_preload.models import ChunkRecord, Manifest


def walk(manifest: Manifest, start_id: str, is_entry: bool = False) -> dict[str, ChunkRecord]:
    """Collect every chunk statically reachable from *start_id*.

    The result is keyed by module id in depth-first pre-order: a chunk comes
    before its imports, and imports follow their declared order. Dynamic
    imports are never followed.

    Any static import of an entry chunk is part of the critical path too: Vite
    inlines it in the generated HTML without flagging it ``isEntry`` in the
    manifest. The returned records are copies with ``is_entry`` set to the
    manifest flag OR the flag inherited from the importing chunk.

    Raises :class:`MissingChunkError` for the first id not in the manifest.
    """
    chunks: dict[str, ChunkRecord] = {}
    # Explicit stack so deep import chains do not hit the recursion limit.
    stack: list[tuple[str, bool]] = [(start_id, is_entry)]
    while stack:
        module_id, inherited = stack.pop()
        chunk = manifest.get(module_id)
        if chunk is None:
            raise MissingChunkError(
                module_id,
                hint=(
                    "The manifest does not match the build output. "
                    "Rebuild and redeploy the manifest together with the assets."
                ),
                context={"start": start_id},
            )
        if module_id in chunks:
            continue

        chunk_is_entry = inherited or chunk.is_entry
        chunks[module_id] = replace(chunk, is_entry=chunk_is_entry)
        for import_id in reversed(chunk.imports):
            stack.append((import_id, chunk_is_entry))
    return chunks


__all__ = ["walk"]
