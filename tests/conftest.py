"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from vite_preload.manifest import manifest_from_payload
from vite_preload.models import ChunkRecord


@pytest.fixture
def manifest_payload() -> dict[str, Any]:
    """Provide a small React-style manifest with a polyfill bootstrap."""
    return {
        "vite/legacy-polyfills": {
            "file": "assets/polyfills-legacy-p1.js",
            "src": "vite/legacy-polyfills",
            "name": "polyfills",
            "isEntry": True,
        },
        "index.html": {
            "file": "assets/index-abc.js",
            "src": "index.html",
            "name": "index",
            "isEntry": True,
            "imports": ["_vendor.js"],
            "dynamicImports": ["src/pages/Browse.tsx"],
            "css": ["assets/index-abc.css"],
            "assets": ["assets/inter-1.woff2"],
        },
        "_vendor.js": {
            "file": "assets/vendor-v1.js",
            "name": "vendor",
        },
        "src/pages/Browse.tsx": {
            "file": "assets/Browse-b1.js",
            "src": "src/pages/Browse.tsx",
            "name": "Browse",
            "isDynamicEntry": True,
            "imports": ["_vendor.js", "_Card.js"],
            "css": ["assets/Browse-b1.css"],
            "assets": ["assets/hero-h1.png", "assets/logo-l1.svg", "assets/notes-n1.txt"],
        },
        "_Card.js": {
            "file": "assets/Card-c1.js",
            "name": "Card",
            "css": ["assets/Card-c1.css"],
            "assets": ["assets/inter-1.woff2"],
        },
    }


@pytest.fixture
def manifest(manifest_payload: dict[str, Any]) -> dict[str, ChunkRecord]:
    return manifest_from_payload(manifest_payload)
