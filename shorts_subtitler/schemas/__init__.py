"""JSON schemas for collaborator input and formatter output.

Schemas are loaded from this directory on first use and cached.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_SCHEMA_DIR = Path(__file__).resolve().parent

_CACHED_SCHEMAS: dict[str, dict[str, Any]] = {}


def get_schema(name: str) -> dict[str, Any]:
    """Return the parsed schema ``{name}.schema.json``."""
    if name not in _CACHED_SCHEMAS:
        with open(_SCHEMA_DIR / "{}.schema.json".format(name), encoding="utf-8") as f:
            _CACHED_SCHEMAS[name] = json.load(f)
    return _CACHED_SCHEMAS[name]
