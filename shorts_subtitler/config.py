"""Configuration constants, preset resolution, and .env loading.

WHY: Centralizes the values an operator may want to change between runs
(default caption preset, which files to write, log verbosity) so they are
not buried in the CLI or the HTTP layer. Anything the rest of the video
pipeline needs (category IDs, token paths, asset folders) is deliberately
not here; components receive such values as explicit arguments.

HOW: python-dotenv loads the .env file on import. Defaults are module-level
constants read from the environment. resolve_preset() hands out private
copies of the caption chunker presets.

RULES:
- All defaults can be overridden via environment variables
- DEFAULT_OUTPUT_FORMATS is a comma-separated list of formatter keys
- resolve_preset() never returns a shared preset dict
"""

from __future__ import annotations

import copy
import logging
import os

from dotenv import load_dotenv

from caption_chunker.presets import PRESETS

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CAPTION_PRESET = os.getenv("DEFAULT_CAPTION_PRESET", "shorts")
DEFAULT_OUTPUT_FORMATS = os.getenv("DEFAULT_OUTPUT_FORMATS", "srt_captions")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))


def resolve_preset(name: str) -> dict:
    """Return a private copy of the named caption preset.

    RULES:
    - Names are case-insensitive
    - Raises ValueError listing the available presets for unknown names
    """
    key = name.lower()
    if key not in PRESETS:
        raise ValueError(
            "Unknown caption preset '{}'. Available: {}".format(
                name, ", ".join(sorted(PRESETS))
            )
        )
    return copy.deepcopy(PRESETS[key])


def parse_format_list(value: str | None) -> list[str]:
    """Split a comma-separated formatter list, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for an entry point (CLI, server)."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
