"""Chunking presets for caption cues.

WHY: Vertical shorts and landscape renders fit different amounts of text on
screen. Keeping the limits as named, importable presets lets callers pick a
target by name and lets concurrent callers use different limits without
any global state.

HOW: Each preset is a plain dict with the two knobs the chunker uses:
max_chunk_chars (hard bound on a cue's text span, except for merged short
tails) and min_cue_duration (trailing spans shorter than this, in seconds,
are merged into the previous cue of the same sentence). PRESETS maps names
to presets.

RULES:
- Presets are frozen constants; never mutate them at runtime.
- Callers copy a preset before modifying it (chunk_text does this).
- "shorts" is the default and matches the 9:16 burned-in caption style.
"""

from typing import Dict

# 9:16 vertical video, one short line at a large font size
PRESET_SHORTS: Dict = {
    "max_chunk_chars": 30,
    "min_cue_duration": 0.5,
}

# 16:9 render, one longer line
PRESET_LANDSCAPE: Dict = {
    "max_chunk_chars": 42,
    "min_cue_duration": 0.8,
}

PRESETS: Dict[str, Dict] = {
    "shorts": PRESET_SHORTS,
    "landscape": PRESET_LANDSCAPE,
}

DEFAULT_PRESET = "shorts"
