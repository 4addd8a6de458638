"""Caption chunker library for narrated short-form videos.

WHY: Narrated shorts are captioned from the script that was read out, not
from the raw transcription, so the captions keep the script's spelling and
punctuation. This package aligns the transcription's word timings onto the
script and produces short, timed caption cues and the subtitle file the
video compositor burns in.

HOW: build_cues(text, words, preset) resolves the preset to a config dict
and runs the chunking pipeline; format_srt() does the same and renders the
subtitle file. All internal functions receive the config dict as an
explicit parameter.

RULES:
- build_cues() and format_srt() are the public API for chunking.
- Preset names: "shorts" (default), "landscape".
- The words list must contain Word objects from caption_chunker.models.
- Never mutate the preset constants; copies are made internally.
"""

import copy
from typing import Dict, List, Optional, Sequence

from .models import Cue, Word
from .presets import DEFAULT_PRESET, PRESETS, PRESET_LANDSCAPE, PRESET_SHORTS
from .core import (
    ChunkingError,
    chunk_sentence,
    chunk_text,
    generate_srt,
    iter_sentences,
    parse_words,
    seconds_to_timestamp,
    try_parse_json,
)

__all__ = [
    "build_cues",
    "format_srt",
    "resolve_config",
    "ChunkingError",
    "Cue",
    "Word",
    "PRESETS",
    "PRESET_SHORTS",
    "PRESET_LANDSCAPE",
    "DEFAULT_PRESET",
    "chunk_sentence",
    "chunk_text",
    "generate_srt",
    "iter_sentences",
    "parse_words",
    "seconds_to_timestamp",
    "try_parse_json",
]


def resolve_config(preset: str = DEFAULT_PRESET, config: Optional[Dict] = None) -> Dict:
    """Return a private copy of the chunking config.

    If config is given it overrides the preset entirely.

    Raises:
        ValueError: If preset name is not recognized and no config is provided.
    """
    if config is not None:
        return copy.deepcopy(config)
    if preset not in PRESETS:
        raise ValueError(
            "Unknown preset '{}'. Available: {}".format(
                preset, ", ".join(PRESETS.keys())
            )
        )
    return copy.deepcopy(PRESETS[preset])


def build_cues(
    text: str,
    words: Sequence[Word],
    preset: str = DEFAULT_PRESET,
    config: Optional[Dict] = None,
) -> List[Cue]:
    """Align timestamped words with a narration and return caption cues.

    WHY: This is the entry point for callers that want the cues themselves
    (JSON export, previews) rather than a finished subtitle file.

    RULES:
    - Returns an empty list for blank text, without looking at words.
    - Raises ChunkingError if a sentence is reached with no words left.
    - Pure: the same text and words always give the same cues.

    Args:
        text: The narration exactly as it was sent to speech synthesis.
        words: Transcribed words of that narration, in spoken order.
        preset: Preset name ("shorts", "landscape"). Default: "shorts".
        config: Optional custom config dict. If provided, preset is ignored.

    Returns:
        Caption cues in display order.
    """
    cfg = resolve_config(preset, config)
    return chunk_text(text, words, cfg)


def format_srt(
    text: str,
    words: Sequence[Word],
    preset: str = DEFAULT_PRESET,
    config: Optional[Dict] = None,
) -> str:
    """Align words with a narration and render the subtitle file content.

    Same arguments and errors as build_cues(). Returns an empty string when
    the narration has no sentences.
    """
    return generate_srt(build_cues(text, words, preset=preset, config=config))
