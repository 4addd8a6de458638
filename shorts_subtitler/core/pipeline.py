"""Build a CaptionTrack from a narration and its transcription.

WHY: The CLI and the HTTP API run the same steps; keeping them here means
both surfaces produce identical cues for identical input.

HOW: Converts the Transcript IR into caption words via the adapter, runs
caption_chunker with the resolved preset, and wraps the cues.

RULES:
- Unknown presets raise ValueError (from config.resolve_preset)
- ChunkingError from the chunker propagates unchanged
"""

from __future__ import annotations

import logging

from caption_chunker import build_cues
from shorts_subtitler.adapters.caption_adapter import transcript_to_caption_words
from shorts_subtitler.config import resolve_preset
from shorts_subtitler.core.ir import CaptionTrack, Transcript

logger = logging.getLogger(__name__)


def build_caption_track(
    narration_text: str,
    transcript: Transcript,
    preset: str,
    source_name: str,
) -> CaptionTrack:
    """Chunk the narration against the transcript words.

    Args:
        narration_text: The script exactly as it was synthesized.
        transcript: Transcription of the synthesized audio.
        preset: Caption preset name (e.g. "shorts").
        source_name: Stem used for output file names.

    Returns:
        CaptionTrack with the cues in display order.
    """
    config = resolve_preset(preset)
    words = transcript_to_caption_words(transcript)
    cues = build_cues(narration_text, words, config=config)

    logger.info(
        "Chunked %d transcribed words into %d captions (preset %s)",
        len(words), len(cues), preset,
    )

    return CaptionTrack(
        cues=cues,
        source_name=source_name,
        duration_s=transcript.duration_s,
        preset=preset.lower(),
    )
