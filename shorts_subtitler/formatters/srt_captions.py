"""Subtitle file formatter for the video compositor.

WHY: The compositor burns captions in from a subtitle file, so the file
must match the block layout it parses exactly: index, ``start --> end``
line with HH:MM:SS.mmm timestamps, caption text, blank line between
blocks. The caption chunker library owns that rendering.

HOW: Calls caption_chunker.generate_srt() on the track's cues.

RULES:
- Registered as "srt_captions" in the FORMATTERS dict.
- Output suffix: "-subtitles.srt"; media type "application/x-subrip".
- An empty track produces an empty file.
- Never modifies the CaptionTrack.
"""

from typing import List

from caption_chunker import generate_srt
from shorts_subtitler.core.ir import CaptionTrack
from shorts_subtitler.formatters.base import BaseFormatter, FormatterOutput


class SRTCaptionFormatter(BaseFormatter):
    """Formatter that produces the burned-in subtitle file."""

    @property
    def name(self) -> str:
        return "SRT Subtitles"

    def format(self, track: CaptionTrack) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-subtitles.srt",
                content=generate_srt(track.cues),
                media_type="application/x-subrip",
            )
        ]
