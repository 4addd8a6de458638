"""Adapter: Transcript IR to caption chunker Word objects.

WHY: The chunker matches word text verbatim against the narration, so the
words it receives must carry exactly the spoken token and nothing else.
Transcription services occasionally return tokens with surrounding
whitespace or empty tokens around pauses.

HOW: One pass over Transcript.words: strip the text, skip empty tokens,
and map start_s/end_s onto Word.start/Word.end. A word whose end lies
before its start (seen on clipped audio) is clamped to a zero-length word.

RULES:
- Input Transcript is never modified.
- Word order is preserved.
- Case and inner punctuation are kept; the chunker is case-sensitive.
"""

from typing import List

from caption_chunker.models import Word as CaptionWord
from shorts_subtitler.core.ir import Transcript


def transcript_to_caption_words(transcript: Transcript) -> List[CaptionWord]:
    """Convert a Transcript IR into a flat list of caption Word objects."""
    words = []  # type: List[CaptionWord]
    for word in transcript.words:
        text = word.text.strip()
        if not text:
            continue
        words.append(CaptionWord(
            text=text,
            start=word.start_s,
            end=max(word.end_s, word.start_s),
        ))
    return words
