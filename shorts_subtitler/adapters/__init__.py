"""Adapter modules for converting between the IR and library formats.

WHY: The subtitle IR (TranscribedWord, Transcript) and the caption chunker
library (caption_chunker.Word) evolve independently. Adapters bridge them.

RULES:
- Adapters are pure data transformations: no I/O, no side effects.
- Adapters must not modify the source IR objects.
"""

from shorts_subtitler.adapters.caption_adapter import transcript_to_caption_words

__all__ = ["transcript_to_caption_words"]
