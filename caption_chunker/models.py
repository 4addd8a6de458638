"""Data models for the caption chunker.

WHY: The chunker re-aligns a narration script with the word timings a
transcription service returns for the spoken version of that script. Both
sides of that alignment need a small, explicit representation: the timed
words going in and the timed caption cues coming out.

HOW: Two dataclasses. Word is one spoken token as transcribed; Cue is one
caption entry as it will appear in the subtitle file. Cue is mutable only
while the chunker is still building it (a short trailing span is merged
into the previous cue); callers treat returned cues as final.

RULES:
- Timestamps are in seconds (float), not milliseconds.
- Word.text is matched verbatim against the narration (case-sensitive).
- Cue.text is a slice of the narration text, never of Word.text.
- Cue.start <= Cue.end always holds.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Word:
    """A single timestamped word from a transcription.

    Attributes:
        text: The transcribed word (no surrounding whitespace).
        start: Start time in seconds.
        end: End time in seconds.
    """
    text: str
    start: float
    end: float


@dataclass
class Cue:
    """One timed caption entry.

    Attributes:
        text: Caption text, taken from the narration.
        start: Display start in seconds (start of the first word).
        end: Display end in seconds (end of the last word).
    """
    text: str
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start
