"""Intermediate representation dataclasses for the subtitle step.

WHY: The step sits between three collaborators: a text generator (script),
a transcription service (word timings) and the video compositor (caption
files). Each speaks its own JSON; the IR gives the pipeline and every
formatter a single, well-typed form to work with.

HOW: Four dataclasses:
  Narration       the generated script (title, facts, anecdote)
  TranscribedWord one word of the transcription with timing
  Transcript      the complete transcription of the narration audio
  CaptionTrack    the chunked caption cues ready for formatting

RULES:
- All times are in float seconds
- Narration.text is exactly what is sent to speech synthesis: the title
  and the facts, separated by blank lines (the anecdote is not spoken)
- Transcript.duration_s is the audio length reported by the transcription
  service, used by the compositor to size the video
"""

from __future__ import annotations

from dataclasses import dataclass, field

from caption_chunker.models import Cue


@dataclass
class Narration:
    """A generated narration script.

    RULES:
    - title: short video title, spoken first (may be empty for plain text)
    - facts: the narrated paragraphs in order
    - anecdote: kept for the video description, never narrated
    """

    title: str
    facts: list[str] = field(default_factory=list)
    anecdote: str = ""

    @property
    def text(self) -> str:
        parts = [self.title] + list(self.facts)
        return "\n\n".join(part for part in parts if part.strip())


@dataclass
class TranscribedWord:
    """A single word from the transcription service."""

    text: str
    start_s: float
    end_s: float


@dataclass
class Transcript:
    """The transcription of the narration audio.

    RULES:
    - words: in spoken order, as returned by the service
    - text: the service's own full-text rendering (informational only)
    - duration_s: audio duration in seconds
    - language: language name or code as reported, "" when unknown
    """

    text: str
    words: list[TranscribedWord]
    duration_s: float
    language: str = ""


@dataclass
class CaptionTrack:
    """Chunked caption cues for one video.

    RULES:
    - cues: in display order, built by caption_chunker
    - source_name: output file stem (e.g. "details" for details.json)
    - duration_s: audio duration carried over from the Transcript
    - preset: name of the chunking preset that produced the cues
    """

    cues: list[Cue]
    source_name: str
    duration_s: float
    preset: str
