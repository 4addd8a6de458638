"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: The subtitle request mirrors the two collaborator payloads the step
consumes: the narration (plain text or the generator's script object) and
the transcription words. Enums represent closed sets like output format
names.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Enum values match formatter keys in shorts_subtitler.formatters exactly
- Word timings must be finite and non-negative
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class OutputFormat(str, Enum):
    """Available output format identifiers.

    RULES:
    - Values match keys in shorts_subtitler.formatters.FORMATTERS exactly
    """

    srt_captions = "srt_captions"
    cue_json = "cue_json"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ScriptModel(BaseModel):
    """Narration script as returned by the text generator."""

    title: str = Field(default="", description="Video title, narrated first.")
    facts: List[str] = Field(description="Narrated paragraphs in order.")
    anecdote: str = Field(default="", description="Anecdote (not narrated).")


class TranscriptWordModel(BaseModel):
    """One word of the transcription.

    The text is read from "word" or, like the file loader, from "text".
    """

    word: str = Field(
        validation_alias=AliasChoices("word", "text"),
        description="Transcribed word text (key 'word' or 'text').",
    )
    start: float = Field(ge=0, allow_inf_nan=False, description="Start time in seconds.")
    end: float = Field(ge=0, allow_inf_nan=False, description="End time in seconds.")


class SubtitleRequest(BaseModel):
    """Narration plus word-level transcription to chunk into captions.

    RULES:
    - Exactly one of text or script must be given
    - words must be in spoken order
    """

    text: Optional[str] = Field(
        default=None,
        description="Narration text exactly as it was synthesized.",
    )
    script: Optional[ScriptModel] = Field(
        default=None,
        description="Narration script object; its title and facts are narrated.",
    )
    words: List[TranscriptWordModel] = Field(
        description="Word-level transcription of the narration audio.",
    )
    duration: Optional[float] = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="Audio duration in seconds. Defaults to the last word's end.",
    )
    preset: str = Field(
        default="shorts",
        description="Caption chunking preset ('shorts' or 'landscape').",
    )
    format: OutputFormat = Field(
        default=OutputFormat.srt_captions,
        description="Output format to return.",
    )
    source_name: str = Field(
        default="narration",
        description="Stem used for the suggested download filename.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "text": "Hello world. Goodbye now.",
                "words": [
                    {"word": "Hello", "start": 0.0, "end": 0.4},
                    {"word": "world", "start": 0.4, "end": 0.9},
                    {"word": "Goodbye", "start": 1.0, "end": 1.6},
                    {"word": "now", "start": 1.6, "end": 1.9},
                ],
                "preset": "shorts",
                "format": "srt_captions",
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-subtitles.srt').")
    media_type: str = Field(description="MIME type of the produced content.")


class PresetInfo(BaseModel):
    """Description of a caption chunking preset."""

    name: str = Field(description="Preset identifier used in API requests.")
    max_chunk_chars: int = Field(description="Maximum caption text length.")
    min_cue_duration: float = Field(
        description="Trailing captions shorter than this (seconds) are merged.",
    )


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
