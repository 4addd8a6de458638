"""Loaders for the narration script and the saved transcription.

WHY: The text generator and the transcription service are called by other
steps of the video pipeline, which save their results to disk
(details.json, transcript.json). This module reads those files back into
the IR so the subtitle step can be re-run without calling any service.

HOW: load_narration() accepts the generator's JSON answer
({"title", "facts", "anecdote"}) or a plain .txt script.
transcript_from_dict() validates a transcription dict against
schemas/transcript.schema.json with jsonschema and converts it;
load_transcript() reads it from disk first.

RULES:
- Narration JSON needs "facts" (list of strings); "title" and "anecdote"
  default to ""
- Transcripts are validated before conversion; malformed ones raise
  jsonschema.ValidationError
- Blank transcription words are skipped
- duration_s falls back to the last word's end when "duration" is absent
- Infinite or NaN times raise ValueError
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

import jsonschema

from caption_chunker.core import try_parse_json
from shorts_subtitler.core.ir import Narration, TranscribedWord, Transcript
from shorts_subtitler.schemas import get_schema

logger = logging.getLogger(__name__)


def narration_from_dict(data: dict[str, Any]) -> Narration:
    """Build a Narration from the text generator's JSON answer.

    Raises:
        ValueError: If "facts" is missing or not a list of strings.
    """
    facts = data.get("facts")
    if not isinstance(facts, list) or not all(isinstance(f, str) for f in facts):
        raise ValueError("Narration JSON must contain a 'facts' list of strings")
    return Narration(
        title=str(data.get("title", "")).strip(),
        facts=[f.strip() for f in facts],
        anecdote=str(data.get("anecdote", "")).strip(),
    )


def load_narration(path: str | Path) -> Narration:
    """Read a narration script from a .json or .txt file.

    Raises:
        ValueError: For unsupported extensions or malformed JSON.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    raw = path.read_text(encoding="utf-8")

    if suffix == ".txt":
        return Narration(title="", facts=[raw.strip()])
    if suffix == ".json":
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("Narration JSON must be an object: {}".format(path))
        return narration_from_dict(data)

    raise ValueError(
        "Unsupported narration file type '{}' (expected .json or .txt)".format(suffix)
    )


def transcript_from_dict(data: dict[str, Any]) -> Transcript:
    """Validate and convert a verbose transcription dict.

    Raises:
        jsonschema.ValidationError: If the dict does not match the schema.
        ValueError: If a time is infinite or NaN.
    """
    jsonschema.validate(instance=data, schema=get_schema("transcript"))

    words = []  # type: list[TranscribedWord]
    for item in data["words"]:
        text = item.get("word", item.get("text", "")).strip()
        if not text:
            continue
        words.append(TranscribedWord(
            text=text,
            start_s=float(item["start"]),
            end_s=float(item["end"]),
        ))

    if "duration" in data:
        duration_s = float(data["duration"])
    else:
        duration_s = words[-1].end_s if words else 0.0

    times = [duration_s] + [t for w in words for t in (w.start_s, w.end_s)]
    if not all(math.isfinite(t) for t in times):
        raise ValueError("Transcript contains a non-finite time")

    logger.debug("Loaded transcript with %d words (%.2fs)", len(words), duration_s)

    return Transcript(
        text=data.get("text", ""),
        words=words,
        duration_s=duration_s,
        language=data.get("language", ""),
    )


def load_transcript(path: str | Path) -> Transcript:
    """Read and validate a saved transcription JSON file.

    Cut-off files are recovered with caption_chunker's bracket completion.

    Raises:
        ValueError: If the file cannot be parsed or is not a JSON object.
        jsonschema.ValidationError: If the JSON does not match the schema.
    """
    data = try_parse_json(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Transcript JSON must be an object: {}".format(path))
    return transcript_from_dict(data)


def video_length_s(transcript: Transcript) -> int:
    """Whole-second video length for the compositor (duration rounded half up)."""
    return int(math.floor(transcript.duration_s + 0.5))
