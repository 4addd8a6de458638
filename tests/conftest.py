"""Shared test fixtures for the shorts_subtitler test suite.

WHY: Several test modules need the same narration, transcription and
script payloads. Centralizing them keeps the expected cue values in one
place.

HOW: Module-level constants hold the raw collaborator payloads (the text
generator's script JSON and a word-level transcription of its narration).
Fixtures hand out copies and write them to a temporary directory for the
loader and CLI tests.

RULES:
- The transcription words cover the script's narrated text exactly
  (title plus facts), one entry per spoken word.
- Every word lasts 0.6 s with a 0.1 s pause, so no trailing span is ever
  short enough to be merged.
"""

import json
import re
from typing import Any, Dict, List

import pytest

from caption_chunker.models import Word


SCRIPT: Dict[str, Any] = {
    "title": "Job search in Europe",
    "facts": [
        "Most job ads in Germany never list a salary.",
        "Finland posts almost every public job online!",
    ],
    "anecdote": "A recruiter once hired a candidate for asking about coffee.",
}

NARRATION_TEXT = (
    "Job search in Europe\n\n"
    "Most job ads in Germany never list a salary.\n\n"
    "Finland posts almost every public job online!"
)


def make_words(text: str, step: float = 0.7, length: float = 0.6) -> List[Dict[str, Any]]:
    """Transcription word dicts for every word of text, evenly spaced."""
    tokens = re.findall(r"[A-Za-z0-9']+", text)
    return [
        {"word": token, "start": round(i * step, 3), "end": round(i * step + length, 3)}
        for i, token in enumerate(tokens)
    ]


TRANSCRIPT_WORDS = make_words(NARRATION_TEXT)

TRANSCRIPT: Dict[str, Any] = {
    "task": "transcribe",
    "language": "english",
    "duration": 14.6,
    "text": "Job search in Europe. Most job ads in Germany never list a salary. "
            "Finland posts almost every public job online!",
    "words": TRANSCRIPT_WORDS,
}


@pytest.fixture
def script_dict():
    """The text generator's answer for one video."""
    return json.loads(json.dumps(SCRIPT))


@pytest.fixture
def transcript_dict():
    """Verbose transcription of the narrated script."""
    return json.loads(json.dumps(TRANSCRIPT))


@pytest.fixture
def caption_words():
    """TRANSCRIPT words as caption_chunker Word objects."""
    return [Word(text=w["word"], start=w["start"], end=w["end"]) for w in TRANSCRIPT_WORDS]


@pytest.fixture
def script_file(tmp_path, script_dict):
    path = tmp_path / "details.json"
    path.write_text(json.dumps(script_dict), encoding="utf-8")
    return path


@pytest.fixture
def transcript_file(tmp_path, transcript_dict):
    path = tmp_path / "transcript.json"
    path.write_text(json.dumps(transcript_dict, indent=2), encoding="utf-8")
    return path


# Cues the "shorts" preset produces for NARRATION_TEXT and TRANSCRIPT_WORDS.
EXPECTED_CUES = [
    ("Job search in Europe Most job", 0.0, 4.1),
    ("ads in Germany never list a", 4.2, 8.3),
    ("salary", 8.4, 9.0),
    ("Finland posts almost every", 9.1, 11.8),
    ("public job online", 11.9, 13.9),
]

EXPECTED_SRT = (
    "1\n00:00:00.000 --> 00:00:04.100\nJob search in Europe Most job\n\n"
    "2\n00:00:04.200 --> 00:00:08.300\nads in Germany never list a\n\n"
    "3\n00:00:08.400 --> 00:00:09.000\nsalary\n\n"
    "4\n00:00:09.100 --> 00:00:11.800\nFinland posts almost every\n\n"
    "5\n00:00:11.900 --> 00:00:13.900\npublic job online"
)


@pytest.fixture
def narration_text():
    return NARRATION_TEXT


@pytest.fixture
def expected_cues():
    return list(EXPECTED_CUES)


@pytest.fixture
def expected_srt():
    return EXPECTED_SRT
