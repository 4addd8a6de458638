"""Core caption chunking logic: sentence splitting, word alignment, SRT output.

WHY: A text-to-speech narration is transcribed back to get word timings,
but the transcription drops punctuation and may disagree with the script
in places. Captions must show the script's own text, so this module walks
the script sentence by sentence and re-aligns the transcribed words onto
it, producing short, timed caption cues.

HOW: The pipeline has four stages:
  1. iter_sentences() splits the narration on . ! ? runs.
  2. chunk_sentence() greedily binds words to their next occurrence in one
     sentence, cutting a new cue whenever the text span would exceed
     max_chunk_chars, and hands back the words it could not place.
  3. chunk_text() folds chunk_sentence() over all sentences, threading the
     unplaced words into the next sentence.
  4. generate_srt() renders the cues with seconds_to_timestamp().

RULES:
- ALL chunking functions take an explicit `config` dict; no global state.
- Cue text is always sliced from the sentence text, never rebuilt from words.
- Word matching is case-sensitive and only moves forward in a sentence, so
  repeated words bind to successive occurrences.
- A trailing span shorter than min_cue_duration is merged into the
  previous cue of the same sentence.
- Words left over after the last sentence are dropped without a cue.
- Abbreviations and decimals split sentences; this is accepted.
"""

import json
import logging
import math
import re
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .models import Cue, Word

logger = logging.getLogger(__name__)

SENTENCE_SPLIT_RE = re.compile(r"\s*[.!?]\s*")


class ChunkingError(ValueError):
    """Raised when a sentence has to be aligned but no words are left."""


# =============================================================================
# Sentence Splitting
# =============================================================================

def iter_sentences(text: str) -> Iterator[str]:
    """Yield the sentences of a narration in text order.

    Splits on any of ``. ! ?`` together with surrounding whitespace and skips
    parts that are empty after trimming. Whitespace runs inside a sentence
    (such as the blank line after a title) collapse to one space so cue text
    never spans lines. Every call returns a fresh generator, so the sequence
    can be restarted.
    """
    for part in SENTENCE_SPLIT_RE.split(text):
        sentence = " ".join(part.split())
        if sentence:
            yield sentence


# =============================================================================
# Word Alignment
# =============================================================================

def chunk_sentence(
    sentence: str,
    words: Sequence[Word],
    config: Dict,
) -> Tuple[List[Cue], List[Word]]:
    """Align the head of a word sequence with one sentence.

    WHY: The transcription is one flat stream of words for the whole
    narration. Each sentence takes as many words from the front of that
    stream as it can place and leaves the rest for the next sentence.

    HOW: Two cursors move over the sentence: match_from (end of the last
    placed word) and span_start (start of the cue being built). Each word
    is searched from match_from. If the match would push the cue past
    max_chunk_chars, the cue is closed at match_from and a new one starts at
    the match. The first word that cannot be found stops the scan. The rest
    of the sentence after span_start becomes the final cue, or is appended
    to the previous cue when it would display for less than
    min_cue_duration.

    RULES:
    - The unmatched word and everything after it are returned untouched.
    - A cue is only closed once it holds text; a single word longer than
      max_chunk_chars stays in its own cue.
    - A merged tail extends the previous cue's end time to its last word.
    - A sentence whose first word does not match still yields one cue
      covering the whole sentence, timed at the first word's start.

    Args:
        sentence: One sentence from iter_sentences().
        words: Words not yet consumed by earlier sentences.
        config: Configuration dict with max_chunk_chars and min_cue_duration.

    Returns:
        (cues, remaining_words) for this sentence.

    Raises:
        ChunkingError: If words is empty.
    """
    if not words:
        raise ChunkingError(
            "No transcribed words left to align with sentence {!r}".format(sentence)
        )

    max_chars = config["max_chunk_chars"]
    min_duration = config["min_cue_duration"]

    cues = []  # type: List[Cue]
    span_start = 0
    match_from = 0
    span_start_time = words[0].start
    span_end_time = span_start_time

    consumed = 0
    for word in words:
        index = sentence.find(word.text, match_from)
        if index < 0:
            logger.debug(
                "Word %r not found in %r after offset %d; handing over %d words",
                word.text, sentence, match_from, len(words) - consumed,
            )
            break

        match_end = index + len(word.text)
        if match_end - span_start > max_chars and match_from > span_start:
            cues.append(Cue(
                text=sentence[span_start:match_from],
                start=span_start_time,
                end=span_end_time,
            ))
            span_start = index
            span_start_time = word.start

        match_from = match_end
        span_end_time = word.end
        consumed += 1

    tail = sentence[span_start:]
    if cues and span_end_time - span_start_time < min_duration:
        previous = cues[-1]
        previous.text = previous.text + " " + tail
        previous.end = max(previous.end, span_end_time)
    else:
        cues.append(Cue(text=tail, start=span_start_time, end=span_end_time))

    return cues, list(words[consumed:])


def chunk_text(text: str, words: Sequence[Word], config: Dict) -> List[Cue]:
    """Chunk a whole narration into timed caption cues.

    Runs chunk_sentence() over every sentence in order. The words a
    sentence leaves over are passed on as the input of the next one; the
    words left after the last sentence are dropped.

    Raises:
        ChunkingError: If the words run out before the sentences do.
    """
    cues = []  # type: List[Cue]
    remaining = list(words)

    for sentence in iter_sentences(text):
        sentence_cues, remaining = chunk_sentence(sentence, remaining, config)
        cues.extend(sentence_cues)

    if remaining:
        logger.debug("Dropping %d words left after the last sentence", len(remaining))

    return cues


# =============================================================================
# Input Parsing
# =============================================================================

def _word_from_dict(item: Dict[str, Any]) -> Optional[Word]:
    text = item.get("word", item.get("text", ""))
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        start = float(item.get("start", 0))
        end = float(item.get("end", start))
    except (TypeError, ValueError):
        raise ValueError("Word {!r} has a non-numeric start or end time".format(text.strip()))
    if not (math.isfinite(start) and math.isfinite(end)):
        raise ValueError("Word {!r} has a non-finite start or end time".format(text.strip()))
    return Word(text=text.strip(), start=start, end=end)


def parse_words(data: Any) -> List[Word]:
    """Parse transcription JSON into a flat word list.

    WHY: Word timings come from a transcription service and are usually
    saved to disk first. The saved shape differs between services and
    response formats; this function normalizes them into Word objects.

    HOW: Accepts three input shapes:
      1. A verbose transcription dict with a top-level 'words' array
      2. A list of segments with nested 'words' arrays
      3. A flat list of word objects
    Word text is read from 'word' (falling back to 'text'); times from
    'start' and 'end'.

    RULES:
    - Words with empty or whitespace-only text are skipped.
    - A missing end time defaults to the start time.
    - Non-numeric or non-finite times raise ValueError.
    - Word order is preserved exactly.

    Args:
        data: Parsed JSON data.

    Returns:
        Flat list of Word objects.
    """
    if isinstance(data, dict):
        data = data.get("words", [])

    words = []  # type: List[Word]
    if not isinstance(data, list):
        return words

    for item in data:
        if not isinstance(item, dict):
            continue

        if isinstance(item.get("words"), list):
            for w in item["words"]:
                if isinstance(w, dict):
                    word = _word_from_dict(w)
                    if word is not None:
                        words.append(word)
        elif "word" in item or "text" in item:
            word = _word_from_dict(item)
            if word is not None:
                words.append(word)

    return words


def try_parse_json(raw: str) -> Any:
    """Try to parse JSON, attempting to fix incomplete input.

    Transcripts copied out of logs or cut-off downloads often lack their
    closing brackets. After a failed direct parse, a trailing comma is
    removed and a few closing-bracket suffixes are tried.

    Raises:
        ValueError: If JSON cannot be parsed even with attempted fixes.
    """
    raw = raw.replace("\r\n", "\n").replace("\r", "\n").strip()

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass

    raw_clean = re.sub(r",\s*$", "", raw)

    for suffix in ("", "]", "}]", "]}", "}]}", "]}}"):
        try:
            return json.loads(raw_clean + suffix)
        except json.JSONDecodeError:
            continue

    raise ValueError("Could not parse JSON input (tried bracket completion)")


# =============================================================================
# SRT Output
# =============================================================================

def seconds_to_timestamp(seconds: float) -> str:
    """Convert a caption-relative offset to HH:MM:SS.mmm.

    Milliseconds are the fractional part rounded half up; a rounding carry
    rolls over into the seconds. The result is a duration, not a wall-clock
    time, so no timezone or locale is involved.

    Raises:
        ValueError: If seconds is negative or not finite.
    """
    if not math.isfinite(seconds):
        raise ValueError("Timestamp offset must be finite, got {}".format(seconds))
    if seconds < 0:
        raise ValueError("Timestamp offset must be non-negative, got {}".format(seconds))

    whole = int(math.floor(seconds))
    millis = int(math.floor((seconds - whole) * 1000 + 0.5))
    total_ms = whole * 1000 + millis

    hours, rest = divmod(total_ms, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    secs, millis = divmod(rest, 1000)
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(hours, minutes, secs, millis)


def generate_srt(cues: Sequence[Cue]) -> str:
    """Render cues as subtitle blocks.

    Each block is the 1-based index, a ``start --> end`` line and the cue
    text. Blocks are separated by one blank line; there is no trailing
    newline.
    """
    blocks = []
    for i, cue in enumerate(cues, 1):
        blocks.append("{}\n{} --> {}\n{}".format(
            i,
            seconds_to_timestamp(cue.start),
            seconds_to_timestamp(cue.end),
            cue.text,
        ))
    return "\n\n".join(blocks)
