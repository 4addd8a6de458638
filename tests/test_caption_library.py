"""Unit tests for the caption chunker library (caption_chunker).

WHY: The chunker is the only part of the subtitle step with real logic:
sentence splitting, forward-only word matching, length-bounded cue
cutting, short-tail merging and timestamp formatting. A mistake here
shows up as captions out of sync with the voice.

HOW: Tests exercise each stage through its public function with small,
hand-computed inputs, then check whole-narration properties (text
reproduction, ordering, length bound, determinism) on the shared fixture.

RULES:
- Word objects come from caption_chunker.models.Word.
- Floating-point comparisons use pytest.approx.
"""

from typing import List

import pytest

from caption_chunker import (
    ChunkingError,
    PRESETS,
    build_cues,
    format_srt,
    resolve_config,
)
from caption_chunker.core import (
    chunk_sentence,
    chunk_text,
    generate_srt,
    iter_sentences,
    parse_words,
    seconds_to_timestamp,
    try_parse_json,
)
from caption_chunker.models import Cue, Word

SHORTS = PRESETS["shorts"]


def _words(*spec):
    """Build Words from (text, start, end) tuples."""
    return [Word(text=t, start=s, end=e) for t, s, e in spec]


def _normalize(text: str) -> str:
    return " ".join(text.split())


class TestSecondsToTimestamp:
    """Caption-relative HH:MM:SS.mmm timestamps."""

    def test_minutes_and_millis(self):
        assert seconds_to_timestamp(75.256) == "00:01:15.256"

    def test_zero(self):
        assert seconds_to_timestamp(0) == "00:00:00.000"

    def test_hours(self):
        assert seconds_to_timestamp(3661.5) == "01:01:01.500"

    def test_rounding_carries_into_seconds(self):
        assert seconds_to_timestamp(59.9996) == "00:01:00.000"

    def test_rounds_to_nearest_millisecond(self):
        assert seconds_to_timestamp(1.2344) == "00:00:01.234"
        assert seconds_to_timestamp(1.2346) == "00:00:01.235"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            seconds_to_timestamp(-0.5)

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValueError, match="finite"):
            seconds_to_timestamp(value)


class TestIterSentences:
    """Punctuation-based sentence splitting."""

    def test_splits_on_terminal_punctuation(self):
        assert list(iter_sentences("Hello world. Goodbye now.")) == ["Hello world", "Goodbye now"]

    def test_all_terminators_and_runs(self):
        assert list(iter_sentences("Wait!  What?  Really...")) == ["Wait", "What", "Really"]

    def test_empty_and_blank_text(self):
        assert list(iter_sentences("")) == []
        assert list(iter_sentences("  .  ! ")) == []

    def test_title_without_punctuation_joins_first_fact(self):
        sentences = list(iter_sentences("Title\n\nFact one. Fact two."))
        assert sentences == ["Title Fact one", "Fact two"]

    def test_inner_whitespace_collapsed(self):
        assert list(iter_sentences("Hello   big\tworld\n again.")) == ["Hello big world again"]

    def test_abbreviations_and_decimals_split(self):
        """Accepted limitation: no abbreviation or decimal awareness."""
        sentences = list(iter_sentences("Dr. Smith scored 3.5 points"))
        assert sentences == ["Dr", "Smith scored 3", "5 points"]

    def test_restartable(self):
        text = "One. Two! Three?"
        assert list(iter_sentences(text)) == list(iter_sentences(text))


class TestChunkSentence:
    """Greedy word alignment within a single sentence."""

    def test_short_sentence_single_cue(self):
        words = _words(("Hello", 0.0, 0.4), ("world", 0.4, 0.9))
        cues, remaining = chunk_sentence("Hello world", words, SHORTS)
        assert cues == [Cue(text="Hello world", start=0.0, end=0.9)]
        assert remaining == []

    def test_unmatched_word_hands_over_remainder(self):
        words = _words(
            ("Hello", 0.0, 0.4), ("world", 0.4, 0.9),
            ("Goodbye", 1.0, 1.6), ("now", 1.6, 1.9),
        )
        cues, remaining = chunk_sentence("Hello world", words, SHORTS)
        assert [c.text for c in cues] == ["Hello world"]
        assert [w.text for w in remaining] == ["Goodbye", "now"]

    def test_match_is_case_sensitive(self):
        words = _words(("hello", 0.3, 0.6), ("world", 0.6, 1.0))
        cues, remaining = chunk_sentence("Hello world", words, SHORTS)
        # First match fails: one degenerate cue for the whole sentence
        assert cues == [Cue(text="Hello world", start=0.3, end=0.3)]
        assert remaining == words

    def test_thirty_chars_fit_in_one_cue(self):
        sentence = "Alpha beta gamma delta epsilon"
        assert len(sentence) == 30
        words = _words(
            ("Alpha", 0.0, 0.4), ("beta", 0.4, 0.8), ("gamma", 0.8, 1.2),
            ("delta", 1.2, 1.6), ("epsilon", 1.6, 2.0),
        )
        cues, _ = chunk_sentence(sentence, words, SHORTS)
        assert len(cues) == 1
        assert cues[0].text == sentence

    def test_cuts_before_exceeding_max_chars(self):
        words = _words(
            ("Alpha", 0.0, 0.4), ("beta", 0.4, 0.8), ("gamma", 0.8, 1.2),
            ("delta", 1.2, 1.6), ("epsilon", 1.6, 2.0),
            ("zeta", 2.0, 2.4), ("eta", 2.4, 2.7),
        )
        cues, remaining = chunk_sentence(
            "Alpha beta gamma delta epsilon zeta eta", words, SHORTS
        )
        assert cues == [
            Cue(text="Alpha beta gamma delta epsilon", start=0.0, end=2.0),
            Cue(text="zeta eta", start=2.0, end=2.7),
        ]
        assert remaining == []

    def test_short_tail_merged_into_previous_cue(self):
        words = _words(
            ("Alpha", 0.0, 0.4), ("beta", 0.4, 0.8), ("gamma", 0.8, 1.2),
            ("delta", 1.2, 1.6), ("epsilon", 1.6, 2.0),
            ("zeta", 2.0, 2.2), ("eta", 2.2, 2.4),
        )
        cues, _ = chunk_sentence("Alpha beta gamma delta epsilon zeta eta", words, SHORTS)
        assert len(cues) == 1
        assert cues[0].text == "Alpha beta gamma delta epsilon zeta eta"
        assert cues[0].start == pytest.approx(0.0)
        assert cues[0].end == pytest.approx(2.4)

    def test_lone_short_span_kept(self):
        cues, _ = chunk_sentence("Hi", _words(("Hi", 0.0, 0.2)), SHORTS)
        assert cues == [Cue(text="Hi", start=0.0, end=0.2)]

    def test_duplicate_words_bind_forward(self):
        config = {"max_chunk_chars": 12, "min_cue_duration": 0.0}
        words = _words(
            ("the", 0.0, 0.2), ("cat", 0.2, 0.5), ("sat", 0.5, 0.8),
            ("on", 0.8, 1.0), ("the", 1.0, 1.2), ("mat", 1.2, 1.6),
        )
        cues, remaining = chunk_sentence("the cat sat on the mat", words, config)
        assert cues == [
            Cue(text="the cat sat", start=0.0, end=0.8),
            Cue(text="on the mat", start=0.8, end=1.6),
        ]
        assert remaining == []

    def test_word_inside_longer_word_is_skipped_by_cursor(self):
        """'eta' appears inside 'beta' and 'zeta' but binds to its own slot."""
        config = {"max_chunk_chars": 8, "min_cue_duration": 0.0}
        words = _words(("beta", 0.0, 0.5), ("zeta", 0.5, 1.0), ("eta", 1.0, 1.5))
        cues, _ = chunk_sentence("beta zeta eta", words, config)
        assert [c.text for c in cues] == ["beta", "zeta eta"]
        assert cues[1].start == pytest.approx(0.5)
        assert cues[1].end == pytest.approx(1.5)

    def test_overlong_word_gets_own_cue(self):
        config = {"max_chunk_chars": 5, "min_cue_duration": 0.0}
        words = _words(
            ("Supercalifragilistic", 0.0, 1.0), ("is", 1.0, 1.2), ("long", 1.2, 1.6),
        )
        cues, _ = chunk_sentence("Supercalifragilistic is long", words, config)
        assert [c.text for c in cues] == ["Supercalifragilistic", "is", "long"]
        assert all(c.text for c in cues)

    def test_trailing_unmatched_text_stays_in_last_cue(self):
        words = _words(("Hello", 0.0, 0.6), ("there", 0.7, 1.2))
        cues, remaining = chunk_sentence("Hello everyone", words, SHORTS)
        assert [c.text for c in cues] == ["Hello everyone"]
        assert cues[0].end == pytest.approx(0.6)
        assert [w.text for w in remaining] == ["there"]

    def test_empty_words_is_fatal(self):
        with pytest.raises(ChunkingError):
            chunk_sentence("Hello world", [], SHORTS)

    def test_input_words_not_mutated(self):
        words = _words(("Hello", 0.0, 0.4), ("world", 0.4, 0.9), ("extra", 1.0, 1.5))
        before = list(words)
        chunk_sentence("Hello world", words, SHORTS)
        assert words == before


class TestChunkText:
    """Folding the aligner across sentences."""

    def test_two_sentence_scenario(self):
        words = _words(
            ("Hello", 0.0, 0.4), ("world", 0.4, 0.9),
            ("Goodbye", 1.0, 1.6), ("now", 1.6, 1.9),
        )
        cues = chunk_text("Hello world. Goodbye now.", words, SHORTS)
        assert cues == [
            Cue(text="Hello world", start=0.0, end=0.9),
            Cue(text="Goodbye now", start=1.0, end=1.9),
        ]

    def test_leftover_words_dropped(self):
        words = _words(("Hello", 0.0, 0.4), ("world", 0.4, 0.9), ("extra", 1.0, 1.5))
        cues = chunk_text("Hello world.", words, SHORTS)
        assert [c.text for c in cues] == ["Hello world"]

    def test_words_running_out_is_fatal(self):
        with pytest.raises(ChunkingError):
            chunk_text("One. Two.", _words(("One", 0.0, 0.5)), SHORTS)

    def test_chunking_error_is_value_error(self):
        assert issubclass(ChunkingError, ValueError)

    def test_empty_text_yields_no_cues(self):
        assert chunk_text("", [], SHORTS) == []

    def test_fixture_narration(self, narration_text, caption_words, expected_cues):
        cues = chunk_text(narration_text, caption_words, SHORTS)
        assert len(cues) == len(expected_cues)
        for cue, (text, start, end) in zip(cues, expected_cues):
            assert cue.text == text
            assert cue.start == pytest.approx(start)
            assert cue.end == pytest.approx(end)


class TestChunkProperties:
    """Whole-narration properties of the produced cues."""

    @pytest.fixture
    def cues(self, narration_text, caption_words) -> List[Cue]:
        return chunk_text(narration_text, caption_words, SHORTS)

    def test_text_reproduced(self, cues, narration_text):
        joined = _normalize(" ".join(c.text for c in cues))
        assert joined == _normalize(" ".join(iter_sentences(narration_text)))

    def test_start_not_after_end(self, cues):
        assert all(c.start <= c.end for c in cues)

    def test_starts_non_decreasing(self, cues):
        starts = [c.start for c in cues]
        assert starts == sorted(starts)

    def test_length_bound(self, cues):
        assert all(len(c.text) <= SHORTS["max_chunk_chars"] for c in cues)

    def test_deterministic(self, narration_text, caption_words, cues):
        assert chunk_text(narration_text, caption_words, SHORTS) == cues


class TestGenerateSRT:
    """Subtitle block rendering."""

    def test_block_layout(self):
        cues = [
            Cue(text="Hello world", start=0.0, end=0.9),
            Cue(text="Goodbye now", start=1.0, end=1.9),
        ]
        assert generate_srt(cues) == (
            "1\n00:00:00.000 --> 00:00:00.900\nHello world\n\n"
            "2\n00:00:01.000 --> 00:00:01.900\nGoodbye now"
        )

    def test_empty(self):
        assert generate_srt([]) == ""


class TestPublicAPI:
    """build_cues() / format_srt() preset handling."""

    def test_format_srt_default_preset(self, narration_text, caption_words, expected_srt):
        assert format_srt(narration_text, caption_words) == expected_srt

    def test_landscape_preset_allows_longer_cues(self, narration_text, caption_words):
        shorts = build_cues(narration_text, caption_words, preset="shorts")
        landscape = build_cues(narration_text, caption_words, preset="landscape")
        assert len(shorts) == 5
        assert [c.text for c in landscape] == [
            "Job search in Europe Most job ads in",
            "Germany never list a salary",
            # "online" is too short on its own and is merged past the limit
            "Finland posts almost every public job online",
        ]

    def test_unknown_preset(self, caption_words):
        with pytest.raises(ValueError, match="Unknown preset"):
            build_cues("Hello.", caption_words, preset="cinema")

    def test_custom_config_overrides_preset(self):
        words = _words(("Hello", 0.0, 0.6), ("world", 0.7, 1.3))
        cues = build_cues(
            "Hello world.", words, preset="cinema",
            config={"max_chunk_chars": 5, "min_cue_duration": 0.0},
        )
        assert [c.text for c in cues] == ["Hello", "world"]

    def test_presets_not_mutated(self):
        cfg = resolve_config("shorts")
        cfg["max_chunk_chars"] = 1
        assert PRESETS["shorts"]["max_chunk_chars"] == 30


class TestParseWords:
    """Transcription JSON shapes accepted by parse_words()."""

    def test_verbose_transcription_dict(self, transcript_dict):
        words = parse_words(transcript_dict)
        assert len(words) == 20
        assert words[0] == Word(text="Job", start=0.0, end=0.6)

    def test_flat_list_and_text_key(self):
        words = parse_words([
            {"word": "Hello", "start": 0, "end": 0.4},
            {"text": " world ", "start": 0.4},
        ])
        assert words == [Word("Hello", 0.0, 0.4), Word("world", 0.4, 0.4)]

    def test_segments_with_nested_words(self):
        data = [
            {"text": "Hello world", "words": [
                {"word": "Hello", "start": 0.0, "end": 0.4},
                {"word": "", "start": 0.4, "end": 0.4},
                {"word": "world", "start": 0.4, "end": 0.9},
            ]},
        ]
        assert [w.text for w in parse_words(data)] == ["Hello", "world"]

    def test_unusable_input(self):
        assert parse_words("nope") == []
        assert parse_words({"text": "no words"}) == []

    def test_null_time_rejected(self):
        with pytest.raises(ValueError, match="non-numeric"):
            parse_words([{"word": "Hi", "start": None, "end": 0.5}])

    def test_text_time_rejected(self):
        with pytest.raises(ValueError, match="non-numeric"):
            parse_words([{"word": "Hi", "start": 0, "end": "soon"}])

    def test_infinite_time_rejected(self):
        data = try_parse_json('{"words": [{"word": "Hi", "start": 0, "end": 1e400}]}')
        with pytest.raises(ValueError, match="non-finite"):
            parse_words(data)


class TestTryParseJSON:
    def test_valid(self):
        assert try_parse_json('{"words": []}') == {"words": []}

    def test_missing_closing_brackets(self):
        raw = '{"words": [{"word": "Hi", "start": 0, "end": 0.5},'
        assert try_parse_json(raw) == {"words": [{"word": "Hi", "start": 0, "end": 0.5}]}

    def test_garbage(self):
        with pytest.raises(ValueError):
            try_parse_json("not json at all")
