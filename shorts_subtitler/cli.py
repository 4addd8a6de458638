"""Command-line interface for the subtitle step.

WHY: The video pipeline saves the generated script and the transcription
to disk before this step runs. The CLI wires the rest together: load both
files into the IR, chunk the captions, run the selected formatters and
save their files next to the script (or to --output-dir).

HOW: Uses argparse for the script and transcript paths, preset and format
selection, and output directory. Status messages go to stderr. The
rounded audio duration is reported so the caller can size the video.

RULES:
- --script and --transcript are required
- --formats: comma-separated formatter keys (default: DEFAULT_OUTPUT_FORMATS)
- Output naming: {stem}{suffix}, numeric suffix for conflicts
  (-subtitles-2.srt); stem is the script file's stem
- Errors (bad input, unknown preset/format, words running out) print one
  line to stderr and exit with code 1
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from caption_chunker import ChunkingError
from shorts_subtitler.config import (
    DEFAULT_CAPTION_PRESET,
    DEFAULT_OUTPUT_FORMATS,
    LOG_LEVEL,
    configure_logging,
    parse_format_list,
)
from shorts_subtitler.core.loader import load_narration, load_transcript, video_length_s
from shorts_subtitler.core.pipeline import build_caption_track
from shorts_subtitler.formatters import FORMATTERS
from shorts_subtitler.formatters.base import FormatterOutput


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed, so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: The step is often re-run with another preset. Overwriting the
    previous subtitle file would lose the earlier result.

    HOW: Check if {stem}{suffix} exists. If so, insert a counter before the
    file extension until a free name is found.

    RULES:
    - First attempt: {stem}{suffix} (e.g. details-subtitles.srt)
    - Conflict: details-subtitles-2.srt, details-subtitles-3.srt, ...

    Returns:
        A Path that does not yet exist.
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Write one formatter output as UTF-8 and return its path."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _select_formats(value: Optional[str]) -> List[str]:
    """Resolve the --formats value to formatter keys.

    Raises:
        ValueError: For unknown keys or an empty selection.
    """
    keys = parse_format_list(value if value is not None else DEFAULT_OUTPUT_FORMATS)
    if not keys:
        raise ValueError("No output formats selected")
    unknown = [k for k in keys if k not in FORMATTERS]
    if unknown:
        raise ValueError(
            "Unknown format(s): {}. Available: {}".format(
                ", ".join(unknown), ", ".join(sorted(FORMATTERS))
            )
        )
    return keys


def run(args: argparse.Namespace) -> List[Path]:
    """Run the subtitle step for parsed arguments.

    Returns:
        Paths of the files written, in format order.
    """
    format_keys = _select_formats(args.formats)

    script_path = Path(args.script)
    narration = load_narration(script_path)
    transcript = load_transcript(args.transcript)

    _status("Narration: {} paragraphs, {} words transcribed".format(
        len(narration.facts) + (1 if narration.title else 0), len(transcript.words)
    ))

    track = build_caption_track(
        narration.text,
        transcript,
        preset=args.preset,
        source_name=script_path.stem,
    )

    output_dir = Path(args.output_dir) if args.output_dir else script_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    saved = []  # type: List[Path]
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(track):
            path = _save_output(output, track.source_name, output_dir)
            saved.append(path)
            _status("  {} -> {}".format(formatter.name, path))

    _status("Wrote {} captions; video length {}s".format(
        len(track.cues), video_length_s(transcript)
    ))
    return saved


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="shorts_subtitler",
        description="Align a narration script with its word-level transcription "
                    "and write caption files for the video compositor.",
    )

    parser.add_argument(
        "--script",
        required=True,
        help="Narration script: the generator's JSON (title/facts/anecdote) or a .txt file.",
    )

    parser.add_argument(
        "--transcript",
        required=True,
        help="Saved word-level transcription JSON of the narration audio.",
    )

    parser.add_argument(
        "--preset",
        default=DEFAULT_CAPTION_PRESET,
        help="Caption chunking preset (default: %(default)s).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: {}.".format(
                 ", ".join(sorted(FORMATTERS.keys())), DEFAULT_OUTPUT_FORMATS
             ),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: next to the script).",
    )

    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m shorts_subtitler``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        run(args)
    except (ValueError, OSError, jsonschema.ValidationError) as e:
        if isinstance(e, ChunkingError):
            _status("Error: transcript ran out of words: {}".format(e))
        elif isinstance(e, jsonschema.ValidationError):
            _status("Error: invalid transcript: {}".format(e.message))
        else:
            _status("Error: {}".format(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
