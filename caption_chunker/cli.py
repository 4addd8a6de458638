"""CLI wrapper for the caption chunker library.

WHY: The subtitle step is often re-run by hand on a saved narration and
transcript (to try another preset, or after fixing the script). A small
command keeps that possible without the full application.

HOW: Parses sys.argv for the narration path, the transcript path, an
optional output path and the --format flag, then delegates to the
library's build_cues() and generate_srt(). Transcript parsing (JSON with
fallback for incomplete files) is handled by core.try_parse_json() and
core.parse_words().

RULES:
- Usage:
    python -m caption_chunker narration.txt transcript.json output.srt
    python -m caption_chunker narration.txt transcript.json  (stdout)
    cat transcript.json | python -m caption_chunker narration.txt - out.srt
- Exit codes: 0 = success, 1 = error.
- Progress messages go to stderr; subtitle content goes to stdout (if no
  output file).
- --verbose turns on DEBUG logging (unmatched words, dropped leftovers).
"""

import logging
import sys
from typing import List

from .core import ChunkingError, generate_srt, parse_words, try_parse_json
from . import build_cues
from .presets import DEFAULT_PRESET, PRESETS

HELP_TEXT = """caption_chunker: narration subtitle chunker

Usage:
    python -m caption_chunker narration.txt transcript.json output.srt
    python -m caption_chunker narration.txt transcript.json --format landscape
    python -m caption_chunker narration.txt transcript.json  # outputs to stdout
    cat transcript.json | python -m caption_chunker narration.txt - output.srt

Format presets:
    --format shorts     (default) 9:16 vertical, cues up to 30 chars
    --format landscape  16:9, cues up to 42 chars

Options:
    --verbose           Log unmatched words and dropped leftovers
"""


def main(argv: "List[str]" = None) -> None:
    """Run the caption chunker CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).
    """
    if argv is None:
        argv = sys.argv[1:]

    args = list(argv)

    if not args or args[0] in ("-h", "--help"):
        print(HELP_TEXT)
        sys.exit(0)

    format_name = DEFAULT_PRESET
    verbose = False
    filtered_args = []  # type: List[str]
    i = 0
    while i < len(args):
        if args[i] == "--format" and i + 1 < len(args):
            format_name = args[i + 1].lower()
            i += 2
        elif args[i].startswith("--format="):
            format_name = args[i].split("=", 1)[1].lower()
            i += 1
        elif args[i] == "--verbose":
            verbose = True
            i += 1
        else:
            filtered_args.append(args[i])
            i += 1

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if format_name not in PRESETS:
        print(
            "Error: Unknown format '{}'. Available: {}".format(
                format_name, ", ".join(PRESETS.keys())
            ),
            file=sys.stderr,
        )
        sys.exit(1)

    if len(filtered_args) < 2:
        print("Error: Expected a narration file and a transcript file", file=sys.stderr)
        sys.exit(1)

    narration_path = filtered_args[0]
    transcript_path = filtered_args[1]
    output_path = filtered_args[2] if len(filtered_args) > 2 else None

    with open(narration_path, "r", encoding="utf-8") as f:
        text = f.read()

    if transcript_path == "-":
        raw = sys.stdin.read()
    else:
        with open(transcript_path, "r", encoding="utf-8") as f:
            raw = f.read()

    try:
        data = try_parse_json(raw)
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    try:
        words = parse_words(data)
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    if not words:
        print("Error: No words found in transcript", file=sys.stderr)
        sys.exit(1)

    try:
        cues = build_cues(text, words, preset=format_name)
    except ChunkingError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    if not cues:
        print("Error: Narration contains no sentences", file=sys.stderr)
        sys.exit(1)

    srt = generate_srt(cues)

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(srt)
        print(
            "Wrote {} captions ({} format) to {}".format(
                len(cues), format_name, output_path
            ),
            file=sys.stderr,
        )
    else:
        print(srt)


if __name__ == "__main__":
    main()
