"""Shorts Subtitler: the caption step of a narrated short-video pipeline.

WHY: A generated script is read out by speech synthesis, the audio is
transcribed back for word timings, and the video compositor burns in
captions. This package owns the step in between: it takes the script and
the transcription and produces the caption artifacts.

HOW: Three-stage pipeline: load (script and transcript into the IR),
chunk (caption_chunker aligns words onto the script), format (pluggable
formatters write SRT and JSON). Each stage is independently testable.

RULES:
- All formatters consume the same CaptionTrack IR
- Adding a new output format = one new formatter module, no core changes
- No network or media I/O happens here; collaborators hand over files
"""

__version__ = "0.1.0"
