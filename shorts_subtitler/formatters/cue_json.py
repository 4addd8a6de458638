"""Caption cue JSON formatter.

WHY: Preview tools and the upload step want the cues as data (to show a
caption timeline or build a description) rather than re-parsing the
subtitle file. The JSON carries both raw seconds and the formatted
timecodes that appear in the subtitle file.

HOW: One object per cue with a 1-based index, start/end seconds, the
start/end timecodes from caption_chunker.seconds_to_timestamp and the
text. The document is validated against schemas/cue_track.schema.json
with jsonschema before it is returned.

RULES:
- Registered as "cue_json" in the FORMATTERS dict.
- Output suffix: "-cues.json"; media type "application/json".
- Schema validation is mandatory; raises on invalid output.
"""

from __future__ import annotations

import json
from typing import Any

import jsonschema

from caption_chunker import seconds_to_timestamp
from shorts_subtitler.core.ir import CaptionTrack
from shorts_subtitler.formatters.base import BaseFormatter, FormatterOutput
from shorts_subtitler.schemas import get_schema


def track_to_dict(track: CaptionTrack) -> dict[str, Any]:
    """Build the cue track document (unvalidated)."""
    return {
        "source": track.source_name,
        "preset": track.preset,
        "duration": track.duration_s,
        "cues": [
            {
                "index": i,
                "start": cue.start,
                "end": cue.end,
                "start_timecode": seconds_to_timestamp(cue.start),
                "end_timecode": seconds_to_timestamp(cue.end),
                "text": cue.text,
            }
            for i, cue in enumerate(track.cues, 1)
        ],
    }


class CueJSONFormatter(BaseFormatter):
    """Formatter that produces the cue list as JSON."""

    @property
    def name(self) -> str:
        return "Cue JSON"

    def format(self, track: CaptionTrack) -> list[FormatterOutput]:
        """Convert the track into cue JSON.

        Raises:
            jsonschema.ValidationError: If the generated JSON does not
                conform to the cue track schema.
        """
        output = track_to_dict(track)
        jsonschema.validate(instance=output, schema=get_schema("cue_track"))

        return [
            FormatterOutput(
                suffix="-cues.json",
                content=json.dumps(output, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
