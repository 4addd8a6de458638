"""Output formatter registry.

WHY: The CLI and API layers need a single lookup to find the right
formatter by name. Adding a format means creating the formatter class,
importing it here, adding one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["srt_captions"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags, config, etc.)
- Values are BaseFormatter subclasses (not instances)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shorts_subtitler.formatters.cue_json import CueJSONFormatter
from shorts_subtitler.formatters.srt_captions import SRTCaptionFormatter

if TYPE_CHECKING:
    from shorts_subtitler.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "srt_captions": SRTCaptionFormatter,
    "cue_json": CueJSONFormatter,
}
