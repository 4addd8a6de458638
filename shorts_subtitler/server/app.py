"""FastAPI application exposing the subtitle step over HTTP.

WHY: The orchestration that calls the text, speech and transcription
services may run elsewhere (a workflow tool, another container). An HTTP
endpoint lets it hand over the narration and the transcription and get
the caption file back without sharing a filesystem.

HOW: A single FastAPI app. POST /subtitles validates the request with
Pydantic, converts it into the IR, runs the same pipeline as the CLI and
returns the selected formatter's output as the response body. GET
endpoints list formats and presets, and report health.

RULES:
- Error responses use a consistent ErrorResponse schema
- Unknown preset, or neither/both of text and script: 400
- Transcript words running out before the narration does: 422
- Request validation errors (including non-finite times): 422, without
  the rejected values
- Requests are handled synchronously; chunking does no I/O
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from caption_chunker import ChunkingError
from caption_chunker.presets import PRESETS
from shorts_subtitler import __version__
from shorts_subtitler.config import API_HOST, API_PORT, configure_logging
from shorts_subtitler.core.ir import CaptionTrack, Narration, TranscribedWord, Transcript
from shorts_subtitler.core.pipeline import build_caption_track
from shorts_subtitler.formatters import FORMATTERS
from shorts_subtitler.server.models import (
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    PresetInfo,
    SubtitleRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Shorts Subtitler API",
    description=(
        "REST API that aligns a narration script with its word-level "
        "transcription and returns caption files (SRT subtitles, cue JSON) "
        "for burning into short-form videos."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Return 422 without echoing the rejected input values.

    The default handler includes each offending value, and a rejected
    Infinity or NaN cannot be rendered as JSON.
    """
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": errors})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _narration_text(request: SubtitleRequest) -> str:
    """Return the narrated text from either request field."""
    if (request.text is None) == (request.script is None):
        raise HTTPException(
            status_code=400,
            detail="Provide exactly one of 'text' or 'script'.",
        )
    if request.text is not None:
        return request.text
    narration = Narration(
        title=request.script.title,
        facts=list(request.script.facts),
        anecdote=request.script.anecdote,
    )
    return narration.text


def _request_to_transcript(request: SubtitleRequest) -> Transcript:
    words = [
        TranscribedWord(text=w.word, start_s=w.start, end_s=w.end)
        for w in request.words
    ]
    if request.duration is not None:
        duration_s = request.duration
    else:
        duration_s = words[-1].end_s if words else 0.0
    return Transcript(
        text=" ".join(w.text for w in words),
        words=words,
        duration_s=duration_s,
    )


# ---------------------------------------------------------------------------
# Endpoints: Subtitles
# ---------------------------------------------------------------------------


@app.post(
    "/subtitles",
    tags=["subtitles"],
    summary="Chunk a narration into timed captions",
    description=(
        "Aligns the transcription words onto the narration sentence by "
        "sentence, cuts captions of at most the preset's length and returns "
        "the requested format: SRT subtitles (application/x-subrip) or the "
        "cue list as JSON (application/json)."
    ),
    responses={
        200: {
            "content": {"application/x-subrip": {}, "application/json": {}},
            "description": "The rendered caption file.",
        },
        400: {"model": ErrorResponse, "description": "Invalid preset or narration"},
        422: {"model": ErrorResponse, "description": "Transcript does not cover the narration"},
    },
)
def create_subtitles(request: SubtitleRequest) -> Response:
    text = _narration_text(request)
    transcript = _request_to_transcript(request)

    try:
        track = build_caption_track(
            text,
            transcript,
            preset=request.preset,
            source_name=request.source_name,
        )
    except ChunkingError as e:
        logger.info("Rejected subtitle request: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    formatter = FORMATTERS[request.format.value]()
    output = formatter.format(track)[0]
    filename = "{}{}".format(track.source_name, output.suffix)

    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats and presets
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
    description=(
        "Returns all supported output formats with their identifiers, "
        "human-readable names, file suffixes and media types."
    ),
)
def list_formats() -> List[FormatInfo]:
    empty = CaptionTrack(cues=[], source_name="", duration_s=0.0, preset="")
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        output = formatter.format(empty)[0]
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            suffix=output.suffix,
            media_type=output.media_type,
        ))
    return result


@app.get(
    "/presets",
    response_model=List[PresetInfo],
    tags=["formats"],
    summary="List caption chunking presets",
)
def list_presets() -> List[PresetInfo]:
    return [
        PresetInfo(
            name=name,
            max_chunk_chars=preset["max_chunk_chars"],
            min_cue_duration=preset["min_cue_duration"],
        )
        for name, preset in sorted(PRESETS.items())
    ]


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the shorts-subtitler-api console script."""
    import uvicorn
    configure_logging()
    uvicorn.run(app, host=API_HOST, port=API_PORT)
