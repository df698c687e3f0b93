"""
Travel Desk API: grounded activity search across travel platforms, plus
conversation summary and staff suggestions for the consultation screen.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Optional

import uvicorn
from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from traveldesk.config import Settings, get_settings
from traveldesk.conversation.assistant import suggest_next_questions
from traveldesk.conversation.schemas import (
    SuggestionResponse,
    SummaryResponse,
    transcript_text,
)
from traveldesk.conversation.summarizer import MIN_TEXT_LENGTH, summarize_transcript
from traveldesk.errors import ConfigurationError, TravelDeskError, ValidationError
from traveldesk.logging_config import configure_logging
from traveldesk.search.orchestrator import run_activity_search
from traveldesk.search.schemas import ErrorResponse, SearchResponse
from traveldesk.search.validation import validate_search_request
from traveldesk.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_fastapi_app: FastAPI):
    """Refuse to start without the grounded backend unless in mock mode."""
    current = get_settings()
    configure_logging(current.log_level)
    current.require_backend()
    if current.mock_mode:
        logger.warning("Running in MOCK MODE: canned data will be returned for activity searches")
    else:
        logger.info("Running with grounded backend %s/%s", current.gcp_project, current.gcp_location)
    yield


app = FastAPI(title="Travel Desk API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _error(status_code: int, error: str, message: Optional[str] = None, with_timestamp: bool = False) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        timestamp=utc_now_iso() if with_timestamp else None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


@app.middleware("http")
async def reject_disallowed_origins(request: Request, call_next):
    """Browser requests from origins outside the allow-list never reach a handler."""
    origin = request.headers.get("origin")
    if origin and origin not in settings.allowed_origins:
        logger.warning("Rejected request from origin %s", origin)
        return _error(403, "Not allowed by CORS")
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    logger.info("Malformed request body: %s", exc.errors())
    return _error(400, "Invalid request body")


@app.get("/health")
def health(current: Settings = Depends(get_settings)):
    return {"status": "ok", "service": current.service_name, "timestamp": utc_now_iso()}


@app.post(
    "/api/activity-search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
)
def activity_search(body: Any = Body(None), current: Settings = Depends(get_settings)):
    """
    Search every platform with one grounded call and return per-platform
    results with references and preview images.
    """
    try:
        request = validate_search_request(body)
    except ValidationError as e:
        return _error(e.status_code, str(e))

    logger.info("Activity search request: %r (include_images=%s)", request.query, request.include_images)
    try:
        return run_activity_search(request, current)
    except TravelDeskError as e:
        logger.error("Activity search failed: %s", e)
        return _error(e.status_code, "Activity search failed", str(e), with_timestamp=True)
    except Exception as e:
        logger.exception("Activity search error")
        return _error(500, "Activity search failed", str(e), with_timestamp=True)


@app.post("/api/conversation/summary", response_model=SummaryResponse)
def conversation_summary(body: Any = Body(None), current: Settings = Depends(get_settings)):
    """Summarize a transcript into the activity search requirements template."""
    transcript = transcript_text(body)
    if len(transcript) < MIN_TEXT_LENGTH:
        return _error(400, f"Transcript must be at least {MIN_TEXT_LENGTH} characters")
    try:
        summary = summarize_transcript(transcript, current)
    except Exception as e:
        logger.exception("Summarization error")
        return _error(500, "Summarization failed", str(e), with_timestamp=True)
    return SummaryResponse(summary=summary, timestamp=utc_now_iso())


@app.post("/api/conversation/suggestion", response_model=SuggestionResponse)
def conversation_suggestion(body: Any = Body(None), current: Settings = Depends(get_settings)):
    """Tell staff which checklist items to ask about next."""
    transcript = transcript_text(body)
    if not transcript:
        return _error(400, "Transcript is required")
    try:
        suggestion = suggest_next_questions(transcript, current)
    except Exception as e:
        logger.exception("Suggestion error")
        return _error(500, "Suggestion failed", str(e), with_timestamp=True)
    return SuggestionResponse(suggestion=suggestion, timestamp=utc_now_iso())


def run() -> None:
    """Console entry point: validate configuration, then serve."""
    current = get_settings()
    configure_logging(current.log_level)
    try:
        current.require_backend()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)
    uvicorn.run("traveldesk.main:app", host=current.host, port=current.port)


if __name__ == "__main__":
    run()
