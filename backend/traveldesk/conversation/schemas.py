from typing import Any

from pydantic import BaseModel


class TranscriptBody(BaseModel):
    transcript: Any = None


class SummaryResponse(BaseModel):
    success: bool = True
    summary: str
    timestamp: str


class SuggestionResponse(BaseModel):
    success: bool = True
    suggestion: str
    timestamp: str


def transcript_text(body: Any) -> str:
    """Trimmed transcript from a parsed JSON body; '' when absent or not a string."""
    if isinstance(body, dict):
        body = TranscriptBody.model_validate(body)
    if not isinstance(body, TranscriptBody) or not isinstance(body.transcript, str):
        return ""
    return body.transcript.strip()
