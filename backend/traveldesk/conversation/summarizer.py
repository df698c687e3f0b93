"""
Conversation summary: digest a consultation transcript into the fixed
12-item "Activity Search Requirements" template.

Uses OpenAI when OPENAI_API_KEY is set; otherwise a rule-based fallback
fills each item from the first transcript sentence that mentions it.
"""

import logging
import re

from traveldesk.config import Settings
from traveldesk.conversation.checklist import CHECKLIST
from traveldesk.conversation.llm_utils import complete, strip_code_fences

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 50
NOT_SPECIFIED = "Not specified"
SUMMARY_HEADER = "[Activity Search Requirements]"

SUMMARY_SYSTEM = """You summarize travel agency consultation conversations for staff who will search for activities.
Write in English, as plain text (no markdown headings, no JSON)."""

SUMMARY_USER_TEMPLATE = """Conversation content: {transcript}

Important: Please output in a format that includes all 12 items below. Each item should start with "- " and be separated by ":".

{header}
{template_lines}

Notes:
1. All 12 items must be included
2. Items 1-8 are essential; Items 9-12 are optional but helpful
3. Items not mentioned in the conversation should be marked as "TBD" or "{not_specified}"
4. Do not include personal names or personally identifiable information
5. Each item should be concise and on one line
6. Do not add unnecessary explanatory text"""

_MAX_VALUE_CHARS = 120


def _template_lines() -> str:
    lines = []
    for item in CHECKLIST:
        optional = ", optional" if not item.essential else ""
        lines.append(f"- {item.label}: ({item.hint}{optional})")
    return "\n".join(lines)


def _sentences(transcript: str) -> list[str]:
    parts = re.split(r"(?<=[.!?])\s+|\n+", transcript)
    return [p.strip() for p in parts if p.strip()]


def _summarize_fallback(transcript: str) -> str:
    """Rule-based summary when no OpenAI API key is set."""
    sentences = _sentences(transcript)
    lines = [SUMMARY_HEADER]
    for item in CHECKLIST:
        value = next((s for s in sentences if item.matches(s)), None)
        if value and len(value) > _MAX_VALUE_CHARS:
            value = value[: _MAX_VALUE_CHARS - 1].rstrip() + "…"
        lines.append(f"- {item.label}: {value or NOT_SPECIFIED}")
    return "\n".join(lines)


def summarize_transcript(transcript: str, settings: Settings) -> str:
    """
    Summarize a transcript into the requirements template.

    Raises ValueError for transcripts shorter than MIN_TEXT_LENGTH; upstream
    LLM errors propagate to the caller.
    """
    text = (transcript or "").strip()
    if len(text) < MIN_TEXT_LENGTH:
        raise ValueError(f"Transcript must be at least {MIN_TEXT_LENGTH} characters to summarize")

    if not settings.openai_api_key:
        logger.info("No OPENAI_API_KEY; using rule-based summary")
        return _summarize_fallback(text)

    user_content = SUMMARY_USER_TEMPLATE.format(
        transcript=text,
        header=SUMMARY_HEADER,
        template_lines=_template_lines(),
        not_specified=NOT_SPECIFIED,
    )
    summary = strip_code_fences(complete(settings, SUMMARY_SYSTEM, user_content, temperature=0.2))
    if not summary:
        logger.warning("Summarizer returned empty output; using rule-based summary")
        return _summarize_fallback(text)
    return summary
