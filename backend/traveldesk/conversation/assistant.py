"""
Staff assistant: check a transcript against the 12-item checklist and tell
staff what to ask next, as one plain-text prompt.
"""

import json
import logging

from traveldesk.config import Settings
from traveldesk.conversation.checklist import ESSENTIAL_ITEMS, checklist_lines, missing_items
from traveldesk.conversation.llm_utils import complete, parse_llm_response, strip_code_fences

logger = logging.getLogger(__name__)

PROCEED = "Let's proceed with the activity search"
MULTIPLE_PREFIX = "Please inquire about the following items:"

DEFAULT_SUGGESTION = MULTIPLE_PREFIX + "\n" + "\n".join(f"- {item.label}" for item in ESSENTIAL_ITEMS)

ASSISTANT_SYSTEM = f"""You are an activity search assistant for travelers.
You help staff gather information from customers looking for activities and experiences.

Required information:
{checklist_lines()}

Analyze the conversation and suggest what items staff should confirm next.
Return your suggestion as plain text in ENGLISH ONLY. Do not use JSON, markdown, or code blocks.

Response format:
- Only when all important items (1-8) are clearly mentioned: "{PROCEED}"
- If information is present in the conversation (even if not perfectly detailed), consider it collected - do not ask again
- If 2 or more items are missing: "{MULTIPLE_PREFIX}" followed by one "- " bullet per item
- Only if exactly 1 item is missing: "Let's ask about ~"
- Never output several "Let's ask about ~" lines; combine them into one list
- Items 9-12 are optional; only ask if relevant
- No additional explanations"""

ASSISTANT_USER_TEMPLATE = """Conversation content:
{transcript}

Analyze the conversation above and return the suggestion for staff."""


def format_suggestion(missing: list[str]) -> str:
    """Staff prompt for the given missing item labels."""
    if not missing:
        return PROCEED
    if len(missing) == 1:
        return f"Let's ask about the {missing[0].lower()}"
    return MULTIPLE_PREFIX + "\n" + "\n".join(f"- {label}" for label in missing)


def _suggest_fallback(transcript: str) -> str:
    """Rule-based suggestion when no OpenAI API key is set (essential items only)."""
    return format_suggestion([item.label for item in missing_items(transcript)])


def clean_suggestion(raw: str) -> str:
    """Strip code fences and unwrap a {"suggestion": ...} object the model was told not to send."""
    text = strip_code_fences(raw)
    if text.startswith("{"):
        try:
            data = parse_llm_response(text)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict) and isinstance(data.get("suggestion"), str):
            text = data["suggestion"].strip()
    return text or DEFAULT_SUGGESTION


def suggest_next_questions(transcript: str, settings: Settings) -> str:
    """Return the staff-facing prompt for a transcript; raises ValueError when it is empty."""
    text = (transcript or "").strip()
    if not text:
        raise ValueError("Transcript is required")

    if not settings.openai_api_key:
        logger.info("No OPENAI_API_KEY; using rule-based suggestion")
        return _suggest_fallback(text)

    raw = complete(
        settings,
        ASSISTANT_SYSTEM,
        ASSISTANT_USER_TEMPLATE.format(transcript=text),
        temperature=0.2,
    )
    return clean_suggestion(raw)
