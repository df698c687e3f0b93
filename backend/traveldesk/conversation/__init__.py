"""Conversation services: summary, staff suggestions, session state."""

from .assistant import suggest_next_questions
from .checklist import CHECKLIST, ESSENTIAL_ITEMS, missing_items
from .session import ConversationSession, compose_search_query
from .summarizer import MIN_TEXT_LENGTH, summarize_transcript

__all__ = [
    "compose_search_query",
    "missing_items",
    "suggest_next_questions",
    "summarize_transcript",
    "CHECKLIST",
    "ESSENTIAL_ITEMS",
    "MIN_TEXT_LENGTH",
    "ConversationSession",
]
