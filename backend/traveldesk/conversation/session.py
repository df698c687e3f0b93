"""
Conversation session: transcript buffer plus summary throttling state for one
customer conversation. Each caller owns its session; nothing is module-global.
"""

import logging
import time
from typing import Callable, Optional

from traveldesk.config import Settings
from traveldesk.conversation.assistant import suggest_next_questions
from traveldesk.conversation.summarizer import MIN_TEXT_LENGTH, summarize_transcript

logger = logging.getLogger(__name__)

SUMMARY_DELAY_SECONDS = 5.0


def compose_search_query(summary: str, staff_notes: str = "") -> str:
    """Activity search query from a summary and optional staff notes."""
    query = (summary or "").strip()
    notes = (staff_notes or "").strip()
    if notes:
        query += f"\n\nStaff Notes:\n{notes}"
    return query


class ConversationSession:
    def __init__(
        self,
        settings: Settings,
        *,
        summary_delay: float = SUMMARY_DELAY_SECONDS,
        min_text_length: int = MIN_TEXT_LENGTH,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self.summary_delay = summary_delay
        self.min_text_length = min_text_length
        self._clock = clock
        self._segments: list[str] = []
        self.last_summary: Optional[str] = None
        self.last_suggestion: Optional[str] = None
        self._last_summary_time: Optional[float] = None
        self._last_summary_text = ""

    @property
    def transcript(self) -> str:
        return " ".join(self._segments)

    def add_segment(self, text: str) -> None:
        """Append one finalized speech/typed segment to the transcript."""
        text = (text or "").strip()
        if text:
            self._segments.append(text)

    def maybe_summarize(self, force: bool = False) -> Optional[str]:
        """
        Summarize the transcript unless it is too short, unchanged since the
        last summary, or (without force) the delay window has not passed.

        Returns the new summary, or None when skipped. Summarizer errors
        propagate and leave the session as it was before the call.
        """
        transcript = self.transcript
        if len(transcript.strip()) < self.min_text_length:
            logger.debug("Not enough text to summarize")
            return None
        if transcript == self._last_summary_text and self.last_summary is not None:
            logger.debug("Skipping summary - text has not changed")
            return None
        now = self._clock()
        if not force and self._last_summary_time is not None and now - self._last_summary_time < self.summary_delay:
            logger.debug("Skipping summary - too soon")
            return None

        # Throttle state only advances on success so a failed call can be retried
        summary = summarize_transcript(transcript, self.settings)
        self._last_summary_time = now
        self._last_summary_text = transcript
        self.last_summary = summary
        return summary

    def suggest(self) -> str:
        self.last_suggestion = suggest_next_questions(self.transcript, self.settings)
        return self.last_suggestion

    def build_search_query(self, staff_notes: str = "") -> str:
        """Query for the activity search; summarizes on demand when no summary exists yet."""
        summary = self.last_summary
        if not summary:
            summary = self.maybe_summarize(force=True)
        if not summary:
            raise ValueError("Please provide a conversation summary or transcript first")
        return compose_search_query(summary, staff_notes)

    def reset(self) -> None:
        self._segments.clear()
        self.last_summary = None
        self.last_suggestion = None
        self._last_summary_time = None
        self._last_summary_text = ""
