"""Tests for the checklist, staff assistant, summarizer and conversation session."""

import json
from unittest.mock import MagicMock, patch

import pytest

from traveldesk.config import Settings
from traveldesk.conversation.assistant import (
    ASSISTANT_SYSTEM,
    DEFAULT_SUGGESTION,
    MULTIPLE_PREFIX,
    PROCEED,
    clean_suggestion,
    format_suggestion,
    suggest_next_questions,
)
from traveldesk.conversation.checklist import CHECKLIST, ESSENTIAL_ITEMS, checklist_lines, missing_items
from traveldesk.conversation.llm_utils import get_client, parse_llm_response, strip_code_fences
from traveldesk.conversation.session import ConversationSession, compose_search_query
from traveldesk.conversation.summarizer import NOT_SPECIFIED, SUMMARY_HEADER, summarize_transcript

COMPLETE_TRANSCRIPT = (
    "We are going to Paris from November 10th for 7 days. "
    "There will be three of us, my son is 9 years old. "
    "We love museums and a pastry class. "
    "Our budget is $200 per person. "
    "We prefer mornings and easy walking."
)


@pytest.fixture
def keyed_settings():
    return Settings(mock_mode=True, openai_api_key="test-key")


def _openai_returning(content):
    """Patch target for OpenAI whose chat completion returns `content`."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    resp = MagicMock()
    resp.choices = [choice]
    client_instance = MagicMock()
    client_instance.chat.completions.create.return_value = resp
    return client_instance


class TestChecklist:
    def test_twelve_items_eight_essential(self):
        assert [item.number for item in CHECKLIST] == list(range(1, 13))
        assert [item.number for item in ESSENTIAL_ITEMS] == list(range(1, 9))

    def test_checklist_lines(self):
        lines = checklist_lines().split("\n")
        assert lines[0].startswith("1. Destination (")
        assert lines[-1].endswith(" - optional")
        assert checklist_lines(include_hints=False).split("\n")[5] == "6. Budget per Person"

    def test_complete_transcript_has_nothing_missing(self):
        assert missing_items(COMPLETE_TRANSCRIPT) == []

    def test_missing_items(self):
        labels = [item.label for item in missing_items("We are going to Paris in November.")]
        assert labels == [
            "Number of Travelers",
            "Traveler Profile",
            "Activity Type / Interests",
            "Budget per Person",
            "Time Preference",
            "Physical Activity Level",
        ]

    def test_empty_transcript_misses_every_essential_item(self):
        assert missing_items("") == list(ESSENTIAL_ITEMS)


class TestLlmUtils:
    def test_strip_code_fences(self):
        assert strip_code_fences("```json\n{\"a\": 1}\n```") == '{"a": 1}'
        assert strip_code_fences("  plain  ") == "plain"
        assert strip_code_fences(None) == ""

    def test_parse_llm_response(self):
        assert parse_llm_response('```\n{"suggestion": "x"}\n```') == {"suggestion": "x"}

    def test_parse_llm_response_invalid(self):
        with pytest.raises(json.JSONDecodeError):
            parse_llm_response("not json")

    def test_get_client_requires_key(self):
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            get_client(Settings(openai_api_key=""))


class TestFormatSuggestion:
    def test_nothing_missing(self):
        assert format_suggestion([]) == PROCEED

    def test_single_missing(self):
        assert format_suggestion(["Budget per Person"]) == "Let's ask about the budget per person"

    def test_multiple_missing(self):
        text = format_suggestion(["Destination", "Budget per Person"])
        assert text == f"{MULTIPLE_PREFIX}\n- Destination\n- Budget per Person"


class TestCleanSuggestion:
    def test_strips_fences(self):
        assert clean_suggestion("```\nLet's ask about the budget\n```") == "Let's ask about the budget"

    def test_unwraps_json_object(self):
        assert clean_suggestion('{"suggestion": "Let\'s ask about the destination"}') == (
            "Let's ask about the destination"
        )

    def test_invalid_json_kept_as_text(self):
        assert clean_suggestion("{not json") == "{not json"

    def test_empty_uses_default(self):
        assert clean_suggestion("") == DEFAULT_SUGGESTION
        assert "- Physical Activity Level" in DEFAULT_SUGGESTION


class TestSuggestNextQuestions:
    def test_empty_transcript_raises(self, mock_settings):
        with pytest.raises(ValueError, match="Transcript is required"):
            suggest_next_questions("   ", mock_settings)

    def test_fallback_all_collected(self, mock_settings):
        assert suggest_next_questions(COMPLETE_TRANSCRIPT, mock_settings) == PROCEED

    def test_fallback_one_missing(self, mock_settings):
        transcript = COMPLETE_TRANSCRIPT.replace(" and easy walking", "")
        assert suggest_next_questions(transcript, mock_settings) == "Let's ask about the physical activity level"

    def test_fallback_several_missing(self, mock_settings):
        text = suggest_next_questions("We are going to Paris in November.", mock_settings)
        assert text.startswith(MULTIPLE_PREFIX)
        assert "- Budget per Person" in text
        assert "- Destination" not in text

    def test_with_openai(self, keyed_settings):
        with patch("traveldesk.conversation.llm_utils.OpenAI") as mock_openai:
            client_instance = _openai_returning("```\nLet's ask about the budget per person\n```")
            mock_openai.return_value = client_instance
            text = suggest_next_questions("We are going to Paris", keyed_settings)

        assert text == "Let's ask about the budget per person"
        mock_openai.assert_called_once_with(api_key="test-key")
        kwargs = client_instance.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["messages"][0] == {"role": "system", "content": ASSISTANT_SYSTEM}
        assert "We are going to Paris" in kwargs["messages"][1]["content"]

    def test_openai_error_propagates(self, keyed_settings):
        with patch("traveldesk.conversation.llm_utils.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.side_effect = RuntimeError("rate limited")
            with pytest.raises(RuntimeError, match="rate limited"):
                suggest_next_questions("We are going to Paris", keyed_settings)


class TestSummarizeTranscript:
    def test_too_short_raises(self, mock_settings):
        with pytest.raises(ValueError, match="at least 50"):
            summarize_transcript("Paris in May.", mock_settings)

    def test_fallback_template(self, mock_settings):
        summary = summarize_transcript(COMPLETE_TRANSCRIPT, mock_settings)
        lines = summary.split("\n")
        assert lines[0] == SUMMARY_HEADER
        assert len(lines) == 13
        assert lines[1] == "- Destination: We are going to Paris from November 10th for 7 days."
        assert "- Budget per Person: Our budget is $200 per person." in lines
        assert f"- Group Type: {NOT_SPECIFIED}" in lines

    def test_fallback_truncates_long_sentences(self, mock_settings):
        transcript = "We are going to " + "Paris " * 40 + "next week."
        line = summarize_transcript(transcript, mock_settings).split("\n")[1]
        assert line.endswith("…")
        assert len(line) <= len("- Destination: ") + 120

    def test_with_openai(self, keyed_settings):
        with patch("traveldesk.conversation.llm_utils.OpenAI") as mock_openai:
            client_instance = _openai_returning(f"{SUMMARY_HEADER}\n- Destination: Paris\n")
            mock_openai.return_value = client_instance
            summary = summarize_transcript(COMPLETE_TRANSCRIPT, keyed_settings)

        assert summary == f"{SUMMARY_HEADER}\n- Destination: Paris"
        user_content = client_instance.chat.completions.create.call_args.kwargs["messages"][1]["content"]
        assert COMPLETE_TRANSCRIPT in user_content
        assert "- Special Requirements:" in user_content

    def test_empty_llm_output_falls_back(self, keyed_settings):
        with patch("traveldesk.conversation.llm_utils.OpenAI") as mock_openai:
            mock_openai.return_value = _openai_returning(None)
            summary = summarize_transcript(COMPLETE_TRANSCRIPT, keyed_settings)
        assert summary.startswith(SUMMARY_HEADER)
        assert "- Destination: We are going to Paris" in summary


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


class TestConversationSession:
    """Summary throttling and query composition; the summarizer is patched."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def session(self, mock_settings, clock):
        return ConversationSession(mock_settings, clock=clock)

    @pytest.fixture
    def summarize(self):
        with patch("traveldesk.conversation.session.summarize_transcript", return_value="SUMMARY") as mock_sum:
            yield mock_sum

    def test_transcript_joins_segments(self, session):
        session.add_segment(" We are going to Paris. ")
        session.add_segment("")
        session.add_segment("Three of us.")
        assert session.transcript == "We are going to Paris. Three of us."

    def test_short_transcript_is_skipped(self, session, summarize):
        session.add_segment("Paris in May.")
        assert session.maybe_summarize() is None
        summarize.assert_not_called()

    def test_unchanged_text_is_skipped(self, session, summarize, clock):
        session.add_segment(COMPLETE_TRANSCRIPT)
        assert session.maybe_summarize() == "SUMMARY"
        clock.now += 60
        assert session.maybe_summarize() is None
        assert summarize.call_count == 1

    def test_delay_window(self, session, summarize, clock):
        session.add_segment(COMPLETE_TRANSCRIPT)
        session.maybe_summarize()
        session.add_segment("Maybe a river cruise too.")
        clock.now += 2
        assert session.maybe_summarize() is None
        clock.now += 3
        assert session.maybe_summarize() == "SUMMARY"
        assert summarize.call_count == 2
        assert summarize.call_args[0][0].endswith("Maybe a river cruise too.")

    def test_force_bypasses_delay(self, session, summarize, clock):
        session.add_segment(COMPLETE_TRANSCRIPT)
        session.maybe_summarize()
        session.add_segment("One more thing.")
        assert session.maybe_summarize(force=True) == "SUMMARY"
        assert summarize.call_count == 2

    def test_build_search_query_summarizes_on_demand(self, session, summarize):
        session.add_segment(COMPLETE_TRANSCRIPT)
        assert session.build_search_query("Prefers mornings") == "SUMMARY\n\nStaff Notes:\nPrefers mornings"
        summarize.assert_called_once()

    def test_build_search_query_without_transcript(self, session, summarize):
        with pytest.raises(ValueError, match="conversation summary or transcript"):
            session.build_search_query()

    def test_failed_summary_can_be_retried(self, session):
        session.add_segment(COMPLETE_TRANSCRIPT)
        with patch(
            "traveldesk.conversation.session.summarize_transcript",
            side_effect=RuntimeError("rate limited"),
        ):
            with pytest.raises(RuntimeError, match="rate limited"):
                session.maybe_summarize(force=True)
        assert session.last_summary is None

        with patch("traveldesk.conversation.session.summarize_transcript", return_value="SUMMARY") as mock_sum:
            assert session.maybe_summarize() == "SUMMARY"
        mock_sum.assert_called_once()

    def test_search_query_after_failed_summary(self, session):
        session.add_segment(COMPLETE_TRANSCRIPT)
        with patch(
            "traveldesk.conversation.session.summarize_transcript",
            side_effect=RuntimeError("rate limited"),
        ):
            with pytest.raises(RuntimeError):
                session.maybe_summarize()

        with patch("traveldesk.conversation.session.summarize_transcript", return_value="SUMMARY"):
            assert session.build_search_query("notes") == "SUMMARY\n\nStaff Notes:\nnotes"

    def test_suggest(self, session):
        session.add_segment(COMPLETE_TRANSCRIPT)
        assert session.suggest() == PROCEED
        assert session.last_suggestion == PROCEED

    def test_reset(self, session, summarize):
        session.add_segment(COMPLETE_TRANSCRIPT)
        session.maybe_summarize()
        session.reset()
        assert session.transcript == ""
        assert session.last_summary is None
        session.add_segment(COMPLETE_TRANSCRIPT)
        assert session.maybe_summarize() == "SUMMARY"


class TestComposeSearchQuery:
    def test_without_notes(self):
        assert compose_search_query("  summary \n", "  ") == "summary"

    def test_with_notes(self):
        assert compose_search_query("summary", "VIP") == "summary\n\nStaff Notes:\nVIP"
