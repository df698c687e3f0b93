"""Pytest fixtures for search and conversation tests."""

import pytest

from traveldesk.config import Settings
from traveldesk.search.schemas import GroundedGeneration, GroundingChunk


@pytest.fixture
def live_settings():
    return Settings(
        mock_mode=False,
        gcp_project="test-project",
        gcp_location="us-central1",
        openai_api_key="",
        image_fetch_max_workers=4,
        image_fetch_timeout_seconds=1.0,
    )


@pytest.fixture
def mock_settings():
    return Settings(mock_mode=True, gcp_project="", gcp_location="", openai_api_key="")


@pytest.fixture
def klook_body():
    return "### 1. Eiffel Tower Summit\n- Priority access\n\n**Budget:** $50"


@pytest.fixture
def trip_body():
    return "### 1. Disneyland Paris\n- Two parks\n\n**Budget:** $90"


@pytest.fixture
def expedia_body():
    return "### 1. Pastry Class\n- Hands-on\n\n**Budget:** $85"


@pytest.fixture
def generated_text_all(klook_body, trip_body, expedia_body):
    """Model output with all three headers in order, plus a preamble."""
    return (
        "Here are some activities for your trip.\n\n"
        f"## Klook\n{klook_body}\n\n"
        f"## Trip.com\n{trip_body}\n\n"
        f"## Expedia\n{expedia_body}\n"
    )


@pytest.fixture
def generated_text_partial(klook_body, expedia_body):
    """Model output that dropped the Trip.com section."""
    return f"## Klook\n{klook_body}\n\n## Expedia\n{expedia_body}\n"


@pytest.fixture
def grounding_chunks():
    return [
        GroundingChunk(uri="https://www.klook.com/activity/1/", title="Eiffel - Klook", domain="www.klook.com"),
        GroundingChunk(uri="https://www.trip.com/things/2/", title="Disney - Trip.com", domain="trip.com"),
        GroundingChunk(uri="https://www.klook.com/activity/3/", title="Louvre - Klook", domain="klook.com"),
        GroundingChunk(uri="https://example.org/blog", title="Travel blog", domain="example.org"),
        GroundingChunk(uri="https://www.expedia.com/things/5/", title="Pastry - Expedia", domain="expedia.com"),
    ]


@pytest.fixture
def generation(generated_text_all, grounding_chunks):
    return GroundedGeneration(
        text=generated_text_all,
        chunks=grounding_chunks,
        supports_count=7,
        web_search_queries_count=3,
    )


@pytest.fixture
def og_html():
    return """<html><head>
        <title>Fallback title</title>
        <meta property="og:title" content="Eiffel Tower Summit Access" />
        <meta property="og:image" content="https://cdn.example.com/eiffel.jpg" />
        <meta property="og:image" content="https://cdn.example.com/second.jpg" />
        <meta property="og:image:width" content="1200" />
        <meta property="og:image:height" content="630" />
    </head><body></body></html>"""
