"""
Grounded generation client: Gemini on Vertex AI with Google Search grounding.

Uses GCP_PROJECT / GCP_LOCATION from settings. Reuses one genai.Client per
(project, location).
"""

import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from traveldesk.config import Settings
from traveldesk.errors import ConfigurationError, UpstreamGenerationError
from traveldesk.search.schemas import GroundedGeneration, GroundingChunk

logger = logging.getLogger(__name__)

_client: Optional[genai.Client] = None
_client_key: Optional[tuple[str, str]] = None


def _get_client(settings: Settings) -> genai.Client:
    global _client, _client_key
    if not settings.gcp_project or not settings.gcp_location:
        raise ConfigurationError("GCP_PROJECT and GCP_LOCATION are required for grounded search")
    key = (settings.gcp_project, settings.gcp_location)
    if _client is None or _client_key != key:
        _client = genai.Client(vertexai=True, project=settings.gcp_project, location=settings.gcp_location)
        _client_key = key
    return _client


def _grounding_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        tools=[types.Tool(google_search=types.GoogleSearch())],
    )


def _to_chunk(raw: Any) -> GroundingChunk:
    web = getattr(raw, "web", None)
    return GroundingChunk(
        uri=getattr(web, "uri", None) or "No URI",
        title=getattr(web, "title", None) or "No title",
        domain=getattr(web, "domain", None) or "Unknown",
    )


def parse_grounded_response(response: Any) -> GroundedGeneration:
    """Flatten an SDK response into text plus whole-response grounding metadata."""
    text = getattr(response, "text", None) or ""
    candidates = getattr(response, "candidates", None) or []
    metadata = getattr(candidates[0], "grounding_metadata", None) if candidates else None
    if metadata is None:
        return GroundedGeneration(text=text)
    return GroundedGeneration(
        text=text,
        chunks=[_to_chunk(c) for c in (metadata.grounding_chunks or [])],
        supports_count=len(metadata.grounding_supports or []),
        web_search_queries_count=len(metadata.web_search_queries or []),
    )


def generate_grounded(prompt: str, settings: Settings) -> GroundedGeneration:
    """
    Run one grounded generation call. Any SDK or transport failure becomes
    UpstreamGenerationError carrying the upstream message.
    """
    client = _get_client(settings)
    try:
        response = client.models.generate_content(
            model=settings.model_grounded_search,
            contents=prompt,
            config=_grounding_config(),
        )
    except Exception as e:
        raise UpstreamGenerationError(str(e) or type(e).__name__) from e

    generation = parse_grounded_response(response)
    logger.info(
        "Grounded response: %d characters, %d grounding chunks",
        len(generation.text),
        len(generation.chunks),
    )
    return generation
