"""Activity search: grounded multi-platform search and result assembly."""

from .citations import index_chunks, match_sources
from .images import enrich_images, fetch_og_image
from .mock_data import generate_mock_response
from .orchestrator import run_activity_search
from .partition import parse_sections, partition_response
from .platforms import PLATFORMS, find_platform
from .prompt import build_search_prompt
from .schemas import (
    ActivitySearchBody,
    GroundedGeneration,
    GroundingChunk,
    ImagePreview,
    PlatformResult,
    PlatformSpec,
    SearchRequest,
    SearchResponse,
    Source,
)
from .validation import validate_search_request

__all__ = [
    "build_search_prompt",
    "enrich_images",
    "fetch_og_image",
    "find_platform",
    "generate_mock_response",
    "index_chunks",
    "match_sources",
    "parse_sections",
    "partition_response",
    "run_activity_search",
    "validate_search_request",
    "PLATFORMS",
    "ActivitySearchBody",
    "GroundedGeneration",
    "GroundingChunk",
    "ImagePreview",
    "PlatformResult",
    "PlatformSpec",
    "SearchRequest",
    "SearchResponse",
    "Source",
]
