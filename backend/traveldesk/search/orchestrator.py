"""
Grounded multi-platform search orchestrator.

One grounded call covers every platform; its text is partitioned per
platform, citations are matched by domain stem, previews are fetched for the
matched URLs, and one PlatformResult is assembled per recognized section.
"""

import logging
import time
from typing import Sequence

from traveldesk.config import Settings
from traveldesk.search.assembler import assemble_platform_result
from traveldesk.search.citations import index_chunks, match_sources, unattributed_sources
from traveldesk.search.clients import generate_grounded
from traveldesk.search.images import enrich_images
from traveldesk.search.mock_data import generate_mock_response
from traveldesk.search.partition import partition_response
from traveldesk.search.platforms import PLATFORMS
from traveldesk.search.prompt import build_search_prompt
from traveldesk.search.schemas import (
    ImagePreview,
    PlatformResult,
    PlatformSpec,
    SearchRequest,
    SearchResponse,
    Source,
)
from traveldesk.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


def _fetch_images(
    sources_by_platform: dict[str, list[Source]],
    settings: Settings,
) -> dict[str, list[ImagePreview]]:
    urls_by_platform = {name: [s.url for s in sources] for name, sources in sources_by_platform.items() if sources}
    if not urls_by_platform:
        return {}
    total = sum(len(urls) for urls in urls_by_platform.values())
    logger.info("Fetching %d preview images across %d platforms", total, len(urls_by_platform))
    return enrich_images(
        urls_by_platform,
        max_workers=settings.image_fetch_max_workers,
        timeout=settings.image_fetch_timeout_seconds,
    )


def run_activity_search(
    request: SearchRequest,
    settings: Settings,
    platforms: Sequence[PlatformSpec] = PLATFORMS,
) -> SearchResponse:
    """
    Run one activity search.

    In mock mode the grounded backend is bypassed entirely. Otherwise a
    failing generation call raises UpstreamGenerationError, while image
    failures only shorten a platform's image list.
    """
    if settings.mock_mode:
        logger.info("Returning mock data (MOCK_MODE enabled)")
        return generate_mock_response(request.query, timestamp=utc_now_iso())

    started = time.monotonic()
    logger.info("Searching %d platforms in one request (include_images=%s)", len(platforms), request.include_images)

    prompt = build_search_prompt(request.query, platforms)
    generation = generate_grounded(prompt, settings)

    sections = partition_response(generation.text, platforms)
    all_sources = index_chunks(generation.chunks)
    unattributed_sources(all_sources, platforms)

    sources_by_platform = {platform.name: match_sources(all_sources, platform) for platform, _ in sections}
    for name, sources in sources_by_platform.items():
        logger.info("%s: %d sources", name, len(sources))

    images_by_platform: dict[str, list[ImagePreview]] = {}
    if request.include_images:
        images_by_platform = _fetch_images(sources_by_platform, settings)

    results: list[PlatformResult] = [
        assemble_platform_result(
            platform,
            body,
            sources_by_platform[platform.name],
            images_by_platform.get(platform.name, []),
            generation,
        )
        for platform, body in sections
    ]

    search_time = int((time.monotonic() - started) * 1000)
    logger.info("Completed search for %d platforms in %dms", len(results), search_time)

    return SearchResponse(
        success=True,
        query=request.query,
        results=results,
        search_time=search_time,
        search_time_seconds=round(search_time / 1000, 2),
        timestamp=utc_now_iso(),
    )
