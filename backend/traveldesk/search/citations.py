"""
Citation matcher: attribute grounding chunks of the shared call to platforms.

The grounded service does not partition citations per platform, so a chunk
belongs to a platform when its reported domain contains the platform's domain
stem ("klook" for klook.com). Substring matching is a known-lossy heuristic:
"tripadvisor.com" is claimed by Trip.com, and a chunk reported under a
redirect host like "vertexaisearch.cloud.google.com" is claimed by nobody.
"""

import logging
from typing import Sequence

from traveldesk.search.schemas import GroundingChunk, PlatformSpec, Source

logger = logging.getLogger(__name__)


def index_chunks(chunks: Sequence[GroundingChunk]) -> list[Source]:
    """Number chunks 1..N over the global (whole-response) order."""
    return [
        Source(index=i, url=chunk.uri, title=chunk.title, domain=chunk.domain)
        for i, chunk in enumerate(chunks, start=1)
    ]


def belongs_to(source: Source, platform: PlatformSpec) -> bool:
    stem = platform.domain_stem.lower()
    return bool(stem) and stem in (source.domain or "").lower()


def match_sources(sources: Sequence[Source], platform: PlatformSpec) -> list[Source]:
    """Sources attributed to one platform, keeping global order and index."""
    return [s for s in sources if belongs_to(s, platform)]


def unattributed_sources(sources: Sequence[Source], platforms: Sequence[PlatformSpec]) -> list[Source]:
    """Sources no platform claimed; reported so prompt drift is visible."""
    orphans = [s for s in sources if not any(belongs_to(s, p) for p in platforms)]
    if orphans:
        logger.info(
            "%d of %d grounding chunks matched no platform: %s",
            len(orphans),
            len(sources),
            ", ".join(s.domain for s in orphans),
        )
    return orphans
