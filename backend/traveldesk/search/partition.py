"""
Response partitioner: split one grounded response into per-platform sections.

Matching is isolated in parse_sections() so the strategy (regex today) can be
swapped without touching callers. Output of the generative service is
unverified free text, so every mismatch is tolerated and logged instead of
raised: callers must treat the result as possibly incomplete.
"""

import logging
import re
from typing import NamedTuple, Sequence

from traveldesk.search.platforms import PLATFORMS, find_platform
from traveldesk.search.schemas import PlatformSpec

logger = logging.getLogger(__name__)


class Section(NamedTuple):
    name: str
    body: str


def _header_pattern(platforms: Sequence[PlatformSpec]) -> re.Pattern:
    names = "|".join(re.escape(p.name) for p in platforms)
    # Header must start its line; name must not run on into another word
    return re.compile(rf"^[ \t]*##[ \t]*({names})(?!\w)", re.IGNORECASE | re.MULTILINE)


def parse_sections(text: str, platforms: Sequence[PlatformSpec] = PLATFORMS) -> list[Section]:
    """
    Split text on `## <PlatformName>` lines, in order of appearance.

    re.split with one capture group yields [pre, name1, body1, name2, body2, ...];
    the preamble before the first header is discarded.
    """
    if not text or not platforms:
        return []
    parts = _header_pattern(platforms).split(text)
    sections: list[Section] = []
    for i in range(1, len(parts), 2):
        body = parts[i + 1] if i + 1 < len(parts) else ""
        sections.append(Section(name=parts[i].strip(), body=body))
    return sections


def partition_response(
    text: str,
    platforms: Sequence[PlatformSpec] = PLATFORMS,
) -> list[tuple[PlatformSpec, str]]:
    """
    Resolve parsed sections against the configured platforms.

    Returns (platform, trimmed body) pairs in section order, at most one per
    platform. Unknown names are dropped, repeated headers keep the first
    section, and platforms absent from the text are simply not returned.
    """
    resolved: list[tuple[PlatformSpec, str]] = []
    seen: set[str] = set()

    for section in parse_sections(text, platforms):
        platform = find_platform(section.name, platforms)
        if platform is None:
            logger.info("Ignoring unrecognized platform section %r", section.name)
            continue
        if platform.name in seen:
            logger.warning("Duplicate section for %s in generated text; keeping the first", platform.name)
            continue
        seen.add(platform.name)
        resolved.append((platform, section.body.strip()))

    for platform in platforms:
        if platform.name not in seen:
            logger.warning("Generated text has no section for %s", platform.name)

    return resolved
