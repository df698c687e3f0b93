"""
Prompt for the single grounded call that covers every platform.

The partitioner depends on the literal `## <PlatformName>` headers requested
here; keep names in sync with PLATFORMS.
"""

from typing import Sequence

from traveldesk.search.platforms import PLATFORMS
from traveldesk.search.schemas import PlatformSpec

ACTIVITIES_PER_PLATFORM = 2

SEARCH_PROMPT_TEMPLATE = """Search for activities that match these requirements: "{query}"

Search the following platforms and return results for each:
{platform_lines}

IMPORTANT RULES:
- Each activity within a platform must be unique and different from each other
- Activities across different platforms should also be diverse and varied
- Avoid recommending the same or very similar activities across platforms
- Prioritize variety: if one platform suggests "Tokyo Disneyland", other platforms should suggest different types of activities

For each activity, include:
- Title
- Description
- Highlights - use bullet points
- Budget

CRITICAL FORMATTING RULES:
1. Use EXACTLY these headers on separate lines:
{header_lines}
2. Each platform must be in its own section with its own header
3. Do NOT combine platforms or use numbers in headers
4. Use bullet points (- or •) for Highlights to make them easy to read

Restrict your web searches to these queries: {site_queries}"""


def build_site_queries(platforms: Sequence[PlatformSpec] = PLATFORMS) -> list[str]:
    return [p.site_query for p in platforms]


def build_search_prompt(query: str, platforms: Sequence[PlatformSpec] = PLATFORMS) -> str:
    """Build the combined multi-platform search prompt for one query."""
    platform_lines = "\n".join(
        f"{i}. {p.name} ({p.site_query}) - Find {ACTIVITIES_PER_PLATFORM} DIFFERENT activities"
        for i, p in enumerate(platforms, start=1)
    )
    header_lines = "\n".join(f"   ## {p.name}" for p in platforms)
    return SEARCH_PROMPT_TEMPLATE.format(
        query=query.strip(),
        platform_lines=platform_lines,
        header_lines=header_lines,
        site_queries=", ".join(build_site_queries(platforms)),
    )
