from typing import Optional, Sequence

from traveldesk.search.schemas import (
    GroundedGeneration,
    ImagePreview,
    PlatformResult,
    PlatformSpec,
    ResultMetadata,
    Source,
)


def build_references(sources: Sequence[Source]) -> str:
    """References block numbered 1..N locally; empty when there are no sources."""
    if not sources:
        return ""
    lines = [f"[{i}] [{s.title}]({s.url})" for i, s in enumerate(sources, start=1)]
    return "\n\n**References:**\n" + "\n".join(lines)


def build_text_with_citations(
    platform_name: str,
    body: str,
    sources: Sequence[Source],
    banner: Optional[str] = None,
) -> str:
    header = f"## {platform_name}\n"
    if banner:
        header += f"\n{banner}\n\n"
    return f"{header}{body.strip()}{build_references(sources)}"


def assemble_platform_result(
    platform: PlatformSpec,
    body: str,
    sources: Sequence[Source],
    images: Sequence[ImagePreview],
    generation: GroundedGeneration,
) -> PlatformResult:
    """
    Build the immutable result for one platform.

    Supports and query counts come from the single shared call, not from
    this platform.
    """
    response_text = body.strip()
    return PlatformResult(
        platform=platform.name,
        domain=platform.domain,
        response_text=response_text,
        text_with_citations=build_text_with_citations(platform.name, response_text, sources),
        sources=list(sources),
        images=list(images),
        metadata=ResultMetadata(
            grounding_chunks_count=len(sources),
            grounding_supports_count=generation.supports_count,
            web_search_queries_count=generation.web_search_queries_count,
        ),
    )
