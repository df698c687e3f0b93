"""
Activity search: Pydantic schemas for requests, per-platform results and responses.

Wire format is camelCase (responseText, textWithCitations, searchTime, ...);
Python attributes stay snake_case.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ----- Request -----


class ActivitySearchBody(CamelModel):
    """Raw request body; loose on purpose so validation owns the error shape."""

    query: Any = None
    include_images: Any = None


class SearchRequest(BaseModel):
    """Validated search request."""

    query: str = Field(..., min_length=1)
    include_images: bool = True


# ----- Platforms and grounding -----


class PlatformSpec(BaseModel):
    """One of the fixed travel platforms searched per request."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Header name the model must use, e.g. 'Trip.com'")
    domain: str = Field(..., description="Platform domain, e.g. 'trip.com'")

    @property
    def domain_stem(self) -> str:
        """Domain without its .com suffix; used for substring citation matching."""
        return self.domain.removesuffix(".com")

    @property
    def site_query(self) -> str:
        return f"site:{self.domain}"


class GroundingChunk(BaseModel):
    """One citation emitted by the grounded call for the whole response."""

    uri: str
    title: str
    domain: str


class GroundedGeneration(BaseModel):
    """Text plus grounding metadata from a single grounded generation call."""

    text: str
    chunks: list[GroundingChunk] = Field(default_factory=list)
    supports_count: int = 0
    web_search_queries_count: int = 0


# ----- Results -----


class Source(CamelModel):
    index: int = Field(..., ge=1, description="1-based position in the global chunk list")
    url: str
    title: str
    domain: str


class ImagePreview(CamelModel):
    url: str
    alt: str
    width: Optional[int] = None
    height: Optional[int] = None
    is_fallback: bool = False


class ResultMetadata(CamelModel):
    grounding_chunks_count: int = 0
    grounding_supports_count: int = 0
    web_search_queries_count: int = 0


class PlatformResult(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    platform: str
    domain: str
    response_text: str
    text_with_citations: str
    sources: list[Source] = Field(default_factory=list)
    images: list[ImagePreview] = Field(default_factory=list)
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)


class SearchResponse(CamelModel):
    success: bool = True
    query: str
    results: list[PlatformResult] = Field(default_factory=list)
    search_time: int = Field(..., ge=0, description="Milliseconds")
    search_time_seconds: float
    timestamp: str
    mock_mode: Optional[bool] = None


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    message: Optional[str] = None
    timestamp: Optional[str] = None
