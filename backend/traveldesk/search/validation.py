from typing import Any

from traveldesk.errors import ValidationError
from traveldesk.search.schemas import ActivitySearchBody, SearchRequest

QUERY_REQUIRED = "Query is required"

_FALSE_STRINGS = {"", "false", "0", "no", "off"}


def normalize_include_images(value: Any) -> bool:
    """Coerce the loosely typed includeImages flag; absent means True."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def validate_search_request(body: Any) -> SearchRequest:
    """
    Raise ValidationError unless the body carries a non-blank string query.

    Accepts the parsed JSON body as-is; a body that is not a JSON object has no
    query and is rejected the same way as a missing one.
    """
    if isinstance(body, dict):
        body = ActivitySearchBody.model_validate(body)
    if not isinstance(body, ActivitySearchBody):
        raise ValidationError(QUERY_REQUIRED)
    query = body.query
    if not isinstance(query, str) or not query.strip():
        raise ValidationError(QUERY_REQUIRED)
    return SearchRequest(
        query=query.strip(),
        include_images=normalize_include_images(body.include_images),
    )
