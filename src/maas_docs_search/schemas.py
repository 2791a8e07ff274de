"""Pydantic request and response models for documentation search."""

import re
from typing import Any, Literal

from pydantic import BaseModel, ValidationError, field_validator

from maas_docs_search.exceptions import QueryValidationError

VALID_SECTIONS = ("all", "api", "guides", "sdks")
DEFAULT_LIMIT = 10

QUERY_MESSAGE = "Query parameter is required and must be a non-empty string"
SECTION_MESSAGE = f"Section must be one of: {', '.join(VALID_SECTIONS)}"

LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_limit(value: Any) -> int:
    """Parse a limit the way the site's JavaScript parseInt does.

    Leading digits are used and anything after them is ignored, so "5.5"
    and "10abc" give 5 and 10. Empty values give the default.

    Args:
        value: Raw limit from a query string or JSON body.

    Returns:
        Parsed integer limit.

    Raises:
        ValueError: If the value has no leading integer.
    """
    if value is None or value == "" or value == 0:
        return DEFAULT_LIMIT
    if isinstance(value, bool):
        raise ValueError("limit must be a number")
    match = LEADING_INT.match(str(value))
    if not match:
        raise ValueError("limit must be a number")
    return int(match.group(1))


class SearchRequest(BaseModel):
    """Validated documentation search parameters."""

    query: str
    section: Literal["all", "api", "guides", "sdks"] = "all"
    limit: int = DEFAULT_LIMIT

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(QUERY_MESSAGE)
        return value

    @field_validator("section", mode="before")
    @classmethod
    def _section_default(cls, value: Any) -> Any:
        return value or "all"

    @field_validator("limit", mode="before")
    @classmethod
    def _limit_parse(cls, value: Any) -> int:
        return parse_limit(value)


class SearchResultItem(BaseModel):
    title: str
    content: str
    url: str
    relevance_score: int
    section: str
    type: str


class SearchMetadata(BaseModel):
    section_filter: str
    limit: int
    search_timestamp: str


class SearchData(BaseModel):
    query: str
    results: list[SearchResultItem]
    total: int
    metadata: SearchMetadata


class SearchResponse(BaseModel):
    success: bool = True
    data: SearchData


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorDetail


def validation_message(exc: ValidationError, max_limit: int = 50) -> str:
    """Turn the first pydantic error into the endpoint's error message.

    Args:
        exc: Validation error raised by SearchRequest.
        max_limit: Largest accepted limit, used in the limit message.

    Returns:
        Human readable message naming the offending parameter.
    """
    errors = exc.errors()
    field = errors[0]["loc"][-1] if errors and errors[0]["loc"] else "query"
    if field == "section":
        return SECTION_MESSAGE
    if field == "limit":
        return limit_message(max_limit)
    return QUERY_MESSAGE


def limit_message(max_limit: int) -> str:
    return f"Limit must be a number between 1 and {max_limit}"


def validate_search(
    values: dict[str, Any],
    max_limit: int = 50,
    default_limit: int = DEFAULT_LIMIT,
) -> SearchRequest:
    """Validate raw search parameters.

    Args:
        values: Mapping with 'query', 'section' and 'limit' keys.
        max_limit: Largest accepted limit.
        default_limit: Limit used when none is supplied.

    Returns:
        SearchRequest with the validated values.

    Raises:
        QueryValidationError: If any parameter is missing or out of range.
    """
    if values.get("limit") in (None, "", 0):
        values = {**values, "limit": default_limit}

    try:
        request = SearchRequest.model_validate(values)
    except ValidationError as exc:
        raise QueryValidationError(validation_message(exc, max_limit)) from exc

    if not 1 <= request.limit <= max_limit:
        raise QueryValidationError(limit_message(max_limit))
    return request
