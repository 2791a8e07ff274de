"""Tests for search request validation."""

import pytest

from maas_docs_search.exceptions import QueryValidationError
from maas_docs_search.schemas import parse_limit, validate_search


def test_validate_defaults() -> None:
    """Test section and limit defaults."""
    request = validate_search({"query": "memory"})

    assert request.query == "memory"
    assert request.section == "all"
    assert request.limit == 10


def test_validate_default_limit_override() -> None:
    """Test the caller's default limit is used when none is given."""
    assert validate_search({"query": "memory", "limit": None}, default_limit=4).limit == 4


@pytest.mark.parametrize(("value", "expected"), [("25", 25), ("5.5", 5), (" 12px", 12), (8.9, 8), (None, 10), ("", 10)])
def test_parse_limit(value: object, expected: int) -> None:
    """Test limits keep only their leading integer."""
    assert parse_limit(value) == expected


@pytest.mark.parametrize("value", ["ten", "abc5", True])
def test_parse_limit_invalid(value: object) -> None:
    """Test values without a leading integer are rejected."""
    with pytest.raises(ValueError, match="limit"):
        parse_limit(value)


@pytest.mark.parametrize(
    "values",
    [
        {},
        {"query": ""},
        {"query": "   "},
        {"query": 42},
        {"query": "memory", "section": "blog"},
        {"query": "memory", "limit": "51"},
        {"query": "memory", "limit": "-1"},
        {"query": "memory", "limit": "ten"},
    ],
)
def test_validate_invalid(values: dict) -> None:
    """Test invalid parameters raise a validation error."""
    with pytest.raises(QueryValidationError):
        validate_search(values)


def test_validate_max_limit() -> None:
    """Test the maximum limit is configurable."""
    with pytest.raises(QueryValidationError, match="between 1 and 5"):
        validate_search({"query": "memory", "limit": 6}, max_limit=5)
