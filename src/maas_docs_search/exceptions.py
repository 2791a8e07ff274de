"""Custom exceptions for MaaS documentation search."""


class DocsSearchError(Exception):
    """Base exception for documentation search errors."""

    code = "INTERNAL_ERROR"


class QueryValidationError(DocsSearchError):
    """Search parameters failed validation."""

    code = "VALIDATION_ERROR"


class ConfigurationError(DocsSearchError):
    """Error in configuration."""
