"""Configuration settings for the MaaS documentation search server."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from dotenv import load_dotenv

from maas_docs_search.exceptions import ConfigurationError
from maas_docs_search.models import SearchConfig

load_dotenv()

logger = logging.getLogger(__name__)

T = TypeVar("T", int, float)


def _get_numeric_env(key: str, default: T, min_val: T) -> T:
    """Read a numeric environment variable, falling back on bad values."""
    conv_func = type(default)
    value = os.getenv(key, str(default))
    try:
        result = conv_func(value)
    except ValueError:
        logger.error("Invalid %s=%s, using default %s", key, value, default)
        return default
    if result < min_val:
        logger.warning("%s=%s below minimum %s, using %s", key, value, min_val, min_val)
        return min_val
    return result


def _get_bool_env(key: str, default: bool) -> bool:
    return os.getenv(key, str(default)).strip().lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    docs_path: Path = field(default_factory=lambda: Path(os.getenv("DOCS_PATH", "docs")))
    base_url: str = field(default_factory=lambda: os.getenv("DOCS_BASE_URL", "https://docs.lanonasis.com"))

    # Search limits
    default_limit: int = field(default_factory=lambda: _get_numeric_env("DOCS_DEFAULT_LIMIT", 10, min_val=1))
    max_limit: int = field(default_factory=lambda: _get_numeric_env("DOCS_MAX_LIMIT", 50, min_val=1))

    # Seconds allowed for one scan of the tree, 0 disables the deadline
    scan_timeout: float = field(default_factory=lambda: _get_numeric_env("DOCS_SCAN_TIMEOUT", 0.0, min_val=0.0))

    # Keep page content in memory instead of re-reading it per search
    cache_documents: bool = field(default_factory=lambda: _get_bool_env("DOCS_CACHE_DOCUMENTS", False))

    # HTTP search endpoint
    api_host: str = field(default_factory=lambda: os.getenv("DOCS_API_HOST", "127.0.0.1"))
    api_port: int = field(default_factory=lambda: _get_numeric_env("DOCS_API_PORT", 8000, min_val=1))

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def search_config(self) -> SearchConfig:
        """Build the search engine configuration.

        Returns:
            SearchConfig for DocumentationSearch.

        Raises:
            ConfigurationError: If no documentation base URL is configured.
        """
        if not self.base_url.strip():
            msg = "DOCS_BASE_URL must not be empty"
            raise ConfigurationError(msg)
        return SearchConfig(
            docs_path=self.docs_path,
            base_url=self.base_url.strip(),
            scan_timeout=self.scan_timeout,
        )
