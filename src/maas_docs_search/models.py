"""Data models for MaaS documentation search."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class MarkdownFile:
    """A markdown file discovered under the documentation root."""

    path: Path
    name: str
    relative_path: str


@dataclass
class SearchConfig:
    """Configuration for a documentation search engine."""

    docs_path: Path
    base_url: str
    scan_timeout: float = 0.0

    def __post_init__(self) -> None:
        self.docs_path = Path(self.docs_path)
        self.base_url = self.base_url.rstrip("/")


@dataclass
class SearchResult:
    """Represents a search result."""

    title: str
    content: str
    url: str
    relevance_score: int
    section: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        """Return the result as a JSON-serialisable mapping.

        Returns:
            Dictionary keyed by result field name.
        """
        return asdict(self)


@dataclass
class DocumentStats:
    """Summary of the markdown files found under the documentation root."""

    total: int = 0
    sections: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the stats as a JSON-serialisable mapping."""
        return asdict(self)
