"""Parser for MaaS documentation markdown files."""

import re

from maas_docs_search.models import MarkdownFile, SearchResult

TITLE_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)
SENTENCE_DELIMITERS = re.compile(r"[.!?]+")
EXTENSION_PATTERN = re.compile(r"\.mdx?$")
INDEX_PATTERN = re.compile(r"/index$")

EXCERPT_LENGTH = 200
MIN_FALLBACK_SENTENCE = 20
ROOT_SECTION = "general"

# Checked in order, first match wins
DOC_TYPES = (
    ("api/", "api"),
    ("sdk/", "sdk"),
    ("guide/", "guide"),
)
DEFAULT_DOC_TYPE = "doc"


class DocumentParser:
    """Extracts search result metadata from markdown documentation."""

    def __init__(self, base_url: str) -> None:
        """Initialise parser with the documentation site URL.

        Args:
            base_url: Site URL that relative page paths are joined to.
        """
        self.base_url = base_url.rstrip("/")

    def build_result(self, file: MarkdownFile, content: str, query: str, score: int) -> SearchResult:
        """Build a search result for a scored markdown file.

        Args:
            file: File the content was read from.
            content: Raw markdown content.
            query: Lower-cased query string.
            score: Relevance score of the file for the query.

        Returns:
            SearchResult instance.
        """
        return SearchResult(
            title=self.extract_title(content) or file.name,
            content=self.extract_excerpt(content, query),
            url=self.compute_url(file.relative_path),
            relevance_score=score,
            section=self.extract_section(file.relative_path),
            type=self.extract_type(file.relative_path),
        )

    def extract_title(self, content: str) -> str | None:
        """Extract the first level-1 heading.

        Args:
            content: Raw markdown content.

        Returns:
            Heading text, or None if the document has no level-1 heading.
        """
        match = TITLE_PATTERN.search(content)
        if match:
            return match.group(1).strip()
        return None

    def extract_excerpt(self, content: str, query: str) -> str:
        """Extract the sentence that contains the first query match.

        Args:
            content: Raw markdown content.
            query: Lower-cased query string.

        Returns:
            Excerpt of at most 200 characters plus an ellipsis, or an
            empty string if no usable sentence exists.
        """
        sentences = SENTENCE_DELIMITERS.split(content)
        query_index = content.lower().find(query)

        if query_index != -1:
            offset = 0
            for sentence in sentences:
                if offset <= query_index <= offset + len(sentence):
                    return self._truncate(sentence.strip())
                offset += len(sentence) + 1

        for sentence in sentences:
            stripped = sentence.strip()
            if len(stripped) > MIN_FALLBACK_SENTENCE:
                return stripped[:EXCERPT_LENGTH] + "..."
        return ""

    def extract_section(self, relative_path: str) -> str:
        """Extract the top-level section from the path.

        Args:
            relative_path: Path relative to the documentation root.

        Returns:
            Section name (first directory component or 'general').
        """
        parts = relative_path.split("/")
        if len(parts) > 1:
            return parts[0]
        return ROOT_SECTION

    def extract_type(self, relative_path: str) -> str:
        """Classify a page as api, sdk, guide or doc from its path."""
        for marker, doc_type in DOC_TYPES:
            if marker in relative_path:
                return doc_type
        return DEFAULT_DOC_TYPE

    def compute_url(self, relative_path: str) -> str:
        """Compute the documentation site URL.

        Args:
            relative_path: Path relative to the documentation root.

        Returns:
            Full URL to the documentation page.
        """
        url_path = EXTENSION_PATTERN.sub("", relative_path)
        url_path = INDEX_PATTERN.sub("", url_path)
        return f"{self.base_url}/{url_path}"

    @staticmethod
    def _truncate(text: str) -> str:
        if len(text) > EXCERPT_LENGTH:
            return text[:EXCERPT_LENGTH] + "..."
        return text
