"""Keyword search over the MaaS documentation tree."""

import logging
import time
from collections import Counter
from collections.abc import Iterable, Iterator
from pathlib import Path

from maas_docs_search.collector import MARKDOWN_EXTENSIONS, collect_markdown_files
from maas_docs_search.config import Settings
from maas_docs_search.exceptions import QueryValidationError
from maas_docs_search.indexer import DocumentIndex, read_markdown
from maas_docs_search.models import DocumentStats, MarkdownFile, SearchConfig, SearchResult
from maas_docs_search.parser import DocumentParser
from maas_docs_search.scorer import calculate_relevance, query_words

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
ALL_SECTIONS = "all"


class DocumentationSearch:
    """Ranks markdown documentation pages against keyword queries.

    Without an index every search re-reads the documentation tree. With a
    DocumentIndex the pages are scored from its in-memory snapshot.
    """

    def __init__(self, config: SearchConfig, index: DocumentIndex | None = None) -> None:
        """Initialise the search engine.

        Args:
            config: Documentation root, site URL and scan deadline.
            index: Optional pre-built document snapshot.
        """
        self.config = config
        self.index = index
        self.parser = DocumentParser(config.base_url)

    def search(
        self,
        query: str,
        section: str | None = ALL_SECTIONS,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[SearchResult]:
        """Search documentation pages.

        Args:
            query: Search query string.
            section: Section filter, or 'all' for every section.
            limit: Maximum number of results; values below 1 use the default.

        Returns:
            List of SearchResult instances ordered by relevance.

        Raises:
            QueryValidationError: If the query is empty.
        """
        if not isinstance(query, str) or not query.strip():
            msg = "Query must be a non-empty string"
            raise QueryValidationError(msg)
        if limit is None or limit < 1:
            limit = DEFAULT_LIMIT

        query_lower = query.lower()
        words = query_words(query_lower)
        results: list[SearchResult] = []

        try:
            for file, content in self._iter_documents():
                score = calculate_relevance(query_lower, words, content.lower())
                if score <= 0:
                    continue

                if section and section != ALL_SECTIONS:
                    if self.parser.extract_section(file.relative_path) != section:
                        continue

                results.append(self.parser.build_result(file, content, query_lower, score))
        except OSError:
            logger.exception("Error searching documentation")
            return []

        # list.sort is stable, ties keep enumeration order
        results.sort(key=lambda result: result.relevance_score, reverse=True)
        return results[:limit]

    def get_document(self, relative_path: str) -> str | None:
        """Return the raw markdown of a single page.

        Args:
            relative_path: Path relative to the documentation root.

        Returns:
            Markdown content, or None if the page does not exist or lies
            outside the documentation root.
        """
        if self.index is not None:
            return self.index.get(relative_path)

        root = self.config.docs_path.resolve()
        target = (root / relative_path).resolve()
        if not target.is_relative_to(root):
            logger.warning("Refusing path outside documentation root: %s", relative_path)
            return None
        if not target.is_file() or target.suffix not in MARKDOWN_EXTENSIONS:
            return None

        return read_markdown(MarkdownFile(path=target, name=target.name, relative_path=relative_path))

    def stats(self) -> DocumentStats:
        """Count the markdown pages in each section.

        Returns:
            DocumentStats with the total and a per-section breakdown.
        """
        files = self.index.files() if self.index is not None else collect_markdown_files(self.config.docs_path)
        sections = Counter(self.parser.extract_section(file.relative_path) for file in files)
        return DocumentStats(total=len(files), sections=dict(sections))

    def _iter_documents(self) -> Iterator[tuple[MarkdownFile, str]]:
        """Yield (file, content) pairs until the scan deadline passes."""
        deadline = None
        if self.config.scan_timeout > 0:
            deadline = time.monotonic() + self.config.scan_timeout

        documents: Iterable[tuple[MarkdownFile, str]]
        if self.index is not None:
            documents = self.index.documents()
        else:
            documents = self._read_documents(self.config.docs_path, deadline)

        for document in documents:
            if deadline is not None and time.monotonic() > deadline:
                logger.warning(
                    "Search scan exceeded %.1fs, ranking partial results",
                    self.config.scan_timeout,
                )
                return
            yield document

    @staticmethod
    def _read_documents(docs_path: Path, deadline: float | None) -> Iterator[tuple[MarkdownFile, str]]:
        for file in collect_markdown_files(docs_path, deadline):
            content = read_markdown(file)
            if content is not None:
                yield file, content


def create_searcher(settings: Settings) -> DocumentationSearch:
    """Build a search engine from application settings.

    Args:
        settings: Application settings.

    Returns:
        DocumentationSearch, backed by a freshly built DocumentIndex when
        document caching is enabled.
    """
    index = None
    if settings.cache_documents:
        index = DocumentIndex(settings.docs_path)
        index.rebuild()
    return DocumentationSearch(settings.search_config(), index=index)
