"""In-memory snapshot of the MaaS documentation tree."""

import logging
from collections.abc import Iterator
from pathlib import Path

from maas_docs_search.collector import collect_markdown_files
from maas_docs_search.models import MarkdownFile

logger = logging.getLogger(__name__)


def read_markdown(file: MarkdownFile) -> str | None:
    """Read a markdown file, logging and returning None on failure.

    Args:
        file: File to read.

    Returns:
        File content, or None if the file could not be read.
    """
    try:
        return file.path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Error processing file %s: %s", file.path, exc)
        return None


class DocumentIndex:
    """Holds the content of every markdown file under a documentation root.

    The snapshot is only as fresh as the last rebuild(); nothing is written
    to disk.
    """

    def __init__(self, docs_path: Path) -> None:
        """Initialise an empty index for the given documentation root.

        Args:
            docs_path: Path to the documentation directory.
        """
        self.docs_path = Path(docs_path)
        self._documents: dict[str, tuple[MarkdownFile, str]] = {}

    def rebuild(self) -> int:
        """Discard the snapshot and reload every markdown file.

        Returns:
            Number of documents loaded.
        """
        documents: dict[str, tuple[MarkdownFile, str]] = {}
        files = collect_markdown_files(self.docs_path)
        logger.info("Found %d markdown files to index", len(files))

        for file in files:
            content = read_markdown(file)
            if content is not None:
                documents[file.relative_path] = (file, content)
                logger.debug("Indexed: %s", file.relative_path)

        self._documents = documents
        logger.info("Successfully indexed %d documents", len(documents))
        return len(documents)

    def documents(self) -> Iterator[tuple[MarkdownFile, str]]:
        """Iterate over (file, content) pairs in collection order."""
        return iter(list(self._documents.values()))

    def files(self) -> list[MarkdownFile]:
        """Return the indexed files in collection order."""
        return [file for file, _ in self._documents.values()]

    def get(self, relative_path: str) -> str | None:
        """Return the content of an indexed page.

        Args:
            relative_path: Path relative to the documentation root.

        Returns:
            Markdown content or None if the page is not indexed.
        """
        entry = self._documents.get(relative_path)
        return entry[1] if entry else None

    def __len__(self) -> int:
        return len(self._documents)
