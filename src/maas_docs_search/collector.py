"""Markdown file discovery for the documentation tree."""

import logging
import stat
import time
from pathlib import Path

from maas_docs_search.models import MarkdownFile

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = (".md", ".mdx")


class _DeadlineExceeded(Exception):
    pass


def collect_markdown_files(root: Path, deadline: float | None = None) -> list[MarkdownFile]:
    """Recursively collect markdown files under a documentation root.

    Files are returned in directory enumeration order. Unreadable
    directories and entries are logged and skipped, so a partial tree
    still yields whatever could be read. A directory reachable through
    several symlinks is collected under every path; only a link back to
    one of its own ancestors is skipped.

    Args:
        root: Documentation root directory.
        deadline: Optional time.monotonic() value after which the walk
            stops and returns what it has found so far.

    Returns:
        List of MarkdownFile entries with paths relative to root.
    """
    root = Path(root)
    files: list[MarkdownFile] = []

    try:
        root_stat = root.stat()
    except OSError as exc:
        logger.warning("Error reading directory %s: %s", root, exc)
        return files

    try:
        _walk(root, root, files, {(root_stat.st_dev, root_stat.st_ino)}, deadline)
    except _DeadlineExceeded:
        logger.warning("Directory scan exceeded its deadline, returning %d files", len(files))
    return files


def _walk(
    directory: Path,
    root: Path,
    files: list[MarkdownFile],
    ancestors: set[tuple[int, int]],
    deadline: float | None,
) -> None:
    """Append markdown files found under directory to files.

    Args:
        directory: Directory currently being listed.
        root: Documentation root used for relative paths.
        files: Accumulator for discovered files.
        ancestors: (device, inode) pairs of the directories on the current path.
        deadline: Optional time.monotonic() cut-off.
    """
    if deadline is not None and time.monotonic() > deadline:
        raise _DeadlineExceeded

    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.warning("Error reading directory %s: %s", directory, exc)
        return

    for entry in entries:
        try:
            # Follows symlinks, so linked directories are traversed too
            entry_stat = entry.stat()
        except OSError as exc:
            logger.warning("Error reading %s: %s", entry, exc)
            continue

        if stat.S_ISDIR(entry_stat.st_mode):
            key = (entry_stat.st_dev, entry_stat.st_ino)
            if key in ancestors:
                logger.warning("Skipping directory cycle at %s", entry)
                continue
            ancestors.add(key)
            try:
                _walk(entry, root, files, ancestors, deadline)
            finally:
                ancestors.discard(key)
        elif entry.suffix in MARKDOWN_EXTENSIONS:
            files.append(
                MarkdownFile(
                    path=entry,
                    name=entry.name,
                    relative_path=entry.relative_to(root).as_posix(),
                )
            )
