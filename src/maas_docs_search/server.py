"""FastMCP server exposing MaaS documentation search."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

from fastmcp import FastMCP

from maas_docs_search.config import Settings
from maas_docs_search.exceptions import DocsSearchError, QueryValidationError
from maas_docs_search.schemas import validate_search
from maas_docs_search.search import DocumentationSearch, create_searcher

logger = logging.getLogger(__name__)

SERVER_NAME = "LanOnasis Documentation"
SEARCH_TOOL_NAME = "search_lanonasis_docs"


def _error_payload(code: str, message: str) -> dict[str, Any]:
    return {"success": False, "error": {"code": code, "message": message}}


def search_payload(
    searcher: DocumentationSearch,
    settings: Settings,
    query: str,
    section: str = "all",
    limit: int | str = 10,
) -> dict[str, Any]:
    """Run a search and shape the tool response.

    Args:
        searcher: Search engine to query.
        settings: Settings providing the limit bounds.
        query: Search query for documentation.
        section: Section filter: api, guides, sdks or all.
        limit: Maximum number of results to return.

    Returns:
        Response payload with results and search metadata, or an error payload.
    """
    try:
        params = validate_search(
            {"query": query, "section": section, "limit": limit},
            settings.max_limit,
            settings.default_limit,
        )
    except QueryValidationError as exc:
        return _error_payload(exc.code, str(exc))

    results = searcher.search(params.query, params.section, params.limit)
    return {
        "success": True,
        "query": params.query,
        "total_found": len(results),
        "results": [result.to_dict() for result in results],
        "search_metadata": {
            "section_filter": params.section,
            "limit": params.limit,
            "search_timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }


def page_payload(searcher: DocumentationSearch, path: str) -> dict[str, Any]:
    """Fetch one documentation page for the tool response.

    Args:
        searcher: Search engine owning the documentation root.
        path: Page path relative to the documentation root.

    Returns:
        Payload with the page URL and markdown, or an error payload.
    """
    if not path or not path.strip():
        return _error_payload(QueryValidationError.code, "Path cannot be empty")

    content = searcher.get_document(path)
    if content is None:
        return _error_payload("NOT_FOUND", f"Documentation page not found: {path}")

    return {
        "success": True,
        "path": path,
        "url": searcher.parser.compute_url(path),
        "title": searcher.parser.extract_title(content) or path.rsplit("/", 1)[-1],
        "content": content,
    }


def create_server(settings: Settings) -> FastMCP:
    """Build the MCP server and its search engine.

    Args:
        settings: Application settings.

    Returns:
        FastMCP server with the documentation tools registered.
    """
    searcher = create_searcher(settings)
    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            f"Search the Memory as a Service (MaaS) documentation. Call {SEARCH_TOOL_NAME} "
            "with a question, then get_documentation_page to read a full page."
        ),
    )

    @mcp.tool(name=SEARCH_TOOL_NAME)
    def search_documentation(query: str, section: str = "all", limit: int = 10) -> dict[str, Any]:
        """Search LanOnasis documentation for the Memory as a Service (MaaS) platform.

        Args:
            query: Search query for documentation
            section: Filter by section: api, guides, sdks, or all
            limit: Maximum number of results to return (1-50)
        """
        return search_payload(searcher, settings, query, section, limit)

    @mcp.tool()
    def get_documentation_page(path: str) -> dict[str, Any]:
        """Return the full markdown of a documentation page.

        Args:
            path: Page path relative to the docs root, e.g. 'api/overview.md'
        """
        return page_payload(searcher, path)

    @mcp.tool()
    def list_documentation_sections() -> dict[str, Any]:
        """List documentation sections with their page counts."""
        return searcher.stats().to_dict()

    return mcp


def main() -> None:
    """Run the documentation MCP server over stdio."""
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        mcp = create_server(settings)
    except DocsSearchError as exc:
        logger.error("Failed to start server: %s", exc)
        sys.exit(1)

    logger.info("Serving documentation from %s", settings.docs_path)
    mcp.run()


if __name__ == "__main__":
    main()
