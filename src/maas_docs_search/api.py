"""FastAPI application serving the documentation search endpoint."""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from maas_docs_search.config import Settings
from maas_docs_search.exceptions import QueryValidationError
from maas_docs_search.schemas import (
    QUERY_MESSAGE,
    ErrorDetail,
    ErrorResponse,
    SearchData,
    SearchMetadata,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
    validate_search,
)
from maas_docs_search.search import DocumentationSearch, create_searcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


def error_response(status: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status, content=body.model_dump())


def get_searcher(request: Request) -> DocumentationSearch:
    """Dependency returning the application's search engine."""
    return request.app.state.searcher


def get_settings(request: Request) -> Settings:
    """Dependency returning the application's settings."""
    return request.app.state.settings


def run_search(searcher: DocumentationSearch, params: SearchRequest) -> SearchResponse | JSONResponse:
    """Run a validated search and wrap it in the response envelope.

    Args:
        searcher: Search engine to query.
        params: Validated search parameters.

    Returns:
        SearchResponse, or a 500 error response if the engine fails.
    """
    try:
        results = searcher.search(params.query, params.section, params.limit)
    except Exception:
        logger.exception("Search error")
        return error_response(500, "INTERNAL_ERROR", "An error occurred while searching documentation")

    return SearchResponse(
        data=SearchData(
            query=params.query,
            results=[SearchResultItem(**result.to_dict()) for result in results],
            total=len(results),
            metadata=SearchMetadata(
                section_filter=params.section,
                limit=params.limit,
                search_timestamp=datetime.now(timezone.utc).isoformat(),
            ),
        )
    )


@router.get("", response_model=SearchResponse)
def search_get(
    q: str | None = Query(None),
    query: str | None = Query(None),
    section: str | None = Query(None),
    limit: str | None = Query(None),
    searcher: DocumentationSearch = Depends(get_searcher),
    settings: Settings = Depends(get_settings),
):
    """Search documentation with query string parameters."""
    values = {"query": q or query, "section": section, "limit": limit}
    params = validate_search(values, settings.max_limit, settings.default_limit)
    return run_search(searcher, params)


@router.post("", response_model=SearchResponse)
def search_post(
    body: dict[str, Any] | None = Body(None),
    searcher: DocumentationSearch = Depends(get_searcher),
    settings: Settings = Depends(get_settings),
):
    """Search documentation with a JSON body."""
    body = body or {}
    values = {
        "query": body.get("query") or body.get("q"),
        "section": body.get("section"),
        "limit": body.get("limit"),
    }
    params = validate_search(values, settings.max_limit, settings.default_limit)
    return run_search(searcher, params)


async def _query_validation_handler(request: Request, exc: QueryValidationError) -> JSONResponse:
    return error_response(400, exc.code, str(exc))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, QueryValidationError.code, QUERY_MESSAGE)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        return error_response(405, "METHOD_NOT_ALLOWED", "Only GET and POST methods are supported")
    return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))


def create_app(settings: Settings | None = None, searcher: DocumentationSearch | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings, read from the environment if omitted.
        searcher: Search engine, built from settings if omitted.

    Returns:
        FastAPI app with the search router, CORS and error envelopes.
    """
    settings = settings or Settings()
    app = FastAPI(
        title="MaaS Documentation Search",
        description="Keyword search over the Memory as a Service documentation",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.searcher = searcher or create_searcher(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_exception_handler(QueryValidationError, _query_validation_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.include_router(router)
    return app


def main() -> None:
    """Serve the search endpoint with uvicorn."""
    import uvicorn

    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
