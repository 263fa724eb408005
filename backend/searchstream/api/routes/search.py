"""Manual search endpoints."""

import structlog
from fastapi import APIRouter, Query, Request

from searchstream.api.models.chat import ManualSearchRequest
from searchstream.search.aggregator import DeepSearchService
from searchstream.search.models import DeepSearchOptions, SearchDepth
from searchstream.search.triggers import should_search, should_use_deep_search
from searchstream.search.web_search import WebSearchService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


@router.post("/deep")
async def deep_search(request: Request, body: ManualSearchRequest) -> dict:
    """Aggregate every source for the query."""
    service: DeepSearchService = request.app.state.deep_search
    response = await service.deep_search(
        body.query,
        DeepSearchOptions(max_results=body.max_results, search_depth=SearchDepth.EXPERT),
    )
    return response.to_payload()


@router.post("/quick")
async def quick_search(request: Request, body: ManualSearchRequest) -> dict:
    """Single-source lookup on the primary engine."""
    service: WebSearchService = request.app.state.web_search
    max_results = body.max_results
    if "max_results" not in body.model_fields_set:
        max_results = request.app.state.settings.quick_search_max_results
    response = await service.search(body.query, max_results)
    return response.to_payload()


@router.get("/triggers")
async def search_triggers(q: str = Query(..., min_length=1)) -> dict:
    """Report whether a message would trigger a search."""
    return {"shouldSearch": should_search(q), "shouldUseDeepSearch": should_use_deep_search(q)}


@router.delete("/cache")
async def clear_cache(request: Request) -> dict:
    """Drop every cached search response."""
    request.app.state.deep_search.clear_cache()
    request.app.state.web_search.clear_cache()
    logger.info("Search caches cleared")
    return {"success": True}
