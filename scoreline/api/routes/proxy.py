"""Read-only SofaScore proxy for browser clients."""

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from scoreline.core.exceptions import SofaScoreAPIError
from scoreline.core.rate_limit import RATE_LIMITS, limiter
from scoreline.data.sources.sofascore import get_sofascore_client

logger = logging.getLogger(__name__)

router = APIRouter()

CACHE_CONTROL = "public, max-age=60"


@router.get("/sofascore")
@limiter.limit(RATE_LIMITS["proxy"])
async def proxy_sofascore(
    request: Request,
    endpoint: str | None = Query(None, description="SofaScore path, e.g. /event/123"),
) -> JSONResponse:
    """Forward a GET to SofaScore and relay the JSON body.

    Upstream errors are relayed with their status code.
    """
    if not endpoint:
        return JSONResponse(status_code=400, content={"error": "Endpoint parameter is required"})

    try:
        data = await get_sofascore_client().fetch(endpoint)
    except SofaScoreAPIError as e:
        upstream = e.upstream_status
        if upstream is None:
            return JSONResponse(
                status_code=500,
                content={"error": "Internal proxy error", "message": e.message},
            )
        return JSONResponse(
            status_code=upstream,
            content={
                "error": "Failed to fetch from SofaScore",
                "status": upstream,
                "details": e.details.get("body", ""),
            },
        )

    return JSONResponse(content=data, headers={"Cache-Control": CACHE_CONTROL})
