"""
Postboard Backend — Health Check Route
========================================

What:  Liveness endpoint for container probes and load balancers.
How:   Reports version, configured store backend, and uptime. It makes no
       store or upstream call, so a store outage never fails the probe.
"""

import time

from fastapi import APIRouter, Request

from postboard import __version__
from postboard.schemas.post import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    store = request.app.state.post_service.store if hasattr(request.app.state, "post_service") else None
    return HealthResponse(
        status="healthy" if store is not None else "starting",
        version=__version__,
        document_store=type(store).__name__ if store is not None else "none",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
