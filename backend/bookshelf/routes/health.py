"""
Bookshelf API: Health Check Route
==================================

What:  Liveness endpoint for container health checks and load balancers.
How:   Reports version, uptime, and the state of the request log sink
       (destination, format, appends still in flight).
"""

import logging
import time

from fastapi import APIRouter, Request

from bookshelf import __version__
from bookshelf.schemas.book import HealthResponse, RequestLogStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    config = request.app.state.request_log_config
    sink = request.app.state.request_log_sink

    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        request_log=RequestLogStatus(
            path=str(config.log_file_path),
            format=config.format,
            pending_writes=sink.pending,
        ),
    )
