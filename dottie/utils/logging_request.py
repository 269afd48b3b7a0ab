"""
Request logging middleware.

Each request is logged once it has been routed, so the access line names the
handler that served it and the user it targeted, if any.
"""

import time
from typing import Optional

from fastapi import Request
from loguru import logger

from dottie.utils.logging_config import get_access_logger

access_logger = get_access_logger()


def route_label(request: Request) -> str:
    """Name of the endpoint that handled the request, or ``unmatched``."""
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", "unmatched")


def target_user_id(request: Request) -> Optional[str]:
    user_id = request.scope.get("path_params", {}).get("user_id")
    return None if user_id is None else str(user_id)


async def log_requests_middleware(request: Request, call_next):
    """Log each request with its handler, target user and timing."""
    start_time = time.time()
    client_host = request.client.host if request.client else "unknown"

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            "HTTP Error: {} {} [{}] - Error: {}",
            request.method,
            request.url.path,
            route_label(request),
            e,
        )
        raise

    process_time = (time.time() - start_time) * 1000
    response.headers["X-Process-Time"] = f"{process_time:.2f}ms"

    user_id = target_user_id(request)
    access_logger.bind(route=route_label(request), user_id=user_id).info(
        "{} {} [{}{}] - Status: {} - Time: {:.2f}ms - Client: {}",
        request.method,
        request.url.path,
        route_label(request),
        f" user_id={user_id}" if user_id else "",
        response.status_code,
        process_time,
        client_host,
    )

    return response
