"""
Logging middleware for the gateway.

Logs every request with its status and processing time.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from aiohttp import web

logger = logging.getLogger(__name__)

MAX_PATH_LENGTH = 100  # Truncate long paths in logs

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def logging_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """
    Process request and log information.

    Args:
        request: Incoming request
        handler: Next handler in chain

    Returns:
        Handler response
    """
    start_time = time.monotonic()
    request_info = describe_request(request)

    logger.info(f"Incoming: {request_info}")

    try:
        response = await handler(request)
    except Exception as e:
        elapsed = (time.monotonic() - start_time) * 1000
        logger.error(f"Error after {elapsed:.2f}ms: {type(e).__name__}: {e}")
        raise

    elapsed = (time.monotonic() - start_time) * 1000  # ms
    logger.info(f"{request_info} -> {response.status} in {elapsed:.2f}ms")
    return response


def describe_request(request: web.Request) -> str:
    """Method and (truncated) path of a request."""
    path = request.path_qs
    if len(path) > MAX_PATH_LENGTH:
        path = path[:MAX_PATH_LENGTH] + "..."
    return f"{request.method} {path}"
