"""
Error handling middleware for the gateway.

Catches all exceptions and returns `{"error": message}` JSON.
Logs technical details for debugging while hiding them from clients.

Status mapping:
1. InvalidAddressError → 400
2. NoDataFoundError → 404
3. UpstreamError → upstream status on routes that propagate it, else 500
4. Other CubeError → 500
5. Unknown errors → 500 with a generic message
"""

import logging
from collections.abc import Awaitable, Callable

from aiohttp import web

from cube.core.exceptions import (
    CubeError,
    InvalidAddressError,
    NoDataFoundError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

ERROR_INTERNAL = "Internal server error."

# Routes whose failure status mirrors the upstream's status
PROPAGATE_UPSTREAM_STATUS = frozenset({"trending"})

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """
    Turn exceptions escaping a route into JSON error responses.

    Args:
        request: Incoming request
        handler: Next handler in chain

    Returns:
        Handler response, or an error response
    """
    try:
        return await handler(request)

    except web.HTTPException as e:
        if e.status < 400:
            raise
        # Unknown paths and wrong methods get the same JSON shape
        return web.json_response({"error": e.reason}, status=e.status)

    except (InvalidAddressError, NoDataFoundError) as e:
        return _error_response(request, e, log_level="warning")

    except CubeError as e:
        return _error_response(request, e, log_level="error")

    except Exception as e:
        logger.exception(f"Unexpected error: {type(e).__name__}: {e}")
        return web.json_response({"error": ERROR_INTERNAL}, status=500)


def status_for(request: web.Request, error: CubeError) -> int:
    """Pick the response status for a known error."""
    if isinstance(error, UpstreamError):
        route_name = getattr(request.match_info.route, "name", None)
        if route_name in PROPAGATE_UPSTREAM_STATUS and error.status >= 400:
            return error.status
        return 500
    return error.http_status


def _error_response(
    request: web.Request,
    error: CubeError,
    log_level: str = "error",
) -> web.Response:
    """
    Log a known error and build its response.

    Args:
        request: The request that caused the error
        error: The exception that was raised
        log_level: Logging level (warning, error)
    """
    log_func = getattr(logger, log_level)
    log_func(f"{type(error).__name__}: {error.technical_message}")

    return web.json_response(
        {"error": error.message or ERROR_INTERNAL},
        status=status_for(request, error),
    )
