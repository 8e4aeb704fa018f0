"""
Application setup.

Registers middleware and routes on the aiohttp application.
"""

from aiohttp import web

from cube.handlers.api_handler import GATEWAY_KEY, routes
from cube.middleware import error_middleware, logging_middleware
from cube.services.gateway.aggregator import TokenGateway


def create_app(gateway: TokenGateway) -> web.Application:
    """
    Build the gateway application.

    Middleware order (first = outermost):
    - Logging sees every request, including failed ones
    - Error handler converts exceptions before logging records the status

    Args:
        gateway: Gateway service injected into handlers
    """
    app = web.Application(middlewares=[logging_middleware, error_middleware])
    app[GATEWAY_KEY] = gateway
    app.add_routes(routes)
    return app
