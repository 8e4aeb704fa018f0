"""
Services module - gateway business logic.

Contains the gateway, its upstream providers and the ServiceFactory
for dependency injection.
"""

from cube.services.factory import ServiceFactory
from cube.services.gateway.aggregator import TokenGateway

__all__ = ["ServiceFactory", "TokenGateway"]
