"""Gateway services."""

from cube.services.gateway.aggregator import TokenGateway
from cube.services.gateway.mock_provider import MockMarketDataProvider, MockRpcProvider

__all__ = ["TokenGateway", "MockRpcProvider", "MockMarketDataProvider"]
