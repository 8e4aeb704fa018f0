"""
Service factory for dependency injection.

Creates and configures the gateway and the shell client based on
application settings. Switches between mock and real upstream
providers automatically.
"""

import logging

from cube.config.settings import Settings
from cube.core.protocols import MarketDataProvider, TokenRpcProvider
from cube.services.gateway.aggregator import TokenGateway
from cube.services.gateway.dextools_provider import DextoolsProvider
from cube.services.gateway.mock_provider import MockMarketDataProvider, MockRpcProvider
from cube.services.gateway.rpc_provider import SolanaRpcProvider
from cube.shell.client import GatewayClient

logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory for creating application services.

    Reads configuration and creates appropriate implementations:
    - Mock providers for development (USE_MOCK_SERVICES=true)
    - Real providers for production (USE_MOCK_SERVICES=false)

    Usage:
        factory = ServiceFactory(settings)
        gateway = factory.create_gateway()
    """

    def __init__(self, settings: Settings):
        """
        Initialize factory with application settings.

        Args:
            settings: Application configuration
        """
        self._settings = settings
        self._log_mode()

    def _log_mode(self) -> None:
        """Log the current mode for debugging."""
        mode = "MOCK" if self._settings.use_mock_services else "PRODUCTION"
        logger.info(f"ServiceFactory initialized in {mode} mode")

    def create_rpc_provider(self) -> TokenRpcProvider:
        """Create the blockchain RPC provider."""
        if self._settings.use_mock_services:
            logger.debug("Creating MockRpcProvider")
            return MockRpcProvider()

        logger.debug("Creating SolanaRpcProvider")
        return SolanaRpcProvider(
            rpc_url=self._settings.solana_rpc_url,
            timeout=self._settings.api_timeout_seconds,
        )

    def create_market_provider(self) -> MarketDataProvider:
        """Create the market-data provider."""
        if self._settings.use_mock_services:
            logger.debug("Creating MockMarketDataProvider")
            return MockMarketDataProvider()

        logger.debug("Creating DextoolsProvider")
        return DextoolsProvider(
            api_key=self._settings.dextools_api_key,
            base_url=self._settings.dextools_base_url,
            chain=self._settings.dextools_chain,
            timeout=self._settings.api_timeout_seconds,
        )

    def create_gateway(self) -> TokenGateway:
        """
        Create the token gateway.

        Returns:
            TokenGateway wired to the providers selected by settings
        """
        logger.info("Creating TokenGateway with all providers")
        return TokenGateway(
            rpc=self.create_rpc_provider(),
            market=self.create_market_provider(),
            timeout=self._settings.api_timeout_seconds,
        )

    def create_gateway_client(self) -> GatewayClient:
        """Create the HTTP client the shell uses to reach the gateway."""
        logger.debug(f"Creating GatewayClient for {self._settings.gateway_url}")
        return GatewayClient(
            base_url=self._settings.gateway_url,
            timeout=self._settings.shell_request_timeout_seconds,
        )
