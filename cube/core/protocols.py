"""
Protocol definitions (interfaces) for external services.

Using typing.Protocol instead of ABC because:
1. Supports duck typing (no inheritance required)
2. Easier to mock in tests
3. Better for dependency injection

Upstream providers only handle transport and response envelopes;
turning their payloads into the normalized models is the gateway's job.
"""

from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from cube.core.models import AuditReport, HolderEntry, SocialLinks, TokenDetail, TrendingRow


@runtime_checkable
class TokenRpcProvider(Protocol):
    """
    Protocol for blockchain RPC providers.

    Every method raises UpstreamError or TransportError on failure.
    """

    async def get_token_supply(self, address: str) -> Decimal:
        """Return the mint's total supply in UI units."""
        ...

    async def get_largest_accounts(self, address: str) -> list[HolderEntry]:
        """Return the largest token accounts of the mint."""
        ...

    async def get_parsed_mint_info(self, address: str) -> dict[str, Any]:
        """Return the parsed mint account info ({} if the account is empty)."""
        ...


@runtime_checkable
class MarketDataProvider(Protocol):
    """
    Protocol for market-data providers (DEXTools or mock).

    Methods return the provider's `data` object unchanged and raise
    UpstreamError or TransportError on failure.
    """

    async def get_hot_pools(self) -> list[dict[str, Any]]:
        """Return the provider's ranked hot pools."""
        ...

    async def get_token_info(self, address: str) -> dict[str, Any]:
        """Return the provider's token detail record."""
        ...

    async def get_token_audit(self, address: str) -> dict[str, Any]:
        """Return the provider's audit record."""
        ...


@runtime_checkable
class GatewayApi(Protocol):
    """
    Protocol for the gateway as seen by the command shell.

    GatewayClient implements it over HTTP. Every method raises
    a CubeError subclass on failure.
    """

    async def get_token_detail(self, address: str) -> TokenDetail:
        ...

    async def get_trending(self, limit: int) -> list[TrendingRow]:
        ...

    async def get_socials(self, contract_address: str) -> SocialLinks:
        ...

    async def get_audit(self, contract_address: str) -> AuditReport:
        ...
