"""
Pytest configuration and fixtures.

Provides reusable test fixtures for:
- Sample addresses and token data
- Mock upstream providers
- Test gateway
"""

from collections.abc import Callable
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from cube.core.models import HolderEntry, TokenDetail
from cube.services.gateway.aggregator import TokenGateway

# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def valid_solana_address() -> str:
    """Valid Solana token address (USDC)."""
    return "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


@pytest.fixture
def another_valid_address() -> str:
    """Another valid Solana address (wrapped SOL)."""
    return "So11111111111111111111111111111111111111112"


@pytest.fixture
def check_address() -> str:
    """Address used by the `check` scenarios."""
    return "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


@pytest.fixture
def invalid_addresses() -> list[str]:
    """List of invalid addresses for testing."""
    return [
        "",  # Empty
        "   ",  # Whitespace
        "abc",  # Too short
        "0x742d35Cc6634C0532925a3b844Bc9e7595f5bEb2",  # Ethereum
        "So11111111111111111111111111111111111111112!",  # Invalid char
        "O0Il" * 11,  # Invalid base58 chars
    ]


@pytest.fixture
def two_holders(valid_solana_address: str, another_valid_address: str) -> list[HolderEntry]:
    """Two holders owning 60% and 40% of a 1,000,000 supply."""
    return [
        HolderEntry(
            address=valid_solana_address,
            amount=Decimal(600000),
            amount_display="600000",
        ),
        HolderEntry(
            address=another_valid_address,
            amount=Decimal(400000),
            amount_display="400000",
        ),
    ]


@pytest.fixture
def token_detail(two_holders: list[HolderEntry]) -> TokenDetail:
    """Token detail with a known supply and two holders."""
    return TokenDetail(
        supply=Decimal(1000000),
        holders=two_holders,
        mint_authority=None,
        freeze_authority=None,
    )


def _pools(count: int) -> list[dict]:
    return [
        {
            "rank": i,
            "mainToken": {
                "name": f"Token{i}",
                "symbol": f"TK{i}",
                "priceUsd": 1.5,
                "volumeUsd": 1234567.891,
            },
            "sideToken": {"name": "Wrapped SOL", "symbol": "SOL"},
            "url": f"https://www.dextools.io/app/en/solana/pair-explorer/tk{i}",
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def make_pools() -> Callable[[int], list[dict]]:
    """Factory for hot pools shaped like the DEXTools ranking `data` array."""
    return _pools


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def rpc_provider(two_holders: list[HolderEntry]) -> AsyncMock:
    """RPC provider returning supply 1,000,000 and two holders."""
    provider = AsyncMock()
    provider.get_token_supply.return_value = Decimal(1000000)
    provider.get_largest_accounts.return_value = two_holders
    provider.get_parsed_mint_info.return_value = {
        "mintAuthority": None,
        "freezeAuthority": None,
    }
    return provider


@pytest.fixture
def market_provider() -> AsyncMock:
    """Market-data provider with 12 hot pools, full socials and an empty audit."""
    provider = AsyncMock()
    provider.get_hot_pools.return_value = _pools(12)
    provider.get_token_info.return_value = {
        "socialInfo": {
            "telegram": "https://t.me/cube",
            "twitter": "https://x.com/cube",
            "website": "https://cube.io",
        }
    }
    provider.get_token_audit.return_value = {}
    return provider


@pytest.fixture
def gateway(rpc_provider: AsyncMock, market_provider: AsyncMock) -> TokenGateway:
    """Gateway over mock providers."""
    return TokenGateway(rpc=rpc_provider, market=market_provider, timeout=1.0)
