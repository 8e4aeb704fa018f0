"""
Tests for DextoolsProvider.

Tests cover:
- Envelope unwrapping for each endpoint
- Authentication header
- Error handling (status, network, timeout)
"""

import aiohttp
import pytest
from aioresponses import aioresponses

from cube.core.exceptions import TransportError, UpstreamError
from cube.services.gateway.dextools_provider import DextoolsProvider

BASE_URL = "https://dextools.example.com/v2"


@pytest.fixture
def dextools_provider() -> DextoolsProvider:
    """DextoolsProvider with test API key."""
    return DextoolsProvider(api_key="test-api-key", base_url=BASE_URL, timeout=1.0)


class TestDextoolsProviderSuccess:
    """Tests for successful API responses."""

    @pytest.mark.asyncio
    async def test_hot_pools(self, dextools_provider: DextoolsProvider) -> None:
        """Should return the `data` array of the ranking."""
        rows = [{"rank": 1, "mainToken": {"name": "Bonk", "symbol": "BONK"}}]
        with aioresponses() as m:
            m.get(f"{BASE_URL}/ranking/solana/hotpools", payload={"statusCode": 200, "data": rows})

            result = await dextools_provider.get_hot_pools()

        assert result == rows

    @pytest.mark.asyncio
    async def test_sends_api_key(self, dextools_provider: DextoolsProvider) -> None:
        """Requests should carry the x-api-key header."""
        with aioresponses() as m:
            m.get(f"{BASE_URL}/ranking/solana/hotpools", payload={"data": []})

            await dextools_provider.get_hot_pools()

            (call,) = next(iter(m.requests.values()))
            assert call.kwargs["headers"]["x-api-key"] == "test-api-key"
            assert call.kwargs["headers"]["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_empty_ranking(self, dextools_provider: DextoolsProvider) -> None:
        """A null `data` should become an empty list."""
        with aioresponses() as m:
            m.get(f"{BASE_URL}/ranking/solana/hotpools", payload={"statusCode": 200, "data": None})

            assert await dextools_provider.get_hot_pools() == []

    @pytest.mark.asyncio
    async def test_token_info(
        self,
        dextools_provider: DextoolsProvider,
        valid_solana_address: str,
    ) -> None:
        """Should return the token record."""
        data = {"address": valid_solana_address, "socialInfo": {"twitter": "https://x.com/usdc"}}
        with aioresponses() as m:
            m.get(f"{BASE_URL}/token/solana/{valid_solana_address}", payload={"data": data})

            result = await dextools_provider.get_token_info(valid_solana_address)

        assert result["socialInfo"]["twitter"] == "https://x.com/usdc"

    @pytest.mark.asyncio
    async def test_token_audit_missing(
        self,
        dextools_provider: DextoolsProvider,
        valid_solana_address: str,
    ) -> None:
        """A missing audit record should become an empty dict."""
        with aioresponses() as m:
            m.get(f"{BASE_URL}/token/solana/{valid_solana_address}/audit", payload={"statusCode": 200})

            assert await dextools_provider.get_token_audit(valid_solana_address) == {}


class TestDextoolsProviderErrors:
    """Tests for error handling."""

    @pytest.mark.asyncio
    async def test_rate_limited(self, dextools_provider: DextoolsProvider) -> None:
        """HTTP 429 should raise UpstreamError carrying 429."""
        with aioresponses() as m:
            m.get(f"{BASE_URL}/ranking/solana/hotpools", status=429, body="rate limited")

            with pytest.raises(UpstreamError) as exc_info:
                await dextools_provider.get_hot_pools()

        assert exc_info.value.status == 429
        assert exc_info.value.message == "Market data provider responded with HTTP 429."

    @pytest.mark.asyncio
    async def test_unauthorized(
        self,
        dextools_provider: DextoolsProvider,
        valid_solana_address: str,
    ) -> None:
        """HTTP 403 should raise UpstreamError carrying 403."""
        with aioresponses() as m:
            m.get(f"{BASE_URL}/token/solana/{valid_solana_address}", status=403)

            with pytest.raises(UpstreamError) as exc_info:
                await dextools_provider.get_token_info(valid_solana_address)

        assert exc_info.value.status == 403

    @pytest.mark.asyncio
    async def test_connection_error(self, dextools_provider: DextoolsProvider) -> None:
        """Network failure should raise TransportError."""
        with aioresponses() as m:
            m.get(
                f"{BASE_URL}/ranking/solana/hotpools",
                exception=aiohttp.ClientConnectionError("refused"),
            )

            with pytest.raises(TransportError):
                await dextools_provider.get_hot_pools()

    @pytest.mark.asyncio
    async def test_timeout(self, dextools_provider: DextoolsProvider) -> None:
        """Timeout should raise TransportError."""
        with aioresponses() as m:
            m.get(f"{BASE_URL}/ranking/solana/hotpools", exception=TimeoutError())

            with pytest.raises(TransportError) as exc_info:
                await dextools_provider.get_hot_pools()

        assert "timed out" in exc_info.value.message
