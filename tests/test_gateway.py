"""
Tests for TokenGateway.

Tests cover:
- Composite token detail with partial and total failure
- Address validation before any upstream call
- Trending limit handling and pool projection
- Socials "not found" condition
- Audit normalization
"""

import asyncio
from collections.abc import Callable
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from cube.core.exceptions import (
    InvalidAddressError,
    NoDataFoundError,
    TransportError,
    UpstreamError,
    UpstreamUnavailableError,
)
from cube.core.models import HolderEntry
from cube.services.gateway.aggregator import TokenGateway, normalize_limit
from cube.services.gateway.mock_provider import MockMarketDataProvider, MockRpcProvider


class TestTokenDetail:
    """Tests for get_token_detail."""

    @pytest.mark.asyncio
    async def test_merges_all_sub_queries(
        self,
        gateway: TokenGateway,
        rpc_provider: AsyncMock,
        check_address: str,
    ) -> None:
        """Should combine supply, holders and authorities."""
        rpc_provider.get_parsed_mint_info.return_value = {
            "mintAuthority": "MintAuth",
            "freezeAuthority": None,
        }

        detail = await gateway.get_token_detail(check_address)

        assert detail.supply == Decimal(1000000)
        assert [h.amount for h in detail.holders] == [Decimal(600000), Decimal(400000)]
        assert detail.mint_authority == "MintAuth"
        assert detail.freeze_authority is None
        assert detail.liquidity_note == "N/A - requires DEX-specific data"

    @pytest.mark.asyncio
    async def test_failed_sub_query_uses_fallback(
        self,
        gateway: TokenGateway,
        rpc_provider: AsyncMock,
        check_address: str,
    ) -> None:
        """A failed holders query should leave an empty holder list."""
        rpc_provider.get_largest_accounts.side_effect = TransportError()

        detail = await gateway.get_token_detail(check_address)

        assert detail.supply == Decimal(1000000)
        assert detail.holders == []

    @pytest.mark.asyncio
    async def test_failed_supply_falls_back_to_zero(
        self,
        gateway: TokenGateway,
        rpc_provider: AsyncMock,
        check_address: str,
    ) -> None:
        """A failed supply query should yield supply 0."""
        rpc_provider.get_token_supply.side_effect = UpstreamError(status=503)

        detail = await gateway.get_token_detail(check_address)

        assert detail.supply == Decimal(0)
        assert len(detail.holders) == 2

    @pytest.mark.asyncio
    async def test_all_sub_queries_failed(
        self,
        gateway: TokenGateway,
        rpc_provider: AsyncMock,
        check_address: str,
    ) -> None:
        """Every sub-query failing should raise UpstreamUnavailableError."""
        rpc_provider.get_token_supply.side_effect = TransportError()
        rpc_provider.get_largest_accounts.side_effect = TransportError()
        rpc_provider.get_parsed_mint_info.side_effect = UpstreamError(status=500)

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await gateway.get_token_detail(check_address)

        assert exc_info.value.message == "Failed to fetch token details."

    @pytest.mark.asyncio
    async def test_slow_sub_query_times_out(
        self,
        rpc_provider: AsyncMock,
        market_provider: AsyncMock,
        check_address: str,
    ) -> None:
        """A sub-query exceeding the timeout should count as failed."""

        async def slow_supply(address: str) -> Decimal:
            await asyncio.sleep(1)
            return Decimal(1)

        rpc_provider.get_token_supply.side_effect = slow_supply
        gateway = TokenGateway(rpc=rpc_provider, market=market_provider, timeout=0.05)

        detail = await gateway.get_token_detail(check_address)

        assert detail.supply == Decimal(0)
        assert len(detail.holders) == 2

    @pytest.mark.asyncio
    async def test_invalid_address_skips_upstream(
        self,
        gateway: TokenGateway,
        rpc_provider: AsyncMock,
        invalid_addresses: list[str],
    ) -> None:
        """Malformed addresses should be rejected before any RPC call."""
        for address in invalid_addresses:
            with pytest.raises(InvalidAddressError):
                await gateway.get_token_detail(address)

        rpc_provider.get_token_supply.assert_not_called()
        rpc_provider.get_largest_accounts.assert_not_called()
        rpc_provider.get_parsed_mint_info.assert_not_called()

    @pytest.mark.asyncio
    async def test_repeated_calls_are_identical(
        self,
        gateway: TokenGateway,
        check_address: str,
    ) -> None:
        """No state is kept between requests."""
        first = await gateway.get_token_detail(check_address)
        second = await gateway.get_token_detail(check_address)

        assert first == second

    @pytest.mark.asyncio
    async def test_holders_sorted_by_balance(
        self,
        gateway: TokenGateway,
        rpc_provider: AsyncMock,
        two_holders: list[HolderEntry],
        check_address: str,
    ) -> None:
        """Holders should come back descending by balance whatever the provider order."""
        rpc_provider.get_largest_accounts.return_value = list(reversed(two_holders))

        detail = await gateway.get_token_detail(check_address)

        assert [h.amount for h in detail.holders] == [Decimal(600000), Decimal(400000)]

    @pytest.mark.asyncio
    async def test_mock_provider_holders_sorted(self, check_address: str) -> None:
        """The default mock RPC provider should also yield ranked holders."""
        gateway = TokenGateway(rpc=MockRpcProvider(), market=MockMarketDataProvider())

        detail = await gateway.get_token_detail(check_address)

        amounts = [h.amount for h in detail.holders]
        assert amounts == sorted(amounts, reverse=True)

    @pytest.mark.asyncio
    async def test_sub_queries_run_concurrently(
        self,
        rpc_provider: AsyncMock,
        market_provider: AsyncMock,
        two_holders: list[HolderEntry],
        check_address: str,
    ) -> None:
        """Three 0.2s sub-queries should finish in about 0.2s, not 0.6s."""

        async def slow_supply(address: str) -> Decimal:
            await asyncio.sleep(0.2)
            return Decimal(1000000)

        async def slow_holders(address: str) -> list[HolderEntry]:
            await asyncio.sleep(0.2)
            return two_holders

        async def slow_mint_info(address: str) -> dict:
            await asyncio.sleep(0.2)
            return {}

        rpc_provider.get_token_supply.side_effect = slow_supply
        rpc_provider.get_largest_accounts.side_effect = slow_holders
        rpc_provider.get_parsed_mint_info.side_effect = slow_mint_info
        gateway = TokenGateway(rpc=rpc_provider, market=market_provider, timeout=5.0)

        loop = asyncio.get_running_loop()
        started = loop.time()
        detail = await gateway.get_token_detail(check_address)
        elapsed = loop.time() - started

        assert detail.supply == Decimal(1000000)
        assert elapsed < 0.45


class TestTrendingPools:
    """Tests for get_trending_pools."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, 5),
            ("10", 10),
            (15, 15),
            ("0", 5),
            ("-3", 5),
            ("abc", 5),
        ],
    )
    def test_normalize_limit(self, raw: object, expected: int) -> None:
        """Missing, invalid and non-positive limits should become 5."""
        assert normalize_limit(raw) == expected

    @pytest.mark.asyncio
    async def test_default_limit(self, gateway: TokenGateway) -> None:
        """Without a limit the top 5 should be returned."""
        pools = await gateway.get_trending_pools()
        assert len(pools) == 5

    @pytest.mark.asyncio
    async def test_limit_applied(self, gateway: TokenGateway) -> None:
        """Limit 10 over 12 upstream rows should return 10 pools."""
        pools = await gateway.get_trending_pools("10")

        assert len(pools) == 10
        assert pools[0].name == "Token1/Wrapped SOL"
        assert pools[0].symbol == "TK1/SOL"
        assert pools[0].price_usd == Decimal("1.5")

    @pytest.mark.asyncio
    async def test_limit_larger_than_ranking(self, gateway: TokenGateway) -> None:
        """Should never return more rows than upstream has."""
        pools = await gateway.get_trending_pools(100)
        assert len(pools) == 12

    @pytest.mark.asyncio
    async def test_missing_names_get_placeholders(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
    ) -> None:
        """Missing token names and symbols should become placeholders."""
        market_provider.get_hot_pools.return_value = [{"rank": 1}]

        pools = await gateway.get_trending_pools()

        assert pools[0].name == "Unknown/Unknown"
        assert pools[0].symbol == "N/A/N/A"
        assert pools[0].price_usd is None
        assert pools[0].url is None

    @pytest.mark.asyncio
    async def test_empty_ranking(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
    ) -> None:
        """An empty ranking should raise NoDataFoundError."""
        market_provider.get_hot_pools.return_value = []

        with pytest.raises(NoDataFoundError):
            await gateway.get_trending_pools()

    @pytest.mark.asyncio
    async def test_upstream_status_kept(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
    ) -> None:
        """Upstream errors should propagate with their status."""
        market_provider.get_hot_pools.side_effect = UpstreamError(status=429)

        with pytest.raises(UpstreamError) as exc_info:
            await gateway.get_trending_pools()

        assert exc_info.value.status == 429

    @pytest.mark.asyncio
    async def test_ranking_can_be_shorter_than_limit(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
        make_pools: Callable[[int], list[dict]],
    ) -> None:
        """Three upstream rows with limit 5 should give three pools."""
        market_provider.get_hot_pools.return_value = make_pools(3)

        pools = await gateway.get_trending_pools(5)

        assert len(pools) == 3

    @pytest.mark.asyncio
    async def test_malformed_rows_degrade(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
    ) -> None:
        """Null rows and non-object tokens should become placeholder pools."""
        market_provider.get_hot_pools.return_value = [
            None,
            {"mainToken": "x", "sideToken": ["y"]},
        ]

        pools = await gateway.get_trending_pools()

        assert len(pools) == 2
        assert all(pool.name == "Unknown/Unknown" for pool in pools)
        assert all(pool.symbol == "N/A/N/A" for pool in pools)


class TestSocials:
    """Tests for get_socials."""

    @pytest.mark.asyncio
    async def test_returns_links(
        self,
        gateway: TokenGateway,
        valid_solana_address: str,
    ) -> None:
        """Should return all present links."""
        links = await gateway.get_socials(valid_solana_address)

        assert links.telegram == "https://t.me/cube"
        assert links.twitter == "https://x.com/cube"
        assert links.website == "https://cube.io"

    @pytest.mark.asyncio
    async def test_partial_links(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
        valid_solana_address: str,
    ) -> None:
        """One link is enough for a result."""
        market_provider.get_token_info.return_value = {
            "socialInfo": {"twitter": "https://x.com/cube", "telegram": ""}
        }

        links = await gateway.get_socials(valid_solana_address)

        assert links.twitter == "https://x.com/cube"
        assert links.telegram is None

    @pytest.mark.asyncio
    async def test_no_links_is_not_found(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
        valid_solana_address: str,
    ) -> None:
        """All links absent should raise NoDataFoundError."""
        market_provider.get_token_info.return_value = {"socialInfo": {}}

        with pytest.raises(NoDataFoundError):
            await gateway.get_socials(valid_solana_address)

    @pytest.mark.asyncio
    async def test_invalid_address(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
    ) -> None:
        """Invalid address should be rejected before the upstream call."""
        with pytest.raises(InvalidAddressError):
            await gateway.get_socials("not-an-address")

        market_provider.get_token_info.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("social_info", ["none", None, ["https://t.me/cube"], 0])
    async def test_malformed_social_info_is_not_found(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
        valid_solana_address: str,
        social_info: object,
    ) -> None:
        """A socialInfo that is not an object should read as no links."""
        market_provider.get_token_info.return_value = {"socialInfo": social_info}

        with pytest.raises(NoDataFoundError):
            await gateway.get_socials(valid_solana_address)


class TestAudit:
    """Tests for get_audit_report."""

    @pytest.mark.asyncio
    async def test_empty_audit_reads_no(
        self,
        gateway: TokenGateway,
        valid_solana_address: str,
    ) -> None:
        """An empty upstream audit should give five 'no' flags."""
        report = await gateway.get_audit_report(valid_solana_address)

        assert report.model_dump() == {
            "is_honeypot": "no",
            "is_mintable": "no",
            "slippage_modifiable": "no",
            "is_contract_renounced": "no",
            "is_potentially_scam": "no",
        }

    @pytest.mark.asyncio
    async def test_flags_normalized(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
        valid_solana_address: str,
    ) -> None:
        """Explicit yes values should survive, anything else reads as no."""
        market_provider.get_token_audit.return_value = {
            "isHoneypot": "yes",
            "isMintable": True,
            "slippageModifiable": "unknown",
            "isContractRenounced": None,
        }

        report = await gateway.get_audit_report(valid_solana_address)

        assert report.is_honeypot == "yes"
        assert report.is_mintable == "yes"
        assert report.slippage_modifiable == "no"
        assert report.is_contract_renounced == "no"
        assert report.is_potentially_scam == "no"

    @pytest.mark.asyncio
    async def test_upstream_failure_propagates(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
        valid_solana_address: str,
    ) -> None:
        """Provider failures should propagate unchanged."""
        market_provider.get_token_audit.side_effect = TransportError()

        with pytest.raises(TransportError):
            await gateway.get_audit_report(valid_solana_address)

    @pytest.mark.asyncio
    async def test_non_object_audit_reads_no(
        self,
        gateway: TokenGateway,
        market_provider: AsyncMock,
        valid_solana_address: str,
    ) -> None:
        """An audit payload that is not an object should give five 'no' flags."""
        market_provider.get_token_audit.return_value = ["isHoneypot"]

        report = await gateway.get_audit_report(valid_solana_address)

        assert set(report.model_dump().values()) == {"no"}
