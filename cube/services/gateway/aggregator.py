"""
Token gateway service.

Fans out to the RPC and market-data providers and normalizes their
payloads into the fixed models the shell renders.

This service:
1. Validates addresses before any upstream call
2. Runs independent sub-queries concurrently with a per-call timeout
3. Degrades field by field instead of failing the whole query
4. Holds no state between requests (no caching)
"""

import asyncio
import logging
from collections.abc import Awaitable
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

from cube.core.exceptions import (
    NoDataFoundError,
    TransportError,
    UpstreamUnavailableError,
)
from cube.core.models import AuditReport, SocialLinks, TokenDetail, TrendingPool
from cube.core.protocols import MarketDataProvider, TokenRpcProvider
from cube.utils.validators import require_solana_address

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 10.0

DEFAULT_TRENDING_LIMIT = 5

# Value used for each TokenDetail field whose sub-query failed
TOKEN_DETAIL_FALLBACKS: dict[str, Any] = {
    "supply": Decimal(0),
    "holders": (),
    "mint_authority": None,
    "freeze_authority": None,
}


def normalize_limit(limit: Any) -> int:
    """
    Parse a trending limit.

    Missing, non-numeric and non-positive values fall back to 5.
    """
    try:
        value = int(limit)
    except (TypeError, ValueError):
        return DEFAULT_TRENDING_LIMIT
    return value if value > 0 else DEFAULT_TRENDING_LIMIT


def _optional_decimal(value: Any) -> Decimal | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


class TokenGateway:
    """
    Aggregation gateway over the upstream providers.

    Exposes four read-only queries:
    - get_token_detail: supply, holders and authorities (composite)
    - get_trending_pools: ranked pools from the market-data provider
    - get_socials: social links of a token
    - get_audit_report: security flags of a token

    Usage:
        gateway = TokenGateway(rpc=SolanaRpcProvider(url), market=DextoolsProvider(key))
        detail = await gateway.get_token_detail("So111...")
    """

    def __init__(
        self,
        rpc: TokenRpcProvider,
        market: MarketDataProvider,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize gateway with its providers.

        Args:
            rpc: Blockchain RPC provider (mock or real)
            market: Market-data provider (mock or real)
            timeout: Timeout for each upstream call in seconds
        """
        self._rpc = rpc
        self._market = market
        self._timeout = timeout

    async def get_token_detail(self, address: str) -> TokenDetail:
        """
        Fetch on-chain detail of a token mint.

        Supply, largest accounts and mint info are fetched concurrently.
        A failed sub-query leaves its fields at TOKEN_DETAIL_FALLBACKS.

        Raises:
            InvalidAddressError: Address is malformed
            UpstreamUnavailableError: Every sub-query failed
        """
        require_solana_address(address)
        logger.info(f"Fetching token detail for: {address[:8]}...")

        sub_queries = {
            "supply": self._fetch_supply(address),
            "holders": self._fetch_holders(address),
            "mint_info": self._fetch_authorities(address),
        }
        results = await asyncio.gather(
            *(self._with_timeout(query, name) for name, query in sub_queries.items()),
            return_exceptions=True,
        )

        fields = dict(TOKEN_DETAIL_FALLBACKS)
        failed = []
        for name, result in zip(sub_queries, results):
            if isinstance(result, BaseException):
                logger.warning(f"Sub-query {name} failed for {address[:8]}: {result}")
                failed.append(name)
                continue
            fields.update(result)

        if len(failed) == len(sub_queries):
            raise UpstreamUnavailableError(
                technical_message=f"All token detail sub-queries failed for {address[:8]}",
            )

        return TokenDetail(**fields)

    async def get_trending_pools(self, limit: Any = None) -> list[TrendingPool]:
        """
        Fetch the top `limit` pools of the market-data ranking.

        The limit defaults to 5 and never exceeds the upstream row count.

        Raises:
            NoDataFoundError: Ranking is empty
            UpstreamError: Provider answered with a non-2xx status
            TransportError: Provider unreachable or timed out
        """
        limit = normalize_limit(limit)
        logger.info(f"Fetching top {limit} trending pools")

        rows = await self._with_timeout(self._market.get_hot_pools(), "hot_pools")
        if not rows:
            raise NoDataFoundError(message="No trending pools found for Solana.")

        # Non-object rows still occupy their rank
        return [
            self._to_pool(row if isinstance(row, dict) else {}) for row in rows[:limit]
        ]

    async def get_socials(self, contract_address: str) -> SocialLinks:
        """
        Fetch the social links of a token.

        Raises:
            InvalidAddressError: Address is malformed
            NoDataFoundError: Telegram, Twitter and website are all absent
            UpstreamError / TransportError: Provider failure
        """
        require_solana_address(contract_address)
        logger.info(f"Fetching socials for: {contract_address[:8]}...")

        info = await self._with_timeout(
            self._market.get_token_info(contract_address), "token_info"
        )
        social = info.get("socialInfo") if isinstance(info, dict) else None
        if not isinstance(social, dict):
            social = {}
        links = SocialLinks(
            telegram=_optional_str(social.get("telegram")),
            twitter=_optional_str(social.get("twitter")),
            website=_optional_str(social.get("website")),
        )
        if links.is_empty:
            raise NoDataFoundError(message="No social links found.")
        return links

    async def get_audit_report(self, contract_address: str) -> AuditReport:
        """
        Fetch the security audit of a token.

        Missing flags read as "no"; only provider failures raise.

        Raises:
            InvalidAddressError: Address is malformed
            UpstreamError / TransportError: Provider failure
        """
        require_solana_address(contract_address)
        logger.info(f"Fetching audit for: {contract_address[:8]}...")

        data = await self._with_timeout(
            self._market.get_token_audit(contract_address), "token_audit"
        )
        return AuditReport.model_validate(data if isinstance(data, dict) else {})

    async def _fetch_supply(self, address: str) -> dict[str, Any]:
        return {"supply": await self._rpc.get_token_supply(address)}

    async def _fetch_holders(self, address: str) -> dict[str, Any]:
        holders = await self._rpc.get_largest_accounts(address)
        return {"holders": sorted(holders, key=lambda h: h.amount, reverse=True)}

    async def _fetch_authorities(self, address: str) -> dict[str, Any]:
        info = await self._rpc.get_parsed_mint_info(address)
        return {
            "mint_authority": _optional_str(info.get("mintAuthority")),
            "freeze_authority": _optional_str(info.get("freezeAuthority")),
        }

    async def _with_timeout(self, call: Awaitable[T], name: str) -> T:
        """Await an upstream call, turning a timeout into TransportError."""
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except TimeoutError:
            logger.error(f"Upstream {name} timeout after {self._timeout}s")
            raise TransportError(
                message="Upstream request timed out. Try again later.",
                technical_message=f"{name} timeout after {self._timeout}s",
            ) from None

    @staticmethod
    def _to_pool(row: dict[str, Any]) -> TrendingPool:
        """Lossy projection of a ranked pool; missing names become placeholders."""
        main = row.get("mainToken")
        side = row.get("sideToken")
        main = main if isinstance(main, dict) else {}
        side = side if isinstance(side, dict) else {}
        return TrendingPool(
            name=f"{main.get('name') or 'Unknown'}/{side.get('name') or 'Unknown'}",
            symbol=f"{main.get('symbol') or 'N/A'}/{side.get('symbol') or 'N/A'}",
            price_usd=_optional_decimal(main.get("priceUsd")),
            volume_usd=_optional_decimal(main.get("volumeUsd")),
            url=_optional_str(row.get("url")),
        )
