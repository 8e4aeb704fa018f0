"""
Gateway HTTP client used by the command shell.

Implements the GatewayApi protocol over the gateway's JSON API and
turns error replies back into the matching CubeError subclasses.
Every call is bounded by one overall timeout so the shell can never
stay busy indefinitely.
"""

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import aiohttp
from pydantic import BaseModel, ValidationError

from cube.core.exceptions import (
    CubeError,
    InvalidAddressError,
    NoDataFoundError,
    TransportError,
    UpstreamError,
)
from cube.core.models import (
    AuditPayload,
    AuditReport,
    SocialLinks,
    SocialsPayload,
    TokenDetail,
    TrendingPayload,
    TrendingRow,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DEFAULT_TIMEOUT = 15.0

BAD_GATEWAY = 502


class GatewayClient:
    """
    HTTP client for the CUBE gateway.

    Usage:
        client = GatewayClient("http://localhost:3001")
        detail = await client.get_token_detail("So111...")
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize client.

        Args:
            base_url: Gateway root URL
            timeout: Overall timeout of one call in seconds
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def get_token_detail(self, address: str) -> TokenDetail:
        data = await self._get(f"/api/token/{quote(address, safe='')}")
        return self._parse(TokenDetail, data)

    async def get_trending(self, limit: int) -> list[TrendingRow]:
        data = await self._get("/api/dextools/trending", params={"limit": str(limit)})
        return self._parse(TrendingPayload, data).trending

    async def get_socials(self, contract_address: str) -> SocialLinks:
        data = await self._get(f"/api/dextools/socials/{quote(contract_address, safe='')}")
        return self._parse(SocialsPayload, data).socials

    async def get_audit(self, contract_address: str) -> AuditReport:
        data = await self._get(f"/api/dextools/audit/{quote(contract_address, safe='')}")
        return self._parse(AuditPayload, data).audit

    async def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        """
        GET a gateway path and return the decoded JSON body.

        Raises:
            TransportError: Gateway unreachable or timed out
            CubeError subclass: Gateway answered with an error status
        """
        url = f"{self._base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self._timeout)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, params=params, timeout=timeout) as resp:
                    status = resp.status
                    try:
                        body = await resp.json(content_type=None)
                    except ValueError:
                        body = None

        except TimeoutError:
            logger.warning(f"Gateway timeout after {self._timeout}s on {path}")
            raise TransportError(
                message=f"Gateway did not answer within {self._timeout:g}s.",
                technical_message=f"Gateway timeout after {self._timeout}s on {path}",
            ) from None
        except aiohttp.ClientError as e:
            logger.warning(f"Gateway request failed: {e}")
            raise TransportError(
                message="Gateway is unreachable.",
                technical_message=f"Gateway {type(e).__name__}: {e}",
            ) from e

        if status >= 400:
            raise error_from_response(status, body)
        if body is None:
            raise UpstreamError(
                status=BAD_GATEWAY,
                message="Gateway returned an invalid response.",
                technical_message=f"Non-JSON body from {path}",
            )
        return body

    @staticmethod
    def _parse(model: type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise UpstreamError(
                status=BAD_GATEWAY,
                message="Gateway returned an unexpected response.",
                technical_message=f"{model.__name__} validation failed: {e}",
            ) from e


def error_from_response(status: int, body: Any) -> CubeError:
    """Map a gateway error reply to the exception it stands for."""
    message = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        message = body["error"]

    if status == 400:
        return InvalidAddressError(message=message or "Invalid token address.")
    if status == 404:
        return NoDataFoundError(message=message or "No data found.")
    return UpstreamError(
        status=status,
        message=message or f"Gateway responded with HTTP {status}.",
    )
