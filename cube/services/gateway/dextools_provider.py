"""
DEXTools market-data provider.

Fetches ranked pools, token details and audits from the DEXTools
public REST API, authenticated with a static `x-api-key` header.

NO normalization here: methods return the `data` object of the
response envelope and leave field defaults to the gateway.
"""

import logging
from typing import Any

import aiohttp

from cube.core.exceptions import TransportError, UpstreamError

logger = logging.getLogger(__name__)

DEXTOOLS_BASE_URL = "https://public-api.dextools.io/trial/v2"

DEFAULT_TIMEOUT = 10.0

BAD_GATEWAY = 502


class DextoolsProvider:
    """
    Real implementation of MarketDataProvider using DEXTools.

    Endpoints:
    - /ranking/{chain}/hotpools
    - /token/{chain}/{address}
    - /token/{chain}/{address}/audit
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEXTOOLS_BASE_URL,
        chain: str = "solana",
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize DEXTools provider.

        Args:
            api_key: DEXTools API key
            base_url: Plan-specific API root (trial, standard, ...)
            chain: Chain slug used in paths
            timeout: Request timeout in seconds
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._chain = chain
        self._timeout = timeout

    async def get_hot_pools(self) -> list[dict[str, Any]]:
        """Fetch the ranked hot pools ([] when the ranking is empty)."""
        data = await self._get(f"/ranking/{self._chain}/hotpools")
        return data if isinstance(data, list) else []

    async def get_token_info(self, address: str) -> dict[str, Any]:
        """Fetch the token detail record ({} when absent)."""
        data = await self._get(f"/token/{self._chain}/{address}")
        return data if isinstance(data, dict) else {}

    async def get_token_audit(self, address: str) -> dict[str, Any]:
        """Fetch the token audit record ({} when absent)."""
        data = await self._get(f"/token/{self._chain}/{address}/audit")
        return data if isinstance(data, dict) else {}

    async def _get(self, path: str) -> Any:
        """
        GET a DEXTools path and unwrap the `data` envelope.

        Raises:
            UpstreamError: Non-2xx status (carries it) or invalid JSON
            TransportError: Network failure or timeout
        """
        url = f"{self._base_url}{path}"
        headers = {
            "x-api-key": self._api_key,
            "Accept": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self._timeout)

        logger.debug(f"DEXTools GET {path}")

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, headers=headers, timeout=timeout) as resp:
                    if not 200 <= resp.status < 300:
                        error_text = await resp.text()
                        logger.warning(f"DEXTools {path} returned {resp.status}")
                        raise UpstreamError(
                            status=resp.status,
                            message=f"Market data provider responded with HTTP {resp.status}.",
                            technical_message=f"DEXTools {path} {resp.status}: {error_text[:200]}",
                        )
                    body = await resp.json(content_type=None)

        except TimeoutError:
            logger.warning(f"DEXTools timeout after {self._timeout}s on {path}")
            raise TransportError(
                message="Market data request timed out.",
                technical_message=f"DEXTools timeout after {self._timeout}s on {path}",
            ) from None
        except aiohttp.ClientError as e:
            logger.warning(f"DEXTools request failed: {e}")
            raise TransportError(
                message="Market data provider is unreachable.",
                technical_message=f"DEXTools {type(e).__name__}: {e}",
            ) from e
        except ValueError as e:
            raise UpstreamError(
                status=BAD_GATEWAY,
                message="Market data provider returned an invalid response.",
                technical_message=f"DEXTools {path} invalid JSON: {e}",
            ) from e

        if not isinstance(body, dict):
            return None
        return body.get("data")
