"""
Solana JSON-RPC token provider.

Fetches raw on-chain token data from a Solana RPC node.
This is the real implementation used in production.

Responsibilities:
1. getTokenSupply - total supply in UI units
2. getTokenLargestAccounts - largest holders
3. getAccountInfo (jsonParsed) - mint and freeze authorities

Each call fails on its own; combining the three is the gateway's job.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import aiohttp

from cube.core.exceptions import TransportError, UpstreamError
from cube.core.models import HolderEntry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

# HTTP status reported for well-formed HTTP replies carrying a broken RPC payload
BAD_GATEWAY = 502


class SolanaRpcProvider:
    """
    Real implementation of TokenRpcProvider over Solana JSON-RPC.

    One aiohttp session per call; calls are independent so the
    gateway can run them concurrently.
    """

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize RPC provider.

        Args:
            rpc_url: Solana JSON-RPC endpoint
            timeout: Request timeout in seconds
        """
        self._rpc_url = rpc_url
        self._timeout = timeout

    async def get_token_supply(self, address: str) -> Decimal:
        """Fetch the mint's total supply in UI units."""
        result = await self._call("getTokenSupply", [address])
        value = (result or {}).get("value") or {}
        return _to_decimal(value.get("uiAmountString", value.get("uiAmount")))

    async def get_largest_accounts(self, address: str) -> list[HolderEntry]:
        """
        Fetch the largest token accounts of the mint.

        The node returns at most 20 accounts, already sorted; we sort
        again so the descending-by-balance order never depends on the node.
        """
        result = await self._call("getTokenLargestAccounts", [address])
        accounts = (result or {}).get("value") or []
        holders = [_parse_holder(account) for account in accounts]
        return sorted(holders, key=lambda holder: holder.amount, reverse=True)

    async def get_parsed_mint_info(self, address: str) -> dict[str, Any]:
        """
        Fetch the parsed mint account.

        Returns:
            The `parsed.info` object, or {} when the account does not
            exist or the node could not parse it.
        """
        result = await self._call(
            "getAccountInfo",
            [address, {"encoding": "jsonParsed"}],
        )
        account = (result or {}).get("value") or {}
        data = account.get("data")
        if not isinstance(data, dict):
            # Unparsed accounts come back as [base64, "base64"]
            return {}
        return data.get("parsed", {}).get("info", {}) or {}

    async def _call(self, method: str, params: list) -> Any:
        """
        Make a single JSON-RPC call.

        Raises:
            UpstreamError: Non-200 status, RPC error object or invalid JSON
            TransportError: Network failure or timeout
        """
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }
        timeout = aiohttp.ClientTimeout(total=self._timeout)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self._rpc_url, json=payload, timeout=timeout
                ) as resp:
                    if resp.status != 200:
                        error_text = await resp.text()
                        logger.warning(f"{method} returned {resp.status}")
                        raise UpstreamError(
                            status=resp.status,
                            message=f"Solana RPC responded with HTTP {resp.status}.",
                            technical_message=f"{method} {resp.status}: {error_text[:200]}",
                        )
                    data = await resp.json(content_type=None)

        except TimeoutError:
            logger.warning(f"{method} timeout after {self._timeout}s")
            raise TransportError(
                message="Solana RPC request timed out.",
                technical_message=f"{method} timeout after {self._timeout}s",
            ) from None
        except aiohttp.ClientError as e:
            logger.warning(f"{method} failed: {e}")
            raise TransportError(
                message="Solana RPC is unreachable.",
                technical_message=f"{method} {type(e).__name__}: {e}",
            ) from e
        except ValueError as e:
            raise UpstreamError(
                status=BAD_GATEWAY,
                message="Solana RPC returned an invalid response.",
                technical_message=f"{method} invalid JSON: {e}",
            ) from e

        if not isinstance(data, dict):
            raise UpstreamError(
                status=BAD_GATEWAY,
                message="Solana RPC returned an invalid response.",
                technical_message=f"{method} returned {type(data).__name__}",
            )

        if "error" in data:
            logger.warning(f"{method} error: {data['error']}")
            raise UpstreamError(
                status=BAD_GATEWAY,
                message="Solana RPC rejected the request.",
                technical_message=f"{method} RPC error: {data['error']}",
            )

        return data.get("result")


def _to_decimal(value: Any) -> Decimal:
    """Convert an RPC amount to Decimal, treating junk as 0."""
    if value is None:
        return Decimal(0)
    try:
        return Decimal(str(value))
    except InvalidOperation:
        logger.debug(f"Unparseable amount: {value!r}")
        return Decimal(0)


def _parse_holder(account: dict[str, Any]) -> HolderEntry:
    """Build a HolderEntry from a getTokenLargestAccounts row."""
    display = account.get("uiAmountString")
    if display is None:
        ui_amount = account.get("uiAmount")
        display = str(ui_amount) if ui_amount is not None else "0"
    return HolderEntry(
        address=account.get("address", ""),
        amount=_to_decimal(account.get("uiAmountString", account.get("uiAmount"))),
        amount_display=display,
    )
