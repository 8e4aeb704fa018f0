"""
Mock upstream providers for development.

Generate realistic-looking upstream payloads without making API calls.
Uses deterministic random generation based on address for consistent results.
"""

import hashlib
import random
from decimal import Decimal
from typing import Any

from cube.core.models import HolderEntry

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def _rng_for(address: str) -> random.Random:
    """Random generator seeded from the address."""
    seed = int(hashlib.md5(address.encode()).hexdigest(), 16) % (2**32)
    return random.Random(seed)


def _fake_address(rng: random.Random) -> str:
    return "".join(rng.choice(BASE58_ALPHABET) for _ in range(44))


class MockRpcProvider:
    """
    Mock implementation of TokenRpcProvider.

    The same address always returns the same supply, holders and authorities.
    """

    HOLDER_COUNT = 20

    async def get_token_supply(self, address: str) -> Decimal:
        rng = _rng_for(address)
        return Decimal(rng.randint(1_000_000, 1_000_000_000))

    async def get_largest_accounts(self, address: str) -> list[HolderEntry]:
        supply = await self.get_token_supply(address)
        rng = _rng_for(address + ":holders")

        # Each holder gets a shrinking share of what is left
        remaining = supply
        holders = []
        for _ in range(self.HOLDER_COUNT):
            amount = (remaining * Decimal(rng.randint(5, 30)) / 100).quantize(Decimal(1))
            remaining -= amount
            holders.append(
                HolderEntry(
                    address=_fake_address(rng),
                    amount=amount,
                    amount_display=str(amount),
                )
            )
        return holders

    async def get_parsed_mint_info(self, address: str) -> dict[str, Any]:
        rng = _rng_for(address + ":mint")
        return {
            "decimals": 6,
            "isInitialized": True,
            "mintAuthority": _fake_address(rng) if rng.random() < 0.3 else None,
            "freezeAuthority": _fake_address(rng) if rng.random() < 0.2 else None,
        }


class MockMarketDataProvider:
    """
    Mock implementation of MarketDataProvider.

    Returns payloads shaped like DEXTools `data` objects, including
    the occasional missing field the real API is known for.
    """

    MOCK_TOKENS = [
        ("Bonk", "BONK"),
        ("Dogwifhat", "WIF"),
        ("Jupiter", "JUP"),
        ("Raydium", "RAY"),
        ("Marinade", "MNDE"),
        ("Orca", "ORCA"),
        ("Pyth", "PYTH"),
        ("Jito", "JTO"),
        ("Tensor", "TNSR"),
        ("Helium", "HNT"),
        ("Popcat", "POPCAT"),
        ("Book of Meme", "BOME"),
        ("Myro", "MYRO"),
        ("Slerf", "SLERF"),
        ("Samoyedcoin", "SAMO"),
    ]

    async def get_hot_pools(self) -> list[dict[str, Any]]:
        rng = _rng_for("hotpools")
        pools = []
        for rank, (name, symbol) in enumerate(self.MOCK_TOKENS, start=1):
            main_token: dict[str, Any] = {"name": name, "symbol": symbol}
            if rng.random() > 0.2:
                main_token["priceUsd"] = round(rng.uniform(0.0001, 5), 6)
                main_token["volumeUsd"] = round(rng.uniform(10_000, 5_000_000), 2)
            pools.append(
                {
                    "rank": rank,
                    "address": _fake_address(rng),
                    "mainToken": main_token,
                    "sideToken": {"name": "Wrapped SOL", "symbol": "SOL"},
                    "url": f"https://www.dextools.io/app/en/solana/pair-explorer/{symbol.lower()}",
                }
            )
        return pools

    async def get_token_info(self, address: str) -> dict[str, Any]:
        rng = _rng_for(address + ":info")
        slug = address[:6].lower()
        social_info = {}
        if rng.random() > 0.3:
            social_info["twitter"] = f"https://x.com/{slug}"
        if rng.random() > 0.4:
            social_info["telegram"] = f"https://t.me/{slug}"
        if rng.random() > 0.5:
            social_info["website"] = f"https://{slug}.io"
        return {"address": address, "socialInfo": social_info}

    async def get_token_audit(self, address: str) -> dict[str, Any]:
        rng = _rng_for(address + ":audit")
        fields = [
            "isHoneypot",
            "isMintable",
            "slippageModifiable",
            "isContractRenounced",
            "isPotentiallyScam",
        ]
        # Leave some fields out, like the real API does for young tokens
        return {
            field: rng.choice(["yes", "no"])
            for field in fields
            if rng.random() > 0.2
        }
