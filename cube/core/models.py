"""
Pydantic models for the CUBE gateway and shell.

The same models describe the gateway's normalized results and the
JSON payloads on the HTTP boundary, so the shell validates exactly
what the gateway serializes. Wire names are camelCase aliases;
Python code uses the snake_case field names.
"""

from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

LIQUIDITY_NOTE = "N/A - requires DEX-specific data"

AuditFlag = Literal["yes", "no"]


class HolderEntry(BaseModel):
    """
    One of the largest token accounts for a mint.

    Sourced verbatim from the RPC account list and only lives
    as long as the request that produced it.
    """

    address: str
    """Token account address"""

    amount: Decimal = Field(default=Decimal(0), alias="uiAmount")
    """Balance in UI units (decimals applied)"""

    amount_display: str = Field(default="0", alias="uiAmountString")
    """Balance exactly as the provider printed it"""

    model_config = ConfigDict(populate_by_name=True)


class TokenDetail(BaseModel):
    """
    On-chain metrics of a token mint.

    Holders are rank-ordered, largest balance first. Truncating to a
    top-N list is left to whoever renders the detail.
    """

    supply: Decimal = Field(default=Decimal(0), alias="tokenSupply")
    """Total supply in UI units (0 when unknown)"""

    holders: list[HolderEntry] = Field(default_factory=list, alias="largestAccounts")
    """Largest accounts, descending by balance"""

    mint_authority: str | None = Field(default=None, alias="mintAuthority")
    """Mint authority address (None = revoked or unknown)"""

    freeze_authority: str | None = Field(default=None, alias="freezeAuthority")
    """Freeze authority address (None = none or unknown)"""

    liquidity_note: str = Field(default=LIQUIDITY_NOTE, alias="liquidity")
    """Liquidity placeholder until DEX-specific data is wired in"""

    model_config = ConfigDict(populate_by_name=True)

    def top_holders(self, count: int) -> list[HolderEntry]:
        """Return at most `count` of the largest holders."""
        return self.holders[:count]


class TrendingPool(BaseModel):
    """
    A pool from the market-data provider's ranking.

    `name` and `symbol` are "main/side" pair labels. Price and volume
    stay None when the provider omits them.
    """

    name: str
    symbol: str
    price_usd: Decimal | None = None
    volume_usd: Decimal | None = None
    url: str | None = None


class TrendingRow(BaseModel):
    """Display-ready trending pool as served by the gateway."""

    name: str
    symbol: str
    price: str = "N/A"
    volume: str = "N/A"
    url: str = "N/A"


class SocialLinks(BaseModel):
    """
    Social presence of a token.

    All three links absent is the "not found" condition,
    not a valid empty result.
    """

    telegram: str | None = None
    twitter: str | None = None
    website: str | None = None

    @field_validator("telegram", "twitter", "website", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_empty(self) -> bool:
        """True when no link is present."""
        return not (self.telegram or self.twitter or self.website)


class AuditReport(BaseModel):
    """
    Security audit flags for a token.

    The provider is not trusted to send a complete record: each flag
    defaults to "no" and anything that is not an explicit yes reads as "no".
    """

    is_honeypot: AuditFlag = "no"
    is_mintable: AuditFlag = "no"
    slippage_modifiable: AuditFlag = "no"
    is_contract_renounced: AuditFlag = "no"
    is_potentially_scam: AuditFlag = "no"

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_flag(cls, value: Any) -> str:
        if value is True:
            return "yes"
        if isinstance(value, str) and value.strip().lower() in ("yes", "true"):
            return "yes"
        return "no"


# =============================================================================
# HTTP payloads
# =============================================================================


class TrendingPayload(BaseModel):
    """Body of GET /api/dextools/trending."""

    trending: list[TrendingRow]


class SocialsPayload(BaseModel):
    """Body of GET /api/dextools/socials/{contract_address}."""

    socials: SocialLinks


class AuditPayload(BaseModel):
    """Body of GET /api/dextools/audit/{contract_address}."""

    audit: AuditReport

