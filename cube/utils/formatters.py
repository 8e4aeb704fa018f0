"""
Output formatters for the command shell and the gateway.

Turns normalized models into display strings. Every optional value
has an explicit fallback.
"""

from decimal import Decimal

from cube.core.models import AuditReport, SocialLinks, TokenDetail, TrendingPool, TrendingRow

NOT_AVAILABLE = "N/A"

# Holders shown by `check`
TOP_HOLDERS = 10

AUDIT_LABELS = {
    "is_honeypot": "Is Honeypot",
    "is_mintable": "Is Mintable",
    "slippage_modifiable": "Slippage Modifiable",
    "is_contract_renounced": "Is Contract Renounced",
    "is_potentially_scam": "Is Potentially Scam",
}


def format_amount(value: Decimal) -> str:
    """
    Format a token amount without exponent or trailing zeros.

    >>> format_amount(Decimal("1000000.0"))
    '1000000'
    """
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def holder_percentage(amount: Decimal, supply: Decimal) -> Decimal:
    """
    Share of supply held by one account, in percent.

    Unknown or zero supply yields 0 instead of dividing by zero.
    """
    if supply <= 0:
        return Decimal(0)
    return amount / supply * 100


def format_percentage(value: Decimal) -> str:
    """Format a percentage with two decimals, e.g. '60.00%'."""
    return f"{value:.2f}%"


def format_price_usd(value: Decimal | None) -> str:
    """Format a USD price as '$1.23', or N/A when unknown."""
    if value is None:
        return NOT_AVAILABLE
    return f"${value:.2f}"


def format_volume_usd(value: Decimal | None) -> str:
    """Format a USD volume as '$1,234,567.89', or N/A when unknown."""
    if value is None:
        return NOT_AVAILABLE
    return f"${value:,.2f}"


def to_trending_row(pool: TrendingPool) -> TrendingRow:
    """Project a trending pool onto its display row."""
    return TrendingRow(
        name=pool.name,
        symbol=pool.symbol,
        price=format_price_usd(pool.price_usd),
        volume=format_volume_usd(pool.volume_usd),
        url=pool.url or NOT_AVAILABLE,
    )


def render_token_detail(detail: TokenDetail, top: int = TOP_HOLDERS) -> list[str]:
    """
    Render `check` output.

    Args:
        detail: Token detail returned by the gateway
        top: Number of holders to list

    Returns:
        Log lines in display order
    """
    lines = [
        "Token Details:",
        f"  Supply: {format_amount(detail.supply)}",
        f"  Mint Authority: {detail.mint_authority or 'Revoked or null'}",
        f"  Freeze Authority: {detail.freeze_authority or 'None'}",
        f"  Liquidity: {detail.liquidity_note}",
        f"Top {top} Largest Accounts:",
    ]
    for rank, holder in enumerate(detail.top_holders(top), start=1):
        share = holder_percentage(holder.amount, detail.supply)
        lines.append(
            f"{rank}. Address: {holder.address}, "
            f"Amount: {holder.amount_display} ({format_percentage(share)})"
        )
    return lines


def render_trending(rows: list[TrendingRow], limit: int) -> list[str]:
    """Render `trending` output as a numbered list."""
    lines = [f"Top {limit} Trending Coins on Dextools:"]
    lines.extend(
        f"{rank}. Name: {row.name} ({row.symbol})"
        for rank, row in enumerate(rows, start=1)
    )
    return lines


def render_socials(links: SocialLinks) -> list[str]:
    """Render `socials` output."""
    return [
        "Social Links:",
        f"  Telegram: {links.telegram or NOT_AVAILABLE}",
        f"  Twitter: {links.twitter or NOT_AVAILABLE}",
        f"  Website: {links.website or NOT_AVAILABLE}",
    ]


def render_audit(report: AuditReport) -> list[str]:
    """Render `audit` output, one line per flag."""
    lines = ["Audit Information:"]
    lines.extend(
        f"  {label}: {getattr(report, field)}" for field, label in AUDIT_LABELS.items()
    )
    return lines
