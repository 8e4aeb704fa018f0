"""Utility functions."""

from cube.utils.formatters import (
    format_amount,
    format_percentage,
    holder_percentage,
    render_audit,
    render_socials,
    render_token_detail,
    render_trending,
    to_trending_row,
)
from cube.utils.validators import (
    is_valid_solana_address,
    require_solana_address,
    validate_solana_address,
)

__all__ = [
    "validate_solana_address",
    "is_valid_solana_address",
    "require_solana_address",
    "format_amount",
    "format_percentage",
    "holder_percentage",
    "to_trending_row",
    "render_token_detail",
    "render_trending",
    "render_socials",
    "render_audit",
]
