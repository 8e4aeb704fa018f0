"""
Core module - models, protocols, and exceptions.

This module contains the fundamental building blocks of the application:
- Data models (Pydantic)
- Protocol definitions (interfaces)
- Custom exceptions
"""

from cube.core.exceptions import (
    CubeError,
    InvalidAddressError,
    NoDataFoundError,
    TransportError,
    UpstreamError,
    UpstreamUnavailableError,
)
from cube.core.models import (
    AuditReport,
    HolderEntry,
    SocialLinks,
    TokenDetail,
    TrendingPool,
    TrendingRow,
)
from cube.core.protocols import GatewayApi, MarketDataProvider, TokenRpcProvider

__all__ = [
    # Exceptions
    "CubeError",
    "InvalidAddressError",
    "UpstreamUnavailableError",
    "UpstreamError",
    "NoDataFoundError",
    "TransportError",
    # Models
    "HolderEntry",
    "TokenDetail",
    "TrendingPool",
    "TrendingRow",
    "SocialLinks",
    "AuditReport",
    # Protocols
    "TokenRpcProvider",
    "MarketDataProvider",
    "GatewayApi",
]
