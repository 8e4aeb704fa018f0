"""
Application settings loaded from environment variables.

Uses pydantic-settings for automatic loading from .env file.
All settings have sensible defaults for development mode.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration.

    All values are loaded from environment variables.

    Attributes:
        environment: Runtime environment (development/production)
        use_mock_services: Use mock upstream providers instead of real APIs
        log_level: Logging verbosity
        solana_rpc_url: Solana JSON-RPC endpoint
        dextools_api_key: DEXTools API key (optional in mock mode)
        dextools_base_url: DEXTools REST base URL (plan-specific)
        dextools_chain: Chain slug used in DEXTools paths
        api_timeout_seconds: Timeout for each upstream call made by the gateway
        gateway_host: Interface the gateway binds to
        gateway_port: Port the gateway listens on
        gateway_url: Base URL the shell uses to reach the gateway
        shell_request_timeout_seconds: Overall timeout of one shell -> gateway call
        check_display_delay_seconds: Minimum loading span for `check` (0 disables)
    """

    # Environment
    environment: Literal["development", "production"] = "development"
    use_mock_services: bool = True

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Upstream providers
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    dextools_api_key: str = ""
    dextools_base_url: str = "https://public-api.dextools.io/trial/v2"
    dextools_chain: str = "solana"

    # Timeouts
    api_timeout_seconds: float = 10

    # Gateway
    gateway_host: str = "127.0.0.1"
    gateway_port: int = 3001

    # Shell
    gateway_url: str = "http://localhost:3001"
    shell_request_timeout_seconds: float = 15
    check_display_delay_seconds: float = 2.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and reused throughout the application.

    Returns:
        Settings instance with all configuration values.
    """
    return Settings()
