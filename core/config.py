"""
Settings

All runtime configuration comes from environment variables or a .env file in the
working directory, read once at import through pydantic-settings.

Two settings hold structured values in string form and are parsed on access:
    RPC_ENDPOINTS          mainnet=https://...,metis=https://andromeda.metis.io
    DYDX_API_CREDENTIALS   {"0xmaker": {"key": "...", "secret": "...", "passphrase": "..."}}

Usage:
    from core.config import settings

    settings.get_rpc_endpoint("mainnet")
    settings.dydx_credentials_map.get("0xmaker")
"""

import json
from typing import Dict, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """
    Maker wealth service settings (env var name = field name, any case).

    Attributes:
        app_host: Host address for FastAPI server
        app_port: Port number for FastAPI server
        environment: Current environment (development, production)
        log_level: Logging level name
        fetch_concurrency: Maximum number of balance fetches in flight at once
        fetch_timeout: Timeout for a single balance fetch in seconds
        request_timeout: Timeout for HTTP requests in seconds
        maker_list_path: JSON file holding the maker pair entries
        database_path: SQLite file receiving wealth snapshots
        rpc_endpoints: Comma-separated "chainName=url" node RPC endpoints
        dydx_api_credentials: JSON object of dYdX API credentials per maker address
    """

    # ============================================
    # Application Configuration
    # ============================================

    app_host: str = Field(
        default="0.0.0.0",
        description="FastAPI server host address"
    )

    app_port: int = Field(
        default=8000,
        description="FastAPI server port"
    )

    environment: str = Field(
        default="development",
        description="Application environment (development, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # ============================================
    # Balance Fan-out
    # ============================================

    fetch_concurrency: int = Field(
        default=16,
        description="Maximum number of balance fetches running concurrently"
    )

    fetch_timeout: float = Field(
        default=20.0,
        description="Timeout for a single balance fetch (seconds)"
    )

    request_timeout: int = Field(
        default=10,
        description="HTTP request timeout in seconds"
    )

    # ============================================
    # Registry & Storage
    # ============================================

    maker_list_path: str = Field(
        default="makers.json",
        description="Path of the JSON maker list"
    )

    database_path: str = Field(
        default="data/maker_wealth.db",
        description="SQLite database receiving wealth snapshots"
    )

    # ============================================
    # L2 REST APIs
    # ============================================

    zksync_api_url: str = Field(
        default="https://api.zksync.io/api/v0.2",
        description="zkSync Lite API base URL"
    )

    zksync_test_api_url: str = Field(
        default="https://rinkeby-api.zksync.io/api/v0.2",
        description="zkSync Lite testnet API base URL"
    )

    loopring_api_url: str = Field(
        default="https://api3.loopring.io/api/v3",
        description="Loopring API base URL"
    )

    loopring_test_api_url: str = Field(
        default="https://uat2.loopring.io/api/v3",
        description="Loopring testnet API base URL"
    )

    loopring_api_key: str = Field(
        default="",
        description="Loopring API key (sent as X-API-KEY when set)"
    )

    starknet_mainnet_rpc_url: str = Field(
        default="https://starknet-mainnet.public.blastapi.io",
        description="Starknet mainnet-alpha JSON-RPC endpoint"
    )

    starknet_goerli_rpc_url: str = Field(
        default="https://starknet-testnet.public.blastapi.io",
        description="Starknet goerli-alpha JSON-RPC endpoint"
    )

    imx_api_url: str = Field(
        default="https://api.x.immutable.com",
        description="ImmutableX API base URL"
    )

    imx_test_api_url: str = Field(
        default="https://api.sandbox.x.immutable.com",
        description="ImmutableX sandbox API base URL"
    )

    dydx_api_url: str = Field(
        default="https://api.dydx.exchange",
        description="dYdX v3 API base URL"
    )

    dydx_test_api_url: str = Field(
        default="https://api.stage.dydx.exchange",
        description="dYdX v3 staging API base URL"
    )

    # ============================================
    # Node RPC & Credentials
    # ============================================

    rpc_endpoints: str = Field(
        default="",
        description="Comma-separated chainName=url node RPC endpoints"
    )

    dydx_api_credentials: str = Field(
        default="",
        description='JSON object: {"0xmaker": {"key": ..., "secret": ..., "passphrase": ...}}'
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # ============================================
    # Parsed Values
    # ============================================

    @property
    def rpc_endpoints_map(self) -> Dict[str, str]:
        """
        Convert the "chainName=url" list into a dictionary.

        Chain names are matched case-insensitively, so keys are lowercased.

        Example:
            >>> settings.rpc_endpoints_map
            {'mainnet': 'https://eth-mainnet.g.alchemy.com/v2/KEY', 'metis': 'https://andromeda.metis.io'}
        """
        endpoints = {}
        for pair in self.rpc_endpoints.split(","):
            if not pair.strip():
                continue
            name, sep, url = pair.partition("=")
            if not sep or not name.strip() or not url.strip():
                raise ValueError(f"Invalid RPC endpoint entry: '{pair.strip()}' (expected chainName=url)")
            endpoints[name.strip().lower()] = url.strip()
        return endpoints

    @property
    def dydx_credentials_map(self) -> Dict[str, Dict[str, str]]:
        """
        Parse dYdX API credentials keyed by lowercased maker address.

        Returns:
            Mapping of maker address to {"key", "secret", "passphrase"}
        """
        if not self.dydx_api_credentials.strip():
            return {}
        raw = json.loads(self.dydx_api_credentials)
        if not isinstance(raw, dict):
            raise ValueError("DYDX_API_CREDENTIALS must be a JSON object keyed by maker address")
        return {address.lower(): creds for address, creds in raw.items()}

    def get_rpc_endpoint(self, chain_name: str) -> Optional[str]:
        """Node RPC URL configured for a chain name, or None."""
        return self.rpc_endpoints_map.get((chain_name or "").lower())


# ============================================
# Global Settings Instance
# ============================================

settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration() -> None:
    """
    Validate critical configuration settings on application startup.

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # core.logging reads settings at import
    from core.logging import logger

    if not (1 <= settings.app_port <= 65535):
        raise ValueError(f"Invalid port number: {settings.app_port}. Must be between 1 and 65535")

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if settings.log_level.upper() not in valid_log_levels:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{settings.log_level}'. "
            f"Must be one of: {', '.join(valid_log_levels)}"
        )

    if settings.fetch_concurrency < 1:
        raise ValueError(f"FETCH_CONCURRENCY must be at least 1, got {settings.fetch_concurrency}")

    if settings.fetch_timeout <= 0 or settings.request_timeout <= 0:
        raise ValueError("FETCH_TIMEOUT and REQUEST_TIMEOUT must be positive")

    # Both properties raise on malformed input
    endpoints = settings.rpc_endpoints_map
    try:
        credentials = settings.dydx_credentials_map
    except json.JSONDecodeError as e:
        raise ValueError(f"DYDX_API_CREDENTIALS is not valid JSON: {e}")

    logger.info("Configuration validated successfully")
    logger.info(f"Node RPC endpoints: {', '.join(endpoints) or 'none'}")
    logger.info(f"dYdX credentials configured for {len(credentials)} maker(s)")
    logger.info(f"Fan-out: concurrency={settings.fetch_concurrency}, timeout={settings.fetch_timeout}s")
    logger.info(f"Maker list: {settings.maker_list_path}")
    logger.info(f"Database: {settings.database_path}")
    logger.info(f"Server: {settings.app_host}:{settings.app_port}")
    logger.info(f"Log level: {settings.log_level.upper()}")
