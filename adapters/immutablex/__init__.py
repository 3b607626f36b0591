"""
ImmutableX Balance Adapter

Serves chain IDs 8 (mainnet) and 88 (sandbox).
"""

from typing import Optional
from core.adapter_interface import BalanceAdapter
from core.chains import ChainFamily, is_testnet
from core.logging import logger
from core.utils.amounts import is_native_token_address
from .api_client import IMXAPIClient


class IMXAdapter(BalanceAdapter):
    """ImmutableX adapter."""

    name = "immutablex"
    families = [ChainFamily.IMMUTABLEX]

    def __init__(self):
        from core.config import settings

        self.mainnet_client = IMXAPIClient(settings.imx_api_url)
        self.testnet_client = IMXAPIClient(settings.imx_test_api_url)

    async def initialize(self) -> None:
        await self.mainnet_client.__aenter__()
        await self.testnet_client.__aenter__()
        logger.info("✓ ImmutableX adapter initialized")

    async def shutdown(self) -> None:
        await self.mainnet_client.__aexit__(None, None, None)
        await self.testnet_client.__aexit__(None, None, None)
        logger.info("✓ ImmutableX adapter shut down")

    def client_for(self, chain_id: int) -> IMXAPIClient:
        return self.testnet_client if is_testnet(chain_id) else self.mainnet_client

    async def get_balance(
        self,
        maker_address: str,
        chain_id: int,
        chain_name: str,
        token_address: str,
        token_name: str
    ) -> Optional[str]:
        token = "ETH" if is_native_token_address(token_address) else token_address.lower()
        return await self.client_for(chain_id).get_balance(maker_address.lower(), token)
