"""
zkSync Lite Balance Adapter

Serves chain IDs 3 (mainnet) and 33 (testnet). zkSync keys balances by token symbol,
so the slot's token name (uppercased) selects the balance, not its address.
"""

from typing import Optional
from core.adapter_interface import BalanceAdapter
from core.chains import ChainFamily, is_testnet
from core.logging import logger
from .api_client import ZkSyncAPIClient


class ZkSyncAdapter(BalanceAdapter):
    """
    zkSync Lite adapter.

    Attributes:
        mainnet_client: Client for the production API
        testnet_client: Client for the testnet API
    """

    name = "zksync"
    families = [ChainFamily.ZKSYNC]

    def __init__(self):
        from core.config import settings

        self.mainnet_client = ZkSyncAPIClient(settings.zksync_api_url)
        self.testnet_client = ZkSyncAPIClient(settings.zksync_test_api_url)

    async def initialize(self) -> None:
        await self.mainnet_client.__aenter__()
        await self.testnet_client.__aenter__()
        logger.info("✓ zkSync adapter initialized")

    async def shutdown(self) -> None:
        await self.mainnet_client.__aexit__(None, None, None)
        await self.testnet_client.__aexit__(None, None, None)
        logger.info("✓ zkSync adapter shut down")

    def client_for(self, chain_id: int) -> ZkSyncAPIClient:
        return self.testnet_client if is_testnet(chain_id) else self.mainnet_client

    async def get_balance(
        self,
        maker_address: str,
        chain_id: int,
        chain_name: str,
        token_address: str,
        token_name: str
    ) -> Optional[str]:
        balances = await self.client_for(chain_id).get_committed_balances(maker_address)
        if balances is None:
            return None
        return balances.get(token_name.upper())
