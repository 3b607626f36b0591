"""
Loopring Balance Adapter

Serves chain IDs 9 (mainnet) and 99 (testnet). Two calls per balance: resolve the
maker's account ID, then read its ETH balance net of locked and pending-withdraw amounts.

Only ETH (token ID 0) is read. Token slots resolve to no value without a request,
since the maker list carries L1 token addresses, not Loopring token IDs.
"""

from decimal import Decimal
from typing import Any, Dict, Optional
from core.adapter_interface import BalanceAdapter
from core.chains import ChainFamily, is_testnet
from core.logging import logger
from core.utils.amounts import format_decimal, is_native_token_address
from .api_client import LoopringAPIClient


def available_balance(entry: Dict[str, Any]) -> str:
    """
    Spendable balance of one Loopring balance entry: total - locked - withdraw.

    Older API versions report the withdraw amount as "withDraw" at top level,
    newer ones under "pending.withdraw".
    """
    pending = entry.get("pending") or {}
    total = Decimal(str(entry.get("total") or 0))
    locked = Decimal(str(entry.get("locked") or 0))
    withdraw = Decimal(str(entry.get("withDraw") or pending.get("withdraw") or 0))
    return format_decimal(total - locked - withdraw)


class LoopringAdapter(BalanceAdapter):
    """Loopring L2 adapter."""

    name = "loopring"
    families = [ChainFamily.LOOPRING]

    def __init__(self):
        from core.config import settings

        self.mainnet_client = LoopringAPIClient(settings.loopring_api_url, api_key=settings.loopring_api_key)
        self.testnet_client = LoopringAPIClient(settings.loopring_test_api_url, api_key=settings.loopring_api_key)

    async def initialize(self) -> None:
        await self.mainnet_client.__aenter__()
        await self.testnet_client.__aenter__()
        logger.info("✓ Loopring adapter initialized")

    async def shutdown(self) -> None:
        await self.mainnet_client.__aexit__(None, None, None)
        await self.testnet_client.__aexit__(None, None, None)
        logger.info("✓ Loopring adapter shut down")

    def client_for(self, chain_id: int) -> LoopringAPIClient:
        return self.testnet_client if is_testnet(chain_id) else self.mainnet_client

    async def get_balance(
        self,
        maker_address: str,
        chain_id: int,
        chain_name: str,
        token_address: str,
        token_name: str
    ) -> Optional[str]:
        if not is_native_token_address(token_address):
            logger.debug(f"Loopring token balances are not supported ({token_name}), skipping")
            return None

        client = self.client_for(chain_id)

        account_id = await client.get_account_id(maker_address)
        if account_id is None:
            return None

        balances = await client.get_balances(account_id, tokens="0")
        if not balances:
            return "0"

        return available_balance(balances[0])
