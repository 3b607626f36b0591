"""
dYdX Balance Adapter

Serves chain IDs 11 (mainnet) and 511 (staging). dYdX balances are private, so each
maker address needs its own API key credentials; makers without credentials resolve
to no value before any request is made.

The balance reported is the first account's equity in USDC, scaled to 6 decimals.
"""

from decimal import Decimal
from typing import Optional
from core.adapter_interface import BalanceAdapter
from core.chains import ChainFamily, is_testnet
from core.logging import logger
from core.utils.amounts import format_decimal
from .api_client import DydxAPIClient, DydxApiKeyCredentials

USDC_DECIMALS = 6


class DydxAdapter(BalanceAdapter):
    """dYdX v3 adapter."""

    name = "dydx"
    families = [ChainFamily.DYDX]

    def __init__(self):
        from core.config import settings

        self.mainnet_client = DydxAPIClient(settings.dydx_api_url)
        self.testnet_client = DydxAPIClient(settings.dydx_test_api_url)

    async def initialize(self) -> None:
        await self.mainnet_client.__aenter__()
        await self.testnet_client.__aenter__()
        logger.info("✓ dYdX adapter initialized")

    async def shutdown(self) -> None:
        await self.mainnet_client.__aexit__(None, None, None)
        await self.testnet_client.__aexit__(None, None, None)
        logger.info("✓ dYdX adapter shut down")

    @staticmethod
    def get_api_key_credentials(maker_address: str) -> Optional[DydxApiKeyCredentials]:
        """Credentials configured for a maker address, or None."""
        from core.config import settings

        raw = settings.dydx_credentials_map.get(maker_address.lower())
        if not raw:
            return None
        return DydxApiKeyCredentials.model_validate(raw)

    def client_for(self, chain_id: int) -> DydxAPIClient:
        return self.testnet_client if is_testnet(chain_id) else self.mainnet_client

    async def get_balance(
        self,
        maker_address: str,
        chain_id: int,
        chain_name: str,
        token_address: str,
        token_name: str
    ) -> Optional[str]:
        credentials = self.get_api_key_credentials(maker_address)
        if credentials is None:
            logger.debug(f"No dYdX credentials for {maker_address}, skipping")
            return None

        accounts = await self.client_for(chain_id).get_accounts(credentials)
        if not accounts:
            return None

        equity = Decimal(str(accounts[0].get("equity") or 0))
        return format_decimal((equity * (Decimal(10) ** USDC_DECIMALS)).to_integral_value())
