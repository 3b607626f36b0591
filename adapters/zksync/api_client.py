"""
zkSync Lite REST API Client

API Documentation:
    https://docs.zksync.io/apiv02-docs/

Endpoints Used:
    GET /accounts/{address}/committed - Committed account state (balances keyed by token symbol)
"""

from typing import Dict, Optional
from adapters.base_client import BaseAPIClient


class ZkSyncAPIClient(BaseAPIClient):
    """
    Async HTTP client for the zkSync Lite v0.2 API.

    Example:
        >>> async with ZkSyncAPIClient("https://api.zksync.io/api/v0.2") as client:
        ...     balances = await client.get_committed_balances("0xabc")
        ...     print(balances.get("ETH"))
    """

    source = "zksync"

    async def get_committed_balances(self, address: str) -> Optional[Dict[str, str]]:
        """
        Fetch committed balances of an account.

        Args:
            address: Account address

        Returns:
            Mapping of uppercase token symbol to raw balance string,
            or None if the API did not report success

        Response Format:
            {
              "status": "success",
              "result": {
                "balances": {"ETH": "1500000000000000000", "USDC": "2500000"},
                ...
              }
            }
        """
        self.logger.debug(f"Fetching committed state: {address}")

        data = await self._get(f"/accounts/{address}/committed")

        if not isinstance(data, dict) or data.get("status") != "success":
            return None

        result = data.get("result") or {}
        balances = result.get("balances")
        if not balances:
            return None

        return {str(symbol).upper(): str(amount) for symbol, amount in balances.items()}
