"""
ImmutableX REST API Client

API Documentation:
    https://docs.x.immutable.com/reference

Endpoints Used:
    GET /v2/balances/{owner}/{address} - Balance of one token ("ETH" for ether)
"""

from typing import Optional
from adapters.base_client import BaseAPIClient


class IMXAPIClient(BaseAPIClient):
    """
    Async HTTP client for the ImmutableX public API.

    Example:
        >>> async with IMXAPIClient("https://api.x.immutable.com") as client:
        ...     raw = await client.get_balance("0xabc", "ETH")
    """

    source = "immutablex"

    async def get_balance(self, owner: str, token: str) -> Optional[str]:
        """
        Fetch the balance of one token.

        Args:
            owner: Wallet address
            token: "ETH" or an ERC20 token address

        Response Format:
            {"symbol": "ETH", "balance": "1500000000000000000",
             "preparing_withdrawal": "0", "withdrawable": "0"}

        Returns:
            Raw balance string, or None if the payload has no balance
        """
        self.logger.debug(f"Fetching IMX balance: {owner} {token}")
        data = await self._get(f"/v2/balances/{owner}/{token}")
        if not isinstance(data, dict) or data.get("balance") is None:
            return None
        return str(data["balance"])
