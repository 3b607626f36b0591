"""
Loopring REST API Client

API Documentation:
    https://docs.loopring.io/en/

Endpoints Used:
    GET /account?owner={address}                      - Resolve owner address to account ID
    GET /user/balances?accountId={id}&tokens={ids}    - Token balances of an account

Notes:
    - /user/balances requires an X-API-KEY header on production
    - Token ID 0 is ETH
"""

from typing import Any, Dict, List, Optional
from adapters.base_client import BaseAPIClient


class LoopringAPIClient(BaseAPIClient):
    """
    Async HTTP client for the Loopring v3 API.

    Example:
        >>> async with LoopringAPIClient("https://api3.loopring.io/api/v3") as client:
        ...     account_id = await client.get_account_id("0xabc")
        ...     balances = await client.get_balances(account_id)
    """

    source = "loopring"

    def __init__(self, base_url: str, api_key: str = "", **kwargs):
        super().__init__(base_url, **kwargs)
        self.api_key = api_key

    def _headers(self) -> Dict[str, str]:
        return {"X-API-KEY": self.api_key} if self.api_key else {}

    async def get_account_id(self, owner: str) -> Optional[int]:
        """
        Resolve an owner address to its Loopring account ID.

        Response Format:
            {"accountId": 10183, "owner": "0xabc...", "publicKey": {...}, "nonce": 3}

        Returns:
            Account ID, or None if the response carries none
        """
        self.logger.debug(f"Fetching account: {owner}")
        data = await self._get("/account", {"owner": owner}, headers=self._headers())
        if not isinstance(data, dict) or data.get("accountId") is None:
            return None
        return int(data["accountId"])

    async def get_balances(self, account_id: int, tokens: str = "0") -> List[Dict[str, Any]]:
        """
        Fetch balances of an account.

        Args:
            account_id: Loopring account ID
            tokens: Comma-separated token IDs (default "0" = ETH)

        Response Format:
            [
              {"accountId": 10183, "tokenId": 0, "total": "2000000000000000000",
               "locked": "0", "pending": {"withdraw": "0", "deposit": "0"}}
            ]

        Raises:
            ValueError: If the response is not a list
        """
        params = {"accountId": account_id, "tokens": tokens}
        data = await self._get("/user/balances", params, headers=self._headers())
        if not isinstance(data, list):
            raise ValueError(f"Unexpected Loopring balances payload: {data!r}")
        return data
