"""
dYdX v3 Private API Client

API Documentation:
    https://docs.dydx.exchange/#private-http-api

Endpoints Used:
    GET /v3/accounts - Accounts of the API key's user (requires signed request)

Authentication:
    Every private request carries four headers:
        DYDX-API-KEY, DYDX-PASSPHRASE, DYDX-TIMESTAMP (ISO 8601),
        DYDX-SIGNATURE = urlsafe_b64(HMAC-SHA256(urlsafe_b64decode(secret),
                                                 timestamp + method + path + body))
"""

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from adapters.base_client import BaseAPIClient


class DydxApiKeyCredentials(BaseModel):
    """API key triple issued by dYdX for one maker address."""

    key: str
    secret: str
    passphrase: str


def sign_request(
    credentials: DydxApiKeyCredentials,
    timestamp: str,
    method: str,
    request_path: str,
    body: str = ""
) -> str:
    """
    Compute the DYDX-SIGNATURE header value.

    Args:
        credentials: API key credentials (secret is urlsafe base64)
        timestamp: ISO 8601 timestamp also sent as DYDX-TIMESTAMP
        method: HTTP method in uppercase
        request_path: Path including query string (e.g., "/v3/accounts")
        body: Raw JSON body ("" for GET)
    """
    message = f"{timestamp}{method.upper()}{request_path}{body}"
    digest = hmac.new(
        base64.urlsafe_b64decode(credentials.secret),
        message.encode(),
        hashlib.sha256
    ).digest()
    return base64.urlsafe_b64encode(digest).decode()


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """Current UTC time in the millisecond ISO format dYdX expects."""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class DydxAPIClient(BaseAPIClient):
    """
    Async HTTP client for the dYdX v3 private API.

    Example:
        >>> async with DydxAPIClient("https://api.dydx.exchange") as client:
        ...     accounts = await client.get_accounts(credentials)
        ...     print(accounts[0]["equity"])
    """

    source = "dydx"

    def _auth_headers(self, credentials: DydxApiKeyCredentials, method: str, request_path: str) -> Dict[str, str]:
        timestamp = iso_timestamp()
        return {
            "DYDX-API-KEY": credentials.key,
            "DYDX-PASSPHRASE": credentials.passphrase,
            "DYDX-TIMESTAMP": timestamp,
            "DYDX-SIGNATURE": sign_request(credentials, timestamp, method, request_path),
        }

    async def get_accounts(self, credentials: DydxApiKeyCredentials) -> List[Dict[str, Any]]:
        """
        Fetch the accounts owned by the credentials' user.

        Response Format:
            {"accounts": [{"positionId": "1812", "equity": "10000.5", "quoteBalance": "10000.5", ...}]}

        Raises:
            ValueError: If the payload has no accounts list
        """
        path = "/v3/accounts"
        headers = self._auth_headers(credentials, "GET", path)
        data = await self._get(path, headers=headers)

        accounts = data.get("accounts") if isinstance(data, dict) else None
        if not isinstance(accounts, list):
            raise ValueError(f"Unexpected dYdX accounts payload: {data!r}")
        return accounts
