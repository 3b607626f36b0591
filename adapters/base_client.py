"""
Base Async HTTP Client

Shared plumbing for every chain-family API client:
- aiohttp ClientSession lifecycle (async context manager)
- GET and JSON POST with retry logic
- Rate limit handling (429, 418, 503 errors)
- JSON-RPC 2.0 calls (node RPC, Starknet RPC)

Family clients subclass BaseAPIClient and only add endpoint methods.

Usage:
    async with ZkSyncAPIClient(base_url) as client:
        balances = await client.get_committed_balances("0xabc")
"""

import aiohttp
import asyncio
import itertools
import time
from typing import Dict, List, Optional, Any
from core.logging import get_logger, log_api_request, log_api_response


class BaseAPIClient:
    """
    Async HTTP client with retry logic.

    Attributes:
        source: Short name used in log lines (e.g., "zksync")
        base_url: API base URL, paths are appended to it
        session: aiohttp ClientSession for HTTP requests
        timeout: Per-request timeout in seconds

    Notes:
        - A session passed to the constructor is shared and never closed by this client
        - Without a shared session, use "async with" (or __aenter__) before requests
    """

    source = "http"
    max_attempts = 3

    def __init__(
        self,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None
    ):
        # Import settings here to avoid circular imports
        from core.config import settings

        self.base_url = base_url.rstrip("/")
        self.session: Optional[aiohttp.ClientSession] = session
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.logger = get_logger(self.__class__.__module__)
        self._owns_session = session is None
        self._rpc_ids = itertools.count(1)

    # ============================================
    # Context Manager for Session Management
    # ============================================

    async def __aenter__(self):
        """
        Enter async context - creates HTTP session unless one was shared.

        Returns:
            Self for use in async with statement
        """
        if self._owns_session and self.session is None:
            self.session = aiohttp.ClientSession()
            self.logger.debug(f"{self.__class__.__name__} session created")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """
        Exit async context - closes the HTTP session if this client owns it.
        """
        if self._owns_session and self.session:
            await self.session.close()
            self.session = None
            self.logger.debug(f"{self.__class__.__name__} session closed")

    # ============================================
    # HTTP Request Handlers with Retry Logic
    # ============================================

    async def _get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        Make GET request with retry logic.

        Args:
            path: Endpoint path appended to base_url (e.g., "/accounts/0xabc/committed")
            params: Optional query parameters
            headers: Optional extra headers

        Returns:
            JSON response from API

        Raises:
            RuntimeError: If request fails after all retries or on a non-retryable status
        """
        return await self._request("GET", path, params=params, headers=headers)

    async def _post(
        self,
        path: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        Make JSON POST request with retry logic.

        Raises:
            RuntimeError: If request fails after all retries or on a non-retryable status
        """
        return await self._request("POST", path, payload=payload, headers=headers)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        Shared request loop.

        Rate Limit Handling:
            - 429: Too many requests
            - 418: IP banned (temporary)
            - 503: Service unavailable

            Retry delay: 1.5s * (attempt + 1)
        """
        if not self.session:
            raise RuntimeError("Client session not initialized. Use 'async with' statement.")

        url = f"{self.base_url}{path}"

        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        log_api_request(self.source, path or method, params)
        started = time.monotonic()

        for attempt in range(self.max_attempts):
            try:
                async with self.session.request(
                    method,
                    url,
                    params=params,
                    json=payload,
                    headers=request_headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as resp:
                    if resp.status == 200:
                        data = await resp.json(content_type=None)
                        log_api_response(self.source, path or method, resp.status, time.monotonic() - started)
                        self.logger.debug(f"{method} {self.source}{path} - Success (attempt {attempt + 1})")
                        return data

                    elif resp.status in (429, 418, 503):
                        delay = 1.5 * (attempt + 1)
                        self.logger.warning(
                            f"Rate limited (HTTP {resp.status}) on {self.source}{path}. "
                            f"Retrying in {delay:.1f}s... (attempt {attempt + 1}/{self.max_attempts})"
                        )
                        await asyncio.sleep(delay)
                        continue

                    else:
                        text = await resp.text()
                        raise RuntimeError(f"HTTP {resp.status} on {self.source}{path}: {text[:200]}")

            except asyncio.TimeoutError:
                self.logger.warning(f"Timeout on {self.source}{path} (attempt {attempt + 1}/{self.max_attempts})")
                await asyncio.sleep(1.0 * (attempt + 1))

            except aiohttp.ClientError as e:
                self.logger.warning(f"Request failed on {self.source}{path}: {e} (attempt {attempt + 1}/{self.max_attempts})")
                await asyncio.sleep(1.0 * (attempt + 1))

        raise RuntimeError(f"Failed to fetch {url} after {self.max_attempts} attempts")

    # ============================================
    # JSON-RPC
    # ============================================

    async def _rpc(self, method: str, params: List[Any]) -> Any:
        """
        Make a JSON-RPC 2.0 call against base_url.

        Args:
            method: RPC method name (e.g., "eth_getBalance")
            params: Positional RPC parameters

        Returns:
            The "result" member of the response

        Raises:
            RuntimeError: On transport failure or an RPC error object
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._rpc_ids),
            "method": method,
            "params": params,
        }
        data = await self._post("", payload)

        if not isinstance(data, dict):
            raise RuntimeError(f"Malformed RPC response for {method}: {data!r}")
        if data.get("error"):
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise RuntimeError(f"RPC {method} failed: {message}")
        if "result" not in data:
            raise RuntimeError(f"RPC {method} returned no result")

        self.logger.debug(f"RPC {method} -> {data['result']}")
        return data["result"]
