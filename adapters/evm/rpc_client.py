"""
EVM Node JSON-RPC Client

Methods Used:
    eth_getBalance            - Native balance (wei, hex quantity)
    eth_call                  - ERC20 balanceOf(address)
    alchemy_getTokenBalances  - Token balances (Alchemy-compatible nodes only)

All balances are returned as decimal integer strings in the token's smallest unit.
"""

from typing import Any, Dict, List, Optional
from adapters.base_client import BaseAPIClient
from core.utils.amounts import hex_to_int_string

# keccak256("balanceOf(address)")[:4]
ERC20_BALANCE_OF_SELECTOR = "0x70a08231"


def encode_balance_of(owner: str) -> str:
    """
    ABI-encode a balanceOf(owner) call.

    Example:
        >>> encode_balance_of("0x00000000000000000000000000000000000000ab")[-4:]
        '00ab'
    """
    address = owner.lower()
    if address.startswith("0x"):
        address = address[2:]
    if len(address) != 40:
        raise ValueError(f"Invalid EVM address: {owner}")
    return ERC20_BALANCE_OF_SELECTOR + address.rjust(64, "0")


class NodeRPCClient(BaseAPIClient):
    """
    Async JSON-RPC client for an EVM node.

    Example:
        >>> async with NodeRPCClient("https://eth-mainnet.g.alchemy.com/v2/KEY") as client:
        ...     wei = await client.get_balance("0xabc...")
    """

    source = "rpc"

    async def get_balance(self, address: str, block: str = "latest") -> str:
        """Native balance in wei."""
        result = await self._rpc("eth_getBalance", [address, block])
        return hex_to_int_string(result)

    async def erc20_balance_of(self, token_address: str, owner: str, block: str = "latest") -> Optional[str]:
        """
        ERC20 balance read through eth_call.

        Returns:
            Decimal integer string, or None when the call returned no data
            (no contract deployed at token_address)
        """
        call = {"to": token_address, "data": encode_balance_of(owner)}
        result = await self._rpc("eth_call", [call, block])
        if result in (None, "", "0x"):
            return None
        return hex_to_int_string(result)

    async def get_token_balances(self, address: str, token_addresses: List[str]) -> List[Dict[str, Any]]:
        """
        Query token balances via alchemy_getTokenBalances.

        Response Format:
            {"address": "0xabc...",
             "tokenBalances": [{"contractAddress": "0x...", "tokenBalance": "0x...", "error": null}]}

        Returns:
            The tokenBalances list
        """
        result = await self._rpc("alchemy_getTokenBalances", [address, token_addresses])
        balances = result.get("tokenBalances") if isinstance(result, dict) else None
        if not isinstance(balances, list):
            raise ValueError(f"Unexpected alchemy_getTokenBalances result: {result!r}")
        return balances

    async def get_first_token_balance(self, address: str, token_address: str) -> Optional[str]:
        """
        Balance of a single token, skipping entries the node reports as errors.

        Returns:
            Decimal integer string, or None if no entry came back without an error
        """
        for item in await self.get_token_balances(address, [token_address]):
            if item.get("error"):
                continue
            if item.get("tokenBalance") is None:
                continue
            return hex_to_int_string(item["tokenBalance"])
        return None
