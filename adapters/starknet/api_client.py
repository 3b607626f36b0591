"""
Starknet JSON-RPC Client

API Documentation:
    https://github.com/starkware-libs/starknet-specs

Methods Used:
    starknet_call - Read-only contract call (ERC20 balanceOf)

Notes:
    - balanceOf returns a Uint256 as two felts: [low, high]
    - Entry point selectors are starknet_keccak of the function name
"""

from typing import List
from adapters.base_client import BaseAPIClient

# starknet_keccak("balanceOf")
BALANCE_OF_SELECTOR = "0x2e4263afad30923c891518314c3c95dbe830a16874e8abc5777a9a20b54c76e"


def uint256_from_felts(felts: List[str]) -> int:
    """
    Combine a [low, high] felt pair into one integer.

    Example:
        >>> uint256_from_felts(["0x1", "0x0"])
        1
    """
    if not felts:
        raise ValueError("Empty Uint256 result")
    low = int(felts[0], 16)
    high = int(felts[1], 16) if len(felts) > 1 else 0
    return low + (high << 128)


class StarknetRPCClient(BaseAPIClient):
    """Async JSON-RPC client for a Starknet full node."""

    source = "starknet"

    async def call(self, contract_address: str, selector: str, calldata: List[str]) -> List[str]:
        """
        Run starknet_call against the latest block.

        Returns:
            List of felts (hex strings) returned by the contract
        """
        request = {
            "contract_address": contract_address,
            "entry_point_selector": selector,
            "calldata": calldata,
        }
        result = await self._rpc("starknet_call", [request, "latest"])
        if not isinstance(result, list):
            raise ValueError(f"Unexpected starknet_call result: {result!r}")
        return result

    async def erc20_balance_of(self, token_address: str, owner: str) -> int:
        """
        Read an ERC20 balance on Starknet.

        Args:
            token_address: L2 token contract address
            owner: Account address

        Returns:
            Balance in the token's smallest unit
        """
        self.logger.debug(f"balanceOf {owner} on {token_address}")
        felts = await self.call(token_address, BALANCE_OF_SELECTOR, [owner])
        return uint256_from_felts(felts)
