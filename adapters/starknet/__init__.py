"""
Starknet Balance Adapter

Serves chain IDs 4 (mainnet-alpha) and 44 (goerli-alpha). Makers register their
Starknet legs with the L1 token address, so every lookup first resolves the network
id, then maps the L1 token to its bridged L2 contract before calling balanceOf.

The maker address is used as the balanceOf owner unchanged; makers list their
Starknet account address on Starknet legs.
"""

from typing import Dict, Optional
from core.adapter_interface import BalanceAdapter
from core.chains import ChainFamily, get_starknet_network_id
from core.logging import logger
from core.utils.amounts import STARKNET_ETH_ADDRESS, is_native_token_address
from .api_client import StarknetRPCClient

# L1 token address (lowercase) -> L2 token contract, per network id
L1_TO_L2_TOKENS: Dict[str, Dict[str, str]] = {
    "mainnet-alpha": {
        # USDC
        "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48": "0x053c91253bc9682c04929ca02ed00b3e423f6710d2ee7e0d5ebb06f3ecf368a8",
        # USDT
        "0xdac17f958d2ee523a2206206994597c13d831ec7": "0x068f5c6a61780768455de69077e07e89787839bf8166decfbf92b645209c0fb8",
        # DAI
        "0x6b175474e89094c44da98b954eedeac495271d0f": "0x00da114221cb83fa859dbdb4c44beeaa0bb37c7537ad5ae66fe5e0efd20e6eb3",
    },
    "goerli-alpha": {},
}


def resolve_l2_token(network_id: str, token_address: str) -> str:
    """
    Map an L1 token address to its Starknet contract.

    Native ETH maps to the Starknet ETH contract on every network. Addresses with no
    known mapping are assumed to already be L2 addresses.
    """
    if is_native_token_address(token_address):
        return STARKNET_ETH_ADDRESS
    return L1_TO_L2_TOKENS.get(network_id, {}).get(token_address.lower(), token_address)


class StarknetAdapter(BalanceAdapter):
    """Starknet adapter (JSON-RPC starknet_call)."""

    name = "starknet"
    families = [ChainFamily.STARKNET]

    def __init__(self):
        from core.config import settings

        self.clients: Dict[str, StarknetRPCClient] = {
            "mainnet-alpha": StarknetRPCClient(settings.starknet_mainnet_rpc_url),
            "goerli-alpha": StarknetRPCClient(settings.starknet_goerli_rpc_url),
        }

    async def initialize(self) -> None:
        for client in self.clients.values():
            await client.__aenter__()
        logger.info("✓ Starknet adapter initialized")

    async def shutdown(self) -> None:
        for client in self.clients.values():
            await client.__aexit__(None, None, None)
        logger.info("✓ Starknet adapter shut down")

    async def get_balance(
        self,
        maker_address: str,
        chain_id: int,
        chain_name: str,
        token_address: str,
        token_name: str
    ) -> Optional[str]:
        network_id = get_starknet_network_id(chain_id)
        if network_id is None or network_id not in self.clients:
            logger.warning(f"No Starknet network for chainId {chain_id}")
            return None

        l2_token = resolve_l2_token(network_id, token_address)
        balance = await self.clients[network_id].erc20_balance_of(l2_token, maker_address)
        return str(balance)
