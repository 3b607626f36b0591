"""
EVM Node-RPC Balance Adapters

Two adapters share the node JSON-RPC client:

- EvmAdapter: the generic family (mainnet, Arbitrum, Optimism, Polygon and every chain
  ID missing from the chain index). Native balances come from eth_getBalance, token
  balances from alchemy_getTokenBalances.
- MetisAdapter: Metis Andromeda (10) and its testnet (510). Metis nodes do not speak
  the Alchemy extensions, so token balances are read with eth_call balanceOf.

Endpoints are looked up by chain name in settings.rpc_endpoints_map. A chain without
an endpoint resolves to no value and no request is made.
"""

from typing import Dict, Optional
import aiohttp
from core.adapter_interface import BalanceAdapter
from core.chains import ChainFamily
from core.logging import logger
from core.utils.amounts import is_native_token_address
from .rpc_client import NodeRPCClient


class NodeRPCAdapter(BalanceAdapter):
    """
    Base for adapters backed by per-chain node RPC endpoints.

    One aiohttp session is shared by every endpoint client the adapter creates.
    """

    def __init__(self):
        self.session: Optional[aiohttp.ClientSession] = None
        self._clients: Dict[str, NodeRPCClient] = {}

    async def initialize(self) -> None:
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._clients.clear()
        logger.info(f"✓ {self.name} adapter initialized")

    async def shutdown(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None
        self._clients.clear()
        logger.info(f"✓ {self.name} adapter shut down")

    def endpoint_for(self, chain_name: str) -> Optional[str]:
        from core.config import settings

        return settings.get_rpc_endpoint(chain_name)

    def client_for(self, endpoint: str) -> NodeRPCClient:
        if endpoint not in self._clients:
            self._clients[endpoint] = NodeRPCClient(endpoint, session=self.session)
        return self._clients[endpoint]


class EvmAdapter(NodeRPCAdapter):
    """Generic EVM adapter."""

    name = "evm"
    families = [
        ChainFamily.EVM,
        ChainFamily.MAINNET,
        ChainFamily.ARBITRUM,
        ChainFamily.RINKEBY,
        ChainFamily.POLYGON,
        ChainFamily.OPTIMISM,
    ]

    async def get_balance(
        self,
        maker_address: str,
        chain_id: int,
        chain_name: str,
        token_address: str,
        token_name: str
    ) -> Optional[str]:
        endpoint = self.endpoint_for(chain_name)
        if not endpoint:
            logger.debug(f"No RPC endpoint for chain '{chain_name}' (chainId {chain_id}), skipping")
            return None

        client = self.client_for(endpoint)

        # Empty token address or 0x00...000 means the native balance
        if is_native_token_address(token_address):
            return await client.get_balance(maker_address)

        return await client.get_first_token_balance(maker_address, token_address)


class MetisAdapter(NodeRPCAdapter):
    """Metis adapter."""

    name = "metis"
    families = [ChainFamily.METIS]

    async def get_balance(
        self,
        maker_address: str,
        chain_id: int,
        chain_name: str,
        token_address: str,
        token_name: str
    ) -> Optional[str]:
        endpoint = self.endpoint_for(chain_name)
        if not endpoint:
            logger.debug(f"No RPC endpoint for chain '{chain_name}' (chainId {chain_id}), skipping")
            return None

        client = self.client_for(endpoint)

        if is_native_token_address(token_address):
            return await client.get_balance(maker_address)

        return await client.erc20_balance_of(token_address, maker_address)
