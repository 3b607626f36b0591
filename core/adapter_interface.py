"""
Balance Adapter Interface - Abstract Contract for All Chain Families

This module defines the abstract base class that every chain-family adapter must implement.
By enforcing a consistent interface, we ensure:
- The aggregator never needs to know which protocol a chain speaks
- Easy to add a new chain family without modifying the aggregator
- Each adapter owns (and cleans up) its own HTTP session

Design Philosophy:
    "Program to an interface, not an implementation"

    WealthService works with BalanceAdapter, not with zkSync or Loopring specifics.
    The AdapterManager picks the adapter for a chain ID from the static chain index.

Example:
    class ZkSyncAdapter(BalanceAdapter):
        name = "zksync"

        async def get_balance(self, maker_address, chain_id, chain_name, token_address, token_name):
            # zkSync-specific implementation
            ...

    adapter = manager.get_adapter_for_chain(3)
    raw = await adapter.get_balance("0xabc", 3, "zksync", "", "ETH")
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from core.chains import ChainFamily


class BalanceAdapter(ABC):
    """
    Abstract Base Class for Chain Balance Adapters

    Class Attributes:
        name: Unique identifier of the chain family served (matches ChainFamily values)

    Abstract Methods (MUST be implemented by all adapters):
        - get_balance: Fetch the raw balance of one token for one maker

    Optional Methods (can be overridden):
        - initialize: Setup HTTP sessions
        - shutdown: Cleanup sessions
        - health_check: Verify the family's API is reachable
    """

    name: str
    """Chain family identifier. Example: "zksync", "loopring", "evm" """

    families: List[ChainFamily] = []
    """Chain families routed to this adapter"""

    @abstractmethod
    async def get_balance(
        self,
        maker_address: str,
        chain_id: int,
        chain_name: str,
        token_address: str,
        token_name: str
    ) -> Optional[str]:
        """
        Fetch the raw balance of a token held by a maker.

        Args:
            maker_address: Maker address whose balance is requested
            chain_id: Maker registry chain ID (selects mainnet vs testnet endpoints)
            chain_name: Chain name (keys node RPC endpoints)
            token_address: Token address; "" means the chain's native asset
            token_name: Token display name (symbol-keyed APIs match on it)

        Returns:
            Balance in the token's smallest unit as an integer string,
            or None when the balance cannot be determined for this maker/chain
            (e.g., no endpoint or credentials configured)

        Raises:
            Exception: For network errors or malformed responses. The aggregator
                       absorbs these per slot; adapters should not swallow them.
        """
        ...

    # ============================================
    # Optional Lifecycle Methods
    # ============================================

    async def initialize(self) -> None:
        """
        Initialize the adapter (create aiohttp sessions, etc.).

        Notes:
            - Called automatically by AdapterManager
            - Should be idempotent (safe to call multiple times)
        """
        pass

    async def shutdown(self) -> None:
        """
        Shutdown the adapter and release resources.

        Notes:
            - Called automatically by AdapterManager during shutdown
            - Should handle errors gracefully (don't raise exceptions)
        """
        pass

    async def health_check(self) -> bool:
        """
        Check if the family's API is reachable.

        Returns:
            bool: True if reachable (default implementation), False otherwise
        """
        return True

    def serves(self, family: ChainFamily) -> bool:
        return family in self.families

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"
