"""
Adapter Manager - Central Registry for Chain Balance Adapters

This module provides a centralized manager for all chain-family adapters.
The AdapterManager acts as a registry and router: the aggregator hands it a chain ID
and gets back the adapter for that chain's family.

Architecture Pattern:
    This is a Registry/Factory pattern where:
    - AdapterManager maintains one adapter instance per chain family
    - Chain IDs are routed through the static chain index (core.chains)
    - All adapters conform to BalanceAdapter

Example Usage:
    manager = AdapterManager()
    await manager.initialize_all()

    adapter = manager.get_adapter_for_chain(3)   # ZkSyncAdapter
    raw = await adapter.get_balance("0xabc", 3, "zksync", "", "ETH")

    await manager.shutdown_all()
"""

from typing import Dict, List, Optional
from core.adapter_interface import BalanceAdapter
from core.chains import CHAIN_INDEX, ChainFamily, get_adapter_family
from core.logging import logger


class AdapterManager:
    """
    Central Manager for Chain Balance Adapters

    Attributes:
        adapters: Dictionary mapping adapter names to adapter instances
                  Example: {"zksync": ZkSyncAdapter(), "evm": EvmAdapter()}

    Example:
        >>> manager = AdapterManager()
        >>> manager.list_adapters()
        ['zksync', 'loopring', 'starknet', 'immutablex', 'dydx', 'metis', 'evm']
    """

    def __init__(self, adapters: Optional[List[BalanceAdapter]] = None):
        """
        Initialize the Adapter Manager and register adapters.

        Args:
            adapters: Adapters to register instead of the default set (tests pass fakes here)

        Note:
            Adapter instances are created but not initialized here.
            Call initialize_all() to open HTTP sessions.
        """
        if adapters is None:
            adapters = self._default_adapters()

        self.adapters: Dict[str, BalanceAdapter] = {adapter.name: adapter for adapter in adapters}

        # Family -> adapter routing, built from each adapter's declared families
        self._routes: Dict[ChainFamily, BalanceAdapter] = {}
        for adapter in adapters:
            for family in adapter.families:
                self._routes[family] = adapter

        logger.info(f"AdapterManager initialized with {len(self.adapters)} adapter(s): {', '.join(self.adapters.keys())}")

    @staticmethod
    def _default_adapters() -> List[BalanceAdapter]:
        # Import here to avoid circular imports
        # Each adapter module imports from core, so we can't import at module level
        from adapters.zksync import ZkSyncAdapter
        from adapters.loopring import LoopringAdapter
        from adapters.starknet import StarknetAdapter
        from adapters.immutablex import IMXAdapter
        from adapters.dydx import DydxAdapter
        from adapters.evm import EvmAdapter, MetisAdapter

        return [
            ZkSyncAdapter(),
            LoopringAdapter(),
            StarknetAdapter(),
            IMXAdapter(),
            DydxAdapter(),
            MetisAdapter(),
            EvmAdapter(),
        ]

    # ============================================
    # Adapter Retrieval Methods
    # ============================================

    def get_adapter(self, name: str) -> BalanceAdapter:
        """
        Get an adapter by name.

        Raises:
            ValueError: If no adapter is registered under that name
        """
        name = name.lower()

        if name not in self.adapters:
            available = ", ".join(self.adapters.keys())
            logger.error(f"Adapter '{name}' not found. Available: {available}")
            raise ValueError(
                f"Adapter '{name}' is not registered. "
                f"Available adapters: {available}"
            )

        return self.adapters[name]

    def get_adapter_for_chain(self, chain_id: int) -> BalanceAdapter:
        """
        Route a chain ID to the adapter serving its family.

        Unknown chain IDs fall back to the generic EVM family.

        Raises:
            ValueError: If no registered adapter serves the chain's family
        """
        family = get_adapter_family(chain_id)
        adapter = self._routes.get(family)
        if adapter is None:
            raise ValueError(f"No adapter registered for chain family '{family.value}' (chainId {chain_id})")
        return adapter

    def has_adapter(self, name: str) -> bool:
        return name.lower() in self.adapters

    def list_adapters(self) -> List[str]:
        return list(self.adapters.keys())

    def routing_table(self) -> Dict[int, Optional[str]]:
        """
        Chain ID -> adapter name for every indexed chain.

        Example:
            >>> manager.routing_table()[3]
            'zksync'
        """
        table = {}
        for chain_id in sorted(CHAIN_INDEX):
            adapter = self._routes.get(get_adapter_family(chain_id))
            table[chain_id] = adapter.name if adapter else None
        return table

    # ============================================
    # Lifecycle Management
    # ============================================

    async def initialize_all(self) -> None:
        """
        Initialize all registered adapters.

        An adapter that fails to initialize is logged and skipped; its balances
        will then fail per slot instead of blocking the others.
        """
        logger.info("Initializing all adapters...")

        for name, adapter in self.adapters.items():
            try:
                await adapter.initialize()
            except Exception as e:
                logger.error(f"✗ Failed to initialize {name}: {e}")

        logger.info("All adapters initialized")

    async def shutdown_all(self) -> None:
        """Shutdown all adapters gracefully."""
        logger.info("Shutting down all adapters...")

        for name, adapter in self.adapters.items():
            try:
                await adapter.shutdown()
            except Exception as e:
                logger.error(f"✗ Error shutting down {name}: {e}")

        logger.info("All adapters shut down")

    async def health_check_all(self) -> Dict[str, bool]:
        """
        Check health status of all adapters.

        Returns:
            Dict[str, bool]: Adapter name -> healthy
        """
        health_status = {}
        for name, adapter in self.adapters.items():
            try:
                health_status[name] = await adapter.health_check()
            except Exception as e:
                logger.error(f"Health check failed for {name}: {e}")
                health_status[name] = False

        return health_status

    def __repr__(self) -> str:
        return f"<AdapterManager(adapters={list(self.adapters.keys())})>"

    def __len__(self) -> int:
        return len(self.adapters)
