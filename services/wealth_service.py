"""
Maker Wealth Aggregator

Builds the per-chain balance requests of a maker from the registry, resolves every
balance slot through the chain adapters in parallel, normalizes raw balances into
human-scale decimal strings, and hands the result to the wealth repository.

Flow:
    shape_requests(maker)  registry rows -> [ChainBalanceRequest] (no network I/O)
    fetch_wealth(maker)    shape, then one task per slot, bounded by a semaphore,
                           each adapter call under its own timeout
    persist_wealth(reqs)   one repository insert per slot, sequential

A failing slot never fails the aggregation: its fault is logged and its value stays None.
Cancelling the task awaiting fetch_wealth cancels every in-flight slot fetch.
"""

import asyncio
from typing import Dict, List, Optional

from core.adapter_manager import AdapterManager
from core.chains import native_symbol
from core.errors import AdapterFault, InvalidArgument
from core.logging import get_logger, log_balance_fault
from core.schemas import BalanceSlot, ChainBalanceRequest, MakerWealthRow
from core.utils.amounts import is_native_token_address, normalize_balance
from services.maker_registry import MakerRegistry
from storage.wealth_repository import WealthRepository

NATIVE_DECIMALS = 18


class WealthService:
    """
    Aggregates maker balances across chains.

    Args:
        registry: Source of maker pair entries
        adapters: Chain-family adapter registry
        repository: Destination of persisted rows (required for persist_wealth only)
        concurrency: Maximum slot fetches in flight (defaults to settings.fetch_concurrency)
        fetch_timeout: Seconds allowed per adapter call (defaults to settings.fetch_timeout)
    """

    def __init__(
        self,
        registry: MakerRegistry,
        adapters: AdapterManager,
        repository: Optional[WealthRepository] = None,
        concurrency: Optional[int] = None,
        fetch_timeout: Optional[float] = None,
    ) -> None:
        from core.config import settings

        self.registry = registry
        self.adapters = adapters
        self.repository = repository
        self.concurrency = concurrency or settings.fetch_concurrency
        self.fetch_timeout = fetch_timeout or settings.fetch_timeout
        self._logger = get_logger(__name__)

    # ============================================
    # Request Shaping
    # ============================================

    async def shape_requests(self, maker_address: str) -> List[ChainBalanceRequest]:
        """
        Build one ChainBalanceRequest per chain the maker serves.

        Every request ends up with exactly one native slot (token_address ""): an
        existing native-looking slot is canonicalized, otherwise one is inserted first.

        Raises:
            InvalidArgument: If maker_address is empty
        """
        if not maker_address:
            raise InvalidArgument("Sorry, params makerAddress miss")

        entries = await self.registry.get_maker_list()

        # Keyed containers; dicts keep discovery order
        requests: Dict[int, ChainBalanceRequest] = {}
        slots: Dict[int, Dict[str, BalanceSlot]] = {}

        for entry in entries:
            if entry.maker_address != maker_address:
                continue

            legs = (
                (entry.c1_id, entry.c1_name, entry.t1_address),
                (entry.c2_id, entry.c2_name, entry.t2_address),
            )
            for chain_id, chain_name, token_address in legs:
                if chain_id not in requests:
                    requests[chain_id] = ChainBalanceRequest(
                        maker_address=entry.maker_address,
                        chain_id=chain_id,
                        chain_name=chain_name,
                    )
                    slots[chain_id] = {}

                # All native spellings share the "" key, first writer wins
                key = "" if is_native_token_address(token_address) else token_address
                if key not in slots[chain_id]:
                    slots[chain_id][key] = BalanceSlot(
                        token_address=key,
                        token_name=entry.t_name,
                        decimals=entry.precision,
                    )

        for chain_id, request in requests.items():
            chain_slots = slots[chain_id]
            balances = list(chain_slots.values())
            if "" not in chain_slots:
                balances.insert(0, BalanceSlot(
                    token_address="",
                    token_name=native_symbol(chain_id),
                    decimals=NATIVE_DECIMALS,
                ))
            request.balances = balances

        return list(requests.values())

    # ============================================
    # Fan-out Fetch
    # ============================================

    async def fetch_wealth(self, maker_address: str, timeout: Optional[float] = None) -> List[ChainBalanceRequest]:
        """
        Shape the maker's requests and resolve every slot's balance.

        Args:
            maker_address: Maker to aggregate
            timeout: Optional overall deadline in seconds

        Raises:
            InvalidArgument: If maker_address is empty
            asyncio.TimeoutError: If the overall timeout elapses (in-flight fetches are cancelled)
        """
        requests = await self.shape_requests(maker_address)

        semaphore = asyncio.Semaphore(self.concurrency)
        jobs = [
            self._fetch_slot(request, slot, semaphore)
            for request in requests
            for slot in request.balances
        ]
        self._logger.info(f"Fetching {len(jobs)} balance(s) across {len(requests)} chain(s) for {maker_address}")

        gathering = asyncio.gather(*jobs)
        if timeout is None:
            await gathering
        else:
            await asyncio.wait_for(gathering, timeout=timeout)

        resolved = sum(1 for request in requests for slot in request.balances if slot.value is not None)
        self._logger.info(f"Resolved {resolved}/{len(jobs)} balance(s) for {maker_address}")
        return requests

    async def _fetch_slot(
        self,
        request: ChainBalanceRequest,
        slot: BalanceSlot,
        semaphore: asyncio.Semaphore,
    ) -> None:
        async with semaphore:
            try:
                adapter = self.adapters.get_adapter_for_chain(request.chain_id)
                raw = await asyncio.wait_for(
                    adapter.get_balance(
                        request.maker_address,
                        request.chain_id,
                        request.chain_name,
                        slot.token_address,
                        slot.token_name,
                    ),
                    timeout=self.fetch_timeout,
                )
                slot.value = normalize_balance(raw, slot.decimals)
            except Exception as e:
                fault = AdapterFault(request.maker_address, request.chain_id, slot.token_name, e)
                log_balance_fault(fault)
                slot.value = None

    # ============================================
    # Persistence
    # ============================================

    async def persist_wealth(self, requests: List[ChainBalanceRequest]) -> None:
        """
        Write one row per (chain, token) slot, one insert at a time.

        Rows written before a failing insert are kept; the error propagates.

        Raises:
            RuntimeError: If no repository is configured
        """
        if self.repository is None:
            raise RuntimeError("WealthService has no repository configured")

        for request in requests:
            for slot in request.balances:
                await self.repository.insert(MakerWealthRow(
                    maker_address=request.maker_address,
                    chain_id=request.chain_id,
                    token_address=slot.token_address,
                    balance=slot.value,
                    decimals=slot.decimals,
                ))


# Singleton service instance (created on first use)
wealth_service: Optional[WealthService] = None


def get_wealth_service() -> WealthService:
    """
    Global WealthService wired from settings: JSON maker list, default adapters,
    SQLite repository.
    """
    global wealth_service
    if wealth_service is None:
        from core.config import settings
        from services.maker_registry import JsonMakerRegistry
        from storage.wealth_repository import SqliteWealthRepository

        repository = SqliteWealthRepository(settings.database_path)
        repository.init_db()
        wealth_service = WealthService(
            registry=JsonMakerRegistry(settings.maker_list_path),
            adapters=AdapterManager(),
            repository=repository,
        )
    return wealth_service
