"""
Unit Tests for the Balance Adapter Interface and Manager

These tests verify that:
- BalanceAdapter is properly defined as an abstract class
- Dummy implementations can inherit and implement the interface
- AdapterManager routes chain IDs to the adapter serving their family
- Lifecycle methods keep going when one adapter fails

Run with:
    pytest tests/unit/test_adapter_interface.py -v
"""

import pytest
from typing import Optional

from core.adapter_interface import BalanceAdapter
from core.adapter_manager import AdapterManager
from core.chains import ChainFamily


# ============================================
# Dummy Adapters for Testing
# ============================================

class DummyAdapter(BalanceAdapter):
    """Adapter returning a fixed raw balance and recording lifecycle calls."""

    def __init__(self, name: str, families, raw: Optional[str] = "1"):
        self.name = name
        self.families = list(families)
        self.raw = raw
        self.initialized = False
        self.closed = False

    async def get_balance(self, maker_address, chain_id, chain_name, token_address, token_name):
        return self.raw

    async def initialize(self):
        self.initialized = True

    async def shutdown(self):
        self.closed = True


class BrokenAdapter(DummyAdapter):
    """Adapter whose lifecycle methods all fail."""

    async def initialize(self):
        raise RuntimeError("boom")

    async def shutdown(self):
        raise RuntimeError("boom")

    async def health_check(self):
        raise RuntimeError("boom")


def make_manager():
    return AdapterManager(adapters=[
        DummyAdapter("zksync", [ChainFamily.ZKSYNC]),
        DummyAdapter("metis", [ChainFamily.METIS]),
        DummyAdapter("evm", [ChainFamily.EVM]),
    ])


# ============================================
# Tests for BalanceAdapter
# ============================================

class TestBalanceAdapter:
    """Test the BalanceAdapter abstract class"""

    def test_cannot_instantiate_abstract_interface(self):
        with pytest.raises(TypeError):
            BalanceAdapter()

    def test_incomplete_subclass_cannot_be_instantiated(self):
        class Incomplete(BalanceAdapter):
            name = "incomplete"

        with pytest.raises(TypeError):
            Incomplete()

    @pytest.mark.asyncio
    async def test_default_lifecycle_methods(self):
        class Minimal(BalanceAdapter):
            name = "minimal"
            families = [ChainFamily.LOOPRING]

            async def get_balance(self, maker_address, chain_id, chain_name, token_address, token_name):
                return None

        adapter = Minimal()
        await adapter.initialize()
        await adapter.shutdown()
        assert await adapter.health_check() is True
        assert adapter.serves(ChainFamily.LOOPRING)
        assert not adapter.serves(ChainFamily.DYDX)
        assert repr(adapter) == "<Minimal(name='minimal')>"


# ============================================
# Tests for AdapterManager
# ============================================

class TestAdapterManager:
    """Test registration and routing"""

    def test_default_adapters_cover_every_family(self):
        manager = AdapterManager()
        assert manager.list_adapters() == [
            "zksync", "loopring", "starknet", "immutablex", "dydx", "metis", "evm"
        ]
        assert all(name is not None for name in manager.routing_table().values())

    @pytest.mark.parametrize("chain_id,name", [
        (3, "zksync"),
        (33, "zksync"),
        (10, "metis"),
        (510, "metis"),
        (1, "evm"),
        (6, "evm"),
        (137, "evm"),
    ])
    def test_routing(self, chain_id, name):
        manager = make_manager()
        assert manager.get_adapter_for_chain(chain_id).name == name

    def test_unserved_family_raises(self):
        manager = make_manager()
        with pytest.raises(ValueError, match="loopring"):
            manager.get_adapter_for_chain(9)

    def test_routing_table_marks_unserved_chains(self):
        table = make_manager().routing_table()
        assert table[3] == "zksync"
        assert table[1] == "evm"
        assert table[9] is None

    def test_get_adapter_by_name(self):
        manager = make_manager()
        assert manager.get_adapter("ZKSYNC").name == "zksync"
        assert manager.has_adapter("metis")
        assert not manager.has_adapter("dydx")
        with pytest.raises(ValueError):
            manager.get_adapter("dydx")

    def test_len(self):
        assert len(make_manager()) == 3

    @pytest.mark.asyncio
    async def test_lifecycle_continues_past_failures(self):
        good = DummyAdapter("evm", [ChainFamily.EVM])
        manager = AdapterManager(adapters=[BrokenAdapter("zksync", [ChainFamily.ZKSYNC]), good])

        await manager.initialize_all()
        assert good.initialized

        health = await manager.health_check_all()
        assert health == {"zksync": False, "evm": True}

        await manager.shutdown_all()
        assert good.closed


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
