"""
Unit Tests for the Chain Index

Run with:
    pytest tests/unit/test_chains.py -v
"""

import pytest

from core.chains import (
    ChainFamily,
    get_adapter_family,
    get_chain_family,
    get_starknet_network_id,
    is_testnet,
    native_symbol,
)


class TestChainFamilies:
    """Test chain ID to family resolution"""

    @pytest.mark.parametrize("chain_id,family", [
        (1, ChainFamily.MAINNET),
        (2, ChainFamily.ARBITRUM),
        (22, ChainFamily.ARBITRUM),
        (3, ChainFamily.ZKSYNC),
        (33, ChainFamily.ZKSYNC),
        (4, ChainFamily.STARKNET),
        (44, ChainFamily.STARKNET),
        (5, ChainFamily.RINKEBY),
        (6, ChainFamily.POLYGON),
        (66, ChainFamily.POLYGON),
        (7, ChainFamily.OPTIMISM),
        (8, ChainFamily.IMMUTABLEX),
        (88, ChainFamily.IMMUTABLEX),
        (9, ChainFamily.LOOPRING),
        (99, ChainFamily.LOOPRING),
        (10, ChainFamily.METIS),
        (510, ChainFamily.METIS),
        (11, ChainFamily.DYDX),
        (511, ChainFamily.DYDX),
    ])
    def test_known_ids(self, chain_id, family):
        assert get_chain_family(chain_id) == family

    def test_unknown_id_is_generic_evm(self):
        assert get_chain_family(137) == ChainFamily.EVM
        assert get_chain_family(0) == ChainFamily.EVM

    @pytest.mark.parametrize("chain_id", [1, 2, 5, 6, 7, 137])
    def test_named_evm_chains_collapse_to_evm_adapter(self, chain_id):
        assert get_adapter_family(chain_id) == ChainFamily.EVM

    @pytest.mark.parametrize("chain_id,family", [
        (3, ChainFamily.ZKSYNC),
        (4, ChainFamily.STARKNET),
        (8, ChainFamily.IMMUTABLEX),
        (9, ChainFamily.LOOPRING),
        (10, ChainFamily.METIS),
        (11, ChainFamily.DYDX),
    ])
    def test_dedicated_families_keep_their_adapter(self, chain_id, family):
        assert get_adapter_family(chain_id) == family


class TestChainAttributes:
    """Test per-chain metadata"""

    def test_testnets(self):
        assert is_testnet(33) is True
        assert is_testnet(5) is True
        assert is_testnet(3) is False
        assert is_testnet(137) is False

    def test_native_symbol(self):
        assert native_symbol(6) == "MATIC"
        assert native_symbol(66) == "MATIC"
        assert native_symbol(1) == "ETH"
        assert native_symbol(137) == "ETH"

    def test_starknet_network_ids(self):
        assert get_starknet_network_id(4) == "mainnet-alpha"
        assert get_starknet_network_id(44) == "goerli-alpha"
        assert get_starknet_network_id(1) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
