"""
Chain Index

Static routing table from maker chain IDs to chain families. A chain family is a
group of networks that share a balance-query protocol; each family is served by
exactly one BalanceAdapter.

Chain IDs are the maker-registry identifiers (not EIP-155 chain IDs). Any ID
missing from CHAIN_INDEX is treated as a generic EVM chain and queried through
its configured node RPC endpoint.
"""

from enum import Enum
from typing import Dict, Optional


class ChainFamily(str, Enum):
    """Balance-query families. Values double as adapter registry keys."""

    MAINNET = "mainnet"
    ARBITRUM = "arbitrum"
    ZKSYNC = "zksync"
    STARKNET = "starknet"
    RINKEBY = "rinkeby"
    POLYGON = "polygon"
    OPTIMISM = "optimism"
    IMMUTABLEX = "immutablex"
    LOOPRING = "loopring"
    METIS = "metis"
    DYDX = "dydx"
    EVM = "evm"


CHAIN_INDEX: Dict[int, ChainFamily] = {
    1: ChainFamily.MAINNET,
    2: ChainFamily.ARBITRUM,
    3: ChainFamily.ZKSYNC,
    4: ChainFamily.STARKNET,
    5: ChainFamily.RINKEBY,
    6: ChainFamily.POLYGON,
    7: ChainFamily.OPTIMISM,
    8: ChainFamily.IMMUTABLEX,
    9: ChainFamily.LOOPRING,
    10: ChainFamily.METIS,
    11: ChainFamily.DYDX,
    # Testnets
    22: ChainFamily.ARBITRUM,
    33: ChainFamily.ZKSYNC,
    44: ChainFamily.STARKNET,
    66: ChainFamily.POLYGON,
    77: ChainFamily.OPTIMISM,
    88: ChainFamily.IMMUTABLEX,
    99: ChainFamily.LOOPRING,
    510: ChainFamily.METIS,
    511: ChainFamily.DYDX,
}

TESTNET_CHAIN_IDS = frozenset({5, 22, 33, 44, 66, 77, 88, 99, 510, 511})

# Families without a protocol of their own; served by the node-RPC adapter
GENERIC_EVM_FAMILIES = frozenset({
    ChainFamily.MAINNET,
    ChainFamily.ARBITRUM,
    ChainFamily.RINKEBY,
    ChainFamily.POLYGON,
    ChainFamily.OPTIMISM,
    ChainFamily.EVM,
})

DEFAULT_NATIVE_SYMBOL = "ETH"
NATIVE_SYMBOLS: Dict[ChainFamily, str] = {
    ChainFamily.POLYGON: "MATIC",
}

STARKNET_NETWORK_IDS: Dict[int, str] = {
    4: "mainnet-alpha",
    44: "goerli-alpha",
}


def get_chain_family(chain_id: int) -> ChainFamily:
    """Family for a chain ID; unknown IDs fall back to generic EVM."""
    return CHAIN_INDEX.get(chain_id, ChainFamily.EVM)


def get_adapter_family(chain_id: int) -> ChainFamily:
    """
    Family whose adapter serves this chain ID.

    Named EVM chains (mainnet, arbitrum, polygon, ...) collapse onto ChainFamily.EVM.
    """
    family = get_chain_family(chain_id)
    if family in GENERIC_EVM_FAMILIES:
        return ChainFamily.EVM
    return family


def is_testnet(chain_id: int) -> bool:
    return chain_id in TESTNET_CHAIN_IDS


def native_symbol(chain_id: int) -> str:
    """Display symbol of the chain's native asset (MATIC on Polygon, ETH elsewhere)."""
    return NATIVE_SYMBOLS.get(get_chain_family(chain_id), DEFAULT_NATIVE_SYMBOL)


def get_starknet_network_id(chain_id: int) -> Optional[str]:
    return STARKNET_NETWORK_IDS.get(chain_id)
