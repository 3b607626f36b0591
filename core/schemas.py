"""
Normalized Data Schemas

This module defines Pydantic models for maker wealth data.

Key Principle:
    Regardless of which chain family a balance comes from (zkSync, Loopring, Starknet,
    node RPC, ...), it ends up in a BalanceSlot as a normalized decimal string. API
    consumers and the persister only ever see these models.

Models:
    - MakerPairEntry: One maker registry row (two chain legs sharing a token)
    - BalanceSlot: One (token, value) unit to resolve on a chain
    - ChainBalanceRequest: All slots to resolve for one maker on one chain
    - MakerWealthRow: One persisted balance snapshot row
"""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


# ============================================
# Maker Registry Entry
# ============================================

class MakerPairEntry(BaseModel):
    """
    One row from the maker registry.

    A row pairs two chains (legs) that the maker serves for a single token. The token
    has one display name and one precision but may have a different address per chain.

    Registry files use camelCase keys (makerAddress, c1ID, t1Address, tName, ...);
    both the aliases and the snake_case field names are accepted.

    Example:
        >>> entry = MakerPairEntry.model_validate({
        ...     "makerAddress": "0xabc",
        ...     "c1ID": 1, "c1Name": "mainnet", "t1Address": "0x0000000000000000000000000000000000000000",
        ...     "c2ID": 3, "c2Name": "zksync", "t2Address": "0x0000000000000000000000000000000000000000",
        ...     "tName": "ETH", "precision": 18,
        ... })
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    maker_address: str = Field(..., alias="makerAddress")

    c1_id: int = Field(..., alias="c1ID", description="Chain ID of leg 1")
    c1_name: str = Field(default="", alias="c1Name", description="Chain name of leg 1")

    c2_id: int = Field(..., alias="c2ID", description="Chain ID of leg 2")
    c2_name: str = Field(default="", alias="c2Name", description="Chain name of leg 2")

    t1_address: str = Field(default="", alias="t1Address", description="Token address on leg 1")
    t2_address: str = Field(default="", alias="t2Address", description="Token address on leg 2")

    t_name: str = Field(..., alias="tName", description="Token display name shared by both legs")

    precision: int = Field(..., ge=0, description="Token decimal precision")

    @field_validator("t1_address", "t2_address", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """Registries write null for native tokens"""
        return "" if v is None else v


# ============================================
# Balance Slot
# ============================================

class BalanceSlot(BaseModel):
    """
    A single (token, value) unit to be resolved for one chain request.

    Attributes:
        token_address: Token contract address; empty string for the native asset
        token_name: Token display name (also used by symbol-keyed APIs like zkSync)
        decimals: Token precision used to normalize the raw balance
        value: Normalized decimal string, or None when no value is known

    Notes:
        - value is None until fetched and stays None when the adapter had nothing
        - "0" is a real, fetched zero balance and is never conflated with None
    """

    token_address: str = Field(default="", description="Token address ('' = native asset)")
    token_name: str = Field(..., description="Token display name")
    decimals: int = Field(..., ge=0, description="Token decimal precision")
    value: Optional[str] = Field(default=None, description="Normalized balance, None if unknown")

    @property
    def is_native(self) -> bool:
        return self.token_address == ""


# ============================================
# Chain Balance Request
# ============================================

class ChainBalanceRequest(BaseModel):
    """
    All balances to resolve for one maker on one chain.

    Invariants (established by WealthService.shape_requests):
        - at most one slot per token address
        - exactly one native slot (token_address == ""), normally the first

    Example:
        >>> request = ChainBalanceRequest(
        ...     maker_address="0xabc", chain_id=3, chain_name="zksync",
        ...     balances=[BalanceSlot(token_name="ETH", decimals=18)],
        ... )
        >>> request.native_slot().token_name
        'ETH'
    """

    maker_address: str = Field(..., description="Maker address")
    chain_id: int = Field(..., description="Maker registry chain ID")
    chain_name: str = Field(default="", description="Chain name (keys node RPC endpoints)")
    balances: List[BalanceSlot] = Field(default_factory=list)

    def get_slot(self, token_address: str) -> Optional[BalanceSlot]:
        for slot in self.balances:
            if slot.token_address == token_address:
                return slot
        return None

    def native_slot(self) -> Optional[BalanceSlot]:
        return self.get_slot("")


# ============================================
# Persisted Row
# ============================================

class MakerWealthRow(BaseModel):
    """
    One durable balance snapshot row.

    balance is None when the balance could not be fetched, so storage keeps
    "unknown" (NULL) apart from a real zero ("0").
    """

    maker_address: str
    chain_id: int
    token_address: str
    balance: Optional[str] = None
    decimals: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
