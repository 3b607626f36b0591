"""
Unit Tests for Data Schemas

Tests cover:
- Maker registry rows in their camelCase file form
- Balance slot and chain request helpers

Run with:
    pytest tests/unit/test_schemas.py -v
"""

import pytest
from pydantic import ValidationError

from core.schemas import BalanceSlot, ChainBalanceRequest, MakerPairEntry, MakerWealthRow


def registry_row(**overrides):
    row = {
        "makerAddress": "0xmaker",
        "c1ID": 1,
        "c1Name": "mainnet",
        "c2ID": 3,
        "c2Name": "zksync",
        "t1Address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        "t2Address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        "tName": "USDC",
        "precision": 6,
    }
    row.update(overrides)
    return row


class TestMakerPairEntry:
    """Test registry row parsing"""

    def test_camel_case_aliases(self):
        entry = MakerPairEntry.model_validate(registry_row())
        assert entry.maker_address == "0xmaker"
        assert entry.c1_id == 1
        assert entry.c2_name == "zksync"
        assert entry.t_name == "USDC"
        assert entry.precision == 6

    def test_snake_case_names_accepted(self):
        entry = MakerPairEntry(
            maker_address="0xmaker", c1_id=1, c2_id=3, t_name="ETH", precision=18
        )
        assert entry.c1_name == ""
        assert entry.t1_address == ""

    def test_null_token_address_means_native(self):
        entry = MakerPairEntry.model_validate(registry_row(t1Address=None))
        assert entry.t1_address == ""

    def test_negative_precision_rejected(self):
        with pytest.raises(ValidationError):
            MakerPairEntry.model_validate(registry_row(precision=-1))

    def test_missing_chain_rejected(self):
        row = registry_row()
        del row["c2ID"]
        with pytest.raises(ValidationError):
            MakerPairEntry.model_validate(row)

    def test_entries_are_frozen(self):
        entry = MakerPairEntry.model_validate(registry_row())
        with pytest.raises(ValidationError):
            entry.precision = 8


class TestChainBalanceRequest:
    """Test slot lookups on a chain request"""

    def test_slot_lookup(self):
        request = ChainBalanceRequest(
            maker_address="0xmaker",
            chain_id=1,
            balances=[
                BalanceSlot(token_name="ETH", decimals=18),
                BalanceSlot(token_address="0xusdc", token_name="USDC", decimals=6),
            ],
        )
        assert request.native_slot().token_name == "ETH"
        assert request.native_slot().is_native
        assert request.get_slot("0xusdc").decimals == 6
        assert request.get_slot("0xdai") is None

    def test_value_defaults_to_none(self):
        slot = BalanceSlot(token_name="ETH", decimals=18)
        assert slot.value is None

    def test_unknown_and_zero_serialize_differently(self):
        unknown = BalanceSlot(token_name="ETH", decimals=18)
        zero = BalanceSlot(token_name="ETH", decimals=18, value="0")
        assert unknown.model_dump()["value"] is None
        assert zero.model_dump()["value"] == "0"


class TestMakerWealthRow:
    def test_created_at_is_timezone_aware(self):
        row = MakerWealthRow(maker_address="0xmaker", chain_id=1, token_address="", decimals=18)
        assert row.balance is None
        assert row.created_at.tzinfo is not None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
