"""Unit tests for the unsigned transaction descriptor builder."""

from __future__ import annotations

import json

import pytest

from subscription_sdk.chain.tx import (
    GasCoin,
    Input,
    MoveCall,
    NestedResult,
    ObjectInput,
    Result,
    TransactionBlock,
    encode_pure,
)


class TestEncodePure:
    """Tests for BCS encoding of pure values."""

    def test_u8(self) -> None:
        assert encode_pure(1, "u8") == b"\x01"
        assert encode_pure(255, "u8") == b"\xff"

    def test_u64_little_endian(self) -> None:
        assert encode_pure(10_000_000, "u64") == bytes.fromhex("8096980000000000")

    def test_u256_width(self) -> None:
        assert len(encode_pure(1, "u256")) == 32

    @pytest.mark.parametrize("value, type_name", [(256, "u8"), (-1, "u64"), (1 << 64, "u64")])
    def test_out_of_range(self, value: int, type_name: str) -> None:
        with pytest.raises(ValueError, match="out of range"):
            encode_pure(value, type_name)

    def test_rejects_bool_as_integer(self) -> None:
        with pytest.raises(ValueError):
            encode_pure(True, "u8")

    def test_bool(self) -> None:
        assert encode_pure(True, "bool") == b"\x01"
        assert encode_pure(False, "bool") == b"\x00"

    def test_address_is_padded(self) -> None:
        assert encode_pure("0x6", "address") == bytes(31) + b"\x06"

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            encode_pure(1, "vector<u8>")


class TestTransactionBlock:
    """Tests for TransactionBlock construction and serialization."""

    def test_object_inputs_are_deduplicated(self) -> None:
        tx = TransactionBlock()
        first = tx.object("0x6")
        second = tx.object("0x0000000000000000000000000000000000000000000000000000000000000006")

        assert first == second == Input(index=0, type="object")
        assert tx.inputs == [ObjectInput(object_id="0x" + "0" * 63 + "6")]

    def test_pure_inputs_are_not_deduplicated(self) -> None:
        tx = TransactionBlock()
        assert tx.pure(1, "u8") == Input(index=0, type="pure")
        assert tx.pure(1, "u8") == Input(index=1, type="pure")

    def test_split_coins_returns_one_argument_per_amount(self) -> None:
        tx = TransactionBlock()
        coins = tx.split_coins(tx.gas, [tx.pure(1, "u64"), tx.pure(2, "u64")])
        assert coins == [NestedResult(0, 0), NestedResult(0, 1)]

    def test_split_coins_needs_amounts(self) -> None:
        tx = TransactionBlock()
        with pytest.raises(ValueError):
            tx.split_coins(tx.gas, [])

    def test_move_call_normalizes_package(self) -> None:
        tx = TransactionBlock()
        result = tx.move_call("0x2::coin::zero", type_arguments=["0x2::sui::SUI"])

        assert result == Result(0)
        call = tx.commands[0]
        assert isinstance(call, MoveCall)
        assert call.target == "0x" + "0" * 63 + "2::coin::zero"
        assert call.function == "zero"

    @pytest.mark.parametrize("target", ["coin::zero", "0x2::coin", "0x2::coin::zero::extra", "0xzz::m::f"])
    def test_move_call_rejects_bad_target(self, target: str) -> None:
        with pytest.raises(ValueError, match="target"):
            TransactionBlock().move_call(target)

    def test_to_dict(self) -> None:
        tx = TransactionBlock()
        [coin] = tx.split_coins(tx.gas, [tx.pure(5, "u64")])
        tx.move_call("0x2::m::f", [tx.object("0x6"), coin])

        data = tx.to_dict()

        assert data["version"] == 1
        assert data["inputs"] == [
            {"type": "pure", "valueType": "u64", "value": 5, "Pure": [5, 0, 0, 0, 0, 0, 0, 0]},
            {"type": "object", "objectId": "0x" + "0" * 63 + "6"},
        ]
        assert data["commands"][0] == {
            "kind": "SplitCoins",
            "coin": {"kind": "GasCoin"},
            "amounts": [{"kind": "Input", "index": 0, "type": "pure"}],
        }
        assert data["commands"][1]["arguments"] == [
            {"kind": "Input", "index": 1, "type": "object"},
            {"kind": "NestedResult", "index": 0, "resultIndex": 0},
        ]
        assert "sender" not in data

    def test_sender_and_gas_budget(self) -> None:
        tx = TransactionBlock()
        tx.set_sender("0xA")
        tx.set_gas_budget(10_000_000)

        data = json.loads(tx.to_json())
        assert data["sender"] == "0x" + "0" * 63 + "a"
        assert data["gasBudget"] == "10000000"

    def test_gas_budget_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            TransactionBlock().set_gas_budget(0)

    def test_gas_argument(self) -> None:
        assert TransactionBlock().gas == GasCoin()
