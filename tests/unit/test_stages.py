"""Unit tests for stage processing and stage ABI encoding."""

import json
from pathlib import Path

import pytest
from web3 import Web3

from magicdrop.modules.config import DEFAULT_MERKLE_ROOT
from magicdrop.modules.exceptions import StageProcessingError
from magicdrop.modules.stages import (
    encode_erc1155_stages,
    encode_erc721_stages,
    merkle_root,
    process_stages,
    transform_stages,
)
from magicdrop.modules.types import ERC1155StageData, ERC721StageData

ALICE = Web3.to_checksum_address("0x" + "a1" * 20)
BOB = Web3.to_checksum_address("0x" + "b2" * 20)


def erc721_stage(**overrides):
    stage = {
        "price": "0.1",
        "mintFee": "0.0001",
        "walletLimit": 2,
        "maxSupply": 500,
        "startDate": "2026-01-01T00:00:00Z",
        "endDate": "2026-01-02T00:00:00Z",
    }
    stage.update(overrides)
    return stage


def erc1155_stage(n=2, **overrides):
    stage = {
        "price": ["0.1"] * n,
        "mintFee": ["0"] * n,
        "walletLimit": [1] * n,
        "maxSupply": [100] * n,
        "startDate": 1767225600,
        "endDate": 1767312000,
    }
    stage.update(overrides)
    return stage


class TestTransformERC721:
    """Tests for transform_stages() with ERC721 stages."""

    def test_converts_units_and_dates(self):
        (stage,) = transform_stages([erc721_stage()], "ERC721")

        assert stage.price == 10 ** 17
        assert stage.mint_fee == 10 ** 14
        assert stage.wallet_limit == 2
        assert stage.max_stage_supply == 500
        assert stage.start_time == 1767225600
        assert stage.end_time == 1767312000
        assert stage.merkle_root == DEFAULT_MERKLE_ROOT

    def test_accepts_unix_seconds_and_explicit_root(self):
        root = "0x" + "cd" * 32
        (stage,) = transform_stages(
            [erc721_stage(startDate=100, endDate="200", merkleRoot=root)], "ERC721"
        )

        assert (stage.start_time, stage.end_time) == (100, 200)
        assert stage.merkle_root == root

    def test_whitelist_path_resolved_against_base_dir(self, tmp_path: Path):
        (tmp_path / "wl.json").write_text(json.dumps([ALICE]))

        (stage,) = transform_stages([erc721_stage(whitelistPath="wl.json")], "ERC721", base_dir=tmp_path)

        assert stage.merkle_root == Web3.to_hex(Web3.solidity_keccak(["address"], [ALICE]))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"price": "abc"},
            {"walletLimit": -1},
            {"startDate": "yesterday"},
            {"merkleRoot": "0x1234"},
            {"endDate": "2025-12-31T00:00:00Z"},
        ],
    )
    def test_invalid_fields(self, overrides):
        with pytest.raises(StageProcessingError):
            transform_stages([erc721_stage(**overrides)], "ERC721")

    @pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity", "sNaN"])
    def test_non_finite_price(self, price):
        with pytest.raises(StageProcessingError, match="price"):
            transform_stages([erc721_stage(price=price)], "ERC721")

    @pytest.mark.parametrize("field", ["price", "mintFee"])
    def test_amount_finer_than_one_wei(self, field):
        with pytest.raises(StageProcessingError, match="wei"):
            transform_stages([erc721_stage(**{field: "0.0000000000000000001"})], "ERC721")

    def test_smallest_amount_is_one_wei(self):
        [stage] = transform_stages([erc721_stage(price="0.000000000000000001")], "ERC721")

        assert stage.price == 1

    def test_missing_start_date(self):
        stage = erc721_stage()
        del stage["startDate"]

        with pytest.raises(StageProcessingError, match="startDate"):
            transform_stages([stage], "ERC721")

    def test_overlapping_stages(self):
        first = erc721_stage()
        second = erc721_stage(startDate="2026-01-01T12:00:00Z", endDate="2026-01-03T00:00:00Z")

        with pytest.raises(StageProcessingError, match="overlaps"):
            transform_stages([first, second], "ERC721")

    @pytest.mark.parametrize("stages", [[], {}, ["not a stage"]])
    def test_rejects_malformed_lists(self, stages):
        with pytest.raises(StageProcessingError):
            transform_stages(stages, "ERC721")


class TestTransformERC1155:
    """Tests for transform_stages() with ERC1155 stages."""

    def test_arrays_matching_total_tokens(self):
        (stage,) = transform_stages([erc1155_stage(3)], "ERC1155", total_tokens=3)

        assert stage.price == [10 ** 17] * 3
        assert stage.mint_fee == [0, 0, 0]
        assert stage.merkle_root == [DEFAULT_MERKLE_ROOT] * 3

    def test_mismatched_length_fails(self):
        with pytest.raises(StageProcessingError, match="expected 3"):
            transform_stages([erc1155_stage(2)], "ERC1155", total_tokens=3)

    def test_non_finite_price_in_array(self):
        with pytest.raises(StageProcessingError):
            transform_stages([erc1155_stage(price=["0.1", "NaN"])], "ERC1155", total_tokens=2)

    def test_scalar_price_fails(self):
        with pytest.raises(StageProcessingError, match="array"):
            transform_stages([erc1155_stage(2, price="0.1")], "ERC1155", total_tokens=2)

    def test_requires_total_tokens(self):
        with pytest.raises(StageProcessingError, match="totalTokens"):
            transform_stages([erc1155_stage(2)], "ERC1155")


class TestMerkleRoot:
    """Tests for merkle_root()."""

    def test_two_leaves_use_sorted_pairs(self):
        leaves = sorted(bytes(Web3.solidity_keccak(["address"], [a])) for a in (ALICE, BOB))
        expected = Web3.to_hex(Web3.keccak(leaves[0] + leaves[1]))

        assert merkle_root([ALICE, BOB]) == expected
        assert merkle_root([BOB, ALICE]) == expected

    def test_empty_whitelist(self):
        with pytest.raises(StageProcessingError):
            merkle_root([])


class TestProcessStages:
    """Tests for process_stages()."""

    def test_from_file(self, tmp_path: Path):
        path = tmp_path / "stages.json"
        path.write_text(json.dumps([erc721_stage()]))

        stages = process_stages("ERC721", stages_file=str(path))

        assert len(stages) == 1
        assert isinstance(stages[0], ERC721StageData)

    def test_from_json(self):
        stages = process_stages("ERC1155", stages_json=json.dumps([erc1155_stage(2)]), total_tokens=2)
        assert isinstance(stages[0], ERC1155StageData)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(StageProcessingError, match="not found"):
            process_stages("ERC721", stages_file=str(tmp_path / "missing.json"))

    def test_malformed_json(self):
        with pytest.raises(StageProcessingError):
            process_stages("ERC721", stages_json="[{")

    def test_no_source(self):
        with pytest.raises(StageProcessingError):
            process_stages("ERC721")


class TestEncoding:
    """Tests for the stage tuple encoders."""

    def test_erc721_tuple_order(self):
        stage = ERC721StageData(1, 2, 3, "0x" + "ee" * 32, 4, 5, 6)

        assert encode_erc721_stages([stage]) == [(1, 2, 3, b"\xee" * 32, 4, 5, 6)]

    def test_erc1155_matching_lengths(self):
        stage = ERC1155StageData([1, 2], [0, 0], [1, 1], [DEFAULT_MERKLE_ROOT] * 2, [10, 20], 5, 6)

        (encoded,) = encode_erc1155_stages([stage], total_tokens=2)

        assert encoded[0] == [1, 2]
        assert encoded[3] == [b"\x00" * 32] * 2
        assert encoded[5:] == (5, 6)

    @pytest.mark.parametrize("field", ["price", "mint_fee", "wallet_limit", "merkle_root", "max_stage_supply"])
    def test_erc1155_mismatched_lengths_fail(self, field):
        stage = ERC1155StageData([1, 2], [0, 0], [1, 1], [DEFAULT_MERKLE_ROOT] * 2, [10, 20], 5, 6)
        setattr(stage, field, getattr(stage, field)[:1])

        with pytest.raises(StageProcessingError):
            encode_erc1155_stages([stage], total_tokens=2)
