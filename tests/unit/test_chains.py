"""Unit tests for the chain registry lookups."""

import pytest

from magicdrop.modules import chains
from magicdrop.modules.config import (
    SUPPORTED_CHAINS, DEFAULT_FACTORY_ADDRESS, ABSTRACT_FACTORY_ADDRESS, ME_TRANSFER_VALIDATOR_V3,
    MAGIC_EDEN_POLYGON_LIST_ID,
)
from magicdrop.modules.exceptions import UnsupportedChainError


class TestDescriptorFor:
    """Tests for descriptor_for()."""

    @pytest.mark.parametrize("chain_id", [0, 999, 5, None, "1"])
    def test_unknown_chain_raises(self, chain_id):
        with pytest.raises(UnsupportedChainError):
            chains.descriptor_for(chain_id)

    def test_unsupported_chain_is_value_error(self):
        with pytest.raises(ValueError):
            chains.descriptor_for(999)

    def test_every_supported_chain_round_trips(self):
        for chain_id, (name, symbol, rpc_url, explorer_url) in SUPPORTED_CHAINS.items():
            descriptor = chains.descriptor_for(chain_id)

            assert descriptor.chain_id == chain_id
            assert descriptor.name == name
            assert descriptor.native_symbol == symbol
            assert descriptor.rpc_url == rpc_url
            assert descriptor.explorer_url == explorer_url
            assert descriptor.factory_address
            assert descriptor.registry_address
            assert descriptor.transfer_validator_address

    def test_per_chain_overrides(self):
        assert chains.factory_address(1) == DEFAULT_FACTORY_ADDRESS
        assert chains.factory_address(2741) == ABSTRACT_FACTORY_ADDRESS
        assert chains.transfer_validator_address(8453) == ME_TRANSFER_VALIDATOR_V3
        assert chains.transfer_list_id(137) == MAGIC_EDEN_POLYGON_LIST_ID


class TestDerivations:
    """Tests for symbol and explorer URL helpers."""

    def test_symbol_for(self):
        assert chains.symbol_for(137) == "POL"
        assert chains.symbol_for(1) == "ETH"

    def test_explorer_urls(self):
        assert chains.explorer_tx_url(1, "0xdead") == "https://etherscan.io/tx/0xdead"
        assert chains.explorer_contract_url(8453, "0xbeef") == "https://basescan.org/address/0xbeef"

    def test_chain_id_from_name_is_case_insensitive(self):
        assert chains.chain_id_from_name("base") == 8453
        assert chains.chain_id_from_name("MonadTestnet") == 10143

    def test_chain_id_from_unknown_name(self):
        with pytest.raises(UnsupportedChainError):
            chains.chain_id_from_name("solana")


class TestStandardAndImplIds:
    """Tests for standard_id() and impl_id()."""

    def test_standard_ids(self):
        assert chains.standard_id("ERC721") == 0
        assert chains.standard_id("ERC1155") == 1

    def test_unknown_standard(self):
        with pytest.raises(ValueError):
            chains.standard_id("ERC20")

    def test_impl_id_defaults(self):
        assert chains.impl_id(1, "ERC721", False) == 0
        assert chains.impl_id(1, "ERC1155", True) == 0
        assert chains.impl_id(1, "ERC721", True) == 1
        assert chains.impl_id(2741, "ERC721", True) == 3

    def test_impl_id_unknown_chain(self):
        with pytest.raises(UnsupportedChainError):
            chains.impl_id(999, "ERC721", True)
