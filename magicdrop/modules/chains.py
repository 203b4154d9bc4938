"""Per-chain lookup of RPC endpoints, explorers and MagicDrop contract addresses."""

from typing import Dict, List

from magicdrop.modules.types import ChainDescriptor
from magicdrop.modules.exceptions import UnsupportedChainError
from magicdrop.modules.config import (
    SUPPORTED_CHAINS, FACTORY_ADDRESSES, REGISTRY_ADDRESSES, TRANSFER_VALIDATORS,
    TRANSFER_LIST_IDS, ERC721C_IMPL_IDS, STANDARD_IDS, DEFAULT_FACTORY_ADDRESS,
    DEFAULT_REGISTRY_ADDRESS, ME_TRANSFER_VALIDATOR_V3, MAGIC_EDEN_DEFAULT_LIST_ID,
    DEFAULT_IMPL_ID, DEFAULT_ERC721C_IMPL_ID,
)


def _build_descriptors() -> Dict[int, ChainDescriptor]:
    descriptors = {}
    for chain_id, (name, symbol, rpc_url, explorer_url) in SUPPORTED_CHAINS.items():
        descriptors[chain_id] = ChainDescriptor(
            chain_id=chain_id,
            name=name,
            rpc_url=rpc_url,
            native_symbol=symbol,
            explorer_url=explorer_url,
            factory_address=FACTORY_ADDRESSES.get(chain_id, DEFAULT_FACTORY_ADDRESS),
            registry_address=REGISTRY_ADDRESSES.get(chain_id, DEFAULT_REGISTRY_ADDRESS),
            transfer_validator_address=TRANSFER_VALIDATORS.get(chain_id, ME_TRANSFER_VALIDATOR_V3),
            transfer_list_id=TRANSFER_LIST_IDS.get(chain_id, MAGIC_EDEN_DEFAULT_LIST_ID),
        )
    return descriptors


CHAIN_DESCRIPTORS = _build_descriptors()


def supported_chain_ids() -> List[int]:
    return list(CHAIN_DESCRIPTORS.keys())


def descriptor_for(chain_id: int) -> ChainDescriptor:
    """
    Return the descriptor for a chain id.

    Raises:
        UnsupportedChainError: If the chain id is not registered
    """
    try:
        return CHAIN_DESCRIPTORS[chain_id]
    except (KeyError, TypeError):
        raise UnsupportedChainError(
            f'Unsupported chain id: {chain_id}. Try any of {supported_chain_ids()}'
        ) from None


def chain_id_from_name(name: str) -> int:
    for descriptor in CHAIN_DESCRIPTORS.values():
        if descriptor.name.lower() == name.lower():
            return descriptor.chain_id
    names = [d.name for d in CHAIN_DESCRIPTORS.values()]
    raise UnsupportedChainError(f'Unsupported chain: {name}. Try any of {names}')


def symbol_for(chain_id: int) -> str:
    return descriptor_for(chain_id).native_symbol


def explorer_tx_url(chain_id: int, tx_hash: str) -> str:
    return f'{descriptor_for(chain_id).explorer_url}/tx/{tx_hash}'


def explorer_contract_url(chain_id: int, address: str) -> str:
    return f'{descriptor_for(chain_id).explorer_url}/address/{address}'


def factory_address(chain_id: int) -> str:
    return descriptor_for(chain_id).factory_address


def registry_address(chain_id: int) -> str:
    return descriptor_for(chain_id).registry_address


def transfer_validator_address(chain_id: int) -> str:
    return descriptor_for(chain_id).transfer_validator_address


def transfer_list_id(chain_id: int) -> int:
    return descriptor_for(chain_id).transfer_list_id


def standard_id(token_standard: str) -> int:
    try:
        return STANDARD_IDS[token_standard]
    except KeyError:
        raise ValueError(f'Unknown token standard: {token_standard}') from None


def impl_id(chain_id: int, token_standard: str, use_erc721c: bool = False) -> int:
    """Pick the registered implementation for a (chain, standard, ERC721C) combination."""
    descriptor_for(chain_id)
    if token_standard != 'ERC721' or not use_erc721c:
        return DEFAULT_IMPL_ID
    return ERC721C_IMPL_IDS.get(chain_id, DEFAULT_ERC721C_IMPL_ID)
