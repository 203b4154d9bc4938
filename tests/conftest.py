"""Shared pytest fixtures for magicdrop tests."""

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_abi import encode
from web3 import Web3

from magicdrop.modules.client import ContractManager

SIGNER = Web3.to_checksum_address('0x' + '5a' * 20)
DEPLOYED = Web3.to_checksum_address('0x' + 'abc0' * 10)
TX_HASH = '0x' + 'ab' * 32

NEW_CONTRACT_INITIALIZED = 'NewContractInitialized(address,address,uint32,uint8,string,string)'


def new_contract_log(contract_address: str = DEPLOYED, owner: str = SIGNER) -> Dict[str, Any]:
    """Build a receipt log as emitted by the factory on createContract."""
    data = encode(
        ['address', 'address', 'uint32', 'uint8', 'string', 'string'],
        [contract_address, owner, 0, 0, 'Foo', 'FOO'],
    )
    return {
        'address': '0x000000009e44eBa131196847C685F20Cd4b68aC4',
        'topics': [Web3.to_hex(Web3.keccak(text=NEW_CONTRACT_INITIALIZED))],
        'data': Web3.to_hex(data),
    }


@pytest.fixture
def erc721_config() -> Dict[str, Any]:
    return {
        'chainId': 1,
        'tokenStandard': 'ERC721',
        'name': 'Foo',
        'symbol': 'FOO',
        'cosigner': '0x0000000000000000000000000000000000000001',
        'mintCurrency': '0x0000000000000000000000000000000000000000',
        'mintable': True,
        'useERC721C': False,
    }


@pytest.fixture
def erc721_setup_config(erc721_config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        **erc721_config,
        'uri': 'ipfs://bafy/',
        'tokenUriSuffix': '.json',
        'globalWalletLimit': 0,
        'maxMintableSupply': 1000,
        'fundReceiver': SIGNER,
        'royaltyReceiver': SIGNER,
        'royaltyFee': 500,
    }


@pytest.fixture
def fake_w3() -> MagicMock:
    w3 = MagicMock()
    w3.eth.call = AsyncMock(return_value=b'')
    w3.eth.get_balance = AsyncMock(return_value=10 ** 18)
    w3.eth.wait_for_transaction_receipt = AsyncMock(
        return_value={'transactionHash': TX_HASH, 'status': 1, 'logs': []}
    )
    return w3


@pytest.fixture
def fake_signer() -> MagicMock:
    signer = MagicMock()
    signer.send_transaction = AsyncMock(return_value=TX_HASH)
    signer.get_address = AsyncMock(return_value=SIGNER)
    return signer


@pytest.fixture
def cm(fake_w3: MagicMock, fake_signer: MagicMock) -> ContractManager:
    return ContractManager(1, SIGNER, 'FOO', w3=fake_w3, tx_signer=fake_signer)


@pytest.fixture
def collections_dir(tmp_path: Path, erc721_config: Dict[str, Any]) -> Path:
    """Create a collections directory holding one project named "foo"."""
    project_dir = tmp_path / 'projects' / 'foo'
    project_dir.mkdir(parents=True)
    with open(project_dir / 'project.json', 'w') as f:
        json.dump(erc721_config, f, indent=2)
    with open(project_dir / 'wallet.json', 'w') as f:
        json.dump({'address': SIGNER, 'symbol': 'foo'}, f)
    return tmp_path
