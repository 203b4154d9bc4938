"""Data types shared by the deployment modules."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from magicdrop.settings.settings import DEFAULT_GAS_LIMIT


@dataclass(frozen=True)
class ChainDescriptor:
    """Static per-chain deployment information."""

    chain_id: int
    name: str  # CLI name, e.g. "base"
    rpc_url: str
    native_symbol: str
    explorer_url: str
    factory_address: str
    registry_address: str
    transfer_validator_address: str
    transfer_list_id: int


@dataclass
class PendingTransaction:
    """A transaction handed to the signer, discarded once a hash comes back."""

    to: str
    data: str = '0x'
    value: int = 0
    gas_limit: int = DEFAULT_GAS_LIMIT
    chain_id: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            'to': self.to,
            'data': self.data,
            'value': str(self.value),
            'gasLimit': str(self.gas_limit),
            'chainId': self.chain_id,
        }


@dataclass
class DeploymentReceipt:
    """The parts of a mined transaction receipt the deployer reads."""

    transaction_hash: Optional[str]
    status: Optional[int] = None
    logs: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ERC721StageData:
    price: int  # wei
    mint_fee: int  # wei
    wallet_limit: int
    merkle_root: str
    max_stage_supply: int
    start_time: int  # unix seconds
    end_time: int


@dataclass
class ERC1155StageData:
    """One mint stage for an ERC1155 collection, one entry per token id."""

    price: List[int]
    mint_fee: List[int]
    wallet_limit: List[int]
    merkle_root: List[str]
    max_stage_supply: List[int]
    start_time: int
    end_time: int
