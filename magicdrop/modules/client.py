from typing import Any, Dict, List, Optional, Sequence

from eth_abi import encode, decode
from eth_abi.exceptions import DecodingError
from loguru import logger
from termcolor import cprint
from web3 import AsyncWeb3, AsyncHTTPProvider, Web3
from web3.eth import AsyncEth

from magicdrop.modules.chains import (
    descriptor_for, explorer_tx_url, transfer_validator_address, transfer_list_id,
)
from magicdrop.modules.config import (
    MAGICDROP_REGISTRY_ABI, MAGICDROP_FACTORY_ABI, COLLECTION_ABI, TRANSFER_VALIDATOR_ABI,
    ICREATOR_TOKEN_INTERFACE_ID,
)
from magicdrop.modules.exceptions import (
    InvalidSignerError, RpcError, InsufficientBalanceError, EventNotFoundError,
    MalformedEventError, SetupLockedAbort, TransactionFailedError, DeploymentFailedError,
)
from magicdrop.modules.signer import signer_from_settings
from magicdrop.modules.types import PendingTransaction, DeploymentReceipt
from magicdrop.settings.settings import DEFAULT_GAS_LIMIT, RECEIPT_TIMEOUT, RPC_HEADERS
from magicdrop.utils.utils import short_address


def to_hex(value: Any) -> str:
    if isinstance(value, str):
        return value if value.startswith('0x') else '0x' + value
    return Web3.to_hex(value)


def abi_entry(abi: List[dict], name: str, entry_type: str = 'function') -> dict:
    return next(item for item in abi if item.get('name') == name and item['type'] == entry_type)


def abi_signature(entry: dict) -> str:
    return f"{entry['name']}({','.join(item['type'] for item in entry['inputs'])})"


def encode_with_signature(name: str, types: Sequence[str], args: Sequence[Any]) -> str:
    selector = Web3.keccak(text=f"{name}({','.join(types)})")[:4]
    return to_hex(selector + encode(list(types), list(args)))


def encode_call(abi: List[dict], name: str, args: Sequence[Any] = ()) -> str:
    entry = abi_entry(abi, name)
    return encode_with_signature(name, [item['type'] for item in entry['inputs']], args)


def decode_result(abi: List[dict], name: str, data: bytes) -> tuple:
    entry = abi_entry(abi, name)
    return decode([item['type'] for item in entry['outputs']], bytes(data))


def decode_event(entry: dict, log: Dict[str, Any]) -> Dict[str, Any]:
    topics = [bytes.fromhex(to_hex(topic)[2:]) for topic in log.get('topics', [])]
    data = log.get('data') or b''
    if isinstance(data, str):
        data = bytes.fromhex(data[2:] if data.startswith('0x') else data)

    indexed = [item for item in entry['inputs'] if item.get('indexed')]
    plain = [item for item in entry['inputs'] if not item.get('indexed')]

    values = {}
    for item, topic in zip(indexed, topics[1:]):
        values[item['name']] = decode([item['type']], topic)[0]
    for item, value in zip(plain, decode([item['type'] for item in plain], bytes(data))):
        values[item['name']] = value
    return values


def make_web3(rpc_url: str) -> AsyncWeb3:
    return AsyncWeb3(
        AsyncHTTPProvider(rpc_url, request_kwargs={'headers': RPC_HEADERS}),
        modules={"eth": (AsyncEth)},
        middleware=[],
    )


class ContractManager:
    """On-chain reads and writes for one (chain, signer, wallet symbol) triple."""

    def __init__(self, chain_id: int, signer: str, symbol: str, w3: AsyncWeb3 = None, tx_signer=None):
        self.chain = descriptor_for(chain_id)
        self.chain_id = chain_id
        self.rpc_url = self.chain.rpc_url
        self.symbol = symbol.lower()

        if not signer or not Web3.is_address(signer):
            raise InvalidSignerError('ContractManager initialization failed! Signer is invalid.')
        self.signer = Web3.to_checksum_address(signer)

        self.w3 = w3 or make_web3(self.rpc_url)
        self.tx_signer = tx_signer or signer_from_settings(self.w3)

    async def call(self, contract_address: str, data: str) -> bytes:
        try:
            result = await self.w3.eth.call({
                'to': Web3.to_checksum_address(contract_address),
                'data': data,
            })
        except Exception as err:
            raise RpcError(f'eth_call to {contract_address} failed: {err}') from err
        return bytes(result or b'')

    async def get_deployment_fee(self, registry_address: str, standard_id: int, impl_id: int) -> int:
        data = encode_call(MAGICDROP_REGISTRY_ABI, 'getDeploymentFee', [standard_id, impl_id])
        logger.info('Fetching deployment fee...')

        try:
            result = await self.call(registry_address, data)
            if not result:
                logger.warning(
                    f'Registry {short_address(registry_address)} returned no data for '
                    f'({standard_id}, {impl_id}), assuming no deployment fee'
                )
                return 0
            return decode_result(MAGICDROP_REGISTRY_ABI, 'getDeploymentFee', result)[0]

        except (RpcError, DecodingError) as err:
            logger.error(f'Error fetching deployment fee: {err}')
            raise RpcError('Failed to fetch deployment fee.') from err

    async def send_transaction(
            self,
            to: str,
            data: str = '0x',
            value: int = 0,
            gas_limit: Optional[int] = None,
    ) -> str:
        transaction = PendingTransaction(
            to=to,
            data=data,
            value=value,
            gas_limit=gas_limit or DEFAULT_GAS_LIMIT,
            chain_id=self.chain_id,
        )
        return await self.tx_signer.send_transaction(self.symbol, transaction)

    async def wait_for_transaction_receipt(self, tx_hash: str) -> DeploymentReceipt:
        data = await self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=RECEIPT_TIMEOUT)

        logs = []
        for log in data.get('logs', []):
            logs.append({
                'address': log.get('address'),
                'topics': [to_hex(topic) for topic in log.get('topics', [])],
                'data': to_hex(log.get('data') or b''),
            })

        receipt = DeploymentReceipt(
            transaction_hash=to_hex(data['transactionHash']) if data.get('transactionHash') else None,
            status=data.get('status'),
            logs=logs,
        )

        if receipt.status == 0:
            logger.error(f'transaction failed {receipt.transaction_hash}')
        else:
            logger.success(f'transaction completed: {receipt.transaction_hash}')
        return receipt

    async def get_signer_balance_wei(self) -> int:
        try:
            return await self.w3.eth.get_balance(self.signer)
        except Exception as err:
            logger.error(f'Error checking signer native balance: {err}')
            raise RpcError('Failed to fetch signer native balance.') from err

    async def get_signer_native_balance(self) -> str:
        """Signer balance in ether-style units, for display only."""
        balance = await self.get_signer_balance_wei()
        return str(Web3.from_wei(balance, 'ether'))

    async def print_signer_with_balance(self):
        balance = await self.get_signer_native_balance()
        cprint(f'Signer: {short_address(self.signer)}', 'cyan')
        cprint(f'Balance: {balance} {self.chain.native_symbol}', 'cyan')

    async def transfer_native(self, to: str, amount: int, gas_limit: Optional[int] = None) -> str:
        """
        Transfer native currency from the signer.

        Args:
            to: Recipient address
            amount: Amount in wei
            gas_limit: Optional gas limit, DEFAULT_GAS_LIMIT when omitted

        Raises:
            InsufficientBalanceError: If the signer balance is below amount.
                Gas cost is not taken into account.
        """
        symbol = self.chain.native_symbol
        logger.info(f'Transferring {Web3.from_wei(amount, "ether")} {symbol} to {short_address(to)}...')

        balance = await self.get_signer_balance_wei()
        if balance < amount:
            raise InsufficientBalanceError(
                f'Insufficient balance. Available: {Web3.from_wei(balance, "ether")} {symbol}, '
                f'Required: {Web3.from_wei(amount, "ether")} {symbol}'
            )

        return await self.send_transaction(to, data='0x', value=amount, gas_limit=gas_limit)

    @staticmethod
    def get_contract_address_from_logs(logs: List[Dict[str, Any]]) -> str:
        """
        Find the NewContractInitialized log and return the deployed clone address.

        Raises:
            EventNotFoundError: If no log carries the event topic
            MalformedEventError: If the matching log has no contractAddress
        """
        event = abi_entry(MAGICDROP_FACTORY_ABI, 'NewContractInitialized', 'event')
        event_topic = to_hex(Web3.keccak(text=abi_signature(event))).lower()

        log = next(
            (log for log in logs if event_topic in [to_hex(t).lower() for t in log.get('topics', [])]),
            None,
        )
        if log is None:
            raise EventNotFoundError('No matching log found for NewContractInitialized event.')

        try:
            decoded = decode_event(event, log)
        except (DecodingError, ValueError) as err:
            raise MalformedEventError(f'Failed to decode NewContractInitialized log: {err}') from err

        contract_address = decoded.get('contractAddress')
        if not contract_address:
            raise MalformedEventError('Contract address not found in decoded log.')

        return Web3.to_checksum_address(contract_address)

    async def supports_icreator_token(self, contract_address: str) -> bool:
        """
        Probe ERC-165 support for ICreatorToken.

        Any RPC or decoding failure is reported as "not supported" so the
        deployment continues without transfer-validator wiring.
        """
        logger.info('Checking if contract supports ICreatorToken...')
        data = encode_call(COLLECTION_ABI, 'supportsInterface', [bytes.fromhex(ICREATOR_TOKEN_INTERFACE_ID[2:])])

        try:
            result = await self.call(contract_address, data)
            return bool(decode_result(COLLECTION_ABI, 'supportsInterface', result)[0])
        except (RpcError, DecodingError) as err:
            logger.warning(f'Error checking ICreatorToken support, assuming unsupported: {err}')
            return False

    async def create_contract(
            self,
            collection_name: str,
            collection_symbol: str,
            standard_id: int,
            factory_address: str,
            impl_id: int,
            deployment_fee: int = 0,
    ) -> DeploymentReceipt:
        data = encode_call(
            MAGICDROP_FACTORY_ABI,
            'createContract',
            [collection_name, collection_symbol, standard_id, self.signer, impl_id],
        )
        try:
            tx_hash = await self.send_transaction(factory_address, data=data, value=deployment_fee)
            return await self.wait_for_transaction_receipt(tx_hash)
        except Exception as err:
            logger.error(f'Error deploying contract: {err}')
            raise DeploymentFailedError(f'Failed to deploy contract: {err}') from err

    async def _send_and_confirm(self, to: str, data: str, action: str) -> str:
        try:
            tx_hash = await self.send_transaction(to, data=data)
            receipt = await self.wait_for_transaction_receipt(tx_hash)
        except Exception as err:
            logger.error(f'Error trying to {action}: {err}')
            raise TransactionFailedError(f'Failed to {action}.') from err

        if receipt.status == 0:
            raise TransactionFailedError(f'Failed to {action}: transaction {tx_hash} reverted.')

        cprint(explorer_tx_url(self.chain_id, tx_hash), 'blue')
        return tx_hash

    async def set_transfer_validator(self, contract_address: str) -> str:
        validator = transfer_validator_address(self.chain_id)
        logger.info(f'Setting transfer validator to {validator}...')

        data = encode_call(COLLECTION_ABI, 'setTransferValidator', [Web3.to_checksum_address(validator)])
        tx_hash = await self._send_and_confirm(contract_address, data, 'set transfer validator')

        logger.success('Transfer validator set.')
        return tx_hash

    async def set_transfer_list(self, contract_address: str) -> str:
        list_id = transfer_list_id(self.chain_id)
        logger.info(f'Setting transfer list to list ID {list_id}...')

        data = encode_call(
            TRANSFER_VALIDATOR_ABI,
            'applyListToCollection',
            [Web3.to_checksum_address(contract_address), list_id],
        )
        tx_hash = await self._send_and_confirm(
            transfer_validator_address(self.chain_id), data, 'set transfer list'
        )

        logger.success('Transfer list set.')
        return tx_hash

    async def freeze_thaw_contract(self, contract_address: str, freeze: bool) -> str:
        logger.info(f'{"Freezing" if freeze else "Thawing"} contract... this will take a moment.')

        data = encode_call(COLLECTION_ABI, 'setTransferable', [not freeze])
        return await self._send_and_confirm(
            contract_address, data, 'freeze contract' if freeze else 'thaw contract'
        )

    async def check_setup_locked(self, contract_address: str) -> None:
        """
        Raises:
            SetupLockedAbort: If the contract has already been set up
        """
        logger.info('Checking if contract setup is locked...')
        data = encode_call(COLLECTION_ABI, 'isSetupLocked')

        result = await self.call(contract_address, data)
        try:
            setup_locked = decode_result(COLLECTION_ABI, 'isSetupLocked', result)[0]
        except DecodingError as err:
            raise RpcError(f'Failed to read setup lock of {contract_address}: {err}') from err

        if setup_locked:
            raise SetupLockedAbort(
                'This contract has already been setup. Please use other commands from the '
                '"Manage Contracts" menu to update the contract.'
            )
        logger.info('Contract setup is not locked. Proceeding...')
