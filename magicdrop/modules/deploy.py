import json
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from termcolor import cprint
from web3 import Web3

from magicdrop.modules.chains import (
    factory_address, registry_address, standard_id as get_standard_id, impl_id as get_impl_id,
    explorer_tx_url, explorer_contract_url,
)
from magicdrop.modules.client import ContractManager, encode_with_signature
from magicdrop.modules.config import (
    ERC721_SETUP_TYPES, ERC1155_SETUP_TYPES, DEFAULT_MINT_CURRENCY, DEFAULT_TOKEN_URI_SUFFIX,
    DEFAULT_ROYALTY_RECEIVER,
)
from magicdrop.modules.exceptions import (
    MagicDropError, DeploymentFailedError, OperationCancelled, TransactionFailedError,
    ConfigValidationError,
)
from magicdrop.modules.stages import process_stages, encode_erc721_stages, encode_erc1155_stages
from magicdrop.modules.store import save_deployment_data
from magicdrop.modules.types import ERC721StageData, ERC1155StageData
from magicdrop.utils.utils import confirm, show_text, short_address
from magicdrop.utils.setters import (
    set_base_uri, set_1155_uri, set_token_uri_suffix, set_number_of_1155_tokens,
    set_global_wallet_limit, set_max_mintable_supply, set_mint_currency, set_fund_receiver,
    set_royalties, set_stages_file,
)


class SetupOption(str, Enum):
    YES = 'yes'
    NO = 'no'
    DEFERRED = 'deferred'


def _print_summary(title: str, rows: Dict[str, Any]):
    show_text(title)
    width = max(len(key) for key in rows)
    for key, value in rows.items():
        if value is None:
            continue
        cprint(f'  {key.ljust(width)} : {value}', 'white')
    print()


def confirm_deployment(**summary):
    _print_summary('Deployment summary', summary)
    if not confirm('Proceed with deployment?', default=True):
        raise OperationCancelled('Deployment cancelled.')


def confirm_setup(**summary):
    _print_summary('Setup summary', summary)
    if not confirm('Proceed with setup?', default=True):
        raise OperationCancelled('Setup cancelled.')


async def deploy_contract(
        cm: ContractManager,
        config: Dict[str, Any],
        collection_config_file: str,
        setup_contract_option: SetupOption = SetupOption.DEFERRED,
        total_tokens: Optional[int] = None,
) -> str:
    """
    Deploy a new collection clone through the MagicDrop factory.

    Quotes the registry fee, asks for confirmation, sends createContract, reads
    the clone address from the receipt, wires the transfer validator when the
    clone is an ICreatorToken and optionally runs setup.

    Returns:
        Checksummed address of the deployed collection
    """
    show_text('Deploying a new collection...')
    await cm.print_signer_with_balance()

    token_standard = config['tokenStandard']
    standard_id = get_standard_id(token_standard)
    impl_id = get_impl_id(cm.chain_id, token_standard, bool(config.get('useERC721C')))

    deployment_fee = await cm.get_deployment_fee(registry_address(cm.chain_id), standard_id, impl_id)

    confirm_deployment(
        name=config['name'],
        symbol=config['symbol'],
        token_standard=token_standard,
        initial_owner=short_address(cm.signer),
        impl_id=impl_id,
        chain_id=cm.chain_id,
        deployment_fee=f'{Web3.from_wei(deployment_fee, "ether")} {cm.chain.native_symbol}',
    )

    logger.info('Deploying contract... this may take a minute.')
    receipt = await cm.create_contract(
        collection_name=config['name'],
        collection_symbol=config['symbol'],
        standard_id=standard_id,
        factory_address=factory_address(cm.chain_id),
        impl_id=impl_id,
        deployment_fee=deployment_fee,
    )

    if not receipt.transaction_hash:
        raise DeploymentFailedError('Transaction hash not found in transaction receipt.')
    cprint(explorer_tx_url(cm.chain_id, receipt.transaction_hash), 'blue')
    if receipt.status == 0:
        raise DeploymentFailedError(f'Deployment transaction {receipt.transaction_hash} reverted.')

    contract_address = ContractManager.get_contract_address_from_logs(receipt.logs)
    show_text(f'Deployed Contract Address: {contract_address}', explorer_contract_url(cm.chain_id, contract_address))

    await save_deployment_data(contract_address, cm.signer, collection_config_file)

    if await cm.supports_icreator_token(contract_address):
        logger.info('Contract supports ICreatorToken, updating transfer validator and transfer list...')
        await cm.set_transfer_validator(contract_address)
        await cm.set_transfer_list(contract_address)

        if confirm('Would you like to freeze the collection?', default=True):
            await cm.freeze_thaw_contract(contract_address, freeze=True)

    option = SetupOption(setup_contract_option)
    setup_now = option == SetupOption.YES or (
        option == SetupOption.DEFERRED and confirm('Would you like to setup the contract?', default=True)
    )

    if setup_now:
        stages = config.get('stages')
        await setup_contract(
            cm,
            contract_address,
            token_standard,
            stages_json=json.dumps(stages) if stages else None,
            uri=config.get('uri'),
            token_uri_suffix=config.get('tokenUriSuffix'),
            total_tokens=total_tokens,
            global_wallet_limit=config.get('globalWalletLimit'),
            max_mintable_supply=config.get('maxMintableSupply'),
            mint_currency=config.get('mintCurrency'),
            fund_receiver=config.get('fundReceiver'),
            royalty_receiver=config.get('royaltyReceiver'),
            royalty_fee=config.get('royaltyFee'),
        )
    else:
        logger.info('Skipping contract setup.')

    return contract_address


def build_erc721_setup_data(
        uri: str,
        token_uri_suffix: str,
        max_mintable_supply: int,
        global_wallet_limit: int,
        mint_currency: str,
        fund_receiver: str,
        stages: List[ERC721StageData],
        royalty_receiver: str,
        royalty_fee: int,
) -> str:
    return encode_with_signature('setup', ERC721_SETUP_TYPES, [
        uri,
        token_uri_suffix,
        int(max_mintable_supply),
        int(global_wallet_limit),
        Web3.to_checksum_address(mint_currency),
        Web3.to_checksum_address(fund_receiver),
        encode_erc721_stages(stages),
        Web3.to_checksum_address(royalty_receiver),
        int(royalty_fee),
    ])


def build_erc1155_setup_data(
        uri: str,
        max_mintable_supply: List[int],
        global_wallet_limit: List[int],
        mint_currency: str,
        fund_receiver: str,
        stages: List[ERC1155StageData],
        royalty_receiver: str,
        royalty_fee: int,
        total_tokens: int,
) -> str:
    for field, values in (('maxMintableSupply', max_mintable_supply), ('globalWalletLimit', global_wallet_limit)):
        if len(values) != total_tokens:
            raise ConfigValidationError([f'{field} has {len(values)} entries, expected {total_tokens} (totalTokens)'])

    return encode_with_signature('setup', ERC1155_SETUP_TYPES, [
        uri,
        [int(supply) for supply in max_mintable_supply],
        [int(limit) for limit in global_wallet_limit],
        Web3.to_checksum_address(mint_currency),
        Web3.to_checksum_address(fund_receiver),
        encode_erc1155_stages(stages, total_tokens),
        Web3.to_checksum_address(royalty_receiver),
        int(royalty_fee),
    ])


async def setup_contract(
        cm: ContractManager,
        contract_address: str,
        token_standard: str,
        stages_file: Optional[str] = None,
        stages_json: Optional[str] = None,
        uri: Optional[str] = None,
        token_uri_suffix: Optional[str] = None,
        total_tokens: Optional[int] = None,
        global_wallet_limit: Optional[Union[int, List[int]]] = None,
        max_mintable_supply: Optional[Union[int, List[int]]] = None,
        mint_currency: Optional[str] = None,
        fund_receiver: Optional[str] = None,
        royalty_receiver: Optional[str] = None,
        royalty_fee: Optional[int] = None,
) -> str:
    """
    Run the one-time setup call on a deployed collection.

    Fields missing from the arguments are asked for interactively. Raises
    SetupLockedAbort before gathering anything when the contract was already
    set up.

    Returns:
        Setup transaction hash
    """
    await cm.check_setup_locked(contract_address)

    try:
        if not stages_json and not stages_file:
            stages_file = set_stages_file()

        if token_standard == 'ERC721':
            uri = uri or set_base_uri()
            token_uri_suffix = token_uri_suffix or set_token_uri_suffix(DEFAULT_TOKEN_URI_SUFFIX)
        elif token_standard == 'ERC1155':
            total_tokens = total_tokens or set_number_of_1155_tokens()
            uri = uri or set_1155_uri()
        else:
            raise ValueError(f'Unknown token standard: {token_standard}')

        if global_wallet_limit is None:
            global_wallet_limit = set_global_wallet_limit(token_standard, total_tokens or 0)
        if max_mintable_supply is None:
            max_mintable_supply = set_max_mintable_supply(token_standard, total_tokens or 0)
        mint_currency = mint_currency or set_mint_currency(DEFAULT_MINT_CURRENCY)
        fund_receiver = fund_receiver or set_fund_receiver(cm.signer)
        if royalty_fee is None or not royalty_receiver:
            royalty_receiver, royalty_fee = set_royalties(DEFAULT_ROYALTY_RECEIVER)

        await cm.print_signer_with_balance()
        confirm_setup(
            chain_id=cm.chain_id,
            token_standard=token_standard,
            contract_address=contract_address,
            max_mintable_supply=max_mintable_supply,
            global_wallet_limit=global_wallet_limit,
            mint_currency=mint_currency,
            royalty_receiver=royalty_receiver,
            royalty_fee=royalty_fee,
            stages_file=stages_file,
            stages_json=stages_json,
            fund_receiver=fund_receiver,
        )

        logger.info('Processing stages... this will take a moment.')
        stages = process_stages(token_standard, stages_file, stages_json, total_tokens)

        if token_standard == 'ERC721':
            data = build_erc721_setup_data(
                uri, token_uri_suffix, max_mintable_supply, global_wallet_limit,
                mint_currency, fund_receiver, stages, royalty_receiver, royalty_fee,
            )
        else:
            data = build_erc1155_setup_data(
                uri, max_mintable_supply, global_wallet_limit, mint_currency,
                fund_receiver, stages, royalty_receiver, royalty_fee, total_tokens,
            )

        logger.info('Setting up contract... this will take a moment.')
        tx_hash = await cm.send_transaction(contract_address, data=data)
        receipt = await cm.wait_for_transaction_receipt(tx_hash)

    except MagicDropError:
        raise
    except Exception as err:
        logger.error(f'Error setting up contract: {err}')
        raise TransactionFailedError('Failed to set up contract.') from err

    if receipt.status == 0:
        raise TransactionFailedError(f'Failed to set up contract: transaction {tx_hash} reverted.')

    cprint(explorer_tx_url(cm.chain_id, receipt.transaction_hash or tx_hash), 'blue')
    logger.success('Contract setup completed.')
    return receipt.transaction_hash or tx_hash
