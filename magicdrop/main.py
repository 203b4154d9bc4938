import argparse
import asyncio
import json
import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from loguru import logger
from termcolor import cprint

from magicdrop.modules import ContractManager, deploy_contract, setup_contract, SetupOption, ensure_valid_config
from magicdrop.modules.chains import chain_id_from_name, descriptor_for, explorer_tx_url
from magicdrop.modules.client import make_web3
from magicdrop.modules.config import TOKEN_STANDARDS
from magicdrop.modules.exceptions import MagicDropError, SetupLockedAbort, OperationCancelled
from magicdrop.modules.signer import signer_from_settings
from magicdrop.modules.store import ProjectStore, init
from magicdrop.settings.settings import COLLECTION_DIR, STANDARD_GAS_LIMIT


def ether_amount(value: str) -> int:
    """argparse type: a native-unit amount such as ``0.05``, returned in wei."""
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f'invalid amount: {value!r}') from None
    if not amount.is_finite() or amount <= 0:
        raise argparse.ArgumentTypeError(f'amount must be a positive number: {value!r}')
    wei = amount * 10 ** 18
    if wei != wei.to_integral_value():
        raise argparse.ArgumentTypeError(f'amount is finer than 1 wei: {value!r}')
    return int(wei)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='magicdrop', description='Deploy and manage MagicDrop NFT collections')
    parser.add_argument('--collections-dir', default=COLLECTION_DIR, help='directory holding projects/<collection>/')
    parser.add_argument('--signer', help='signer address, defaults to the collection wallet.json')
    parser.add_argument('--symbol', help='signing service wallet symbol, defaults to the collection name')

    commands = parser.add_subparsers(dest='command', required=True)

    deploy = commands.add_parser('deploy', help='deploy a new collection')
    deploy.add_argument('collection')
    deploy.add_argument('-c', '--chain', help='chain name, overrides chainId from the collection file')
    deploy.add_argument('-t', '--token-standard', choices=TOKEN_STANDARDS)
    deploy.add_argument('-s', '--setup-contract', choices=[o.value for o in SetupOption], default='deferred')
    deploy.add_argument('--total-tokens', type=int, help='number of ERC1155 token ids, ignored for ERC721')

    setup = commands.add_parser('setup', help='setup an existing collection')
    setup.add_argument('collection')
    setup.add_argument('--contract', required=True)
    setup.add_argument('--stages-file')
    setup.add_argument('--total-tokens', type=int)

    commands.add_parser('balance', help='show the signer balance').add_argument('collection')

    for name in ('freeze', 'thaw'):
        command = commands.add_parser(name, help=f'{name} transfers on a collection')
        command.add_argument('collection')
        command.add_argument('--contract', required=True)

    transfer = commands.add_parser('transfer', help='send native currency from the signer')
    transfer.add_argument('collection')
    transfer.add_argument('--to', required=True)
    transfer.add_argument('--amount', required=True, type=ether_amount, help='amount in native units, e.g. 0.05')

    return parser


async def build_contract_manager(args, config: dict) -> ContractManager:
    chain = descriptor_for(config.get('chainId'))
    wallet = ProjectStore(args.collection, args.collections_dir).read_wallet() or {}
    symbol = args.symbol or wallet.get('symbol') or args.collection

    w3 = make_web3(chain.rpc_url)
    tx_signer = signer_from_settings(w3)
    signer = args.signer or wallet.get('address') or await tx_signer.get_address(symbol)

    return ContractManager(chain.chain_id, signer, symbol, w3=w3, tx_signer=tx_signer)


async def run(args):
    config, config_file = init(args.collection, args.collections_dir)

    if args.command == 'deploy':
        if args.chain:
            config['chainId'] = chain_id_from_name(args.chain)
        if args.token_standard:
            config['tokenStandard'] = args.token_standard
        total_tokens = args.total_tokens or config.get('totalTokens')

        ensure_valid_config(config, args.setup_contract == SetupOption.YES.value, total_tokens)
        cm = await build_contract_manager(args, config)
        return await deploy_contract(cm, config, config_file, SetupOption(args.setup_contract), total_tokens)

    cm = await build_contract_manager(args, config)

    if args.command == 'setup':
        stages = None if args.stages_file else config.get('stages')
        return await setup_contract(
            cm,
            args.contract,
            config.get('tokenStandard'),
            stages_file=args.stages_file,
            stages_json=json.dumps(stages) if stages else None,
            uri=config.get('uri'),
            token_uri_suffix=config.get('tokenUriSuffix'),
            total_tokens=args.total_tokens or config.get('totalTokens'),
            global_wallet_limit=config.get('globalWalletLimit'),
            max_mintable_supply=config.get('maxMintableSupply'),
            mint_currency=config.get('mintCurrency'),
            fund_receiver=config.get('fundReceiver'),
            royalty_receiver=config.get('royaltyReceiver'),
            royalty_fee=config.get('royaltyFee'),
        )

    if args.command == 'balance':
        return await cm.print_signer_with_balance()

    if args.command in ('freeze', 'thaw'):
        return await cm.freeze_thaw_contract(args.contract, freeze=args.command == 'freeze')

    if args.command == 'transfer':
        tx_hash = await cm.transfer_native(args.to, args.amount, gas_limit=STANDARD_GAS_LIMIT)
        cprint(explorer_tx_url(cm.chain_id, tx_hash), 'blue')
        return tx_hash


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        asyncio.run(run(args))

    except SetupLockedAbort as err:
        cprint(f'\n{err}', 'red', attrs=['bold'])
        return 1

    except OperationCancelled as err:
        logger.warning(f'{err}')
        return 0

    except MagicDropError as err:
        logger.error(f'{err}')
        return 1

    except KeyboardInterrupt:
        logger.warning('Interrupted')
        return 130

    return 0


if __name__ == '__main__':
    sys.exit(main())
