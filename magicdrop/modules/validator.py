"""Validation of collection config files loaded from disk or the CLI."""

from typing import Any, Dict, List, Optional

from web3 import Web3

from magicdrop.modules.chains import CHAIN_DESCRIPTORS, supported_chain_ids
from magicdrop.modules.config import TOKEN_STANDARDS
from magicdrop.modules.exceptions import ConfigValidationError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_address(value: Any) -> bool:
    return isinstance(value, str) and Web3.is_address(value)


def _is_number_list(value: Any) -> bool:
    return isinstance(value, list) and all(_is_number(item) for item in value)


def validate_config(
    config: Dict[str, Any], setup_contract: bool = False, total_tokens: Optional[int] = None
) -> List[str]:
    """
    Collect every violation in a collection config.

    Args:
        config: Collection config dictionary
        setup_contract: Whether a post-deploy setup is requested
        total_tokens: Number of ERC1155 token ids, required for ERC1155 setup

    Returns:
        List of violation messages, empty if the config is valid
    """
    errors = []

    chain_id = config.get('chainId')
    if not _is_number(chain_id) or chain_id not in CHAIN_DESCRIPTORS:
        errors.append(f'Invalid or missing chainId. Try any of {supported_chain_ids()}')

    token_standard = config.get('tokenStandard')
    if token_standard not in TOKEN_STANDARDS:
        errors.append('Invalid or missing tokenStandard. Must be "ERC721" or "ERC1155".')

    if not config.get('name') or not isinstance(config.get('name'), str):
        errors.append(
            'Invalid or missing collectionName. Enter the `name` in the config file or pass the --name flag.'
        )

    if not config.get('symbol') or not isinstance(config.get('symbol'), str):
        errors.append(
            'Invalid or missing symbol. Enter the `symbol` in the config file or pass the --symbol flag.'
        )

    if not _is_address(config.get('cosigner')):
        errors.append(
            'Invalid or missing cosigner address. Enter the `cosigner` in the config file or pass the --cosigner flag.'
        )

    if not _is_address(config.get('mintCurrency')):
        errors.append(
            'Invalid or missing mintCurrency address. Enter the `mintCurrency` in the config file '
            'or pass the --mintCurrency flag.'
        )

    if not isinstance(config.get('mintable'), bool):
        errors.append('Invalid or missing mintable. It should either be true or false.')

    if token_standard == 'ERC721':
        if setup_contract and not _is_number(config.get('globalWalletLimit')):
            errors.append(
                'Invalid or missing globalWalletLimit. It should be a number. Enter the `globalWalletLimit` '
                'in the config file or pass the --globalWalletLimit flag if you want to setup contract.'
            )

        if setup_contract and not _is_number(config.get('maxMintableSupply')):
            errors.append('Invalid or missing maxMintableSupply. It should be a number.')

        if not isinstance(config.get('useERC721C'), bool):
            errors.append('Invalid or missing useERC721C. It should either be true or false.')

        suffix = config.get('tokenUriSuffix')
        if setup_contract and (not suffix or not isinstance(suffix, str)):
            errors.append(
                'Invalid or missing tokenUriSuffix. Enter the `tokenUriSuffix` in the config file '
                'or pass the --tokenUriSuffix flag if you want to setup contract.'
            )

    if token_standard == 'ERC1155':
        if setup_contract and not _is_number_list(config.get('globalWalletLimit')):
            errors.append(
                'Invalid or missing globalWalletLimit. It should be an array of numbers. Enter the '
                '`globalWalletLimit` in the config file or pass the --globalWalletLimit flag if you want '
                'to setup contract.'
            )

        if setup_contract and not _is_number_list(config.get('maxMintableSupply')):
            errors.append(
                'Invalid or missing maxMintableSupply. It should be an array of numbers. Enter the '
                '`maxMintableSupply` in the config file or pass the --maxMintableSupply flag if you want '
                'to setup contract.'
            )

        if setup_contract and not _is_number(total_tokens):
            errors.append(
                'Invalid or missing totalTokens. Pass the --totalTokens flag if you want to setup contract.'
            )

    if setup_contract:
        if not config.get('uri') or not isinstance(config.get('uri'), str):
            errors.append(
                'Invalid or missing uri. Enter the `uri` in the config file or pass the --uri flag '
                'if you want to setup contract.'
            )

        if not _is_address(config.get('fundReceiver')):
            errors.append(
                'Invalid or missing fundReceiver. Enter the `fundReceiver` in the config file '
                'or pass the --fundReceiver flag if you want to setup contract.'
            )

        if not _is_address(config.get('royaltyReceiver')):
            errors.append(
                'Invalid or missing royaltyReceiver. Enter the `royaltyReceiver` in the config file '
                'or pass the --royaltyReceiver flag if you want to setup contract.'
            )

        # 0 bps is a valid royalty
        royalty_fee = config.get('royaltyFee')
        if not _is_number(royalty_fee) or royalty_fee < 0:
            errors.append(
                'Invalid or missing royaltyFee. Enter the `royaltyFee` in the config file '
                'or pass the --royaltyFee flag if you want to setup contract.'
            )

    return errors


def ensure_valid_config(
    config: Dict[str, Any], setup_contract: bool = False, total_tokens: Optional[int] = None
) -> None:
    errors = validate_config(config, setup_contract, total_tokens)
    if errors:
        raise ConfigValidationError(errors)
