"""Interactive prompts for setup fields missing from the collection config."""

from pathlib import Path
from typing import List, Tuple, Union

from web3 import Web3

from magicdrop.utils.utils import confirm, prompt_text


def _non_empty(value: str) -> str:
    if not value:
        raise ValueError('a value is required')
    return value


def _address(value: str) -> str:
    if not Web3.is_address(value):
        raise ValueError(f'{value} is not a valid address')
    return Web3.to_checksum_address(value)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise ValueError('must not be negative')
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError('must be greater than zero')
    return number


def _int_list(length: int):
    def cast(value: str) -> List[int]:
        items = [_non_negative_int(item.strip()) for item in value.split(',') if item.strip()]
        if len(items) != length:
            raise ValueError(f'expected {length} comma-separated numbers, got {len(items)}')
        return items
    return cast


def _existing_file(value: str) -> str:
    if not Path(value).is_file():
        raise ValueError(f'file not found: {value}')
    return value


def set_base_uri() -> str:
    return prompt_text('Enter the base URI', cast=_non_empty)


def set_1155_uri() -> str:
    return prompt_text('Enter the URI for the ERC1155 tokens', cast=_non_empty)


def set_token_uri_suffix(default: str) -> str:
    return prompt_text('Enter the token URI suffix', default=default)


def set_number_of_1155_tokens() -> int:
    return prompt_text('Enter the number of ERC1155 tokens', cast=_positive_int)


def set_global_wallet_limit(token_standard: str, total_tokens: int = 0) -> Union[int, List[int]]:
    if token_standard == 'ERC1155':
        return prompt_text(
            f'Enter the global wallet limit for each of the {total_tokens} tokens (comma-separated, 0 = unlimited)',
            cast=_int_list(total_tokens),
        )
    return prompt_text('Enter the global wallet limit (0 = unlimited)', cast=_non_negative_int)


def set_max_mintable_supply(token_standard: str, total_tokens: int = 0) -> Union[int, List[int]]:
    if token_standard == 'ERC1155':
        return prompt_text(
            f'Enter the max mintable supply for each of the {total_tokens} tokens (comma-separated)',
            cast=_int_list(total_tokens),
        )
    return prompt_text('Enter the max mintable supply', cast=_non_negative_int)


def set_mint_currency(default: str) -> str:
    return prompt_text('Enter the mint currency address', default=default, cast=_address)


def set_fund_receiver(default: str) -> str:
    return prompt_text('Enter the fund receiver address', default=default, cast=_address)


def set_royalties(default_receiver: str) -> Tuple[str, int]:
    """Returns (royalty_receiver, royalty_fee_bps)."""
    if not confirm('Would you like to set royalties?', default=False):
        return default_receiver, 0

    receiver = prompt_text('Enter the royalty receiver address', cast=_address)
    fee = prompt_text('Enter the royalty fee in basis points (e.g. 500 = 5%)', cast=_non_negative_int)
    return receiver, fee


def set_stages_file() -> str:
    return prompt_text('Enter the path to the stages file', cast=_existing_file)
