"""Mint stage processing.

A stages source is a JSON list, either a file or an inline string, with one
object per stage. Prices are given in ether units, dates as ISO-8601 strings
or unix seconds, and eligibility either as a ``merkleRoot`` or as a
``whitelistPath`` pointing to a JSON list of addresses. ERC1155 stages carry one
entry per token id for every per-token field.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from web3 import Web3

from magicdrop.modules.config import DEFAULT_MERKLE_ROOT
from magicdrop.modules.exceptions import StageProcessingError
from magicdrop.modules.types import ERC721StageData, ERC1155StageData
from magicdrop.utils.utils import read_json

StageData = Union[ERC721StageData, ERC1155StageData]

ERC1155_ARRAY_FIELDS = ('price', 'mint_fee', 'wallet_limit', 'merkle_root', 'max_stage_supply')


def _to_wei(value: Any, field: str) -> int:
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise StageProcessingError(f'Invalid {field}: {value!r}') from None
    if not amount.is_finite():
        raise StageProcessingError(f'Invalid {field}: {value!r} is not a finite number')
    if amount < 0:
        raise StageProcessingError(f'Invalid {field}: {value!r} is negative')
    wei = amount * 10 ** 18
    if wei != wei.to_integral_value():
        raise StageProcessingError(f'Invalid {field}: {value!r} is finer than 1 wei')
    return int(wei)


def _to_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise StageProcessingError(f'Invalid {field}: {value!r}')
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise StageProcessingError(f'Invalid {field}: {value!r}') from None
    if number < 0:
        raise StageProcessingError(f'Invalid {field}: {value!r} is negative')
    return number


def _to_timestamp(value: Any, field: str) -> int:
    if isinstance(value, str) and not value.strip().isdigit():
        try:
            moment = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            raise StageProcessingError(f'Invalid {field}: {value!r}') from None
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return int(moment.timestamp())
    return _to_int(value, field)


def _stage_time(stage: Dict[str, Any], name: str, index: int) -> int:
    for key in (f'{name}Date', f'{name}Time'):
        if key in stage:
            return _to_timestamp(stage[key], f'stage {index} {key}')
    raise StageProcessingError(f'Stage {index} is missing {name}Date')


def _check_merkle_root(value: Any, field: str) -> str:
    if not isinstance(value, str) or len(value) != 66 or not value.startswith('0x'):
        raise StageProcessingError(f'Invalid {field}: {value!r}, expected a 32-byte hex string')
    try:
        bytes.fromhex(value[2:])
    except ValueError:
        raise StageProcessingError(f'Invalid {field}: {value!r}') from None
    return value.lower()


def merkle_root(addresses: List[str]) -> str:
    """
    Root of a sorted-pair keccak256 merkle tree over address leaves.

    Leaves are keccak256(abi.encodePacked(address)). An odd node at the end
    of a level moves up unchanged.
    """
    if not addresses:
        raise StageProcessingError('Cannot build a merkle root from an empty whitelist')

    level = [Web3.solidity_keccak(['address'], [Web3.to_checksum_address(a)]) for a in addresses]
    while len(level) > 1:
        next_level = []
        for i in range(0, len(level) - 1, 2):
            left, right = sorted((bytes(level[i]), bytes(level[i + 1])))
            next_level.append(Web3.keccak(left + right))
        if len(level) % 2:
            next_level.append(level[-1])
        level = next_level

    return Web3.to_hex(level[0])


def _whitelist_root(path: str, base_dir: Optional[Path]) -> str:
    whitelist_path = Path(path)
    if not whitelist_path.is_absolute() and base_dir is not None:
        whitelist_path = base_dir / whitelist_path
    try:
        addresses = read_json(whitelist_path)
    except (OSError, json.JSONDecodeError) as err:
        raise StageProcessingError(f'Failed to read whitelist {whitelist_path}: {err}') from err
    if not isinstance(addresses, list) or not all(Web3.is_address(a) for a in addresses):
        raise StageProcessingError(f'Whitelist {whitelist_path} must be a list of addresses')
    return merkle_root(addresses)


def _erc721_stage(stage: Dict[str, Any], index: int, base_dir: Optional[Path]) -> ERC721StageData:
    if stage.get('merkleRoot'):
        root = _check_merkle_root(stage['merkleRoot'], f'stage {index} merkleRoot')
    elif stage.get('whitelistPath'):
        root = _whitelist_root(stage['whitelistPath'], base_dir)
    else:
        root = DEFAULT_MERKLE_ROOT

    return ERC721StageData(
        price=_to_wei(stage.get('price', 0), f'stage {index} price'),
        mint_fee=_to_wei(stage.get('mintFee', 0), f'stage {index} mintFee'),
        wallet_limit=_to_int(stage.get('walletLimit', 0), f'stage {index} walletLimit'),
        merkle_root=root,
        max_stage_supply=_to_int(
            stage.get('maxStageSupply', stage.get('maxSupply', 0)), f'stage {index} maxStageSupply'
        ),
        start_time=_stage_time(stage, 'start', index),
        end_time=_stage_time(stage, 'end', index),
    )


def _as_list(stage: Dict[str, Any], key: str, index: int, length: int, default: Any = None) -> list:
    value = stage.get(key)
    if value is None:
        if default is None:
            raise StageProcessingError(f'Stage {index} is missing {key}')
        return [default] * length
    if not isinstance(value, list):
        raise StageProcessingError(f'Stage {index} {key} must be an array for ERC1155')
    return value


def _erc1155_stage(
    stage: Dict[str, Any], index: int, total_tokens: int, base_dir: Optional[Path]
) -> ERC1155StageData:
    supply_key = 'maxStageSupply' if 'maxStageSupply' in stage else 'maxSupply'

    if stage.get('merkleRoot'):
        roots = [
            _check_merkle_root(root, f'stage {index} merkleRoot')
            for root in _as_list(stage, 'merkleRoot', index, total_tokens)
        ]
    elif stage.get('whitelistPath'):
        roots = [
            _whitelist_root(path, base_dir) if path else DEFAULT_MERKLE_ROOT
            for path in _as_list(stage, 'whitelistPath', index, total_tokens)
        ]
    else:
        roots = [DEFAULT_MERKLE_ROOT] * total_tokens

    record = ERC1155StageData(
        price=[_to_wei(v, f'stage {index} price') for v in _as_list(stage, 'price', index, total_tokens)],
        mint_fee=[
            _to_wei(v, f'stage {index} mintFee') for v in _as_list(stage, 'mintFee', index, total_tokens, 0)
        ],
        wallet_limit=[
            _to_int(v, f'stage {index} walletLimit')
            for v in _as_list(stage, 'walletLimit', index, total_tokens, 0)
        ],
        merkle_root=roots,
        max_stage_supply=[
            _to_int(v, f'stage {index} {supply_key}') for v in _as_list(stage, supply_key, index, total_tokens, 0)
        ],
        start_time=_stage_time(stage, 'start', index),
        end_time=_stage_time(stage, 'end', index),
    )
    check_erc1155_lengths(record, total_tokens, index)
    return record


def check_erc1155_lengths(stage: ERC1155StageData, total_tokens: int, index: int = 0) -> None:
    for field in ERC1155_ARRAY_FIELDS:
        length = len(getattr(stage, field))
        if length != total_tokens:
            raise StageProcessingError(
                f'Stage {index} {field} has {length} entries, expected {total_tokens} (totalTokens)'
            )


def transform_stages(
    stages: List[Dict[str, Any]],
    token_standard: str,
    total_tokens: Optional[int] = None,
    base_dir: Optional[Path] = None,
) -> List[StageData]:
    """
    Normalize raw stage objects into stage records ready for ABI encoding.

    Args:
        stages: Raw stage objects
        token_standard: "ERC721" or "ERC1155"
        total_tokens: Number of ERC1155 token ids
        base_dir: Directory whitelist paths are resolved against

    Raises:
        StageProcessingError: If any stage is malformed
    """
    if not isinstance(stages, list) or not stages:
        raise StageProcessingError('Stages must be a non-empty list')
    if not all(isinstance(stage, dict) for stage in stages):
        raise StageProcessingError('Every stage must be an object')

    if token_standard == 'ERC721':
        records = [_erc721_stage(stage, i, base_dir) for i, stage in enumerate(stages)]
    elif token_standard == 'ERC1155':
        if not isinstance(total_tokens, int) or total_tokens <= 0:
            raise StageProcessingError('totalTokens is required for ERC1155 stages')
        records = [_erc1155_stage(stage, i, total_tokens, base_dir) for i, stage in enumerate(stages)]
    else:
        raise StageProcessingError(f'Unknown token standard: {token_standard}')

    for i, record in enumerate(records):
        if record.end_time <= record.start_time:
            raise StageProcessingError(f'Stage {i} ends before it starts')
        if i and record.start_time < records[i - 1].end_time:
            raise StageProcessingError(f'Stage {i} overlaps stage {i - 1}')

    return records


def process_stages(
    token_standard: str,
    stages_file: Optional[str] = None,
    stages_json: Optional[str] = None,
    total_tokens: Optional[int] = None,
) -> List[StageData]:
    """Load a stages file or inline JSON string and transform it."""
    if stages_json:
        try:
            stages = json.loads(stages_json)
        except json.JSONDecodeError as err:
            raise StageProcessingError(f'Failed to parse stages JSON: {err}') from err
        base_dir = Path.cwd()
    elif stages_file:
        path = Path(stages_file)
        if not path.is_file():
            raise StageProcessingError(f'Stages file not found: {stages_file}')
        try:
            stages = read_json(path, encoding='utf-8')
        except json.JSONDecodeError as err:
            raise StageProcessingError(f'Failed to parse stages file {stages_file}: {err}') from err
        base_dir = path.parent
    else:
        raise StageProcessingError('Either a stages file or stages JSON is required')

    records = transform_stages(stages, token_standard, total_tokens, base_dir)
    logger.info(f'Processed {len(records)} stage(s)')
    return records


def encode_erc721_stages(stages: List[ERC721StageData]) -> List[tuple]:
    return [
        (
            stage.price,
            stage.mint_fee,
            stage.wallet_limit,
            bytes.fromhex(_check_merkle_root(stage.merkle_root, 'merkleRoot')[2:]),
            stage.max_stage_supply,
            stage.start_time,
            stage.end_time,
        )
        for stage in stages
    ]


def encode_erc1155_stages(stages: List[ERC1155StageData], total_tokens: int) -> List[tuple]:
    """
    Raises:
        StageProcessingError: If any per-token array length differs from total_tokens
    """
    encoded = []
    for i, stage in enumerate(stages):
        check_erc1155_lengths(stage, total_tokens, i)
        encoded.append((
            list(stage.price),
            list(stage.mint_fee),
            list(stage.wallet_limit),
            [bytes.fromhex(_check_merkle_root(root, 'merkleRoot')[2:]) for root in stage.merkle_root],
            list(stage.max_stage_supply),
            stage.start_time,
            stage.end_time,
        ))
    return encoded
