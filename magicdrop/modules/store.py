"""Collection config files and deployment records on disk."""

import json
import time
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from magicdrop.modules.exceptions import CollectionNotFoundError
from magicdrop.settings.settings import COLLECTION_DIR, DEPLOYMENT_FILENAME
from magicdrop.utils.utils import read_json


class ProjectStore:
    """Collection files kept under ``<root>/projects/<collection>/``."""

    def __init__(self, collection_name: str, root: Optional[str] = None):
        self.collection_name = collection_name
        self.dir = Path(root or COLLECTION_DIR) / 'projects' / collection_name
        self.root = self.dir / 'project.json'

    @property
    def exists(self) -> bool:
        return self.root.is_file()

    def read(self) -> dict:
        return read_json(self.root, encoding='utf-8')

    def write(self, config: dict) -> None:
        self.dir.mkdir(parents=True, exist_ok=True)
        self.root.write_text(json.dumps(config, indent=2), encoding='utf-8')

    def read_wallet(self) -> Optional[dict]:
        wallet_path = self.dir / 'wallet.json'
        if not wallet_path.is_file():
            return None
        return read_json(wallet_path, encoding='utf-8')


def init(collection_name: str, root: Optional[str] = None) -> Tuple[dict, str]:
    """
    Load a collection config by name.

    Returns:
        Tuple of (config, config_file_path)

    Raises:
        CollectionNotFoundError: If the file is missing or empty
    """
    store = ProjectStore(collection_name, root)

    if not store.exists:
        raise CollectionNotFoundError(f'Collection file not found: {store.root}')

    config = store.read()
    if not config:
        raise CollectionNotFoundError('Collection file is empty')

    return config, str(store.root)


async def save_deployment_data(contract_address: str, owner: str, collection_config_file: str) -> Path:
    path = Path(collection_config_file).parent / DEPLOYMENT_FILENAME
    record = {
        'contractAddress': contract_address,
        'owner': owner,
        'collectionConfigFile': str(collection_config_file),
        'deployedAt': int(time.time()),
    }

    async with aiofiles.open(path, 'w') as file:
        await file.write(json.dumps(record, indent=2))

    return path
