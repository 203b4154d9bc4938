"""Transaction signers.

The deployer never holds key material itself for production chains: it hands a
``PendingTransaction`` to a custody service which signs and broadcasts it and
returns the transaction hash. ``LocalSigner`` does the same job with a private
key from the environment and is meant for test networks.
"""

import asyncio

import requests
from eth_account import Account
from loguru import logger
from web3 import AsyncWeb3, Web3

from magicdrop.modules.exceptions import SignerServiceError, InvalidSignerError
from magicdrop.modules.types import PendingTransaction
from magicdrop.settings.settings import (
    SIGNER_SERVICE_URL, SIGNER_SERVICE_TOKEN, SIGNER_SERVICE_TIMEOUT, SIGNER_PRIVATE_KEY,
)


class RemoteSigner:

    def __init__(self, base_url: str, token: str = '', timeout: int = SIGNER_SERVICE_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout

    def _headers(self) -> dict:
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    async def get_address(self, symbol: str) -> str:
        url = f'{self.base_url}/wallets/{symbol.lower()}'
        try:
            resp = await asyncio.to_thread(requests.get, url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as err:
            raise SignerServiceError(f'Network error contacting signing service: {err}') from err

        if resp.status_code != 200:
            raise SignerServiceError(f'status_code = {resp.status_code}, response = {resp.text}')
        try:
            return Web3.to_checksum_address(resp.json()['address'])
        except (KeyError, ValueError) as err:
            raise SignerServiceError(f'Malformed wallet response: {resp.text}') from err

    async def send_transaction(self, symbol: str, transaction: PendingTransaction) -> str:
        url = f'{self.base_url}/wallets/{symbol.lower()}/transactions'
        try:
            resp = await asyncio.to_thread(
                requests.post,
                url, json=transaction.to_payload(), headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as err:
            raise SignerServiceError(f'Network error contacting signing service: {err}') from err

        if resp.status_code != 200:
            raise SignerServiceError(f'status_code = {resp.status_code}, response = {resp.text}')
        try:
            return resp.json()['txHash']
        except (KeyError, ValueError) as err:
            raise SignerServiceError(f'Malformed signing response: {resp.text}') from err


class LocalSigner:

    def __init__(self, private_key: str, w3: AsyncWeb3):
        if not private_key:
            raise InvalidSignerError('A private key is required for local signing.')
        self.private_key = private_key
        self.w3 = w3
        self.address = Web3.to_checksum_address(Account.from_key(private_key).address)

    async def get_address(self, symbol: str) -> str:
        return self.address

    async def send_transaction(self, symbol: str, transaction: PendingTransaction) -> str:
        tx_params = {
            'chainId': transaction.chain_id or await self.w3.eth.chain_id,
            'nonce': await self.w3.eth.get_transaction_count(self.address),
            'to': Web3.to_checksum_address(transaction.to),
            'value': transaction.value,
            'data': transaction.data,
            'gas': transaction.gas_limit,
            'gasPrice': await self.w3.eth.gas_price,
        }

        signed_tx = Account.sign_transaction(tx_params, self.private_key)
        tx_hash = await self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        logger.info(f'{self.address} | broadcast {Web3.to_hex(tx_hash)}')
        return Web3.to_hex(tx_hash)


def signer_from_settings(w3: AsyncWeb3):
    if SIGNER_SERVICE_URL:
        return RemoteSigner(SIGNER_SERVICE_URL, SIGNER_SERVICE_TOKEN)
    if SIGNER_PRIVATE_KEY:
        return LocalSigner(SIGNER_PRIVATE_KEY, w3)
    raise InvalidSignerError(
        'No signer configured. Set SIGNER_SERVICE_URL or SIGNER_PRIVATE_KEY.'
    )
