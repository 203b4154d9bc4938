import os


DEFAULT_GAS_LIMIT = int(os.getenv('MAGICDROP_GAS_LIMIT', '3000000'))  # upper bound when a call sets none
STANDARD_GAS_LIMIT = 21000  # plain native transfer

RECEIPT_TIMEOUT = int(os.getenv('MAGICDROP_RECEIPT_TIMEOUT', '200'))  # seconds

COLLECTION_DIR = os.getenv('MAGICDROP_COLLECTION_DIR', './collections')
DEPLOYMENT_FILENAME = 'deployment.json'

# Signing service. Leave SIGNER_SERVICE_URL empty to sign locally with SIGNER_PRIVATE_KEY
SIGNER_SERVICE_URL = os.getenv('SIGNER_SERVICE_URL', '')
SIGNER_SERVICE_TOKEN = os.getenv('SIGNER_SERVICE_TOKEN', '')
SIGNER_SERVICE_TIMEOUT = 60
SIGNER_PRIVATE_KEY = os.getenv('SIGNER_PRIVATE_KEY', '')

RPC_HEADERS = {
    'Content-Type': 'application/json',
    'User-Agent': os.getenv('MAGICDROP_USER_AGENT', 'magicdrop-cli'),
}
