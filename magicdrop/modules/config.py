ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'

DEFAULT_MINT_CURRENCY = ZERO_ADDRESS
DEFAULT_ROYALTY_RECEIVER = ZERO_ADDRESS
DEFAULT_TOKEN_URI_SUFFIX = '.json'
DEFAULT_MERKLE_ROOT = '0x' + '00' * 32

ICREATOR_TOKEN_INTERFACE_ID = '0xad0d7f6c'  # type(ICreatorToken).interfaceId

TOKEN_STANDARDS = ('ERC721', 'ERC1155')
STANDARD_IDS = {
    'ERC721': 0,
    'ERC1155': 1,
}

DEFAULT_IMPL_ID = 0
DEFAULT_ERC721C_IMPL_ID = 1

ME_TRANSFER_VALIDATOR_V3 = '0x721C00D4FB075b22a5469e9CF2440697F729aA13'
LIMITBREAK_TRANSFER_VALIDATOR_V3 = '0x721C0078c2328597Ca70F5451ffF5A7B38D4E947'
LIMITBREAK_TRANSFER_VALIDATOR_V3_ABSTRACT = '0x3203c3f64312AF9344e42EF8Aa45B97C9DFE4594'
LIMITBREAK_TRANSFER_VALIDATOR_V3_BERACHAIN = '0x721c002b0059009a671d00ad1700c9748146cd1b'

ABSTRACT_FACTORY_ADDRESS = '0x4a08d3F6881c4843232EFdE05baCfb5eAaB35d19'
AVALANCHE_FACTORY_ADDRESS = '0x0b49bDcf2eC9329Fa6F42DCCC66e8906a3E4ACF0'
DEFAULT_FACTORY_ADDRESS = '0x000000009e44eBa131196847C685F20Cd4b68aC4'

ABSTRACT_REGISTRY_ADDRESS = '0x9b60ad31F145ec7EE3c559153bB57928B65C0F87'
AVALANCHE_REGISTRY_ADDRESS = '0x09E0135dfBb7528D6eAA5beB69f3C030dF26F57c'
DEFAULT_REGISTRY_ADDRESS = '0x00000000caF1E3978e291c5Fb53FeedB957eC146'

DEFAULT_LIST_ID = 0  # chains without a custom list
MAGIC_EDEN_DEFAULT_LIST_ID = 1
MAGIC_EDEN_POLYGON_LIST_ID = 3  # list 1 was already taken on Polygon

# chain id: (name, native symbol, rpc, explorer)
SUPPORTED_CHAINS = {
    33139: ('apechain', 'APE', 'https://evm-router.magiceden.io/apechain/mainnet/me2024', 'https://apescan.io'),
    42161: ('arbitrum', 'ETH', 'https://evm-router.magiceden.io/arbitrum/mainnet/me2024', 'https://arbiscan.io'),
    8453: ('base', 'ETH', 'https://evm-router.magiceden.io/base/mainnet/me2024', 'https://basescan.org'),
    1: ('ethereum', 'ETH', 'https://evm-router.magiceden.io/ethereum/mainnet/me2024', 'https://etherscan.io'),
    137: ('polygon', 'POL', 'https://evm-router.magiceden.io/polygon/mainnet/me2024', 'https://polygonscan.com'),
    1329: ('sei', 'SEI', 'https://evm-router.magiceden.io/sei/mainnet/me2024', 'https://seitrace.com'),
    11155111: ('sepolia', 'ETH', 'https://evm-router.magiceden.io/ethereum/sepolia/me2024', 'https://sepolia.etherscan.io'),
    56: ('bsc', 'BNB', 'https://evm-router.magiceden.io/bsc/mainnet/me2024', 'https://bscscan.com'),
    43114: ('avalanche', 'AVAX', 'https://evm-router.magiceden.io/avalanche/mainnet/me2024', 'https://snowtrace.io'),
    2741: ('abstract', 'ETH', 'https://evm-router.magiceden.io/abstract/mainnet/me2024', 'https://abscan.org'),
    80094: ('berachain', 'BERA', 'https://evm-router.magiceden.io/berachain/mainnet/me2024', 'https://berascan.com'),
    10143: ('monadTestnet', 'MON', 'https://evm-router.magiceden.io/monad/testnet/me2024', 'https://testnet.monadexplorer.com'),
}

FACTORY_ADDRESSES = {
    2741: ABSTRACT_FACTORY_ADDRESS,
    43114: AVALANCHE_FACTORY_ADDRESS,
}

REGISTRY_ADDRESSES = {
    2741: ABSTRACT_REGISTRY_ADDRESS,
    43114: AVALANCHE_REGISTRY_ADDRESS,
}

TRANSFER_VALIDATORS = {
    2741: LIMITBREAK_TRANSFER_VALIDATOR_V3_ABSTRACT,
    80094: LIMITBREAK_TRANSFER_VALIDATOR_V3_BERACHAIN,
    10143: LIMITBREAK_TRANSFER_VALIDATOR_V3,
}

TRANSFER_LIST_IDS = {
    137: MAGIC_EDEN_POLYGON_LIST_ID,
    2741: DEFAULT_LIST_ID,
    80094: DEFAULT_LIST_ID,
    10143: DEFAULT_LIST_ID,
}

ERC721C_IMPL_IDS = {
    2741: 3,
    43114: 2,
}

MAGICDROP_REGISTRY_ABI = [
    {
        "inputs": [
            {"internalType": "enum TokenStandard", "name": "standard", "type": "uint8"},
            {"internalType": "uint32", "name": "implId", "type": "uint32"}
        ],
        "name": "getDeploymentFee",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]

MAGICDROP_FACTORY_ABI = [
    {
        "inputs": [
            {"internalType": "string", "name": "name", "type": "string"},
            {"internalType": "string", "name": "symbol", "type": "string"},
            {"internalType": "enum TokenStandard", "name": "standard", "type": "uint8"},
            {"internalType": "address payable", "name": "initialOwner", "type": "address"},
            {"internalType": "uint32", "name": "implId", "type": "uint32"}
        ],
        "name": "createContract",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": False, "internalType": "address", "name": "contractAddress", "type": "address"},
            {"indexed": False, "internalType": "address", "name": "initialOwner", "type": "address"},
            {"indexed": False, "internalType": "uint32", "name": "implId", "type": "uint32"},
            {"indexed": False, "internalType": "enum TokenStandard", "name": "standard", "type": "uint8"},
            {"indexed": False, "internalType": "string", "name": "name", "type": "string"},
            {"indexed": False, "internalType": "string", "name": "symbol", "type": "string"}
        ],
        "name": "NewContractInitialized",
        "type": "event"
    }
]

COLLECTION_ABI = [
    {
        "inputs": [{"internalType": "bytes4", "name": "interfaceId", "type": "bytes4"}],
        "name": "supportsInterface",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "isSetupLocked",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "address", "name": "validator", "type": "address"}],
        "name": "setTransferValidator",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "bool", "name": "canTransfer", "type": "bool"}],
        "name": "setTransferable",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]

TRANSFER_VALIDATOR_ABI = [
    {
        "inputs": [
            {"internalType": "address", "name": "collection", "type": "address"},
            {"internalType": "uint120", "name": "id", "type": "uint120"}
        ],
        "name": "applyListToCollection",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]

ERC721_STAGE_TUPLE = '(uint80,uint80,uint32,bytes32,uint24,uint256,uint256)'
ERC1155_STAGE_TUPLE = '(uint80[],uint80[],uint32[],bytes32[],uint24[],uint256,uint256)'

ERC721_SETUP_TYPES = [
    'string', 'string', 'uint256', 'uint256', 'address', 'address',
    f'{ERC721_STAGE_TUPLE}[]', 'address', 'uint96',
]
ERC1155_SETUP_TYPES = [
    'string', 'uint256[]', 'uint256[]', 'address', 'address',
    f'{ERC1155_STAGE_TUPLE}[]', 'address', 'uint96',
]
