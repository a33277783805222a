from simple_nft import __version__

# Version info for migration
CONTRACT_NAME = 'crates.io:simple-nft'
CONTRACT_VERSION = __version__

DELIMITER = ':'
INDEX_SEPARATOR = '.'

# Storage namespaces
STATE_PREFIX = 'simple_nft'
CONFIG_KEY = 'config'
TOKENS_KEY = 'tokens'
OPERATORS_KEY = 'operators'
CONTRACT_INFO_KEY = 'contract_info'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Token ids are padded inside keys so that lexical order is numeric order
TOKEN_ID_WIDTH = 20

DEFAULT_LIMIT = 10
MAX_LIMIT = 30

MAX_UINT64 = 2 ** 64 - 1
MAX_UINT128 = 2 ** 128 - 1

# Returned by NftInfo when a token carries no uri
NONE_URI = 'None'

# Address validation limits of the bundled MockApi
ADDR_MIN_LEN = 3
ADDR_MAX_LEN = 90
