LOGGER_NAME = "burstagent_app"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_SALT = "0x" + "00" * 32

TOKEN_DECIMALS = 18
TOTAL_ALLOCATION_BPS = 10000
MAX_TRADING_FEE_BPS = 500
MAX_WALLET_PERCENT_BPS = 10000

# curve style 2 at 250 AVAX
DEFAULT_CURVE_INDEX = 37
DEFAULT_CURVE_STYLE = 2
BURST_AMOUNT_STEP = 5

DEFAULT_CONFIRMATIONS = 4
DRAFT_TTL_SECONDS = 60 * 60 * 24 * 7

DEFAULT_METADATA_IPFS_URI = "ipfs://bafkreic5j5qiaubsc3xclslyc7envnmevsw35pw2uxeulhjfoidfdtpzka"
