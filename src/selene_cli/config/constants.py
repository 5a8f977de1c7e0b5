"""Constants for the Selene Markets CLI."""

import re

# Archway Constantine testnet
# Source: https://docs.archway.io/resources/networks
ARCHWAY_ADDRESS_PREFIX = "archway"
CONSTANTINE_CHAIN_ID = "constantine-3"
CONSTANTINE_REST_URL = "rest+https://api.constantine.archway.tech"
CONSTANTINE_FEE_DENOM = "aconst"
CONSTANTINE_MIN_GAS_PRICE = 900_000_000_000  # aconst per gas unit

# Selene contract addresses (Constantine)
MARKETPLACE_ADDRESS_TESTNET = "archway19xpqgjr97ts34cgzzgh9pyprke8z5f94xv20wjgse5wg8uvt09asmkny8r"

# CW20 token addresses (Constantine)
HEUR_ADDRESS_TESTNET = "archway1wn65e09977sznhadc809n3t7qdzvz8qlp86ldmgmtg0j7v0778psxffrfs"
HUSD_ADDRESS_TESTNET = "archway15ma5wg7cctsf5up968dl76k0pewchq57nmrx60qjaev4jpf4wwcsjgaef3"

# Market configuration
DEFAULT_MARKET_ID = 0  # Only one market deployed: HEUR/HUSD
DEFAULT_BOOK_DEPTH = 10
MAX_BOOK_DEPTH = 100

# Faucet
FAUCET_MINT_AMOUNT = "1000"  # Human units minted per token

# Retry Configuration (read-only queries only, submissions are never retried)
MAX_QUERY_RETRIES = 3
QUERY_RETRY_BACKOFF_SECONDS = 1

# Explorer
EXPLORER_TX_URL_TESTNET = "https://testnet.mintscan.io/archway-testnet/txs/{tx_hash}"

# Bech32 data part: 32 chars + 6 checksum for accounts, 52 + 6 for contracts
_BECH32_DATA_PATTERN = "[02-9ac-hj-np-z]{38,58}"


def explorer_tx_link(tx_hash: str, template: str = EXPLORER_TX_URL_TESTNET) -> str:
    """Build a block explorer URL for a transaction hash."""
    return template.format(tx_hash=tx_hash)


def is_bech32_address(address: str, prefix: str = ARCHWAY_ADDRESS_PREFIX) -> bool:
    """Check that an address has the expected prefix and a bech32-shaped body.

    Checksums are not verified here; the chain library does that when the
    address is first used.
    """
    if not isinstance(address, str):
        return False
    return re.fullmatch(re.escape(prefix) + "1" + _BECH32_DATA_PATTERN, address) is not None
