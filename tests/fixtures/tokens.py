"""Sample token and account fixtures for testing."""

from src.selene_cli.config.constants import (
    HEUR_ADDRESS_TESTNET,
    HUSD_ADDRESS_TESTNET,
    MARKETPLACE_ADDRESS_TESTNET,
)

# 12-word BIP-39 test vector, never funded
TEST_MNEMONIC = " ".join(["abandon"] * 11 + ["about"])

TEST_WALLET_ADDRESS = "archway1" + "q" * 38
TEST_FAUCET_ADDRESS = "archway1" + "p" * 38

MARKETPLACE_ADDRESS = MARKETPLACE_ADDRESS_TESTNET
HEUR_ADDRESS = HEUR_ADDRESS_TESTNET
HUSD_ADDRESS = HUSD_ADDRESS_TESTNET

SAMPLE_HEUR = {
    "address": HEUR_ADDRESS,
    "symbol": "HEUR",
    "name": "Hackathon EUR",
    "decimals": 6,
    "raw_balance": "500000000",
}

SAMPLE_HUSD = {
    "address": HUSD_ADDRESS,
    "symbol": "HUSD",
    "name": "Hackathon USD",
    "decimals": 6,
    "raw_balance": "500000000",
}
