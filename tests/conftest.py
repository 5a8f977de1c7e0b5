"""Pytest configuration and shared fixtures."""

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from src.selene_cli.encoding.messages import MessageEncoder
from src.selene_cli.models.token import Token
from src.selene_cli.trading.dispatcher import TransactionDispatcher
from tests.fixtures.tokens import (
    HEUR_ADDRESS,
    HUSD_ADDRESS,
    MARKETPLACE_ADDRESS,
    SAMPLE_HEUR,
    SAMPLE_HUSD,
    TEST_MNEMONIC,
    TEST_WALLET_ADDRESS,
)
from tests.mocks.chain import MockChainClient
from tests.mocks.prompter import ScriptedPrompter

# ===== Pytest Markers =====


def pytest_configure(config: Any) -> None:
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (chain connector mocked)")


# ===== Mock Client Fixtures =====


@pytest.fixture
def mock_chain() -> MockChainClient:
    """Create a mock chain client holding HEUR and HUSD."""
    chain = MockChainClient()
    chain.add_token(HEUR_ADDRESS, "HEUR", 6, "500000000")
    chain.add_token(HUSD_ADDRESS, "HUSD", 6, "500000000")
    return chain


@pytest.fixture
def prompter() -> ScriptedPrompter:
    """Create an empty scripted prompter."""
    return ScriptedPrompter()


# ===== Token Fixtures =====


@pytest.fixture
def heur_token() -> Token:
    """Base token (HEUR, 6 decimals)."""
    return Token(**SAMPLE_HEUR)


@pytest.fixture
def husd_token() -> Token:
    """Quote token (HUSD, 6 decimals)."""
    return Token(**SAMPLE_HUSD)


# ===== Pipeline Fixtures =====


@pytest.fixture
def encoder() -> MessageEncoder:
    """Encoder bound to the testnet marketplace."""
    return MessageEncoder(MARKETPLACE_ADDRESS)


@pytest.fixture
def dispatcher(mock_chain: MockChainClient, encoder: MessageEncoder) -> TransactionDispatcher:
    """Dispatcher over the mock chain."""
    return TransactionDispatcher(mock_chain, encoder)


# ===== Test Settings Fixtures =====


@pytest.fixture
def mock_local_wallet():
    """Patch mnemonic derivation in settings."""
    with patch("src.selene_cli.config.settings.LocalWallet") as mock:
        wallet = MagicMock()
        wallet.address.return_value = TEST_WALLET_ADDRESS
        mock.from_mnemonic.return_value = wallet
        yield mock


@pytest.fixture
def test_settings() -> dict[str, Any]:
    """Settings keyword arguments for testing."""
    return {
        "wallet_mnemonic": TEST_MNEMONIC,
        "chain_url": "rest+http://mock-archway-rest",
        "log_level": "INFO",
    }
