"""Unit tests for the transaction dispatcher."""

from src.selene_cli.core.enums import ErrorKind
from src.selene_cli.core.exceptions import ChainConnectionError, TransactionFailedError
from src.selene_cli.core.result import Ok
from src.selene_cli.models.order import EncodedOrder, TxReceipt
from src.selene_cli.models.token import Token
from tests.fixtures.tokens import (
    HEUR_ADDRESS,
    HUSD_ADDRESS,
    MARKETPLACE_ADDRESS,
    TEST_FAUCET_ADDRESS,
    TEST_WALLET_ADDRESS,
)


def sample_encoded() -> EncodedOrder:
    return EncodedOrder(
        source_token_address=HEUR_ADDRESS,
        recipient_contract=MARKETPLACE_ADDRESS,
        raw_amount="100000000",
        opaque_payload="eyJtYXJrZXRfb3JkZXIiOnsibWFya2V0X2lkIjowfX0=",
    )


class TestSubmit:
    """Test order submission."""

    def test_submit_sends_one_execute(self, dispatcher, mock_chain):
        """Submit should execute the send envelope on the source token."""
        encoded = sample_encoded()

        result = dispatcher.submit(encoded, TEST_WALLET_ADDRESS)

        assert result == Ok(TxReceipt(transaction_hash=mock_chain.tx_hash))
        assert mock_chain.executions == [
            (TEST_WALLET_ADDRESS, HEUR_ADDRESS, encoded.to_execute_msg())
        ]

    def test_submit_failure_is_not_retried(self, dispatcher, mock_chain):
        """Rejected transactions should become SUBMISSION_FAILED, without retry."""
        mock_chain.execute_error = TransactionFailedError("insufficient funds")

        result = dispatcher.submit(sample_encoded(), TEST_WALLET_ADDRESS)

        assert result.kind == ErrorKind.SUBMISSION_FAILED
        assert "insufficient funds" in result.message
        assert mock_chain.submission_count == 0

    def test_submit_connection_error(self, dispatcher, mock_chain):
        """Transport errors on submit should become SUBMISSION_FAILED."""
        mock_chain.execute_error = ChainConnectionError("endpoint down")

        result = dispatcher.submit(sample_encoded(), TEST_WALLET_ADDRESS)

        assert result.kind == ErrorKind.SUBMISSION_FAILED

    def test_submit_unexpected_error(self, dispatcher, mock_chain):
        """Unexpected errors should still be reported as SUBMISSION_FAILED."""
        mock_chain.execute_error = RuntimeError("boom")

        result = dispatcher.submit(sample_encoded(), TEST_WALLET_ADDRESS)

        assert result.kind == ErrorKind.SUBMISSION_FAILED
        assert "boom" in result.message


class TestCancel:
    """Test resting order removal."""

    def test_cancel_executes_on_marketplace(self, dispatcher, mock_chain):
        """Cancel should call remove_limit_order on the marketplace."""
        result = dispatcher.cancel(0, "2.5")

        assert result.is_ok
        assert mock_chain.executions == [
            (
                TEST_WALLET_ADDRESS,
                MARKETPLACE_ADDRESS,
                {"remove_limit_order": {"market_id": 0, "price": "2.5"}},
            )
        ]

    def test_cancel_failure(self, dispatcher, mock_chain):
        """Failed removals should become SUBMISSION_FAILED."""
        mock_chain.execute_error = TransactionFailedError("order not found")

        assert dispatcher.cancel(0, "2.5").kind == ErrorKind.SUBMISSION_FAILED


class TestFaucet:
    """Test faucet minting batch."""

    def test_mints_every_token_in_one_batch(self, dispatcher, mock_chain):
        """Faucet should mint each token, scaled by its decimals, in one transaction."""
        tokens = [
            Token(address=HEUR_ADDRESS, symbol="HEUR", decimals=6),
            Token(address=HUSD_ADDRESS, symbol="HUSD", decimals=2),
        ]

        result = dispatcher.request_faucet_tokens(TEST_FAUCET_ADDRESS, tokens, "1000")

        assert result.is_ok
        assert len(mock_chain.batches) == 1
        sender, messages = mock_chain.batches[0]
        assert sender == TEST_WALLET_ADDRESS
        assert messages == [
            (HEUR_ADDRESS, {"mint": {"recipient": TEST_FAUCET_ADDRESS, "amount": "1000000000"}}),
            (HUSD_ADDRESS, {"mint": {"recipient": TEST_FAUCET_ADDRESS, "amount": "100000"}}),
        ]

    def test_invalid_amount_sends_nothing(self, dispatcher, mock_chain):
        """An invalid faucet amount should fail before any submission."""
        tokens = [Token(address=HEUR_ADDRESS, symbol="HEUR", decimals=6)]

        result = dispatcher.request_faucet_tokens(TEST_FAUCET_ADDRESS, tokens, "lots")

        assert result.kind == ErrorKind.SUBMISSION_FAILED
        assert mock_chain.submission_count == 0
