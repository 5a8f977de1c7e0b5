"""Transaction dispatcher: one chain submission per confirmed intent."""

from collections.abc import Sequence

from src.selene_cli.core.enums import ErrorKind
from src.selene_cli.core.exceptions import SeleneCliError
from src.selene_cli.core.interfaces import ChainConnector
from src.selene_cli.core.result import Err, Ok, Result
from src.selene_cli.encoding.messages import MessageEncoder
from src.selene_cli.models.order import EncodedOrder, TxReceipt
from src.selene_cli.models.token import Token
from src.selene_cli.utils.logger import get_logger
from src.selene_cli.utils.units import to_raw_units

logger = get_logger(__name__)


class TransactionDispatcher:
    """Thin adapter over the signing chain client.

    Never retries: a failed submission is reported and the intent is dropped.
    """

    def __init__(self, chain: ChainConnector, encoder: MessageEncoder):
        """Initialize dispatcher.

        Args:
            chain: Signing chain connector
            encoder: Message encoder bound to the marketplace contract
        """
        self.chain = chain
        self.encoder = encoder

    def submit(self, encoded: EncodedOrder, sender_address: str) -> Result[TxReceipt]:
        """Send an encoded order through its source token's send hook.

        Args:
            encoded: Encoded order
            sender_address: Signing wallet address

        Returns:
            Ok(TxReceipt) or Err(SUBMISSION_FAILED)
        """
        return self._dispatch(
            "order",
            lambda: self.chain.execute(
                sender_address, encoded.source_token_address, encoded.to_execute_msg()
            ),
            token=encoded.source_token_address,
            raw_amount=encoded.raw_amount,
        )

    def cancel(self, market_id: int, price: str) -> Result[TxReceipt]:
        """Remove the caller's resting order at a price.

        Args:
            market_id: Market of the resting order
            price: Price of the resting order

        Returns:
            Ok(TxReceipt) or Err(SUBMISSION_FAILED)
        """
        msg = self.encoder.build_remove_limit_order(market_id, price)
        return self._dispatch(
            "cancel",
            lambda: self.chain.execute(
                self.chain.wallet_address, self.encoder.marketplace_address, msg
            ),
            market_id=market_id,
            price=price,
        )

    def request_faucet_tokens(
        self, recipient: str, tokens: Sequence[Token], human_amount: str
    ) -> Result[TxReceipt]:
        """Mint the same human amount of every token to a recipient in one batch.

        The dispatcher must be bound to the tokens' minter account.

        Args:
            recipient: Address receiving the tokens
            tokens: Tokens to mint (decimals taken from each)
            human_amount: Amount per token, human units

        Returns:
            Ok(TxReceipt) or Err(SUBMISSION_FAILED)
        """
        messages = []
        for token in tokens:
            raw = to_raw_units(human_amount, token.decimals)
            if not raw.is_ok:
                return Err(ErrorKind.SUBMISSION_FAILED, raw.message)
            messages.append((token.address, self.encoder.build_mint(recipient, raw.value)))

        return self._dispatch(
            "faucet",
            lambda: self.chain.execute_multiple(self.chain.wallet_address, messages),
            recipient=recipient,
            tokens=[token.symbol for token in tokens],
        )

    def _dispatch(self, action: str, send, **log_fields) -> Result[TxReceipt]:
        """Run one submission and convert its outcome to a Result."""
        try:
            tx_hash = send()
        except (SeleneCliError, ValueError) as e:
            logger.warning("Submission failed", action=action, error=str(e), **log_fields)
            return Err(ErrorKind.SUBMISSION_FAILED, str(e))
        except Exception as e:
            logger.error(
                "Unexpected error during submission",
                action=action,
                error=str(e),
                exc_info=True,
                **log_fields,
            )
            return Err(ErrorKind.SUBMISSION_FAILED, f"Unexpected error: {e}")

        logger.info("Transaction submitted", action=action, tx_hash=tx_hash, **log_fields)
        return Ok(TxReceipt(transaction_hash=tx_hash))
