"""Main entry point for the Selene Markets CLI."""

import sys

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from src.selene_cli.config.settings import Settings
from src.selene_cli.connectors.chain.archway import ArchwayClient
from src.selene_cli.core.enums import ErrorKind, MenuAction, OrderSide, OrderType
from src.selene_cli.core.exceptions import ConfigurationError
from src.selene_cli.core.interfaces import ChainConnector
from src.selene_cli.core.result import Err
from src.selene_cli.encoding.messages import MessageEncoder
from src.selene_cli.models.token import Token
from src.selene_cli.queries.book import BookQueryAdapter
from src.selene_cli.trading.dispatcher import TransactionDispatcher
from src.selene_cli.trading.flow import FlowOutcome, OrderFlowController
from src.selene_cli.ui import console
from src.selene_cli.ui.prompts import ClickPrompter
from src.selene_cli.utils.logger import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

logger = get_logger(__name__)

ORDER_ACTIONS: dict[MenuAction, tuple[OrderSide, OrderType]] = {
    MenuAction.LIMIT_SELL: (OrderSide.SELL, OrderType.LIMIT),
    MenuAction.LIMIT_BUY: (OrderSide.BUY, OrderType.LIMIT),
    MenuAction.MARKET_SELL: (OrderSide.SELL, OrderType.MARKET),
    MenuAction.MARKET_BUY: (OrderSide.BUY, OrderType.MARKET),
}


class SessionRunner:
    """Manages session lifecycle and component initialization."""

    def __init__(
        self,
        settings: Settings,
        prompter: ClickPrompter | None = None,
        chain: ChainConnector | None = None,
        faucet_chain: ChainConnector | None = None,
    ):
        """Initialize session runner.

        Args:
            settings: CLI configuration settings
            prompter: Terminal prompter (default: ClickPrompter)
            chain: Chain connector of the trading wallet (default: built from settings)
            faucet_chain: Chain connector of the minter wallet (default: built from
                settings when a faucet mnemonic is configured)
        """
        self.settings = settings
        self.prompter = prompter or ClickPrompter()
        self.chain = chain
        self.faucet_chain = faucet_chain

        self.queries: BookQueryAdapter | None = None
        self.flow: OrderFlowController | None = None
        self.faucet: TransactionDispatcher | None = None

    def _connect(self, mnemonic: str) -> ArchwayClient:
        return ArchwayClient(
            mnemonic=mnemonic,
            chain_url=self.settings.chain_url,
            chain_id=self.settings.chain_id,
            address_prefix=self.settings.address_prefix,
            fee_denom=self.settings.fee_denom,
            fee_minimum_gas_price=self.settings.fee_minimum_gas_price,
        )

    def initialize_components(self) -> None:
        """Initialize all session components.

        Raises:
            ChainConnectionError: If the network cannot be reached
            ValueError: If a mnemonic cannot derive a wallet
        """
        logger.info("Initializing session components")

        if self.chain is None:
            logger.debug("Creating Archway chain client", chain_url=self.settings.chain_url)
            self.chain = self._connect(self.settings.wallet_mnemonic)

        # Fails fast when the endpoint is unreachable
        self.chain.get_balance(self.chain.wallet_address, self.settings.fee_denom)

        encoder = MessageEncoder(self.settings.marketplace_address)
        self.queries = BookQueryAdapter(self.chain, self.settings.marketplace_address)
        self.flow = OrderFlowController(
            prompter=self.prompter,
            encoder=encoder,
            dispatcher=TransactionDispatcher(self.chain, encoder),
            market_id=self.settings.market_id,
            sender_address=self.chain.wallet_address,
        )

        if self.faucet_chain is None and self.settings.faucet_mnemonic:
            logger.debug("Creating faucet chain client")
            self.faucet_chain = self._connect(self.settings.faucet_mnemonic)
        if self.faucet_chain is not None:
            self.faucet = TransactionDispatcher(self.faucet_chain, encoder)

        bind_context(wallet=self.chain.wallet_address, market_id=self.settings.market_id)
        logger.info("All session components initialized successfully")

    @property
    def actions(self) -> list[MenuAction]:
        """Menu entries available in this session."""
        return [
            action
            for action in MenuAction
            if action != MenuAction.FAUCET or self.faucet is not None
        ]

    def refresh_tokens(self) -> list[Token]:
        """Fetch balances fresh and print them. Empty list when unavailable."""
        result = self.queries.fetch_tokens(self.chain.wallet_address, self.settings.token_addresses)
        if not result.is_ok:
            self._report_error(result)
            return []

        try:
            fee_balance = self.chain.get_balance(self.chain.wallet_address, self.settings.fee_denom)
        except Exception as e:
            logger.warning("Failed to read fee balance", error=str(e))
            fee_balance = None
        console.show_balances(result.value, fee_balance, self.settings.fee_denom)
        return result.value

    def handle(self, action: MenuAction, tokens: list[Token]) -> FlowOutcome | None:
        """Run one menu action.

        Args:
            action: Chosen menu entry
            tokens: Tokens fetched for this iteration, base then quote

        Returns:
            FlowOutcome for order and removal flows, None otherwise
        """
        wallet = self.chain.wallet_address
        market_id = self.settings.market_id

        if action in ORDER_ACTIONS:
            if len(tokens) != 2:
                console.error("Balances unavailable, cannot place an order")
                return None
            side, order_type = ORDER_ACTIONS[action]
            outcome = self.flow.run_order(side, order_type, tokens[0], tokens[1])
            self._report_outcome(outcome)
            return outcome

        if action == MenuAction.REMOVE:
            orders = self.queries.get_user_orders(wallet, market_id)
            if not orders.is_ok:
                self._report_error(orders)
                return None
            outcome = self.flow.run_cancel(orders.value)
            self._report_outcome(outcome)
            return outcome

        if action == MenuAction.GET_MARKET:
            book = self.queries.get_market_book(market_id, self.settings.book_depth)
            if book.is_ok:
                console.show_book(book.value)
            else:
                self._report_error(book)
        elif action in (MenuAction.GET_BIDS, MenuAction.GET_ASKS, MenuAction.GET_ORDERS):
            query, title = {
                MenuAction.GET_BIDS: (self.queries.get_user_bids, "Current open bid orders"),
                MenuAction.GET_ASKS: (self.queries.get_user_asks, "Current open sell orders"),
                MenuAction.GET_ORDERS: (self.queries.get_user_orders, "Current open orders"),
            }[action]
            orders = query(wallet, market_id)
            if orders.is_ok:
                console.show_orders(title, orders.value)
            else:
                self._report_error(orders)
        elif action == MenuAction.LIST_MARKETS:
            markets = self.queries.get_markets()
            if markets.is_ok:
                console.show_markets(markets.value)
            else:
                self._report_error(markets)
        elif action == MenuAction.FAUCET:
            self._request_faucet_tokens(tokens)
        return None

    def _request_faucet_tokens(self, tokens: list[Token]) -> None:
        if self.faucet is None:
            console.error("Faucet is not configured")
            return
        if not tokens:
            console.error("Balances unavailable, cannot request tokens")
            return

        symbols = " & ".join(t.symbol for t in tokens)
        with self.prompter.progress(f"Requesting {symbols} tokens"):
            result = self.faucet.request_faucet_tokens(
                self.chain.wallet_address, tokens, self.settings.faucet_mint_amount
            )
        if result.is_ok:
            console.show_transaction(result.value, self.settings.explorer_tx_url)
        else:
            self._report_error(result)

    def _report_outcome(self, outcome: FlowOutcome) -> None:
        # Cancelled flows return to the menu without output
        if outcome.cancelled or outcome.result is None:
            return
        if outcome.result.is_ok:
            console.show_transaction(outcome.result.value, self.settings.explorer_tx_url)
        else:
            self._report_error(outcome.result)

    def _report_error(self, err: Err) -> None:
        if err.kind == ErrorKind.NO_ORDERS_FOUND:
            console.notice(err.message)
        else:
            console.error(err.message)

    def run(self) -> None:
        """Run the interactive session until the user quits."""
        self.initialize_components()
        console.info(f"Connected as {self.chain.wallet_address}")

        try:
            while True:
                tokens = self.refresh_tokens()
                action = self.prompter.choose_action(self.actions)
                if action == MenuAction.QUIT:
                    break
                self.handle(action, tokens)
        finally:
            clear_context()

        click.echo("Bye!")


def load_settings() -> Settings:
    """Load settings, reporting problems without echoing input values.

    Raises:
        ConfigurationError: If any setting is missing or invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        # Inputs may hold the mnemonic: report locations and messages only
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {details}") from e


@click.command()
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=".env",
    help="Path to .env file (default: .env)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level (default: LOG_LEVEL setting)",
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Output logs in JSON format instead of human-readable format",
)
def main(env_file: str, log_level: str | None, json_logs: bool) -> None:
    """Selene Markets CLI - trade the HEUR/HUSD order book on Archway.

    Places limit and market orders, removes resting orders and shows the
    market book and your open orders.

    Configuration is loaded from environment variables or a .env file.
    """
    # Load environment variables
    load_dotenv(env_file)

    # Configure logging first
    configure_logging(log_level=log_level or "WARNING", json_logs=json_logs)

    try:
        settings = load_settings()
        if log_level is None:
            configure_logging(log_level=settings.log_level, json_logs=json_logs)

        logger.info("Starting Selene Markets CLI", chain_id=settings.chain_id, env_file=env_file)
        runner = SessionRunner(settings)
        runner.run()

    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
        click.echo("\nBye!")
    except Exception as e:
        logger.error("Fatal error", error=str(e))
        click.echo(f"Fatal error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
