"""Interactive order flow as an explicit, cancellable state machine.

Order path:  SELECT_TOKEN -> SELECT_AMOUNT -> [SELECT_PRICE] -> CONFIRM -> SUBMIT
Cancel path: SELECT_ORDER -> CONFIRM -> SUBMIT

Any waiting state may move to CANCELLED. Nothing touches the chain before
SUBMIT, so a cancelled flow never reaches the dispatcher.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from src.selene_cli.core.enums import FlowState, OrderSide, OrderType
from src.selene_cli.core.exceptions import InvalidStateTransitionError
from src.selene_cli.core.interfaces import Prompter
from src.selene_cli.core.result import Result
from src.selene_cli.encoding.messages import MessageEncoder
from src.selene_cli.models.order import OrderIntent, OrderRecord, TxReceipt
from src.selene_cli.models.token import Token
from src.selene_cli.trading.dispatcher import TransactionDispatcher
from src.selene_cli.utils.logger import get_logger
from src.selene_cli.utils.units import to_raw_units, validate_amount, validate_price

logger = get_logger(__name__)

# Self-loops are the validation re-prompts
VALID_TRANSITIONS: dict[FlowState, set[FlowState]] = {
    FlowState.SELECT_TOKEN: {FlowState.SELECT_AMOUNT, FlowState.CANCELLED},
    FlowState.SELECT_AMOUNT: {
        FlowState.SELECT_AMOUNT,
        FlowState.SELECT_PRICE,
        FlowState.CONFIRM,
        FlowState.CANCELLED,
    },
    FlowState.SELECT_PRICE: {FlowState.SELECT_PRICE, FlowState.CONFIRM, FlowState.CANCELLED},
    FlowState.SELECT_ORDER: {FlowState.CONFIRM, FlowState.CANCELLED},
    FlowState.CONFIRM: {FlowState.SUBMIT, FlowState.CANCELLED},
    FlowState.SUBMIT: set(),  # Terminal state
    FlowState.CANCELLED: set(),  # Terminal state
}


@dataclass(frozen=True)
class FlowOutcome:
    """How a flow ended.

    Attributes:
        state: SUBMIT or CANCELLED
        intent: Collected order intent (order path only)
        order: Order chosen for removal (cancel path only)
        result: Submission result, None when cancelled
    """

    state: FlowState
    intent: OrderIntent | None = None
    order: OrderRecord | None = None
    result: Result[TxReceipt] | None = None

    @property
    def cancelled(self) -> bool:
        return self.state == FlowState.CANCELLED


class OrderFlowController:
    """Collects an order from the user and submits it once confirmed."""

    def __init__(
        self,
        prompter: Prompter,
        encoder: MessageEncoder,
        dispatcher: TransactionDispatcher,
        market_id: int,
        sender_address: str,
    ):
        """Initialize flow controller.

        Args:
            prompter: User-input boundary
            encoder: Message encoder
            dispatcher: Transaction dispatcher
            market_id: Market every order targets
            sender_address: Signing wallet address
        """
        self.prompter = prompter
        self.encoder = encoder
        self.dispatcher = dispatcher
        self.market_id = market_id
        self.sender_address = sender_address
        self.state: FlowState | None = None

    def transition_to(self, new_state: FlowState) -> None:
        """Move the machine to a new state.

        Raises:
            InvalidStateTransitionError: If the move is not in the transition table
        """
        if self.state is None or new_state not in VALID_TRANSITIONS[self.state]:
            current = self.state.value if self.state else "none"
            raise InvalidStateTransitionError(
                f"Cannot transition from {current} to {new_state.value}"
            )
        self.state = new_state

    @staticmethod
    def pair_tokens(side: OrderSide, base_token: Token, quote_token: Token) -> tuple[Token, Token]:
        """Return (source, counter) for a side.

        Two-token market only: sell spends the base token, buy spends the
        quote token.
        """
        if side == OrderSide.SELL:
            return base_token, quote_token
        return quote_token, base_token

    def run_order(
        self,
        side: OrderSide,
        order_type: OrderType,
        base_token: Token,
        quote_token: Token,
    ) -> FlowOutcome:
        """Run the order path to SUBMIT or CANCELLED.

        Args:
            side: BUY or SELL
            order_type: LIMIT asks for a price, MARKET skips it
            base_token: Market base token
            quote_token: Market quote token

        Returns:
            FlowOutcome: Terminal state, intent and submission result
        """
        self.state = FlowState.SELECT_TOKEN
        source, counter = self.pair_tokens(side, base_token, quote_token)

        token = self.prompter.choose_token(f"Select a token to {side.value}", [source])
        if token is None:
            return self._cancel()

        self.transition_to(FlowState.SELECT_AMOUNT)
        amount = self._ask_amount(token)
        if amount is None:
            return self._cancel()

        price = None
        if order_type == OrderType.LIMIT:
            self.transition_to(FlowState.SELECT_PRICE)
            price = self._ask_price()
            if price is None:
                return self._cancel()

        self.transition_to(FlowState.CONFIRM)
        intent = OrderIntent(
            side=side,
            order_type=order_type,
            source_token=token,
            counter_token=counter,
            human_amount=amount,
            price=price,
        )
        if not self.prompter.confirm(self.describe(intent)):
            return self._cancel(intent=intent)

        self.transition_to(FlowState.SUBMIT)
        with self.prompter.progress(f"Sending {self.describe(intent, question=False)}"):
            result = self.encoder.encode(intent, self.market_id).and_then(
                lambda encoded: self.dispatcher.submit(encoded, self.sender_address)
            )
        return FlowOutcome(state=FlowState.SUBMIT, intent=intent, result=result)

    def run_cancel(self, orders: Sequence[OrderRecord]) -> FlowOutcome:
        """Run the resting-order removal path to SUBMIT or CANCELLED.

        Args:
            orders: The user's resting orders to choose from

        Returns:
            FlowOutcome: Terminal state, chosen order and submission result
        """
        self.state = FlowState.SELECT_ORDER
        if not orders:
            return self._cancel()

        order = self.prompter.choose_order("Which order do you want to cancel", orders)
        if order is None:
            return self._cancel()

        self.transition_to(FlowState.CONFIRM)
        question = (
            f"Remove your {order.side.value} order at {order.price} "
            f"(quantity {order.quantity})?"
        )
        if not self.prompter.confirm(question):
            return self._cancel(order=order)

        self.transition_to(FlowState.SUBMIT)
        with self.prompter.progress("Cancelling order"):
            result = self.dispatcher.cancel(order.market_id, order.price)
        return FlowOutcome(state=FlowState.SUBMIT, order=order, result=result)

    @staticmethod
    def describe(intent: OrderIntent, question: bool = True) -> str:
        """Human summary of an intent, used for confirmation and progress."""
        kind = "limit" if intent.order_type == OrderType.LIMIT else "market"
        text = (
            f"{kind} {intent.side.value} order: {intent.human_amount} "
            f"{intent.source_token.symbol} for {intent.counter_token.symbol}"
        )
        if intent.price is not None:
            text += f" at {intent.price}"
        return f"Do you want to place a {text}?" if question else text

    def _ask_amount(self, token: Token) -> str | None:
        while True:
            answer = self.prompter.ask_decimal(f"How many {token.symbol}?")
            if answer is None:
                return None

            check = validate_amount(answer.strip()).and_then(
                lambda amount: to_raw_units(amount, token.decimals)
            )
            if not check.is_ok:
                self.prompter.warn(check.message)
            elif int(check.value) == 0:
                self.prompter.warn(f"Amount is below the smallest {token.symbol} unit")
            else:
                return answer.strip()
            self.transition_to(FlowState.SELECT_AMOUNT)

    def _ask_price(self) -> str | None:
        while True:
            answer = self.prompter.ask_decimal("Set a price")
            if answer is None:
                return None

            check = validate_price(answer.strip())
            if check.is_ok:
                return check.value
            self.prompter.warn(check.message)
            self.transition_to(FlowState.SELECT_PRICE)

    def _cancel(self, **details) -> FlowOutcome:
        self.transition_to(FlowState.CANCELLED)
        logger.info("Order flow cancelled", market_id=self.market_id)
        return FlowOutcome(state=FlowState.CANCELLED, **details)
