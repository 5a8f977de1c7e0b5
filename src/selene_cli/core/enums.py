"""Core enumerations for the Selene Markets CLI."""

from enum import Enum


class OrderSide(str, Enum):
    """Order side, using the contract's wire spelling."""

    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    """Order type."""

    LIMIT = "LIMIT"  # Rests on the book at a price
    MARKET = "MARKET"  # Executes against the best resting levels


class FlowState(str, Enum):
    """States of the interactive order flow."""

    SELECT_TOKEN = "SELECT_TOKEN"
    SELECT_AMOUNT = "SELECT_AMOUNT"
    SELECT_PRICE = "SELECT_PRICE"  # Limit orders only
    SELECT_ORDER = "SELECT_ORDER"  # Cancel flow only
    CONFIRM = "CONFIRM"
    SUBMIT = "SUBMIT"  # Terminal
    CANCELLED = "CANCELLED"  # Terminal, nothing was sent


class ErrorKind(str, Enum):
    """Failure kinds carried by Err results."""

    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_PRICE = "INVALID_PRICE"
    NO_ORDERS_FOUND = "NO_ORDERS_FOUND"
    QUERY_FAILED = "QUERY_FAILED"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"


class MenuAction(str, Enum):
    """Actions offered by the session menu."""

    LIMIT_SELL = "set-sell"
    LIMIT_BUY = "set-buy"
    MARKET_SELL = "market-sell"
    MARKET_BUY = "market-buy"
    REMOVE = "remove"
    GET_MARKET = "get-market"
    GET_BIDS = "get-bids"
    GET_ASKS = "get-asks"
    GET_ORDERS = "get-orders"
    LIST_MARKETS = "list-markets"
    FAUCET = "faucet-tokens"
    QUIT = "quit"
