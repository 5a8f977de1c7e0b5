"""Core exceptions for the Selene Markets CLI.

These are raised inside the chain connector boundary only. Adapters turn
them into ``Err`` results before they reach the order flow.
"""


class SeleneCliError(Exception):
    """Base exception for all client errors."""

    pass


class InvalidStateTransitionError(SeleneCliError):
    """Raised when an invalid flow state transition is attempted."""

    pass


class ChainConnectionError(SeleneCliError):
    """Raised when the chain endpoint cannot be reached."""

    pass


class ContractQueryError(SeleneCliError):
    """Raised when a contract rejects a smart query."""

    pass


class TransactionFailedError(SeleneCliError):
    """Raised when a transaction is rejected or its execution reverts."""

    pass


class ConfigurationError(SeleneCliError):
    """Raised when configuration is invalid."""

    pass
