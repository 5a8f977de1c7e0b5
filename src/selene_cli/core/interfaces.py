"""Core interfaces for the Selene Markets CLI."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Any


class ChainConnector(ABC):
    """Interface for a signing-capable CosmWasm chain client."""

    wallet_address: str

    @abstractmethod
    def execute(self, sender_address: str, contract_address: str, msg: dict[str, Any]) -> str:
        """Sign and broadcast a single contract execute message.

        Args:
            sender_address: Address of the signing wallet
            contract_address: Contract receiving the message
            msg: JSON execute message

        Returns:
            str: Transaction hash

        Raises:
            TransactionFailedError: If the transaction is rejected or reverts
            ChainConnectionError: If the endpoint cannot be reached
            ValueError: If the sender is not the signing wallet
        """
        pass

    @abstractmethod
    def execute_multiple(
        self,
        sender_address: str,
        messages: Sequence[tuple[str, dict[str, Any]]],
    ) -> str:
        """Sign and broadcast several execute messages in one transaction.

        Args:
            sender_address: Address of the signing wallet
            messages: (contract_address, msg) pairs, executed in order

        Returns:
            str: Transaction hash

        Raises:
            TransactionFailedError: If the transaction is rejected or reverts
            ChainConnectionError: If the endpoint cannot be reached
            ValueError: If the sender is not the signing wallet or no messages are given
        """
        pass

    @abstractmethod
    def query_contract_smart(self, contract_address: str, query: dict[str, Any]) -> Any:
        """Run a smart query against a contract.

        Args:
            contract_address: Contract to query
            query: JSON query message

        Returns:
            Any: Decoded JSON response

        Raises:
            ContractQueryError: If the contract rejects the query
            ChainConnectionError: If the endpoint cannot be reached
        """
        pass

    @abstractmethod
    def get_balance(self, address: str, denom: str) -> int:
        """Get the native bank balance of an address.

        Args:
            address: Bech32 account address
            denom: Coin denomination

        Returns:
            int: Balance in base units

        Raises:
            ChainConnectionError: If the endpoint cannot be reached
        """
        pass


class Prompter(ABC):
    """Interface for the user-input boundary of the order flow.

    Every ``choose_*`` and ``ask_*`` method returns None when the user
    aborts the selection.
    """

    @abstractmethod
    def choose_token(self, message: str, tokens: Sequence[Any]) -> Any | None:
        """Let the user pick one token."""
        pass

    @abstractmethod
    def ask_decimal(self, message: str) -> str | None:
        """Ask for a decimal string (amount or price)."""
        pass

    @abstractmethod
    def choose_order(self, message: str, orders: Sequence[Any]) -> Any | None:
        """Let the user pick one resting order."""
        pass

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask for explicit affirmation."""
        pass

    @abstractmethod
    def warn(self, message: str) -> None:
        """Show a validation message before re-prompting."""
        pass

    @abstractmethod
    def progress(self, message: str) -> AbstractContextManager[None]:
        """Show a progress indicator while a submission is outstanding."""
        pass

