"""Archway chain connector using cosmpy."""

from collections.abc import Sequence
from typing import Any

import grpc
import requests
from cosmpy.aerial.client import LedgerClient, NetworkConfig
from cosmpy.aerial.client.utils import prepare_and_broadcast_basic_transaction
from cosmpy.aerial.contract import LedgerContract
from cosmpy.aerial.contract.cosmwasm import create_cosmwasm_execute_msg
from cosmpy.aerial.tx import Transaction
from cosmpy.aerial.wallet import LocalWallet
from cosmpy.crypto.address import Address
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.selene_cli.config.constants import (
    MAX_QUERY_RETRIES,
    QUERY_RETRY_BACKOFF_SECONDS,
)
from src.selene_cli.core.exceptions import (
    ChainConnectionError,
    ContractQueryError,
    TransactionFailedError,
)
from src.selene_cli.core.interfaces import ChainConnector
from src.selene_cli.utils.logger import get_logger

logger = get_logger(__name__)

_TRANSPORT_STATUS_CODES = (grpc.StatusCode.UNAVAILABLE, grpc.StatusCode.DEADLINE_EXCEEDED)


def is_transport_error(error: BaseException) -> bool:
    """Check whether an error means the endpoint could not be reached.

    Args:
        error: Exception raised by the REST or gRPC client

    Returns:
        bool: True for transport failures, False for answers from the chain
    """
    if isinstance(
        error,
        (
            ConnectionError,
            TimeoutError,
            requests.exceptions.ConnectionError,
            requests.exceptions.Timeout,
        ),
    ):
        return True
    if isinstance(error, grpc.RpcError) and hasattr(error, "code"):
        return error.code() in _TRANSPORT_STATUS_CODES
    return False


_query_retry = retry(
    stop=stop_after_attempt(MAX_QUERY_RETRIES),
    wait=wait_exponential(multiplier=QUERY_RETRY_BACKOFF_SECONDS, min=1, max=10),
    retry=retry_if_exception_type(ChainConnectionError),
    reraise=True,
)


class ArchwayClient(ChainConnector):
    """Archway connector implementing ChainConnector interface.

    Reads are retried on transport errors. Transactions are broadcast
    exactly once: a resend could place the same order twice.
    """

    def __init__(
        self,
        mnemonic: str,
        chain_url: str,
        chain_id: str,
        address_prefix: str,
        fee_denom: str,
        fee_minimum_gas_price: int,
    ):
        """Initialize Archway client.

        Args:
            mnemonic: Secret recovery phrase of the signing account
            chain_url: cosmpy endpoint URL (grpc+https://... or rest+https://...)
            chain_id: Chain ID
            address_prefix: Bech32 account prefix
            fee_denom: Fee coin denomination
            fee_minimum_gas_price: Minimum gas price in fee_denom

        Raises:
            ValueError: If the mnemonic cannot derive a wallet
            ChainConnectionError: If the client cannot be created
        """
        self.chain_url = chain_url
        self.chain_id = chain_id

        try:
            self.wallet = LocalWallet.from_mnemonic(mnemonic, prefix=address_prefix)
        except Exception as e:
            # Never echo the mnemonic itself
            raise ValueError(f"Invalid mnemonic: {type(e).__name__}") from e
        self.wallet_address = str(self.wallet.address())

        network = NetworkConfig(
            chain_id=chain_id,
            fee_minimum_gas_price=fee_minimum_gas_price,
            fee_denomination=fee_denom,
            staking_denomination=fee_denom,
            url=chain_url,
        )
        try:
            self.ledger = LedgerClient(network)
        except Exception as e:
            raise ChainConnectionError(f"Failed to initialize chain client: {e}") from e

        self._contracts: dict[str, LedgerContract] = {}

    def _contract(self, contract_address: str) -> LedgerContract:
        """Get (or create) a contract handle for an address."""
        if contract_address not in self._contracts:
            self._contracts[contract_address] = LedgerContract(
                None, self.ledger, address=Address(contract_address)
            )
        return self._contracts[contract_address]

    def _check_sender(self, sender_address: str) -> None:
        if sender_address != self.wallet_address:
            raise ValueError(
                f"Sender {sender_address} is not the signing wallet {self.wallet_address}"
            )

    def query_contract_smart(self, contract_address: str, query: dict[str, Any]) -> Any:
        """Run a smart query against a contract.

        Args:
            contract_address: Contract to query
            query: JSON query message

        Returns:
            Any: Decoded JSON response

        Raises:
            ContractQueryError: If the contract rejects the query
            ChainConnectionError: If the endpoint cannot be reached after retries
        """

        @_query_retry
        def _query_with_retry():
            try:
                return self._contract(contract_address).query(query)
            except Exception as e:
                if is_transport_error(e):
                    raise ChainConnectionError(f"Query transport failed: {e}") from e
                raise ContractQueryError(str(e)) from e

        return _query_with_retry()

    def get_balance(self, address: str, denom: str) -> int:
        """Get the native bank balance of an address.

        Args:
            address: Bech32 account address
            denom: Coin denomination

        Returns:
            int: Balance in base units

        Raises:
            ChainConnectionError: If the balance cannot be read
        """

        @_query_retry
        def _get_balance_with_retry():
            try:
                return self.ledger.query_bank_balance(Address(address), denom=denom)
            except Exception as e:
                if is_transport_error(e):
                    raise ChainConnectionError(f"Balance query transport failed: {e}") from e
                raise

        try:
            return int(_get_balance_with_retry())
        except ChainConnectionError:
            raise
        except Exception as e:
            raise ChainConnectionError(f"Failed to get balance: {e}") from e

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
        self._check_sender(sender_address)
        logger.debug("Executing contract message", contract=contract_address, msg=msg)

        try:
            submitted = self._contract(contract_address).execute(msg, self.wallet)
            submitted.wait_to_complete()
        except Exception as e:
            if is_transport_error(e):
                raise ChainConnectionError(f"Broadcast transport failed: {e}") from e
            raise TransactionFailedError(f"Transaction failed: {e}") from e

        return submitted.tx_hash

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
        self._check_sender(sender_address)
        if not messages:
            raise ValueError("At least one message is required")

        tx = Transaction()
        for contract_address, msg in messages:
            tx.add_message(
                create_cosmwasm_execute_msg(self.wallet.address(), Address(contract_address), msg)
            )
        logger.debug("Executing message batch", count=len(messages))

        try:
            submitted = prepare_and_broadcast_basic_transaction(self.ledger, tx, self.wallet)
            submitted.wait_to_complete()
        except Exception as e:
            if is_transport_error(e):
                raise ChainConnectionError(f"Broadcast transport failed: {e}") from e
            raise TransactionFailedError(f"Transaction failed: {e}") from e

        return submitted.tx_hash
