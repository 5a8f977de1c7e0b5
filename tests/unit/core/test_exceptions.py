"""Tests for custom exceptions."""

import pytest

from src.selene_cli.core.exceptions import (
    ChainConnectionError,
    ConfigurationError,
    ContractQueryError,
    InvalidStateTransitionError,
    SeleneCliError,
    TransactionFailedError,
)


class TestBaseException:
    """Test base exception class."""

    def test_base_exception_is_exception_subclass(self):
        """Should be a subclass of Exception."""
        assert issubclass(SeleneCliError, Exception)

    def test_base_exception_message(self):
        """Should preserve error message."""
        with pytest.raises(SeleneCliError, match="Custom error message"):
            raise SeleneCliError("Custom error message")


class TestHierarchy:
    """Every client error should be catchable as SeleneCliError."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidStateTransitionError,
            ChainConnectionError,
            ContractQueryError,
            TransactionFailedError,
            ConfigurationError,
        ],
    )
    def test_inherits_from_base(self, exc_class):
        """Subclass should be caught by the base class."""
        with pytest.raises(SeleneCliError, match="failed"):
            raise exc_class("failed")

    def test_transport_and_contract_errors_are_distinct(self):
        """Query failures and transport failures must be told apart."""
        assert not issubclass(ContractQueryError, ChainConnectionError)
        assert not issubclass(ChainConnectionError, ContractQueryError)
