"""Read-only queries against the order-book and CW20 contracts."""

from collections.abc import Callable, Sequence
from typing import TypeVar

from pydantic import ValidationError

from src.selene_cli.core.enums import ErrorKind, OrderSide
from src.selene_cli.core.exceptions import ChainConnectionError, ContractQueryError
from src.selene_cli.core.interfaces import ChainConnector
from src.selene_cli.core.result import Err, Ok, Result
from src.selene_cli.models.market import MarketInfo
from src.selene_cli.models.order import (
    BookLevelResponse,
    MarketBook,
    OrderRecord,
    UserOrderRecordResponse,
)
from src.selene_cli.models.token import Token
from src.selene_cli.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Contract errors meaning "nothing stored for this user/market"
_MISSING_RECORD_MARKERS = ("not found", "does not exist")


class BookQueryAdapter:
    """Decodes contract query responses into display entities.

    Every call issues fresh queries; nothing is cached. Connector errors
    are converted to ``Err`` here and never leave the adapter.
    """

    def __init__(self, chain: ChainConnector, marketplace_address: str):
        """Initialize adapter.

        Args:
            chain: Chain connector used for smart queries
            marketplace_address: Order-book contract address
        """
        self.chain = chain
        self.marketplace_address = marketplace_address

    def fetch_tokens(self, owner: str, token_addresses: Sequence[str]) -> Result[list[Token]]:
        """Fetch token metadata and the owner's balance for each token.

        Args:
            owner: Account whose balances are read
            token_addresses: CW20 contracts, in display order

        Returns:
            Ok(list of Token) or Err(QUERY_FAILED)
        """

        def decode() -> list[Token]:
            tokens = []
            for address in token_addresses:
                balance = self.chain.query_contract_smart(address, {"balance": {"address": owner}})
                info = self.chain.query_contract_smart(address, {"token_info": {}})
                tokens.append(
                    Token(
                        address=address,
                        symbol=info["symbol"],
                        name=info.get("name", ""),
                        decimals=info["decimals"],
                        raw_balance=balance["balance"],
                    )
                )
            return tokens

        return self._query("fetch_tokens", decode, missing_is_empty=False)

    def get_markets(self) -> Result[list[MarketInfo]]:
        """List markets registered on the order-book contract."""

        def decode() -> list[MarketInfo]:
            response = self.chain.query_contract_smart(
                self.marketplace_address, {"get_markets": {}}
            )
            return [MarketInfo.model_validate(market) for market in response["markets"]]

        return self._query("get_markets", decode, missing_is_empty=False)

    def get_user_bids(self, user_address: str, market_id: int | None) -> Result[list[OrderRecord]]:
        """Resting buy orders of a user."""
        return self._user_orders("get_user_bids", user_address, market_id)

    def get_user_asks(self, user_address: str, market_id: int | None) -> Result[list[OrderRecord]]:
        """Resting sell orders of a user."""
        return self._user_orders("get_user_asks", user_address, market_id)

    def get_user_orders(
        self, user_address: str, market_id: int | None
    ) -> Result[list[OrderRecord]]:
        """All resting orders of a user, both sides."""
        return self._user_orders("get_user_orders", user_address, market_id)

    def get_market_book(self, market_id: int, depth: int) -> Result[MarketBook]:
        """Top levels of both sides of a market.

        Levels come pre-sorted by the contract (best price first) and keep
        that order.

        Args:
            market_id: Market to read
            depth: Number of price levels per side

        Returns:
            Ok(MarketBook), Err(NO_ORDERS_FOUND) for an empty book, or Err(QUERY_FAILED)
        """

        def decode() -> MarketBook:
            response = self.chain.query_contract_smart(
                self.marketplace_address,
                {"get_market_book": {"market_id": market_id, "nb_levels": depth}},
            )
            return MarketBook(
                market_id=market_id,
                bids=[
                    BookLevelResponse.model_validate(level).to_record(market_id, OrderSide.BUY)
                    for level in response["bids"]
                ],
                asks=[
                    BookLevelResponse.model_validate(level).to_record(market_id, OrderSide.SELL)
                    for level in response["asks"]
                ],
            )

        result = self._query("get_market_book", decode, missing_is_empty=True)
        if result.is_ok and result.value.is_empty:
            return Err(ErrorKind.NO_ORDERS_FOUND, f"No orders on market {market_id}")
        return result

    def _user_orders(
        self, query_name: str, user_address: str, market_id: int | None
    ) -> Result[list[OrderRecord]]:
        def decode() -> list[OrderRecord]:
            response = self.chain.query_contract_smart(
                self.marketplace_address,
                {query_name: {"user_address": user_address, "target_market": market_id}},
            )
            return [
                UserOrderRecordResponse.model_validate(order).to_record()
                for order in response["orders"]
            ]

        result = self._query(query_name, decode, missing_is_empty=True)
        if result.is_ok and not result.value:
            return Err(ErrorKind.NO_ORDERS_FOUND, f"No orders found for {user_address}")
        return result

    def _query(
        self, query_name: str, decode: Callable[[], T], missing_is_empty: bool
    ) -> Result[T]:
        """Run a query and classify its failure.

        Args:
            query_name: Name used in logs
            decode: Issues the queries and builds the entity
            missing_is_empty: Treat "not found" contract errors as NO_ORDERS_FOUND

        Returns:
            Ok(decoded entity) or Err(NO_ORDERS_FOUND | QUERY_FAILED)
        """
        try:
            return Ok(decode())
        except ContractQueryError as e:
            if missing_is_empty and any(m in str(e).lower() for m in _MISSING_RECORD_MARKERS):
                logger.debug("Query found no records", query=query_name, error=str(e))
                return Err(ErrorKind.NO_ORDERS_FOUND, "No orders found")
            logger.warning("Contract rejected query", query=query_name, error=str(e))
            return Err(ErrorKind.QUERY_FAILED, f"Query {query_name} failed: {e}")
        except ChainConnectionError as e:
            logger.warning("Chain unreachable", query=query_name, error=str(e))
            return Err(ErrorKind.QUERY_FAILED, f"Query {query_name} failed: {e}")
        except (ValidationError, KeyError, TypeError) as e:
            logger.warning("Undecodable query response", query=query_name, error=str(e))
            return Err(ErrorKind.QUERY_FAILED, f"Unexpected {query_name} response: {e}")
