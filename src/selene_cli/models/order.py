"""Order models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.enums import OrderSide, OrderType
from ..utils.units import is_fixed_point
from .token import Token


class UserOrderRecordResponse(BaseModel):
    """Raw resting order from the ``get_user_*`` queries (matches contract format)."""

    market_id: int = Field(..., description="Market the order rests on")
    order_side: OrderSide = Field(..., description="'buy' or 'sell'")
    price: str = Field(..., description="Limit price as decimal string")
    quantity: str = Field(..., description="Remaining quantity as string")

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        """Keep decimal fields as strings, untouched."""
        return str(v)

    def to_record(self) -> "OrderRecord":
        """Convert contract response format to internal OrderRecord model.

        Returns:
            OrderRecord: Display record keyed by market id and price
        """
        return OrderRecord(
            market_id=self.market_id,
            side=self.order_side,
            price=self.price,
            quantity=self.quantity,
        )


class BookLevelResponse(BaseModel):
    """Raw price level from ``get_market_book`` (matches contract format)."""

    price: str
    quantity: str

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        return str(v)

    def to_record(self, market_id: int, side: OrderSide) -> "OrderRecord":
        """Tag the level with its market and book side."""
        return OrderRecord(market_id=market_id, side=side, price=self.price, quantity=self.quantity)


class OrderRecord(BaseModel):
    """A resting order or book level, for display and as a cancel key.

    Market id plus price identifies a resting order the caller owns;
    quantity is informational only.
    """

    model_config = ConfigDict(frozen=True)

    market_id: int = Field(..., ge=0)
    side: OrderSide
    price: str
    quantity: str


class MarketBook(BaseModel):
    """Snapshot of one market's book, both sides best price first."""

    model_config = ConfigDict(frozen=True)

    market_id: int
    bids: list[OrderRecord] = Field(default_factory=list)
    asks: list[OrderRecord] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if neither side has any level."""
        return not self.bids and not self.asks


class OrderIntent(BaseModel):
    """A fully collected trading intent, consumed immediately by the encoder.

    Attributes:
        side: SELL spends the base token, BUY spends the quote token
        order_type: LIMIT (priced) or MARKET (unpriced)
        source_token: Token transferred to the marketplace
        counter_token: Token received in exchange
        human_amount: Amount of source token in human units
        price: Limit price, None for market orders
    """

    model_config = ConfigDict(frozen=True)

    side: OrderSide = Field(..., description="Order side (BUY or SELL)")
    order_type: OrderType = Field(..., description="Order type (LIMIT or MARKET)")
    source_token: Token = Field(..., description="Token being spent")
    counter_token: Token = Field(..., description="Token being acquired")
    human_amount: str = Field(..., description="Amount of source token, human units")
    price: str | None = Field(None, description="Limit price (None for market orders)")

    @field_validator("human_amount")
    @classmethod
    def validate_human_amount(cls, v: str) -> str:
        """Validate amount against the fixed-point grammar."""
        if not is_fixed_point(v):
            raise ValueError(f"Invalid amount '{v}': digits with at most 2 decimals expected")
        return v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: str | None) -> str | None:
        """Validate price against the fixed-point grammar."""
        if v is not None and not is_fixed_point(v):
            raise ValueError(f"Invalid price '{v}': digits with at most 2 decimals expected")
        return v

    @model_validator(mode="after")
    def validate_intent(self) -> "OrderIntent":
        """Validate intent constraints."""
        # Limit orders must have a price, market orders must not
        if self.order_type == OrderType.LIMIT and self.price is None:
            raise ValueError("Limit orders must have a price")
        if self.order_type == OrderType.MARKET and self.price is not None:
            raise ValueError("Market orders must not have a price")

        if self.source_token.address == self.counter_token.address:
            raise ValueError("Source and counter token must differ")

        return self


class EncodedOrder(BaseModel):
    """An order ready to be sent through the source token's ``send`` hook."""

    model_config = ConfigDict(frozen=True)

    source_token_address: str = Field(..., description="CW20 contract executing the send")
    recipient_contract: str = Field(..., description="Marketplace contract receiving the hook")
    raw_amount: str = Field(..., description="Transfer amount in base units")
    opaque_payload: str = Field(..., description="Base64 of the compact JSON order action")

    def to_execute_msg(self) -> dict[str, Any]:
        """Build the CW20 ``send`` execute message."""
        return {
            "send": {
                "contract": self.recipient_contract,
                "amount": self.raw_amount,
                "msg": self.opaque_payload,
            }
        }


class TxReceipt(BaseModel):
    """Result of a successful submission."""

    model_config = ConfigDict(frozen=True)

    transaction_hash: str
