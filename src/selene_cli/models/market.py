"""Market data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class CurrencyInfo(BaseModel):
    """One side of a market: either a CW20 token or a native bank coin.

    The contract serializes it as ``{"cw20": {"address": ...}}`` or
    ``{"native": {"denom": ...}}``.
    """

    model_config = ConfigDict(frozen=True)

    cw20_address: str | None = None
    native_denom: str | None = None

    @model_validator(mode="before")
    @classmethod
    def unwrap_variant(cls, data: Any) -> Any:
        """Flatten the contract's tagged variant."""
        if isinstance(data, dict) and ("cw20" in data or "native" in data):
            if "cw20" in data:
                return {"cw20_address": data["cw20"]["address"]}
            return {"native_denom": data["native"]["denom"]}
        return data

    @model_validator(mode="after")
    def validate_one_variant(self) -> "CurrencyInfo":
        """Exactly one of the two variants must be set."""
        if (self.cw20_address is None) == (self.native_denom is None):
            raise ValueError("Currency must be either cw20 or native")
        return self

    @property
    def is_cw20(self) -> bool:
        return self.cw20_address is not None

    @property
    def identifier(self) -> str:
        """Contract address or coin denom."""
        return self.cw20_address if self.cw20_address is not None else self.native_denom


class MarketInfo(BaseModel):
    """A market listed by the order-book contract.

    Attributes:
        market_id: Market identifier used by every order message
        base_currency: Currency sold by sell orders
        quote_currency: Currency spent by buy orders
    """

    model_config = ConfigDict(frozen=True)

    market_id: int
    base_currency: CurrencyInfo
    quote_currency: CurrencyInfo

    @property
    def is_cw20_pair(self) -> bool:
        """Whether both sides are CW20 tokens (the only kind this client trades)."""
        return self.base_currency.is_cw20 and self.quote_currency.is_cw20
