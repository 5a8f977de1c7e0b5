"""Token model."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.units import to_human_units


class Token(BaseModel):
    """A CW20 token as seen by the trading account.

    Attributes:
        address: CW20 contract address
        symbol: Ticker symbol (e.g., HEUR)
        name: Full token name
        decimals: Decimal exponent, authoritative for all scaling
        raw_balance: Account balance in base units, as an integer string
    """

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="CW20 contract address")
    symbol: str = Field(..., description="Ticker symbol")
    name: str = Field("", description="Full token name")
    decimals: int = Field(..., ge=0, description="Decimal exponent")
    raw_balance: str = Field("0", description="Balance in base units")

    @field_validator("raw_balance", mode="before")
    @classmethod
    def validate_raw_balance(cls, v: str | int) -> str:
        """Accept ints, store as a non-negative integer string."""
        v = str(v)
        if re.fullmatch(r"[0-9]+", v) is None:
            raise ValueError(f"raw_balance must be a non-negative integer string, got '{v}'")
        return v

    @property
    def human_balance(self) -> float:
        """Balance scaled down for display."""
        return to_human_units(self.raw_balance, self.decimals)
