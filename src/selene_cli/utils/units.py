"""Conversion between human-entered decimals and token base units."""

import re
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

from src.selene_cli.core.enums import ErrorKind
from src.selene_cli.core.result import Err, Ok, Result

# Integer part, optional "." followed by one or two fraction digits
FIXED_POINT_PATTERN = re.compile(r"[0-9]+(\.[0-9]{1,2})?")

# Enough digits for any uint256 amount
_SCALING_PRECISION = 80

# CW20 amounts are Uint128
UINT128_MAX = 2**128 - 1


def is_fixed_point(value: str) -> bool:
    """Check a string against the fixed-point amount grammar."""
    return isinstance(value, str) and FIXED_POINT_PATTERN.fullmatch(value) is not None


def to_raw_units(human_amount: str, decimals: int) -> Result[str]:
    """Scale a human amount up to the token's integer base units.

    Scaling truncates toward zero. With at most two fraction digits this
    only drops digits when ``decimals`` is 0 or 1.

    Args:
        human_amount: Decimal string matching the fixed-point grammar
        decimals: Token decimal exponent

    Returns:
        Ok(integer string) or Err(INVALID_AMOUNT)

    Raises:
        ValueError: If decimals is negative

    Examples:
        >>> to_raw_units("1000", 6)
        Ok(value='1000000000')
        >>> to_raw_units("1.25", 1)
        Ok(value='12')
    """
    if decimals < 0:
        raise ValueError("decimals must be non-negative")

    if not human_amount:
        return Err(ErrorKind.INVALID_AMOUNT, "Amount is required!")

    if not is_fixed_point(human_amount):
        return Err(
            ErrorKind.INVALID_AMOUNT,
            f"'{human_amount}' is not a valid amount: use digits with at most 2 decimals",
        )

    too_large = Err(ErrorKind.INVALID_AMOUNT, "Amount is too large!")
    try:
        with localcontext() as ctx:
            ctx.prec = _SCALING_PRECISION
            scaled = Decimal(human_amount).scaleb(decimals)
            raw = int(scaled.quantize(Decimal("1"), rounding=ROUND_DOWN))
    except InvalidOperation:
        # Integer part wider than the working precision
        return too_large

    if raw > UINT128_MAX:
        return too_large
    return Ok(str(raw))


def to_human_units(raw_amount: str | int, decimals: int) -> float:
    """Scale base units down for display. Never feed the result back into a transaction."""
    if decimals < 0:
        raise ValueError("decimals must be non-negative")
    return float(Decimal(raw_amount).scaleb(-decimals))


def validate_amount(human_amount: str) -> Result[str]:
    """Validate an order amount: fixed-point grammar and strictly positive."""
    if not human_amount:
        return Err(ErrorKind.INVALID_AMOUNT, "Amount is required!")
    if not is_fixed_point(human_amount):
        return Err(ErrorKind.INVALID_AMOUNT, "Only numbers are allowed, try again!")
    if Decimal(human_amount) == 0:
        return Err(ErrorKind.INVALID_AMOUNT, "Amount must be greater than zero")
    return Ok(human_amount)


def validate_price(price: str) -> Result[str]:
    """Validate a limit price: fixed-point grammar and strictly positive."""
    if not price:
        return Err(ErrorKind.INVALID_PRICE, "Price is required!")
    if not is_fixed_point(price):
        return Err(ErrorKind.INVALID_PRICE, "Only numbers are allowed!")
    if Decimal(price) == 0:
        return Err(ErrorKind.INVALID_PRICE, "Price must be greater than zero")
    return Ok(price)
