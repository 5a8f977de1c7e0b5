"""Selene order-book message encoding.

Orders paid in a CW20 token reach the marketplace through the token's
``send`` entry point, which only carries an opaque byte payload. The order
action is therefore serialized to compact JSON and base64-encoded before
being wrapped in the ``send`` envelope. Side is not part of the payload:
the contract infers it from which token invoked the hook.
"""

import base64
import binascii
import json
from typing import Any

from src.selene_cli.core.enums import ErrorKind, OrderType
from src.selene_cli.core.result import Err, Ok, Result
from src.selene_cli.models.order import EncodedOrder, OrderIntent
from src.selene_cli.utils.units import to_raw_units


def encode_payload(action: dict[str, Any]) -> str:
    """Serialize an order action to compact JSON and base64-encode it.

    Args:
        action: Order action, e.g. ``{"market_order": {"market_id": 0}}``

    Returns:
        str: Standard base64 of the UTF-8 JSON text
    """
    text = json.dumps(action, separators=(",", ":"))
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_payload(payload: str) -> dict[str, Any]:
    """Inverse of encode_payload.

    Raises:
        ValueError: If the payload is not base64 of a JSON object
    """
    try:
        decoded = json.loads(base64.b64decode(payload, validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid order payload: {e}") from e
    if not isinstance(decoded, dict):
        raise ValueError("Invalid order payload: expected a JSON object")
    return decoded


class MessageEncoder:
    """Builds execute messages for the Selene marketplace.

    Pure: no I/O, and identical inputs always give identical output.
    """

    def __init__(self, marketplace_address: str):
        """Initialize encoder.

        Args:
            marketplace_address: Order-book contract receiving CW20 sends
        """
        self.marketplace_address = marketplace_address

    def build_order_action(
        self, order_type: OrderType, market_id: int, price: str | None = None
    ) -> dict[str, Any]:
        """Build the order action carried inside the send payload.

        Args:
            order_type: LIMIT needs a price, MARKET takes none
            market_id: Target market
            price: Limit price as decimal string

        Returns:
            dict: ``limit_order`` or ``market_order`` variant

        Raises:
            ValueError: If a limit order has no price
        """
        if order_type == OrderType.LIMIT:
            if price is None:
                raise ValueError("Limit orders must have a price")
            return {"limit_order": {"market_id": market_id, "price": price}}
        return {"market_order": {"market_id": market_id}}

    def encode(self, intent: OrderIntent, market_id: int) -> Result[EncodedOrder]:
        """Encode an order intent for the source token's send hook.

        Args:
            intent: Validated order intent
            market_id: Target market

        Returns:
            Ok(EncodedOrder), or Err(INVALID_AMOUNT) if the amount cannot be scaled
        """
        raw = to_raw_units(intent.human_amount, intent.source_token.decimals)
        if not raw.is_ok:
            return raw

        # Truncation can leave nothing to transfer when decimals < 2
        if int(raw.value) == 0:
            return Err(
                ErrorKind.INVALID_AMOUNT,
                f"{intent.human_amount} {intent.source_token.symbol} is zero in base units",
            )

        action = self.build_order_action(intent.order_type, market_id, intent.price)
        return Ok(
            EncodedOrder(
                source_token_address=intent.source_token.address,
                recipient_contract=self.marketplace_address,
                raw_amount=raw.value,
                opaque_payload=encode_payload(action),
            )
        )

    def build_remove_limit_order(self, market_id: int, price: str) -> dict[str, Any]:
        """Build the direct execute message cancelling a resting order."""
        return {"remove_limit_order": {"market_id": market_id, "price": price}}

    @staticmethod
    def build_mint(recipient: str, raw_amount: str) -> dict[str, Any]:
        """Build a CW20 mint message (faucet)."""
        return {"mint": {"recipient": recipient, "amount": raw_amount}}
