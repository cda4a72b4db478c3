"""Redirect targets leaving the checkout."""

from __future__ import annotations

ORDER_CONFIRMATION_PATH = "/checkout/order-confirmation"


def order_confirmation_url(is_buy_now_cart_enabled: bool = False, order_id: int | None = None) -> str:
    """Order confirmation page, scoped to the order for buy-now carts."""
    if is_buy_now_cart_enabled and order_id:
        return f"{ORDER_CONFIRMATION_PATH}/{order_id}"
    return ORDER_CONFIRMATION_PATH
