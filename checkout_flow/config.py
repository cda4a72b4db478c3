"""Store settings from the checkout payload and per-session environment config."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

BUY_NOW_CART_FEATURE = "CHECKOUT-3190.enable_buy_now_cart"

INCLUDE_CATEGORY_NAMES = (
    "cart.lineItems.physicalItems.categoryNames",
    "cart.lineItems.digitalItems.categoryNames",
)

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CheckoutSettings:
    """Typed view over the store configuration returned with a checkout."""

    has_multi_shipping_enabled: bool = False
    checkout_billing_same_as_shipping_enabled: bool = True
    is_buy_now_cart_enabled: bool = False
    is_guest_enabled: bool = True
    can_create_account_in_checkout: bool = True
    site_link: str = ""
    login_url: str = ""
    create_account_url: str = ""

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> CheckoutSettings:
        config = config or {}
        settings = config.get("checkoutSettings") or {}
        links = config.get("links") or {}
        features = settings.get("features") or {}

        billing_same = settings.get("checkoutBillingSameAsShippingEnabled")
        return cls(
            has_multi_shipping_enabled=bool(settings.get("hasMultiShippingEnabled", False)),
            checkout_billing_same_as_shipping_enabled=(
                True if billing_same is None else bool(billing_same)
            ),
            is_buy_now_cart_enabled=bool(features.get(BUY_NOW_CART_FEATURE, False)),
            is_guest_enabled=bool(settings.get("guestCheckoutEnabled", True)),
            can_create_account_in_checkout=bool(settings.get("isAccountCreationEnabled", True)),
            site_link=links.get("siteLink", ""),
            login_url=links.get("loginLink", ""),
            create_account_url=links.get("createAccountLink", ""),
        )


@dataclass(frozen=True)
class SessionConfig:
    """How this checkout session is hosted.

    ``login_url`` and ``create_account_url`` override the store links when set.
    """

    is_embedded: bool = False
    container_id: str = "checkout-app"
    login_url: str = ""
    create_account_url: str = ""

    @classmethod
    def from_env(cls) -> SessionConfig:
        """Build the session config from the environment.

        Environment variables:
            CHECKOUT_EMBEDDED: "true" when running inside a parent frame (default: false)
            CHECKOUT_CONTAINER_ID: DOM id of the checkout container (default: checkout-app)
            CHECKOUT_LOGIN_URL: Login page override
            CHECKOUT_CREATE_ACCOUNT_URL: Account creation page override
        """
        embedded = os.environ.get("CHECKOUT_EMBEDDED", "false").lower()
        return cls(
            is_embedded=embedded in _TRUTHY,
            container_id=os.environ.get("CHECKOUT_CONTAINER_ID", "checkout-app"),
            login_url=os.environ.get("CHECKOUT_LOGIN_URL", ""),
            create_account_url=os.environ.get("CHECKOUT_CREATE_ACCOUNT_URL", ""),
        )


def load_options() -> dict[str, Any]:
    """Loader options requesting line-item category data."""
    return {"params": {"include": list(INCLUDE_CATEGORY_NAMES)}}
