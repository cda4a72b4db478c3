"""Shared test fixtures for orchestrator tests.

Collaborators are unittest.mock objects; the consignment subscription and
the step source are small fakes so tests can drive pushes and completion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from unittest.mock import MagicMock

from checkout_flow.config import SessionConfig
from checkout_flow.models import (
    Address,
    Cart,
    CheckoutSnapshot,
    Consignment,
    FlashMessage,
    LineItem,
    LineItems,
    ShippingOption,
)
from checkout_flow.orchestrator import CheckoutOrchestrator
from checkout_flow.readiness import ViewReadiness
from checkout_flow.steps import STEP_ORDER, StepStatus, StepType


# =============================================================================
# Steps
# =============================================================================


def step_sequence(
    active: Optional[StepType] = StepType.CUSTOMER,
    not_required: tuple[StepType, ...] = (),
) -> tuple[StepStatus, ...]:
    """Customer, Shipping, Billing, Payment with one step flagged active.

    Steps before the active one are complete.
    """
    active_index = STEP_ORDER.index(active) if active is not None else len(STEP_ORDER)
    return tuple(
        StepStatus(
            type=step_type,
            is_required=step_type not in not_required,
            is_active=step_type == active,
            is_complete=index < active_index,
            is_editable=index < active_index,
        )
        for index, step_type in enumerate(STEP_ORDER)
    )


class StepSource:
    """Mutable holder standing in for the externally derived step list."""

    def __init__(self, steps: tuple[StepStatus, ...] | None = None):
        self.steps = steps if steps is not None else step_sequence()

    def activate(self, step_type: Optional[StepType]) -> None:
        self.steps = step_sequence(step_type)

    def __call__(self) -> tuple[StepStatus, ...]:
        return self.steps


# =============================================================================
# Consignment subscription
# =============================================================================


class ConsignmentFeed:
    """Fake subscription recording subscribe/unsubscribe calls."""

    def __init__(self):
        self.callbacks: list = []
        self.unsubscribe_calls = 0

    def subscribe(self, callback):
        self.callbacks.append(callback)

        def unsubscribe():
            self.unsubscribe_calls += 1
            self.callbacks.remove(callback)

        return unsubscribe

    def push(self, snapshot: CheckoutSnapshot) -> None:
        for callback in list(self.callbacks):
            callback(snapshot)


# =============================================================================
# Snapshots
# =============================================================================


def consignment(
    id: str = "c1",
    line_item_ids: tuple[str, ...] = ("li-1",),
    selected: bool = True,
) -> Consignment:
    return Consignment(
        id=id,
        line_item_ids=line_item_ids,
        shipping_address=Address(
            first_name="Ada",
            address1="1 Main St",
            city="Austin",
            postal_code="78701",
            country_code="US",
        ),
        selected_shipping_option=ShippingOption(id="flat", description="Flat rate") if selected else None,
        available_shipping_options=(ShippingOption(id="flat", description="Flat rate"),),
    )


def cart(
    physical: tuple[str, ...] = ("li-1",),
    digital: tuple[str, ...] = (),
    brand: str = "Bestop",
) -> Cart:
    return Cart(
        id="cart-1",
        line_items=LineItems(
            physical_items=tuple(LineItem(id=i, name=f"item {i}", brand=brand) for i in physical),
            digital_items=tuple(LineItem(id=i, name=f"item {i}", brand=brand) for i in digital),
        ),
    )


def config(
    multi_shipping: bool = False,
    billing_same_as_shipping: Optional[bool] = None,
    buy_now_cart: bool = False,
    guest_enabled: bool = True,
    account_creation: bool = True,
) -> dict[str, Any]:
    settings: dict[str, Any] = {
        "hasMultiShippingEnabled": multi_shipping,
        "guestCheckoutEnabled": guest_enabled,
        "isAccountCreationEnabled": account_creation,
        "features": {"CHECKOUT-3190.enable_buy_now_cart": buy_now_cart},
    }
    if billing_same_as_shipping is not None:
        settings["checkoutBillingSameAsShippingEnabled"] = billing_same_as_shipping
    return {
        "checkoutSettings": settings,
        "links": {
            "siteLink": "https://store.example.com",
            "loginLink": "https://example.com/login",
            "createAccountLink": "https://example.com/create-account",
        },
    }


def snapshot(
    consignments: Optional[tuple[Consignment, ...]] = (),
    flash_messages: tuple[FlashMessage, ...] = (),
    **config_kwargs,
) -> CheckoutSnapshot:
    return CheckoutSnapshot(
        cart=cart(),
        consignments=consignments,
        flash_messages=flash_messages,
        config=config(**config_kwargs),
    )


# =============================================================================
# Orchestrator harness
# =============================================================================


@dataclass
class Harness:
    orchestrator: CheckoutOrchestrator
    steps: StepSource
    feed: ConsignmentFeed
    tracker: MagicMock
    messenger: MagicMock
    messenger_factory: MagicMock
    redirector: MagicMock
    error_logger: MagicMock
    stylesheet: MagicMock
    loader_calls: list = field(default_factory=list)


def build_harness(
    loaded: Optional[CheckoutSnapshot] = None,
    load_error: Optional[Exception] = None,
    steps: Optional[StepSource] = None,
    embedded: bool = False,
    messenger_error: Optional[Exception] = None,
    readiness: Optional[ViewReadiness] = None,
) -> Harness:
    loaded = loaded if loaded is not None else snapshot()
    steps = steps if steps is not None else StepSource()
    feed = ConsignmentFeed()
    tracker = MagicMock()
    messenger = MagicMock()
    messenger_factory = MagicMock(return_value=messenger)
    if messenger_error is not None:
        messenger_factory.side_effect = messenger_error
    redirector = MagicMock()
    error_logger = MagicMock()
    stylesheet = MagicMock()
    loader_calls: list = []

    async def load_checkout(checkout_id, options):
        loader_calls.append((checkout_id, options))
        if load_error is not None:
            raise load_error
        return loaded

    orchestrator = CheckoutOrchestrator(
        load_checkout=load_checkout,
        subscribe_to_consignments=feed.subscribe,
        steps=steps,
        redirector=redirector,
        error_logger=error_logger,
        create_step_tracker=lambda: tracker,
        create_messenger=messenger_factory,
        stylesheet=stylesheet,
        readiness=readiness,
        session=SessionConfig(is_embedded=embedded, container_id="checkout-app"),
        log=MagicMock(),
    )
    return Harness(
        orchestrator=orchestrator,
        steps=steps,
        feed=feed,
        tracker=tracker,
        messenger=messenger,
        messenger_factory=messenger_factory,
        redirector=redirector,
        error_logger=error_logger,
        stylesheet=stylesheet,
        loader_calls=loader_calls,
    )
