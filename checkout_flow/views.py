"""Presentation adapters: per-step view descriptors.

A view descriptor carries everything a step renderer needs: the step status
and the orchestrator callbacks it is wired to. ``build_step_view`` is the
single place where step types are mapped to renderers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Union, assert_never

from .models import Address, Cart, Consignment
from .orchestrator import CheckoutOrchestrator
from .shipping import is_using_multi_shipping
from .state import CustomerViewType
from .steps import StepStatus, StepType


@dataclass(frozen=True)
class StepView:
    step: StepStatus
    on_edit: Callable[[StepType], None]
    on_expanded: Callable[[StepType], None]
    on_ready: Callable[[], None]
    on_unhandled_error: Callable[[BaseException], None]


@dataclass(frozen=True)
class CustomerStepView(StepView):
    view_type: CustomerViewType
    is_embedded: bool
    on_continue: Callable[[], None]
    on_change_view_type: Callable[[CustomerViewType], None]
    on_error: Callable[[BaseException], None]
    on_sign_out: Callable[[bool], None]
    check_embedded_support: Callable[[Sequence[str]], bool]


@dataclass(frozen=True)
class ShippingStepView(StepView):
    cart: Cart
    consignments: tuple[Consignment, ...]
    is_billing_same_as_shipping: bool
    is_multi_shipping_mode: bool
    navigate_next_step: Callable[[bool], None]
    on_sign_in: Callable[[], None]
    on_create_account: Callable[[], None]
    on_toggle_multi_shipping: Callable[[], None]


@dataclass(frozen=True)
class BillingStepView(StepView):
    billing_address: Address | None
    navigate_next_step: Callable[[], None]


@dataclass(frozen=True)
class PaymentStepView(StepView):
    is_embedded: bool
    is_using_multi_shipping: bool
    on_submit: Callable[..., None]
    on_finalize: Callable[..., None]
    on_submit_error: Callable[[BaseException], None]
    on_cart_changed_error: Callable[[BaseException], None]
    check_embedded_support: Callable[[Sequence[str]], bool]


AnyStepView = Union[CustomerStepView, ShippingStepView, BillingStepView, PaymentStepView]


def _common(orchestrator: CheckoutOrchestrator, step: StepStatus) -> dict[str, Any]:
    return {
        "step": step,
        "on_edit": orchestrator.on_edit,
        "on_expanded": orchestrator.on_expanded,
        "on_ready": orchestrator.on_ready,
        "on_unhandled_error": orchestrator.on_unhandled_error,
    }


def build_step_view(orchestrator: CheckoutOrchestrator, step: StepStatus) -> AnyStepView | None:
    """Describe how the given step is rendered.

    Returns None for the Shipping step while the cart is not loaded.
    """
    snapshot = orchestrator.snapshot
    state = orchestrator.state

    match step.type:
        case StepType.CUSTOMER:
            default_view = (
                CustomerViewType.GUEST if orchestrator.settings.is_guest_enabled else CustomerViewType.LOGIN
            )
            return CustomerStepView(
                **_common(orchestrator, step),
                view_type=state.customer_view_type or default_view,
                is_embedded=orchestrator.is_embedded,
                on_continue=orchestrator.on_continue,
                on_change_view_type=orchestrator.on_change_view_type,
                on_error=orchestrator.on_error,
                on_sign_out=orchestrator.on_sign_out,
                check_embedded_support=orchestrator.check_embedded_support,
            )
        case StepType.SHIPPING:
            if snapshot is None or snapshot.cart is None:
                return None
            return ShippingStepView(
                **_common(orchestrator, step),
                cart=snapshot.cart,
                consignments=snapshot.consignments or (),
                is_billing_same_as_shipping=state.is_billing_same_as_shipping,
                is_multi_shipping_mode=state.is_multi_shipping_mode,
                navigate_next_step=orchestrator.on_shipping_next_step,
                on_sign_in=orchestrator.on_sign_in,
                on_create_account=orchestrator.on_create_account,
                on_toggle_multi_shipping=orchestrator.on_toggle_multi_shipping,
            )
        case StepType.BILLING:
            return BillingStepView(
                **_common(orchestrator, step),
                billing_address=snapshot.billing_address if snapshot is not None else None,
                navigate_next_step=orchestrator.on_continue,
            )
        case StepType.PAYMENT:
            multi = False
            if snapshot is not None and snapshot.cart is not None and snapshot.consignments is not None:
                multi = is_using_multi_shipping(snapshot.consignments, snapshot.cart.line_items)
            return PaymentStepView(
                **_common(orchestrator, step),
                is_embedded=orchestrator.is_embedded,
                is_using_multi_shipping=multi,
                on_submit=orchestrator.on_submit,
                on_finalize=orchestrator.on_submit,
                on_submit_error=orchestrator.on_submit_error,
                on_cart_changed_error=orchestrator.on_cart_changed_error,
                check_embedded_support=orchestrator.check_embedded_support,
            )
        case _:
            assert_never(step.type)


def build_step_views(orchestrator: CheckoutOrchestrator) -> list[AnyStepView]:
    """Views for every visible step, in order."""
    views = []
    for step in orchestrator.visible_steps():
        view = build_step_view(orchestrator, step)
        if view is not None:
            views.append(view)
    return views
