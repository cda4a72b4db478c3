"""Events the orchestrator reacts to.

Each event is raised by exactly one kind of source: the consignment
subscription, a step view, or the customer/payment sub-flows.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import CheckoutSnapshot
from .state import CustomerViewType
from .steps import StepType


# =============================================================================
# Subscription
# =============================================================================


@dataclass(frozen=True)
class ConsignmentsUpdated:
    snapshot: CheckoutSnapshot


# =============================================================================
# Step views
# =============================================================================


@dataclass(frozen=True)
class StepEdited:
    step_type: StepType


@dataclass(frozen=True)
class StepExpanded:
    step_type: StepType


@dataclass(frozen=True)
class StepReady:
    """A step view finished loading."""


@dataclass(frozen=True)
class StepContinued:
    """The shopper finished the current step (sign-in, guest, account, billing)."""


@dataclass(frozen=True)
class ShippingSubmitted:
    is_billing_same_as_shipping: bool


@dataclass(frozen=True)
class MultiShippingToggled:
    pass


@dataclass(frozen=True)
class OrderPlaced:
    order_id: int | None = None


# =============================================================================
# Customer
# =============================================================================


@dataclass(frozen=True)
class CustomerSignedOut:
    is_cart_empty: bool = False


@dataclass(frozen=True)
class CustomerViewRequested:
    view_type: CustomerViewType


# =============================================================================
# Errors
# =============================================================================


@dataclass(frozen=True)
class ErrorReported:
    """A sub-flow reported an error it handled itself."""

    error: BaseException


@dataclass(frozen=True)
class UnhandledErrorRaised:
    error: BaseException


@dataclass(frozen=True)
class CartChanged:
    error: BaseException


@dataclass(frozen=True)
class ErrorModalClosed:
    pass
