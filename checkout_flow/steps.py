"""Checkout step types, statuses, and the step registry.

The registry fixes the order of steps and which of them a checkout requires
when the session starts. Statuses are then re-derived from each snapshot; the
sequence itself never changes for the life of the session.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from .models import CheckoutSnapshot
from .shipping import has_selected_shipping_options


class StepType(str, Enum):
    CUSTOMER = "customer"
    SHIPPING = "shipping"
    BILLING = "billing"
    PAYMENT = "payment"


STEP_ORDER: tuple[StepType, ...] = (
    StepType.CUSTOMER,
    StepType.SHIPPING,
    StepType.BILLING,
    StepType.PAYMENT,
)


@dataclass(frozen=True)
class StepStatus:
    type: StepType
    is_required: bool = True
    is_active: bool = False
    is_complete: bool = False
    is_editable: bool = False


def find_step(steps: Sequence[StepStatus], step_type: StepType | None) -> StepStatus | None:
    for step in steps:
        if step.type == step_type:
            return step
    return None


def find_step_index(steps: Sequence[StepStatus], step_type: StepType | None) -> int:
    """Position of the step with the given type, or -1 when absent."""
    for index, step in enumerate(steps):
        if step.type == step_type:
            return index
    return -1


def find_active_index(steps: Sequence[StepStatus]) -> int:
    """Position of the first step flagged active, or -1 when none is."""
    for index, step in enumerate(steps):
        if step.is_active:
            return index
    return -1


def with_active(steps: Sequence[StepStatus], step_type: StepType | None) -> list[StepStatus]:
    """Required steps with ``is_active`` set only on ``step_type``."""
    return [
        replace(step, is_active=step.type == step_type)
        for step in steps
        if step.is_required
    ]


class StepRegistry:
    """Ordered step sequence for one checkout session.

    Usage:
        registry = StepRegistry.for_snapshot(snapshot)
        steps = registry.statuses(latest_snapshot)
    """

    def __init__(self, required: Mapping[StepType, bool]):
        self._required = {step_type: bool(required.get(step_type, True)) for step_type in STEP_ORDER}

    @classmethod
    def for_snapshot(cls, snapshot: CheckoutSnapshot) -> StepRegistry:
        """Shipping is only required when the cart holds physical items."""
        has_physical = snapshot.cart is not None and snapshot.cart.has_physical_items()
        return cls({StepType.SHIPPING: has_physical})

    @property
    def step_types(self) -> tuple[StepType, ...]:
        return STEP_ORDER

    def is_required(self, step_type: StepType) -> bool:
        return self._required[step_type]

    def statuses(self, snapshot: CheckoutSnapshot) -> tuple[StepStatus, ...]:
        return self.statuses_for(completion_from_snapshot(snapshot))

    def statuses_for(self, completion: Mapping[StepType, bool]) -> tuple[StepStatus, ...]:
        """Derive statuses from per-step completion.

        The first required step that is not complete is active. Complete steps
        are editable. Steps that are not required are never active.
        """
        statuses = []
        active_found = False
        for step_type in STEP_ORDER:
            required = self._required[step_type]
            complete = bool(completion.get(step_type, False))
            active = required and not complete and not active_found
            if active:
                active_found = True
            statuses.append(
                StepStatus(
                    type=step_type,
                    is_required=required,
                    is_active=active,
                    is_complete=complete,
                    is_editable=complete,
                )
            )
        return tuple(statuses)


def completion_from_snapshot(snapshot: CheckoutSnapshot) -> dict[StepType, bool]:
    customer = snapshot.customer
    consignments = snapshot.consignments or ()
    billing = snapshot.billing_address

    shipping_complete = (
        bool(consignments)
        and all(c.shipping_address is not None and c.shipping_address.is_filled() for c in consignments)
        and has_selected_shipping_options(consignments)
    )
    return {
        StepType.CUSTOMER: customer is not None and bool(customer.email),
        StepType.SHIPPING: shipping_complete,
        StepType.BILLING: billing is not None and billing.is_filled(),
        # Payment completes by placing the order, which ends the session.
        StepType.PAYMENT: False,
    }
