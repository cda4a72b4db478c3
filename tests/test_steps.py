"""Tests for the step registry and step lookups."""

from checkout_flow.models import Address, CheckoutSnapshot, Customer
from checkout_flow.steps import (
    StepRegistry,
    StepType,
    completion_from_snapshot,
    find_active_index,
    find_step,
    find_step_index,
    with_active,
)

from .fixtures import cart, consignment, step_sequence


class TestLookups:
    def test_find_step_index(self) -> None:
        steps = step_sequence()
        assert find_step_index(steps, StepType.SHIPPING) == 1
        assert find_step_index(steps, None) == -1

    def test_find_step_absent(self) -> None:
        assert find_step(step_sequence()[:1], StepType.PAYMENT) is None

    def test_find_active_index(self) -> None:
        assert find_active_index(step_sequence(StepType.BILLING)) == 2
        assert find_active_index(step_sequence(None)) == -1

    def test_with_active_filters_optional_steps(self) -> None:
        steps = step_sequence(not_required=(StepType.BILLING,))
        shown = with_active(steps, StepType.PAYMENT)

        assert [s.type for s in shown] == [StepType.CUSTOMER, StepType.SHIPPING, StepType.PAYMENT]
        assert [s.is_active for s in shown] == [False, False, True]


class TestStepRegistry:
    def test_order_is_fixed(self) -> None:
        registry = StepRegistry({})
        assert registry.step_types == (
            StepType.CUSTOMER,
            StepType.SHIPPING,
            StepType.BILLING,
            StepType.PAYMENT,
        )

    def test_first_incomplete_required_step_is_active(self) -> None:
        registry = StepRegistry({})
        statuses = registry.statuses_for({StepType.CUSTOMER: True})

        assert [s.is_active for s in statuses] == [False, True, False, False]
        assert statuses[0].is_complete and statuses[0].is_editable

    def test_optional_step_is_skipped(self) -> None:
        registry = StepRegistry({StepType.SHIPPING: False})
        statuses = registry.statuses_for({StepType.CUSTOMER: True})

        assert statuses[1].is_required is False
        assert statuses[1].is_active is False
        assert statuses[2].is_active is True

    def test_shipping_required_only_for_physical_items(self) -> None:
        physical = StepRegistry.for_snapshot(CheckoutSnapshot(cart=cart()))
        digital = StepRegistry.for_snapshot(CheckoutSnapshot(cart=cart(physical=(), digital=("d-1",))))

        assert physical.is_required(StepType.SHIPPING) is True
        assert digital.is_required(StepType.SHIPPING) is False

    def test_statuses_from_snapshot(self) -> None:
        snapshot = CheckoutSnapshot(
            cart=cart(),
            consignments=(consignment(),),
            customer=Customer(email="ada@example.com"),
        )
        registry = StepRegistry.for_snapshot(snapshot)

        active = [s.type for s in registry.statuses(snapshot) if s.is_active]
        assert active == [StepType.BILLING]


class TestCompletion:
    def test_empty_snapshot_is_incomplete(self) -> None:
        completion = completion_from_snapshot(CheckoutSnapshot())
        assert not any(completion.values())

    def test_shipping_needs_selected_option(self) -> None:
        snapshot = CheckoutSnapshot(consignments=(consignment(selected=False),))
        assert completion_from_snapshot(snapshot)[StepType.SHIPPING] is False

    def test_billing_needs_filled_address(self) -> None:
        partial = CheckoutSnapshot(billing_address=Address(first_name="Ada"))
        full = CheckoutSnapshot(billing_address=Address(address1="1 Main St", country_code="US"))

        assert completion_from_snapshot(partial)[StepType.BILLING] is False
        assert completion_from_snapshot(full)[StepType.BILLING] is True

    def test_payment_never_complete(self) -> None:
        assert completion_from_snapshot(CheckoutSnapshot())[StepType.PAYMENT] is False
