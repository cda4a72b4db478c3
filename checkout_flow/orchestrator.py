"""Checkout step orchestrator.

Owns the state of one checkout session and decides which step is shown.
It reacts to:

- the initial load settling (``initialize``),
- consignment pushes from the subscription (re-validation),
- callbacks from step views (edit, ready, continue, submit, sign-out),
- errors escalated by the step sub-flows.

Every handler commits its state change first and performs any externally
visible effect (redirect, host notification) afterwards.

Example usage:
    orchestrator = CheckoutOrchestrator(
        load_checkout=sdk.load_checkout,
        subscribe_to_consignments=sdk.subscribe_to_consignments,
        steps=lambda: registry.statuses(sdk.snapshot),
        redirector=browser,
    )
    await orchestrator.initialize(checkout_id)
    ...
    orchestrator.teardown()
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Optional

import structlog

from .branding import branding_for_cart
from .collaborators import (
    CheckoutLoader,
    ConsignmentSubscriber,
    EmbeddedSupport,
    ErrorLogger,
    MessengerFactory,
    Redirector,
    StepSource,
    StepTracker,
    StylesheetSink,
    Unsubscribe,
)
from .config import CheckoutSettings, SessionConfig, load_options
from .errors import (
    CustomError,
    LoadFailureError,
    SessionStateError,
    ShippingOptionExpiredError,
    errmsg,
)
from .events import (
    CartChanged,
    ConsignmentsUpdated,
    CustomerSignedOut,
    CustomerViewRequested,
    ErrorModalClosed,
    ErrorReported,
    MultiShippingToggled,
    OrderPlaced,
    ShippingSubmitted,
    StepContinued,
    StepEdited,
    StepExpanded,
    StepReady,
    UnhandledErrorRaised,
)
from .host_channel import HostChannel
from .logs import StructlogErrorLogger
from .models import CheckoutSnapshot
from .readiness import ViewReadiness
from .redirects import order_confirmation_url
from .router import EventDispatcher, reacts_to
from .shipping import has_selected_shipping_options, is_using_multi_shipping
from .state import CustomerViewType, OrchestratorState
from .steps import StepStatus, StepType, find_active_index, find_step, find_step_index, with_active
from .tracking import LoggingStepTracker

logger = structlog.get_logger()


class CheckoutOrchestrator(EventDispatcher):
    """State machine for one checkout session."""

    def __init__(
        self,
        *,
        load_checkout: CheckoutLoader,
        subscribe_to_consignments: ConsignmentSubscriber,
        steps: StepSource,
        redirector: Redirector,
        error_logger: Optional[ErrorLogger] = None,
        create_step_tracker: Optional[Callable[[], StepTracker]] = None,
        create_messenger: Optional[MessengerFactory] = None,
        stylesheet: Optional[StylesheetSink] = None,
        embedded_support: Optional[EmbeddedSupport] = None,
        readiness: Optional[ViewReadiness] = None,
        session: Optional[SessionConfig] = None,
        log=None,
    ):
        self._load_checkout = load_checkout
        self._subscribe = subscribe_to_consignments
        self._steps = steps
        self._redirector = redirector
        self._error_logger = error_logger if error_logger is not None else StructlogErrorLogger()
        self._create_step_tracker = create_step_tracker or LoggingStepTracker
        self._create_messenger = create_messenger
        self._stylesheet = stylesheet
        self._embedded_support = embedded_support
        self._readiness = readiness
        self._session = session if session is not None else SessionConfig()
        self._log = log if log is not None else logger

        self.state = OrchestratorState()
        self.settings = CheckoutSettings()
        self.snapshot: Optional[CheckoutSnapshot] = None
        self.step_tracker: Optional[StepTracker] = None
        self.host_channel: Optional[HostChannel] = None

        self._initialized = False
        self._disposed = False
        self._unsubscribe: Optional[Unsubscribe] = None

    # -------------------------------------------------------------------------
    # Session properties
    # -------------------------------------------------------------------------

    @property
    def is_embedded(self) -> bool:
        return self._session.is_embedded

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def login_url(self) -> str:
        return self._session.login_url or self.settings.login_url

    @property
    def create_account_url(self) -> str:
        return self._session.create_account_url or self.settings.create_account_url

    def steps(self) -> Sequence[StepStatus]:
        return self._steps()

    def visible_steps(self) -> list[StepStatus]:
        """Required steps, with the shown step flagged active."""
        return with_active(self._steps(), self.state.shown_step_type)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def initialize(self, checkout_id: str) -> None:
        """Load the checkout and settle on a starting step.

        A failed load is routed as an unhandled error and leaves every step
        inactive.

        Raises:
            SessionStateError: If the session was already initialized.
        """
        if self._initialized:
            raise SessionStateError(errmsg.ALREADY_INITIALIZED)
        self._initialized = True
        self._log = self._log.bind(checkout_id=checkout_id)

        try:
            snapshot = await self._load_checkout(checkout_id, load_options())
        except Exception as exc:
            if self._disposed:
                self._log.info("load_failed_after_teardown", error=str(exc))
                return
            self.handle_unhandled_error(LoadFailureError(exc))
            return

        if self._disposed:
            self._log.info("load_discarded_after_teardown")
            return

        try:
            self._start(snapshot)
        except Exception as exc:
            self.handle_unhandled_error(exc)

    def _start(self, snapshot: CheckoutSnapshot) -> None:
        self.snapshot = snapshot
        self.settings = settings = CheckoutSettings.from_config(snapshot.config)
        self.state.branding = branding_for_cart(snapshot.cart)

        error_messages = snapshot.get_flash_messages("error")
        flash_error = None
        if error_messages:
            first = error_messages[0]
            flash_error = CustomError(
                title=first.title or errmsg.DEFAULT_ERROR_HEADING,
                message=first.message,
                data={},
                name="default",
            )

        if self.is_embedded and self._create_messenger is not None:
            channel = HostChannel(self._create_messenger, log=self._log)
            channel.connect(settings.site_link, self._stylesheet)
            self.host_channel = channel
            channel.post_frame_loaded(self._session.container_id)
            channel.post_loaded()

        self._unsubscribe = self._subscribe(self._on_consignments_pushed)

        self.step_tracker = self._create_step_tracker()
        self.step_tracker.track_checkout_started()

        cart = snapshot.cart
        consignments = snapshot.consignments
        is_multi_shipping_mode = (
            cart is not None
            and consignments is not None
            and settings.has_multi_shipping_enabled
            and is_using_multi_shipping(consignments, cart.line_items)
        )

        self.state.is_billing_same_as_shipping = settings.checkout_billing_same_as_shipping_enabled
        self.state.is_buy_now_cart_enabled = settings.is_buy_now_cart_enabled
        if is_multi_shipping_mode:
            self.state.is_multi_shipping_mode = True

        self._log.info(
            "checkout_loaded",
            is_multi_shipping_mode=self.state.is_multi_shipping_mode,
            is_embedded=self.is_embedded,
            flash_errors=len(error_messages),
        )

        self.navigate_to_next_incomplete(is_default=True)

        if flash_error is not None:
            self.state.error = flash_error

        if self._readiness is not None:
            self._readiness.on_mounted(self._on_view_mounted)

    def teardown(self) -> None:
        """Release the consignment subscription. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
        self._log.info("session_torn_down")

    def __enter__(self) -> CheckoutOrchestrator:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    def _on_view_mounted(self) -> None:
        if self._disposed or self.state.branding is None:
            return
        self.state.is_header_shown = True
        self._log.info("header_shown", site=self.state.branding.site)

    def _on_consignments_pushed(self, snapshot: CheckoutSnapshot) -> None:
        if self._disposed:
            return
        self.dispatch(ConsignmentsUpdated(snapshot))

    # -------------------------------------------------------------------------
    # Navigation primitives
    # -------------------------------------------------------------------------

    def navigate_to(self, step_type: StepType, is_default: bool = False) -> bool:
        """Show the given step.

        Returns:
            True if the state changed.
        """
        if self.state.is_redirecting:
            return False

        step = find_step(self._steps(), step_type)
        if step is None:
            return False

        if self.state.active_step_type == step.type:
            return False

        if is_default:
            if self.state.default_step_type == step.type:
                return False
            self.state.default_step_type = step.type
        else:
            self.state.active_step_type = step.type

        if self.state.error is not None:
            self.state.error = None

        self._log.info("step_navigated", step=step.type.value, is_default=is_default)
        return True

    def navigate_to_next_incomplete(self, is_default: bool = False) -> None:
        if self.state.is_redirecting:
            return

        steps = self._steps()
        index = find_active_index(steps)
        if index < 0:
            return

        previous = steps[max(index - 1, 0)]
        if self.step_tracker is not None:
            self.step_tracker.track_step_completed(previous.type)

        self.navigate_to(steps[index].type, is_default=is_default)

    def navigate_to_order_confirmation(self, order_id: Optional[int] = None) -> None:
        if self.state.is_redirecting:
            return

        steps = self._steps()
        if self.step_tracker is not None and steps:
            self.step_tracker.track_step_completed(steps[-1].type)

        if self.host_channel is not None:
            self.host_channel.post_complete()

        self.state.is_redirecting = True

        url = order_confirmation_url(self.state.is_buy_now_cart_enabled, order_id)
        self._log.info("redirecting_to_order_confirmation", order_id=order_id, url=url)
        self._redirector.replace(url)

    def set_customer_view_type(self, view_type: CustomerViewType) -> None:
        if self.state.is_redirecting:
            return

        if view_type == CustomerViewType.CREATE_ACCOUNT and (
            not self.settings.can_create_account_in_checkout or self.is_embedded
        ):
            self.state.is_redirecting = True
            self._log.info("redirecting_to_create_account", url=self.create_account_url)
            self._redirector.replace(self.create_account_url)
            return

        self.navigate_to(StepType.CUSTOMER)
        self.state.customer_view_type = view_type

    def check_embedded_support(self, method_ids: Sequence[str]) -> bool:
        if self._embedded_support is None:
            return True
        return self._embedded_support.is_supported(*method_ids)

    # -------------------------------------------------------------------------
    # Error routing
    # -------------------------------------------------------------------------

    def handle_error(self, error: BaseException) -> None:
        """Log the error and forward it to the host frame."""
        self._error_logger.log(error)
        if self.host_channel is not None:
            self.host_channel.post_error(error)

    def handle_unhandled_error(self, error: BaseException) -> None:
        """Handle the error and surface it as a blocking modal."""
        self.handle_error(error)
        self.state.error = error

    def close_error_modal(self) -> None:
        self.dispatch(ErrorModalClosed())

    # -------------------------------------------------------------------------
    # Presentation callbacks
    # -------------------------------------------------------------------------

    def on_edit(self, step_type: StepType) -> None:
        self.dispatch(StepEdited(step_type))

    def on_expanded(self, step_type: StepType) -> None:
        self.dispatch(StepExpanded(step_type))

    def on_ready(self) -> None:
        self.dispatch(StepReady())

    def on_continue(self) -> None:
        self.dispatch(StepContinued())

    def on_shipping_next_step(self, is_billing_same_as_shipping: bool) -> None:
        self.dispatch(ShippingSubmitted(is_billing_same_as_shipping))

    def on_toggle_multi_shipping(self) -> None:
        self.dispatch(MultiShippingToggled())

    def on_submit(self, order_id: Optional[int] = None) -> None:
        self.dispatch(OrderPlaced(order_id))

    def on_sign_out(self, is_cart_empty: bool = False) -> None:
        self.dispatch(CustomerSignedOut(is_cart_empty))

    def on_sign_in(self) -> None:
        self.dispatch(CustomerViewRequested(CustomerViewType.LOGIN))

    def on_create_account(self) -> None:
        self.dispatch(CustomerViewRequested(CustomerViewType.CREATE_ACCOUNT))

    def on_change_view_type(self, view_type: CustomerViewType) -> None:
        self.dispatch(CustomerViewRequested(view_type))

    def on_error(self, error: BaseException) -> None:
        self.dispatch(ErrorReported(error))

    on_submit_error = on_error
    on_sign_out_error = on_error
    on_sign_in_error = on_error
    on_continue_as_guest_error = on_error

    def on_unhandled_error(self, error: BaseException) -> None:
        self.dispatch(UnhandledErrorRaised(error))

    def on_cart_changed_error(self, error: BaseException) -> None:
        self.dispatch(CartChanged(error))

    # -------------------------------------------------------------------------
    # Event handlers
    # -------------------------------------------------------------------------

    @reacts_to(ConsignmentsUpdated)
    def handle_consignments_updated(self, event: ConsignmentsUpdated) -> None:
        """Send the shopper back to Shipping when a selected option disappears."""
        self.snapshot = event.snapshot
        previous = self.state.has_selected_shipping_options
        current = has_selected_shipping_options(event.snapshot.consignments or ())

        if previous and not current and not self.state.is_redirecting:
            steps = self._steps()
            shipping_index = find_step_index(steps, StepType.SHIPPING)
            active_index = find_step_index(steps, self.state.active_step_type)
            if shipping_index < active_index:
                self._log.warning(
                    "shipping_option_expired",
                    active_step=self.state.active_step_type.value,
                )
                self.navigate_to(StepType.SHIPPING)
                self.state.error = ShippingOptionExpiredError()

        self.state.has_selected_shipping_options = current

    @reacts_to(StepEdited)
    def handle_step_edited(self, event: StepEdited) -> None:
        self.navigate_to(event.step_type)

    @reacts_to(StepExpanded)
    def handle_step_expanded(self, event: StepExpanded) -> None:
        if self.step_tracker is not None:
            self.step_tracker.track_step_viewed(event.step_type)

    @reacts_to(StepReady)
    def handle_step_ready(self, event: StepReady) -> None:
        self.navigate_to_next_incomplete(is_default=True)

    @reacts_to(StepContinued)
    def handle_step_continued(self, event: StepContinued) -> None:
        self.navigate_to_next_incomplete()

    @reacts_to(ShippingSubmitted)
    def handle_shipping_submitted(self, event: ShippingSubmitted) -> None:
        self.state.is_billing_same_as_shipping = event.is_billing_same_as_shipping

        if event.is_billing_same_as_shipping:
            self.navigate_to_next_incomplete()
        else:
            self.navigate_to(StepType.BILLING)

    @reacts_to(MultiShippingToggled)
    def handle_multi_shipping_toggled(self, event: MultiShippingToggled) -> None:
        self.state.is_multi_shipping_mode = not self.state.is_multi_shipping_mode

    @reacts_to(OrderPlaced)
    def handle_order_placed(self, event: OrderPlaced) -> None:
        self.navigate_to_order_confirmation(event.order_id)

    @reacts_to(CustomerSignedOut)
    def handle_signed_out(self, event: CustomerSignedOut) -> None:
        if self.state.is_redirecting:
            return

        if self.host_channel is not None:
            self.host_channel.post_signed_out()

        if self.settings.is_guest_enabled:
            self.set_customer_view_type(CustomerViewType.GUEST)

        if event.is_cart_empty:
            self.state.is_cart_empty = True

            if not self.is_embedded:
                self.state.is_redirecting = True
                self._log.info("redirecting_to_login", url=self.login_url)
                self._redirector.assign(self.login_url)
                return

        self.navigate_to(StepType.CUSTOMER)

    @reacts_to(CustomerViewRequested)
    def handle_customer_view_requested(self, event: CustomerViewRequested) -> None:
        self.set_customer_view_type(event.view_type)

    @reacts_to(ErrorReported)
    def handle_error_reported(self, event: ErrorReported) -> None:
        self.handle_error(event.error)

    @reacts_to(UnhandledErrorRaised)
    def handle_unhandled_error_raised(self, event: UnhandledErrorRaised) -> None:
        self.handle_unhandled_error(event.error)

    @reacts_to(CartChanged)
    def handle_cart_changed(self, event: CartChanged) -> None:
        self._log.info("cart_changed", error=str(event.error))
        self.navigate_to(StepType.SHIPPING)

    @reacts_to(ErrorModalClosed)
    def handle_error_modal_closed(self, event: ErrorModalClosed) -> None:
        self.state.error = None
