"""Checkout step orchestration: step activation, re-validation, host messaging."""

from .errors import (
    CheckoutError,
    LoadFailureError,
    ShippingOptionExpiredError,
    CartChangedError,
    CustomError,
    UnhandledError,
    SessionStateError,
    errmsg,
    is_custom_error,
)
from .models import (
    Address,
    Cart,
    CheckoutSnapshot,
    Consignment,
    Customer,
    FlashMessage,
    LineItem,
    LineItems,
    ShippingOption,
)
from .config import CheckoutSettings, SessionConfig, load_options
from .shipping import has_selected_shipping_options, is_using_multi_shipping
from .steps import (
    STEP_ORDER,
    StepRegistry,
    StepStatus,
    StepType,
    completion_from_snapshot,
)
from .state import CustomerViewType, OrchestratorState
from .branding import SiteBranding, resolve_branding, branding_for_cart
from .host_channel import ChannelState, HostChannel
from .tracking import LoggingStepTracker
from .logs import configure_logging, StructlogErrorLogger
from .redirects import order_confirmation_url
from .router import EventDispatcher, reacts_to
from .readiness import ViewReadiness
from .orchestrator import CheckoutOrchestrator
from .views import (
    BillingStepView,
    CustomerStepView,
    PaymentStepView,
    ShippingStepView,
    build_step_view,
    build_step_views,
)

__all__ = [
    # Errors
    "CheckoutError",
    "LoadFailureError",
    "ShippingOptionExpiredError",
    "CartChangedError",
    "CustomError",
    "UnhandledError",
    "SessionStateError",
    "errmsg",
    "is_custom_error",
    # Models
    "Address",
    "Cart",
    "CheckoutSnapshot",
    "Consignment",
    "Customer",
    "FlashMessage",
    "LineItem",
    "LineItems",
    "ShippingOption",
    # Config
    "CheckoutSettings",
    "SessionConfig",
    "load_options",
    # Shipping
    "has_selected_shipping_options",
    "is_using_multi_shipping",
    # Steps
    "STEP_ORDER",
    "StepRegistry",
    "StepStatus",
    "StepType",
    "completion_from_snapshot",
    # State
    "CustomerViewType",
    "OrchestratorState",
    # Branding
    "SiteBranding",
    "resolve_branding",
    "branding_for_cart",
    # Host channel
    "ChannelState",
    "HostChannel",
    # Tracking & logging
    "LoggingStepTracker",
    "configure_logging",
    "StructlogErrorLogger",
    # Redirects
    "order_confirmation_url",
    # Dispatch
    "EventDispatcher",
    "reacts_to",
    # Orchestrator
    "CheckoutOrchestrator",
    # Views
    "BillingStepView",
    "CustomerStepView",
    "PaymentStepView",
    "ShippingStepView",
    "ViewReadiness",
    "build_step_view",
    "build_step_views",
]
