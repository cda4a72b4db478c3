"""Orchestrator state for one checkout session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .branding import SiteBranding
from .steps import StepType


class CustomerViewType(str, Enum):
    GUEST = "guest"
    LOGIN = "login"
    CREATE_ACCOUNT = "create_account"


@dataclass
class OrchestratorState:
    active_step_type: StepType | None = None
    default_step_type: StepType | None = None
    is_multi_shipping_mode: bool = False
    is_billing_same_as_shipping: bool = True
    has_selected_shipping_options: bool = False
    is_cart_empty: bool = False
    is_redirecting: bool = False
    is_buy_now_cart_enabled: bool = False
    customer_view_type: CustomerViewType | None = None
    error: BaseException | None = None
    branding: SiteBranding | None = None
    is_header_shown: bool = False

    @property
    def shown_step_type(self) -> StepType | None:
        """Active step if one was chosen, otherwise the default step."""
        if self.active_step_type is not None:
            return self.active_step_type
        return self.default_step_type
