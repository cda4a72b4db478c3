"""Error types for the checkout step orchestrator."""

from typing import Any, Optional


class errmsg:
    """Error message constants for the checkout flow."""

    LOAD_FAILED = "Unable to load checkout"
    SHIPPING_OPTION_EXPIRED = "The selected shipping option is no longer available"
    CART_CHANGED = "The cart has changed"
    UNHANDLED = "Something went wrong"
    DEFAULT_ERROR_HEADING = "Something's gone wrong"
    ALREADY_INITIALIZED = "Checkout session already initialized"
    UNKNOWN_EVENT = "Unknown event type"


class CheckoutError(Exception):
    """Base class for checkout errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class LoadFailureError(CheckoutError):
    """The initial checkout load was rejected."""

    def __init__(self, cause: Exception):
        super().__init__(errmsg.LOAD_FAILED, cause)


class ShippingOptionExpiredError(CheckoutError):
    """A consignment lost its selected shipping option after Shipping was done."""

    def __init__(self):
        super().__init__(errmsg.SHIPPING_OPTION_EXPIRED)


class CartChangedError(CheckoutError):
    """The cart was mutated while the shopper was paying."""

    def __init__(self, message: str = errmsg.CART_CHANGED, cause: Optional[Exception] = None):
        super().__init__(message, cause)


class CustomError(CheckoutError):
    """Error carrying its own title, rendered distinctly from generic errors."""

    def __init__(
        self,
        message: str,
        title: Optional[str] = None,
        data: Optional[dict[str, Any]] = None,
        name: str = "default",
    ):
        super().__init__(message)
        self.title = title
        self.data = data if data is not None else {}
        self.name = name


class UnhandledError(CheckoutError):
    """Catch-all wrapper for failures no step could recover from."""

    def __init__(self, cause: Exception):
        super().__init__(errmsg.UNHANDLED, cause)


class SessionStateError(CheckoutError):
    """The session lifecycle was driven out of order."""


def is_custom_error(error: Optional[BaseException]) -> bool:
    """Return True if the error should be rendered with its own title."""
    return isinstance(error, CustomError)
