"""Contracts of the collaborators the orchestrator drives but does not own."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol

from .models import CheckoutSnapshot
from .steps import StepStatus, StepType

Unsubscribe = Callable[[], None]
ConsignmentCallback = Callable[[CheckoutSnapshot], None]
StepSource = Callable[[], Sequence[StepStatus]]


class CheckoutLoader(Protocol):
    def __call__(self, checkout_id: str, options: dict[str, Any]) -> Awaitable[CheckoutSnapshot]: ...


class ConsignmentSubscriber(Protocol):
    def __call__(self, callback: ConsignmentCallback) -> Unsubscribe: ...


class StepTracker(Protocol):
    def track_checkout_started(self) -> None: ...

    def track_step_viewed(self, step_type: StepType) -> None: ...

    def track_step_completed(self, step_type: StepType) -> None: ...


class EmbeddedMessenger(Protocol):
    def receive_styles(self, handler: Callable[[Any], None]) -> None: ...

    def post_frame_loaded(self, container_id: str) -> None: ...

    def post_loaded(self) -> None: ...

    def post_complete(self) -> None: ...

    def post_error(self, error: BaseException) -> None: ...

    def post_signed_out(self) -> None: ...


class MessengerFactory(Protocol):
    def __call__(self, parent_origin: str) -> EmbeddedMessenger: ...


class StylesheetSink(Protocol):
    def append(self, styles: Any) -> None: ...


class ErrorLogger(Protocol):
    def log(self, error: BaseException) -> None: ...


class Redirector(Protocol):
    def assign(self, url: str) -> None: ...

    def replace(self, url: str) -> None: ...


class EmbeddedSupport(Protocol):
    def is_supported(self, *method_ids: str) -> bool: ...
