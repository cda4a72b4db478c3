"""Default step tracker that records analytics events as log entries."""

import structlog

from .steps import StepType


class LoggingStepTracker:
    """Step tracker backed by structlog.

    Used when the host application does not supply its own analytics
    tracker. Every call produces one log entry.
    """

    def __init__(self, logger=None):
        self._log = logger if logger is not None else structlog.get_logger()

    def track_checkout_started(self) -> None:
        self._log.info("checkout_started")

    def track_step_viewed(self, step_type: StepType) -> None:
        self._log.info("step_viewed", step=step_type.value)

    def track_step_completed(self, step_type: StepType) -> None:
        self._log.info("step_completed", step=step_type.value)
