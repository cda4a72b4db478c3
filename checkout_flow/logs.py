"""structlog setup and the default error logger."""

import structlog


def configure_logging() -> None:
    """Configure structlog with JSON rendering and ISO timestamps."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


class StructlogErrorLogger:
    """Error logger writing one structured entry per reported error."""

    def __init__(self, logger=None):
        self._log = logger if logger is not None else structlog.get_logger()

    def log(self, error: BaseException) -> None:
        self._log.error(
            "checkout_error",
            error_type=type(error).__name__,
            error=str(error),
        )
