"""Decorator-driven event dispatch.

Handlers are methods decorated with ``@reacts_to(EventType)``. Subclasses of
``EventDispatcher`` build their dispatch table once, when the class is
created. A duplicate or mistyped handler fails at import time.

Example usage:
    class Orchestrator(EventDispatcher):
        @reacts_to(StepEdited)
        def handle_step_edited(self, event: StepEdited) -> None:
            ...

    orchestrator.dispatch(StepEdited(StepType.SHIPPING))
"""

from __future__ import annotations

import inspect
import typing
from functools import wraps
from typing import Callable

from .errors import errmsg

ERRMSG_UNKNOWN_EVENT = errmsg.UNKNOWN_EVENT


def validate_event_handler(method: Callable, event_type: type) -> None:
    """Check that a handler method takes the event it is registered for.

    The handler signature is ``(self, event: EventType)``.

    Raises:
        TypeError: If the event parameter or its annotation is missing, or the
            annotation names a different event type.
    """
    params = list(inspect.signature(method).parameters)
    if len(params) != 2:
        raise TypeError(f"{method.__name__}: handler must take (self, event)")

    annotation = typing.get_type_hints(method).get(params[1])
    if annotation is None:
        raise TypeError(f"{method.__name__}: event parameter '{params[1]}' is not annotated")
    if annotation is not event_type:
        raise TypeError(
            f"{method.__name__}: registered for {event_type.__name__} "
            f"but annotated as {getattr(annotation, '__name__', annotation)}"
        )


def reacts_to(event_type: type):
    """Decorator for event handler methods on EventDispatcher subclasses.

    Raises:
        TypeError: If the handler does not take an event annotated as event_type.
    """

    def decorator(method: Callable) -> Callable:
        validate_event_handler(method, event_type)

        @wraps(method)
        def wrapper(self, *args, **kwargs):
            return method(self, *args, **kwargs)

        wrapper._is_handler = True
        wrapper._event_type = event_type
        return wrapper

    return decorator


class EventDispatcher:
    """Base class routing events to ``@reacts_to`` methods by event type."""

    _dispatch_table: dict[type, str] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._dispatch_table = cls._build_dispatch_table()

    @classmethod
    def _build_dispatch_table(cls) -> dict[type, str]:
        """Scan for @reacts_to methods and build dispatch table."""
        table = {}
        for name in dir(cls):
            attr = getattr(cls, name, None)
            if callable(attr) and getattr(attr, "_is_handler", False):
                event_type = attr._event_type
                if event_type in table:
                    raise TypeError(
                        f"{cls.__name__}: duplicate handler for {event_type.__name__}"
                    )
                table[event_type] = name
        return table

    @classmethod
    def handled_events(cls) -> list[type]:
        return sorted(cls._dispatch_table, key=lambda t: t.__name__)

    def dispatch(self, event: object) -> None:
        """Route event to its handler.

        Raises:
            ValueError: If no handler is registered for the event type.
        """
        method_name = self._dispatch_table.get(type(event))
        if method_name is None:
            raise ValueError(f"{ERRMSG_UNKNOWN_EVENT}: {type(event).__name__}")
        getattr(self, method_name)(event)
