"""Tests for @reacts_to and EventDispatcher."""

from dataclasses import dataclass

import pytest

from checkout_flow.orchestrator import CheckoutOrchestrator
from checkout_flow.events import ConsignmentsUpdated, ErrorModalClosed, StepEdited
from checkout_flow.router import ERRMSG_UNKNOWN_EVENT, EventDispatcher, reacts_to


@dataclass(frozen=True)
class Pinged:
    value: int = 0


@dataclass(frozen=True)
class Ignored:
    pass


class Recorder(EventDispatcher):
    def __init__(self):
        self.seen = []

    @reacts_to(Pinged)
    def on_pinged(self, event: Pinged) -> None:
        self.seen.append(event.value)


class TestReactsTo:
    def test_dispatches_by_type(self) -> None:
        recorder = Recorder()
        recorder.dispatch(Pinged(3))
        assert recorder.seen == [3]

    def test_unknown_event_raises(self) -> None:
        with pytest.raises(ValueError, match=ERRMSG_UNKNOWN_EVENT):
            Recorder().dispatch(Ignored())

    def test_type_hint_mismatch(self) -> None:
        with pytest.raises(TypeError, match="registered for Pinged but annotated as Ignored"):

            class Broken(EventDispatcher):
                @reacts_to(Pinged)
                def on_pinged(self, event: Ignored) -> None:
                    pass

    def test_missing_type_hint(self) -> None:
        with pytest.raises(TypeError, match="is not annotated"):

            class Broken(EventDispatcher):
                @reacts_to(Pinged)
                def on_pinged(self, event) -> None:
                    pass

    def test_extra_parameter(self) -> None:
        with pytest.raises(TypeError, match=r"must take \(self, event\)"):

            class Broken(EventDispatcher):
                @reacts_to(Pinged)
                def on_pinged(self, event: Pinged, extra: int) -> None:
                    pass

    def test_duplicate_handler(self) -> None:
        with pytest.raises(TypeError, match="duplicate handler"):

            class Broken(EventDispatcher):
                @reacts_to(Pinged)
                def first(self, event: Pinged) -> None:
                    pass

                @reacts_to(Pinged)
                def second(self, event: Pinged) -> None:
                    pass


class TestOrchestratorDispatchTable:
    def test_covers_presentation_events(self) -> None:
        handled = CheckoutOrchestrator.handled_events()
        for event_type in (ConsignmentsUpdated, StepEdited, ErrorModalClosed):
            assert event_type in handled
