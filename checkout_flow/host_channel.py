"""Handshake and notifications towards a parent frame hosting the checkout.

The channel starts DISCONNECTED and moves to CONNECTED once the messenger for
the parent origin has been built. There is no way back: a failed handshake
leaves the channel disconnected for the rest of the session and every post
becomes a no-op, so the checkout carries on as if it were not embedded.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import structlog

from .collaborators import EmbeddedMessenger, MessengerFactory, StylesheetSink

logger = structlog.get_logger()


class ChannelState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class HostChannel:
    """Messaging channel to the embedding host."""

    def __init__(self, factory: MessengerFactory, log=None):
        self._factory = factory
        self._messenger: Optional[EmbeddedMessenger] = None
        self._log = log if log is not None else logger

    @property
    def state(self) -> ChannelState:
        if self._messenger is None:
            return ChannelState.DISCONNECTED
        return ChannelState.CONNECTED

    @property
    def is_connected(self) -> bool:
        return self._messenger is not None

    def connect(self, parent_origin: str, stylesheet: Optional[StylesheetSink] = None) -> bool:
        """Establish the handshake with the parent origin.

        Returns:
            True if the channel is connected afterwards.
        """
        if self._messenger is not None:
            return True

        try:
            messenger = self._factory(parent_origin)
        except Exception as exc:
            self._log.warning(
                "host_handshake_failed",
                parent_origin=parent_origin,
                error=str(exc),
            )
            return False

        self._messenger = messenger
        if stylesheet is not None:
            messenger.receive_styles(stylesheet.append)

        self._log.info("host_connected", parent_origin=parent_origin)
        return True

    def post_frame_loaded(self, container_id: str) -> None:
        if self._messenger is not None:
            self._messenger.post_frame_loaded(container_id)

    def post_loaded(self) -> None:
        if self._messenger is not None:
            self._messenger.post_loaded()

    def post_complete(self) -> None:
        if self._messenger is not None:
            self._messenger.post_complete()

    def post_error(self, error: BaseException) -> None:
        if self._messenger is not None:
            self._messenger.post_error(error)

    def post_signed_out(self) -> None:
        if self._messenger is not None:
            self._messenger.post_signed_out()
