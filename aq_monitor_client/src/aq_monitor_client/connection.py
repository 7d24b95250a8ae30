import logging
from typing import Any, Callable, Optional

from aq_monitor_core.domain.models import ConnectionState
from aq_monitor_core.domain.ports import Scheduler, TimerHandle, Transport

from aq_monitor_client.message_router import decode_frame

logger = logging.getLogger(__name__)

BOOTSTRAP_COMMANDS = ("getHistory", "getStatus")
STATUS_COMMAND = "getStatus"
RECONNECT_DELAY_SEC = 5.0


class ConnectionManager:
    """
    Owns the device connection lifecycle.

    States: IDLE -> CONNECTING -> OPEN -> CLOSED_BACKOFF -> (retry) CONNECTING ...

    Transport failures never raise to callers; they move the state machine to
    CLOSED_BACKOFF and schedule a single fixed-delay retry. ``_retry`` is the
    only record of a pending retry, so at most one timer is ever outstanding.
    Retries continue forever.
    """

    def __init__(
        self,
        transport: Transport,
        scheduler: Scheduler,
        *,
        on_payload: Callable[[Any], None],
        on_connection_change: Callable[[bool], None],
        retry_delay: float = RECONNECT_DELAY_SEC,
    ):
        self._transport = transport
        self._scheduler = scheduler
        self._on_payload = on_payload
        self._on_connection_change = on_connection_change
        self._retry_delay = retry_delay
        self._state = ConnectionState.IDLE
        self._retry: Optional[TimerHandle] = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ConnectionState.OPEN

    @property
    def retry_pending(self) -> bool:
        return self._retry is not None

    def _set_state(self, state: ConnectionState) -> None:
        if state is not self._state:
            logger.debug("Connection state %s -> %s", self._state.value, state.value)
        self._state = state

    def start(self) -> None:
        """Open the transport from IDLE or CLOSED_BACKOFF."""
        if self._state not in (ConnectionState.IDLE, ConnectionState.CLOSED_BACKOFF):
            logger.debug("start() ignored while %s", self._state.value)
            return

        self._set_state(ConnectionState.CONNECTING)
        try:
            self._transport.open(self)
        except Exception as e:
            logger.error("Failed to open transport: %s", e)
            self.on_error(e)

    def stop(self) -> None:
        """Cancel any pending retry and close the transport for shutdown."""
        logger.info("Stopping connection manager")
        self._cancel_retry()
        self._set_state(ConnectionState.IDLE)
        try:
            self._transport.close()
        except Exception as e:
            logger.warning("Error while closing transport: %s", e)

    # Transport events

    def on_open(self) -> None:
        if self._state is not ConnectionState.CONNECTING:
            logger.debug("Ignoring open event while %s", self._state.value)
            return

        logger.info("WebSocket connected")
        self._cancel_retry()
        self._set_state(ConnectionState.OPEN)
        self._on_connection_change(True)
        for command in BOOTSTRAP_COMMANDS:
            self.send(command)

    def on_message(self, text: str) -> None:
        payload = decode_frame(text)
        if payload is None:
            return
        try:
            self._on_payload(payload)
        except Exception as e:
            logger.exception("Failed to handle payload: %s", e)

    def on_error(self, exc: BaseException) -> None:
        logger.error("WebSocket error: %s", exc)
        self._connection_lost()

    def on_close(self) -> None:
        logger.info("WebSocket disconnected")
        self._connection_lost()

    def _connection_lost(self) -> None:
        if self._state not in (ConnectionState.OPEN, ConnectionState.CONNECTING):
            logger.debug("Connection loss ignored while %s", self._state.value)
            return

        self._set_state(ConnectionState.CLOSED_BACKOFF)
        self._on_connection_change(False)
        self._schedule_retry()

    # Retry timer

    def _schedule_retry(self) -> None:
        if self._retry is not None:
            logger.debug("Retry already pending, not scheduling another")
            return
        logger.info("Reconnecting in %ss", self._retry_delay)
        self._retry = self._scheduler.call_later(self._retry_delay, self._on_retry)

    def _cancel_retry(self) -> None:
        if self._retry is None:
            return
        self._retry.cancel()
        self._retry = None

    def _on_retry(self) -> None:
        self._retry = None
        logger.info("Attempting to reconnect...")
        self.start()

    # Outbound

    def send(self, command: str) -> bool:
        """Send a text command; only possible while OPEN."""
        if not self.is_open:
            logger.warning("Not connected, cannot send %r", command)
            return False
        try:
            self._transport.send(command)
        except Exception as e:
            logger.error("Failed to send %r: %s", command, e)
            self.on_error(e)
            return False
        logger.debug("Sent %r", command)
        return True
