import asyncio
import logging
import threading
from typing import Callable, Optional

import websocket

from aq_monitor_core.domain.ports import Transport, TransportListener

logger = logging.getLogger(__name__)


def build_ws_url(host: str, secure: bool = False, path: str = "/ws") -> str:
    scheme = "wss" if secure else "ws"
    return f"{scheme}://{host}{path}"


class WebSocketTransport(Transport):
    """
    ``websocket-client`` transport whose events are delivered on an asyncio loop.

    The socket runs on a daemon thread; each callback is handed to the loop
    with ``call_soon_threadsafe`` so listeners only ever run on the loop
    thread, in delivery order. Events from a socket that has since been
    replaced or closed are dropped.
    """

    def __init__(
        self,
        url: str,
        loop: asyncio.AbstractEventLoop,
        *,
        ping_interval: float = 0,
        app_factory: Callable[..., websocket.WebSocketApp] = websocket.WebSocketApp,
    ):
        self.url = url
        self._loop = loop
        self._ping_interval = ping_interval
        self._app_factory = app_factory
        self._app: Optional[websocket.WebSocketApp] = None
        self._thread: Optional[threading.Thread] = None

    def open(self, listener: TransportListener) -> None:
        # At most one socket at a time; a reopen tears down the previous one.
        self.close()
        logger.info("Connecting to %s", self.url)
        app = self._app_factory(
            self.url,
            on_open=lambda ws: self._dispatch(ws, listener.on_open),
            on_message=lambda ws, msg: self._dispatch(ws, listener.on_message, msg),
            on_error=lambda ws, err: self._dispatch(ws, listener.on_error, err),
            on_close=lambda ws, code, reason: self._dispatch(ws, listener.on_close),
        )
        self._app = app
        self._thread = threading.Thread(
            target=app.run_forever,
            kwargs={"ping_interval": self._ping_interval, "reconnect": 0},
            name="ws-transport",
            daemon=True,
        )
        self._thread.start()

    def _dispatch(self, app, callback: Callable, *args) -> None:
        try:
            self._loop.call_soon_threadsafe(self._deliver, app, callback, args)
        except RuntimeError:
            logger.debug("Event loop closed, dropping transport event")

    def _deliver(self, app, callback: Callable, args: tuple) -> None:
        if app is not self._app:
            logger.debug("Dropping event from stale socket")
            return
        callback(*args)

    def send(self, text: str) -> None:
        if self._app is None:
            raise websocket.WebSocketConnectionClosedException("transport is not open")
        self._app.send(text)

    def close(self) -> None:
        app, self._app = self._app, None
        if app is not None:
            logger.info("Closing WebSocket")
            app.close()
