import asyncio
from unittest.mock import Mock

import pytest
import websocket

from aq_monitor_client.transport import WebSocketTransport, build_ws_url


@pytest.fixture
def loop():
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


def drain(loop) -> None:
    loop.run_until_complete(asyncio.sleep(0.01))


def make_transport(loop):
    app_factory = Mock()
    transport = WebSocketTransport("ws://sensor.local/ws", loop, app_factory=app_factory)
    return transport, app_factory


def callbacks(app_factory):
    return app_factory.call_args.kwargs


def test_build_ws_url():
    assert build_ws_url("sensor.local") == "ws://sensor.local/ws"
    assert build_ws_url("10.0.0.5:8080", secure=True) == "wss://10.0.0.5:8080/ws"


def test_open_runs_socket_on_thread(loop):
    transport, app_factory = make_transport(loop)
    transport.open(Mock())

    assert app_factory.call_args.args == ("ws://sensor.local/ws",)
    transport._thread.join(timeout=1.0)
    app_factory.return_value.run_forever.assert_called_once_with(ping_interval=0, reconnect=0)


def test_events_are_delivered_on_loop(loop):
    transport, app_factory = make_transport(loop)
    listener = Mock()
    transport.open(listener)
    app = app_factory.return_value
    cb = callbacks(app_factory)

    cb["on_open"](app)
    cb["on_message"](app, '{"type": "status"}')
    listener.on_open.assert_not_called()

    drain(loop)
    listener.on_open.assert_called_once_with()
    listener.on_message.assert_called_once_with('{"type": "status"}')


def test_error_and_close_are_forwarded(loop):
    transport, app_factory = make_transport(loop)
    listener = Mock()
    transport.open(listener)
    app = app_factory.return_value
    cb = callbacks(app_factory)
    err = ConnectionRefusedError("refused")

    cb["on_error"](app, err)
    cb["on_close"](app, 1006, "abnormal")
    drain(loop)

    listener.on_error.assert_called_once_with(err)
    listener.on_close.assert_called_once_with()


def test_events_from_stale_socket_are_dropped(loop):
    transport, app_factory = make_transport(loop)
    old_listener, new_listener = Mock(), Mock()

    app_factory.return_value = Mock(name="old-app")
    transport.open(old_listener)
    old_app, old_cb = app_factory.return_value, callbacks(app_factory)

    app_factory.return_value = Mock(name="new-app")
    transport.open(new_listener)

    old_cb["on_close"](old_app, None, None)
    drain(loop)
    old_listener.on_close.assert_not_called()


def test_send_and_close(loop):
    transport, app_factory = make_transport(loop)
    transport.open(Mock())
    app = app_factory.return_value

    transport.send("getStatus")
    app.send.assert_called_once_with("getStatus")

    transport.close()
    app.close.assert_called_once()
    with pytest.raises(websocket.WebSocketConnectionClosedException):
        transport.send("getStatus")


def test_events_after_close_are_dropped(loop):
    transport, app_factory = make_transport(loop)
    listener = Mock()
    transport.open(listener)
    app = app_factory.return_value
    cb = callbacks(app_factory)

    transport.close()
    cb["on_close"](app, 1000, "bye")
    drain(loop)
    listener.on_close.assert_not_called()


def test_reopen_closes_previous_socket(loop):
    transport, app_factory = make_transport(loop)

    app_factory.return_value = Mock(name="old-app")
    transport.open(Mock())
    old_app = app_factory.return_value

    app_factory.return_value = Mock(name="new-app")
    transport.open(Mock())

    old_app.close.assert_called_once()
    app_factory.return_value.close.assert_not_called()

    transport.send("getStatus")
    app_factory.return_value.send.assert_called_once_with("getStatus")
    old_app.send.assert_not_called()
