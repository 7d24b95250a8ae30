"""
Canonical entry point for aq_monitor_client package.

Usage:
    poetry run aq-monitor --environment development --host 192.168.1.50
    poetry run aq-monitor --host 192.168.1.50 --reset
"""

import argparse
import asyncio
import logging
import os
import signal
from typing import Tuple

from aq_monitor_core.config.environments import Settings, get_settings

from aq_monitor_client.connection import ConnectionManager
from aq_monitor_client.console_surface import ConsoleSurface
from aq_monitor_client.dashboard import Dashboard
from aq_monitor_client.history_store import HistoryStore
from aq_monitor_client.renderer import map_connection
from aq_monitor_client.reset_client import ResetResult, reset_device, reset_notice
from aq_monitor_client.status_poller import StatusPoller
from aq_monitor_client.transport import WebSocketTransport, build_ws_url


def setup_logging(config) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    return None


def bootstrap(
    config: Settings, loop: asyncio.AbstractEventLoop
) -> Tuple[ConnectionManager, StatusPoller, Dashboard]:
    history = HistoryStore()
    dashboard = Dashboard(
        ConsoleSurface(history),
        history,
        sparkline_size=(config.SPARKLINE_WIDTH, config.SPARKLINE_HEIGHT),
    )
    transport = WebSocketTransport(
        build_ws_url(config.DEVICE_HOST, config.DEVICE_SECURE, config.WS_PATH), loop
    )
    connection = ConnectionManager(
        transport,
        loop,
        on_payload=dashboard.handle_payload,
        on_connection_change=dashboard.handle_connection_change,
        retry_delay=config.RECONNECT_DELAY_SEC,
    )
    poller = StatusPoller(connection, interval_s=config.STATUS_POLL_INTERVAL_SEC)
    return connection, poller, dashboard


async def run_monitor(config: Settings) -> None:
    log = logging.getLogger(__name__)
    loop = asyncio.get_running_loop()
    connection, poller, _ = bootstrap(config, loop)

    stop = asyncio.Event()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers.
            pass

    connection.start()
    poller.start()
    log.info("Monitor running, press Ctrl+C to stop")
    try:
        await stop.wait()
    finally:
        log.info("Received shutdown signal, stopping monitor...")
        poller.stop()
        connection.stop()


def run_reset(config: Settings) -> int:
    scheme = "https" if config.DEVICE_SECURE else "http"
    result = reset_device(f"{scheme}://{config.DEVICE_HOST}", timeout=config.HTTP_TIMEOUT_SEC)
    surface = ConsoleSurface(HistoryStore())
    surface.notify(reset_notice(result))
    if result is ResetResult.OK:
        surface.show_connection(map_connection(False))
        return 0
    return 1


def main() -> None:
    """Main entry point for aq_monitor_client."""
    parser = argparse.ArgumentParser(description="Air Quality Monitor")
    parser.add_argument(
        "--environment",
        choices=["production", "development", "testing"],
        default="development",
        help="Environment to run in",
    )
    parser.add_argument("--host", help="Device host[:port] (overrides config)")
    parser.add_argument("--secure", action="store_true", help="Use wss:// and https://")
    parser.add_argument("--reset", action="store_true", help="Restart the device and exit")

    args = parser.parse_args()

    os.environ["AQ_MONITOR_ENV"] = args.environment

    config = get_settings()
    if args.host:
        config.DEVICE_HOST = args.host
    if args.secure:
        config.DEVICE_SECURE = True

    setup_logging(config)
    log = logging.getLogger(__name__)

    log.info("Starting air quality monitor...")
    log.info(f"Environment: {args.environment}")
    log.info(f"Device: {config.DEVICE_HOST}")

    if args.reset:
        raise SystemExit(run_reset(config))

    try:
        asyncio.run(run_monitor(config))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
