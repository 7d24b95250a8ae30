import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from aq_monitor_core.domain.models import Reading, SystemStatus
from aq_monitor_core.domain.ports import UiSurface

from aq_monitor_client import renderer
from aq_monitor_client.history_store import HistoryStore
from aq_monitor_client.message_router import MessageKind, route

logger = logging.getLogger(__name__)

# pm25 is shown on the gauge; these get a value panel and a sparkline.
PANEL_METRICS = ("pm1", "pm4", "pm10", "temperature", "humidity", "voc", "nox")


class Dashboard:
    """
    Applies routed device messages to the history and the UI surface.

    Values are computed by the pure functions in ``renderer``; this class only
    sequences them and hands the results to ``surface``.
    """

    def __init__(
        self,
        surface: UiSurface,
        history: Optional[HistoryStore] = None,
        *,
        sparkline_size: tuple = (120, 40),
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.surface = surface
        self.history = history if history is not None else HistoryStore()
        self.sparkline_width, self.sparkline_height = sparkline_size
        self._clock = clock

    def handle_payload(self, payload: Any) -> MessageKind:
        message = route(payload)
        if message.kind is MessageKind.CURRENT:
            self.apply_current(message.payload)
        elif message.kind is MessageKind.HISTORY:
            self.apply_history(message.payload)
        elif message.kind is MessageKind.STATUS:
            self.apply_status(message.payload)
        return message.kind

    def handle_connection_change(self, connected: bool) -> None:
        self.surface.show_connection(renderer.map_connection(connected))

    def apply_current(self, payload: dict) -> Optional[renderer.DashboardUpdate]:
        try:
            reading = Reading.from_payload(payload)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Dropping malformed current reading: %r", e)
            return None

        self.history.push_reading(reading)
        update = renderer.DashboardUpdate(
            values={m: renderer.format_metric(m, getattr(reading, m)) for m in PANEL_METRICS},
            gauge=renderer.map_gauge(reading.pm25),
            category=renderer.map_category(reading.quality),
            sparklines=self.sparklines(),
            last_update=self._clock().strftime("%H:%M:%S"),
        )
        self.surface.show_update(update)
        return update

    def apply_history(self, entries: Any) -> None:
        if not isinstance(entries, list):
            logger.warning("Dropping history snapshot that is not a list: %s", type(entries).__name__)
            return
        self.history.load_snapshot(e for e in entries if isinstance(e, dict))
        self.surface.show_sparklines(self.sparklines())

    def apply_status(self, payload: dict) -> renderer.StatusView:
        view = renderer.map_status(SystemStatus.from_payload(payload))
        self.surface.show_status(view)
        return view

    def sparklines(self) -> Dict[str, renderer.SparklineView]:
        return {
            metric: renderer.map_sparkline(
                self.history.series(metric), self.sparkline_width, self.sparkline_height
            )
            for metric in PANEL_METRICS
        }
