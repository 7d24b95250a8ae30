import logging
from typing import Dict, Mapping

from aq_monitor_core.domain.ports import HistoryReader, UiSurface

from aq_monitor_client.renderer import (
    ConnectionBadge,
    DashboardUpdate,
    StatusView,
    render_sparkline_text,
)

logger = logging.getLogger(__name__)

UNITS = {
    "pm1": "µg/m³",
    "pm4": "µg/m³",
    "pm10": "µg/m³",
    "temperature": "°C",
    "humidity": "%",
    "voc": "",
    "nox": "",
}


class ConsoleSurface(UiSurface):
    """Terminal surface that writes each dashboard change to the log."""

    def __init__(self, history: HistoryReader):
        self.history = history
        self.status_text: Dict[str, str] = {}
        self.connected = False

    def show_connection(self, badge: ConnectionBadge) -> None:
        self.connected = badge.connected
        logger.info("[%s]", badge.text)

    def show_update(self, update: DashboardUpdate) -> None:
        values = "  ".join(
            f"{metric}={text}{UNITS.get(metric, '')}" for metric, text in update.values.items()
        )
        label = update.category.label if update.category else "-"
        logger.info(
            "PM2.5 %s µg/m³ (%s, band %s)  %s  | last update %s",
            update.gauge.text,
            label,
            update.gauge.band.category.value,
            values,
            update.last_update,
        )
        self.show_sparklines(update.sparklines)

    def show_sparklines(self, sparklines: Mapping[str, object]) -> None:
        for metric in sparklines:
            line = render_sparkline_text(self.history.series(metric))
            if line:
                logger.debug("%-12s %s", metric, line)

    def show_status(self, status: StatusView) -> None:
        # Only fields present in the snapshot replace what is shown.
        for name in ("uptime", "clients", "memory"):
            value = getattr(status, name)
            if value is not None:
                self.status_text[name] = value
        logger.info(
            "Uptime %s  clients %s  memory %s",
            self.status_text.get("uptime", "--"),
            self.status_text.get("clients", "--"),
            self.status_text.get("memory", "--"),
        )

    def notify(self, message: str) -> None:
        logger.warning("%s", message)
