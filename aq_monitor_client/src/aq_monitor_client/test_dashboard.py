import json
from datetime import datetime

import pytest

from aq_monitor_core.domain.models import AirQualityCategory

from aq_monitor_client.connection import ConnectionManager
from aq_monitor_client.dashboard import PANEL_METRICS, Dashboard
from aq_monitor_client.history_store import HistoryStore
from aq_monitor_client.message_router import MessageKind
from aq_monitor_client.utils.factories import (
    CurrentFrameFactory,
    HistoryEntryFactory,
    StatusFrameFactory,
)
from aq_monitor_client.utils.mocks import FakeScheduler, FakeTransport, RecordingSurface


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def dashboard(surface) -> Dashboard:
    return Dashboard(
        surface,
        HistoryStore(),
        sparkline_size=(60, 20),
        clock=lambda: datetime(2024, 5, 1, 14, 3, 9),
    )


def test_current_frame_updates_surface(dashboard, surface):
    kind = dashboard.handle_payload(CurrentFrameFactory())
    assert kind is MessageKind.CURRENT

    update = surface.updates[-1]
    assert update.values["temperature"] == "22.5"
    assert update.values["voc"] == "102"
    assert update.values["nox"] == "1"
    assert "pm25" not in update.values
    assert update.gauge.target == 8.7
    assert update.gauge.text == "8.7"
    assert update.category.label == "Good"
    assert update.last_update == "14:03:09"
    assert set(update.sparklines) == set(PANEL_METRICS)


def test_current_frame_pushes_history(dashboard):
    for pm25 in (1.0, 2.0, 3.0):
        dashboard.handle_payload(CurrentFrameFactory(pm25=pm25))
    assert dashboard.history.series("pm25") == (1.0, 2.0, 3.0)
    assert all(length == 3 for length in dashboard.history.lengths().values())


def test_first_reading_has_empty_sparklines(dashboard, surface):
    dashboard.handle_payload(CurrentFrameFactory())
    assert all(view.is_empty for view in surface.updates[-1].sparklines.values())
    dashboard.handle_payload(CurrentFrameFactory())
    assert not any(view.is_empty for view in surface.updates[-1].sparklines.values())


def test_unknown_quality_is_shown_raw(dashboard, surface):
    dashboard.handle_payload(CurrentFrameFactory(quality="HAZARDOUS"))
    assert surface.updates[-1].category.label == "HAZARDOUS"
    assert surface.updates[-1].category.style == ""


def test_gauge_band_follows_pm25(dashboard, surface):
    dashboard.handle_payload(CurrentFrameFactory(pm25=42.0))
    assert surface.updates[-1].gauge.band.category is AirQualityCategory.UNHEALTHY_SENSITIVE


def test_malformed_current_frame_is_dropped(dashboard, surface):
    frame = CurrentFrameFactory()
    del frame["nox"]
    assert dashboard.apply_current(frame) is None
    assert dashboard.apply_current(CurrentFrameFactory(voc="n/a")) is None
    assert surface.updates == []
    assert sum(dashboard.history.lengths().values()) == 0


def test_history_frame_loads_snapshot(dashboard, surface):
    dashboard.handle_payload(CurrentFrameFactory())
    kind = dashboard.handle_payload({"history": HistoryEntryFactory.build_batch(4)})

    assert kind is MessageKind.HISTORY
    assert dashboard.history.lengths()["temperature"] == 4
    assert dashboard.history.lengths()["pm1"] == 0
    sparklines = surface.sparklines[-1]
    assert not sparklines["temperature"].is_empty
    assert sparklines["pm1"].is_empty


def test_history_that_is_not_a_list_is_dropped(dashboard, surface):
    dashboard.handle_payload(CurrentFrameFactory())
    dashboard.handle_payload({"history": None})
    assert surface.sparklines == []
    assert dashboard.history.lengths()["pm1"] == 1


def test_status_frame(dashboard, surface):
    kind = dashboard.handle_payload(StatusFrameFactory())
    assert kind is MessageKind.STATUS
    status = surface.statuses[-1]
    assert status.uptime == "1h 30m"
    assert status.clients == "2"
    assert status.memory == "50%"


def test_partial_status_frame(dashboard, surface):
    dashboard.handle_payload({"type": "status", "clients": 1})
    status = surface.statuses[-1]
    assert status.clients == "1"
    assert status.uptime is None
    assert status.memory is None


def test_unknown_frame_touches_nothing(dashboard, surface):
    assert dashboard.handle_payload({"type": "ota"}) is MessageKind.UNKNOWN
    assert surface.updates == surface.statuses == surface.sparklines == []


def test_connection_change_updates_badge(dashboard, surface):
    dashboard.handle_connection_change(True)
    dashboard.handle_connection_change(False)
    assert [b.text for b in surface.badges] == ["Connected", "Disconnected"]


def test_bad_snapshot_value_does_not_block_live_updates(dashboard, surface):
    connection = ConnectionManager(
        FakeTransport(),
        FakeScheduler(),
        on_payload=dashboard.handle_payload,
        on_connection_change=dashboard.handle_connection_change,
    )
    connection.start()
    connection.on_open()
    connection.on_message(json.dumps({"history": [{"temperature": 20.0}, {"temperature": "n/a"}]}))
    for _ in range(5):
        connection.on_message(json.dumps(CurrentFrameFactory()))

    assert len(surface.updates) == 5
    assert dashboard.history.series("temperature") == (20.0,) + (22.46,) * 5
    assert not surface.updates[-1].sparklines["temperature"].is_empty
