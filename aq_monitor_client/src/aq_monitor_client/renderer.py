"""
Pure value-to-visual mappings for the dashboard.

Nothing in this module touches a UI; every function returns a small view
object that a surface adapter applies.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from aq_monitor_core.domain.models import AirQualityCategory, SystemStatus, parse_category

Point = Tuple[float, float]

GAUGE_MIN = 0.0
GAUGE_MAX = 100.0
INTEGER_METRICS = ("voc", "nox")
SPARKLINE_INSET = 2
SPARKLINE_BLOCKS = "▁▂▃▄▅▆▇█"


@dataclass(frozen=True)
class GaugeBand:
    category: AirQualityCategory
    lower: float
    upper: float
    color: str


GAUGE_BANDS: Tuple[GaugeBand, ...] = (
    GaugeBand(AirQualityCategory.GOOD, 0, 15, "#48bb78"),
    GaugeBand(AirQualityCategory.MODERATE, 15, 35, "#ecc94b"),
    GaugeBand(AirQualityCategory.UNHEALTHY_SENSITIVE, 35, 55, "#ed8936"),
    GaugeBand(AirQualityCategory.UNHEALTHY, 55, GAUGE_MAX, "#e53e3e"),
)

CATEGORY_TABLE = {
    AirQualityCategory.GOOD: ("Good", "good"),
    AirQualityCategory.MODERATE: ("Moderate", "moderate"),
    AirQualityCategory.UNHEALTHY_SENSITIVE: (
        "Unhealthy for Sensitive Groups",
        "unhealthy-sensitive",
    ),
    AirQualityCategory.UNHEALTHY: ("Unhealthy", "unhealthy"),
}
NEUTRAL_STYLE = ""


@dataclass(frozen=True)
class GaugeView:
    target: float
    text: str
    band: GaugeBand


@dataclass(frozen=True)
class SparklineView:
    points: Tuple[Point, ...] = ()
    segments: Tuple[Tuple[Point, Point], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.segments


@dataclass(frozen=True)
class CategoryView:
    label: str
    style: str


@dataclass(frozen=True)
class StatusView:
    """Formatted status text; ``None`` means leave that display untouched."""

    uptime: Optional[str] = None
    clients: Optional[str] = None
    memory: Optional[str] = None


@dataclass(frozen=True)
class ConnectionBadge:
    connected: bool
    text: str
    style: str


@dataclass(frozen=True)
class DashboardUpdate:
    values: dict
    gauge: GaugeView
    category: Optional[CategoryView]
    sparklines: dict = field(default_factory=dict)
    last_update: str = ""


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_metric(metric: str, value: float) -> str:
    if metric in INTEGER_METRICS:
        return str(round_half_up(value))
    return f"{value:.1f}"


def gauge_band(value: float) -> GaugeBand:
    """Bands are half-open: a value on a boundary belongs to the band above."""
    for band in GAUGE_BANDS:
        if value < band.upper:
            return band
    # At or above scale max; the gauge widget clamps the needle itself.
    return GAUGE_BANDS[-1]


def map_gauge(pm25: float) -> GaugeView:
    return GaugeView(target=pm25, text=f"{pm25:.1f}", band=gauge_band(pm25))


def map_sparkline(values: Sequence[float], width: float, height: float) -> SparklineView:
    """Map a series onto a ``width`` x ``height`` canvas with a 2px vertical inset."""
    n = len(values)
    if n < 2:
        return SparklineView()

    lo = min(values)
    hi = max(values)
    span = (hi - lo) or 1

    points = tuple(
        (
            i / (n - 1) * width,
            height - (value - lo) / span * (height - 2 * SPARKLINE_INSET) - SPARKLINE_INSET,
        )
        for i, value in enumerate(values)
    )
    segments = tuple(zip(points, points[1:]))
    return SparklineView(points=points, segments=segments)


def render_sparkline_text(values: Sequence[float], blocks: str = SPARKLINE_BLOCKS) -> str:
    """Render a series as Unicode block characters for terminal output."""
    if not values:
        return ""
    lo = min(values)
    hi = max(values)
    span = (hi - lo) or 1
    top = len(blocks) - 1
    return "".join(blocks[round_half_up((v - lo) / span * top)] for v in values)


def map_category(value) -> CategoryView:
    category = parse_category(value) if isinstance(value, str) else value
    if isinstance(category, AirQualityCategory):
        label, style = CATEGORY_TABLE[category]
        return CategoryView(label=label, style=style)
    return CategoryView(label="" if value is None else str(value), style=NEUTRAL_STYLE)


def format_uptime(seconds: float) -> str:
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    return f"{hours}h {minutes}m"


def memory_percent(free_heap: float, heap_size: float) -> int:
    return round_half_up((heap_size - free_heap) / heap_size * 100)


def map_status(status: SystemStatus) -> StatusView:
    uptime = format_uptime(status.uptime) if status.uptime is not None else None
    clients = str(status.clients) if status.clients is not None else None
    memory = None
    if status.free_heap is not None and status.heap_size:
        memory = f"{memory_percent(status.free_heap, status.heap_size)}%"
    return StatusView(uptime=uptime, clients=clients, memory=memory)


def map_connection(connected: bool) -> ConnectionBadge:
    if connected:
        return ConnectionBadge(True, "Connected", "connected")
    return ConnectionBadge(False, "Disconnected", "disconnected")
