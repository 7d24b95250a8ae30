from dataclasses import dataclass, fields
from enum import Enum
from typing import Mapping, Optional, Union

HISTORY_SIZE = 60

METRICS = ("pm1", "pm25", "pm4", "pm10", "temperature", "humidity", "voc", "nox")

# One entry of a history snapshot; any subset of METRICS may be present.
PartialReading = Mapping[str, float]


class AirQualityCategory(str, Enum):
    GOOD = "GOOD"
    MODERATE = "MODERATE"
    UNHEALTHY_SENSITIVE = "UNHEALTHY_SENSITIVE"
    UNHEALTHY = "UNHEALTHY"


class ConnectionState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED_BACKOFF = "closed_backoff"


@dataclass
class Reading:
    pm1: float
    pm25: float
    pm4: float
    pm10: float
    temperature: float
    humidity: float
    voc: float
    nox: float
    # Unrecognized categories are kept as the raw string.
    quality: Union[AirQualityCategory, str, None] = None

    @classmethod
    def from_payload(cls, payload: Mapping) -> "Reading":
        """Build a reading from a decoded ``current`` frame.

        Raises ``KeyError`` when a metric is missing and ``ValueError`` /
        ``TypeError`` when a metric is not numeric.
        """
        values = {metric: float(payload[metric]) for metric in METRICS}
        return cls(**values, quality=parse_category(payload.get("quality")))

    def metrics(self) -> dict:
        return {metric: getattr(self, metric) for metric in METRICS}


@dataclass
class SystemStatus:
    uptime: Optional[int] = None
    clients: Optional[int] = None
    free_heap: Optional[int] = None
    heap_size: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Mapping) -> "SystemStatus":
        return cls(
            uptime=payload.get("uptime"),
            clients=payload.get("clients"),
            free_heap=payload.get("freeHeap"),
            heap_size=payload.get("heapSize"),
        )

    def present_fields(self) -> list:
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]


def parse_category(value) -> Union[AirQualityCategory, str, None]:
    if value is None:
        return None
    try:
        return AirQualityCategory(value)
    except ValueError:
        return value
