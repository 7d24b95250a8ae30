import logging
from collections import deque
from typing import Dict, Iterable, Tuple

from aq_monitor_core.domain.models import HISTORY_SIZE, METRICS, PartialReading, Reading

logger = logging.getLogger(__name__)


def is_sample(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class HistoryStore:
    """
    Rolling per-metric history, one bounded FIFO per tracked metric.

    Live updates append to every buffer; a snapshot replaces all buffers.
    Snapshot entries may be partial, so buffer lengths can differ after a load.
    """

    def __init__(self, capacity: int = HISTORY_SIZE):
        self.capacity = capacity
        self._buffers: Dict[str, deque] = {}
        self._reset()
        logger.debug("Initialized HistoryStore with capacity=%s", capacity)

    def _reset(self) -> None:
        self._buffers = {metric: deque(maxlen=self.capacity) for metric in METRICS}

    def push(self, metric: str, value: float) -> None:
        # deque(maxlen=...) drops the oldest entry once full
        self._buffers[metric].append(value)

    def push_reading(self, reading: Reading) -> None:
        for metric, value in reading.metrics().items():
            self.push(metric, value)

    def load_snapshot(self, readings: Iterable[PartialReading]) -> None:
        self._reset()
        count = 0
        for reading in readings:
            count += 1
            for metric in METRICS:
                value = reading.get(metric)
                if is_sample(value):
                    self.push(metric, value)
                elif value is not None:
                    logger.warning("Skipping non-numeric %s in snapshot: %.50r", metric, value)
        logger.info("Loaded history snapshot: %s readings, lengths=%s", count, self.lengths())

    def series(self, metric: str) -> Tuple[float, ...]:
        return tuple(self._buffers[metric])

    def lengths(self) -> Dict[str, int]:
        return {metric: len(buf) for metric, buf in self._buffers.items()}
