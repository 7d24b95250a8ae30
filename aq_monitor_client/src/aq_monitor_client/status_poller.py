import asyncio
import logging
from typing import Optional

from aq_monitor_client.connection import STATUS_COMMAND, ConnectionManager

logger = logging.getLogger(__name__)


class StatusPoller:
    """Requests a status snapshot every ``interval_s`` while the connection is open."""

    def __init__(self, connection: ConnectionManager, interval_s: float = 10.0):
        self.connection = connection
        self.interval_s = interval_s
        self._task: Optional[asyncio.Task] = None

    def tick(self) -> bool:
        # Closed ticks are skipped outright; nothing is queued for later.
        if not self.connection.is_open:
            logger.debug("Skipping status poll while %s", self.connection.state.value)
            return False
        return self.connection.send(STATUS_COMMAND)

    async def run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_s)
            self.tick()

    def start(self) -> asyncio.Task:
        self._task = asyncio.get_running_loop().create_task(self.run(), name="status-poller")
        return self._task

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
