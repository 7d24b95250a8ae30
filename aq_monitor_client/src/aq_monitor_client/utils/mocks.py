from typing import Callable, List


class FakeTimer:
    """Timer handle recorded by ``FakeScheduler``."""

    def __init__(self, delay: float, callback: Callable, args: tuple):
        self.delay = delay
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


class FakeScheduler:
    """Scheduler that only runs callbacks when a test fires them."""

    def __init__(self):
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable, *args) -> FakeTimer:
        timer = FakeTimer(delay, callback, args)
        self.timers.append(timer)
        return timer

    def pending(self) -> List[FakeTimer]:
        return [t for t in self.timers if t.pending]

    def fire_next(self) -> None:
        timer = self.pending()[0]
        timer.fired = True
        timer.callback(*timer.args)


class FakeTransport:
    """In-memory transport; tests drive the listener callbacks directly."""

    def __init__(self, *, fail_open: bool = False, fail_send: bool = False):
        self.fail_open = fail_open
        self.fail_send = fail_send
        self.listener = None
        self.open_calls = 0
        self.sent: List[str] = []
        self.closed = False

    def open(self, listener) -> None:
        self.open_calls += 1
        self.listener = listener
        if self.fail_open:
            raise ConnectionRefusedError("device unreachable")

    def send(self, text: str) -> None:
        if self.fail_send:
            raise BrokenPipeError("socket closed")
        self.sent.append(text)

    def close(self) -> None:
        self.closed = True


class RecordingSurface:
    """UI surface that keeps everything it was asked to show."""

    def __init__(self):
        self.badges: list = []
        self.updates: list = []
        self.sparklines: list = []
        self.statuses: list = []
        self.notices: List[str] = []

    def show_connection(self, badge) -> None:
        self.badges.append(badge)

    def show_update(self, update) -> None:
        self.updates.append(update)

    def show_sparklines(self, sparklines) -> None:
        self.sparklines.append(sparklines)

    def show_status(self, status) -> None:
        self.statuses.append(status)

    def notify(self, message: str) -> None:
        self.notices.append(message)
