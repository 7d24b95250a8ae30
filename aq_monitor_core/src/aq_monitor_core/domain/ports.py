from typing import Callable, Mapping, Protocol, Sequence


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback later; ``asyncio`` loops qualify."""

    def call_later(self, delay: float, callback: Callable[..., object], *args) -> TimerHandle: ...


class TransportListener(Protocol):
    def on_open(self) -> None: ...

    def on_message(self, text: str) -> None: ...

    def on_error(self, exc: BaseException) -> None: ...

    def on_close(self) -> None: ...


class Transport(Protocol):
    def open(self, listener: TransportListener) -> None: ...

    def send(self, text: str) -> None: ...

    def close(self) -> None: ...


class UiSurface(Protocol):
    def show_connection(self, badge) -> None: ...

    def show_update(self, update) -> None: ...

    def show_sparklines(self, sparklines: Mapping[str, object]) -> None: ...

    def show_status(self, status) -> None: ...

    def notify(self, message: str) -> None: ...


class HistoryReader(Protocol):
    def series(self, metric: str) -> Sequence[float]: ...
