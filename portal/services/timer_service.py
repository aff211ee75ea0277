"""Once-per-interval callbacks on daemon threads."""
import logging
import threading
from typing import Callable, Protocol

from portal.config import TIMER_TICK_SECONDS

logger = logging.getLogger(__name__)

# Return False from the callback to stop ticking.
TickCallback = Callable[[], bool | None]


class Cancellable(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[TickCallback, str], Cancellable]


class Ticker:
    """Calls ``callback`` every ``interval`` seconds until cancelled."""

    def __init__(
        self,
        callback: TickCallback,
        interval: float = TIMER_TICK_SECONDS,
        name: str = "ticker",
    ) -> None:
        self._callback = callback
        self._interval = interval
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._worker, name=name, daemon=True)

    def start(self) -> "Ticker":
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def _worker(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                keep_going = self._callback()
            except Exception:
                logger.exception(f"Ticker {self._thread.name} callback failed; stopping")
                break
            if keep_going is False:
                break
        self._stopped.set()


def start_ticker(callback: TickCallback, name: str = "ticker") -> Ticker:
    """Default scheduler: one tick per TIMER_TICK_SECONDS."""
    return Ticker(callback, name=name).start()
