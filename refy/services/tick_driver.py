"""
Tick drivers that feed the match clock once per second.

The clock never reads wall-clock time itself. A driver calls back once per
elapsed second while it is running, so tests can inject synthetic ticks with
``ManualTickDriver`` and the web app can use the threaded
``IntervalTickDriver``.
"""
import logging
import threading
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TickDriver(Protocol):
    """Interface for anything that can deliver one tick per second."""

    @property
    def running(self) -> bool:
        ...

    def start(self, callback: TickCallback) -> None:
        """Begin delivering ticks to ``callback``."""
        ...

    def stop(self) -> None:
        """Stop delivering ticks. No tick may fire after this returns."""
        ...


class ManualTickDriver:
    """Driver whose ticks are produced on demand by ``advance``."""

    def __init__(self):
        self._callback: Optional[TickCallback] = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def advance(self, seconds: int = 1) -> int:
        """
        Deliver up to ``seconds`` ticks.

        Delivery stops early if the callback stops the driver (for example
        when the clock reaches zero or is paused).

        Returns:
            Number of ticks actually delivered
        """
        delivered = 0
        for _ in range(seconds):
            if self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered


class IntervalTickDriver:
    """
    Background thread delivering one tick per ``interval`` seconds.

    Every tick is delivered while holding ``lock``. Callers that mutate the
    clock hold the same lock, and ``stop`` flips the run flag under it, so once
    ``stop`` returns the worker cannot deliver another tick.
    ``stop`` also joins the old worker for at most ``join_timeout`` seconds,
    unless it is called from that worker.
    """

    def __init__(
        self,
        lock: Optional[threading.RLock] = None,
        interval: float = 1.0,
        join_timeout: float = 0.2,
    ):
        self.lock = lock or threading.RLock()
        self.interval = interval
        self.join_timeout = join_timeout
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    @property
    def running(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    def start(self, callback: TickCallback) -> None:
        with self.lock:
            if self.running:
                return
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._run_loop,
                args=(callback, stop_event),
                name="refy-tick",
                daemon=True,
            )
            self._thread.start()
            logger.debug("Tick driver started")

    def stop(self) -> None:
        with self.lock:
            if self._stop_event is not None and not self._stop_event.is_set():
                self._stop_event.set()
                logger.debug("Tick driver stopped")
            thread = self._thread
            self._stop_event = None
            self._thread = None
        # The worker calls stop itself when the clock expires
        if thread is not None and thread is not threading.current_thread():
            thread.join(self.join_timeout)

    def _run_loop(self, callback: TickCallback, stop_event: threading.Event) -> None:
        # wait() returns True as soon as stop is requested
        while not stop_event.wait(self.interval):
            with self.lock:
                if stop_event.is_set():
                    break
                try:
                    callback()
                except Exception:
                    logger.error("Tick callback failed; stopping driver", exc_info=True)
                    stop_event.set()
                    break
