"""Timers that feed events into the drain wait loop."""

from __future__ import annotations

import queue
import threading
from enum import Enum

JOIN_TIMEOUT = 1.0  # seconds


class TimerEvent(Enum):
    POLL = "poll"
    TIMEOUT = "timeout"


class Ticker:
    """Puts ``event`` on a queue every ``interval`` seconds until stopped.

    At most one event is queued at a time: ticks that arrive before the consumer
    calls ``acknowledge`` are dropped. With ``repeat=False`` it fires once, which
    is how the wait timeout is built.
    """

    def __init__(
        self, interval: float, events: queue.Queue[TimerEvent], event: TimerEvent, repeat: bool = True
    ) -> None:
        self.interval = interval
        self.events = events
        self.event = event
        self.repeat = repeat
        self.fired = 0
        self._stop_event = threading.Event()
        self._pending = threading.Event()
        self._triggered = threading.Event()
        self._thread = threading.Thread(target=self._run, name=f"drain-{event.value}", daemon=True)

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self._triggered.set()
            if self._pending.is_set():
                continue
            self.fired += 1
            self._pending.set()
            self.events.put(self.event)
            if not self.repeat:
                return

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(JOIN_TIMEOUT)

    def acknowledge(self) -> None:
        """Mark the queued event as handled so the next tick can be queued."""
        self._pending.clear()

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    @property
    def triggered(self) -> bool:
        """Whether the interval has elapsed at least once."""
        return self._triggered.is_set()


class DisabledTimer:
    """A timer that never fires. Used for an unbounded wait."""

    fired = 0
    running = False
    triggered = False

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def acknowledge(self) -> None:
        pass


def timeout_timer(timeout: float, events: queue.Queue[TimerEvent]) -> Ticker | DisabledTimer:
    """One-shot timeout timer. A timeout of 0 never fires."""
    if timeout == 0:
        return DisabledTimer()
    return Ticker(timeout, events, TimerEvent.TIMEOUT, repeat=False)
