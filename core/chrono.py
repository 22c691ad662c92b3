# core/chrono.py
from typing import Optional, Tuple

from PySide6.QtCore import QObject, QElapsedTimer, QTimer, Qt, Signal

from app.events import TimerTick, TimerTimeout


class TestTimer(QObject):
    """
    Countdown driven by the Qt event loop.

    Every start() or reset() opens a new generation; ticks and the timeout
    carry the generation that produced them so receivers can drop events
    from a countdown that has since been cancelled or replaced.
    """
    ticked = Signal(object)     # TimerTick
    timedOut = Signal(object)   # TimerTimeout

    __test__ = False

    def __init__(self, duration_ms: int, tick_ms: int = 1, parent=None):
        super().__init__(parent)
        self._duration = int(duration_ms)
        self._remaining = self._duration
        self._running = False
        self._generation = 0
        self._t = QElapsedTimer()

        self._tick = QTimer(self)
        self._tick.setTimerType(Qt.TimerType.PreciseTimer)
        self._tick.setInterval(max(1, int(tick_ms)))
        self._tick.timeout.connect(self._on_tick)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def running(self) -> bool:
        return self._running

    @property
    def remaining_ms(self) -> int:
        return self._remaining

    def start(self, duration_ms: Optional[int] = None):
        # replaces any countdown still in flight
        self.reset(duration_ms)
        self._running = True
        self._t.start()
        self._tick.start()

    def reset(self, duration_ms: Optional[int] = None):
        self._tick.stop()
        self._generation += 1
        if duration_ms is not None:
            self._duration = int(duration_ms)
        self._remaining = self._duration
        self._running = False

    def tick(self) -> Tuple[int, bool]:
        """Advance the countdown; the expired flag is True exactly once."""
        if not self._running:
            return self._remaining, False
        self._remaining = max(0, self._duration - self._elapsed_ms())
        if self._remaining == 0:
            self._running = False
            self._tick.stop()
            return 0, True
        return self._remaining, False

    def _elapsed_ms(self) -> int:
        return int(self._t.elapsed())

    def _on_tick(self):
        generation = self._generation
        remaining, expired = self.tick()
        self.ticked.emit(TimerTick(generation, remaining))
        if expired:
            self.timedOut.emit(TimerTimeout(generation))
