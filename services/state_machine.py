# services/state_machine.py
from __future__ import annotations
import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from app.calculation import score, word_marks
from app.config import TestConfig
from app.events import (
    Command,
    Event,
    KeyInput,
    LifecycleCommand,
    Resize,
    TimerTick,
    TimerTimeout,
)
from app.state import LifecycleState, Snapshot, TestResult
from core.chrono import TestTimer
from services.typing_engine import InputBuffer

log = logging.getLogger(__name__)


class TypingTestStateMachine(QObject):
    """
    Idle -> Running -> Finished lifecycle of a single typing test.

    Every event goes through handle_event(), runs to completion and is
    followed by a `changed` emission carrying a fresh Snapshot.
    """
    changed = Signal(object)        # Snapshot
    finished = Signal(object)       # TestResult
    quitRequested = Signal()

    def __init__(self, config: TestConfig, timer: Optional[TestTimer] = None, parent=None):
        super().__init__(parent)
        self.config = config
        self.reference = config.reference
        self.buffer = InputBuffer()
        self.state = LifecycleState.IDLE
        self.result: Optional[TestResult] = None
        self.input_active = False
        self.quit_requested = False
        self.width = 0
        self.height = 0

        if timer is None:
            timer = TestTimer(config.duration_ms, config.tick_ms, parent=self)
        self.timer = timer
        self.timer.ticked.connect(self.handle_event)
        self.timer.timedOut.connect(self.handle_event)

    # ---------------- Command availability ----------------
    @property
    def start_enabled(self) -> bool:
        return self.state in (LifecycleState.IDLE, LifecycleState.FINISHED)

    @property
    def reset_enabled(self) -> bool:
        return self.state in (LifecycleState.RUNNING, LifecycleState.FINISHED)

    # ---------------- Dispatch ----------------
    def handle_event(self, event: Event):
        if isinstance(event, KeyInput):
            self.handle_key_input(event)
        elif isinstance(event, (TimerTick, TimerTimeout)):
            self.handle_timer_tick(event)
        elif isinstance(event, Resize):
            self.handle_resize(event.width, event.height)
        elif isinstance(event, LifecycleCommand):
            self._run_command(event.command)
        else:
            raise TypeError(f"Unsupported event: {event!r}")
        self.changed.emit(self.snapshot())

    def _run_command(self, command: Command):
        if command is Command.START:
            self.handle_start()
        elif command is Command.RESET:
            self.handle_reset()
        elif command is Command.QUIT:
            self.handle_quit()

    # ---------------- Lifecycle ----------------
    def handle_start(self):
        if not self.start_enabled:
            log.debug("start ignored in state %s", self.state.value)
            return
        self.buffer.reset()
        self.result = None
        self.timer.start(self.config.duration_ms)
        self.input_active = True
        self.state = LifecycleState.RUNNING
        log.info("test started (%ss)", self.config.duration_seconds)

    def handle_reset(self):
        if not self.reset_enabled:
            log.debug("reset ignored in state %s", self.state.value)
            return
        self.timer.reset(self.config.duration_ms)
        self.buffer.reset()
        self.result = None
        self.input_active = False
        self.state = LifecycleState.IDLE
        log.info("test reset")

    def handle_quit(self):
        self.timer.reset()
        self.input_active = False
        if not self.quit_requested:
            self.quit_requested = True
            log.info("quit requested")
            self.quitRequested.emit()

    def handle_key_input(self, event: KeyInput):
        keymap = self.config.keymap
        if keymap.quit.matches(event.key):
            self.handle_quit()
        elif keymap.start.matches(event.key) and self.start_enabled:
            self.handle_start()
        elif keymap.reset.matches(event.key) and self.reset_enabled:
            self.handle_reset()
        elif self.state is LifecycleState.RUNNING:
            if not self.buffer.apply(event.key, event.text):
                log.debug("unbound key %r", event.key)

    def handle_timer_tick(self, event):
        if event.generation != self.timer.generation:
            log.debug("dropping stale %s", type(event).__name__)
            return
        if isinstance(event, TimerTimeout):
            self._finish()

    def _finish(self):
        if self.state is not LifecycleState.RUNNING:
            return
        self.result = score(self.reference, self.buffer.value, self.config.duration_seconds)
        self.buffer.reset()
        self.input_active = False
        self.state = LifecycleState.FINISHED
        log.info("test finished: %.2f wpm, %.2f%% accuracy", self.result.wpm, self.result.accuracy)
        self.finished.emit(self.result)

    def handle_resize(self, width: int, height: int):
        if width == 0 and height == 0:
            return
        self.width = width
        self.height = height

    # ---------------- Snapshot ----------------
    def snapshot(self) -> Snapshot:
        typed = self.buffer.value
        return Snapshot(
            state=self.state,
            reference=self.reference,
            typed=typed,
            cursor=self.buffer.cursor,
            marks=tuple(word_marks(self.reference, typed)),
            remaining_ms=self.timer.remaining_ms,
            result=self.result if self.state is LifecycleState.FINISHED else None,
            input_active=self.input_active,
            start_enabled=self.start_enabled,
            reset_enabled=self.reset_enabled,
            width=self.width,
            height=self.height,
        )
