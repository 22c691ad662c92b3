# ui/terminal.py
from __future__ import annotations
import codecs
import logging
import os
import shutil
import signal
import socket
import sys
import termios
import tty
from typing import Optional

from PySide6.QtCore import QCoreApplication, QObject, QSocketNotifier, QTimer
from rich.console import Console
from rich.live import Live

from app.config import TestConfig
from app.errors import TerminalError
from app.events import Command, LifecycleCommand, Resize
from app.state import Snapshot
from services.state_machine import TypingTestStateMachine
from ui.keys import parse_keys
from ui.view import render

log = logging.getLogger(__name__)

WINDOW_TITLE = "tt."
FRAME_MS = 33


class TerminalApp(QObject):
    """
    Hosts the state machine in a terminal: keystrokes from stdin, resize
    and interrupt signals in, rich frames out. Everything is delivered on
    the Qt event loop, one event at a time.
    """

    def __init__(
        self,
        machine: TypingTestStateMachine,
        config: TestConfig,
        console: Optional[Console] = None,
        stdin_fd: Optional[int] = None,
        install_signals: bool = True,
        parent=None,
    ):
        super().__init__(parent)
        self.machine = machine
        self.config = config
        self.console = console or Console()
        self.fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.install_signals = install_signals

        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._old_attrs = None
        self._old_handlers = {}
        self._old_wakeup_fd = -1
        self._sig_r: Optional[socket.socket] = None
        self._sig_w: Optional[socket.socket] = None
        self._stdin_notifier: Optional[QSocketNotifier] = None
        self._signal_notifier: Optional[QSocketNotifier] = None
        self._live: Optional[Live] = None

        self._snapshot: Snapshot = machine.snapshot()
        self._dirty = True
        self._caret_on = True

        self._frame = QTimer(self)
        self._frame.setInterval(FRAME_MS)
        self._frame.timeout.connect(self._draw)

        self._caret_timer = QTimer(self)
        self._caret_timer.setInterval(config.blink_ms)
        self._caret_timer.timeout.connect(self._toggle_caret)

        machine.changed.connect(self.on_changed)
        machine.quitRequested.connect(self._on_quit)

    # ---------------- Setup / teardown ----------------
    def __enter__(self) -> "TerminalApp":
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def open(self):
        if not os.isatty(self.fd):
            raise TerminalError("stdin is not a terminal")
        try:
            self._old_attrs = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error as e:
            raise TerminalError(f"Cannot switch terminal to cbreak mode: {e}") from e

        self._stdin_notifier = QSocketNotifier(self.fd, QSocketNotifier.Type.Read, self)
        self._stdin_notifier.activated.connect(self._on_stdin)
        if self.install_signals:
            self._install_signals()

        self._live = Live(console=self.console, screen=True, auto_refresh=False, transient=True)
        self._live.start()
        self.console.set_window_title(WINDOW_TITLE)

        self._frame.start()
        self._caret_timer.start()
        self.machine.handle_event(Resize(*self._terminal_size()))
        log.debug("terminal opened on fd %d", self.fd)

    def close(self):
        self._frame.stop()
        self._caret_timer.stop()
        if self._stdin_notifier is not None:
            self._stdin_notifier.setEnabled(False)
            self._stdin_notifier = None
        self._restore_signals()
        if self._live is not None:
            self._live.stop()
            self._live = None
        if self._old_attrs is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._old_attrs)
            self._old_attrs = None
        log.debug("terminal restored")

    def _install_signals(self):
        self._sig_r, self._sig_w = socket.socketpair()
        self._sig_r.setblocking(False)
        self._sig_w.setblocking(False)
        self._old_wakeup_fd = signal.set_wakeup_fd(self._sig_w.fileno())
        for signum in (signal.SIGINT, signal.SIGWINCH):
            # the wakeup fd does the work; the handler only keeps Python
            # from raising KeyboardInterrupt or ignoring the signal
            self._old_handlers[signum] = signal.signal(signum, lambda *_: None)
        self._signal_notifier = QSocketNotifier(self._sig_r.fileno(), QSocketNotifier.Type.Read, self)
        self._signal_notifier.activated.connect(self._on_signal)

    def _restore_signals(self):
        if self._signal_notifier is not None:
            self._signal_notifier.setEnabled(False)
            self._signal_notifier = None
        for signum, handler in self._old_handlers.items():
            signal.signal(signum, handler)
        self._old_handlers.clear()
        if self._sig_w is not None:
            signal.set_wakeup_fd(self._old_wakeup_fd)
            self._sig_w.close()
            self._sig_r.close()
            self._sig_w = self._sig_r = None

    # ---------------- Input ----------------
    def _on_stdin(self, *_):
        try:
            data = os.read(self.fd, 1024)
        except BlockingIOError:
            return
        if not data:
            log.info("stdin closed")
            self.machine.handle_event(LifecycleCommand(Command.QUIT))
            return
        for key in parse_keys(self._decoder.decode(data)):
            self.machine.handle_event(key)
            if self.machine.quit_requested:
                break

    def _on_signal(self, *_):
        try:
            data = self._sig_r.recv(64)
        except BlockingIOError:
            return
        for signum in data:
            if signum == signal.SIGINT:
                self.machine.handle_event(LifecycleCommand(Command.QUIT))
            elif signum == signal.SIGWINCH:
                self.machine.handle_event(Resize(*self._terminal_size()))

    def _terminal_size(self):
        try:
            size = os.get_terminal_size(self.fd)
        except OSError:
            size = shutil.get_terminal_size((0, 0))
        return size.columns, size.lines

    # ---------------- Output ----------------
    def on_changed(self, snap: Snapshot):
        self._snapshot = snap
        self._dirty = True

    def _toggle_caret(self):
        if self._snapshot.input_active:
            self._caret_on = not self._caret_on
            self._dirty = True
        elif not self._caret_on:
            self._caret_on = True

    def _draw(self):
        if not self._dirty or self._live is None:
            return
        self._dirty = False
        self._live.update(
            render(self._snapshot, self.config.theme, self.config.keymap, self._caret_on),
            refresh=True,
        )

    def _on_quit(self):
        app = QCoreApplication.instance()
        if app is not None:
            app.quit()
