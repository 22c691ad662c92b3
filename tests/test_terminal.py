import fcntl
import io
import os
import signal
import struct
import termios

import pytest
from PySide6.QtTest import QTest
from rich.console import Console

from app.config import TestConfig
from app.errors import TerminalError
from app.events import Command, LifecycleCommand
from app.state import LifecycleState
from services.state_machine import TypingTestStateMachine
from ui.terminal import TerminalApp

pytestmark = pytest.mark.skipif(not hasattr(os, "openpty"), reason="needs a pty")


@pytest.fixture
def pty():
    master, slave = os.openpty()
    yield master, slave
    os.close(master)
    os.close(slave)


@pytest.fixture
def machine():
    m = TypingTestStateMachine(TestConfig())
    yield m
    m.timer.reset()


def make_app(machine, fd, install_signals=False):
    console = Console(file=io.StringIO(), width=80, height=24, color_system=None)
    return TerminalApp(machine, machine.config, console=console, stdin_fd=fd, install_signals=install_signals)


def test_keystrokes_reach_the_machine(pty, machine):
    master, slave = pty
    with make_app(machine, slave):
        os.write(master, b".hi onli")
        QTest.qWait(100)
        assert machine.state is LifecycleState.RUNNING
        assert machine.buffer.value == "hi onli"
        os.write(master, b"\t")
        QTest.qWait(100)
        assert machine.state is LifecycleState.IDLE


def test_terminal_mode_restored(pty, machine):
    master, slave = pty
    before = termios.tcgetattr(slave)
    with make_app(machine, slave):
        during = termios.tcgetattr(slave)
        assert not during[3] & termios.ICANON
        assert not during[3] & termios.ECHO
    assert termios.tcgetattr(slave) == before


def test_escape_requests_quit(pty, machine):
    master, slave = pty
    with make_app(machine, slave):
        os.write(master, b"\x1b")
        QTest.qWait(100)
    assert machine.quit_requested


def test_not_a_terminal(machine, tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("")
    with path.open() as fh:
        app = make_app(machine, fh.fileno())
        with pytest.raises(TerminalError):
            app.open()


def test_interrupt_signal_quits(pty, machine):
    master, slave = pty
    with make_app(machine, slave, install_signals=True):
        machine.handle_event(LifecycleCommand(Command.START))
        os.kill(os.getpid(), signal.SIGINT)
        QTest.qWait(100)
        assert machine.quit_requested
        assert not machine.timer.running


def test_window_change_signal_resizes(pty, machine):
    master, slave = pty
    with make_app(machine, slave, install_signals=True):
        fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 30, 100, 0, 0))
        os.kill(os.getpid(), signal.SIGWINCH)
        QTest.qWait(100)
        assert (machine.width, machine.height) == (100, 30)


def test_signal_handlers_restored(pty, machine):
    master, slave = pty
    before = signal.getsignal(signal.SIGINT)
    with make_app(machine, slave, install_signals=True):
        assert signal.getsignal(signal.SIGINT) is not before
    assert signal.getsignal(signal.SIGINT) is before
