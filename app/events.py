# app/events.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union


class Command(Enum):
    START = "start"
    RESET = "reset"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyInput:
    """One keystroke: `key` is its name ("a", "tab", "ctrl+w", ...),
    `text` the literal characters it inserts, empty for editing keys."""
    key: str
    text: str = ""

    @classmethod
    def char(cls, ch: str) -> "KeyInput":
        return cls(ch, ch)


@dataclass(frozen=True)
class TimerTick:
    generation: int
    remaining_ms: int


@dataclass(frozen=True)
class TimerTimeout:
    generation: int


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class LifecycleCommand:
    command: Command


Event = Union[KeyInput, TimerTick, TimerTimeout, Resize, LifecycleCommand]
