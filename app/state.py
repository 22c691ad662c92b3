from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class LifecycleState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True)
class TestResult:
    wpm: float
    accuracy: float
    correct_words: int = 0
    correct_chars: int = 0
    total_chars: int = 0

    __test__ = False


@dataclass(frozen=True)
class WordMark:
    word: str
    correct: bool


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the test handed to the presentation after every event."""
    state: LifecycleState
    reference: Tuple[str, ...]
    typed: str = ""
    cursor: int = 0
    marks: Tuple[WordMark, ...] = ()
    remaining_ms: int = 0
    result: Optional[TestResult] = None
    input_active: bool = False
    start_enabled: bool = True
    reset_enabled: bool = False
    width: int = 0
    height: int = 0

    @property
    def is_running(self) -> bool:
        return self.state is LifecycleState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.state is LifecycleState.FINISHED

    def next_char(self) -> str:
        # character of the phrase under the cursor, blank past the end
        phrase = " ".join(self.reference)
        if self.cursor < len(phrase):
            return phrase[self.cursor]
        return " "
