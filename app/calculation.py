from typing import List, Sequence

from app.state import TestResult, WordMark


def score(reference: Sequence[str], typed: str, duration_seconds: float) -> TestResult:
    """
    Compare typed text to the reference word by word.

    Only positions inside each reference word count towards accuracy, so a
    short typed word loses the missing characters and a long one is not
    charged for its extras. Typed words past the end of the reference are
    ignored. WPM uses the full test duration, not the time actually spent.
    """
    typed_words = typed.split()
    correct_words = 0
    correct_chars = 0
    total_chars = 0

    for ref_word, typed_word in zip(reference, typed_words):
        for j, ch in enumerate(ref_word):
            total_chars += 1
            if j < len(typed_word) and typed_word[j] == ch:
                correct_chars += 1
        if typed_word == ref_word:
            correct_words += 1

    wpm = correct_words * 60.0 / duration_seconds if duration_seconds > 0 else 0.0
    # nothing to compare against counts as 0 %, not NaN
    accuracy = 100.0 * correct_chars / total_chars if total_chars else 0.0
    return TestResult(
        wpm=wpm,
        accuracy=accuracy,
        correct_words=correct_words,
        correct_chars=correct_chars,
        total_chars=total_chars,
    )


def word_marks(reference: Sequence[str], typed: str) -> List[WordMark]:
    """Per typed word, whether it equals the reference word at the same index."""
    out: List[WordMark] = []
    for i, word in enumerate(typed.split()):
        ok = i < len(reference) and word == reference[i]
        out.append(WordMark(word, ok))
    return out
