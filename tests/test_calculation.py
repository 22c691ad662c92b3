import pytest

from app.calculation import score, word_marks
from app.state import WordMark


def test_prefix_typed_correctly(reference):
    res = score(reference, "hi only few", 5)
    assert res.correct_words == 3
    assert res.wpm == pytest.approx(36.0)
    assert res.total_chars == 9
    assert res.correct_chars == 9
    assert res.accuracy == pytest.approx(100.0)


def test_misspelled_word(reference):
    res = score(reference, "hi onli", 5)
    assert res.correct_words == 1
    assert res.wpm == pytest.approx(12.0)
    assert res.correct_chars == 5
    assert res.total_chars == 6
    assert res.accuracy == pytest.approx(500 / 6)


def test_nothing_typed_is_zero_not_nan(reference):
    res = score(reference, "", 5)
    assert res.wpm == 0.0
    assert res.accuracy == 0.0
    assert res.total_chars == 0


def test_empty_reference():
    res = score((), "anything at all", 5)
    assert res.wpm == 0.0
    assert res.accuracy == 0.0


def test_extra_words_are_ignored(reference):
    exact = score(reference, "hi only few people can read this", 5)
    extra = score(reference, "hi only few people can read this extra words", 5)
    assert extra == exact
    assert exact.accuracy == pytest.approx(100.0)
    assert exact.wpm == pytest.approx(84.0)


def test_short_word_loses_missing_characters(reference):
    res = score(reference, "h", 5)
    assert res.correct_chars == 1
    assert res.total_chars == 2
    assert res.accuracy == pytest.approx(50.0)
    assert res.correct_words == 0


def test_long_word_not_charged_for_extra_characters(reference):
    res = score(reference, "hiii", 5)
    assert res.total_chars == 2
    assert res.correct_chars == 2
    assert res.correct_words == 0


def test_whitespace_runs_split_like_single_spaces(reference):
    assert score(reference, "  hi \t only\n", 5) == score(reference, "hi only", 5)


def test_wpm_uses_fixed_duration(reference):
    assert score(reference, "hi only", 10).wpm == pytest.approx(12.0)


def test_score_is_deterministic(reference):
    runs = {score(reference, "hi onyl few peeple", 5) for _ in range(5)}
    assert len(runs) == 1


def test_word_marks(reference):
    marks = word_marks(reference, "hi onli few x y z w v")
    assert marks[:3] == [WordMark("hi", True), WordMark("onli", False), WordMark("few", True)]
    assert len(marks) == 8
    assert marks[-1] == WordMark("v", False)


def test_word_marks_empty(reference):
    assert word_marks(reference, "   ") == []
