from app.events import KeyInput
from ui.keys import parse_keys


def names(data):
    return [k.key for k in parse_keys(data)]


def test_printable_characters_carry_text():
    assert parse_keys("hi .") == [KeyInput("h", "h"), KeyInput("i", "i"),
                                  KeyInput(" ", " "), KeyInput(".", ".")]


def test_control_keys():
    assert names("\t\x7f\x08\x03\x17\r") == [
        "tab", "backspace", "ctrl+h", "ctrl+c", "ctrl+w", "enter",
    ]


def test_escape_sequences():
    assert names("\x1b[D\x1b[C\x1b[H\x1b[F\x1b[3~") == ["left", "right", "home", "end", "delete"]


def test_lone_escape_is_esc():
    assert names("\x1b") == ["esc"]
    assert names("a\x1b") == ["a", "esc"]


def test_alt_backspace():
    assert names("\x1b\x7f") == ["alt+backspace"]


def test_unknown_csi_sequence_is_skipped():
    assert names("\x1b[15~x") == ["x"]


def test_control_keys_have_no_text():
    assert all(k.text == "" for k in parse_keys("\t\x7f\x1b"))


def test_unicode_text():
    assert parse_keys("é") == [KeyInput("é", "é")]


def test_function_keys_are_skipped():
    assert names("\x1bOPa") == ["a"]
    assert names("\x1bOQ\x1bOS") == []


def test_alt_chords_are_not_esc():
    keys = parse_keys("\x1bb")
    assert keys == [KeyInput("alt+b")]
    assert keys[0].text == ""


def test_esc_only_when_alone():
    assert names("\x1b\x1bb") == ["esc", "alt+b"]
