# ui/keys.py
from typing import List

from app.events import KeyInput

_ESCAPES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[3~": "delete",
    "\x1b\x7f": "alt+backspace",
    "\x1b\x08": "alt+backspace",
}

_CONTROLS = {
    "\t": "tab",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
}


def _control_name(ch: str) -> str:
    if ch in _CONTROLS:
        return _CONTROLS[ch]
    code = ord(ch)
    if 1 <= code <= 26:
        return "ctrl+" + chr(code + 96)
    return f"ctrl+{code}"


def parse_keys(data: str) -> List[KeyInput]:
    """Split a chunk read from a terminal in cbreak mode into keystrokes."""
    keys: List[KeyInput] = []
    i, n = 0, len(data)
    while i < n:
        ch = data[i]
        if ch == "\x1b":
            for seq in sorted(_ESCAPES, key=len, reverse=True):
                if data.startswith(seq, i):
                    keys.append(KeyInput(_ESCAPES[seq]))
                    i += len(seq)
                    break
            else:
                if i + 1 < n and data[i + 1] == "[":
                    # unknown CSI sequence: skip up to its final byte
                    j = i + 2
                    while j < n and not ("@" <= data[j] <= "~"):
                        j += 1
                    i = j + 1
                elif i + 2 < n and data[i + 1] == "O":
                    # SS3 sequence (F1-F4 and friends): one final byte
                    i += 3
                elif i + 1 < n and data[i + 1].isprintable():
                    keys.append(KeyInput("alt+" + data[i + 1]))
                    i += 2
                else:
                    keys.append(KeyInput("esc"))
                    i += 1
            continue
        if ch.isprintable():
            keys.append(KeyInput.char(ch))
        else:
            keys.append(KeyInput(_control_name(ch)))
        i += 1
    return keys
