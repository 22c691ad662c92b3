# services/typing_engine.py


class InputBuffer:
    """Single-line text with a cursor, edited like a terminal text input."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.value = ""
        self.cursor = 0

    def __len__(self):
        return len(self.value)

    def __bool__(self):
        return bool(self.value)

    def apply(self, key: str, text: str = "") -> bool:
        """Apply one keystroke. Returns False when the key means nothing here."""
        if text and text.isprintable():
            self.insert(text)
            return True
        action = self._actions.get(key)
        if action is None:
            return False
        action(self)
        return True

    def insert(self, text: str):
        self.value = self.value[:self.cursor] + text + self.value[self.cursor:]
        self.cursor += len(text)

    def backspace(self):
        if self.cursor == 0:
            return
        self.value = self.value[:self.cursor - 1] + self.value[self.cursor:]
        self.cursor -= 1

    def delete(self):
        self.value = self.value[:self.cursor] + self.value[self.cursor + 1:]

    def left(self):
        self.cursor = max(0, self.cursor - 1)

    def right(self):
        self.cursor = min(len(self.value), self.cursor + 1)

    def home(self):
        self.cursor = 0

    def end(self):
        self.cursor = len(self.value)

    def delete_word_backward(self):
        i = self.cursor
        while i > 0 and self.value[i - 1].isspace():
            i -= 1
        while i > 0 and not self.value[i - 1].isspace():
            i -= 1
        self.value = self.value[:i] + self.value[self.cursor:]
        self.cursor = i

    def delete_before_cursor(self):
        self.value = self.value[self.cursor:]
        self.cursor = 0

    def delete_after_cursor(self):
        self.value = self.value[:self.cursor]

    _actions = {
        "backspace": backspace,
        "ctrl+h": backspace,
        "delete": delete,
        "ctrl+d": delete,
        "left": left,
        "ctrl+b": left,
        "right": right,
        "ctrl+f": right,
        "home": home,
        "ctrl+a": home,
        "end": end,
        "ctrl+e": end,
        "ctrl+w": delete_word_backward,
        "alt+backspace": delete_word_backward,
        "ctrl+u": delete_before_cursor,
        "ctrl+k": delete_after_cursor,
    }
