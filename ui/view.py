# ui/view.py
from __future__ import annotations
from typing import List

from rich.align import Align
from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.style import Style
from rich.text import Text

from app.config import KeyMap
from app.state import Snapshot
from app.themes import Theme

TAGLINE = "A minimalist CLI typing speed test."
CONTENT_HEIGHT = 10


def format_remaining(ms: int) -> str:
    return f"{max(0, ms) / 1000.0:0.3f}s"


def help_line(snap: Snapshot, keymap: KeyMap, theme: Theme) -> Text:
    """Help for the bindings usable right now, in keymap order."""
    bindings = [
        (keymap.start, snap.start_enabled),
        (keymap.reset, snap.reset_enabled),
        (keymap.quit, True),
    ]
    parts: List[Text] = []
    for b, enabled in bindings:
        if not enabled:
            continue
        parts.append(Text.assemble((b.help_key, Style(color=theme.primary)), " ",
                                   (b.help_desc, Style(color=theme.secondary))))
    return Text(" • ", style=Style(color=theme.secondary)).join(parts)


def header(theme: Theme) -> Text:
    return Text.assemble(
        ("tt", Style(color=theme.title, bold=True)),
        " — ",
        (TAGLINE, Style(color=theme.primary, bold=True)),
    )


def typing_line(snap: Snapshot, theme: Theme, caret_on: bool = True) -> Text:
    line = Text()
    for mark in snap.marks:
        color = theme.correct if mark.correct else theme.error
        line.append(mark.word, style=Style(color=color))
        line.append(" ")

    cursor_style = Style(color=theme.caret, reverse=caret_on and snap.input_active)
    line.append(snap.next_char(), style=cursor_style)

    typed_count = len(snap.marks)
    if typed_count < len(snap.reference):
        line.append(" ".join(snap.reference[typed_count:]), style=Style(color=theme.secondary))
    return line


def results(snap: Snapshot, theme: Theme) -> Text:
    key_style = Style(color=theme.primary, bold=True)
    value_style = Style(color=theme.secondary)
    res = snap.result
    return Text.assemble(
        ("WPM:", key_style), " ", (f"{res.wpm:.2f}", value_style), "\n",
        ("Accuracy:", key_style), " ", (f"{res.accuracy:.2f}%", value_style),
    )


def render(snap: Snapshot, theme: Theme, keymap: KeyMap, caret_on: bool = True) -> RenderableType:
    margin = snap.width // 10

    if snap.is_finished and snap.result is not None:
        content: RenderableType = results(snap, theme)
    elif snap.is_running:
        content = Group(
            Text(format_remaining(snap.remaining_ms), style=Style(color=theme.primary)),
            typing_line(snap, theme, caret_on),
        )
    else:
        content = Text("")

    body = Group(
        Padding(header(theme), (0, margin, 2, margin)),
        Padding(content, (0, margin, max(0, CONTENT_HEIGHT - _height_of(content)), margin)),
        Align.center(help_line(snap, keymap, theme)),
    )
    if snap.height:
        return Align(body, align="left", vertical="middle", height=snap.height)
    return body


def _height_of(content: RenderableType) -> int:
    if isinstance(content, Text):
        return len(content.plain.splitlines()) or 1
    if isinstance(content, Group):
        return sum(_height_of(r) for r in content.renderables)
    return 1
