# app/themes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, List

from app.errors import ConfigError


@dataclass(frozen=True)
class Theme:
    name: str
    title: str
    primary: str
    secondary: str
    correct: str
    error: str
    caret: str


# -------- Built-in themes --------
THEMES: List[Theme] = [
    Theme(
        name="tt Dark",
        title="#eeeeee",
        primary="#626262",
        secondary="#4a4a4a",
        correct="#ffffff",
        error="#ff0000",
        caret="#ffffff",
    ),
    Theme(
        name="tt Light",
        title="#111111",
        primary="#909090",
        secondary="#b2b2b2",
        correct="#111111",
        error="#ff0000",
        caret="#111111",
    ),
]

DEFAULT_THEME = THEMES[0]

_FIELDS = ("name", "title", "primary", "secondary", "correct", "error", "caret")


# -------- helpers --------
def theme_from_dict(d: Dict[str, Any]) -> Theme:
    if not isinstance(d, dict):
        raise ConfigError("Theme must be an object")
    missing = set(_FIELDS) - set(d.keys())
    if missing:
        raise ConfigError(f"Missing theme keys: {', '.join(sorted(missing))}")
    return Theme(**{k: str(d[k]) for k in _FIELDS})


def find_theme(name: str) -> Theme:
    for t in THEMES:
        if t.name.lower() == name.strip().lower():
            return t
    known = ", ".join(t.name for t in THEMES)
    raise ConfigError(f"Unknown theme {name!r} (known: {known})")
