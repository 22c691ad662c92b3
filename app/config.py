# app/config.py
from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from app.errors import ConfigError
from app.themes import DEFAULT_THEME, Theme, find_theme, theme_from_dict

log = logging.getLogger(__name__)

DEFAULT_PHRASE = "hi only few people can read this"
TEST_DURATION_SECONDS = 5
TICK_MS = 1
BLINK_MS = 530

_DEFAULT_FILE = Path("tt.json")
CONFIG_ENV = "TT_CONFIG"


@dataclass(frozen=True)
class KeyBinding:
    keys: Tuple[str, ...]
    help_key: str
    help_desc: str

    def matches(self, key: str) -> bool:
        return key in self.keys


@dataclass(frozen=True)
class KeyMap:
    start: KeyBinding = KeyBinding((".",), ".", "start")
    reset: KeyBinding = KeyBinding(("tab",), "tab", "reset")
    quit: KeyBinding = KeyBinding(("esc", "ctrl+c"), "esc", "quit")


@dataclass(frozen=True)
class TestConfig:
    """Settings fixed for the lifetime of the process."""

    phrase: str = DEFAULT_PHRASE
    duration_seconds: float = TEST_DURATION_SECONDS
    tick_ms: int = TICK_MS
    blink_ms: int = BLINK_MS
    theme: Theme = DEFAULT_THEME
    keymap: KeyMap = field(default_factory=KeyMap)

    __test__ = False

    @property
    def reference(self) -> Tuple[str, ...]:
        return tuple(self.phrase.split())

    @property
    def duration_ms(self) -> int:
        return int(self.duration_seconds * 1000)


def resolve_config_path(path: Optional[Path] = None) -> Path:
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)
    return _DEFAULT_FILE


def config_from_dict(raw: Dict[str, Any]) -> TestConfig:
    if not isinstance(raw, dict):
        raise ConfigError("Configuration must be a JSON object")
    kwargs: Dict[str, Any] = {}

    phrase = raw.get("phrase")
    if phrase is not None:
        if not isinstance(phrase, str) or not phrase.split():
            raise ConfigError("'phrase' must be a non-empty string")
        kwargs["phrase"] = " ".join(phrase.split())

    theme = raw.get("theme")
    if isinstance(theme, str):
        kwargs["theme"] = find_theme(theme)
    elif theme is not None:
        kwargs["theme"] = theme_from_dict(theme)

    unknown = set(raw) - {"phrase", "theme"}
    if unknown:
        log.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
    return TestConfig(**kwargs)


def load_config(path: Optional[Path] = None) -> TestConfig:
    p = resolve_config_path(path)
    if not p.exists():
        if path or os.environ.get(CONFIG_ENV):
            raise ConfigError(f"Config file not found: {p}")
        return TestConfig()
    try:
        with p.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read {p}: {e}") from e
    log.info("Loaded config from %s", p)
    return config_from_dict(raw)
