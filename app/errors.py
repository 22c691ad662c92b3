# app/errors.py


class TypingTestError(Exception):
    """Base class for errors the application reports before exiting."""


class ConfigError(TypingTestError, ValueError):
    pass


class TerminalError(TypingTestError):
    """The terminal cannot be used for interactive input."""
