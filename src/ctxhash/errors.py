"""Exceptions raised by the fingerprinting engine."""

from __future__ import annotations


class CtxHashError(Exception):
    """Base class for errors that make a context hash unavailable."""


class PatternError(CtxHashError, ValueError):
    """An ignore-file line could not be compiled into a rule."""

    def __init__(self, message: str, pattern: str | None = None) -> None:
        self.pattern = pattern
        if pattern is not None:
            message = f"{message}: {pattern!r}"
        super().__init__(message)


class ContextIOError(CtxHashError, OSError):
    """Reading the ignore file, a directory listing or a file's content failed."""

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")

    def __str__(self) -> str:
        return self.args[0]


class ConfigError(CtxHashError, ValueError):
    """A configuration value has the wrong type or an unknown setting was named."""
