"""Diagnostic loggers: observe the walk without influencing it."""

from __future__ import annotations

import logging
import sys
from typing import TextIO


class NullLogger:
    """Discards all events."""

    def on_file_included(self, path: str, reason: str) -> None:
        pass

    def on_directory_entered(self, path: str) -> None:
        pass

    def on_skipped(self, path: str, is_dir: bool) -> None:
        pass


class DebugLogger:
    """
    Write one line per event to a text stream (stderr by default):

        FILE: main.go
        FILE: Dockerfile (always included)
        DIR:  cmd/
        SKIP: vendor/
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stderr

    def on_file_included(self, path: str, reason: str) -> None:
        if reason:
            self.stream.write(f"FILE: {path} ({reason})\n")
        else:
            self.stream.write(f"FILE: {path}\n")

    def on_directory_entered(self, path: str) -> None:
        self.stream.write(f"DIR:  {path}/\n")

    def on_skipped(self, path: str, is_dir: bool) -> None:
        suffix = "/" if is_dir else ""
        self.stream.write(f"SKIP: {path}{suffix}\n")


class LoggingDiagnostics:
    """Forward events to a logging.Logger at DEBUG level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("ctxhash.walk")

    def on_file_included(self, path: str, reason: str) -> None:
        if reason:
            self.logger.debug("include %s (%s)", path, reason)
        else:
            self.logger.debug("include %s", path)

    def on_directory_entered(self, path: str) -> None:
        self.logger.debug("enter %s/", path)

    def on_skipped(self, path: str, is_dir: bool) -> None:
        self.logger.debug("skip %s%s", path, "/" if is_dir else "")
