"""Collaborator protocols: ignore parser, pattern matcher, file reader, diagnostic logger."""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol, runtime_checkable


class DirEntry(NamedTuple):
    """One entry of a directory listing."""

    name: str
    is_dir: bool


@runtime_checkable
class IgnoreParser(Protocol):
    """Turns ignore-file text into pattern lines."""

    def parse(self, text: str) -> list[str]:
        """Return pattern lines in file order (comments and blanks removed)."""
        ...


@runtime_checkable
class PatternMatcher(Protocol):
    """Decides whether a root-relative path is excluded from the build context."""

    @property
    def has_negation(self) -> bool:
        """True if any rule can re-include a path excluded by an earlier rule."""
        ...

    def match(self, path: str, is_dir: bool, parent_state: Any | None) -> tuple[bool, Any]:
        """
        Return (excluded, state) for path.

        parent_state is the state returned for the parent directory, or None when
        the parent was not evaluated (top level, always-included directories).
        """
        ...


@runtime_checkable
class FileReader(Protocol):
    """Filesystem access used by the walker and the hasher."""

    def read_file(self, path: str) -> bytes:
        """Return the full content of the file at path."""
        ...

    def list_dir(self, path: str) -> list[DirEntry]:
        """Return the entries of the directory at path (any order)."""
        ...


@runtime_checkable
class DiagnosticLogger(Protocol):
    """Receives traversal events. Must not influence matching or hashing."""

    def on_file_included(self, path: str, reason: str) -> None:
        ...

    def on_directory_entered(self, path: str) -> None:
        ...

    def on_skipped(self, path: str, is_dir: bool) -> None:
        ...
