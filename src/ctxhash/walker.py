"""Tree walk: collect the sorted list of files that belong to the build context."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

from ctxhash.base import DiagnosticLogger, FileReader, PatternMatcher
from ctxhash.diagnostics import NullLogger
from ctxhash.errors import ContextIOError
from ctxhash.fs import OsFileReader, join_path, path_bytes

logger = logging.getLogger(__name__)

ALWAYS_INCLUDED = "always included"


def _parent_of(rel_path: str) -> str:
    """Parent of a relative path; "" for top-level entries."""
    head, _, _ = rel_path.rpartition("/")
    return head


def collect_files(
    root: str,
    matcher: PatternMatcher,
    *,
    always_include: Collection[str] = (),
    reader: FileReader | None = None,
    diagnostics: DiagnosticLogger | None = None,
) -> list[str]:
    """
    Walk root in pre-order and return the included files as slash-separated
    relative paths, sorted by their raw bytes.

    - always_include files bypass matching; always_include directories are
      descended without being matched.
    - An excluded directory is pruned only when the matcher has no negation rules;
      otherwise it is still descended so deeper negations can re-include files.
    - Directories never appear in the result.

    Raises ContextIOError if a directory cannot be listed.
    """
    reader = reader or OsFileReader()
    diagnostics = diagnostics or NullLogger()
    always = frozenset(always_include)

    # Match state per traversed directory, keyed by relative path
    states: dict[str, Any] = {}
    files: list[str] = []
    stack: list[tuple[str, bool]] = []

    def push_children(rel_dir: str) -> None:
        try:
            entries = reader.list_dir(join_path(root, rel_dir))
        except OSError as e:
            raise ContextIOError("failed to list directory", rel_dir or ".") from e
        children = sorted(entries, key=lambda entry: path_bytes(entry.name), reverse=True)
        for entry in children:
            rel = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
            stack.append((rel, entry.is_dir))

    push_children("")
    while stack:
        rel, is_dir = stack.pop()

        if rel in always:
            if is_dir:
                push_children(rel)
            else:
                diagnostics.on_file_included(rel, ALWAYS_INCLUDED)
                files.append(rel)
            continue

        parent = _parent_of(rel)
        parent_state = states.get(parent) if parent else None
        excluded, state = matcher.match(rel, is_dir, parent_state)

        if is_dir:
            states[rel] = state
            if excluded and not matcher.has_negation:
                diagnostics.on_skipped(rel, True)
                continue
            diagnostics.on_directory_entered(rel)
            push_children(rel)
            continue

        if excluded:
            diagnostics.on_skipped(rel, False)
            continue
        diagnostics.on_file_included(rel, "")
        files.append(rel)

    files.sort(key=path_bytes)
    logger.debug("Collected %d files under %s", len(files), root)
    return files
