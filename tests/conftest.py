"""Shared fixtures: isolated global config, file-tree helpers, in-memory file reader."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from ctxhash.base import DirEntry


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ~/.ctxhash at an empty temp directory so the user's config never leaks in."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr("ctxhash.config._global_config_dir", lambda: home / ".ctxhash")
    return home / ".ctxhash"


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary directory as build context root."""
    root = tmp_path / "context"
    root.mkdir()
    return root


@pytest.fixture
def write_file(project_root: Path) -> Callable[[str, str], Path]:
    """Write text to a path relative to project_root, creating parent directories."""

    def _write(rel_path: str, content: str = "") -> Path:
        path = project_root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class MemoryFileReader:
    """
    FileReader over a dict of relative path -> bytes rooted at /ctx.

    Directory listings come back in reverse name order so tests notice any
    dependence on filesystem iteration order.
    """

    root = "/ctx"

    def __init__(self, files: dict[str, bytes | str]) -> None:
        self.files = {
            f"{self.root}/{rel}": content.encode("utf-8") if isinstance(content, str) else content
            for rel, content in files.items()
        }
        self.reads: list[str] = []
        self.listed: list[str] = []
        self.unlistable: set[str] = set()

    def read_file(self, path: str) -> bytes:
        self.reads.append(path)
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def list_dir(self, path: str) -> list[DirEntry]:
        self.listed.append(path)
        if path in self.unlistable:
            raise PermissionError(path)
        prefix = path.rstrip("/") + "/"
        entries: dict[str, bool] = {}
        for full in self.files:
            if not full.startswith(prefix):
                continue
            name, sep, _ = full[len(prefix):].partition("/")
            entries[name] = entries.get(name, False) or bool(sep)
        if not entries and path != self.root:
            raise FileNotFoundError(path)
        return [DirEntry(name, is_dir) for name, is_dir in sorted(entries.items(), reverse=True)]


@pytest.fixture
def memory_reader() -> Callable[[dict[str, bytes | str]], MemoryFileReader]:
    """Factory for MemoryFileReader instances."""
    return MemoryFileReader
