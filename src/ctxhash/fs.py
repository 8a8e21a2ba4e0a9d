"""Default FileReader backed by the local filesystem."""

from __future__ import annotations

import os

from ctxhash.base import DirEntry


def join_path(root: str, rel_path: str) -> str:
    """Join a slash-separated relative path onto root using the host separator."""
    if not rel_path:
        return root
    return os.path.join(root, *rel_path.split("/"))


class OsFileReader:
    """Reads files and lists directories with os.scandir; symlinks are not followed as directories."""

    def read_file(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def list_dir(self, path: str) -> list[DirEntry]:
        with os.scandir(path) as it:
            return [DirEntry(e.name, e.is_dir(follow_symlinks=False)) for e in it]


def path_bytes(rel_path: str) -> bytes:
    """
    Raw bytes of a relative path as the OS stored them.

    os.scandir hands back undecodable names with surrogate escapes; they round-trip
    to the original bytes here, so non-UTF-8 file names hash and sort byte-wise.
    """
    return rel_path.encode("utf-8", "surrogateescape")
