"""List the files that belong to a build context (what `hash` would read)."""

from __future__ import annotations

from argparse import Namespace

from ctxhash.commands.common import fail, prepare
from ctxhash.errors import CtxHashError
from ctxhash.fs import path_bytes


def run(args: Namespace) -> None:
    settings, hasher = prepare(args)
    try:
        files = hasher.collected_files(str(settings.root), settings.ignore_file)
    except CtxHashError as e:
        fail(str(e))
    for rel_path in files:
        # Undecodable bytes in a file name are shown as \xNN escapes
        print(path_bytes(rel_path).decode("utf-8", "backslashreplace"))
