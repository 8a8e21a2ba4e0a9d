"""Check whether a build context still matches a previously recorded hash."""

from __future__ import annotations

import sys
from argparse import Namespace

from ctxhash.commands.common import fail, prepare
from ctxhash.errors import CtxHashError

EXIT_UP_TO_DATE = 0
EXIT_CHANGED = 1


def run(args: Namespace) -> None:
    """
    Compare the current hash with args.expect.

    The expected value decides the comparison length when no length is given,
    so a 12-character tag can be checked without passing --length 12.
    """
    expected = (getattr(args, "expect", "") or "").strip().lower()
    if not expected:
        fail("--expect requires a non-empty hash")
    if getattr(args, "length", None) is None and not getattr(args, "full", False):
        args.length = len(expected)

    settings, hasher = prepare(args)
    try:
        digest = hasher.hash(str(settings.root), settings.ignore_file)
    except CtxHashError as e:
        fail(str(e))

    if digest == expected:
        print(f"up to date: {digest}")
        sys.exit(EXIT_UP_TO_DATE)
    print(f"changed: expected {expected}, got {digest}")
    sys.exit(EXIT_CHANGED)
