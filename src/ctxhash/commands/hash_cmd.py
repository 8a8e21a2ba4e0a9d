"""Print the content hash of a build context."""

from __future__ import annotations

import logging
from argparse import Namespace

from ctxhash.commands.common import fail, prepare
from ctxhash.errors import CtxHashError

logger = logging.getLogger(__name__)


def run(args: Namespace) -> None:
    """Run the hash command: compute the hash of args.path and print it to stdout."""
    settings, hasher = prepare(args)
    try:
        digest = hasher.hash(str(settings.root), settings.ignore_file)
    except CtxHashError as e:
        fail(str(e))
    logger.info("Hash of %s: %s", settings.root.as_posix(), digest)
    print(digest)
