"""Shared helpers for the commands: merge CLI flags over config, build a Hasher, report errors."""

from __future__ import annotations

import sys
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from ctxhash.base import DiagnosticLogger
from ctxhash.config import MATCHERS, find_project_root, load_config, validate_config
from ctxhash.diagnostics import DebugLogger, LoggingDiagnostics
from ctxhash.errors import CtxHashError
from ctxhash.hashing import FULL_HASH_LENGTH, Hasher, rule_matcher
from ctxhash.ignore.pathspec_matcher import PathSpecMatcher

EXIT_ERROR = 2


@dataclass
class HashSettings:
    """Effective options for one invocation."""

    root: Path
    ignore_file: str
    always_include: list[str]
    truncate_length: int
    matcher: str
    debug: bool = False


def resolve_settings(args: Namespace) -> HashSettings:
    """
    CLI flags win over project config, which wins over global config and defaults.

    Raises ConfigError if a config file holds a value of the wrong type.
    """
    root = Path(getattr(args, "path", Path("."))).resolve()
    config = validate_config(load_config(find_project_root(root)))

    always = getattr(args, "always_include", None)
    if always is None:
        always = list(config["always_include"])

    if getattr(args, "full", False):
        length = 0
    elif getattr(args, "length", None) is not None:
        length = args.length
    else:
        length = config["truncate_length"]

    return HashSettings(
        root=root,
        ignore_file=getattr(args, "ignore_file", None) or config["ignore_file"],
        always_include=always,
        truncate_length=length,
        matcher=getattr(args, "matcher", None) or config["matcher"],
        debug=bool(getattr(args, "debug", False)),
    )


def build_hasher(settings: HashSettings) -> Hasher:
    """Hasher for settings; --debug streams events to stderr, otherwise they go to logging."""
    if settings.matcher not in MATCHERS:
        raise ValueError(f"unknown matcher {settings.matcher!r} (expected one of {', '.join(MATCHERS)})")
    if not 0 <= settings.truncate_length <= FULL_HASH_LENGTH:
        raise ValueError(f"hash length must be between 0 and {FULL_HASH_LENGTH}, got {settings.truncate_length}")
    diagnostics: DiagnosticLogger
    if settings.debug:
        diagnostics = DebugLogger(sys.stderr)
    else:
        diagnostics = LoggingDiagnostics()
    return Hasher(
        logger=diagnostics,
        matcher_factory=PathSpecMatcher if settings.matcher == "gitignore" else rule_matcher,
        always_include=settings.always_include,
        truncate_length=settings.truncate_length,
    )


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit with EXIT_ERROR."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def prepare(args: Namespace) -> tuple[HashSettings, Hasher]:
    """Resolve settings and build the hasher, exiting with an error message on bad options."""
    try:
        settings = resolve_settings(args)
        if not settings.root.is_dir():
            fail(f"not a directory: {settings.root.as_posix()}")
        hasher = build_hasher(settings)
    except (ValueError, CtxHashError) as e:
        fail(str(e))
    return settings, hasher
