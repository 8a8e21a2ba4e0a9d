"""CLI entry point: argument parsing and subcommand dispatch."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ctxhash import __version__
from ctxhash.config import MATCHERS, find_project_root, load_config


def setup_logging(verbose: bool = False, quiet: bool = False, project_root: Path | None = None) -> None:
    """
    Configure the ctxhash logger: level from --verbose/--quiet or config, console handler,
    optional file handler from config.
    """
    config = load_config(project_root)
    log_cfg = config.get("logging")
    if not isinstance(log_cfg, dict):
        log_cfg = {}
    if verbose:
        level_name = "DEBUG"
    elif quiet:
        level_name = "ERROR"
    else:
        level_name = str(log_cfg.get("level") or "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    root = logging.getLogger("ctxhash")
    root.setLevel(level)
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        root.addHandler(console)
        log_file = log_cfg.get("file")
        if isinstance(log_file, str) and log_file:
            try:
                fh = logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
            except OSError as e:
                root.warning("Cannot open log file %s: %s", log_file, e)
            else:
                fh.setFormatter(fmt)
                root.addHandler(fh)


def _selection_flags() -> argparse.ArgumentParser:
    """Flags shared by hash, files and check (override config values)."""
    flags = argparse.ArgumentParser(add_help=False)
    flags.add_argument("path", type=Path, nargs="?", default=Path("."), help="Build context directory (default: .).")
    flags.add_argument(
        "--ignore-file",
        metavar="NAME",
        help="Ignore file name, relative to PATH (default: .dockerignore).",
    )
    flags.add_argument(
        "--always-include",
        nargs="*",
        metavar="REL_PATH",
        help="Files hashed regardless of ignore rules (default: Dockerfile .dockerignore).",
    )
    flags.add_argument(
        "--matcher",
        choices=MATCHERS,
        help="Ignore semantics: dockerignore (build tool) or gitignore (git).",
    )
    flags.add_argument("--debug", action="store_true", help="Print visited files to stderr.")
    length = flags.add_mutually_exclusive_group()
    length.add_argument("--length", "-n", type=int, metavar="N", help="Hex characters to print (default: 12).")
    length.add_argument("--full", action="store_true", help="Print the full 64-character digest.")
    return flags


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="ctxhash",
        description="Content hashes of container build contexts, respecting .dockerignore.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-v", "--verbose", action="store_true", help="Verbose (DEBUG) output.")
    log_group.add_argument("-q", "--quiet", action="store_true", help="Quiet (errors only).")

    # Same flags on subparsers so "ctxhash hash . -v" works. Kept out of a mutually
    # exclusive group: argparse < 3.13 cannot wrap grouped usage lines; -v wins over -q.
    global_flags = argparse.ArgumentParser(add_help=False)
    global_flags.add_argument("-v", "--verbose", action="store_true", help="Verbose (DEBUG) output.")
    global_flags.add_argument("-q", "--quiet", action="store_true", help="Quiet (errors only).")

    selection = _selection_flags()
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    p_hash = subparsers.add_parser(
        "hash",
        help="Compute the content hash of a build context (respects .dockerignore).",
        parents=[global_flags, selection],
    )
    p_hash.set_defaults(run="hash")

    p_files = subparsers.add_parser(
        "files",
        help="List the files that would be hashed, one per line.",
        parents=[global_flags, selection],
    )
    p_files.set_defaults(run="files")

    p_check = subparsers.add_parser(
        "check",
        help="Exit 0 if the build context still has the expected hash, 1 if it changed.",
        parents=[global_flags, selection],
    )
    p_check.add_argument("--expect", required=True, metavar="HASH", help="Previously recorded hash (e.g. an image tag).")
    p_check.set_defaults(run="check")

    p_config = subparsers.add_parser("config", help="Show or change configuration.", parents=[global_flags])
    p_config.add_argument("path", type=Path, nargs="?", default=Path("."), help="Project path for project-local config (default: .).")
    p_config.add_argument("--show", action="store_true", help="Display the effective settings and where they come from.")
    p_config.add_argument(
        "--set",
        dest="set_key",
        metavar="KEY=VALUE",
        help="Set one of: ignore_file, always_include (comma-separated), truncate_length, matcher, logging.level, logging.file.",
    )
    p_config.add_argument("--global", dest="global_", action="store_true", help="With --set: write ~/.ctxhash/config.json instead of the project file.")
    p_config.set_defaults(run="config")

    args = parser.parse_args()

    if hasattr(args, "path"):
        args.path = args.path.resolve()
    setup_logging(
        verbose=getattr(args, "verbose", False),
        quiet=getattr(args, "quiet", False),
        project_root=find_project_root(args.path) if hasattr(args, "path") else None,
    )

    run = getattr(args, "run", None)
    if run == "hash":
        from ctxhash.commands.hash_cmd import run as cmd_run
    elif run == "files":
        from ctxhash.commands.files_cmd import run as cmd_run
    elif run == "check":
        from ctxhash.commands.check_cmd import run as cmd_run
    elif run == "config":
        from ctxhash.commands.config_cmd import run as cmd_run
    else:
        parser.print_help()
        sys.exit(0)

    cmd_run(args)
