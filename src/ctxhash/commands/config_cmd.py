"""Show the effective configuration or change one setting (CLI command)."""

from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path

from ctxhash.commands.common import fail
from ctxhash.config import (
    config_layers,
    find_project_root,
    global_config_path,
    load_config,
    parse_setting,
    project_config_path,
    read_config_file,
    set_setting,
    write_config,
)
from ctxhash.errors import ConfigError, CtxHashError


def _show(project_root: Path | None) -> None:
    config = load_config(project_root)
    sources = " < ".join(["defaults", *(p.as_posix() for p in config_layers(project_root))])
    print(f"# Sources: {sources}")
    print(json.dumps(config, indent=2))


def _set(assignment: str, target: Path) -> None:
    """Apply one KEY=VALUE to the config file at target, keeping its other keys."""
    key, sep, text = assignment.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ConfigError("--set expects KEY=VALUE (e.g. truncate_length=16)")
    value = parse_setting(key, text)

    data = read_config_file(target)
    if data is None:
        if target.exists():
            raise ConfigError(f"refusing to overwrite {target.as_posix()}: not a JSON object")
        data = {}
    set_setting(data, key, value)
    write_config(target, data)
    print(f"{key} = {json.dumps(value)} in {target.as_posix()}")


def run(args: Namespace) -> None:
    """
    --show prints the merged settings and the files they came from.

    --set writes to the nearest project's .ctxhash.json (started in PATH when
    there is none yet), or to ~/.ctxhash/config.json with --global.
    """
    path = Path(getattr(args, "path", Path("."))).resolve()
    show = getattr(args, "show", False)
    assignment = getattr(args, "set_key", None)
    if not show and not assignment:
        fail("nothing to do; pass --show or --set KEY=VALUE")

    try:
        if assignment:
            if getattr(args, "global_", False):
                target = global_config_path()
            else:
                target = project_config_path(find_project_root(path) or path)
            _set(assignment, target)
        if show:
            _show(find_project_root(path))
    except (CtxHashError, OSError) as e:
        fail(str(e))
