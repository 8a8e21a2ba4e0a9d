"""Configuration: built-in defaults layered under a global and a project JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ctxhash.errors import ConfigError
from ctxhash.hashing import DEFAULT_TRUNCATE_LENGTH, FULL_HASH_LENGTH
from ctxhash.ignore.rules import DOCKERIGNORE

logger = logging.getLogger(__name__)

# Project-local config file, looked up from the hashed directory upwards
PROJECT_CONFIG = ".ctxhash.json"
CONFIG_FILENAME = "config.json"

MATCHERS = ("dockerignore", "gitignore")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Settings that `ctxhash config --set` accepts; dotted keys live in a nested object
SETTINGS = ("ignore_file", "always_include", "truncate_length", "matcher", "logging.level", "logging.file")


def _global_config_dir() -> Path:
    return Path.home() / ".ctxhash"


def global_config_path() -> Path:
    """Path to global config file (~/.ctxhash/config.json)."""
    return _global_config_dir() / CONFIG_FILENAME


def project_config_path(project_root: Path) -> Path:
    """Path to project-local config (<project>/.ctxhash.json)."""
    return project_root / PROJECT_CONFIG


def default_config() -> dict[str, Any]:
    """Built-in defaults: hash a Docker build context the way `docker build` sees it."""
    return {
        "ignore_file": DOCKERIGNORE,
        "always_include": ["Dockerfile", DOCKERIGNORE],
        "truncate_length": DEFAULT_TRUNCATE_LENGTH,
        "matcher": "dockerignore",
        "logging": {
            "level": "WARNING",
            "file": None,
        },
    }


def find_project_root(path: Path) -> Path | None:
    """Nearest directory at or above path that holds .ctxhash.json, or None."""
    start = path.resolve()
    if start.is_file():
        start = start.parent
    for directory in (start, *start.parents):
        if project_config_path(directory).is_file():
            return directory
    return None


def read_config_file(path: Path) -> dict[str, Any] | None:
    """
    JSON object stored at path, or None when there is nothing usable there.

    Unreadable files, invalid JSON and non-object documents are logged and skipped.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Cannot read config %s: %s", path, e)
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring invalid JSON in %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top level must be a JSON object", path)
        return None
    return data


def write_config(path: Path, data: dict[str, Any]) -> None:
    """Write data as indented JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _overlay(base: dict[str, Any], layer: dict[str, Any]) -> dict[str, Any]:
    """Copy layer onto base; nested objects such as "logging" are merged key by key."""
    for key, value in layer.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _overlay(current, value)
        else:
            base[key] = value
    return base


def config_layers(project_root: Path | None) -> list[Path]:
    """Existing config files for project_root, lowest precedence first."""
    candidates = [global_config_path()]
    if project_root is not None:
        candidates.append(project_config_path(project_root.resolve()))
    return [p for p in candidates if p.is_file()]


def load_config(project_root: Path | None = None) -> dict[str, Any]:
    """
    Effective configuration: defaults, then ~/.ctxhash/config.json, then the
    project's .ctxhash.json. Values are not type-checked here (see validate_config).
    """
    merged = default_config()
    for path in config_layers(project_root):
        layer = read_config_file(path)
        if layer is not None:
            _overlay(merged, layer)
    return merged


def _check_setting(key: str, value: Any) -> Any:
    """Return value if it suits key; raise ConfigError otherwise."""
    if key == "ignore_file":
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"ignore_file must be a non-empty string, got {value!r}")
    elif key == "always_include":
        if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
            raise ConfigError(f"always_include must be a list of relative paths, got {value!r}")
    elif key == "truncate_length":
        # bool is an int subclass; "true" is not a length
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= FULL_HASH_LENGTH:
            raise ConfigError(
                f"truncate_length must be an integer between 0 and {FULL_HASH_LENGTH}, got {value!r}"
            )
    elif key == "matcher":
        if value not in MATCHERS:
            raise ConfigError(f"matcher must be one of {', '.join(MATCHERS)}, got {value!r}")
    elif key == "logging.level":
        if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
            raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    elif key == "logging.file":
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"logging.file must be a path or null, got {value!r}")
    else:
        raise ConfigError(f"unknown setting {key!r} (known: {', '.join(SETTINGS)})")
    return value


def get_setting(config: dict[str, Any], key: str) -> Any:
    """Value of a possibly dotted key ("logging.level"); None if absent."""
    section, _, name = key.rpartition(".")
    source = config.get(section) if section else config
    return source.get(name) if isinstance(source, dict) else None


def set_setting(config: dict[str, Any], key: str, value: Any) -> None:
    """Store value under a possibly dotted key, creating the nested object if needed."""
    section, _, name = key.rpartition(".")
    target = config
    if section:
        if not isinstance(config.get(section), dict):
            config[section] = {}
        target = config[section]
    target[name] = value


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Type-check every known setting of a merged config; return it unchanged."""
    if not isinstance(config.get("logging"), dict):
        raise ConfigError(f"logging must be an object, got {config.get('logging')!r}")
    for key in SETTINGS:
        _check_setting(key, get_setting(config, key))
    return config


def parse_setting(key: str, text: str) -> Any:
    """
    Convert a command-line string into the typed value for key and check it.

    always_include takes a comma-separated list; an empty logging.file means none.
    """
    text = text.strip()
    value: Any
    if key == "truncate_length":
        try:
            value = int(text)
        except ValueError:
            raise ConfigError(f"truncate_length must be an integer, got {text!r}") from None
    elif key == "always_include":
        value = [p.strip() for p in text.split(",") if p.strip()]
    elif key == "logging.level":
        value = text.upper()
    elif key == "logging.file":
        value = text or None
    else:
        value = text
    return _check_setting(key, value)
