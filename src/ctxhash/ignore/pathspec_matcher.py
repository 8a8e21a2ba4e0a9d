"""gitignore-flavoured PatternMatcher backed by pathspec's GitIgnoreSpec."""

from __future__ import annotations

from pathspec import GitIgnoreSpec

from ctxhash.errors import PatternError


def build_spec(patterns: list[str]) -> GitIgnoreSpec:
    """Build a GitIgnoreSpec from pattern lines. Raises PatternError on invalid syntax."""
    try:
        return GitIgnoreSpec.from_lines(patterns)
    except ValueError as e:
        raise PatternError(f"invalid gitignore pattern ({e})") from e


class PathSpecMatcher:
    """
    Match with git's own rules: a path inside an excluded directory stays
    excluded, so the parent's decision is inherited rather than re-evaluated.
    """

    def __init__(self, patterns: list[str]) -> None:
        self.spec = build_spec(patterns)
        self._has_negation = any(p.startswith("!") for p in patterns)

    @property
    def has_negation(self) -> bool:
        return self._has_negation

    def match(self, path: str, is_dir: bool, parent_state: bool | None = None) -> tuple[bool, bool]:
        if parent_state:
            return True, True
        # Trailing slash so directory-only patterns (e.g. "node_modules/") match directories
        candidate = path + "/" if is_dir else path
        excluded = bool(self.spec.match_file(candidate))
        return excluded, excluded
