"""Last-match-wins evaluation of a RuleSet, with per-directory state for descendants."""

from __future__ import annotations

from dataclasses import dataclass

from ctxhash.ignore.rules import RuleSet


@dataclass(frozen=True)
class MatchState:
    """
    Match result for one directory, handed to its children.

    hits[i] is True when rule i matched the directory or one of its ancestors;
    children inherit those hits instead of re-checking every ancestor.
    """

    hits: tuple[bool, ...]
    excluded: bool


def _ancestors(path: str) -> list[str]:
    """Proper ancestor directories of a relative path, shallowest first ("a/b/c" -> ["a", "a/b"])."""
    parts = path.split("/")[:-1]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


class RuleMatcher:
    """PatternMatcher over a compiled RuleSet."""

    def __init__(self, rules: RuleSet) -> None:
        self.rules = rules
        self._has_negation = rules.has_negation

    @property
    def has_negation(self) -> bool:
        return self._has_negation

    def match(
        self,
        path: str,
        is_dir: bool,
        parent_state: MatchState | None = None,
    ) -> tuple[bool, MatchState]:
        """
        Return (excluded, state) for a root-relative path.

        A rule hits when it matches the path or any ancestor directory; the last
        hitting rule decides. Without parent_state, ancestors are checked directly.
        """
        if parent_state is not None and len(parent_state.hits) != len(self.rules):
            raise ValueError("parent state was produced by a different rule set")

        hits: list[bool] = []
        excluded = False
        ancestors: list[str] | None = None
        for i, rule in enumerate(self.rules):
            hit = parent_state is not None and parent_state.hits[i]
            if not hit:
                hit = rule.matches(path, is_dir)
            if not hit and parent_state is None:
                if ancestors is None:
                    ancestors = _ancestors(path)
                hit = any(rule.matches(a, True) for a in ancestors)
            hits.append(hit)
            if hit:
                excluded = not rule.negated
        return excluded, MatchState(tuple(hits), excluded)
