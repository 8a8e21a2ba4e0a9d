"""Ignore rules: parse dockerignore-style text and compile it into an ordered rule set."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from ctxhash.base import IgnoreParser
from ctxhash.errors import PatternError
from ctxhash.ignore.glob import translate

DOCKERIGNORE = ".dockerignore"
GITIGNORE = ".gitignore"


class DockerignoreParser:
    """
    Read .dockerignore-style text: one pattern per line, surrounding whitespace
    stripped, blank lines and '#' comments dropped.
    """

    def parse(self, text: str) -> list[str]:
        patterns: list[str] = []
        for line in text.splitlines():
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            patterns.append(s)
        return patterns


@dataclass(frozen=True)
class IgnoreRule:
    """One compiled ignore pattern."""

    pattern: str  # Line as written in the ignore file
    negated: bool  # Leading "!"
    directory_only: bool  # Trailing "/"
    anchored: bool  # Leading "/"
    regex: re.Pattern[str] = field(repr=False, compare=False)

    @classmethod
    def from_pattern(cls, pattern: str) -> IgnoreRule:
        """
        Compile one pattern line. Raises PatternError for invalid syntax.

        Patterns without an inner "/" match at any depth; anchored patterns and
        patterns with an inner "/" are matched against the whole relative path.
        """
        body = pattern
        negated = body.startswith("!")
        if negated:
            body = body[1:]
            if not body:
                raise PatternError("illegal exclusion pattern", pattern)

        anchored = body.startswith("/")
        body = body.lstrip("/")
        directory_only = body.endswith("/")
        body = body.rstrip("/")

        segments = [seg for seg in body.split("/") if seg not in ("", ".")]
        if not segments:
            raise PatternError("empty pattern", pattern)
        body = "/".join(segments)

        regex_src = translate(body)
        if not anchored and len(segments) == 1:
            regex_src = "(?:.*/)?" + regex_src
        return cls(
            pattern=pattern,
            negated=negated,
            directory_only=directory_only,
            anchored=anchored,
            regex=re.compile(regex_src, re.DOTALL),
        )

    def matches(self, path: str, is_dir: bool) -> bool:
        """True if this rule's glob matches path itself (ancestors are not considered)."""
        if self.directory_only and not is_dir:
            return False
        return self.regex.fullmatch(path) is not None


@dataclass(frozen=True)
class RuleSet:
    """Ordered, immutable sequence of rules; later rules override earlier ones."""

    rules: tuple[IgnoreRule, ...] = ()
    # True if any rule is a "!" re-inclusion; fixed when the set is built
    has_negation: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "has_negation", any(rule.negated for rule in self.rules))

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[IgnoreRule]:
        return iter(self.rules)


def compile_patterns(patterns: list[str]) -> RuleSet:
    """Compile already-parsed pattern lines, keeping their order."""
    return RuleSet(tuple(IgnoreRule.from_pattern(p) for p in patterns))


def compile_rules(text: str, parser: IgnoreParser | None = None) -> RuleSet:
    """Parse ignore-file text and compile it into a RuleSet."""
    parser = parser or DockerignoreParser()
    return compile_patterns(parser.parse(text))
