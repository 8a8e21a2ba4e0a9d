"""Ignore-file support: rule compilation and path matching."""

from ctxhash.ignore.matcher import MatchState, RuleMatcher
from ctxhash.ignore.pathspec_matcher import PathSpecMatcher
from ctxhash.ignore.rules import (
    DOCKERIGNORE,
    GITIGNORE,
    DockerignoreParser,
    IgnoreRule,
    RuleSet,
    compile_patterns,
    compile_rules,
)

__all__ = [
    "DOCKERIGNORE",
    "GITIGNORE",
    "DockerignoreParser",
    "IgnoreRule",
    "MatchState",
    "PathSpecMatcher",
    "RuleMatcher",
    "RuleSet",
    "compile_patterns",
    "compile_rules",
]
