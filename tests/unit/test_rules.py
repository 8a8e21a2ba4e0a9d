"""Unit tests for ignore-file parsing and rule compilation."""

from __future__ import annotations

import pytest

from ctxhash.errors import PatternError
from ctxhash.ignore.glob import translate
from ctxhash.ignore.rules import DockerignoreParser, IgnoreRule, RuleSet, compile_rules


def _rule(pattern: str) -> IgnoreRule:
    return IgnoreRule.from_pattern(pattern)


# --- DockerignoreParser ---


def test_parser_strips_comments_and_blanks() -> None:
    """Comments and blank lines are dropped; surrounding whitespace is stripped."""
    text = "# comment\n\n*.pyc\n  \n  __pycache__/  \n   # indented comment\n"
    assert DockerignoreParser().parse(text) == ["*.pyc", "__pycache__/"]


def test_parser_keeps_escaped_hash() -> None:
    assert DockerignoreParser().parse("\\#file\n#real comment\n") == ["\\#file"]


def test_parser_handles_crlf() -> None:
    assert DockerignoreParser().parse("a\r\nb\r\n") == ["a", "b"]


# --- compile_rules ---


def test_compile_rules_keeps_file_order() -> None:
    rules = compile_rules("*\n!*.go\nvendor/\n")
    assert [r.pattern for r in rules] == ["*", "!*.go", "vendor/"]
    assert len(rules) == 3


def test_compile_rules_empty_text() -> None:
    rules = compile_rules("# only a comment\n\n")
    assert len(rules) == 0
    assert rules.has_negation is False


def test_has_negation() -> None:
    assert compile_rules("*.md").has_negation is False
    assert compile_rules("*.md\n!README.md").has_negation is True


def test_rule_flags() -> None:
    rule = _rule("!/build/")
    assert rule.negated is True
    assert rule.anchored is True
    assert rule.directory_only is True
    plain = _rule("*.go")
    assert (plain.negated, plain.anchored, plain.directory_only) == (False, False, False)


def test_escaped_bang_is_literal() -> None:
    rule = _rule("\\!important.txt")
    assert rule.negated is False
    assert rule.matches("!important.txt", False)
    assert not rule.matches("important.txt", False)


def test_escaped_hash_is_literal() -> None:
    rule = _rule("\\#file")
    assert rule.matches("#file", False)
    assert not rule.matches("file", False)


@pytest.mark.parametrize("pattern", ["!", "/", "!/", "./"])
def test_empty_patterns_rejected(pattern: str) -> None:
    with pytest.raises(PatternError):
        _rule(pattern)


@pytest.mark.parametrize("pattern", ["[abc", "*.[", "[]", "[!]", "[z-a]", "foo\\"])
def test_invalid_glob_rejected(pattern: str) -> None:
    with pytest.raises(PatternError) as excinfo:
        compile_rules(f"ok.txt\n{pattern}\n")
    assert excinfo.value.pattern is not None
    assert isinstance(excinfo.value, ValueError)


# --- matching a single rule ---


def test_unanchored_matches_at_any_depth() -> None:
    rule = _rule("*.go")
    assert rule.matches("main.go", False)
    assert rule.matches("cmd/api/main.go", False)
    assert not rule.matches("main.go.bak", False)


def test_leading_slash_anchors_to_root() -> None:
    rule = _rule("/temp")
    assert rule.matches("temp", False)
    assert not rule.matches("sub/temp", False)


def test_inner_slash_is_relative_to_root() -> None:
    rule = _rule("cmd/*.go")
    assert rule.matches("cmd/main.go", False)
    assert not rule.matches("x/cmd/main.go", False)
    assert not rule.matches("cmd/api/main.go", False)


def test_double_star_prefix() -> None:
    rule = _rule("**/*_test.go")
    assert rule.matches("main_test.go", False)
    assert rule.matches("pkg/a/util_test.go", False)
    assert not rule.matches("pkg/util.go", False)


def test_double_star_middle() -> None:
    rule = _rule("a/**/b")
    assert rule.matches("a/b", False)
    assert rule.matches("a/x/y/b", False)
    assert not rule.matches("c/a/b", False)


def test_double_star_suffix() -> None:
    rule = _rule("cmd/**")
    assert rule.matches("cmd/api", True)
    assert rule.matches("cmd/api/main.go", False)
    assert not rule.matches("cmd", True)


def test_single_char_wildcard() -> None:
    rule = _rule("?.txt")
    assert rule.matches("a.txt", False)
    assert not rule.matches("ab.txt", False)
    assert rule.matches("dir/a.txt", False)


def test_character_class() -> None:
    rule = _rule("*.[oa]")
    assert rule.matches("main.o", False)
    assert rule.matches("lib.a", False)
    assert not rule.matches("lib.so", False)


def test_negated_character_class() -> None:
    rule = _rule("[!a]")
    assert rule.matches("b", False)
    assert not rule.matches("a", False)
    caret = _rule("[^a]")
    assert caret.matches("b", False)
    assert not caret.matches("a", False)


def test_character_class_range() -> None:
    rule = _rule("v[0-9].txt")
    assert rule.matches("v7.txt", False)
    assert not rule.matches("vx.txt", False)


def test_directory_only_rule() -> None:
    rule = _rule("build/")
    assert rule.matches("build", True)
    assert rule.matches("src/build", True)
    assert not rule.matches("build", False)
    assert not rule.matches("build.go", False)


def test_regex_metacharacters_are_literal() -> None:
    rule = _rule("file(1)+.txt")
    assert rule.matches("file(1)+.txt", False)
    assert not rule.matches("file1.txt", False)


def test_redundant_slashes_collapsed() -> None:
    assert _rule("a//b").matches("a/b", False)
    assert _rule("./a/b").matches("a/b", False)


def test_star_does_not_cross_separator() -> None:
    assert translate("a*b") == "a[^/]*b"
    assert not _rule("/a*b").matches("a/b", False)


def test_rule_set_negation_flag_fixed_at_construction() -> None:
    rules = RuleSet((_rule("*.md"), _rule("!README.md")))
    assert rules.has_negation is True
    assert RuleSet((_rule("*.md"),)).has_negation is False
    assert RuleSet().has_negation is False
    assert [r.pattern for r in rules] == ["*.md", "!README.md"]
