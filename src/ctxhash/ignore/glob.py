"""Translate ignore-file glob patterns into regular expressions."""

from __future__ import annotations

import re

from ctxhash.errors import PatternError

# Any number of whole path segments, including none.
_ANY_SEGMENTS = "(?:.*/)?"


def translate(pattern: str) -> str:
    """
    Return a regex source string equivalent to a cleaned glob pattern.

    The result is meant for re.fullmatch against a slash-separated relative path.
    Raises PatternError for unterminated or empty character classes, reversed
    ranges and a trailing lone backslash.
    """
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                at_segment_start = i == 0 or pattern[i - 1] == "/"
                end = i + 2
                if at_segment_start and end == n:
                    parts.append(".*")
                    i = end
                    continue
                if at_segment_start and pattern[end] == "/":
                    parts.append(_ANY_SEGMENTS)
                    i = end + 1
                    continue
                # "**" inside a segment behaves like "*"
                while end < n and pattern[end] == "*":
                    end += 1
                parts.append("[^/]*")
                i = end
                continue
            parts.append("[^/]*")
            i += 1
        elif c == "?":
            parts.append("[^/]")
            i += 1
        elif c == "[":
            cls, i = _translate_class(pattern, i)
            parts.append(cls)
        elif c == "\\":
            if i + 1 >= n:
                raise PatternError("trailing backslash", pattern)
            parts.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            parts.append(re.escape(c))
            i += 1
    return "".join(parts)


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the bracket expression at pattern[start]; return (regex, next index)."""
    i = start + 1
    n = len(pattern)
    negate = False
    if i < n and pattern[i] in "!^":
        negate = True
        i += 1

    chars: list[str] = []
    while True:
        if i >= n:
            raise PatternError("unterminated character class", pattern)
        c = pattern[i]
        if c == "]":
            i += 1
            break
        if c == "\\":
            if i + 1 >= n:
                raise PatternError("unterminated character class", pattern)
            c = pattern[i + 1]
            i += 2
        else:
            i += 1
        # Range "lo-hi"; a "-" before the closing bracket is literal.
        if i + 1 < n and pattern[i] == "-" and pattern[i + 1] != "]":
            hi = pattern[i + 1]
            i += 2
            if hi == "\\":
                if i >= n:
                    raise PatternError("unterminated character class", pattern)
                hi = pattern[i]
                i += 1
            if hi < c:
                raise PatternError("reversed range in character class", pattern)
            chars.append(f"{re.escape(c)}-{re.escape(hi)}")
        else:
            chars.append(re.escape(c))

    if not chars:
        raise PatternError("empty character class", pattern)
    body = "".join(chars)
    if negate:
        return f"[^{body}/]", i
    return f"[{body}]", i
