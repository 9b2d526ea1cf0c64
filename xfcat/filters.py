"""Glob matching of entry paths."""

from __future__ import annotations

import re
from functools import lru_cache


def _parse_class(pattern: str, i: int) -> tuple[str | None, int]:
    j = i + 1
    negate = False
    if j < len(pattern) and pattern[j] in "!^":
        negate = True
        j += 1
    items: list[str] = []
    first = True
    while j < len(pattern):
        c = pattern[j]
        if c == "]" and not first:
            return ("[^" if negate else "[") + "".join(items) + "]", j + 1
        first = False
        if j + 2 < len(pattern) and pattern[j + 1] == "-" and pattern[j + 2] != "]":
            lo, hi = sorted((c, pattern[j + 2]))
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
            j += 3
        else:
            items.append(re.escape(c))
            j += 1
    return None, i


def _parse(pattern: str, i: int, nested: bool) -> tuple[str, int, str | None]:
    out: list[str] = []
    start = i
    while i < len(pattern):
        c = pattern[i]
        if nested and c in ",}":
            return "".join(out), i, c
        if c == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "*":
            j = i
            while j < len(pattern) and pattern[j] == "*":
                j += 1
            if j - i >= 2:
                at_segment_start = i == start or pattern[i - 1] == "/"
                if at_segment_start and j < len(pattern) and pattern[j] == "/":
                    out.append("(?:.*/)?")
                    j += 1
                else:
                    out.append(".*")
            else:
                out.append("[^/]*")
            i = j
        elif c == "?":
            out.append(".")
            i += 1
        elif c == "[":
            cls, j = _parse_class(pattern, i)
            if cls is None:
                out.append(re.escape(c))
                i += 1
            else:
                out.append(cls)
                i = j
        elif c == "{":
            alternatives: list[str] = []
            j = i + 1
            closed = False
            while True:
                sub, j, stop = _parse(pattern, j, True)
                alternatives.append(sub)
                if stop == ",":
                    j += 1
                    continue
                if stop == "}":
                    j += 1
                    closed = True
                break
            if closed:
                out.append("(?:" + "|".join(alternatives) + ")")
                i = j
            else:
                out.append(re.escape(c))
                i += 1
        else:
            out.append(re.escape(c))
            i += 1
    return "".join(out), i, None


@lru_cache(maxsize=64)
def _compile(pattern: str) -> tuple[re.Pattern[str], bool]:
    negate = False
    i = 0
    while i < len(pattern) and pattern[i] == "!":
        negate = not negate
        i += 1
    body, _, _ = _parse(pattern, i, False)
    return re.compile(body, re.DOTALL), negate


def glob_match(pattern: str, path: str) -> bool:
    """Match ``path`` against a glob supporting ``? * ** [..] {a,b}`` and leading ``!``."""
    regex, negate = _compile(pattern)
    return (regex.fullmatch(path) is not None) != negate


class PathFilter:
    """Selects entry paths by an optional glob pattern."""

    def __init__(self, pattern: str | None = None) -> None:
        self.pattern = pattern

    def is_filtered(self, path: str) -> bool:
        """True when a pattern is set and ``path`` does not match it."""
        return self.pattern is not None and not glob_match(self.pattern, path)