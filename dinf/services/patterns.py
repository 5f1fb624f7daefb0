from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from fnmatch import translate

from result import Err, Ok, Result

from dinf.models.dir_info import ScanError, ScanErrorCode

logger = logging.getLogger(__name__)


def _syntax_error(pattern: str) -> str | None:
    """Return a description of the first syntax problem in *pattern*, if any."""
    in_braces = False
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            if i + 1 >= n:
                return "dangling '\\'"
            i += 2
            continue
        if ch == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                return "unclosed character class; missing ']'"
            i = j + 1
            continue
        if ch == "{":
            if in_braces:
                return "nested alternate groups are not allowed"
            in_braces = True
        elif ch == "}":
            if not in_braces:
                return "unopened alternate group; missing '{'"
            in_braces = False
        i += 1
    if in_braces:
        return "unclosed alternate group; missing '}'"
    return None


def _expand_braces(pattern: str) -> tuple[str, ...]:
    start = pattern.find("{")
    end = pattern.find("}", start + 1)
    if start == -1 or end == -1:
        return (pattern,)
    choices = pattern[start + 1 : end].split(",")
    prefix = pattern[:start]
    suffix = pattern[end + 1 :]
    expanded: list[str] = []
    for choice in choices:
        expanded.extend(_expand_braces(f"{prefix}{choice}{suffix}"))
    return tuple(expanded)


def _unescape(pattern: str) -> str:
    # fnmatch has no escape syntax; a bracketed literal does the same job.
    out: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            nxt = pattern[i + 1]
            out.append(f"[{nxt}]" if nxt in "*?[]{}\\" else nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


@dataclass(slots=True, frozen=True)
class GlobSet:
    """A compiled set of glob patterns matched with OR semantics.

    ``*`` and ``?`` also match the path separator, so ``*.rs`` matches
    ``./src/main.rs``.
    """

    patterns: tuple[str, ...]
    _regex: re.Pattern[str]

    def is_match(self, path: str) -> bool:
        return self._regex.match(path) is not None


def compile_globs(patterns: Iterable[str]) -> Result[GlobSet, ScanError]:
    sources: list[str] = []
    kept: list[str] = []
    for pattern in patterns:
        problem = _syntax_error(pattern)
        if problem is not None:
            return Err(
                ScanError(
                    code=ScanErrorCode.INVALID_GLOB_PATTERN,
                    target=pattern,
                    message=f"Invalid glob pattern {pattern!r}: {problem}",
                )
            )
        kept.append(pattern)
        sources.extend(translate(_unescape(p)) for p in _expand_braces(pattern))

    try:
        regex = re.compile("|".join(f"(?:{s})" for s in sources)) if sources else re.compile(r"(?!)")
    except re.error as exc:
        joined = ",".join(kept)
        return Err(
            ScanError(
                code=ScanErrorCode.INVALID_GLOB_PATTERN,
                target=joined,
                message=f"Invalid glob pattern {joined!r}: {exc}",
            )
        )

    logger.debug("compiled %d glob pattern(s) into %d alternative(s)", len(kept), len(sources))
    return Ok(GlobSet(patterns=tuple(kept), _regex=regex))
