"""
Glob Matcher

Matches repository-relative file paths against a single glob pattern.

Semantics:
- Patterns are anchored: the whole path must match the whole pattern.
- '*' and '?' match within a single path segment, '[...]' is a character class.
- '**' as a whole segment matches zero or more path segments.
- '{a,b}' and '{1..3}' expand into alternatives before matching.
- A leading '!' negates the result of the pattern.
- Wildcards do not match segments starting with '.', unless the pattern
  segment itself starts with a literal '.'.
"""

import fnmatch
import logging
import re
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple, Union

from ..models.policy import GlobPattern


logger = logging.getLogger(__name__)

GLOBSTAR = "**"
SEPARATOR = "/"

# Patterns expanding past this many alternatives are kept literal
MAX_BRACE_EXPANSION = 1000

_NUMERIC_RANGE = re.compile(r"^(-?\d+)\.\.(-?\d+)$")
_ALPHA_RANGE = re.compile(r"^([a-zA-Z])\.\.([a-zA-Z])$")


class _ExpansionTooLarge(Exception):
    pass


def _expand_range(body: str) -> Optional[List[str]]:
    """Expand '1..3' or 'a..c' style brace bodies; None if body is not a range."""
    numeric = _NUMERIC_RANGE.match(body)
    if numeric:
        start, end = int(numeric.group(1)), int(numeric.group(2))
        if abs(end - start) >= MAX_BRACE_EXPANSION:
            raise _ExpansionTooLarge(body)
        step = 1 if end >= start else -1
        return [str(n) for n in range(start, end + step, step)]

    alpha = _ALPHA_RANGE.match(body)
    if alpha:
        start, end = ord(alpha.group(1)), ord(alpha.group(2))
        step = 1 if end >= start else -1
        return [chr(c) for c in range(start, end + step, step)]

    return None


def _split_brace_group(pattern: str, start: int) -> Tuple[Optional[int], List[str]]:
    """
    Split the brace group opening at ``start`` into its alternatives.

    Returns:
        Tuple of (index of the closing brace, alternatives). The index is None
        when the group is unclosed or has neither a top-level comma nor a range,
        in which case the braces are literal.
    """
    depth = 0
    parts = []
    current = start + 1

    for i in range(start + 1, len(pattern)):
        c = pattern[i]
        if c == "{":
            depth += 1
        elif c == "}":
            if depth == 0:
                parts.append(pattern[current:i])
                if len(parts) > 1:
                    return i, parts
                expanded = _expand_range(parts[0])
                if expanded is not None:
                    return i, expanded
                return None, []
            depth -= 1
        elif c == "," and depth == 0:
            parts.append(pattern[current:i])
            current = i + 1

    return None, []


def _expand(pattern: str) -> List[str]:
    start = pattern.find("{")
    while start != -1:
        end, alternatives = _split_brace_group(pattern, start)
        if end is not None:
            prefix, suffix = pattern[:start], pattern[end + 1:]
            heads = [head for alternative in alternatives for head in _expand(alternative)]
            tails = _expand(suffix)
            if len(heads) * len(tails) > MAX_BRACE_EXPANSION:
                raise _ExpansionTooLarge(pattern)
            return [prefix + head + tail for head in heads for tail in tails]
        start = pattern.find("{", start + 1)

    return [pattern]


def expand_braces(pattern: str) -> List[str]:
    """
    Expand brace alternation in a glob pattern.

    Example:
        'src/{a,b}/*.{js,ts}' -> ['src/a/*.js', 'src/a/*.ts', 'src/b/*.js', 'src/b/*.ts']

    A pattern expanding to more than MAX_BRACE_EXPANSION alternatives is
    returned unexpanded and so only matches itself literally.
    """
    try:
        return _expand(pattern)
    except _ExpansionTooLarge:
        logger.debug(f"brace expansion of {pattern!r} is too large, matching it literally")
        return [pattern]


def _normalize_segment(segment: str) -> str:
    # fnmatch only understands '[!...]' for negated classes
    return segment.replace("[^", "[!")


def _match_segment(name: str, pattern: str) -> bool:
    if name.startswith(".") and not pattern.startswith("."):
        return False
    return fnmatch.fnmatchcase(name, pattern)


def _match_parts(path_parts: Sequence[str], pat_parts: Sequence[str]) -> bool:
    @lru_cache(maxsize=None)
    def rec(i: int, j: int) -> bool:
        if j >= len(pat_parts):
            return i >= len(path_parts)

        pat = pat_parts[j]
        if pat == GLOBSTAR:
            if rec(i, j + 1):
                return True
            return (
                i < len(path_parts)
                and not path_parts[i].startswith(".")
                and rec(i + 1, j)
            )

        if i >= len(path_parts):
            return False

        if not _match_segment(path_parts[i], pat):
            return False
        return rec(i + 1, j + 1)

    return rec(0, 0)


class GlobMatcher:
    """
    Compiled glob pattern with optional negation.

    The pattern is brace-expanded and split into segments once; matching a
    path is then a pure function of (pattern, path).
    """

    def __init__(self, pattern: Union[str, GlobPattern]):
        """
        Initialize glob matcher.

        Args:
            pattern: Raw pattern string (may start with '!') or a GlobPattern
        """
        self.glob = pattern if isinstance(pattern, GlobPattern) else GlobPattern(pattern)
        self._alternatives = [
            tuple(_normalize_segment(s) for s in alternative.split(SEPARATOR))
            for alternative in expand_braces(self.glob.pattern)
        ]

    @property
    def pattern(self) -> str:
        """Effective pattern, without the negation prefix."""
        return self.glob.pattern

    @property
    def negated(self) -> bool:
        return self.glob.negated

    def _structural_match(self, path: str) -> bool:
        if not self.pattern or not path:
            return self.pattern == path

        path_parts = path.split(SEPARATOR)
        for pat_parts in self._alternatives:
            if pat_parts == ("",):
                continue
            if _match_parts(path_parts, pat_parts):
                return True
        return False

    def matches(self, path: str) -> bool:
        """
        Test a path against this pattern.

        Args:
            path: File path relative to the repository root

        Returns:
            True if the path matches (inverted for negated patterns)
        """
        return self.negated != self._structural_match(path)

    def __repr__(self) -> str:
        return f"GlobMatcher({str(self)!r})"

    def __str__(self) -> str:
        return ("!" if self.negated else "") + self.pattern


def match_path(path: str, pattern: Union[str, GlobPattern]) -> bool:
    """Match a single path against a single (possibly negated) pattern."""
    return GlobMatcher(pattern).matches(path)
