"""
Policy Evaluator

Decides whether a label's glob set covers the whole footprint of a
pull request: every changed file must fall under at least one pattern.
"""

import logging
from functools import lru_cache
from typing import Iterable, List, Sequence, Union

from ..models.policy import GlobPattern
from .glob import GlobMatcher


logger = logging.getLogger(__name__)

PatternLike = Union[str, GlobPattern, GlobMatcher]


@lru_cache(maxsize=1024)
def get_matcher(pattern: Union[str, GlobPattern]) -> GlobMatcher:
    """Compiled matcher for a pattern, built once and reused across labels and runs."""
    return GlobMatcher(pattern)


def compile_patterns(patterns: Iterable[PatternLike]) -> List[GlobMatcher]:
    """Turn raw strings / GlobPatterns into matchers, keeping order."""
    return [p if isinstance(p, GlobMatcher) else get_matcher(p) for p in patterns]


def is_match(changed_file: str, matchers: Sequence[GlobMatcher]) -> bool:
    """
    Check one file against a label's matchers.

    Negated patterns act as exclusions and are checked first: a file that one
    of them rejects is not covered. Otherwise the file is covered when any
    positive pattern matches it, or when the set holds only negated patterns.
    """
    logger.debug(f"    matching patterns against file {changed_file}")
    if not matchers:
        return False

    inclusions = []
    for matcher in matchers:
        if not matcher.negated:
            inclusions.append(matcher)
            continue
        logger.debug(f"   - {matcher}")
        if not matcher.matches(changed_file):
            logger.debug(f"   excluded by {matcher}")
            return False

    if not inclusions:
        return True

    for matcher in inclusions:
        logger.debug(f"   - {matcher}")
        if matcher.matches(changed_file):
            return True

    logger.debug(f"   no pattern matched {changed_file}")
    return False


def all_files_match(changed_files: Sequence[str], patterns: Sequence[PatternLike]) -> bool:
    """
    Check whether every changed file is covered by the pattern set.

    Args:
        changed_files: Paths modified by the pull request
        patterns: The label's patterns

    Returns:
        True if no file fails to match (vacuously True for no files)
    """
    matchers = compile_patterns(patterns)

    for changed_file in changed_files:
        if not is_match(changed_file, matchers):
            return False

    return True
