"""
Path Matching

Glob matching and pattern-set evaluation against changed files.
"""

from .glob import GlobMatcher, expand_braces, match_path
from .evaluator import all_files_match, is_match

__all__ = ['GlobMatcher', 'expand_braces', 'match_path', 'all_files_match', 'is_match']
