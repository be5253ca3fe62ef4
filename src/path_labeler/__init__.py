"""
Path Labeler

GitHub Pull Request 변경 경로 기반 자동 라벨링 시스템
"""

__version__ = "1.0.0"

from .api import PathLabeler, LabelingResult
from .errors import LabelerError, ConfigurationError
from .labeling import parse_policy, load_policy, reconcile
from .matching import GlobMatcher, all_files_match

__all__ = [
    "PathLabeler",
    "LabelingResult",
    "LabelerError",
    "ConfigurationError",
    "parse_policy",
    "load_policy",
    "reconcile",
    "GlobMatcher",
    "all_files_match",
]
