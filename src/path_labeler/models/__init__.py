"""
Data Models

Path Labeler 시스템의 핵심 데이터 모델들
"""

from .policy import GlobPattern, Policy, ReconciliationResult
from .pull_request import LabelInfo, PullRequestInfo, PullRequestFile, RepositoryContent

__all__ = [
    "GlobPattern",
    "Policy",
    "ReconciliationResult",
    "LabelInfo",
    "PullRequestInfo",
    "PullRequestFile",
    "RepositoryContent",
]
