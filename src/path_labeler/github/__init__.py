"""
GitHub Integration Layer

This module provides GitHub API integration for pull request file
listing, labeler configuration retrieval and label mutation.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .context import LabelerContext

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'LabelerContext']
