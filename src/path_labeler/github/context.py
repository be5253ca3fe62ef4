"""
Run Context

Explicit repository / commit / pull request identity for one labeler run,
built from the GitHub Actions environment.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelerContext:
    """Repository and pull request a run operates on."""
    owner: str
    repo: str
    sha: Optional[str] = None
    pr_number: Optional[int] = None

    def __post_init__(self):
        if not self.owner or not self.repo:
            raise ValueError("Repository owner and name are required")
        if self.pr_number is not None and self.pr_number <= 0:
            raise ValueError("PR number must be positive")

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @staticmethod
    def split_repository(repository: str) -> tuple:
        """Split 'owner/repo' into its parts."""
        if repository.count('/') != 1:
            raise ValueError('Repository must be in format "owner/repo"')
        owner, repo = repository.split('/')
        return owner, repo

    @classmethod
    def from_event(cls, repository: str, event: Mapping[str, Any], sha: Optional[str] = None) -> "LabelerContext":
        """
        Build a context from a webhook event payload.

        Args:
            repository: 'owner/repo'
            event: Parsed event payload
            sha: Commit the run is for

        Returns:
            LabelerContext; pr_number is None for events without a pull request
        """
        owner, repo = cls.split_repository(repository)
        pull_request = event.get('pull_request') or {}
        pr_number = pull_request.get('number')
        return cls(owner=owner, repo=repo, sha=sha, pr_number=pr_number)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LabelerContext":
        """Build a context from GITHUB_REPOSITORY, GITHUB_SHA and GITHUB_EVENT_PATH."""
        env = os.environ if environ is None else environ

        repository = env.get('GITHUB_REPOSITORY')
        if not repository:
            raise ValueError("GITHUB_REPOSITORY is not set")

        event: Dict[str, Any] = {}
        event_path = env.get('GITHUB_EVENT_PATH')
        if event_path and Path(event_path).exists():
            with open(event_path, 'r', encoding='utf-8') as f:
                event = json.load(f)
        else:
            logger.debug("No event payload found")

        return cls.from_event(repository, event, sha=env.get('GITHUB_SHA'))
