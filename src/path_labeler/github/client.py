"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Provides the pull request, contents and issue label calls the labeler needs.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
from urllib.parse import quote
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import LabelerError
from ..models.pull_request import RepositoryContent


logger = logging.getLogger(__name__)


class GitHubAPIError(LabelerError):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=429)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub API client with authentication, rate limiting, and error handling.

    Provides methods for:
    - Pull request and changed file retrieval
    - Repository file content at a given ref
    - Adding and removing issue labels
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: int = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (Actions token or personal access token)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Per-request timeout in seconds
        """
        if not token:
            raise ValueError("GitHub token is required")
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        # Configure retry strategy
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=None,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        # Set authentication headers
        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'Path-Labeler/1.0'
        })

        return session

    def _check_rate_limit(self) -> None:
        """Check and handle GitHub API rate limits."""
        if self.rate_limit_remaining <= 0 and datetime.now() < self.rate_limit_reset:
            wait_time = (self.rate_limit_reset - datetime.now()).total_seconds()
            logger.warning(f"Rate limit exhausted, resets in {wait_time:.1f}s")
            raise RateLimitExceeded(self.rate_limit_reset)

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API with rate limiting.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors
            RateLimitExceeded: When rate limit is exceeded
        """
        self._check_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}")

        self._update_rate_limit(response)

        if response.status_code == 429:
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time)

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                # HTML error pages from proxies or the web frontend
                error_data = {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> Dict:
        """
        Get pull request information.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            Pull request data
        """
        logger.info(f"Fetching PR {owner}/{repo}#{pr_number}")

        response = self._make_request('GET', f'/repos/{owner}/{repo}/pulls/{pr_number}')
        return response.json()

    def get_pull_request_files(self, owner: str, repo: str, pr_number: int) -> List[Dict]:
        """
        Get files changed in a pull request, following pagination.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            List of file change data
        """
        logger.debug(f"fetching changed files for pr #{pr_number}")

        files = []
        page = 1
        per_page = 100

        while True:
            response = self._make_request(
                'GET',
                f'/repos/{owner}/{repo}/pulls/{pr_number}/files',
                params={'page': page, 'per_page': per_page}
            )

            page_files = response.json()
            if not page_files:
                break

            files.extend(page_files)

            if len(page_files) < per_page:
                break

            page += 1

        logger.info(f"Found {len(files)} changed files")
        return files

    def get_file_content(self, owner: str, repo: str, path: str, ref: Optional[str] = None) -> str:
        """
        Get the decoded content of a repository file.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path inside the repository
            ref: Commit sha, branch or tag (default branch when omitted)

        Returns:
            File content as text
        """
        logger.info(f"Fetching {path} from {owner}/{repo}@{ref or 'default'}")

        params = {'ref': ref} if ref else None
        response = self._make_request(
            'GET',
            f'/repos/{owner}/{repo}/contents/{quote(path.lstrip("/"))}',
            params=params
        )
        data = response.json()
        if not isinstance(data, dict) or 'content' not in data:
            raise GitHubAPIError(f"Path is not a file: {path}", response_data=data if isinstance(data, dict) else None)

        return RepositoryContent(
            path=data.get('path', path),
            content=data['content'],
            encoding=data.get('encoding', 'base64'),
        ).text

    def add_labels(self, owner: str, repo: str, issue_number: int, labels: List[str]) -> List[Dict]:
        """
        Add labels to a pull request (issue).

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Pull request number
            labels: Label names to add

        Returns:
            All labels now on the issue
        """
        logger.info(f"Adding labels to #{issue_number}: {labels}")

        response = self._make_request(
            'POST',
            f'/repos/{owner}/{repo}/issues/{issue_number}/labels',
            json={'labels': list(labels)}
        )
        return response.json()

    def remove_label(self, owner: str, repo: str, issue_number: int, label: str) -> None:
        """
        Remove one label from a pull request (issue).

        A label that is already gone is not an error.
        """
        logger.info(f"Removing label from #{issue_number}: {label}")

        try:
            self._make_request(
                'DELETE',
                f'/repos/{owner}/{repo}/issues/{issue_number}/labels/{quote(label, safe="")}'
            )
        except GitHubAPIError as e:
            if e.status_code == 404:
                logger.warning(f"Label {label} was not on #{issue_number}")
                return
            raise

