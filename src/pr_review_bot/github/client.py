"""
GitHub API Client

Handles GitHub API authentication, rate limit tracking, and communication.
Provides methods for PR metadata, diff retrieval and review submission.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests

from ..models.review import CommentRecord


logger = logging.getLogger(__name__)

DIFF_MEDIA_TYPE = 'application/vnd.github.v3.diff'
REVIEW_EVENT = 'COMMENT'


class GitHubAPIError(Exception):
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
    GitHub API client with authentication and error handling.

    Provides methods for:
    - PR metadata retrieval
    - PR diff and commit range diff retrieval
    - Review submission with inline comments

    Requests are not retried; any API failure is raised to the caller.
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: float = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (GITHUB_TOKEN of the workflow)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Per-request timeout in seconds
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()
        self.rate_limit_remaining: Optional[int] = None
        self.rate_limit_reset: Optional[datetime] = None

    @classmethod
    def from_config(cls, config) -> "GitHubClient":
        """Create client from GitHubConfig."""
        return cls(config.token, base_url=config.api_base_url, timeout=config.timeout_seconds)

    def _create_session(self) -> requests.Session:
        """Create requests session with authentication headers."""
        session = requests.Session()
        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'PR-Review-Bot/1.0'
        })
        return session

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API.

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
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}")

        self._update_rate_limit(response)

        if response.status_code == 429 or (
            response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'
        ):
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time)

        if not response.ok:
            error_data = self._error_payload(response)
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    @staticmethod
    def _error_payload(response: requests.Response) -> Dict:
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {'message': response.text[:500]}
        return data if isinstance(data, dict) else {}

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

    def get_pull_request_diff(self, owner: str, repo: str, pr_number: int) -> str:
        """
        Get the full unified diff of a pull request.

        Returns:
            Raw diff text (may be empty)
        """
        logger.info(f"Fetching PR diff for {owner}/{repo}#{pr_number}")

        response = self._make_request(
            'GET',
            f'/repos/{owner}/{repo}/pulls/{pr_number}',
            headers={'Accept': DIFF_MEDIA_TYPE}
        )
        return response.text or ''

    def compare_commits_diff(self, owner: str, repo: str, base: str, head: str) -> str:
        """
        Get the unified diff between two commits.

        Args:
            owner: Repository owner
            repo: Repository name
            base: Base commit SHA (event "before")
            head: Head commit SHA (event "after")

        Returns:
            Raw diff text (may be empty)
        """
        logger.info(f"Fetching compare diff for {owner}/{repo} {base[:7]}...{head[:7]}")

        response = self._make_request(
            'GET',
            f'/repos/{owner}/{repo}/compare/{base}...{head}',
            headers={'Accept': DIFF_MEDIA_TYPE}
        )
        return response.text or ''

    def create_review(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        comments: List[CommentRecord]
    ) -> Dict:
        """
        Submit one review with all inline comments attached.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            comments: Inline comments to attach

        Returns:
            Created review data
        """
        logger.info(f"Submitting review with {len(comments)} comments to {owner}/{repo}#{pr_number}")

        response = self._make_request(
            'POST',
            f'/repos/{owner}/{repo}/pulls/{pr_number}/reviews',
            json={
                'event': REVIEW_EVENT,
                'comments': [comment.to_payload() for comment in comments],
            }
        )
        return response.json() if response.content else {}
