"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Provides methods for pull request metadata, comment history and
commit-range file diffs.
"""

import time
import logging
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


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
    GitHub API client with authentication, rate limiting, and error handling.

    Provides methods for:
    - Pull request metadata and comment history
    - Changed files between two commits
    - API rate limit management
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30,
        per_page: int = 100,
        max_retries: int = 3,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Request timeout in seconds
            per_page: Page size for paginated endpoints
            max_retries: Transport-level retries for 429/5xx responses
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.per_page = per_page
        self.max_retries = max_retries
        self.session = self._create_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.session.headers)

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        # Configure retry strategy
        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        # Set authentication headers
        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'AI-PR-Review-Scope/1.0'
        })

        return session

    def _check_rate_limit(self) -> None:
        """Check and handle GitHub API rate limits."""
        if self.rate_limit_remaining <= 10 and datetime.now() < self.rate_limit_reset:
            wait_time = (self.rate_limit_reset - datetime.now()).total_seconds()
            if wait_time > 0:
                logger.warning(f"Rate limit low ({self.rate_limit_remaining}), resets in {wait_time:.1f}s")
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
            raise GitHubAPIError(f"Request failed: {str(e)}") from e

        self._update_rate_limit(response)

        if response.status_code == 429 or (
            response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'
        ):
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time)

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def _get_paginated(self, endpoint: str, key: Optional[str] = None) -> List[Any]:
        """
        Collect every page of a list endpoint.

        Args:
            endpoint: API endpoint
            key: Field holding the list when the payload is an object

        Returns:
            Concatenated items of all pages
        """
        items: List[Any] = []
        page = 1

        while True:
            response = self._make_request(
                'GET',
                endpoint,
                params={'page': page, 'per_page': self.per_page}
            )

            payload = response.json()
            page_items = payload.get(key, []) if key else payload
            if not page_items:
                break

            items.extend(page_items)

            if len(page_items) < self.per_page:
                break

            page += 1

        return items

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

    def list_issue_comments(self, owner: str, repo: str, pr_number: int) -> List[Dict]:
        """
        Get the conversation comments of a pull request, oldest first.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            List of comment data
        """
        logger.info(f"Fetching comments for {owner}/{repo}#{pr_number}")

        comments = self._get_paginated(f'/repos/{owner}/{repo}/issues/{pr_number}/comments')

        logger.info(f"Found {len(comments)} comments")
        return comments

    def get_files_between_commits(self, owner: str, repo: str, base: str, head: str) -> List[Dict]:
        """
        Get the files changed between two commits.

        Args:
            owner: Repository owner
            repo: Repository name
            base: Base commit SHA
            head: Head commit SHA

        Returns:
            List of file change data (filename, status, patch, ...)
        """
        logger.info(f"Fetching changed files for {owner}/{repo} {base[:7]}...{head[:7]}")

        files = self._get_paginated(f'/repos/{owner}/{repo}/compare/{base}...{head}', key='files')

        logger.info(f"Found {len(files)} changed files")
        return files

    def test_authentication(self) -> Tuple[bool, Dict]:
        """
        Test GitHub API authentication.

        Returns:
            Tuple of (success, user_info)
        """
        try:
            response = self._make_request('GET', '/user')
            user_data = response.json()
            logger.info(f"Authentication successful for user: {user_data.get('login')}")
            return True, user_data
        except GitHubAPIError as e:
            logger.error(f"Authentication failed: {e}")
            return False, {}

    def get_rate_limit_status(self) -> Dict:
        """
        Get current rate limit status.

        Returns:
            Rate limit information; the last known values plus an ``error``
            entry when the request fails
        """
        try:
            response = self._make_request('GET', '/rate_limit')
            return response.json()
        except GitHubAPIError as e:
            logger.error(f"Failed to get rate limit status: {e}")
            return {
                'rate': {
                    'remaining': self.rate_limit_remaining,
                    'reset': int(self.rate_limit_reset.timestamp())
                },
                'error': str(e)
            }
