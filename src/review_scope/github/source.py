"""
Pull Request Source

Binds a GitHubClient to one pull request and adapts API payloads into
the values the review scope resolver works with.
"""

import logging
from typing import List, Optional, Tuple

from ..models.change_set import ChangedFile, ChangeSet
from .client import GitHubClient, GitHubAPIError


logger = logging.getLogger(__name__)


class FetchFailure(Exception):
    """Fetching a change set from the host failed."""
    def __init__(self, base: str, head: str, cause: Optional[Exception] = None):
        message = f"Failed to fetch changes {base}...{head}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.base = base
        self.head = head
        self.cause = cause


class PullRequestSource:
    """
    Review-host collaborator for a single pull request.

    Exposes the three operations the resolver needs: the PR's base and
    head commits, the change set between two commits, and the comment
    bodies in posting order.
    """

    def __init__(self, client: GitHubClient, owner: str, repo: str, pr_number: int):
        self.client = client
        self.owner = owner
        self.repo = repo
        self.pr_number = pr_number
        self._commits: Optional[Tuple[str, str]] = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}#{self.pr_number}"

    def get_pull_request_commits(self) -> Tuple[str, str]:
        """
        Get the original base and current head commit of the pull request.

        Returns:
            Tuple of (base_sha, head_sha)
        """
        if self._commits is None:
            pr_data = self.client.get_pull_request(self.owner, self.repo, self.pr_number)
            self._commits = (pr_data['base']['sha'], pr_data['head']['sha'])
            logger.debug(f"{self.full_name}: base {self._commits[0]}, head {self._commits[1]}")
        return self._commits

    def get_change_set(self, base: str, head: str) -> List[ChangedFile]:
        """
        Get the files changed between two commits.

        Raises:
            FetchFailure: If the host request fails or returns an unusable payload
        """
        try:
            files_data = self.client.get_files_between_commits(self.owner, self.repo, base, head)
        except GitHubAPIError as e:
            logger.error(f"{self.full_name}: fetching {base}...{head} failed: {e}")
            raise FetchFailure(base, head, e) from e

        try:
            change_set = ChangeSet(base, head, (ChangedFile.from_github(file_data) for file_data in files_data))
        except (KeyError, ValueError) as e:
            logger.error(f"{self.full_name}: invalid file list for {base}...{head}: {e!r}")
            raise FetchFailure(base, head, e) from e

        return list(change_set)

    def list_review_comments(self) -> List[str]:
        """Get comment bodies, oldest first."""
        comments = self.client.list_issue_comments(self.owner, self.repo, self.pr_number)
        return [comment.get('body') or '' for comment in comments]
