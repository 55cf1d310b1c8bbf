"""
GitHub Integration Layer

This module provides GitHub API integration for pull request metadata,
comment history, and commit-range diff retrieval.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .source import PullRequestSource, FetchFailure

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'PullRequestSource', 'FetchFailure']
