"""
Review Scope API

Main interface that resolves which files of a pull request the next
automated review covers, from PR metadata to reconciled patches.
"""

import logging
from typing import Any, Dict, List, Optional
from datetime import datetime
from dataclasses import dataclass, field

from .config import AppConfig, get_config
from .github.client import GitHubClient, GitHubAPIError
from .github.source import PullRequestSource, FetchFailure
from .models.review_scope import ReviewableFile, ScopeRequest
from .review.marker import format_review_marker
from .review.scope import ReviewScopeResolver


logger = logging.getLogger(__name__)


@dataclass
class ScopeResult:
    """Result of review scope resolution."""
    scope_id: str
    repository: str
    pr_number: int
    status: str
    files: List[ReviewableFile]
    processing_time: float
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'scope_id': self.scope_id,
            'repository': self.repository,
            'pr_number': self.pr_number,
            'status': self.status,
            'files': [f.to_dict() for f in self.files],
            'processing_time': self.processing_time,
            'metadata': self.metadata,
            'created_at': self.created_at.isoformat(),
        }


class ReviewScopeAPI:
    """
    Main review scope interface.

    Orchestrates one resolution run:
    1. Fetch PR commits and comment history
    2. Pick full or incremental review from the last review marker
    3. Reconcile incremental hunks against the whole PR
    4. Apply extension/path filters
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize Review Scope API.

        Args:
            config: Optional configuration object
        """
        self.config = config or get_config()
        self.resolver = ReviewScopeResolver(self.config.review)

    def _create_client(self, token: Optional[str]) -> GitHubClient:
        github = self.config.github
        return GitHubClient(
            token or github.token,
            base_url=github.api_base_url,
            timeout=github.timeout_seconds,
            per_page=github.per_page,
            max_retries=github.max_retries,
        )

    def resolve_scope(self, request: ScopeRequest) -> ScopeResult:
        """
        Resolve the review scope of a pull request.

        Args:
            request: ScopeRequest with PR information

        Returns:
            ScopeResult; status is "failed" when GitHub could not be read
        """
        start_time = datetime.now()
        scope_id = f"{request.repository}_{request.pr_number}_{int(start_time.timestamp())}"

        logger.info(f"Starting review scope resolution: {scope_id}")

        source = PullRequestSource(
            self._create_client(request.github_token),
            request.owner,
            request.repo,
            request.pr_number,
        )

        try:
            scope = self.resolver.resolve_review_scope(source)
        except (FetchFailure, GitHubAPIError) as e:
            processing_time = (datetime.now() - start_time).total_seconds()
            logger.error(f"Review scope resolution failed: {scope_id} - {e}")

            metadata: Dict[str, Any] = {'error': str(e)}
            if isinstance(e, FetchFailure):
                metadata.update({'base': e.base, 'head': e.head})

            return ScopeResult(
                scope_id=scope_id,
                repository=request.repository,
                pr_number=request.pr_number,
                status="failed",
                files=[],
                processing_time=processing_time,
                metadata=metadata,
                created_at=start_time,
            )

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(f"Review scope resolved: {scope_id} ({len(scope.files)} files, {processing_time:.2f}s)")

        return ScopeResult(
            scope_id=scope_id,
            repository=request.repository,
            pr_number=request.pr_number,
            status="completed",
            files=scope.files,
            processing_time=processing_time,
            metadata={
                'original_base': scope.original_base,
                'incremental_base': scope.incremental_base,
                'head': scope.head,
                'is_incremental': scope.is_incremental,
                'excluded': [
                    {'filename': e.filename, 'reason': e.reason.value} for e in scope.excluded
                ],
                'next_marker': format_review_marker(
                    scope.head,
                    prefix=self.config.review.marker_prefix,
                    separator=self.config.review.summary_separator,
                ),
            },
            created_at=start_time,
        )

    def get_system_health(self) -> Dict[str, Any]:
        """Get system health status."""
        health: Dict[str, Any] = {
            'status': 'healthy',
            'components': {},
            'timestamp': datetime.now().isoformat()
        }

        if not self.config.github.token:
            health['components']['github'] = {
                'status': 'degraded',
                'error': 'No GitHub token configured; requests must supply one'
            }
        else:
            rate_status = self._create_client(None).get_rate_limit_status()
            rate = rate_status.get('rate', {})
            if 'error' in rate_status:
                github_health = {'status': 'unhealthy', 'error': rate_status['error']}
            elif rate.get('remaining', 0) <= 0:
                github_health = {'status': 'degraded', 'error': 'Rate limit exhausted'}
            else:
                github_health = {'status': 'healthy'}
            github_health['rate_limit'] = {
                'remaining': rate.get('remaining'),
                'reset': rate.get('reset'),
            }
            health['components']['github'] = github_health

        # Determine overall status
        component_statuses = [comp['status'] for comp in health['components'].values()]
        if 'unhealthy' in component_statuses:
            health['status'] = 'unhealthy'
        elif 'degraded' in component_statuses:
            health['status'] = 'degraded'

        return health
