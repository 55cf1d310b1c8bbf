"""
Review Scope Resolver

Decides which files, and which hunks of them, a review run covers.

A run is incremental when an earlier automated review left a marker in the
comment history: only changes since the marked commit are reviewed. Those
changes can include hunks merged in from the target branch, so each file's
incremental patch is reconciled against the whole-PR patch and merge-only
hunks and files are dropped.
"""

import logging
from typing import List, Optional, Tuple

from ..config import ReviewConfig
from ..diff.parser import MalformedPatch, parse_patch
from ..diff.reconciler import reconcile
from ..diff.reconstructor import reconstruct_patch
from ..models.change_set import ChangedFile, ChangeSet
from ..models.patch import ReconcileStatus
from ..models.review_scope import ExcludedFile, ExclusionReason, ReviewableFile, ReviewScope
from .filters import PathFilter
from .marker import find_last_review_marker


logger = logging.getLogger(__name__)


class ReviewScopeResolver:
    """
    Resolves the review scope of a pull request.

    Works against any source exposing ``get_pull_request_commits()``,
    ``get_change_set(base, head)`` and ``list_review_comments()``.
    """

    def __init__(self, config: Optional[ReviewConfig] = None, path_filter: Optional[PathFilter] = None):
        """
        Initialize resolver.

        Args:
            config: Review settings (marker format, filters)
            path_filter: Overrides the filter built from config
        """
        self.config = config or ReviewConfig()
        self.path_filter = path_filter or PathFilter.from_settings(
            include_extensions=self.config.include_extensions,
            exclude_extensions=self.config.exclude_extensions,
            include_paths=self.config.include_paths,
            exclude_paths=self.config.exclude_paths,
        )

    def find_incremental_base(self, comment_bodies: List[str], original_base: str) -> str:
        """
        Pick the commit an incremental review starts from.

        Returns:
            The commit of the newest review marker, else the original base
        """
        marker = find_last_review_marker(
            comment_bodies,
            prefix=self.config.marker_prefix,
            separator=self.config.summary_separator,
        )
        if marker is None:
            logger.info("Full PR review: no previous review found")
            return original_base
        return marker.base_commit

    def resolve_review_scope(self, source) -> ReviewScope:
        """
        Resolve the files to review for the source's pull request.

        Args:
            source: Review-host collaborator (see class docstring)

        Returns:
            ReviewScope with the reviewable files and exclusions

        Raises:
            FetchFailure: If a change set cannot be fetched
        """
        original_base, head = source.get_pull_request_commits()
        incremental_base = self.find_incremental_base(source.list_review_comments(), original_base)

        incremental = ChangeSet(incremental_base, head, source.get_change_set(incremental_base, head))
        excluded: List[ExcludedFile] = []

        if incremental_base != original_base:
            logger.info(f"Incremental review from {incremental_base} to {head}")
            whole_pr = ChangeSet(original_base, head, source.get_change_set(original_base, head))
            files, merge_only = self.exclude_merge_only_changes(incremental, whole_pr)
            excluded.extend(merge_only)
        else:
            files = [self._to_reviewable(changed_file, changed_file.patch) for changed_file in incremental]

        files, rejected = self.path_filter.partition(files)
        excluded.extend(ExcludedFile(f.filename, ExclusionReason.PATH_FILTER) for f in rejected)

        logger.info(f"Found {len(files)} files to review after all filtering")
        return ReviewScope(
            original_base=original_base,
            incremental_base=incremental_base,
            head=head,
            files=files,
            excluded=excluded,
        )

    def exclude_merge_only_changes(
        self,
        incremental: ChangeSet,
        whole_pr: ChangeSet,
    ) -> Tuple[List[ReviewableFile], List[ExcludedFile]]:
        """
        Drop merge-only files and hunks from an incremental change set.

        Args:
            incremental: Files changed since the last review
            whole_pr: Files changed over the whole pull request

        Returns:
            Tuple of (reviewable files, excluded files)
        """
        logger.info(
            f"Filtering incremental changes against whole PR at hunk level (base: {whole_pr.base})"
        )

        files: List[ReviewableFile] = []
        excluded: List[ExcludedFile] = []

        for inc_file in incremental:
            reason, patch = self._reconcile_file(inc_file, whole_pr.get(inc_file.filename))
            if reason is not None:
                excluded.append(ExcludedFile(inc_file.filename, reason))
            else:
                files.append(self._to_reviewable(inc_file, patch))

        logger.info(
            f"Filtered {len(incremental)} incremental files to {len(files)} files with PR-relevant hunks"
        )
        if excluded:
            logger.debug(f"Filtered out files: {', '.join(e.filename for e in excluded)}")

        return files, excluded

    def _reconcile_file(
        self,
        inc_file: ChangedFile,
        pr_file: Optional[ChangedFile],
    ) -> Tuple[Optional[ExclusionReason], Optional[str]]:
        """
        Classify one incremental file.

        Returns:
            Tuple of (exclusion reason or None, patch text to review)
        """
        filename = inc_file.filename
        logger.debug(f"Checking incremental file: {filename}")

        if pr_file is None:
            logger.debug(f"Excluded as merge-only, not in whole PR: {filename}")
            return ExclusionReason.NOT_IN_REFERENCE, None

        if pr_file.patch is None and self.config.keep_unclassifiable_files:
            logger.info(f"No whole PR patch for {filename}, keeping incremental patch unfiltered")
            return None, inc_file.patch

        try:
            result = reconcile(
                parse_patch(inc_file.patch, filename),
                parse_patch(pr_file.patch, filename),
            )
        except MalformedPatch as e:
            logger.warning(f"Excluded {filename}: malformed patch ({e})")
            return ExclusionReason.MALFORMED_PATCH, None

        if result.status == ReconcileStatus.UNCHANGED:
            return None, inc_file.patch
        if result.status == ReconcileStatus.NOT_IN_REFERENCE:
            logger.debug(f"Excluded as merge-only, no hunks in whole PR: {filename}")
            return ExclusionReason.NOT_IN_REFERENCE, None
        if result.status == ReconcileStatus.FULLY_EXCLUDED:
            logger.debug(f"Excluded as merge-only, all hunks filtered: {filename}")
            return ExclusionReason.ALL_HUNKS_EXCLUDED, None

        return None, reconstruct_patch(result.patch.hunks)

    @staticmethod
    def _to_reviewable(changed_file: ChangedFile, patch: Optional[str]) -> ReviewableFile:
        return ReviewableFile(filename=changed_file.filename, patch=patch, status=changed_file.status)
