"""
Hunk Reconciler

Filters the hunks of an incremental patch (changes since the last review)
down to those that overlap the whole-PR patch. Hunks without any overlap
were brought in by syncing the target branch into the PR branch and are
not the author's changes.

Example, for one file:

    incremental hunks (last review -> head):  10-15, 50-55, 100-105
    whole-PR hunks (PR base -> head):         20-25, 50-55

    10-15    no overlap  -> dropped (merged from target branch)
    50-55    overlaps    -> kept
    100-105  no overlap  -> dropped

The surviving hunks may come from disjoint regions of the file; the
reconstructed patch is still valid unified-diff text.
"""

import logging
from typing import Optional

from ..models.patch import FilePatch, ReconcileResult
from .overlap import hunks_overlap
from .parser import parse_patch
from .reconstructor import reconstruct_patch


logger = logging.getLogger(__name__)


def reconcile(incremental: FilePatch, reference: FilePatch) -> ReconcileResult:
    """
    Keep the incremental hunks that overlap at least one reference hunk.

    Args:
        incremental: Patch of the file since the last review
        reference: Patch of the file over the whole pull request

    Returns:
        ReconcileResult tagged with the outcome
    """
    filename = incremental.filename or reference.filename

    if incremental.is_empty:
        logger.debug(f"{filename}: no hunks in incremental patch, nothing to filter")
        return ReconcileResult.unchanged(incremental)

    if reference.is_empty:
        logger.debug(f"{filename}: no hunks in whole PR patch, file is merge-only")
        return ReconcileResult.not_in_reference()

    survivors = []
    for hunk in incremental.hunks:
        if any(hunks_overlap(hunk, ref_hunk) for ref_hunk in reference.hunks):
            survivors.append(hunk)
        else:
            logger.debug(f"{filename}: hunk at lines {hunk.line_range} has no overlap, filtering out")

    logger.debug(f"{filename}: filtered {len(incremental)} hunks to {len(survivors)}")

    if not survivors:
        return ReconcileResult.fully_excluded()

    return ReconcileResult.partial(FilePatch(incremental.filename, tuple(survivors)))


def filter_patch_hunks(
    incremental_patch: Optional[str],
    whole_pr_patch: Optional[str],
    filename: str = "",
) -> Optional[str]:
    """
    Text-level reconcile: parse both patches, filter, and serialize.

    Returns:
        The incremental text as given when it has no hunks, the rebuilt
        patch when some hunks survive, or None when the file is merge-only

    Raises:
        MalformedPatch: If either patch cannot be parsed
    """
    result = reconcile(parse_patch(incremental_patch, filename), parse_patch(whole_pr_patch, filename))

    if result.is_excluded:
        return None
    if result.patch.is_empty:
        return incremental_patch
    return reconstruct_patch(result.patch.hunks)
