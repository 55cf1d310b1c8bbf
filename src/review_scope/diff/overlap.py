"""
Hunk Overlap

Decides whether two hunks touch the same lines of the new file.
"""

import logging

from ..models.patch import Hunk


logger = logging.getLogger(__name__)


def hunks_overlap(first: Hunk, second: Hunk) -> bool:
    """
    Check if two hunks overlap based on their line ranges in the new file.

    Ranges are closed intervals ``[range_start, new_end]``. A zero-length
    hunk ``+p,0`` (pure deletion) sits between new lines ``p`` and ``p + 1``
    and becomes the empty interval ``[p + 1, p]``: it overlaps a hunk that
    spans both ``p`` and ``p + 1``, and never one that merely ends at ``p``
    or starts at ``p + 1``.

        partial:     [====]          containment:  [==========]
                        [====]                        [====]

        disjoint:    [====]
                              [====]

    Args:
        first: First hunk
        second: Second hunk

    Returns:
        True if the ranges intersect
    """
    overlaps = first.range_start <= second.new_end and second.range_start <= first.new_end

    if overlaps:
        logger.debug(f"Hunks overlap: [{first.line_range}] with [{second.line_range}]")

    return overlaps
