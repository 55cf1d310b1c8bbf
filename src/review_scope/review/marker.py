"""
Review Marker

Each automated review comment starts with a marker recording the commit
the next run should diff from:

    <prefix> <commit sha> <free text><separator><summary>

Scanning the comment history for the newest marker gives the base of an
incremental review. These helpers work on plain strings only.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config import DEFAULT_MARKER_PREFIX, DEFAULT_SUMMARY_SEPARATOR


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewMarker:
    """Parsed review marker."""
    base_commit: str
    summary: Optional[str] = None


def parse_review_marker(
    body: Optional[str],
    prefix: str = DEFAULT_MARKER_PREFIX,
    separator: str = DEFAULT_SUMMARY_SEPARATOR,
) -> Optional[ReviewMarker]:
    """
    Parse a comment body as a review marker.

    Returns:
        ReviewMarker, or None if the body does not start with the prefix
        or carries no commit token
    """
    if not body or not body.startswith(prefix):
        return None

    head, found, summary = body.partition(separator)
    tokens = head[len(prefix):].split()
    if not tokens:
        return None

    return ReviewMarker(base_commit=tokens[0], summary=summary if found else None)


def find_last_review_marker(
    bodies: Sequence[str],
    prefix: str = DEFAULT_MARKER_PREFIX,
    separator: str = DEFAULT_SUMMARY_SEPARATOR,
) -> Optional[ReviewMarker]:
    """
    Find the newest review marker in a comment history.

    Args:
        bodies: Comment bodies, oldest first

    Returns:
        The most recent marker, or None if no comment carries one
    """
    for body in reversed(bodies):
        marker = parse_review_marker(body, prefix, separator)
        if marker:
            logger.info(f"Found last review comment: {body.splitlines()[0]}")
            return marker
    return None


def format_review_marker(
    commit: str,
    summary: Optional[str] = None,
    prefix: str = DEFAULT_MARKER_PREFIX,
    separator: str = DEFAULT_SUMMARY_SEPARATOR,
) -> str:
    """Build the marker text for a review comment posted at ``commit``."""
    if not commit or any(c.isspace() for c in commit):
        raise ValueError(f"Invalid commit id: {commit!r}")

    text = f"{prefix} {commit}"
    if summary:
        text = f"{text}{separator}{summary}"
    return text
