"""
Review Scope Layer

Resolves which files and hunks a review run covers.
"""

from .marker import ReviewMarker, parse_review_marker, find_last_review_marker, format_review_marker
from .filters import PathFilter
from .scope import ReviewScopeResolver

__all__ = [
    'ReviewMarker',
    'parse_review_marker',
    'find_last_review_marker',
    'format_review_marker',
    'PathFilter',
    'ReviewScopeResolver',
]
