"""
Data Models

Review scope 시스템의 핵심 데이터 모델들
"""

from .patch import Hunk, FilePatch, ReconcileStatus, ReconcileResult
from .change_set import ChangedFile, ChangeSet
from .review_scope import (
    ReviewableFile,
    ExclusionReason,
    ExcludedFile,
    ReviewScope,
    ScopeRequest,
)

__all__ = [
    "Hunk",
    "FilePatch",
    "ReconcileStatus",
    "ReconcileResult",
    "ChangedFile",
    "ChangeSet",
    "ReviewableFile",
    "ExclusionReason",
    "ExcludedFile",
    "ReviewScope",
    "ScopeRequest",
]
