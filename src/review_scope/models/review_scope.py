"""
Review Scope Data Models

리뷰 대상 파일 및 리뷰 범위 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, validator


@dataclass(frozen=True)
class ReviewableFile:
    """리뷰 대상 파일"""
    filename: str
    patch: Optional[str]
    status: str = 'modified'

    def to_dict(self) -> dict:
        return {'filename': self.filename, 'patch': self.patch, 'status': self.status}


class ExclusionReason(Enum):
    """Why a changed file was left out of the review."""
    NOT_IN_REFERENCE = "not_in_reference"
    ALL_HUNKS_EXCLUDED = "all_hunks_excluded"
    MALFORMED_PATCH = "malformed_patch"
    PATH_FILTER = "path_filter"

    @property
    def is_merge_only(self) -> bool:
        return self in (ExclusionReason.NOT_IN_REFERENCE, ExclusionReason.ALL_HUNKS_EXCLUDED)


@dataclass(frozen=True)
class ExcludedFile:
    """리뷰에서 제외된 파일"""
    filename: str
    reason: ExclusionReason


@dataclass
class ReviewScope:
    """한 번의 리뷰 실행에서 결정된 리뷰 범위"""
    original_base: str
    incremental_base: str
    head: str
    files: List[ReviewableFile]
    excluded: List[ExcludedFile] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if not self.original_base or not self.incremental_base or not self.head:
            raise ValueError("Commit ids cannot be empty")

    @property
    def is_incremental(self) -> bool:
        """증분 리뷰 여부"""
        return self.incremental_base != self.original_base

    @property
    def filenames(self) -> List[str]:
        return [f.filename for f in self.files]

    def excluded_for(self, reason: ExclusionReason) -> List[str]:
        """특정 사유로 제외된 파일명 목록"""
        return [e.filename for e in self.excluded if e.reason == reason]


# Pydantic models for API validation
class ScopeRequest(BaseModel):
    """API 요청용 리뷰 범위 요청 모델"""
    repository: str
    pr_number: int
    github_token: Optional[str] = None

    @validator('repository')
    def validate_repository(cls, v):
        owner, _, repo = v.partition('/')
        if not owner or not repo or '/' in repo:
            raise ValueError('Repository must be in format "owner/repo"')
        return v

    @validator('pr_number')
    def validate_pr_number(cls, v):
        if v <= 0:
            raise ValueError('PR number must be positive')
        return v

    @property
    def owner(self) -> str:
        return self.repository.split('/')[0]

    @property
    def repo(self) -> str:
        return self.repository.split('/')[1]
