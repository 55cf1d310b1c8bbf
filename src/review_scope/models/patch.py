"""
Patch Data Models

Unified diff hunk 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Hunk:
    """Unified diff의 개별 hunk"""
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: Tuple[str, ...] = ()

    def __post_init__(self):
        """데이터 검증"""
        if self.old_start < 0 or self.new_start < 0:
            raise ValueError("Line numbers must be non-negative")
        if self.old_lines < 0 or self.new_lines < 0:
            raise ValueError("Line counts must be non-negative")
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, 'lines', tuple(self.lines))

    @property
    def range_start(self) -> int:
        """새 파일 기준 시작 라인 (길이 0인 hunk는 new_start + 1)"""
        # "+p,0" names the line before the deletion; the range starts after it
        return self.new_start + 1 if self.new_lines == 0 else self.new_start

    @property
    def new_end(self) -> int:
        """새 파일 기준 마지막 라인 (길이 0이면 range_start - 1)"""
        return self.range_start + self.new_lines - 1

    @property
    def header(self) -> str:
        """hunk 헤더 문자열"""
        return f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"

    @property
    def added_lines(self) -> List[str]:
        """추가된 라인들 (접두사 제거)"""
        return [line[1:] for line in self.lines if line.startswith('+')]

    @property
    def removed_lines(self) -> List[str]:
        """삭제된 라인들 (접두사 제거)"""
        return [line[1:] for line in self.lines if line.startswith('-')]

    @property
    def line_range(self) -> str:
        """새 파일 기준 라인 범위 문자열"""
        return f"{self.range_start}-{self.new_end}"


@dataclass(frozen=True)
class FilePatch:
    """단일 파일의 hunk 목록"""
    filename: str
    hunks: Tuple[Hunk, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.hunks, tuple):
            object.__setattr__(self, 'hunks', tuple(self.hunks))

    @property
    def is_empty(self) -> bool:
        """hunk가 없는지 확인"""
        return not self.hunks

    def __len__(self) -> int:
        return len(self.hunks)


class ReconcileStatus(Enum):
    """Outcome of reconciling an incremental patch against the whole-PR patch."""
    UNCHANGED = "unchanged"
    NOT_IN_REFERENCE = "not_in_reference"
    FULLY_EXCLUDED = "fully_excluded"
    PARTIAL = "partial"


@dataclass(frozen=True)
class ReconcileResult:
    """Reconciliation 결과"""
    status: ReconcileStatus
    patch: Optional[FilePatch] = None

    def __post_init__(self):
        """데이터 검증"""
        carries_patch = self.status in (ReconcileStatus.UNCHANGED, ReconcileStatus.PARTIAL)
        if carries_patch and self.patch is None:
            raise ValueError(f"{self.status.value} result requires a patch")
        if not carries_patch and self.patch is not None:
            raise ValueError(f"{self.status.value} result cannot carry a patch")

    @property
    def is_excluded(self) -> bool:
        """파일이 리뷰 대상에서 제외되는지 확인"""
        return self.patch is None

    @classmethod
    def unchanged(cls, patch: FilePatch) -> "ReconcileResult":
        return cls(ReconcileStatus.UNCHANGED, patch)

    @classmethod
    def not_in_reference(cls) -> "ReconcileResult":
        return cls(ReconcileStatus.NOT_IN_REFERENCE)

    @classmethod
    def fully_excluded(cls) -> "ReconcileResult":
        return cls(ReconcileStatus.FULLY_EXCLUDED)

    @classmethod
    def partial(cls, patch: FilePatch) -> "ReconcileResult":
        return cls(ReconcileStatus.PARTIAL, patch)
