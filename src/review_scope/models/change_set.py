"""
Change Set Data Models

두 커밋 사이의 파일 변경사항 모델들
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


GITHUB_FILE_STATUSES = {
    'added', 'removed', 'modified', 'renamed', 'copied', 'changed', 'unchanged'
}


@dataclass(frozen=True)
class ChangedFile:
    """변경된 파일 (patch 텍스트 포함)"""
    filename: str
    patch: Optional[str] = None  # binary, pure rename 또는 너무 큰 diff는 None
    status: str = 'modified'
    additions: int = 0
    deletions: int = 0
    previous_filename: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if not self.filename:
            raise ValueError("Filename cannot be empty")
        if self.status not in GITHUB_FILE_STATUSES:
            raise ValueError(f"Invalid status: {self.status}")
        if self.additions < 0 or self.deletions < 0:
            raise ValueError("Addition and deletion counts must be non-negative")

    @property
    def has_patch(self) -> bool:
        """patch 텍스트 존재 여부"""
        return bool(self.patch)

    @classmethod
    def from_github(cls, file_data: Dict) -> "ChangedFile":
        """GitHub API 응답에서 생성"""
        return cls(
            filename=file_data['filename'],
            patch=file_data.get('patch'),
            status=file_data.get('status', 'modified'),
            additions=file_data.get('additions', 0),
            deletions=file_data.get('deletions', 0),
            previous_filename=file_data.get('previous_filename'),
        )


class ChangeSet:
    """
    Immutable filename-keyed view over the files changed between two commits.

    Iteration follows the order the host returned the files in.
    """

    def __init__(self, base: str, head: str, files: Iterable[ChangedFile]):
        self.base = base
        self.head = head
        self._files: Tuple[ChangedFile, ...] = tuple(files)
        self._by_name: Dict[str, ChangedFile] = {}
        for changed_file in self._files:
            if changed_file.filename in self._by_name:
                raise ValueError(f"Duplicate filename in change set: {changed_file.filename}")
            self._by_name[changed_file.filename] = changed_file

    def get(self, filename: str) -> Optional[ChangedFile]:
        return self._by_name.get(filename)

    @property
    def filenames(self) -> List[str]:
        return [f.filename for f in self._files]

    def __contains__(self, filename: object) -> bool:
        return filename in self._by_name

    def __iter__(self) -> Iterator[ChangedFile]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"ChangeSet({self.base[:7]}...{self.head[:7]}, {len(self)} files)"
