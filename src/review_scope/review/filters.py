"""
Path Filter

Extension and path-prefix allow/deny lists for reviewable files.
"""

import re
import logging
import posixpath
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, TypeVar, Sequence


logger = logging.getLogger(__name__)

T = TypeVar('T')

_UNSAFE_PATH_CHARS = re.compile(r'[<>:"|?*\x00-\x1f]')
_LEADING_PARENT_DIRS = re.compile(r'^(\.\.(/|\\|$))+')


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated setting into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def sanitize_path(value: Optional[str]) -> str:
    """Normalize a path prefix, replacing reserved characters and leading ``..``."""
    if not value or not value.strip():
        return ""
    safe = _UNSAFE_PATH_CHARS.sub('_', value.strip())
    normalized = _LEADING_PARENT_DIRS.sub('', posixpath.normpath(safe))
    return "" if normalized == "." else normalized


@dataclass(frozen=True)
class PathFilter:
    """Allow/deny lists; an empty include list allows everything."""
    include_extensions: Tuple[str, ...] = field(default_factory=tuple)
    exclude_extensions: Tuple[str, ...] = field(default_factory=tuple)
    include_paths: Tuple[str, ...] = field(default_factory=tuple)
    exclude_paths: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_settings(
        cls,
        include_extensions: Optional[str] = None,
        exclude_extensions: Optional[str] = None,
        include_paths: Optional[str] = None,
        exclude_paths: Optional[str] = None,
    ) -> "PathFilter":
        """Build from comma-separated settings strings."""
        def paths(value: Optional[str]) -> Tuple[str, ...]:
            return tuple(p for p in (sanitize_path(item) for item in split_list(value)) if p)

        return cls(
            include_extensions=tuple(split_list(include_extensions)),
            exclude_extensions=tuple(split_list(exclude_extensions)),
            include_paths=paths(include_paths),
            exclude_paths=paths(exclude_paths),
        )

    @property
    def is_noop(self) -> bool:
        return not (self.include_extensions or self.exclude_extensions
                    or self.include_paths or self.exclude_paths)

    def should_review(self, filename: str) -> bool:
        """Check a single filename against the lists."""
        file_path = filename.replace('\\', '/')
        extension = posixpath.splitext(file_path)[1]

        if self.include_extensions and extension not in self.include_extensions:
            return False
        if extension in self.exclude_extensions:
            return False
        if self.include_paths and not any(file_path.startswith(p) for p in self.include_paths):
            return False
        if any(file_path.startswith(p) for p in self.exclude_paths):
            return False
        return True

    def partition(self, files: Sequence[T], key=lambda f: f.filename) -> Tuple[List[T], List[T]]:
        """
        Split files into (kept, rejected), preserving order.

        Args:
            files: Items to filter
            key: Function returning an item's filename
        """
        kept: List[T] = []
        rejected: List[T] = []
        for item in files:
            if self.should_review(key(item)):
                kept.append(item)
            else:
                logger.debug(f"Excluded by extension/path filter: {key(item)}")
                rejected.append(item)
        return kept, rejected
