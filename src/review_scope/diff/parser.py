"""
Patch Parser

Parses unified-diff patch text for a single file into structured hunks.
Only the first file section of a patch is read; hunk bodies are kept
verbatim so that they can be serialized back without re-deriving them.
"""

import re
import logging
from typing import List, Optional, Tuple

from ..models.patch import Hunk, FilePatch


logger = logging.getLogger(__name__)


class MalformedPatch(ValueError):
    """Patch text that cannot be parsed into hunks."""
    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.line_number = line_number


class PatchParser:
    """
    Parser for unified-diff patch text.

    Converts the patch text of one file (as returned by the GitHub
    files/compare APIs, or a full ``git diff`` section) into a FilePatch.
    """

    def __init__(self):
        """Initialize patch parser."""
        self.hunk_header_pattern = re.compile(r'^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$')

    def parse(self, patch_text: Optional[str], filename: str = "") -> FilePatch:
        """
        Parse patch text into a FilePatch.

        Args:
            patch_text: Raw unified-diff text, or None
            filename: File the patch belongs to

        Returns:
            FilePatch with the hunks of the first file section

        Raises:
            MalformedPatch: If a hunk header is invalid
        """
        if not patch_text:
            return FilePatch(filename)

        lines = patch_text.split('\n')
        hunks: List[Hunk] = []
        index = 0

        # Skip file headers (diff --git, index, ---, +++, mode lines)
        while index < len(lines) and not lines[index].startswith('@@'):
            index += 1

        while index < len(lines):
            line = lines[index]
            if line.startswith('@@'):
                hunk, index = self._parse_hunk(lines, index)
                hunks.append(hunk)
            elif self._is_file_boundary(lines, index):
                logger.debug(f"Stopping at next file section (line {index + 1})")
                break
            else:
                if line.strip():
                    logger.debug(f"Skipping line {index + 1} outside of a hunk: {line!r}")
                index += 1

        logger.debug(f"Parsed {len(hunks)} hunks for {filename or '<patch>'}")
        return FilePatch(filename, tuple(hunks))

    def _parse_hunk(self, lines: List[str], index: int) -> Tuple[Hunk, int]:
        """
        Parse one hunk starting at its header line.

        Returns:
            Tuple of (hunk, index of the first line after the hunk)
        """
        header_match = self.hunk_header_pattern.match(lines[index])
        if not header_match:
            raise MalformedPatch(f"Invalid hunk header: {lines[index]!r}", line_number=index + 1)

        old_start = int(header_match.group(1))
        old_lines = int(header_match.group(2)) if header_match.group(2) is not None else 1
        new_start = int(header_match.group(3))
        new_lines = int(header_match.group(4)) if header_match.group(4) is not None else 1

        remaining_old = old_lines
        remaining_new = new_lines
        body: List[str] = []
        index += 1

        while index < len(lines):
            line = lines[index]

            # "\ No newline at end of file" may follow the last counted line
            if line.startswith('\\'):
                body.append(line)
                index += 1
                continue

            if remaining_old <= 0 and remaining_new <= 0:
                break
            if line.startswith('@@') or self._starts_next_file(lines, index):
                logger.debug(f"Hunk at +{new_start} ends before its line counts are satisfied")
                break

            # Blank lines are context lines whose leading space was stripped
            operation = ' ' if line == '' else line[:1]
            if operation == ' ':
                remaining_old -= 1
                remaining_new -= 1
            elif operation == '-':
                remaining_old -= 1
            elif operation == '+':
                remaining_new -= 1
            else:
                break

            body.append(line)
            index += 1

        hunk = Hunk(
            old_start=old_start,
            old_lines=old_lines,
            new_start=new_start,
            new_lines=new_lines,
            lines=tuple(body),
        )
        return hunk, index

    def _starts_next_file(self, lines: List[str], index: int) -> bool:
        """Check for a ``---``/``+++``/``@@`` triple opening another file."""
        return (
            index + 2 < len(lines)
            and lines[index].startswith('--- ')
            and lines[index + 1].startswith('+++ ')
            and lines[index + 2].startswith('@@')
        )

    def _is_file_boundary(self, lines: List[str], index: int) -> bool:
        line = lines[index]
        if line.startswith('diff ') or line.startswith('Index: '):
            return True
        return (
            line.startswith('--- ')
            and index + 1 < len(lines)
            and lines[index + 1].startswith('+++ ')
        )


_default_parser = PatchParser()


def parse_patch(patch_text: Optional[str], filename: str = "") -> FilePatch:
    """Parse patch text with the shared parser instance."""
    return _default_parser.parse(patch_text, filename)
