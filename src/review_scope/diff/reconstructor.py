"""
Patch Reconstructor

Serializes hunks back into unified-diff text.
"""

from typing import Iterable

from ..models.patch import Hunk


def reconstruct_patch(hunks: Iterable[Hunk]) -> str:
    """
    Rebuild patch text from hunks.

    Each hunk gets a ``@@ -a,b +c,d @@`` header followed by its body lines
    as parsed. Header counts are not checked against the body.
    """
    return '\n'.join('\n'.join((hunk.header,) + hunk.lines) for hunk in hunks)
