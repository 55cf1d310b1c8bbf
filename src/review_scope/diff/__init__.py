"""
Diff Reconciliation Layer

Parses single-file unified diffs, reconciles incremental hunks against the
whole-PR diff, and serializes the surviving hunks.
"""

from .parser import PatchParser, MalformedPatch, parse_patch
from .overlap import hunks_overlap
from .reconciler import reconcile, filter_patch_hunks
from .reconstructor import reconstruct_patch

__all__ = [
    'PatchParser',
    'MalformedPatch',
    'parse_patch',
    'hunks_overlap',
    'reconcile',
    'filter_patch_hunks',
    'reconstruct_patch',
]
