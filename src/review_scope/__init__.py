"""
AI PR Review Scope

Incremental review scope resolution for automated GitHub pull request
reviews: picks the files and hunks the next LLM review should cover.
"""

__version__ = "1.0.0"

from .api import ReviewScopeAPI, ScopeResult

__all__ = ["ReviewScopeAPI", "ScopeResult"]
