"""
Search module for FTS5 full-text search.

Provides match-query compilation, search execution with payload
reconstruction, facet aggregation and option models.
"""

from .models import MatchExpression, SearchOptions, FacetOptions
from .query_parser import MatchQueryCompiler
from .engine import SearchEngine

__all__ = [
    "MatchExpression",
    "SearchOptions",
    "FacetOptions",
    "MatchQueryCompiler",
    "SearchEngine"
]
