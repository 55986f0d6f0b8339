"""
Data models for search functionality.

Defines dataclasses for compiled match expressions and the options
accepted by the search and facet queries.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union


@dataclass
class MatchExpression:
    """
    A compiled full-text condition.

    Attributes:
        clauses: One `<field> MATCH ?` fragment per targeted field.
        params: Bound values, aligned with `clauses`.
        fields: The fields the expression touches.
    """
    clauses: List[str] = field(default_factory=list)
    params: List[Any] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)

    @property
    def sql(self) -> str:
        """Clauses combined with OR, or an empty string."""
        return " OR ".join(self.clauses)

    def __bool__(self) -> bool:
        return bool(self.clauses)


@dataclass
class SearchOptions:
    """
    Options for a paginated search.

    Attributes:
        fields: "*" or the columns to project; `__payload` is always
                fetched in addition for non-wildcard projections.
        limit: Maximum number of results; None means no limit.
        offset: Number of results to skip.
        filter: Raw SQL predicate ANDed with the match expression.
                Passed through unmodified, so it must be trusted input.
        payload: Merge every payload key into the results.
        fuzzy_distance: When set, match values as NEAR groups with
                        this token distance.
    """
    fields: Union[str, Sequence[str]] = "*"
    limit: Optional[int] = 50
    offset: int = 0
    filter: str = ""
    payload: bool = False
    fuzzy_distance: Optional[int] = None


@dataclass
class FacetOptions:
    """
    Options for a facet aggregation.

    A falsy `limit` returns every group.
    """
    limit: Optional[int] = 50
    offset: int = 0
    filter: str = ""
    fuzzy_distance: Optional[int] = None
