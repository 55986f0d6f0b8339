"""
Query compiler for FTS5 full-text search.

Turns a loose query string, either free text or `field: value` pairs,
into per-field MATCH clauses combined with OR. Values are bound as
parameters and keep their FTS5 query syntax.
"""

import re
from typing import Dict, Optional

from ..core import get_logger
from ..database.schema import IndexSchema
from .models import MatchExpression

logger = get_logger(__name__)


# Any `word:` switches the whole query into qualified mode
QUALIFIER_PATTERN = re.compile(r"(\w+):")

FIELD_VALUE_PATTERN = re.compile(r"""(\w+):\s*(['"][^'"]+['"]|\S+)""")


class MatchQueryCompiler:
    """
    Compiles user queries into FTS5 match expressions for one schema.

    Free text is searched in every indexed field. As soon as the query
    contains a `field:` qualifier anywhere, only qualified pairs naming
    an indexed field are kept and everything else is dropped.
    """

    def __init__(self, schema: IndexSchema):
        self.schema = schema

    def parse(self, query: str) -> Dict[str, str]:
        """
        Map each targeted field to the text it must match.

        Args:
            query: Raw user input.

        Returns:
            Ordered dict of field name to match value; empty when nothing
            is searchable.
        """
        if not query or not query.strip():
            return {}

        indexed = self.schema.indexed_fields

        if not QUALIFIER_PATTERN.search(query):
            return {name: query for name in indexed}

        targets = {}

        for name, value in FIELD_VALUE_PATTERN.findall(query):
            if name not in indexed:
                logger.debug(f"Ignoring unknown field qualifier: {name}")
                continue

            value = value.strip("'\"")
            if not value:
                continue

            # A repeated field keeps its last value
            targets[name] = value

        return targets

    def compile(self, query: str, fuzzy_distance: Optional[int] = None) -> MatchExpression:
        """
        Compile a query into a match expression.

        Args:
            query: Raw user input.
            fuzzy_distance: When set, each value becomes a NEAR group
                            with this maximum token distance.

        Returns:
            MatchExpression; falsy when no field is targeted.
        """
        expression = MatchExpression()

        for name, value in self.parse(query).items():
            if fuzzy_distance is not None:
                value = self.near_expression(value, fuzzy_distance)

            expression.clauses.append(f"{name} MATCH ?")
            expression.params.append(value)
            expression.fields.append(name)

        return expression

    @staticmethod
    def near_expression(value: str, distance: int) -> str:
        """
        Build an FTS5 NEAR group from the tokens of a value.

        Example: ("cats dogs", 3) -> 'NEAR("cats" "dogs", 3)'
        """
        phrases = " ".join(
            '"' + token.replace('"', '""') + '"'
            for token in value.split()
        )
        return f"NEAR({phrases}, {int(distance)})"
