"""
Search engine over the documents FTS5 table.

Runs counts, paginated searches and facet aggregations, and rebuilds
caller facing documents from the indexed columns and the stored payload.
"""

import sqlite3
import time
from typing import Any, List, Optional, Sequence, Tuple, Union

from ..core import get_logger, MalformedQueryError, SchemaNotFoundError
from ..database import (
    DatabaseManager,
    IndexSchema,
    TABLE_NAME,
    ID_FIELD,
    PAYLOAD_FIELD,
    RESERVED_FIELDS,
    decode_payload
)
from .models import FacetOptions, MatchExpression, SearchOptions
from .query_parser import MatchQueryCompiler

logger = get_logger(__name__)


class SearchEngine:
    """
    Read path of an index.

    Match expressions are compiled with bound parameters. Raw filters,
    projections and facet expressions are inserted into the SQL as given
    and must come from trusted callers.
    """

    def __init__(self, manager: DatabaseManager, schema: IndexSchema):
        """
        Initialize the search engine.

        Args:
            manager: Connection manager of the index file.
            schema: Field schema resolved from storage.
        """
        self.manager = manager
        self.schema = schema
        self.compiler = MatchQueryCompiler(schema)

    def _require_schema(self) -> None:
        if not self.schema.exists:
            raise SchemaNotFoundError(
                f"No index table in {self.manager.db_path}; create the index first",
                path=str(self.manager.db_path)
            )

    def _where(
        self,
        query: str,
        filter: str = "",
        fuzzy_distance: Optional[int] = None
    ) -> Tuple[str, List[Any], MatchExpression]:
        """Build the WHERE clause from the match expression and raw filter."""
        match = self.compiler.compile(query, fuzzy_distance)

        conditions = []
        params: List[Any] = []

        if match:
            conditions.append(f"({match.sql})")
            params.extend(match.params)

        if filter:
            conditions.append(f"({filter})")

        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""

        return where, params, match

    def _execute(self, sql: str, params: Sequence[Any], query: str) -> List[sqlite3.Row]:
        """Run a read query, surfacing engine rejections unchanged."""
        try:
            with self.manager.connection() as conn:
                return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Query failed: {e}")
            raise MalformedQueryError(
                str(e),
                query=query,
                details={"sql": sql}
            ) from e

    def count_documents(self, query: str = "", filter: str = "") -> int:
        """
        Count documents matching a query and raw filter.

        Args:
            query: Free text or `field: value` query; empty for none.
            filter: Raw SQL predicate; empty for none.

        Returns:
            Number of matching documents.
        """
        self._require_schema()

        where, params, _ = self._where(query, filter)
        sql = f"SELECT COUNT(*) AS count FROM {TABLE_NAME}{where}"

        rows = self._execute(sql, params, query)

        return rows[0]["count"]

    def search(self, query: str, options: SearchOptions = None) -> List[dict]:
        """
        Execute a paginated full-text search.

        Results are ordered by FTS5 rank when the query targets at least
        one field, otherwise in storage order.

        Args:
            query: Free text or `field: value` query; empty for none.
            options: Projection, pagination, filter and payload options.

        Returns:
            List of reconstructed documents.

        Raises:
            MalformedQueryError: If SQLite rejects the query or filter.
            PayloadDecodeError: If a stored payload is corrupt.
        """
        self._require_schema()

        options = options or SearchOptions()
        start_time = time.time()

        columns = self._projection(options.fields)
        where, params, match = self._where(query, options.filter, options.fuzzy_distance)
        order = " ORDER BY rank" if match else ""

        sql = f"SELECT {columns} FROM {TABLE_NAME}{where}{order} LIMIT ? OFFSET ?"
        limit = -1 if options.limit is None else int(options.limit)
        params.extend([limit, int(options.offset)])

        rows = self._execute(sql, params, query)
        items = self._reconstruct(rows, options.payload)

        execution_time = (time.time() - start_time) * 1000
        logger.debug(f"Search '{query}': {len(items)} results in {execution_time:.1f}ms")

        return items

    def facet_search(self, query: str, facet_field: str, options: FacetOptions = None) -> List[dict]:
        """
        Count matching documents per value of a field expression.

        Args:
            query: Free text or `field: value` query; empty for none.
            facet_field: Column or SQL expression to group by.
            options: Pagination and filter options.

        Returns:
            Raw rows `{facet_field: value, "count": n}`, largest groups first.
        """
        self._require_schema()

        options = options or FacetOptions()

        where, params, _ = self._where(query, options.filter, options.fuzzy_distance)

        sql = (
            f"SELECT {facet_field}, COUNT(*) AS count FROM {TABLE_NAME}{where} "
            f"GROUP BY {facet_field} ORDER BY count DESC"
        )

        if options.limit:
            sql += " LIMIT ? OFFSET ?"
            params.extend([int(options.limit), int(options.offset)])

        rows = self._execute(sql, params, query)

        return [dict(row) for row in rows]

    def get_document(self, document_id: Any) -> Optional[dict]:
        """
        Fetch the stored payload of a document.

        Returns:
            The document as written, or None.
        """
        self._require_schema()

        sql = f"SELECT {PAYLOAD_FIELD} FROM {TABLE_NAME} WHERE {ID_FIELD} = ? LIMIT 1"
        rows = self._execute(sql, (document_id,), "")

        if not rows:
            return None

        return decode_payload(rows[0][PAYLOAD_FIELD], document_id)

    @staticmethod
    def _projection(fields: Union[str, Sequence[str]]) -> str:
        """Column list for SELECT; explicit projections also fetch the payload."""
        if fields == "*" or not fields:
            return "*"

        if not isinstance(fields, str):
            fields = ", ".join(fields)

        return f"{fields}, {PAYLOAD_FIELD}"

    @staticmethod
    def _reconstruct(rows: List[sqlite3.Row], keep_payload: bool) -> List[dict]:
        """
        Merge indexed columns with the decoded payload of each row.

        With `keep_payload` every payload key is copied onto the result.
        Otherwise only the columns of the first row are backfilled from
        the payload, where the payload holds a value for them, which
        restores nested values flattened for indexing.
        """
        if not rows:
            return []

        keys = [key for key in rows[0].keys() if key not in RESERVED_FIELDS]

        items = []

        for row in rows:
            item = dict(row)
            payload = decode_payload(item.pop(PAYLOAD_FIELD, None), item.get(ID_FIELD))

            if keep_payload:
                item.update(payload)
            else:
                for key in keys:
                    if payload.get(key) is not None:
                        item[key] = payload[key]

            items.append(item)

        return items
