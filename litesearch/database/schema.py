"""
Schema definitions for the litesearch documents table.

The index lives in a single FTS5 virtual table. Two reserved UNINDEXED
columns are always present: `id`, the caller supplied identifier, and
`__payload`, the JSON snapshot of the document as written. Every other
column is full-text indexed.
"""

import re
import sqlite3
from dataclasses import dataclass
from typing import Iterable, Tuple

from ..core import get_logger, DatabaseError
from .connection import DatabaseManager

logger = get_logger(__name__)

TABLE_NAME = "documents"
ID_FIELD = "id"
PAYLOAD_FIELD = "__payload"
RESERVED_FIELDS = (ID_FIELD, PAYLOAD_FIELD)

DEFAULT_TOKENIZER = "unicode61"

# Column names FTS5 refuses in CREATE VIRTUAL TABLE
FTS5_RESERVED_COLUMNS = ("rank", "rowid")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class IndexSchema:
    """
    Field schema of an index as found in storage.

    Attributes:
        fields: Column names in table order, reserved columns included.
        exists: Whether the documents table was found.
    """
    fields: Tuple[str, ...] = ()
    exists: bool = False

    @property
    def indexed_fields(self) -> Tuple[str, ...]:
        """Columns that take part in full-text matching."""
        return tuple(f for f in self.fields if f not in RESERVED_FIELDS)

    def __contains__(self, name: str) -> bool:
        return name in self.fields


def resolve_schema(manager: DatabaseManager) -> IndexSchema:
    """
    Read the current field schema from the documents table.

    Args:
        manager: Connection manager of the index file.

    Returns:
        IndexSchema; `exists` is False when the table is missing.
    """
    with manager.connection() as conn:
        rows = conn.execute(f"PRAGMA table_info({TABLE_NAME})").fetchall()

    fields = tuple(row["name"] for row in rows)

    return IndexSchema(fields=fields, exists=bool(fields))


def _normalize_fields(fields: Iterable[str]) -> Tuple[str, ...]:
    """Drop reserved and duplicate names, rejecting names FTS5 cannot use."""
    normalized = []

    for name in fields:
        if name in RESERVED_FIELDS or name in normalized:
            continue

        if not isinstance(name, str) or not _IDENTIFIER.match(name):
            raise DatabaseError(
                f"Invalid field name: {name!r}",
                {"field": name}
            )

        if name.lower() in FTS5_RESERVED_COLUMNS:
            raise DatabaseError(
                f"Field name is reserved by FTS5: {name!r}",
                {"field": name}
            )

        normalized.append(name)

    return tuple(normalized)


def build_create_table_sql(fields: Iterable[str], tokenizer: str = DEFAULT_TOKENIZER) -> str:
    """Generate the FTS5 table creation SQL for a field list."""
    columns = [f"{ID_FIELD} UNINDEXED", f"{PAYLOAD_FIELD} UNINDEXED"]
    columns.extend(_normalize_fields(fields))

    quoted_tokenizer = (tokenizer or DEFAULT_TOKENIZER).replace("'", "''")

    return (
        f"CREATE VIRTUAL TABLE IF NOT EXISTS {TABLE_NAME} "
        f"USING fts5({', '.join(columns)}, tokenize='{quoted_tokenizer}')"
    )


def create_index_table(
    manager: DatabaseManager,
    fields: Iterable[str],
    tokenizer: str = DEFAULT_TOKENIZER
) -> IndexSchema:
    """
    Create the documents table if it does not exist yet.

    Reserved names in `fields` are skipped silently. Creating an index
    that already exists is a no-op and keeps the stored columns.

    Args:
        manager: Connection manager of the index file.
        fields: Names of the full-text indexed fields.
        tokenizer: FTS5 tokenizer definition.

    Returns:
        The schema found in storage after creation.
    """
    sql = build_create_table_sql(fields, tokenizer)

    existing = resolve_schema(manager)
    if existing.exists:
        logger.debug(f"Index table already exists with fields {existing.fields}")
        return existing

    logger.info(f"Creating index table in {manager.db_path}")

    try:
        with manager.cursor() as cur:
            cur.execute(sql)
    except sqlite3.Error as e:
        raise DatabaseError(
            f"Failed to create index table: {e}",
            {"path": str(manager.db_path), "tokenizer": tokenizer}
        ) from e

    return resolve_schema(manager)


def drop_index_table(manager: DatabaseManager) -> None:
    """
    Drop the documents table.

    Warning: This deletes all indexed documents.
    """
    logger.warning(f"Dropping index table in {manager.db_path} - all documents will be deleted")

    with manager.cursor() as cur:
        cur.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")


def get_statistics(manager: DatabaseManager) -> dict:
    """
    Get index statistics.

    Returns:
        Dictionary with document count, indexed fields and file size.
    """
    schema = resolve_schema(manager)

    stats = {
        "exists": schema.exists,
        "fields": list(schema.indexed_fields),
        "total_documents": 0,
        "database_size_mb": 0.0
    }

    if schema.exists:
        with manager.connection() as conn:
            row = conn.execute(f"SELECT COUNT(*) AS count FROM {TABLE_NAME}").fetchone()
            stats["total_documents"] = row["count"]

    if not manager.in_memory and manager.db_path.exists():
        stats["database_size_mb"] = round(manager.db_path.stat().st_size / (1024 * 1024), 2)

    return stats
