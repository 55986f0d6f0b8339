"""
Database module for SQLite persistence with FTS5 full-text search.

Provides connection management, schema resolution and the document
write path for the index table.
"""

from .connection import MEMORY_PATH, DatabaseManager
from .schema import (
    IndexSchema,
    TABLE_NAME,
    ID_FIELD,
    PAYLOAD_FIELD,
    RESERVED_FIELDS,
    DEFAULT_TOKENIZER,
    resolve_schema,
    create_index_table,
    drop_index_table,
    get_statistics
)
from .payload import encode_payload, decode_payload
from .writer import DocumentWriter

__all__ = [
    "MEMORY_PATH",
    "DatabaseManager",
    "IndexSchema",
    "TABLE_NAME",
    "ID_FIELD",
    "PAYLOAD_FIELD",
    "RESERVED_FIELDS",
    "DEFAULT_TOKENIZER",
    "resolve_schema",
    "create_index_table",
    "drop_index_table",
    "get_statistics",
    "encode_payload",
    "decode_payload",
    "DocumentWriter"
]
