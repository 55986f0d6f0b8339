"""
Document writer for the documents table.

Keeps the two representations of every document in step: the flattened
full-text columns and the JSON payload of the document as submitted.
"""

import sqlite3
from typing import Any, Iterable, Mapping, Tuple

from ..core import (
    get_logger,
    DatabaseError,
    DocumentError,
    MissingIdentifierError,
    SchemaNotFoundError
)
from ..utils.text_utils import DEFAULT_MIN_NESTED_LENGTH, stringify
from .connection import DatabaseManager
from .payload import decode_payload, encode_payload
from .schema import ID_FIELD, PAYLOAD_FIELD, TABLE_NAME, IndexSchema

logger = get_logger(__name__)

# FTS5 tables carry no uniqueness constraint, so one row per id is kept by
# always deleting through the first matching rowid.
DELETE_ONE_SQL = (
    f"DELETE FROM {TABLE_NAME} WHERE rowid = "
    f"(SELECT rowid FROM {TABLE_NAME} WHERE {ID_FIELD} = ? LIMIT 1)"
)


class DocumentWriter:
    """
    Writes, updates and removes documents.

    Every public method runs in a single transaction: on any error
    nothing of the call is persisted.
    """

    def __init__(
        self,
        manager: DatabaseManager,
        schema: IndexSchema,
        min_nested_length: int = DEFAULT_MIN_NESTED_LENGTH
    ):
        """
        Initialize the writer.

        Args:
            manager: Connection manager of the index file.
            schema: Field schema resolved from storage.
            min_nested_length: Threshold passed to the stringifier.
        """
        self.manager = manager
        self.schema = schema
        self.min_nested_length = min_nested_length

    def _require_schema(self) -> None:
        if not self.schema.exists:
            raise SchemaNotFoundError(
                f"No index table in {self.manager.db_path}; create the index first",
                path=str(self.manager.db_path)
            )

    def _insert_sql(self) -> str:
        columns = ", ".join(self.schema.fields)
        placeholders = ", ".join("?" for _ in self.schema.fields)
        return f"INSERT INTO {TABLE_NAME} ({columns}) VALUES ({placeholders})"

    def _column_value(self, value: Any) -> Any:
        """Value bound to a full-text column."""
        if isinstance(value, (dict, list, tuple, bool)):
            return stringify(value, self.min_nested_length)
        return value

    def _row_values(self, document: Mapping[str, Any], position: int = None) -> Tuple:
        """Build the insert parameters for one document, in column order."""
        if not isinstance(document, Mapping):
            raise DocumentError(
                f"Document at position {position} is not a mapping",
                position=position
            )

        if document.get(ID_FIELD) is None:
            raise MissingIdentifierError(
                f"Document at position {position} has no id",
                position=position
            )

        payload = encode_payload(document, position)

        values = []
        for field in self.schema.fields:
            if field == ID_FIELD:
                values.append(document[ID_FIELD])
            elif field == PAYLOAD_FIELD:
                values.append(payload)
            else:
                values.append(self._column_value(document.get(field)))

        return tuple(values)

    def add_document(self, document_id: Any, data: Mapping[str, Any], safe: bool = True) -> None:
        """
        Write one document under the given id.

        Args:
            document_id: Identifier, overrides any `id` key in `data`.
            data: Document fields.
            safe: Delete a previous document with the same id first.
        """
        document = dict(data)
        document[ID_FIELD] = document_id

        self.add_documents([document], replace=safe)

    def add_documents(self, documents: Iterable[Mapping[str, Any]], replace: bool = False) -> int:
        """
        Insert a batch of documents in a single transaction.

        Args:
            documents: Documents, each with an `id` key.
            replace: Delete a previous document for each id before insert.

        Returns:
            Number of documents written.

        Raises:
            MissingIdentifierError: A document has no id; nothing is written.
            PayloadEncodeError: A document is not JSON serializable.
        """
        self._require_schema()

        documents = list(documents)
        if not documents:
            return 0

        insert_sql = self._insert_sql()

        try:
            with self.manager.cursor() as cur:
                for position, document in enumerate(documents):
                    row = self._row_values(document, position)

                    if replace:
                        cur.execute(DELETE_ONE_SQL, (document[ID_FIELD],))

                    cur.execute(insert_sql, row)
        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to write documents: {e}",
                {"count": len(documents)}
            ) from e

        logger.debug(f"Committed batch: {len(documents)} documents")

        return len(documents)

    def remove_document(self, document_id: Any) -> bool:
        """
        Delete the document with the given id.

        Returns:
            True if a row was deleted, False if none matched.
        """
        self._require_schema()

        try:
            with self.manager.cursor() as cur:
                cur.execute(DELETE_ONE_SQL, (document_id,))
                deleted = cur.rowcount > 0
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to remove document {document_id!r}: {e}") from e

        if deleted:
            logger.debug(f"Removed document: {document_id!r}")

        return deleted

    def update_document(self, document_id: Any, data: Mapping[str, Any]) -> bool:
        """
        Merge fields into a stored document.

        The stored payload is read, `data` is laid over it, and both the
        full-text columns and the payload are rewritten from the merged
        document. An `id` key in `data` is ignored.

        Returns:
            True if the document was updated, False if it does not exist.
        """
        self._require_schema()

        try:
            with self.manager.cursor() as cur:
                row = cur.execute(
                    f"SELECT rowid, {PAYLOAD_FIELD} FROM {TABLE_NAME} WHERE {ID_FIELD} = ? LIMIT 1",
                    (document_id,)
                ).fetchone()

                if row is None:
                    logger.warning(f"Update skipped, no document with id {document_id!r}")
                    return False

                merged = decode_payload(row[PAYLOAD_FIELD], document_id)
                merged.update((k, v) for k, v in data.items() if k != ID_FIELD)
                merged[ID_FIELD] = document_id

                values = dict(zip(self.schema.fields, self._row_values(merged)))
                columns = [f for f in self.schema.fields if f != ID_FIELD]
                assignments = ", ".join(f"{f} = ?" for f in columns)

                cur.execute(
                    f"UPDATE {TABLE_NAME} SET {assignments} WHERE rowid = ?",
                    [values[f] for f in columns] + [row["rowid"]]
                )
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to update document {document_id!r}: {e}") from e

        logger.debug(f"Updated document: {document_id!r}")

        return True
