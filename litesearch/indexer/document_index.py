"""
Document index handle.

Binds one storage file to its resolved schema and exposes the whole
write and read API of the index.
"""

from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..core import Config, get_config, get_logger, SchemaNotFoundError
from ..database import (
    MEMORY_PATH,
    DatabaseManager,
    DocumentWriter,
    IndexSchema,
    resolve_schema,
    create_index_table,
    drop_index_table,
    get_statistics
)
from ..search import FacetOptions, SearchEngine, SearchOptions

logger = get_logger(__name__)


class DocumentIndex:
    """
    A full-text document index stored in one SQLite file.

    Usage:
        with DocumentIndex.create("index.db", ["title", "body"]) as index:
            index.add_document(1, {"title": "Cats", "body": "..."})
            index.search("title: cats")
    """

    def __init__(self, path: Union[str, Path], config: Config = None):
        """
        Open a handle on a storage file without requiring the table.

        Check `schema.exists` before use; operations on a missing table
        raise SchemaNotFoundError.

        Args:
            path: SQLite file, or ":memory:".
            config: Settings; defaults to the global config.
        """
        self.config = config or get_config()
        self.path = path
        self.manager = DatabaseManager(path, self.config.storage)
        self.schema = IndexSchema()
        self.reconcile()

    @classmethod
    def create(
        cls,
        path: Union[str, Path],
        fields: Iterable[str],
        tokenizer: str = None,
        config: Config = None
    ) -> "DocumentIndex":
        """
        Create the index table if needed and return an open handle.

        Args:
            path: SQLite file, or ":memory:".
            fields: Full-text indexed fields; `id` and `__payload` are
                    always added and skipped if listed.
            tokenizer: FTS5 tokenizer; defaults to `index.tokenizer`.
            config: Settings; defaults to the global config.
        """
        index = cls(path, config)
        create_index_table(index.manager, fields, tokenizer or index.config.index.tokenizer)
        index.reconcile()
        return index

    @classmethod
    def open(cls, path: Union[str, Path], config: Config = None) -> "DocumentIndex":
        """
        Open an existing index.

        Raises:
            SchemaNotFoundError: If the file is missing or holds no index table.
        """
        if str(path) != MEMORY_PATH and not Path(path).exists():
            raise SchemaNotFoundError(
                f"Index file does not exist: {path}",
                path=str(path)
            )

        index = cls(path, config)

        if not index.schema.exists:
            index.close()
            raise SchemaNotFoundError(
                f"No index table found in {path}",
                path=str(path)
            )

        return index

    def reconcile(self) -> IndexSchema:
        """Re-read the schema from storage and rebind reader and writer."""
        self.schema = resolve_schema(self.manager)

        self.writer = DocumentWriter(
            self.manager,
            self.schema,
            self.config.indexing.min_nested_string_length
        )
        self.engine = SearchEngine(self.manager, self.schema)

        logger.debug(f"Resolved schema for {self.path}: {self.schema.fields}")

        return self.schema

    @property
    def fields(self) -> tuple:
        return self.schema.fields

    def add_document(self, document_id: Any, data: Mapping[str, Any], safe: bool = True) -> None:
        self.writer.add_document(document_id, data, safe=safe)

    def add_documents(self, documents: Iterable[Mapping[str, Any]], replace: bool = False) -> int:
        return self.writer.add_documents(documents, replace=replace)

    def remove_document(self, document_id: Any) -> bool:
        return self.writer.remove_document(document_id)

    def update_document(self, document_id: Any, data: Mapping[str, Any]) -> bool:
        return self.writer.update_document(document_id, data)

    def get_document(self, document_id: Any) -> Optional[dict]:
        return self.engine.get_document(document_id)

    def count_documents(self, query: str = "", filter: str = "") -> int:
        return self.engine.count_documents(query, filter)

    def search(self, query: str = "", options: SearchOptions = None, **kwargs) -> List[dict]:
        """
        Search documents.

        Options may be given as a SearchOptions or as keyword arguments
        (fields, limit, offset, filter, payload, fuzzy_distance).
        """
        if options is not None and kwargs:
            raise TypeError("Pass either a SearchOptions or keyword options, not both")

        if options is None:
            kwargs.setdefault("limit", self.config.search.default_limit)
            options = SearchOptions(**kwargs)

        return self.engine.search(query, options)

    def facet_search(
        self,
        query: str,
        facet_field: str,
        options: FacetOptions = None,
        **kwargs
    ) -> List[dict]:
        """
        Count documents per value of `facet_field`.

        Options may be given as a FacetOptions or as keyword arguments
        (limit, offset, filter, fuzzy_distance).
        """
        if options is not None and kwargs:
            raise TypeError("Pass either a FacetOptions or keyword options, not both")

        if options is None:
            kwargs.setdefault("limit", self.config.search.facet_limit)
            options = FacetOptions(**kwargs)

        return self.engine.facet_search(query, facet_field, options)

    def statistics(self) -> dict:
        return get_statistics(self.manager)

    def drop(self) -> None:
        """Delete the index table and every document in it."""
        drop_index_table(self.manager)
        self.reconcile()

    def close(self) -> None:
        self.manager.close()

    def __enter__(self) -> "DocumentIndex":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"DocumentIndex(path={str(self.path)!r}, fields={list(self.schema.indexed_fields)!r})"
