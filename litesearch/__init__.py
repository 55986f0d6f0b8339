"""
litesearch package.

A lightweight document index on top of SQLite FTS5: define a schema,
ingest JSON-like documents, and query them with per-field targeting,
raw filters, facets and pagination while keeping the original document
shape available for retrieval.
"""

__version__ = "1.0.0"

from .indexer import DocumentIndex

__all__ = ["DocumentIndex", "__version__"]
