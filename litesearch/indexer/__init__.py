"""
Indexer module providing the index handle and bulk ingestion.

Exposes DocumentIndex, the entry point for creating, writing and
querying an index, and IndexBuilder for loading document files.
"""

from .document_index import DocumentIndex
from .index_builder import IndexBuilder, IndexingStats, progress_printer

__all__ = [
    "DocumentIndex",
    "IndexBuilder",
    "IndexingStats",
    "progress_printer"
]
