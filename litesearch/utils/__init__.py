"""
Utility module providing shared helper functions.

Contains value stringification, text display helpers and document file
loading used across the application. Depends only on the core module.
"""

from .file_utils import (
    find_document_files,
    load_documents
)
from .text_utils import (
    stringify,
    iter_leaves,
    truncate_text
)

__all__ = [
    "find_document_files",
    "load_documents",
    "stringify",
    "iter_leaves",
    "truncate_text"
]
