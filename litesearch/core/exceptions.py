"""
Custom exception hierarchy for litesearch.

Provides specific exception types for the different failure modes:
configuration errors, storage issues, invalid documents, and search problems.
"""


class LiteSearchError(Exception):
    """Base exception for all litesearch errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(LiteSearchError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(LiteSearchError):
    """Raised when SQLite operations fail."""
    pass


class SchemaNotFoundError(DatabaseError):
    """Raised when an index is used before its documents table exists."""

    def __init__(self, message: str, path: str = None, details: dict = None):
        """
        Initialize schema error.

        Args:
            message: Error description.
            path: Storage file of the index.
            details: Additional context.
        """
        super().__init__(message, details)
        self.path = path


class PayloadDecodeError(DatabaseError):
    """Raised when a stored document payload is not valid JSON."""

    def __init__(self, message: str, document_id=None, details: dict = None):
        super().__init__(message, details)
        self.document_id = document_id


class DocumentError(LiteSearchError):
    """Raised when a document cannot be written."""

    def __init__(self, message: str, position: int = None, details: dict = None):
        """
        Initialize document error.

        Args:
            message: Error description.
            position: Index of the offending document inside its batch.
            details: Additional context.
        """
        super().__init__(message, details)
        self.position = position


class MissingIdentifierError(DocumentError):
    """Raised when a document in a write batch has no id."""
    pass


class PayloadEncodeError(DocumentError):
    """Raised when a document cannot be serialized to its JSON payload."""
    pass


class SearchError(LiteSearchError):
    """Raised when search query execution fails."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The problematic search query.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query


class MalformedQueryError(SearchError):
    """Raised when SQLite rejects a match expression or raw filter."""
    pass
