"""
Tests for custom exception classes.

Tests exception creation, message formatting, and the hierarchy.
"""

import pytest

from litesearch.core.exceptions import (
    LiteSearchError,
    ConfigurationError,
    DatabaseError,
    SchemaNotFoundError,
    PayloadDecodeError,
    DocumentError,
    MissingIdentifierError,
    PayloadEncodeError,
    SearchError,
    MalformedQueryError
)


class TestLiteSearchError:
    """Tests for base LiteSearchError."""

    def test_basic_creation(self):
        """Test creating exception with just a message."""
        error = LiteSearchError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_creation_with_details(self):
        """Test creating exception with details dict."""
        error = LiteSearchError("Write failed", {"count": 3})

        assert error.details["count"] == 3


class TestDatabaseErrors:
    """Tests for storage related errors."""

    def test_schema_not_found_keeps_path(self):
        """Test that SchemaNotFoundError records the storage path."""
        error = SchemaNotFoundError("No table", path="/tmp/index.db")

        assert error.path == "/tmp/index.db"
        assert isinstance(error, DatabaseError)

    def test_payload_decode_keeps_document_id(self):
        """Test that PayloadDecodeError records the document id."""
        error = PayloadDecodeError("Corrupt", document_id=7)

        assert error.document_id == 7
        assert isinstance(error, DatabaseError)


class TestDocumentErrors:
    """Tests for write path document errors."""

    def test_missing_identifier_keeps_position(self):
        """Test that MissingIdentifierError records the batch position."""
        error = MissingIdentifierError("No id", position=1)

        assert error.position == 1
        assert isinstance(error, DocumentError)

    def test_payload_encode_is_document_error(self):
        """Test that PayloadEncodeError can be caught as DocumentError."""
        with pytest.raises(DocumentError):
            raise PayloadEncodeError("Not serializable")


class TestSearchErrors:
    """Tests for read path errors."""

    def test_search_error_keeps_query(self):
        """Test that SearchError records the query."""
        error = SearchError("Failed", query="title: cats")

        assert error.query == "title: cats"

    def test_malformed_query_is_search_error(self):
        """Test that MalformedQueryError inherits from SearchError."""
        error = MalformedQueryError("no such column: foo", query="cats")

        assert isinstance(error, SearchError)
        assert error.message == "no such column: foo"


class TestHierarchy:
    """Tests that every error can be caught as LiteSearchError."""

    @pytest.mark.parametrize("error_class", [
        ConfigurationError,
        DatabaseError,
        SchemaNotFoundError,
        PayloadDecodeError,
        DocumentError,
        MissingIdentifierError,
        PayloadEncodeError,
        SearchError,
        MalformedQueryError
    ])
    def test_can_be_caught_as_base(self, error_class):
        with pytest.raises(LiteSearchError):
            raise error_class("Test error")
