"""
Tests for database connection management.

Tests connection creation, pragma application, and transaction handling.
"""

import sqlite3
import pytest
from pathlib import Path

from litesearch.core.config_loader import StorageConfig
from litesearch.core.exceptions import ConfigurationError
from litesearch.database.connection import DatabaseManager


class TestDatabaseManager:
    """Tests for DatabaseManager class."""

    def test_creates_parent_directory(self, temp_dir: Path):
        """Test that parent directories are created."""
        db_path = temp_dir / "subdir" / "deep" / "test.db"

        DatabaseManager(db_path)

        assert db_path.parent.exists()

    def test_in_memory(self):
        """Test that ':memory:' is recognized and needs no directory."""
        manager = DatabaseManager(":memory:")

        assert manager.in_memory is True

        with manager.connection() as conn:
            assert conn.execute("SELECT 1").fetchone()[0] == 1

        manager.close()

    def test_connection_uses_row_factory(self, temp_database: Path):
        """Test that rows can be accessed by column name."""
        manager = DatabaseManager(temp_database)

        with manager.connection() as conn:
            row = conn.execute("SELECT 1 AS value").fetchone()

        assert row["value"] == 1
        manager.close()

    def test_connection_is_reused(self, temp_database: Path):
        """Test that the same connection is returned until close()."""
        manager = DatabaseManager(temp_database)

        with manager.connection() as first:
            pass
        with manager.connection() as second:
            pass

        assert first is second
        manager.close()


class TestPragmas:
    """Tests for storage pragma application."""

    def test_default_pragmas_applied(self, temp_database: Path):
        """Test that the default journal and sync modes are set."""
        manager = DatabaseManager(temp_database)

        with manager.connection() as conn:
            journal_mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
            synchronous = conn.execute("PRAGMA synchronous").fetchone()[0]

        assert journal_mode.lower() == "memory"
        assert synchronous == 0
        manager.close()

    def test_custom_pragmas_applied(self, temp_database: Path):
        """Test that an explicit StorageConfig is honored."""
        storage = StorageConfig(journal_mode="DELETE", synchronous="FULL", page_size=8192)
        manager = DatabaseManager(temp_database, storage)

        with manager.connection() as conn:
            journal_mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
            synchronous = conn.execute("PRAGMA synchronous").fetchone()[0]
            conn.execute("CREATE TABLE t (x)")
            page_size = conn.execute("PRAGMA page_size").fetchone()[0]

        assert journal_mode.lower() == "delete"
        assert synchronous == 2
        assert page_size == 8192
        manager.close()

    def test_invalid_journal_mode_rejected(self, temp_database: Path):
        """Test that an unknown journal mode raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            DatabaseManager(temp_database, StorageConfig(journal_mode="FAST"))

    def test_invalid_synchronous_rejected(self, temp_database: Path):
        """Test that an unknown synchronous mode raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            DatabaseManager(temp_database, StorageConfig(synchronous="SOMETIMES; DROP TABLE x"))

    def test_invalid_page_size_rejected(self, temp_database: Path):
        """Test that a non-positive page size raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            DatabaseManager(temp_database, StorageConfig(page_size=0))


class TestCursor:
    """Tests for the transactional cursor context manager."""

    def test_cursor_commits(self, temp_database: Path):
        """Test that writes are committed on success."""
        manager = DatabaseManager(temp_database)

        with manager.cursor() as cur:
            cur.execute("CREATE TABLE t (x)")
            cur.execute("INSERT INTO t VALUES (1)")

        manager.close()

        conn = sqlite3.connect(str(temp_database))
        count = conn.execute("SELECT COUNT(*) FROM t").fetchone()[0]
        conn.close()

        assert count == 1

    def test_cursor_rolls_back_on_error(self, temp_database: Path):
        """Test that an exception discards every write of the block."""
        manager = DatabaseManager(temp_database)

        with manager.cursor() as cur:
            cur.execute("CREATE TABLE t (x)")

        with pytest.raises(RuntimeError):
            with manager.cursor() as cur:
                cur.execute("INSERT INTO t VALUES (1)")
                cur.execute("INSERT INTO t VALUES (2)")
                raise RuntimeError("abort")

        with manager.connection() as conn:
            count = conn.execute("SELECT COUNT(*) FROM t").fetchone()[0]

        assert count == 0
        manager.close()

    def test_close_is_idempotent(self, temp_database: Path):
        """Test that closing twice does not raise."""
        manager = DatabaseManager(temp_database)

        with manager.connection():
            pass

        manager.close()
        manager.close()
