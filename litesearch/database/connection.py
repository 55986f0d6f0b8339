"""
SQLite connection management for litesearch.

Provides context managers for safe connection handling, applies the
configured storage pragmas and creates the parent directory on demand.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Union

from ..core import StorageConfig, get_logger, ConfigurationError, DatabaseError

logger = get_logger(__name__)

MEMORY_PATH = ":memory:"

JOURNAL_MODES = {"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"}
SYNCHRONOUS_MODES = {"OFF", "NORMAL", "FULL", "EXTRA", "0", "1", "2", "3"}


class DatabaseManager:
    """
    Manages the SQLite connection of one index file.

    The connection is opened lazily, tuned once with the storage pragmas,
    and reused until close(). Writes go through cursor(), which commits
    on success and rolls back on any exception.
    """

    def __init__(self, db_path: Union[str, Path], storage: StorageConfig = None):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file, or ":memory:".
            storage: Pragma settings. Defaults to StorageConfig().
        """
        self.db_path = Path(db_path)
        self.storage = storage or StorageConfig()

        self._validate_storage(self.storage)

        if not self.in_memory:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection: Optional[sqlite3.Connection] = None

    @property
    def in_memory(self) -> bool:
        return str(self.db_path) == MEMORY_PATH

    @staticmethod
    def _validate_storage(storage: StorageConfig) -> None:
        """Reject pragma values that cannot be applied verbatim."""
        if str(storage.journal_mode).upper() not in JOURNAL_MODES:
            raise ConfigurationError(
                f"Unsupported journal mode: {storage.journal_mode}",
                {"allowed": sorted(JOURNAL_MODES)}
            )
        if str(storage.synchronous).upper() not in SYNCHRONOUS_MODES:
            raise ConfigurationError(
                f"Unsupported synchronous mode: {storage.synchronous}",
                {"allowed": sorted(SYNCHRONOUS_MODES)}
            )
        if not isinstance(storage.page_size, int) or storage.page_size <= 0:
            raise ConfigurationError(f"Invalid page size: {storage.page_size}")

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new database connection with the configured pragmas."""
        try:
            conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                timeout=self.storage.timeout
            )

            conn.row_factory = sqlite3.Row

            # page_size only takes effect before the first table is created
            conn.execute(f"PRAGMA page_size = {int(self.storage.page_size)}")
            conn.execute(f"PRAGMA journal_mode = {self.storage.journal_mode.upper()}")
            conn.execute(f"PRAGMA synchronous = {str(self.storage.synchronous).upper()}")

            logger.debug(f"Opened database: {self.db_path}")

            return conn

        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to connect to database: {e}",
                {"path": str(self.db_path)}
            ) from e

    def _get_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._connection = self._create_connection()
        return self._connection

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for read access to the shared connection.

        Yields:
            SQLite connection with Row factory enabled.
        """
        yield self._get_connection()

    @contextmanager
    def cursor(self, commit: bool = True) -> Generator[sqlite3.Cursor, None, None]:
        """
        Context manager for database cursors with automatic commit/rollback.

        Everything executed through the cursor forms one transaction.

        Args:
            commit: Whether to commit on successful exit.

        Yields:
            SQLite cursor for query execution.
        """
        conn = self._get_connection()
        cursor = conn.cursor()

        try:
            yield cursor
            if commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()

    def close(self) -> None:
        """Close the underlying connection if it is open."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug(f"Closed database: {self.db_path}")
