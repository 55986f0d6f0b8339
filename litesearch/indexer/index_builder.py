"""
Bulk indexing pipeline for litesearch.

Reads documents from JSON and JSON Lines files and writes them into a
DocumentIndex in batches, upserting by id, with progress tracking.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Union

from ..core import get_logger, DocumentError
from ..database import ID_FIELD
from ..utils import find_document_files, load_documents
from .document_index import DocumentIndex

logger = get_logger(__name__)


@dataclass
class IndexingStats:
    """Statistics from an indexing run."""
    files_scanned: int = 0
    files_indexed: int = 0
    files_failed: int = 0
    documents_indexed: int = 0
    documents_skipped: int = 0
    errors: List[str] = field(default_factory=list)


class IndexBuilder:
    """
    Orchestrates bulk ingestion of document files.

    Unreadable files and documents without an id are recorded in the
    stats and skipped so that one bad input does not stop the run.
    """

    def __init__(
        self,
        index: DocumentIndex,
        progress_callback: Callable[[int, int, str], None] = None,
        batch_size: int = None
    ):
        """
        Initialize the index builder.

        Args:
            index: Target index; its table must exist.
            progress_callback: Optional callback(current, total, filename)
                              called for every file.
            batch_size: Documents per transaction. Defaults to config value.
        """
        self.index = index
        self.config = index.config
        self.progress_callback = progress_callback

        self.batch_size = batch_size or self.config.indexing.batch_size
        self.log_every = self.config.indexing.log_progress_every

    def build(self, paths: Iterable[Union[str, Path]]) -> IndexingStats:
        """
        Ingest every document file under the given paths.

        Args:
            paths: Document files or directories to scan.

        Returns:
            IndexingStats with counts and any errors encountered.
        """
        stats = IndexingStats()

        files = list(find_document_files(paths))
        stats.files_scanned = len(files)

        logger.info(f"Found {stats.files_scanned} document files to process")

        batch: List[dict] = []

        for i, filepath in enumerate(files):
            if self.progress_callback:
                self.progress_callback(i + 1, stats.files_scanned, filepath.name)

            try:
                documents = load_documents(filepath)
            except DocumentError as e:
                stats.files_failed += 1
                error_msg = f"{filepath.name}: {e.message}"
                stats.errors.append(error_msg)
                logger.warning(f"Failed to load: {error_msg}")
                continue

            stats.files_indexed += 1

            for position, document in enumerate(documents):
                if document.get(ID_FIELD) is None:
                    stats.documents_skipped += 1
                    stats.errors.append(f"{filepath.name}[{position}]: document has no id")
                    continue

                batch.append(document)

                if len(batch) >= self.batch_size:
                    self._commit_batch(batch, stats)
                    batch.clear()

            if (i + 1) % self.log_every == 0:
                logger.info(
                    f"Progress: {i + 1}/{stats.files_scanned} files "
                    f"({stats.documents_indexed} documents indexed, {stats.files_failed} files failed)"
                )

        if batch:
            self._commit_batch(batch, stats)

        logger.info(
            f"Indexing complete: {stats.documents_indexed} documents from "
            f"{stats.files_indexed} files, {stats.documents_skipped} skipped, "
            f"{stats.files_failed} failures"
        )

        return stats

    def _commit_batch(self, batch: List[dict], stats: IndexingStats) -> None:
        """Write one batch, recording it as skipped if a document is rejected."""
        try:
            stats.documents_indexed += self.index.add_documents(batch, replace=True)
        except DocumentError as e:
            stats.documents_skipped += len(batch)
            stats.errors.append(f"Batch of {len(batch)} documents rejected: {e.message}")
            logger.error(f"Batch rejected: {e.message}")


def progress_printer(current: int, total: int, filename: str) -> None:
    """Simple progress callback that prints to console."""
    percent = (current / total) * 100 if total > 0 else 0
    print(f"\r[{percent:5.1f}%] {current}/{total} - {filename[:50]:<50}", end="", flush=True)
