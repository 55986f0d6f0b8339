"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, document files, configurations and
ready-made indexes so that tests are isolated and safe.
"""

import json
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="litesearch_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    output_dir = temp_dir / "output"
    output_dir.mkdir()

    logs_dir = output_dir / "logs"
    logs_dir.mkdir()

    config_data = {
        "paths": {
            "database_path": str(output_dir / "test.db"),
            "logs_directory": str(logs_dir)
        },
        "storage": {
            "journal_mode": "MEMORY",
            "synchronous": "OFF",
            "page_size": 4096
        },
        "index": {
            "tokenizer": "unicode61"
        },
        "indexing": {
            "batch_size": 2,
            "log_progress_every": 1,
            "min_nested_string_length": 15
        },
        "search": {
            "default_limit": 20,
            "facet_limit": 10
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def test_config(temp_config: Path):
    """Config object loaded from the temporary config file."""
    from litesearch.core.config_loader import Config
    return Config.from_file(temp_config)


@pytest.fixture
def temp_database(temp_dir: Path) -> Path:
    """
    Create path for a temporary database.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Path where test database should be created.
    """
    return temp_dir / "test.db"


@pytest.fixture
def index(temp_database: Path, test_config):
    """An empty index with fields title, body and category."""
    from litesearch.indexer import DocumentIndex

    idx = DocumentIndex.create(temp_database, ["title", "body", "category"], config=test_config)
    yield idx
    idx.close()


@pytest.fixture
def sample_documents() -> list:
    """Documents covering flat, nested and non-indexed fields."""
    return [
        {
            "id": 1,
            "title": "Cats are wonderful pets",
            "body": "Cats sleep most of the day and hunt at night.",
            "category": "animals",
            "author": "alice"
        },
        {
            "id": 2,
            "title": "Dogs and their owners",
            "body": "A dog needs daily walks, unlike most cats.",
            "category": "animals",
            "author": "bob"
        },
        {
            "id": 3,
            "title": "Growing tomatoes",
            "body": {
                "blocks": [
                    {"type": "p", "text": "Tomatoes need plenty of sunshine and water."},
                    {"type": "img", "src": "tom.jpg"}
                ]
            },
            "category": "garden",
            "tags": ["summer", "vegetables"]
        }
    ]


@pytest.fixture
def populated_index(index, sample_documents):
    """Index holding the sample documents."""
    index.add_documents(sample_documents)
    return index


@pytest.fixture
def document_files(temp_dir: Path) -> Path:
    """
    Create a directory of JSON and JSON Lines document files.

    Returns:
        Path to the directory.
    """
    docs_dir = temp_dir / "docs"
    nested = docs_dir / "nested"
    nested.mkdir(parents=True)

    (docs_dir / "articles.json").write_text(json.dumps([
        {"id": "a1", "title": "First article", "category": "news"},
        {"id": "a2", "title": "Second article", "category": "news"}
    ]), encoding="utf-8")

    (docs_dir / "single.json").write_text(json.dumps(
        {"id": "s1", "title": "Lonely document", "category": "misc"}
    ), encoding="utf-8")

    (nested / "stream.jsonl").write_text(
        '{"id": "l1", "title": "Line one", "category": "news"}\n'
        "\n"
        '{"id": "l2", "title": "Line two", "category": "misc"}\n',
        encoding="utf-8"
    )

    (docs_dir / "readme.txt").write_text("Not a document")

    return docs_dir


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from litesearch.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    from litesearch.core import logger
    logger._logger_initialized = False
    yield
    logger._logger_initialized = False
