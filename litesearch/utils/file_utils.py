"""
File utility functions for litesearch.

Discovers document files and reads JSON or JSON Lines documents from them.
"""

import json
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from ..core import DocumentError

SUPPORTED_EXTENSIONS = (".json", ".jsonl")


def find_document_files(paths: Iterable[Union[str, Path]]) -> Iterator[Path]:
    """
    Expand files and directories into document files.

    Directories are scanned recursively for supported extensions in
    sorted order; explicit file paths are yielded as given.

    Args:
        paths: Files or directories.

    Yields:
        Paths of document files.
    """
    for path in paths:
        path = Path(path)

        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if candidate.is_file() and candidate.suffix.lower() in SUPPORTED_EXTENSIONS:
                    yield candidate
        else:
            yield path


def load_documents(filepath: Union[str, Path]) -> List[dict]:
    """
    Read documents from a .json or .jsonl file.

    A .json file holds one object or an array of objects; a .jsonl file
    holds one object per non-blank line.

    Args:
        filepath: Path to the document file.

    Returns:
        List of document dicts.

    Raises:
        DocumentError: If the file is not valid JSON or holds non-objects.
    """
    filepath = Path(filepath)

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            if filepath.suffix.lower() == ".jsonl":
                documents = [json.loads(line) for line in f if line.strip()]
            else:
                data = json.load(f)
                documents = data if isinstance(data, list) else [data]
    except (OSError, json.JSONDecodeError) as e:
        raise DocumentError(
            f"Cannot read documents from {filepath.name}: {e}",
            details={"path": str(filepath)}
        ) from e

    for position, document in enumerate(documents):
        if not isinstance(document, dict):
            raise DocumentError(
                f"Entry {position} of {filepath.name} is not an object",
                position=position,
                details={"path": str(filepath)}
            )

    return documents
