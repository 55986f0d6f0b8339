"""
CLI script to create an index and load documents into it.

Usage:
    python scripts/run_indexer.py --fields title,body docs/            # Create + ingest
    python scripts/run_indexer.py --fields title,body --reset docs/    # Full rebuild
    python scripts/run_indexer.py --database out/index.db data.jsonl
    python scripts/run_indexer.py --config path/to/config.json docs/
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from litesearch.core import get_config, ConfigurationError, DatabaseError
from litesearch.core.config_loader import reload_config
from litesearch.indexer import DocumentIndex, IndexBuilder, progress_printer


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Index JSON documents for full-text search"
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="JSON / JSON Lines files or directories to ingest"
    )

    parser.add_argument(
        "--fields",
        type=str,
        help="Comma separated list of fields to index (required for a new index)"
    )

    parser.add_argument(
        "--database",
        type=str,
        help="Index file (defaults to paths.database_path from config)"
    )

    parser.add_argument(
        "--tokenizer",
        type=str,
        help="FTS5 tokenizer (defaults to index.tokenizer from config)"
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing index and rebuild from scratch"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output"
    )

    return parser.parse_args()


def main():
    """Main entry point for the indexer CLI."""
    args = parse_args()

    try:
        config = reload_config(Path(args.config)) if args.config else get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    database = Path(args.database) if args.database else config.paths.database_path
    fields = [f.strip() for f in args.fields.split(",") if f.strip()] if args.fields else []

    print("=" * 60)
    print("litesearch - Indexer")
    print("=" * 60)
    print(f"Database path:     {database}")
    print(f"Fields:            {', '.join(fields) or '(existing schema)'}")
    print(f"Reset mode:        {args.reset}")
    print("=" * 60)

    try:
        index = DocumentIndex(database, config)

        if args.reset and index.schema.exists:
            index.drop()

        if not index.schema.exists:
            if not fields:
                print("Error: --fields is required to create a new index")
                sys.exit(1)
            index.close()
            index = DocumentIndex.create(database, fields, args.tokenizer, config)

        callback = None if args.quiet else progress_printer

        with index:
            stats = IndexBuilder(index, progress_callback=callback).build(args.paths)

    except DatabaseError as e:
        print(f"Database error: {e.message}")
        sys.exit(1)

    if not args.quiet:
        print("\n")

    print("=" * 60)
    print("Indexing Complete")
    print("=" * 60)
    print(f"Files scanned:      {stats.files_scanned:,}")
    print(f"Files indexed:      {stats.files_indexed:,}")
    print(f"Files failed:       {stats.files_failed:,}")
    print(f"Documents indexed:  {stats.documents_indexed:,}")
    print(f"Documents skipped:  {stats.documents_skipped:,}")
    print("=" * 60)

    if stats.errors:
        print(f"\nErrors ({len(stats.errors)}):")
        for error in stats.errors[:20]:
            print(f"  - {error}")
        if len(stats.errors) > 20:
            print(f"  ... and {len(stats.errors) - 20} more errors")

    if stats.files_failed > 0:
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
