"""
CLI script to query an index.

Usage:
    python scripts/run_search.py "cats"                      # Free text search
    python scripts/run_search.py "title: cats" --payload     # Field search, full documents
    python scripts/run_search.py "" --facet category         # Facet counts
    python scripts/run_search.py "cats" --count --filter "id > 10"
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from litesearch.core import get_config, ConfigurationError, LiteSearchError
from litesearch.core.config_loader import reload_config
from litesearch.indexer import DocumentIndex
from litesearch.search import FacetOptions, SearchOptions
from litesearch.utils import truncate_text


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Search an index built with run_indexer.py"
    )

    parser.add_argument("query", help="Free text or 'field: value' query, may be empty")
    parser.add_argument("--database", type=str, help="Index file (defaults to config)")
    parser.add_argument("--config", type=str, help="Path to custom config.json file")
    parser.add_argument("--filter", type=str, default="", help="Raw SQL predicate")
    parser.add_argument("--fields", type=str, help="Comma separated projection")
    parser.add_argument("--limit", type=int, help="Maximum number of results")
    parser.add_argument("--offset", type=int, default=0, help="Results to skip")
    parser.add_argument("--fuzzy", type=int, help="NEAR distance for proximity matching")
    parser.add_argument("--payload", action="store_true", help="Return full documents")
    parser.add_argument("--facet", type=str, help="Field to aggregate counts by")
    parser.add_argument("--count", action="store_true", help="Only print the match count")
    parser.add_argument("--width", type=int, default=0, help="Truncate string values to this width")

    return parser.parse_args()


def _truncate(document: dict, width: int) -> dict:
    if not width:
        return document
    return {
        key: truncate_text(value, width) if isinstance(value, str) else value
        for key, value in document.items()
    }


def main():
    """Main entry point for the search CLI."""
    args = parse_args()

    try:
        config = reload_config(Path(args.config)) if args.config else get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    database = Path(args.database) if args.database else config.paths.database_path

    try:
        with DocumentIndex.open(database, config) as index:
            if args.count:
                print(index.count_documents(args.query, args.filter))
                sys.exit(0)

            if args.facet:
                options = FacetOptions(
                    limit=args.limit if args.limit is not None else config.search.facet_limit,
                    offset=args.offset,
                    filter=args.filter,
                    fuzzy_distance=args.fuzzy
                )
                results = index.facet_search(args.query, args.facet, options)
            else:
                options = SearchOptions(
                    fields=args.fields.split(",") if args.fields else "*",
                    limit=args.limit if args.limit is not None else config.search.default_limit,
                    offset=args.offset,
                    filter=args.filter,
                    payload=args.payload,
                    fuzzy_distance=args.fuzzy
                )
                results = [_truncate(item, args.width) for item in index.search(args.query, options)]

    except LiteSearchError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(results, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
