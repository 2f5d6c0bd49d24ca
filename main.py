#!/usr/bin/env python3
"""
SparkDeck - startup idea showcase.

Command-line entry point:
  - Print the idea catalog, filtered and sorted, with stats
  - Load the catalog from the bundled JSON file or a running API
  - Run the web server

Usage:
    python main.py                          # List all ideas (newest first)
    python main.py --category ai            # Only AI ideas
    python main.py --sort rating --json     # JSON output, best rated first
    python main.py --api-url http://localhost:8080/api
    python main.py --serve --port 8080      # Run the web server

Examples:
    # Browse locally
    python main.py --category saas --sort complexity

    # Serve the UI
    python main.py --serve
"""

import argparse
import json
import sys

from sparkdeck import __version__
from sparkdeck.config import (
    HOST,
    ITEMS_PER_PAGE,
    PORT,
    print_config_summary,
    validate_config,
)
from sparkdeck.logging import configure_logging
from sparkdeck.models import CATEGORY_ALL, SORT_KEYS
from sparkdeck.services.api_client import ApiClient
from sparkdeck.services.catalog import load_catalog
from sparkdeck.store import DataStore


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="sparkdeck",
        description="Browse the SparkDeck idea catalog or run the web server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           List every idea, newest first
  %(prog)s --category ai             Only ideas in the "ai" category
  %(prog)s --sort rating             Best rated first
  %(prog)s --json                    Print the list as JSON
  %(prog)s --limit 3                 Only the first three ideas
  %(prog)s --api-url URL             Load ideas from a running server
  %(prog)s --serve --port 8080       Run the web server
        """,
    )

    # Catalog options
    parser.add_argument(
        "--category", "-c",
        default=CATEGORY_ALL,
        metavar="NAME",
        help="Only show ideas in this category (default: all)",
    )

    parser.add_argument(
        "--sort", "-s",
        choices=list(SORT_KEYS),
        default="newest",
        help="Sort order (default: newest)",
    )

    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=ITEMS_PER_PAGE,
        metavar="N",
        help=f"List at most N ideas, 0 for all (default: {ITEMS_PER_PAGE})",
    )

    parser.add_argument(
        "--api-url",
        default=None,
        metavar="URL",
        help="Load ideas from this API base URL instead of the bundled catalog",
    )

    # Output options
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print ideas as JSON",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed progress and debug logs",
    )

    # Server options
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the web server",
    )

    parser.add_argument(
        "--host",
        default=HOST,
        help=f"Server interface (default: {HOST})",
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=PORT,
        help=f"Server port (default: {PORT})",
    )

    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("SparkDeck Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def limit_ideas(ideas, limit: int) -> list:
    """First `limit` ideas; a limit of 0 keeps them all."""
    ideas = list(ideas)
    return ideas[:limit] if limit > 0 else ideas


def print_catalog(store: DataStore, limit: int = ITEMS_PER_PAGE) -> None:
    """Print the filtered/sorted ideas (at most `limit`) and their stats."""
    state = store.state
    print("=" * 60)
    print(f"SparkDeck Ideas  (category: {state.current_category}, sort: {state.current_sort})")
    print("=" * 60)

    if not store.filtered_ideas:
        print("  (no ideas match)")

    shown = limit_ideas(store.filtered_ideas, limit)
    for position, idea in enumerate(shown, start=1):
        created = idea.created_at.strftime("%Y-%m-%d") if idea.created_at else "unknown"
        print(f"{position:>3}. {idea.title}")
        print(f"     {idea.category.upper()} · ★ {idea.rating:.1f} · {idea.complexity_label} · {created}")
        if idea.subtitle:
            print(f"     {idea.subtitle}")

    hidden = len(store.filtered_ideas) - len(shown)
    if hidden:
        print(f"  ... and {hidden} more (use --limit 0 to list all)")

    stats = store.compute_stats()
    print("-" * 60)
    print(f"Ideas: {stats.total_ideas} | Categories: {stats.total_categories} | Avg rating: {stats.avg_rating_text}")
    print("=" * 60)


def run_server(host: str, port: int) -> int:
    """Run the Flask server until interrupted."""
    from web.app import app

    print("=" * 60)
    print("🚀 SparkDeck")
    print("=" * 60)
    print(f"Open http://localhost:{port} in your browser")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    app.run(host=host, port=port)
    return 0


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(log_level="DEBUG" if args.verbose else "WARNING")

    if args.show_config:
        show_config()
        return 0

    try:
        if args.serve:
            return run_server(args.host, args.port)

        if args.api_url:
            ideas = ApiClient(args.api_url).get_ideas()
        else:
            ideas = load_catalog()

        store = DataStore(ideas)
        store.set_sort(args.sort)
        store.set_category(args.category)

        if args.json:
            shown = limit_ideas(store.filtered_ideas, args.limit)
            print(json.dumps([idea.to_dict() for idea in shown], indent=2))
        else:
            print_catalog(store, args.limit)
        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except (OSError, ValueError) as e:
        print(f"\n❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
