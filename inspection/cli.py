"""Command-line entry points for loading data and running crop queries."""
import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from inspection.config import Settings, get_settings
from inspection.database import get_engine
from inspection.errors import InspectionError
from inspection.services.ingestion import ingest, load_data_directory
from inspection.services.query_engine import evaluate
from inspection.services.query_parser import load_query_file
from inspection.services.region_store import open_region_store
from inspection.services.region_store_memory import InMemoryRegionStore
from inspection.utils.db import create_tables, ensure_database
from inspection.utils.formatting import write_results

logger = logging.getLogger("inspection.cli")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)


def build_load_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load points/categories/groups files into the inspection database"
    )
    parser.add_argument(
        "--data_directory", "--data-directory",
        dest="data_directory",
        default=settings.DATA_DIRECTORY,
        required=settings.DATA_DIRECTORY is None,
        help="Directory containing points.txt, categories.txt and groups.txt",
    )
    parser.add_argument(
        "--skip-bootstrap", action="store_true",
        help="Do not create the database and tables before loading",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Validate and ingest into memory only; the database is not touched",
    )
    return parser


def load_data_main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings)
    args = build_load_parser(settings).parse_args(argv)

    print(f"Using data directory: {args.data_directory}")
    try:
        records = load_data_directory(args.data_directory, settings)

        if args.dry_run:
            summary = ingest(InMemoryRegionStore(), records)
            print(
                f"Dry run OK: {summary.region_count} regions in "
                f"{summary.group_count} groups"
            )
            return 0

        if not args.skip_bootstrap:
            ensure_database(settings)
            create_tables(get_engine())

        with open_region_store() as store:
            summary = ingest(store, records)
    except InspectionError as e:
        logger.error(f"Loading failed: {e}")
        return 1

    print(
        f"Data loaded successfully: {summary.region_count} regions in "
        f"{summary.group_count} groups"
    )
    return 0


def build_query_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a crop query and write matching regions to a text file"
    )
    parser.add_argument("query_file", nargs="?", help="Path to the JSON query file")
    parser.add_argument("--query", dest="query_option", help="Path to the JSON query file")
    parser.add_argument(
        "--output", "-o",
        default=settings.QUERY_OUTPUT_PATH,
        help=f"Output file (default: {settings.QUERY_OUTPUT_PATH})",
    )
    return parser


def run_query_main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings)
    parser = build_query_parser(settings)
    args = parser.parse_args(argv)

    query_path = args.query_option or args.query_file
    if not query_path:
        parser.error("a query file is required: --query=<path_to_json_file>")

    try:
        query = load_query_file(query_path)
        with open_region_store() as store:
            rows = evaluate(store, query)
    except InspectionError as e:
        logger.error(f"Query failed: {e}")
        return 1

    try:
        output = write_results(args.output, rows)
    except OSError as e:
        logger.error(f"Cannot write results to {args.output}: {e.strerror}")
        return 1
    print(f"Query executed successfully. {len(rows)} results written to {output}")
    return 0


def build_serve_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"Serve the {settings.APP_NAME} HTTP API")
    parser.add_argument("--host", default=settings.API_HOST)
    parser.add_argument("--port", type=int, default=settings.API_PORT)
    return parser


def serve_main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings)
    args = build_serve_parser(settings).parse_args(argv)
    uvicorn.run(
        "inspection.main:app",
        host=args.host,
        port=args.port,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0
