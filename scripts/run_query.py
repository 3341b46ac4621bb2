"""Run a crop query against the inspection database.

Usage:
    python scripts/run_query.py --query=query.json [--output query_output.txt]
"""
import sys

from inspection.cli import run_query_main

if __name__ == "__main__":
    sys.exit(run_query_main())
