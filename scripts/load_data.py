"""Load an inspection data directory into the database.

Usage:
    python scripts/load_data.py --data_directory /path/to/data
"""
import sys

from inspection.cli import load_data_main

if __name__ == "__main__":
    sys.exit(load_data_main())
