"""Inspection region store: ingestion and crop queries over inspection points."""

__version__ = "0.1.0"
