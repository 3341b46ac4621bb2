"""Shared formatting utilities for query output."""
from pathlib import Path
from typing import Iterable

from inspection.schemas.region import ResultRow


def format_number(value: float) -> str:
    """Format a coordinate compactly.

    Examples:
        format_number(1.0)   -> "1"
        format_number(0.25)  -> "0.25"
        format_number(1e-07) -> "1e-07"
    """
    return f"{value:.15g}"


def format_result_row(row: ResultRow) -> str:
    """Render one result as ``x y category group_id``."""
    return f"{format_number(row.x)} {format_number(row.y)} {row.category} {row.group_id}"


def format_results(rows: Iterable[ResultRow]) -> str:
    """Render results one per line, each line newline-terminated."""
    return "".join(f"{format_result_row(row)}\n" for row in rows)


def write_results(path: str | Path, rows: Iterable[ResultRow]) -> Path:
    """Write results to ``path``, replacing any previous output."""
    path = Path(path)
    text = format_results(rows)
    path.write_text(text, encoding="utf-8")
    return path
