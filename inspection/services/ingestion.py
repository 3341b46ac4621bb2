"""Service for ingesting point, category and group files into the region store."""
import logging
import math
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel

from inspection.config import Settings, get_settings
from inspection.errors import FormatError, LineCountMismatch, MissingSourceError
from inspection.schemas.region import RegionRecord
from inspection.services.region_store_base import RegionStore

logger = logging.getLogger(__name__)


class IngestionSummary(BaseModel):
    region_count: int
    group_count: int
    new_group_count: int


def _read_lines(path: Path) -> List[str]:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise MissingSourceError(path, reason=e.strerror) from e
    try:
        return data.decode("utf-8").splitlines()
    except UnicodeDecodeError as e:
        line_number = data.count(b"\n", 0, e.start) + 1
        line = data.splitlines()[line_number - 1].decode("utf-8", errors="replace")
        raise FormatError(path, line_number, line, "not valid UTF-8 text") from None


def _parse_point(path: Path, line_number: int, line: str) -> tuple[float, float]:
    # Tokens after the first two are ignored
    parts = line.split()
    if len(parts) < 2:
        raise FormatError(path, line_number, line, "expected two numbers 'x y'")
    try:
        x, y = float(parts[0]), float(parts[1])
    except ValueError:
        raise FormatError(path, line_number, line, "coordinates must be numeric") from None
    if not (math.isfinite(x) and math.isfinite(y)):
        raise FormatError(path, line_number, line, "coordinates must be finite")
    return x, y


def _parse_category(path: Path, line_number: int, line: str) -> int:
    # Categories may be written as reals ("3.0"); the fractional part is truncated
    try:
        return int(float(line.strip()))
    except (ValueError, OverflowError):
        raise FormatError(path, line_number, line, "category must be numeric") from None


def _parse_group(path: Path, line_number: int, line: str) -> int:
    try:
        return int(line.strip())
    except ValueError:
        raise FormatError(path, line_number, line, "group id must be an integer") from None


def read_sources(
    points_path: str | Path,
    categories_path: str | Path,
    groups_path: str | Path,
) -> List[RegionRecord]:
    """
    Read the three line-aligned sources into region records.

    The k-th line of each file describes the same point, which gets id k.

    Raises:
        MissingSourceError: one of the files does not exist
        LineCountMismatch: the files have different numbers of lines
        FormatError: a line cannot be parsed
    """
    paths = [Path(points_path), Path(categories_path), Path(groups_path)]
    for path in paths:
        if not path.is_file():
            raise MissingSourceError(path)

    points_lines, category_lines, group_lines = (_read_lines(p) for p in paths)
    counts = {
        paths[0].name: len(points_lines),
        paths[1].name: len(category_lines),
        paths[2].name: len(group_lines),
    }
    if len(set(counts.values())) > 1:
        raise LineCountMismatch(counts)

    records = []
    for index, (point_line, category_line, group_line) in enumerate(
        zip(points_lines, category_lines, group_lines), start=1
    ):
        x, y = _parse_point(paths[0], index, point_line)
        records.append(
            RegionRecord(
                id=index,
                group_id=_parse_group(paths[2], index, group_line),
                coord_x=x,
                coord_y=y,
                category=_parse_category(paths[1], index, category_line),
            )
        )
    return records


def load_data_directory(
    data_directory: str | Path,
    settings: Optional[Settings] = None,
) -> List[RegionRecord]:
    """Read points/categories/groups files from a data directory."""
    settings = settings or get_settings()
    points_path, categories_path, groups_path = settings.source_paths(data_directory)
    logger.info(f"Loading data from {Path(data_directory)}")
    records = read_sources(points_path, categories_path, groups_path)
    logger.info(f"Parsed {len(records)} regions")
    return records


def derive_group_ids(records: Iterable[RegionRecord]) -> set[int]:
    """Distinct group ids referenced by the records."""
    return {record.group_id for record in records}


def ingest(store: RegionStore, records: Sequence[RegionRecord]) -> IngestionSummary:
    """
    Write groups, then regions, to the store in a single transaction.

    Any failure rolls back the whole batch.
    """
    group_ids = derive_group_ids(records)
    with store.transaction():
        new_groups = store.insert_groups(group_ids)
        region_count = store.insert_regions(records)
    logger.info(
        f"Ingested {region_count} regions in {len(group_ids)} groups "
        f"({new_groups} new groups)"
    )
    return IngestionSummary(
        region_count=region_count,
        group_count=len(group_ids),
        new_group_count=new_groups,
    )
