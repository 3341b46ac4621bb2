"""Region store abstract base class.

Defines the interface the ingestion pipeline and the query engine depend on.
Consumers receive a store handle explicitly (see open_region_store() in
region_store.py) rather than reaching for a global connection.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterable, Iterator, NamedTuple

from inspection.schemas.query import CropQuery
from inspection.schemas.region import RegionRecord


class GroupMember(NamedTuple):
    """Minimal projection used by the proper-containment pass."""
    group_id: int
    coord_x: float
    coord_y: float


class RegionStore(ABC):
    """Abstract base class for region stores."""

    @abstractmethod
    def insert_groups(self, ids: Iterable[int]) -> int:
        """Insert group ids, skipping ids that are already present.

        Returns:
            Number of newly inserted groups
        """
        ...

    @abstractmethod
    def insert_regions(self, rows: Iterable[RegionRecord]) -> int:
        """Append regions. Every referenced group must already exist.

        Returns:
            Number of inserted regions
        """
        ...

    @abstractmethod
    def scan_regions(self, query: CropQuery) -> list[RegionRecord]:
        """Return regions inside the closed box of ``query.region``.

        Also restricted by ``query.category`` and ``query.one_of_groups`` when
        set. ``query.proper`` is ignored here. No ordering is guaranteed.
        """
        ...

    @abstractmethod
    def scan_all_regions(self) -> list[GroupMember]:
        """Return (group_id, coord_x, coord_y) for every stored region."""
        ...

    @abstractmethod
    def count_regions(self) -> int:
        ...

    @abstractmethod
    def count_groups(self) -> int:
        ...

    @contextmanager
    def transaction(self) -> Iterator["RegionStore"]:
        """Group writes so they are applied all together or not at all."""
        yield self

    @contextmanager
    def snapshot(self) -> Iterator["RegionStore"]:
        """Run several scans against one consistent view of the data."""
        yield self
