"""In-memory region store.

Holds groups and regions in plain Python containers. Used for dry runs of the
ingestion pipeline and as a deterministic store in tests.
"""
from contextlib import contextmanager
from typing import Iterable, Iterator

from inspection.errors import StoreWriteError
from inspection.schemas.query import CropQuery
from inspection.schemas.region import RegionRecord
from inspection.services.region_store_base import GroupMember, RegionStore


class InMemoryRegionStore(RegionStore):
    """Region store backed by a set of group ids and a list of records."""

    def __init__(self):
        self.groups: set[int] = set()
        self.regions: list[RegionRecord] = []
        self._region_ids: set[int] = set()

    @contextmanager
    def transaction(self) -> Iterator["InMemoryRegionStore"]:
        saved = (set(self.groups), list(self.regions), set(self._region_ids))
        try:
            yield self
        except BaseException:
            self.groups, self.regions, self._region_ids = saved
            raise

    def insert_groups(self, ids: Iterable[int]) -> int:
        new_ids = set(ids) - self.groups
        self.groups.update(new_ids)
        return len(new_ids)

    def insert_regions(self, rows: Iterable[RegionRecord]) -> int:
        count = 0
        for row in rows:
            if row.group_id not in self.groups:
                raise StoreWriteError(
                    f"Region {row.id} references unknown group {row.group_id}"
                )
            if row.id in self._region_ids:
                raise StoreWriteError(f"Duplicate region id {row.id}")
            self.regions.append(row)
            self._region_ids.add(row.id)
            count += 1
        return count

    def scan_regions(self, query: CropQuery) -> list[RegionRecord]:
        box = query.region
        return [
            r for r in self.regions
            if box.contains(r.coord_x, r.coord_y)
            and (query.category is None or r.category == query.category)
            and (query.one_of_groups is None or r.group_id in query.one_of_groups)
        ]

    def scan_all_regions(self) -> list[GroupMember]:
        return [GroupMember(r.group_id, r.coord_x, r.coord_y) for r in self.regions]

    def count_regions(self) -> int:
        return len(self.regions)

    def count_groups(self) -> int:
        return len(self.groups)
