"""Services package."""
from inspection.services.region_store import open_region_store
from inspection.services.region_store_base import GroupMember, RegionStore
from inspection.services.region_store_memory import InMemoryRegionStore
from inspection.services.region_store_sql import SqlRegionStore

__all__ = [
    "GroupMember",
    "InMemoryRegionStore",
    "RegionStore",
    "SqlRegionStore",
    "open_region_store",
]
