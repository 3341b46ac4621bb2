"""Schema exports."""
from inspection.schemas.query import CropQuery, CropRegion, Point, QueryDocument
from inspection.schemas.region import RegionRecord, RegionSummary, ResultRow

__all__ = [
    "CropQuery",
    "CropRegion",
    "Point",
    "QueryDocument",
    "RegionRecord",
    "RegionSummary",
    "ResultRow",
]
