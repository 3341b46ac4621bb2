"""Pydantic schemas for ingested regions and query result rows."""
from pydantic import BaseModel, Field


class RegionRecord(BaseModel):
    """One ingested point, validated once from the three aligned sources."""
    id: int = Field(..., ge=1)
    group_id: int
    coord_x: float
    coord_y: float
    category: int

    class Config:
        frozen = True


class ResultRow(BaseModel):
    """Projection of a matching region emitted by a crop query."""
    x: float
    y: float
    category: int
    group_id: int

    class Config:
        frozen = True

    def as_tuple(self) -> tuple[float, float, int, int]:
        return (self.x, self.y, self.category, self.group_id)


class RegionSummary(BaseModel):
    """Counts of persisted regions and groups."""
    region_count: int
    group_count: int
