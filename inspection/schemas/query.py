"""Pydantic schemas for crop query documents.

A query document has the shape::

    {
      "query": {
        "operator_crop": {
          "region": {"p_min": {"x": 0, "y": 0}, "p_max": {"x": 4, "y": 4}},
          "category": 2,
          "one_of_groups": [1, 2],
          "proper": true
        }
      }
    }

Only ``region`` is required. The box is used exactly as given; an inverted
box is rejected rather than normalized.
"""
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StrictBool, StrictInt, model_validator


# JSON ints are accepted; strings, booleans and NaN/Inf are not
Coordinate = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class Point(BaseModel):
    """A 2D corner of the query box."""
    x: Coordinate
    y: Coordinate

    class Config:
        frozen = True


class CropRegion(BaseModel):
    """Closed axis-aligned box ``[p_min.x, p_max.x] x [p_min.y, p_max.y]``."""
    p_min: Point
    p_max: Point

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_ordered(self) -> "CropRegion":
        if self.p_min.x > self.p_max.x:
            raise ValueError(
                f"p_min.x ({self.p_min.x}) is greater than p_max.x ({self.p_max.x})"
            )
        if self.p_min.y > self.p_max.y:
            raise ValueError(
                f"p_min.y ({self.p_min.y}) is greater than p_max.y ({self.p_max.y})"
            )
        return self

    @property
    def xmin(self) -> float:
        return self.p_min.x

    @property
    def ymin(self) -> float:
        return self.p_min.y

    @property
    def xmax(self) -> float:
        return self.p_max.x

    @property
    def ymax(self) -> float:
        return self.p_max.y

    def contains(self, x: float, y: float) -> bool:
        """Boundary-inclusive point containment."""
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax


class CropQuery(BaseModel):
    """Query descriptor: bounding box plus optional attribute filters."""
    region: CropRegion
    category: Optional[StrictInt] = None
    one_of_groups: Optional[Annotated[frozenset[StrictInt], Field(min_length=1)]] = None
    proper: StrictBool = False

    class Config:
        frozen = True


class QuerySection(BaseModel):
    operator_crop: CropQuery


class QueryDocument(BaseModel):
    """Top-level query configuration document."""
    query: QuerySection
