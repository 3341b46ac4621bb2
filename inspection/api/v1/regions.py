"""Regions API endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inspection.database import get_db
from inspection.schemas.region import RegionSummary
from inspection.services.region_store_sql import SqlRegionStore

router = APIRouter(prefix="/regions", tags=["Regions"])


@router.get("/summary", response_model=RegionSummary)
def get_region_summary(db: Session = Depends(get_db)):
    """Number of stored regions and groups."""
    store = SqlRegionStore(db)
    with store.snapshot():
        return RegionSummary(
            region_count=store.count_regions(),
            group_count=store.count_groups(),
        )
