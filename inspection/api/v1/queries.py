"""Crop query API endpoints."""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from inspection.database import get_db
from inspection.schemas.region import ResultRow
from inspection.services.query_engine import evaluate
from inspection.services.query_parser import parse_query_document
from inspection.services.region_store_sql import SqlRegionStore

router = APIRouter(prefix="/queries", tags=["Queries"])


@router.post("/crop", response_model=List[ResultRow])
def run_crop_query(
    document: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
):
    """
    Run a crop query document and return the matching regions
    ordered by y, then x.
    """
    query = parse_query_document(document)
    return evaluate(SqlRegionStore(db), query)
