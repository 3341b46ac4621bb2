"""API v1 router aggregation."""
from fastapi import APIRouter

from inspection.api.v1.queries import router as queries_router
from inspection.api.v1.regions import router as regions_router

router = APIRouter()

router.include_router(queries_router)
router.include_router(regions_router)
