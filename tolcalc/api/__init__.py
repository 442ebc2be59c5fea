"""API router aggregation."""
from fastapi import APIRouter

from tolcalc.api.v1 import tolerance

api_router = APIRouter()

# v1 routes; sub-routers carry no prefix of their own
v1_router = APIRouter(prefix="/v1")
v1_router.include_router(tolerance.router, prefix="/tolerance", tags=["tolerance"])

api_router.include_router(v1_router)

__all__ = ["api_router"]
