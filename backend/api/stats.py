# api/stats.py
from fastapi import APIRouter, Depends

from schemas.applications import ApplicationStats
from store import JsonApplicationStore, get_store

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=ApplicationStats)
def application_stats(store: JsonApplicationStore = Depends(get_store)):
    # counts always cover the whole collection, never a filtered view
    return store.stats()
