# api/applications.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from schemas.applications import ApplicationIn, ApplicationOut, DeleteResult
from store import JsonApplicationStore, get_store

router = APIRouter(prefix="/api/applications", tags=["applications"])

# ---------- LIST (supports /api/applications and /api/applications/) ----------
@router.get("", response_model=list[ApplicationOut])
@router.get("/", response_model=list[ApplicationOut], include_in_schema=False)
def list_applications(
    status: Optional[str] = Query(default=None, description="Applied|Interview|Offer|Rejected, or All"),
    sort: Optional[str] = Query(default=None, description="asc for oldest first, anything else newest first"),
    store: JsonApplicationStore = Depends(get_store),
):
    return store.list_applications(status=status, sort=sort)

# ---------- GET ONE ----------
@router.get("/{application_id}", response_model=ApplicationOut)
def get_application(
    application_id: int,
    store: JsonApplicationStore = Depends(get_store),
):
    return store.get(application_id)

# ---------- CREATE ----------
@router.post("", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_application(
    app_in: ApplicationIn,
    store: JsonApplicationStore = Depends(get_store),
):
    """
    Creates an application. The server assigns the id; an `id` in the body is ignored.
    """
    return store.create(app_in)

# ---------- REPLACE ----------
@router.put("/{application_id}", response_model=ApplicationOut)
def update_application(
    application_id: int,
    app_in: ApplicationIn,
    store: JsonApplicationStore = Depends(get_store),
):
    # whole-record replacement, the path id always wins
    return store.update(application_id, app_in)

# ---------- DELETE ----------
@router.delete("/{application_id}", response_model=DeleteResult)
def delete_application(
    application_id: int,
    store: JsonApplicationStore = Depends(get_store),
):
    deleted_id = store.delete(application_id)
    return DeleteResult(id=deleted_id)
