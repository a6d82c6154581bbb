# backend/routes/stores.py
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from routes.deps import client_ip, get_containment, get_queries
from services.containment import ContainmentManager
from services.queries import QueryService
from utils.audit import write_log
import schemas.store as store_schemas
import schemas.folder as folder_schemas

router = APIRouter(prefix="/api/stores", tags=["Stores"])


# Create a new store
@router.post("/", response_model=store_schemas.StoreOut, status_code=201)
def create_store(
    payload: store_schemas.StoreCreate,
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
):
    store = store_schemas.StoreOut.model_validate(manager.create_store(payload.name))
    write_log(db, action="STORE_CREATE", resource="stores", ip=client_ip(request), meta={"id": store.id})
    return store


@router.get("/", response_model=List[store_schemas.StoreOut])
def list_stores(manager: ContainmentManager = Depends(get_containment)):
    return manager.list_stores()


@router.get("/{store_id}", response_model=store_schemas.StoreOut)
def get_store(store_id: int, manager: ContainmentManager = Depends(get_containment)):
    return manager.get_store(store_id)


# Folders of a store
@router.get("/folders/{store_id}", response_model=List[folder_schemas.FolderBrief])
def list_store_folders(store_id: int, queries: QueryService = Depends(get_queries)):
    return queries.folders_by_store(store_id)


@router.put("/{store_id}", response_model=store_schemas.StoreOut)
def update_store(
    store_id: int,
    payload: store_schemas.StoreUpdate,
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
):
    store = store_schemas.StoreOut.model_validate(manager.update_store(store_id, name=payload.name))
    write_log(db, action="STORE_UPDATE", resource="stores", ip=client_ip(request), meta={"id": store_id})
    return store


# Delete a store together with its folders and their products
@router.delete("/{store_id}", response_model=store_schemas.StoreDeleted)
def delete_store(
    store_id: int,
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
):
    summary = manager.delete_store(store_id)
    write_log(db, action="STORE_DELETE", resource="stores", ip=client_ip(request), meta={"id": store_id, **summary})
    return {"message": "Store, folders, and products deleted successfully", **summary}
