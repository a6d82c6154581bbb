# backend/routes/folders.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from routes.deps import client_ip, get_containment, get_queries
from services.containment import ContainmentManager
from services.queries import QueryService
from utils.audit import write_log
import schemas.folder as folder_schemas

router = APIRouter(prefix="/api/folders", tags=["Folders"])


@router.post("/", response_model=folder_schemas.FolderOut, status_code=201)
def create_folder(
    payload: folder_schemas.FolderCreate,
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
):
    folder = folder_schemas.FolderOut.model_validate(manager.create_folder(payload.name, payload.store_id))
    write_log(db, action="FOLDER_CREATE", resource="folders", ip=client_ip(request),
              meta={"id": folder.id, "store_id": folder.store_id})
    return folder


@router.get("/", response_model=List[folder_schemas.FolderOut])
def list_folders(
    store_id: Optional[int] = Query(None, description="Filter by owning store"),
    queries: QueryService = Depends(get_queries),
):
    return queries.folders_by_store(store_id)


@router.get("/{folder_id}", response_model=folder_schemas.FolderOut)
def get_folder(folder_id: int, manager: ContainmentManager = Depends(get_containment)):
    return manager.get_folder(folder_id)


@router.put("/{folder_id}", response_model=folder_schemas.FolderOut)
def update_folder(
    folder_id: int,
    payload: folder_schemas.FolderUpdate,
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
):
    folder = folder_schemas.FolderOut.model_validate(
        manager.update_folder(folder_id, name=payload.name, store_id=payload.store_id)
    )
    write_log(db, action="FOLDER_UPDATE", resource="folders", ip=client_ip(request), meta={"id": folder_id})
    return folder


# Delete a folder and its associated products
@router.delete("/{folder_id}", response_model=folder_schemas.FolderDeleted)
def delete_folder(
    folder_id: int,
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
):
    removed = manager.delete_folder(folder_id)
    write_log(db, action="FOLDER_DELETE", resource="folders", ip=client_ip(request),
              meta={"id": folder_id, "products": removed})
    return {"message": "Folder and its products deleted successfully", "products": removed}
