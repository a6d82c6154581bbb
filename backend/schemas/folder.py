# backend/schemas/folder.py
from pydantic import BaseModel, Field
from typing import Optional

from schemas.store import ORMBase, StoreOut


# Request body keeps the original wire name "store" for the owning store id
class FolderCreate(ORMBase):
    name: str
    store_id: int = Field(alias="store")


class FolderUpdate(ORMBase):
    name: Optional[str] = None
    store_id: Optional[int] = Field(default=None, alias="store")


class FolderBrief(ORMBase):
    id: int
    name: str
    store_id: int


# Folder with its store populated
class FolderOut(FolderBrief):
    store: Optional[StoreOut] = None


class FolderDeleted(BaseModel):
    message: str
    products: int
