# backend/schemas/store.py
from pydantic import BaseModel, ConfigDict
from typing import Optional


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class StoreCreate(ORMBase):
    name: str


# Partial update - all fields optional
class StoreUpdate(ORMBase):
    name: Optional[str] = None


class StoreOut(ORMBase):
    id: int
    name: str


class StoreDeleted(BaseModel):
    message: str
    folders: int
    products: int
