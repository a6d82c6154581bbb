# backend/schemas/product.py
from pydantic import BaseModel, Field
from typing import Optional, Union

from schemas.folder import FolderBrief
from schemas.store import ORMBase

# Loose numeric input: range and type are enforced by the stock ledger (400, not 422)
QuantityInput = Optional[Union[int, float, str]]


# Schema for partial product updates.
# Quantity is intentionally absent: stock changes go through addStock/subtractStock.
class ProductUpdate(ORMBase):
    name: Optional[str] = None
    folder_id: Optional[int] = Field(default=None, alias="folder")
    source: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="image")


class ProductBrief(ORMBase):
    id: int
    name: str
    quantity: int
    folder_id: int
    source: str
    image_url: Optional[str] = None


# Full product representation with folder populated
class ProductOut(ProductBrief):
    folder: Optional[FolderBrief] = None


class AddStockRequest(BaseModel):
    addedQuantity: QuantityInput = None


class SubtractStockRequest(BaseModel):
    quantitySold: QuantityInput = None
    customerName: Optional[str] = None
