# backend/schemas/sale.py
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from schemas.product import ProductBrief, ProductOut, QuantityInput
from schemas.store import ORMBase


# Sales-report creation; "date" may be in the past or future, defaults to now
class SaleCreate(ORMBase):
    customer: Optional[str] = None
    product_id: int = Field(alias="product")
    quantity: QuantityInput = None
    date: Optional[datetime] = None


# Administrative correction, does not touch product stock
class SaleUpdate(ORMBase):
    customer: Optional[str] = None
    product_id: Optional[int] = Field(default=None, alias="product")
    quantity: QuantityInput = None
    date: Optional[datetime] = None


class SaleOut(ORMBase):
    id: int
    customer: str
    product_id: int
    quantity: int
    date: datetime
    # None once the product has been deleted
    product: Optional[ProductBrief] = None


class SaleCreated(BaseModel):
    message: str
    sale: SaleOut


class StockSaleResponse(BaseModel):
    message: str
    updatedProduct: ProductOut
    newSale: SaleOut
