# backend/services/queries.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from models.folder import Folder
from models.product import Product
from models.sale import SaleRecord
from services.entity_store import EntityStore
from services.errors import InvalidInput
from utils.validation import as_utc


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class QueryService:
    """Read-only projections; results are always in insertion (id) order."""

    def __init__(self, db: Session):
        self.folders = EntityStore(db, Folder, "Folder")
        self.products = EntityStore(db, Product, "Product")
        self.sales = EntityStore(db, SaleRecord, "Sales report")

    def folders_by_store(self, store_id: Optional[int] = None) -> List[Folder]:
        if store_id is None:
            return self.folders.find()
        return self.folders.find(Folder.store_id == store_id)

    def products_by_folder(self, folder_id: Optional[int] = None) -> List[Product]:
        if folder_id is None:
            return self.products.find()
        return self.products.find(Product.folder_id == folder_id)

    def sales_by_customer(self, name: str) -> List[SaleRecord]:
        """Case-insensitive substring match on the customer name.

        An empty list means "no results"; it is up to the caller to report it.
        """
        return self.list_sales(customer=name)

    def sales_by_product(self, product_id: int) -> List[SaleRecord]:
        return self.list_sales(product_id=product_id)

    def sales_between(self, start: datetime, end: datetime) -> List[SaleRecord]:
        if start is None or end is None:
            raise InvalidInput("startDate and endDate are required")
        return self.list_sales(start=start, end=end)

    def list_sales(
        self,
        customer: Optional[str] = None,
        product_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[SaleRecord]:
        criteria = []
        if customer:
            criteria.append(SaleRecord.customer.ilike(f"%{_escape_like(customer)}%", escape="\\"))
        if product_id is not None:
            criteria.append(SaleRecord.product_id == product_id)
        if start is not None:
            criteria.append(SaleRecord.date >= as_utc(start))
        if end is not None:
            criteria.append(SaleRecord.date <= as_utc(end))
        if start is not None and end is not None and as_utc(start) > as_utc(end):
            raise InvalidInput("startDate must not be after endDate")
        return self.sales.find(*criteria)
