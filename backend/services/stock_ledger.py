# backend/services/stock_ledger.py
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session

from models.product import Product
from models.sale import SaleRecord
from services.entity_store import EntityStore, transaction
from services.errors import InsufficientStock, NotFound
from utils.validation import as_utc, require_int, require_text

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StockLedger:
    """All mutations of Product.quantity and all creation of sale records.

    Every stock change is a single conditional UPDATE evaluated by the database
    (``quantity = quantity + delta``, guarded by ``quantity >= sold`` for
    sales), so concurrent requests against the same product are serialized on
    the row and can never oversell. A sale's decrement and its SaleRecord are
    written in the same transaction.

    The clock is injected so that sale timestamps are deterministic in tests.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock
        self.products = EntityStore(db, Product, "Product")
        self.sales = EntityStore(db, SaleRecord, "Sales report")

    def restock(self, product_id: int, added_quantity) -> Product:
        qty = require_int(added_quantity, "addedQuantity", minimum=1)
        with transaction(self.db):
            self._apply_delta(product_id, qty)
            product = self.products.snapshot(self.products.get(product_id))
        logger.info("Restocked product %s by %d (now %d)", product_id, qty, product.quantity)
        return product

    def record_sale(
        self,
        product_id: int,
        quantity_sold,
        customer_name,
        sold_at: Optional[datetime] = None,
    ) -> Tuple[Product, SaleRecord]:
        """Decrement stock and append a sale record as one unit of work.

        ``sold_at`` defaults to the ledger clock; the sales-report surface
        passes an explicit date. Raises InvalidInput, NotFound or
        InsufficientStock without mutating anything.
        """
        qty = require_int(quantity_sold, "quantitySold", minimum=1)
        customer = require_text(customer_name, "customerName")
        when = as_utc(sold_at) if sold_at is not None else as_utc(self.clock())

        sale = SaleRecord(customer=customer, product_id=product_id, quantity=qty, date=when)
        try:
            with transaction(self.db):
                self._apply_delta(product_id, -qty)
                self.sales.create(sale)
                # Product first: the sale's joined product is then read fresh
                product = self.products.snapshot(self.products.get(product_id))
                self.sales.snapshot(sale)
        except InsufficientStock as e:
            logger.warning("Sale refused for product %s: %s", product_id, e.details)
            raise

        logger.info("Sold %d of product %s to %r (left %d)", qty, product_id, customer, product.quantity)
        return product, sale

    def _apply_delta(self, product_id: int, delta: int) -> None:
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(quantity=Product.quantity + delta)
            .execution_options(synchronize_session=False)
        )
        if delta < 0:
            stmt = stmt.where(Product.quantity >= -delta)

        result = self.db.execute(stmt)
        if result.rowcount == 1:
            return

        row = self.db.query(Product.quantity).filter(Product.id == product_id).first()
        if row is None:
            raise NotFound("Product not found.", details={"id": product_id})
        raise InsufficientStock(details={"available": row.quantity, "requested": -delta})

    # -------------------------
    # Administrative corrections
    # -------------------------
    def get_sale(self, sale_id: int) -> SaleRecord:
        return self.sales.get(sale_id)

    def correct_sale(
        self,
        sale_id: int,
        customer=None,
        product_id: Optional[int] = None,
        quantity=None,
        sold_at: Optional[datetime] = None,
    ) -> SaleRecord:
        """Edit a sale record in place. Product stock is NOT re-adjusted."""
        patch = {}
        if customer is not None:
            patch["customer"] = require_text(customer, "customer")
        if quantity is not None:
            patch["quantity"] = require_int(quantity, "quantity", minimum=1)
        if sold_at is not None:
            patch["date"] = as_utc(sold_at)
        with transaction(self.db):
            if product_id is not None:
                if not self.products.exists(product_id):
                    raise NotFound("Product not found", details={"id": product_id})
                patch["product_id"] = product_id
            sale = self.sales.update(sale_id, patch)
        logger.info("Sales report %s corrected: %s", sale_id, sorted(patch))
        return sale

    def delete_sale(self, sale_id: int) -> None:
        """Remove a sale record. Product stock is NOT restored."""
        with transaction(self.db):
            found = self.sales.delete(sale_id)
        if not found:
            raise NotFound("Sales report not found", details={"id": sale_id})
        logger.info("Sales report %s deleted", sale_id)
