# backend/populate_db.py
"""Seed a demo store with folders, products and a few sales."""
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from database import SessionLocal, init_db
from models.store import Store
from services.containment import ContainmentManager
from services.stock_ledger import StockLedger

logger = logging.getLogger(__name__)

DEMO_STORE = "Demo Store"

# folder name -> [(product name, quantity, source)]
DEMO_CATALOG = {
    "Beverages": [("Espresso beans 1kg", 40, "Roastery Nord"), ("Green tea 100g", 25, "Import")],
    "Snacks": [("Dark chocolate", 60, "Local"), ("Salted almonds", 30, "Import")],
}

# (product name, quantity, customer, days ago)
DEMO_SALES = [
    ("Espresso beans 1kg", 3, "Jane Doe", 2),
    ("Dark chocolate", 10, "Bob Smith", 1),
    ("Espresso beans 1kg", 1, "Jane Doe", 0),
]


def seed(db: Session, now: datetime = None) -> Store:
    """Create the demo data set; returns the existing store if already seeded."""
    existing = db.query(Store).filter(Store.name == DEMO_STORE).first()
    if existing:
        logger.info("Demo store already present (id=%s), skipping", existing.id)
        return existing

    now = now or datetime.now(timezone.utc)
    manager = ContainmentManager(db)
    ledger = StockLedger(db, clock=lambda: now)

    store = manager.create_store(DEMO_STORE)
    product_ids = {}
    for folder_name, products in DEMO_CATALOG.items():
        folder = manager.create_folder(folder_name, store.id)
        for name, quantity, source in products:
            product_ids[name] = manager.create_product(name, quantity, folder.id, source).id

    for name, quantity, customer, days_ago in DEMO_SALES:
        ledger.record_sale(product_ids[name], quantity, customer, sold_at=now - timedelta(days=days_ago))

    logger.info("Seeded store %s with %d products and %d sales", store.id, len(product_ids), len(DEMO_SALES))
    return store


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
