from models.product import Product
from models.sale import SaleRecord
from models.store import Store
from populate_db import DEMO_SALES, seed
from tests.conftest import FIXED_NOW


def test_seed_creates_catalog_and_sales(db):
    store = seed(db, now=FIXED_NOW)

    assert store.name == "Demo Store"
    espresso = db.query(Product).filter(Product.name == "Espresso beans 1kg").one()
    assert espresso.quantity == 36
    assert db.query(SaleRecord).count() == len(DEMO_SALES)


def test_seed_is_idempotent(db):
    first = seed(db, now=FIXED_NOW)
    second = seed(db, now=FIXED_NOW)

    assert first.id == second.id
    assert db.query(Store).count() == 1
