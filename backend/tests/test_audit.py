from sqlalchemy.exc import OperationalError

from models.log import Log
from models.product import Product
from utils.audit import write_log


def _locked(*args, **kwargs):
    raise OperationalError("INSERT INTO logs", {}, Exception("database is locked"))


def test_write_log_persists_entry(db):
    assert write_log(db, action="STORE_CREATE", resource="stores", ip="127.0.0.1", meta={"id": 1}) is True

    entry = db.query(Log).one()
    assert (entry.action, entry.resource, entry.status, entry.ip) == ("STORE_CREATE", "stores", "SUCCESS", "127.0.0.1")
    assert entry.meta == {"id": 1}


def test_write_log_failure_is_swallowed(db, product, monkeypatch, caplog):
    product_id = product.id
    monkeypatch.setattr(db, "commit", _locked)

    assert write_log(db, action="PRODUCT_CREATE", resource="products") is False
    assert "Failed to write audit log" in caplog.text

    monkeypatch.undo()
    # The rolled back session stays usable and earlier committed work is intact
    assert db.query(Log).count() == 0
    assert db.get(Product, product_id).name == "Coffee"
