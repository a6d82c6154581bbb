"""Tests for the store -> folder -> product hierarchy and cascading deletes."""
import pytest
from sqlalchemy.exc import OperationalError

from models.folder import Folder
from models.product import Product
from models.sale import SaleRecord
from models.store import Store
from services.errors import DependencyFailure, InvalidInput, NotFound


class TestCreation:
    def test_create_store(self, manager):
        store = manager.create_store("  Corner Shop ")
        assert store.id is not None
        assert store.name == "Corner Shop"

    def test_store_name_required(self, manager):
        with pytest.raises(InvalidInput):
            manager.create_store("")

    def test_create_folder_requires_existing_store(self, db, manager):
        with pytest.raises(NotFound):
            manager.create_folder("Orphan", 42)
        assert db.query(Folder).count() == 0

    def test_create_folder(self, manager, store):
        folder = manager.create_folder("Snacks", store.id)
        assert folder.store_id == store.id
        assert folder.store.name == "Main Street"

    def test_create_product_requires_existing_folder(self, db, manager):
        with pytest.raises(NotFound):
            manager.create_product("Tea", 1, 999, "Import")
        assert db.query(Product).count() == 0

    @pytest.mark.parametrize("kwargs", [
        {"quantity": -1},
        {"quantity": "many"},
        {"source": ""},
        {"source": None},
        {"name": " "},
    ])
    def test_create_product_invalid_input(self, manager, folder, kwargs):
        args = {"name": "Tea", "quantity": 1, "source": "Import"}
        args.update(kwargs)
        with pytest.raises(InvalidInput):
            manager.create_product(args["name"], args["quantity"], folder.id, args["source"])

    def test_create_product_with_zero_quantity_and_image(self, manager, folder):
        product = manager.create_product("Tea", 0, folder.id, "Import", image_url="/uploads/x.png")
        assert product.quantity == 0
        assert product.image_url == "/uploads/x.png"
        assert product.folder.id == folder.id


class TestUpdates:
    def test_update_store_name(self, manager, store):
        assert manager.update_store(store.id, name="Renamed").name == "Renamed"

    def test_update_missing_store(self, manager):
        with pytest.raises(NotFound):
            manager.update_store(5, name="x")

    def test_move_folder_to_other_store(self, manager, folder):
        other = manager.create_store("Second")
        moved = manager.update_folder(folder.id, store_id=other.id)
        assert moved.store_id == other.id

    def test_move_folder_to_missing_store(self, manager, folder, store):
        with pytest.raises(NotFound):
            manager.update_folder(folder.id, store_id=999)
        assert manager.get_folder(folder.id).store_id == store.id

    def test_update_product_fields(self, manager, product):
        updated = manager.update_product(product.id, name="Decaf", source="Roastery Sud", image_url="/uploads/a.jpg")
        assert (updated.name, updated.source, updated.image_url) == ("Decaf", "Roastery Sud", "/uploads/a.jpg")
        assert updated.quantity == 10

    def test_update_product_clears_image(self, manager, folder):
        product = manager.create_product("Tea", 1, folder.id, "Import", image_url="/uploads/x.png")
        assert manager.update_product(product.id, image_url=None).image_url is None

    def test_update_product_missing_folder(self, manager, product):
        with pytest.raises(NotFound):
            manager.update_product(product.id, folder_id=321)

    def test_update_product_rejects_empty_source(self, manager, product):
        with pytest.raises(InvalidInput):
            manager.update_product(product.id, source="")


class TestDeleteProduct:
    def test_delete_product_keeps_sales_history(self, db, manager, ledger, product):
        product_id = product.id
        sale_id = ledger.record_sale(product_id, 2, "Jane")[1].id
        manager.delete_product(product_id)

        db.expire_all()
        assert db.get(Product, product_id) is None
        record = db.get(SaleRecord, sale_id)
        assert record is not None
        assert record.product is None

    def test_delete_missing_product(self, manager):
        with pytest.raises(NotFound):
            manager.delete_product(1)


class TestCascade:
    def test_delete_folder_removes_its_products(self, db, manager, queries, store, folder):
        folder_id = folder.id
        other_id = manager.create_folder("Snacks", store.id).id
        for name in ("A", "B", "C"):
            manager.create_product(name, 1, folder_id, "src")
        keep_id = manager.create_product("Keep", 1, other_id, "src").id

        removed = manager.delete_folder(folder_id)

        assert removed == 3
        assert queries.products_by_folder(folder_id) == []
        assert db.get(Folder, folder_id) is None
        assert [p.id for p in queries.products_by_folder(other_id)] == [keep_id]

    def test_delete_missing_folder_reports_not_found(self, manager):
        with pytest.raises(NotFound) as exc:
            manager.delete_folder(555)
        assert exc.value.details["products"] == 0

    def test_delete_store_is_transitive(self, db, manager, store):
        store_id = store.id
        f1 = manager.create_folder("One", store_id)
        f2 = manager.create_folder("Two", store_id)
        manager.create_product("A", 1, f1.id, "src")
        manager.create_product("B", 1, f2.id, "src")
        manager.create_product("C", 1, f2.id, "src")

        other_store = manager.create_store("Elsewhere")
        other_folder = manager.create_folder("Other", other_store.id)
        survivor_id = manager.create_product("D", 1, other_folder.id, "src").id

        summary = manager.delete_store(store_id)

        assert summary == {"folders": 2, "products": 3}
        db.expire_all()
        assert db.get(Store, store_id) is None
        assert db.query(Folder).filter(Folder.store_id == store_id).count() == 0
        assert [p.id for p in db.query(Product).all()] == [survivor_id]

    def test_delete_empty_store(self, manager, store):
        assert manager.delete_store(store.id) == {"folders": 0, "products": 0}

    def test_delete_missing_store(self, manager):
        with pytest.raises(NotFound):
            manager.delete_store(8080)

    def test_cascade_rolls_back_on_persistence_failure(self, db, manager, folder, product, monkeypatch):
        def broken_delete(entity_id):
            raise DependencyFailure("disk on fire")

        monkeypatch.setattr(manager.folders, "delete", broken_delete)
        with pytest.raises(DependencyFailure):
            manager.delete_folder(folder.id)

        db.expire_all()
        assert db.get(Product, product.id) is not None

    def test_sqlalchemy_errors_become_dependency_failures(self, manager, monkeypatch):
        def boom(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection lost"))

        monkeypatch.setattr(manager.db, "query", boom)
        with pytest.raises(DependencyFailure):
            manager.list_stores()
