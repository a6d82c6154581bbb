# backend/services/containment.py
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from models.folder import Folder
from models.product import Product
from models.store import Store
from services.entity_store import EntityStore, transaction
from services.errors import NotFound
from utils.validation import optional_text, require_int, require_text

logger = logging.getLogger(__name__)

_UNSET = object()


class ContainmentManager:
    """Owns the Store -> Folder -> Product hierarchy.

    Creation checks that the parent exists. Deletion cascades downwards,
    children before parents, so an interrupted cascade can only leave orphaned
    children behind, never a live child whose parent is already gone.
    """

    def __init__(self, db: Session):
        self.db = db
        self.stores = EntityStore(db, Store, "Store")
        self.folders = EntityStore(db, Folder, "Folder")
        self.products = EntityStore(db, Product, "Product")

    # -------------------------
    # Stores
    # -------------------------
    def create_store(self, name) -> Store:
        store = Store(name=require_text(name, "name"))
        with transaction(self.db):
            self.stores.create(store)
        logger.info("Store %s created", store.id)
        return store

    def get_store(self, store_id: int) -> Store:
        return self.stores.get(store_id)

    def list_stores(self) -> List[Store]:
        return self.stores.find()

    def update_store(self, store_id: int, name=None) -> Store:
        patch = {}
        if name is not None:
            patch["name"] = require_text(name, "name")
        with transaction(self.db):
            store = self.stores.update(store_id, patch)
        return store

    def delete_store(self, store_id: int) -> Dict[str, int]:
        """Delete a store with all of its folders and their products.

        Steps run in order: products of the store's folders, the folders, the
        store. If the store itself turns out to be missing, the child deletions
        are still committed and NotFound is raised afterwards.
        """
        with transaction(self.db):
            folder_ids = [f.id for f in self.folders.find(Folder.store_id == store_id)]
            removed_products = 0
            if folder_ids:
                removed_products = self.products.delete_where(Product.folder_id.in_(folder_ids))
            removed_folders = self.folders.delete_where(Folder.store_id == store_id)
            found = self.stores.delete(store_id)

        summary = {"folders": removed_folders, "products": removed_products}
        if not found:
            logger.warning("Store %s not found during cascade, removed %s", store_id, summary)
            raise NotFound("Store not found", details={"id": store_id, **summary})
        logger.info("Store %s deleted with %s", store_id, summary)
        return summary

    # -------------------------
    # Folders
    # -------------------------
    def create_folder(self, name, store_id: int) -> Folder:
        folder = Folder(name=require_text(name, "name"), store_id=store_id)
        with transaction(self.db):
            if not self.stores.exists(store_id):
                raise NotFound("Store not found", details={"id": store_id})
            self.folders.create(folder)
        logger.info("Folder %s created in store %s", folder.id, store_id)
        return folder

    def get_folder(self, folder_id: int) -> Folder:
        return self.folders.get(folder_id)

    def update_folder(self, folder_id: int, name=None, store_id: Optional[int] = None) -> Folder:
        patch = {}
        if name is not None:
            patch["name"] = require_text(name, "name")
        with transaction(self.db):
            if store_id is not None:
                if not self.stores.exists(store_id):
                    raise NotFound("Store not found", details={"id": store_id})
                patch["store_id"] = store_id
            folder = self.folders.update(folder_id, patch)
        return folder

    def delete_folder(self, folder_id: int) -> int:
        """Delete a folder and its products; returns the number of products removed."""
        with transaction(self.db):
            removed = self.products.delete_where(Product.folder_id == folder_id)
            found = self.folders.delete(folder_id)

        if not found:
            logger.warning("Folder %s not found during cascade, removed %d products", folder_id, removed)
            raise NotFound("Folder not found", details={"id": folder_id, "products": removed})
        logger.info("Folder %s deleted with %d products", folder_id, removed)
        return removed

    # -------------------------
    # Products
    # -------------------------
    def create_product(self, name, quantity, folder_id: int, source, image_url: Optional[str] = None) -> Product:
        product = Product(
            name=require_text(name, "name"),
            quantity=require_int(quantity, "quantity", minimum=0),
            folder_id=folder_id,
            source=require_text(source, "source"),
            image_url=image_url,
        )
        with transaction(self.db):
            if not self.folders.exists(folder_id):
                raise NotFound("Folder not found", details={"id": folder_id})
            self.products.create(product)
        logger.info("Product %s created in folder %s", product.id, folder_id)
        return product

    def get_product(self, product_id: int) -> Product:
        return self.products.get(product_id)

    def update_product(
        self,
        product_id: int,
        name=None,
        folder_id: Optional[int] = None,
        source=None,
        image_url=_UNSET,
    ) -> Product:
        # Quantity is not patchable here, stock only moves through the ledger
        patch = {}
        if name is not None:
            patch["name"] = require_text(name, "name")
        if source is not None:
            patch["source"] = require_text(source, "source")
        if image_url is not _UNSET:
            patch["image_url"] = optional_text(image_url, "image")
        with transaction(self.db):
            if folder_id is not None:
                if not self.folders.exists(folder_id):
                    raise NotFound("Folder not found", details={"id": folder_id})
                patch["folder_id"] = folder_id
            product = self.products.update(product_id, patch)
        return product

    def delete_product(self, product_id: int) -> None:
        # Sale records referencing the product are kept as history
        with transaction(self.db):
            found = self.products.delete(product_id)
        if not found:
            raise NotFound("Product not found", details={"id": product_id})
        logger.info("Product %s deleted", product_id)
