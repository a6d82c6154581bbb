# backend/routes/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy.orm import Session

from database import get_db
from routes.deps import client_ip, get_blob_store, get_containment, get_ledger, get_queries
from services.containment import ContainmentManager
from services.errors import InvalidInput, InventoryError
from services.queries import QueryService
from services.stock_ledger import StockLedger
from utils.audit import write_log
from utils.blob_store import ALLOWED_IMAGE_TYPES, LocalBlobStore
import schemas.product as product_schemas
import schemas.sale as sale_schemas

router = APIRouter(prefix="/api/products", tags=["Products"])


# ---- HELPERS ----
def _store_image(file: Optional[UploadFile], blob_store: LocalBlobStore) -> Optional[str]:
    """Push an uploaded image to the blob store and return its URL."""
    if file is None:
        return None
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidInput("Invalid file type", details={"content_type": file.content_type})
    try:
        data = file.file.read()
    finally:
        file.file.close()
    return blob_store.put(data, ALLOWED_IMAGE_TYPES[file.content_type])


def _out(product) -> product_schemas.ProductOut:
    return product_schemas.ProductOut.model_validate(product)


# =========================
# DODAWANIE PRODUKTU
# =========================
@router.post("/", response_model=product_schemas.ProductOut, status_code=201)
def create_product(
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    image: Optional[UploadFile] = File(None),
    name: str = Form(...),
    quantity: str = Form(...),
    folder: int = Form(...),
    source: str = Form(...),
):
    image_url = _store_image(image, blob_store)
    try:
        product = _out(manager.create_product(name, quantity, folder, source, image_url=image_url))
    except InventoryError:
        # Nothing was created, so the upload would be orphaned
        if image_url:
            blob_store.delete(image_url)
        raise
    write_log(db, action="PRODUCT_CREATE", resource="products", ip=client_ip(request),
              meta={"id": product.id, "folder_id": product.folder_id})
    return product


# =========================
# LISTA PRODUKTÓW
# =========================
@router.get("/", response_model=List[product_schemas.ProductOut])
def list_products(
    folder_id: Optional[int] = Query(None, description="Filter by folder"),
    queries: QueryService = Depends(get_queries),
):
    return queries.products_by_folder(folder_id)


@router.get("/folder/{folder_id}", response_model=List[product_schemas.ProductBrief])
def list_folder_products(folder_id: int, queries: QueryService = Depends(get_queries)):
    return queries.products_by_folder(folder_id)


@router.get("/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, manager: ContainmentManager = Depends(get_containment)):
    return manager.get_product(product_id)


# =========================
# AKTUALIZACJA PRODUKTU
# =========================
@router.put("/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
):
    changes = payload.model_dump(exclude_unset=True)
    product = _out(manager.update_product(product_id, **changes))
    write_log(db, action="PRODUCT_UPDATE", resource="products", ip=client_ip(request),
              meta={"id": product_id, "fields": sorted(changes)})
    return product


# Replace the product image
@router.put("/{product_id}/image", response_model=product_schemas.ProductOut)
def replace_product_image(
    product_id: int,
    request: Request,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    old_url = manager.get_product(product_id).image_url
    image_url = _store_image(image, blob_store)
    try:
        product = _out(manager.update_product(product_id, image_url=image_url))
    except InventoryError:
        blob_store.delete(image_url)
        raise
    if old_url and old_url != image_url:
        blob_store.delete(old_url)
    write_log(db, action="PRODUCT_IMAGE", resource="products", ip=client_ip(request), meta={"id": product_id})
    return product


# =========================
# STAN MAGAZYNOWY
# =========================
@router.put("/{product_id}/addStock", response_model=product_schemas.ProductOut)
def add_stock(
    product_id: int,
    payload: product_schemas.AddStockRequest,
    request: Request,
    db: Session = Depends(get_db),
    ledger: StockLedger = Depends(get_ledger),
):
    product = _out(ledger.restock(product_id, payload.addedQuantity))
    write_log(db, action="STOCK_RESTOCK", resource="products", ip=client_ip(request),
              meta={"id": product_id, "quantity": product.quantity})
    return product


@router.put("/{product_id}/subtractStock", response_model=sale_schemas.StockSaleResponse)
def subtract_stock(
    product_id: int,
    payload: product_schemas.SubtractStockRequest,
    request: Request,
    db: Session = Depends(get_db),
    ledger: StockLedger = Depends(get_ledger),
):
    product, sale = ledger.record_sale(product_id, payload.quantitySold, payload.customerName)
    response = sale_schemas.StockSaleResponse(
        message="Stock updated and sales record created successfully.",
        updatedProduct=_out(product),
        newSale=sale_schemas.SaleOut.model_validate(sale),
    )
    write_log(db, action="STOCK_SALE", resource="products", ip=client_ip(request),
              meta={"id": product_id, "sale_id": response.newSale.id, "quantity": response.newSale.quantity})
    return response


# =========================
# USUWANIE
# =========================
@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    manager: ContainmentManager = Depends(get_containment),
):
    manager.delete_product(product_id)
    write_log(db, action="PRODUCT_DELETE", resource="products", ip=client_ip(request), meta={"id": product_id})
    return {"message": "Product deleted"}
