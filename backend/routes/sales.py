# backend/routes/sales.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from routes.deps import client_ip, get_ledger, get_queries
from services.errors import InvalidInput
from services.queries import QueryService
from services.stock_ledger import StockLedger
from utils.audit import write_log
import schemas.sale as sale_schemas

router = APIRouter(prefix="/api/sales", tags=["Sales"])


def _parse_iso(s: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    if not s:
        return None
    # Bare YYYY-MM-DD as an upper bound covers the whole day
    if end_of_day and len(s) == 10:
        s += " 23:59:59.999999"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        raise InvalidInput(f"Bad datetime format: {s}")


# Create a new sales report (explicit date allowed)
@router.post("/", response_model=sale_schemas.SaleCreated, status_code=201)
def create_sale_report(
    payload: sale_schemas.SaleCreate,
    request: Request,
    db: Session = Depends(get_db),
    ledger: StockLedger = Depends(get_ledger),
):
    _, sale = ledger.record_sale(payload.product_id, payload.quantity, payload.customer, sold_at=payload.date)
    out = sale_schemas.SaleOut.model_validate(sale)
    write_log(db, action="SALE_CREATE", resource="sales", ip=client_ip(request),
              meta={"id": out.id, "product_id": out.product_id, "quantity": out.quantity})
    return {"message": "Sale recorded and stock updated", "sale": out}


@router.get("/", response_model=List[sale_schemas.SaleOut])
def list_sales(
    customer: Optional[str] = Query(None, description="Customer name substring"),
    product_id: Optional[int] = Query(None),
    start_date: Optional[str] = Query(None, description="ISO datetime od"),
    end_date: Optional[str] = Query(None, description="ISO datetime do"),
    queries: QueryService = Depends(get_queries),
):
    return queries.list_sales(
        customer=customer,
        product_id=product_id,
        start=_parse_iso(start_date),
        end=_parse_iso(end_date, end_of_day=True),
    )


# Sales reports for a customer name (case-insensitive substring)
@router.get("/customer", response_model=List[sale_schemas.SaleOut])
def sales_by_customer(
    customerName: str = Query(..., min_length=1),
    queries: QueryService = Depends(get_queries),
):
    reports = queries.sales_by_customer(customerName)
    if not reports:
        raise HTTPException(status_code=404, detail="No sales reports found for this customer")
    return reports


@router.get("/product/{product_id}", response_model=List[sale_schemas.SaleOut])
def sales_by_product(product_id: int, queries: QueryService = Depends(get_queries)):
    return queries.sales_by_product(product_id)


# Sales reports within an inclusive date range
@router.get("/date", response_model=List[sale_schemas.SaleOut])
def sales_by_date(
    startDate: str = Query(...),
    endDate: str = Query(...),
    queries: QueryService = Depends(get_queries),
):
    return queries.sales_between(_parse_iso(startDate), _parse_iso(endDate, end_of_day=True))


@router.get("/{sale_id}", response_model=sale_schemas.SaleOut)
def get_sale_report(sale_id: int, ledger: StockLedger = Depends(get_ledger)):
    return ledger.get_sale(sale_id)


# Administrative correction of a sales report (stock is not re-adjusted)
@router.put("/{sale_id}", response_model=sale_schemas.SaleOut)
def update_sale_report(
    sale_id: int,
    payload: sale_schemas.SaleUpdate,
    request: Request,
    db: Session = Depends(get_db),
    ledger: StockLedger = Depends(get_ledger),
):
    sale = sale_schemas.SaleOut.model_validate(ledger.correct_sale(
        sale_id,
        customer=payload.customer,
        product_id=payload.product_id,
        quantity=payload.quantity,
        sold_at=payload.date,
    ))
    write_log(db, action="SALE_UPDATE", resource="sales", ip=client_ip(request), meta={"id": sale_id})
    return sale


@router.delete("/{sale_id}")
def delete_sale_report(
    sale_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ledger: StockLedger = Depends(get_ledger),
):
    ledger.delete_sale(sale_id)
    write_log(db, action="SALE_DELETE", resource="sales", ip=client_ip(request), meta={"id": sale_id})
    return {"message": "Sales report deleted successfully"}
