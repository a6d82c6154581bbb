# backend/routes/deps.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from services.containment import ContainmentManager
from services.queries import QueryService
from services.stock_ledger import StockLedger, utcnow
from utils.blob_store import LocalBlobStore


def get_clock():
    # Overridable in tests for deterministic sale timestamps
    return utcnow


def get_containment(db: Session = Depends(get_db)) -> ContainmentManager:
    return ContainmentManager(db)


def get_ledger(db: Session = Depends(get_db), clock=Depends(get_clock)) -> StockLedger:
    return StockLedger(db, clock=clock)


def get_queries(db: Session = Depends(get_db)) -> QueryService:
    return QueryService(db)


def get_blob_store() -> LocalBlobStore:
    return LocalBlobStore(settings.UPLOAD_DIR, settings.UPLOAD_URL_PREFIX)


def client_ip(request: Request):
    return request.client.host if request.client else None
