# backend/routes/logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from database import get_db
from models.log import Log

router = APIRouter(prefix="/api/logs", tags=["Logs"])

# --- SCHEMATY ---
class LogResponse(BaseModel):
    id: int
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    ts: datetime
    meta: Optional[Any] = None

    model_config = ConfigDict(from_attributes=True)

class LogPage(BaseModel):
    items: List[LogResponse]
    total: int
    page: int
    page_size: int

# --- ENDPOINT ---
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[str] = Query(None, description="Filter by action"),
    resource: Optional[str] = Query(None, description="Filter by resource"),
    status: Optional[str] = Query(None, description="Filter by status (SUCCESS/FAIL)"),
    date_from: Optional[str] = Query(None, description="Date from (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, description="Date to (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    query = db.query(Log)

    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))

    if resource:
        query = query.filter(Log.resource.ilike(f"%{resource}%"))

    if status:
        query = query.filter(Log.status == status)

    if date_from:
        try:
            query = query.filter(Log.ts >= datetime.fromisoformat(date_from))
        except ValueError:
            pass # Ignore malformed dates

    if date_to:
        try:
            # Bare date covers the whole last day
            dt_to_str = date_to
            if len(dt_to_str) == 10:
                dt_to_str += " 23:59:59"
            query = query.filter(Log.ts <= datetime.fromisoformat(dt_to_str))
        except ValueError:
            pass

    # Newest first
    query = query.order_by(Log.ts.desc(), Log.id.desc())

    total = query.count()
    logs = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": logs,
        "total": total,
        "page": page,
        "page_size": page_size,
    }
