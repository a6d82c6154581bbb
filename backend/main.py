# backend/main.py
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import settings
from database import init_db
from services.errors import (
    DependencyFailure, InsufficientStock, InvalidInput, InventoryError, NotFound,
)

# Import routerów
from routes.stores import router as stores_router
from routes.folders import router as folders_router
from routes.products import router as products_router
from routes.sales import router as sales_router
from routes.logs import router as logs_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Inicjalizacja
init_db()

app = FastAPI(title="Inventory Management API", version="1.0.0")

# Uploads - upewniamy się, że katalog istnieje
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error kind -> HTTP status
STATUS_BY_ERROR = {
    NotFound: 404,
    InvalidInput: 400,
    InsufficientStock: 400,
    DependencyFailure: 500,
}


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    status_code = STATUS_BY_ERROR.get(type(exc), 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# Rejestracja routerów
app.include_router(stores_router)
app.include_router(folders_router)
app.include_router(products_router)
app.include_router(sales_router)
app.include_router(logs_router)


@app.get("/")
def read_root():
    return {"message": "Inventory management is running"}
