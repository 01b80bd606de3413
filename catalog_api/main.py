# catalog_api/main.py
import logging
from typing import Optional, List

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .core import (
    register_product_logic, list_categories_logic, list_subcategories_logic,
    list_products_logic, get_product_logic, reset_logic
)
from .database import load_seed_file
from .models import Product, ProductIn, ProductPage

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)

app = FastAPI(title="catalog-api (in-memory reference)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event() -> None:
    if settings.seed_path:
        load_seed_file(settings.seed_path)
    else:
        logger.info("No CATALOG_SEED_PATH set, starting with an empty catalog")

# ---------------------------
# Taxonomy endpoints
# ---------------------------
@app.get("/api/categories", response_model=List[str])
async def list_categories():
    return await list_categories_logic()

@app.get("/api/subcategories", response_model=List[str])
async def list_subcategories(category: Optional[str] = None):
    return await list_subcategories_logic(category)

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products", response_model=ProductPage)
async def list_products(
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(20, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
):
    return await list_products_logic(category, subcategory, search, limit, offset)

@app.get("/api/products/{sku}", response_model=Product)
async def get_product(sku: str):
    return await get_product_logic(sku)

@app.post("/api/products", status_code=201, response_model=Product)
async def register_product(payload: ProductIn):
    return await register_product_logic(payload)

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    return await reset_logic()
