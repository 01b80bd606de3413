from typing import Optional, Dict, Any, List
from fastapi import HTTPException

from .models import ProductIn
from .database import PRODUCTS

# This file contains the core logic for the catalog endpoints.

def _matches(p: Dict[str, Any], category: Optional[str], subcategory: Optional[str], term: str) -> bool:
    if category and p["category"] != category:
        return False
    if subcategory and p["subcategory"] != subcategory:
        return False
    if term and term not in p["name"].lower() and term not in p["sku"].lower():
        return False
    return True

# Registration
async def register_product_logic(payload: ProductIn):
    if payload.sku in PRODUCTS:
        raise HTTPException(status_code=409, detail="duplicate sku")
    PRODUCTS[payload.sku] = payload.model_dump()
    return PRODUCTS[payload.sku]

# Taxonomy
async def list_categories_logic() -> List[str]:
    return sorted({p["category"] for p in PRODUCTS.values()})

async def list_subcategories_logic(category: Optional[str] = None) -> List[str]:
    names = set()
    for p in PRODUCTS.values():
        if category and p["category"] != category:
            continue
        names.add(p["subcategory"])
    return sorted(names)

# Products
async def list_products_logic(
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
):
    term = (search or "").strip().lower()
    matched = [p for p in PRODUCTS.values() if _matches(p, category, subcategory, term)]
    matched.sort(key=lambda p: (p["name"].lower(), p["sku"]))
    return {
        "items": matched[offset:offset + limit],
        "total": len(matched),
        "limit": limit,
        "offset": offset,
    }

async def get_product_logic(sku: str):
    p = PRODUCTS.get(sku)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return p

async def reset_logic():
    PRODUCTS.clear()
    return {"status": "reset"}
