# catalog_sdk/models.py
from pydantic import BaseModel
from typing import Optional, List

class Product(BaseModel):
    sku: str
    name: str
    category: str
    subcategory: str
    price_cents: int = 0
    description: Optional[str] = None
    image_url: Optional[str] = None

class ProductPage(BaseModel):
    items: List[Product] = []
    total: int = 0
    limit: int = 20
    offset: int = 0
