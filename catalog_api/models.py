# catalog_api/models.py
from pydantic import BaseModel, Field
from typing import Optional, List

class ProductIn(BaseModel):
    sku: str = Field(..., min_length=1)
    name: str
    category: str
    subcategory: str
    price_cents: int = 0
    description: Optional[str] = None
    image_url: Optional[str] = None

class Product(ProductIn):
    pass

class ProductPage(BaseModel):
    items: List[Product]
    total: int
    limit: int
    offset: int = 0
