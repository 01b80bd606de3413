from typing import Optional


class CatalogError(Exception):
    """A catalog API request failed (transport error or unexpected status)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProductNotFound(CatalogError):
    def __init__(self, sku: str):
        super().__init__(f"product not found: {sku}", status_code=404)
        self.sku = sku


class FilterError(ValueError):
    pass
