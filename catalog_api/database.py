import json
import logging
from pathlib import Path
from typing import Dict, Any, Iterable, Union

from .models import ProductIn

# In-memory product store, keyed by SKU.

logger = logging.getLogger(__name__)

PRODUCTS: Dict[str, Dict[str, Any]] = {}

def load_products(records: Iterable[Dict[str, Any]]) -> int:
    count = 0
    for raw in records:
        product = ProductIn(**raw)
        PRODUCTS[product.sku] = product.model_dump()
        count += 1
    return count

def load_seed_file(path: Union[str, Path]) -> int:
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        records = json.load(fh)
    count = load_products(records)
    logger.info("Seeded %s products from %s", count, path)
    return count
