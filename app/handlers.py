# app/handlers.py
import math
from typing import Any, Dict, List, Optional

from .errors import ValidationError
from .store import ProductStore

# This file contains the logic behind each products endpoint.
# Every function takes the store explicitly; nothing here holds state.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def list_products_logic(store: ProductStore, category: Optional[str] = None,
                        page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive integers")
    result = store.list(category)
    start = (page - 1) * limit
    return {
        "data": result[start:start + limit],
        "currentPage": page,
        "totalPages": math.ceil(len(result) / limit),
        "totalItems": len(result),
    }


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    return store.get(product_id)


def create_product_logic(store: ProductStore, payload: Dict[str, Any]) -> Dict[str, Any]:
    return store.create(payload)


def update_product_logic(store: ProductStore, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return store.update(product_id, payload)


def delete_product_logic(store: ProductStore, product_id: str) -> None:
    store.delete(product_id)


def search_products_logic(store: ProductStore, q: Optional[str]) -> List[Dict[str, Any]]:
    if not q:
        raise ValidationError("Search query required")
    return store.search(q)


def stats_logic(store: ProductStore) -> Dict[str, Any]:
    return store.stats()
