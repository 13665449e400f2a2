# app/store.py
"""
In-memory product store.

The store owns the canonical, insertion-ordered list of products. Every read
and write goes through its methods; records handed out are copies.
"""
import copy
import uuid
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from .errors import NotFoundError

PRODUCT_FIELDS = ("name", "description", "price", "category", "inStock")

DEMO_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Laptop",
        "description": "High performance laptop",
        "price": 999.99,
        "category": "Electronics",
        "inStock": True,
    },
    {
        "name": "Smartphone",
        "description": "Latest model",
        "price": 699.99,
        "category": "Electronics",
        "inStock": True,
    },
]


def _pick_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: fields[k] for k in PRODUCT_FIELDS if k in fields}


class ProductStore:
    def __init__(self, products: Optional[Iterable[Dict[str, Any]]] = None):
        self._products: List[Dict[str, Any]] = []
        if products:
            self.seed(products)

    def __len__(self) -> int:
        return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p["id"] == product_id:
                return i
        raise NotFoundError()

    # ---------------------------
    # Reads
    # ---------------------------
    def list(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        if category:
            wanted = category.lower()
            out = [p for p in self._products if p["category"].lower() == wanted]
        else:
            out = self._products
        return copy.deepcopy(out)

    def get(self, product_id: str) -> Dict[str, Any]:
        return copy.deepcopy(self._products[self._index_of(product_id)])

    def search(self, query: str) -> List[Dict[str, Any]]:
        term = query.lower()
        return [
            copy.deepcopy(p) for p in self._products
            if term in p["name"].lower() or term in (p.get("description") or "").lower()
        ]

    def stats(self) -> Dict[str, Any]:
        in_stock = sum(1 for p in self._products if p["inStock"])
        return {
            "totalProducts": len(self._products),
            "byCategory": dict(Counter(p["category"] for p in self._products)),
            "inStock": in_stock,
            "outOfStock": len(self._products) - in_stock,
        }

    # ---------------------------
    # Writes
    # ---------------------------
    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        product = {"id": uuid.uuid4().hex, "description": "", "inStock": True}
        product.update(_pick_fields(fields))
        # an explicit None means "not given"
        if product["inStock"] is None:
            product["inStock"] = True
        if product["description"] is None:
            product["description"] = ""
        self._products.append(product)
        return copy.deepcopy(product)

    def update(self, product_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        idx = self._index_of(product_id)
        changes = {k: v for k, v in _pick_fields(fields).items() if v is not None}
        self._products[idx] = {**self._products[idx], **changes}
        return copy.deepcopy(self._products[idx])

    def delete(self, product_id: str) -> None:
        del self._products[self._index_of(product_id)]

    # ---------------------------
    # Utility: seed / clear (for tests/demo)
    # ---------------------------
    def seed(self, products: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [self.create(p) for p in products]

    def clear(self) -> None:
        self._products.clear()
