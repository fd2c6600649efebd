# app/store.py
import threading
import uuid
from typing import Any, Dict, List, Optional

from .errors import NotFoundError
from .models import Product, ProductIn, make_product

# This file holds the in-memory product store. One instance is owned by each app.

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {"id": "1", "name": "Laptop", "description": "High-performance laptop with 16GB RAM",
     "price": 1200, "category": "electronics", "inStock": True},
    {"id": "2", "name": "Smartphone", "description": "Latest model with 128GB storage",
     "price": 800, "category": "electronics", "inStock": True},
    {"id": "3", "name": "Coffee Maker", "description": "Programmable coffee maker with timer",
     "price": 50, "category": "kitchen", "inStock": False},
]


class ProductStore:
    """Ordered in-memory collection of products.

    Every operation takes ``_lock`` so the store stays consistent if it is
    ever touched from more than one thread.
    """

    def __init__(self, products: Optional[List[Product]] = None):
        self._products: List[Product] = list(products or [])
        self._lock = threading.Lock()

    @classmethod
    def with_samples(cls) -> "ProductStore":
        store = cls()
        store.seed_samples()
        return store

    def __len__(self) -> int:
        return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise NotFoundError("Product not found")

    # ---------------------------
    # Reads
    # ---------------------------
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Dict[str, Any]:
        with self._lock:
            result = list(self._products)
        if category:
            wanted = category.lower()
            result = [p for p in result if p.category.lower() == wanted]

        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else len(result)
        start = (page - 1) * limit
        return {"total": len(result), "page": page, "limit": limit, "data": result[start:start + limit]}

    def get(self, product_id: str) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)]

    def search(self, name: Optional[str] = None) -> Dict[str, Any]:
        term = (name or "").lower()
        with self._lock:
            results = [p for p in self._products if term in p.name.lower()]
        return {"total": len(results), "data": results}

    def stats(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        with self._lock:
            for p in self._products:
                counts[p.category] = counts.get(p.category, 0) + 1
        return counts

    # ---------------------------
    # Writes
    # ---------------------------
    def create(self, payload: ProductIn) -> Product:
        with self._lock:
            existing = {p.id for p in self._products}
            pid = str(uuid.uuid4())
            while pid in existing:
                pid = str(uuid.uuid4())
            product = make_product(pid, payload)
            self._products.append(product)
        return product

    def replace(self, product_id: str, payload: ProductIn) -> Product:
        with self._lock:
            i = self._index_of(product_id)
            self._products[i] = make_product(product_id, payload)
            return self._products[i]

    def delete(self, product_id: str) -> Product:
        with self._lock:
            return self._products.pop(self._index_of(product_id))

    # ---------------------------
    # Utility: reset / seed (startup and tests)
    # ---------------------------
    def reset(self) -> None:
        with self._lock:
            self._products.clear()

    def seed_samples(self) -> None:
        samples = [Product.model_validate(s) for s in SAMPLE_PRODUCTS]
        with self._lock:
            self._products.extend(samples)
