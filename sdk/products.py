# sdk/products.py
from typing import Any, Dict, Optional

import httpx
import requests


class ProductApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _unwrap(r) -> Any:
    # works for both requests and httpx responses
    if r.status_code >= 400:
        try:
            message = r.json().get("error", r.text)
        except ValueError:
            message = r.text
        raise ProductApiError(r.status_code, message)
    return r.json()


def _product_payload(name: str, description: str, price: float, category: str, in_stock: bool) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "inStock": in_stock,
    }


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_key = api_key
        # anything with the requests.Session surface works here (e.g. fastapi's TestClient)
        self.session = session if session is not None else requests.Session()
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/api/products{path}"

    # Reads
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None,
                      limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return _unwrap(self.session.get(self._url(), params=params, timeout=self.timeout))

    def get_product(self, product_id: str):
        return _unwrap(self.session.get(self._url(f"/{product_id}"), timeout=self.timeout))

    def search_products(self, name: str = ""):
        return _unwrap(self.session.get(self._url("/search"), params={"name": name}, timeout=self.timeout))

    def stats(self) -> Dict[str, int]:
        return _unwrap(self.session.get(self._url("/stats"), timeout=self.timeout))

    # Writes (need api_key)
    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        payload = _product_payload(name, description, price, category, in_stock)
        return _unwrap(self.session.post(self._url(), json=payload, timeout=self.timeout))

    def replace_product(self, product_id: str, name: str, description: str, price: float,
                        category: str, in_stock: bool = True):
        payload = _product_payload(name, description, price, category, in_stock)
        return _unwrap(self.session.put(self._url(f"/{product_id}"), json=payload, timeout=self.timeout))

    def delete_product(self, product_id: str):
        return _unwrap(self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout))

    # Async (httpx)
    def _async_client(self, transport: Optional[httpx.AsyncBaseTransport]) -> httpx.AsyncClient:
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        return httpx.AsyncClient(base_url=self.base_url, headers=headers, timeout=self.timeout, transport=transport)

    async def list_products_async(self, category: Optional[str] = None,
                                  transport: Optional[httpx.AsyncBaseTransport] = None):
        params = {"category": category} if category else {}
        async with self._async_client(transport) as client:
            r = await client.get("/api/products", params=params)
            return _unwrap(r)

    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: bool = True, transport: Optional[httpx.AsyncBaseTransport] = None):
        payload = _product_payload(name, description, price, category, in_stock)
        async with self._async_client(transport) as client:
            r = await client.post("/api/products", json=payload)
            return _unwrap(r)


if __name__ == "__main__":
    import argparse
    import os

    from rich import print

    parser = argparse.ArgumentParser(description="Product API client")
    parser.add_argument("--url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    sp = subparsers.add_parser("search", help="Search products by name")
    sp.add_argument("--name", default="")

    subparsers.add_parser("stats", help="Count products per category")

    for cmd in ("create", "replace"):
        wp = subparsers.add_parser(cmd, help=f"{cmd.capitalize()} a product")
        if cmd == "replace":
            wp.add_argument("--product-id", required=True)
        wp.add_argument("--name", required=True)
        wp.add_argument("--description", required=True)
        wp.add_argument("--price", type=float, required=True)
        wp.add_argument("--category", required=True)
        wp.add_argument("--out-of-stock", action="store_true")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = ProductClient(base_url=args.url, api_key=args.api_key)

    try:
        if args.command == "list":
            print(c.list_products(args.category, args.page, args.limit))
        elif args.command == "get":
            print(c.get_product(args.product_id))
        elif args.command == "search":
            print(c.search_products(args.name))
        elif args.command == "stats":
            print(c.stats())
        elif args.command == "create":
            print(c.create_product(args.name, args.description, args.price, args.category, not args.out_of_stock))
        elif args.command == "replace":
            print(c.replace_product(args.product_id, args.name, args.description, args.price,
                                    args.category, not args.out_of_stock))
        elif args.command == "delete":
            print(c.delete_product(args.product_id))
    except ProductApiError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
