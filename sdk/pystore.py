# sdk/pystore.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print

class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def health(self) -> str:
        r = self.session.get(self._url("/"), timeout=self.timeout)
        r.raise_for_status()
        return r.text

    # Reads
    def list_products(self, category: Optional[str] = None, page: int = 1, limit: int = 10):
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if category:
            params["category"] = category
        r = self.session.get(self._url("/api/products"), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def search_products(self, q: str):
        r = self.session.get(self._url("/api/products/search"), params={"q": q}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def stats(self):
        r = self.session.get(self._url("/api/products/stats"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Writes (need api_key)
    def create_product(self, name: str, price: float, category: str,
                       description: Optional[str] = None, in_stock: Optional[bool] = None):
        payload: Dict[str, Any] = {"name": name, "price": price, "category": category}
        if description is not None:
            payload["description"] = description
        if in_stock is not None:
            payload["inStock"] = in_stock
        r = self.session.post(self._url("/api/products"), json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, **fields):
        r = self.session.put(self._url(f"/api/products/{product_id}"), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()

    # Async listing (example)
    async def list_products_async(self, category: Optional[str] = None, page: int = 1, limit: int = 10):
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if category:
            params["category"] = category
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.get(self._url("/api/products"), params=params)
            r.raise_for_status()
            return r.json()


def error_message(exc: requests.HTTPError) -> str:
    """Pull the server's error message out of an HTTPError, if it sent one."""
    resp = exc.response
    if resp is None:
        return str(exc)
    try:
        return resp.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP {resp.status_code}: {resp.text}"


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Products API client")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000")
    parser.add_argument("--api-key", help="Value for the x-api-key header (write commands)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--page", type=int, default=1)
    lp.add_argument("--limit", type=int, default=10)

    sp = subparsers.add_parser("search", help="Search products by name or description")
    sp.add_argument("--q", required=True, help="Search text")

    subparsers.add_parser("stats", help="Show product statistics")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--description")
    cp.add_argument("--out-of-stock", action="store_true")

    up = subparsers.add_parser("update-product", help="Update a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name", required=True)
    up.add_argument("--price", type=float, required=True)
    up.add_argument("--category", required=True)
    up.add_argument("--description")
    up.add_argument("--in-stock", choices=["true", "false"])

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args(argv)
    c = StoreClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category, args.page, args.limit))
        elif args.command == "search":
            print(c.search_products(args.q))
        elif args.command == "stats":
            print(c.stats())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.price, args.category, args.description,
                                   False if args.out_of_stock else None))
        elif args.command == "update-product":
            fields: Dict[str, Any] = {"name": args.name, "price": args.price, "category": args.category}
            if args.description is not None:
                fields["description"] = args.description
            if args.in_stock is not None:
                fields["inStock"] = args.in_stock == "true"
            print(c.update_product(args.product_id, **fields))
        elif args.command == "delete-product":
            c.delete_product(args.product_id)
            print(f"[green]Deleted {args.product_id}[/green]")
    except requests.HTTPError as e:
        print(f"[red]Error:[/red] {error_message(e)}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
