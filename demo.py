#!/usr/bin/env python
import os
from sdk.pystore import StoreClient

def main():
    c = StoreClient(base_url="http://127.0.0.1:3000", api_key=os.environ.get("API_KEY"))

    # -----------------------------
    # Health check
    # -----------------------------
    print(c.health())

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    mouse = c.create_product("Mouse", 25.5, "Electronics", "Wireless laptop mouse")
    mug = c.create_product("Mug", 8.0, "Kitchen", in_stock=False)
    print(mouse)
    print(mug)

    # -----------------------------
    # List products (filtered + paginated)
    # -----------------------------
    print("\nListing electronics, two per page...")
    print(c.list_products(category="electronics", page=1, limit=2))

    # -----------------------------
    # Search
    # -----------------------------
    print("\nSearching for 'laptop'...")
    print(c.search_products("laptop"))

    # -----------------------------
    # Update
    # -----------------------------
    print("\nRestocking the mug...")
    print(c.update_product(mug["id"], name="Mug", price=9.0, category="Kitchen", inStock=True))

    # -----------------------------
    # Stats
    # -----------------------------
    print("\nStatistics...")
    print(c.stats())

    # -----------------------------
    # Delete
    # -----------------------------
    print("\nDeleting the mouse...")
    c.delete_product(mouse["id"])
    print(c.stats())

if __name__ == "__main__":
    main()
