#!/usr/bin/env python
import os

from sdk.products import ProductApiError, ProductClient


def main():
    c = ProductClient(
        base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "12345"),
    )

    # -----------------------------
    # Create products
    # -----------------------------
    print("Creating products...")
    desk = c.create_product("Standing Desk", "Electric height-adjustable desk", 450, "furniture")
    chair = c.create_product("Office Chair", "Ergonomic mesh chair", 199.99, "furniture", in_stock=False)
    print(desk)
    print(chair)

    # -----------------------------
    # List, filter, paginate
    # -----------------------------
    print("\nAll products:")
    print(c.list_products())
    print("\nFurniture only, page 2 of size 1:")
    print(c.list_products(category="Furniture", page=2, limit=1))

    # -----------------------------
    # Search + stats
    # -----------------------------
    print("\nSearching for 'desk'...")
    print(c.search_products("desk"))
    print("\nStats:")
    print(c.stats())

    # -----------------------------
    # Replace, delete
    # -----------------------------
    print("\nMarking the chair as in stock...")
    print(c.replace_product(chair["id"], "Office Chair", "Ergonomic mesh chair", 179.99, "furniture", True))

    print("\nDeleting the desk...")
    print(c.delete_product(desk["id"]))
    try:
        c.get_product(desk["id"])
    except ProductApiError as e:
        print(f"Lookup after delete: {e}")

    # -----------------------------
    # Writes without a key are rejected
    # -----------------------------
    anon = ProductClient(base_url=c.base_url)
    try:
        anon.create_product("Lamp", "Desk lamp", 25, "lighting")
    except ProductApiError as e:
        print(f"\nCreate without key: {e}")


if __name__ == "__main__":
    main()
