"""Recipe category operations."""

from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.db.client import CATEGORIES, RECIPES


async def get_categories(client: DatabaseAdapter) -> list[dict]:
    """Get all categories, ordered by name."""
    response = client.table(CATEGORIES).select("*").order("name").execute()
    return response.data or []


async def get_category(client: DatabaseAdapter, category_id: str) -> dict | None:
    """Get a single category by ID."""
    response = client.table(CATEGORIES).select("*").eq("id", category_id).limit(1).execute()
    return response.data[0] if response.data else None


async def create_category(client: DatabaseAdapter, name: str) -> dict:
    """Create a category. Names are not deduplicated here."""
    response = client.table(CATEGORIES).insert({"name": name}).execute()
    if not response.data:
        raise ValueError(f"Failed to create category '{name}'")
    return response.data[0]


async def update_category(client: DatabaseAdapter, category_id: str, name: str) -> dict:
    """Rename a category."""
    response = client.table(CATEGORIES).update({"name": name}).eq("id", category_id).execute()
    if not response.data:
        raise ValueError(f"Category {category_id} not found")
    return response.data[0]


async def delete_category(client: DatabaseAdapter, category_id: str, delete_recipes: bool = False) -> None:
    """
    Delete a category.

    Its recipes are deleted too when delete_recipes is set, otherwise
    they become uncategorized.
    """
    if delete_recipes:
        client.table(RECIPES).delete().eq("category_id", category_id).execute()
    else:
        client.table(RECIPES).update({"category_id": None}).eq("category_id", category_id).execute()

    client.table(CATEGORIES).delete().eq("id", category_id).execute()
