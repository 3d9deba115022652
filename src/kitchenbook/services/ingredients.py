"""
Inventory ("fridge") ingredient operations.

Each row tracks stock for one ingredient:
    {id, name, type, unit, quantity, threshold, storage,
     expiry_date, production_date}
"""

from datetime import date
from typing import Any, Literal

from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.db.client import INGREDIENTS
from kitchenbook.inventory.stock import find_expiring, is_low_stock

IngredientType = Literal["main", "side", "seasoning", "fresh", "dry"]
StorageType = Literal["refrigerated", "frozen", "room"]

INGREDIENT_TYPES = ("main", "side", "seasoning", "fresh", "dry")
STORAGE_TYPES = ("refrigerated", "frozen", "room")


async def get_ingredients(client: DatabaseAdapter) -> list[dict]:
    """Get all inventory ingredients, ordered by name."""
    response = client.table(INGREDIENTS).select("*").order("name").execute()
    return response.data or []


async def get_ingredient(client: DatabaseAdapter, ingredient_id: str) -> dict | None:
    """Get a single ingredient by ID."""
    response = client.table(INGREDIENTS).select("*").eq("id", ingredient_id).limit(1).execute()
    return response.data[0] if response.data else None


async def get_ingredient_by_name(client: DatabaseAdapter, name: str) -> dict | None:
    """Get an ingredient by exact (case-sensitive) name."""
    response = client.table(INGREDIENTS).select("*").eq("name", name).limit(1).execute()
    return response.data[0] if response.data else None


async def create_ingredient(
    client: DatabaseAdapter,
    name: str,
    unit: str,
    quantity: float = 0,
    threshold: float = 0,
    type: IngredientType = "main",
    storage: StorageType = "refrigerated",
    expiry_date: str | None = None,
    production_date: str | None = None,
) -> dict:
    """Add an ingredient to inventory."""
    if type not in INGREDIENT_TYPES:
        raise ValueError(f"Unknown ingredient type '{type}'")
    if storage not in STORAGE_TYPES:
        raise ValueError(f"Unknown storage type '{storage}'")

    data = {
        "name": name,
        "unit": unit,
        "quantity": quantity,
        "threshold": threshold,
        "type": type,
        "storage": storage,
        "expiry_date": expiry_date,
        "production_date": production_date,
    }
    response = client.table(INGREDIENTS).insert(data).execute()
    if not response.data:
        raise ValueError(f"Failed to create ingredient '{name}'")
    return response.data[0]


async def update_ingredient(client: DatabaseAdapter, ingredient_id: str, updates: dict[str, Any]) -> dict:
    """Update an inventory ingredient."""
    response = client.table(INGREDIENTS).update(updates).eq("id", ingredient_id).execute()
    if not response.data:
        raise ValueError(f"Ingredient {ingredient_id} not found")
    return response.data[0]


async def delete_ingredient(client: DatabaseAdapter, ingredient_id: str) -> None:
    """Remove an ingredient from inventory."""
    client.table(INGREDIENTS).delete().eq("id", ingredient_id).execute()


async def decrease_quantity(client: DatabaseAdapter, ingredient_id: str, amount: float) -> dict:
    """Deduct stock. Raises ValueError if the ingredient is missing or short."""
    current = await get_ingredient(client, ingredient_id)
    if current is None:
        raise ValueError("Ingredient not found")

    if current["quantity"] < amount:
        raise ValueError(f"Insufficient stock for '{current['name']}'")

    return await update_ingredient(client, ingredient_id, {"quantity": current["quantity"] - amount})


async def increase_quantity(client: DatabaseAdapter, ingredient_id: str, amount: float) -> dict:
    """Add stock. Raises ValueError if the ingredient is missing."""
    current = await get_ingredient(client, ingredient_id)
    if current is None:
        raise ValueError("Ingredient not found")

    return await update_ingredient(client, ingredient_id, {"quantity": current["quantity"] + amount})


async def get_low_stock(client: DatabaseAdapter) -> list[dict]:
    """Get ingredients at or below their restock threshold, lowest first."""
    rows = await get_ingredients(client)
    low = [row for row in rows if is_low_stock(row)]
    return sorted(low, key=lambda row: row.get("quantity") or 0)


async def get_expiring(client: DatabaseAdapter, within_days: int = 3, today: date | None = None) -> list[dict]:
    """Get in-stock ingredients expiring within the given number of days."""
    rows = await get_ingredients(client)
    return find_expiring(rows, within_days=within_days, today=today)
