"""
Stock matching between recipes and inventory.

Pure functions over row dicts as returned by the services:
- inventory rows: {id, name, quantity, threshold, expiry_date, ...}
- recipe ingredient rows: {ingredient_id, quantity, name, optional, ...}

Only linked recipe ingredients (with an ingredient_id) take part in stock
checks; free-text ingredients cannot be matched to stock.
"""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class MissingStock:
    """An ingredient the recipe needs more of."""

    name: str
    needed: float  # Amount short


@dataclass
class StockCheck:
    """Result of checking whether a recipe can be cooked from stock."""

    success: bool
    missing: list[MissingStock] = field(default_factory=list)
    updates: dict[str, float] = field(default_factory=dict)  # inventory id -> new quantity


def _quantity(row: dict, key: str = "quantity") -> float:
    return row.get(key) or 0


def _required(recipe_ingredients: list[dict]) -> list[dict]:
    return [ri for ri in recipe_ingredients if ri.get("ingredient_id") and not ri.get("optional")]


def find_missing_stock(recipe_ingredients: list[dict], inventory: list[dict]) -> list[MissingStock]:
    """
    List linked, non-optional ingredients that stock cannot cover.

    An ingredient linked to a row no longer in inventory counts as fully
    missing.
    """
    by_id = {row["id"]: row for row in inventory}
    missing = []

    for ri in _required(recipe_ingredients):
        needed = _quantity(ri)
        stock = by_id.get(ri["ingredient_id"])
        available = _quantity(stock) if stock else 0
        if available < needed:
            name = stock["name"] if stock else (ri.get("name") or "unknown")
            missing.append(MissingStock(name=name, needed=needed - available))

    return missing


def plan_stock_deduction(recipe_ingredients: list[dict], inventory: list[dict]) -> StockCheck:
    """
    Check stock and compute the quantities left after cooking.

    Nothing is deducted when anything is missing.
    """
    missing = find_missing_stock(recipe_ingredients, inventory)
    if missing:
        return StockCheck(success=False, missing=missing)

    by_id = {row["id"]: row for row in inventory}
    updates: dict[str, float] = {}
    for ri in _required(recipe_ingredients):
        ingredient_id = ri["ingredient_id"]
        current = updates.get(ingredient_id, _quantity(by_id[ingredient_id]))
        updates[ingredient_id] = max(0, current - _quantity(ri))

    return StockCheck(success=True, updates=updates)


def can_cook(recipe_ingredients: list[dict], inventory: list[dict]) -> bool:
    """Whether stock covers every required linked ingredient."""
    return not find_missing_stock(recipe_ingredients, inventory)


def recipe_match_rate(recipe_ingredients: list[dict], available_ids: set[str]) -> float:
    """Percentage of required linked ingredients that are in stock (0-100)."""
    required = _required(recipe_ingredients)
    if not required:
        return 0.0
    available = sum(1 for ri in required if ri["ingredient_id"] in available_ids)
    return available / len(required) * 100


def recommend_recipes(
    recipes: list[dict],
    available_ids: set[str],
    limit: int = 10,
    ingredients_key: str = "kc_recipe_ingredients",
) -> list[dict]:
    """
    Rank recipes by how much of their ingredient list is in stock.

    Returns copies of the recipe rows with a "match_rate" field, best
    first; ties keep their input order.
    """
    scored = [
        {**recipe, "match_rate": recipe_match_rate(recipe.get(ingredients_key) or [], available_ids)}
        for recipe in recipes
    ]
    scored.sort(key=lambda recipe: recipe["match_rate"], reverse=True)
    return scored[:limit]


def filter_quick_recipes(recipes: list[dict], max_minutes: int = 30) -> list[dict]:
    """Recipes whose prep plus cook time fits within max_minutes."""
    return [r for r in recipes if (r.get("prep_time") or 0) + (r.get("cook_time") or 0) <= max_minutes]


def is_low_stock(row: dict) -> bool:
    """Whether an inventory row is at or below its restock threshold."""
    return _quantity(row) <= _quantity(row, "threshold")


def days_until_expiry(row: dict, today: date | None = None) -> int | None:
    """Days from today to the row's expiry date, negative once expired."""
    expiry = row.get("expiry_date")
    if not expiry:
        return None

    if isinstance(expiry, str):
        expiry = datetime.fromisoformat(expiry.replace("Z", "+00:00"))
    if isinstance(expiry, datetime):
        expiry = expiry.date()

    return (expiry - (today or date.today())).days


def find_expiring(inventory: list[dict], within_days: int = 3, today: date | None = None) -> list[dict]:
    """
    In-stock rows expiring within the window, soonest first.

    Each returned row is a copy with "days_until_expiry" added.
    """
    expiring = []
    for row in inventory:
        days = days_until_expiry(row, today)
        if days is not None and days <= within_days and _quantity(row) > 0:
            expiring.append({**row, "days_until_expiry": days})

    return sorted(expiring, key=lambda row: row["days_until_expiry"])
