"""
Recipe catalog operations.

A recipe is stored as one kc_recipes row plus its kc_recipe_ingredients
rows and kc_recipe_steps rows. Recipe ingredients either link to an
inventory row (ingredient_id) or carry a free-text name/unit.
"""

import logging
from typing import Any

from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.db.client import MEAL_PLANS, RECIPE_INGREDIENTS, RECIPE_STEPS, RECIPES

logger = logging.getLogger(__name__)


async def get_recipes(client: DatabaseAdapter, user_id: str | None = None) -> list[dict]:
    """Get recipes with their ingredient rows, optionally for one user."""
    query = client.table(RECIPES).select(f"*, {RECIPE_INGREDIENTS}(ingredient_id, quantity, unit, optional, name)")

    if user_id:
        query = query.eq("user_id", user_id)

    response = query.order("name").execute()
    return response.data or []


async def get_recipe(client: DatabaseAdapter, recipe_id: str) -> dict | None:
    """Get a recipe with its ingredients and ordered steps."""
    recipe_resp = client.table(RECIPES).select("*, kc_categories(name)").eq("id", recipe_id).limit(1).execute()
    if not recipe_resp.data:
        return None

    ingredients_resp = (
        client.table(RECIPE_INGREDIENTS)
        .select("*, kc_ingredients(id, name, type, unit, quantity)")
        .eq("recipe_id", recipe_id)
        .order("created_at")
        .execute()
    )
    steps_resp = client.table(RECIPE_STEPS).select("*").eq("recipe_id", recipe_id).order("step_number").execute()

    recipe = recipe_resp.data[0]
    recipe["category_name"] = (recipe.pop("kc_categories", None) or {}).get("name")
    recipe["ingredients"] = ingredients_resp.data or []
    recipe["steps"] = steps_resp.data or []
    return recipe


async def create_recipe(client: DatabaseAdapter, recipe: dict[str, Any]) -> dict:
    """Create the recipe row only."""
    response = client.table(RECIPES).insert(recipe).execute()
    if not response.data:
        raise ValueError(f"Failed to create recipe '{recipe.get('name')}'")
    return response.data[0]


async def create_full_recipe(
    client: DatabaseAdapter,
    recipe: dict[str, Any],
    ingredients: list[dict[str, Any]],
    steps: list[dict[str, Any]],
) -> dict:
    """
    Create a recipe with its ingredient and step rows.

    If writing ingredients or steps fails, the recipe row is removed
    (best effort) and the original error is re-raised.
    """
    created = await create_recipe(client, recipe)
    recipe_id = created["id"]

    try:
        ingredient_rows = [{**ing, "recipe_id": recipe_id} for ing in ingredients]
        if ingredient_rows:
            client.table(RECIPE_INGREDIENTS).insert(ingredient_rows).execute()

        step_rows = [{**step, "recipe_id": recipe_id} for step in steps]
        if step_rows:
            client.table(RECIPE_STEPS).insert(step_rows).execute()
    except Exception:
        try:
            client.table(RECIPES).delete().eq("id", recipe_id).execute()
        except Exception as cleanup_error:
            logger.warning(f"Could not remove partial recipe {recipe_id}: {cleanup_error}")
        raise

    return {**created, "ingredients": ingredient_rows, "steps": step_rows}


async def delete_recipe(client: DatabaseAdapter, recipe_id: str) -> None:
    """Delete a recipe and the meal-plan entries that use it."""
    client.table(MEAL_PLANS).delete().eq("recipe_id", recipe_id).execute()
    client.table(RECIPES).delete().eq("id", recipe_id).execute()


async def search_recipes(client: DatabaseAdapter, query: str) -> list[dict]:
    """Search recipes by name or description (case-insensitive substring)."""
    if not query or not query.strip():
        return []

    term = query.strip()
    response = (
        client.table(RECIPES)
        .select("*")
        .or_(f"name.ilike.%{term}%,description.ilike.%{term}%")
        .order("name")
        .execute()
    )
    return response.data or []
