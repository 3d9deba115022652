"""API endpoints for inventory status and cooking from stock."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from kitchenbook.config import settings
from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.inventory.stock import filter_quick_recipes, is_low_stock, plan_stock_deduction, recommend_recipes
from kitchenbook.services.ingredients import get_expiring, get_ingredients, update_ingredient
from kitchenbook.services.recipes import get_recipe, get_recipes
from kitchenbook.web.deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inventory"])


class MissingStockResponse(BaseModel):
    name: str
    needed: float


class CookResponse(BaseModel):
    """Result of cooking a recipe from stock."""

    success: bool
    missing: list[MissingStockResponse] = []
    updated: dict[str, float] = {}


@router.get("/inventory/low-stock")
async def low_stock(db: DatabaseAdapter = Depends(get_db)) -> list[dict[str, Any]]:
    """Ingredients at or below their restock threshold."""
    rows = await get_ingredients(db)
    return [row for row in rows if is_low_stock(row)]


@router.get("/inventory/expiring")
async def expiring(db: DatabaseAdapter = Depends(get_db)) -> list[dict[str, Any]]:
    """In-stock ingredients expiring soon."""
    return await get_expiring(db, within_days=settings.expiring_within_days)


@router.get("/recipes/recommended")
async def recommended(limit: int = 10, db: DatabaseAdapter = Depends(get_db)) -> list[dict[str, Any]]:
    """Recipes ranked by how much of their ingredient list is in stock."""
    inventory = await get_ingredients(db)
    available = {row["id"] for row in inventory if (row.get("quantity") or 0) > 0}
    return recommend_recipes(await get_recipes(db), available, limit=limit)


@router.get("/recipes/quick")
async def quick(db: DatabaseAdapter = Depends(get_db)) -> list[dict[str, Any]]:
    """Recipes that fit within the quick-recipe time limit."""
    return filter_quick_recipes(await get_recipes(db), max_minutes=settings.quick_recipe_minutes)


@router.post("/recipes/{recipe_id}/cook", response_model=CookResponse)
async def cook(recipe_id: str, db: DatabaseAdapter = Depends(get_db)) -> CookResponse:
    """
    Deduct a recipe's ingredients from stock.

    Nothing is deducted when any linked ingredient is short.
    """
    recipe = await get_recipe(db, recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")

    check = plan_stock_deduction(recipe["ingredients"], await get_ingredients(db))
    if not check.success:
        return CookResponse(
            success=False,
            missing=[MissingStockResponse(name=m.name, needed=m.needed) for m in check.missing],
        )

    for ingredient_id, quantity in check.updates.items():
        await update_ingredient(db, ingredient_id, {"quantity": quantity})

    logger.info(f"Cooked recipe {recipe_id}, updated {len(check.updates)} ingredient(s)")
    return CookResponse(success=True, updated=check.updates)
