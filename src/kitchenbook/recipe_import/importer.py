"""
Recipe import orchestration.

Takes parsed recipes and persists them one at a time:
1. Resolve the category by exact name, creating it if missing
2. Resolve ingredients according to the ingredient policy
3. Write the recipe, its ingredient rows and its numbered steps

Every recipe gets its own ImportResult. A failure in one recipe is
recorded on that result and the batch moves on; nothing is retried.

Two imports running at once can both create the same new category.
Category name uniqueness belongs in the database, not here.
"""

import logging
import re

from kitchenbook.config import settings
from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.services.categories import create_category, get_categories
from kitchenbook.services.ingredients import create_ingredient, get_ingredients
from kitchenbook.services.recipes import create_full_recipe

from .models import ImportResult, IngredientPolicy, ParsedIngredient, ParsedRecipe

logger = logging.getLogger(__name__)

_NUMBER_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


def parse_amount(amount: str) -> float:
    """
    Coerce a parsed amount to a number, falling back to 0.

    Examples:
        "3" -> 3.0
        "1.5" -> 1.5
        "2片" -> 2.0
        "适量" -> 0.0
    """
    match = _NUMBER_PREFIX_RE.match(amount or "")
    return float(match.group(1)) if match else 0.0


async def import_recipes(
    client: DatabaseAdapter,
    recipes: list[ParsedRecipe],
    policy: IngredientPolicy | str | None = None,
    user_id: str | None = None,
) -> list[ImportResult]:
    """
    Import a batch of parsed recipes.

    Args:
        client: Database client
        recipes: Parsed recipes, in the order they should be created
        policy: Ingredient policy; defaults to settings.ingredient_policy
        user_id: Owner recorded on created recipes

    Returns:
        One ImportResult per input recipe, same order. Never raises for
        per-recipe failures.
    """
    policy = IngredientPolicy(policy or settings.ingredient_policy)
    logger.info(f"Importing {len(recipes)} recipe(s) with {policy.value} ingredients")

    results = []
    for parsed in recipes:
        try:
            result = await import_single_recipe(client, parsed, policy=policy, user_id=user_id)
        except Exception as e:
            logger.exception(f"Unexpected error importing '{parsed.name}'")
            result = ImportResult(success=False, recipe_name=parsed.name, error=_error_message(e))
        results.append(result)

    succeeded = sum(1 for r in results if r.success)
    logger.info(f"Import finished: {succeeded} succeeded, {len(results) - succeeded} failed")
    return results


async def import_single_recipe(
    client: DatabaseAdapter,
    parsed: ParsedRecipe,
    policy: IngredientPolicy | str = IngredientPolicy.UNLINKED,
    user_id: str | None = None,
) -> ImportResult:
    """Import one parsed recipe. Store errors become a failed result."""
    policy = IngredientPolicy(policy)
    warnings: list[str] = []

    try:
        category_id = await _resolve_category(client, parsed.category, warnings)

        if policy is IngredientPolicy.LINKED:
            ingredient_rows = await _linked_ingredients(client, parsed.ingredients, warnings)
        else:
            ingredient_rows = [_unlinked_ingredient(ing) for ing in parsed.ingredients]

        if not ingredient_rows:
            return ImportResult(
                success=False,
                recipe_name=parsed.name,
                error="No valid ingredients",
                warnings=warnings,
            )

        step_rows = [
            {
                "step_number": number,
                "description": step.description,
                "timer": step.duration * 60 if step.duration else None,  # Seconds
            }
            for number, step in enumerate(parsed.steps, start=1)
        ]

        created = await create_full_recipe(client, _recipe_row(parsed, category_id, user_id), ingredient_rows, step_rows)

    except Exception as e:
        logger.warning(f"Failed to import recipe '{parsed.name}': {e}")
        return ImportResult(
            success=False,
            recipe_name=parsed.name,
            error=_error_message(e),
            warnings=warnings,
        )

    logger.info(f"Imported recipe '{parsed.name}' ({created.get('id')})")
    return ImportResult(
        success=True,
        recipe_name=parsed.name,
        warnings=warnings,
        recipe_id=str(created["id"]) if created.get("id") is not None else None,
    )


async def _resolve_category(client: DatabaseAdapter, name: str, warnings: list[str]) -> str:
    """Find a category by exact name or create it."""
    categories = await get_categories(client)
    for category in categories:
        if category["name"] == name:
            return category["id"]

    created = await create_category(client, name)
    warnings.append(f"Created new category: {name}")
    return created["id"]


async def _linked_ingredients(
    client: DatabaseAdapter,
    ingredients: list[ParsedIngredient],
    warnings: list[str],
) -> list[dict]:
    """Link each ingredient to inventory, creating missing rows with zero stock."""
    by_name: dict[str, dict] = {}
    for row in await get_ingredients(client):
        by_name.setdefault(row["name"], row)

    rows = []
    for ing in ingredients:
        stock = by_name.get(ing.name)
        if stock is None:
            stock = await create_ingredient(
                client,
                name=ing.name,
                unit=ing.unit or settings.default_unit,
                quantity=0,
                threshold=0,
            )
            by_name[ing.name] = stock
            warnings.append(f"Auto-created ingredient {ing.name} with zero stock (needs restock)")

        rows.append(
            {
                "ingredient_id": stock["id"],
                "name": ing.name,
                "quantity": parse_amount(ing.amount),
                "unit": ing.unit or stock.get("unit") or settings.default_unit,
                "optional": ing.optional,
            }
        )

    return rows


def _unlinked_ingredient(ing: ParsedIngredient) -> dict:
    """Keep the parsed name and unit on the recipe ingredient."""
    return {
        "ingredient_id": None,
        "name": ing.name,
        "quantity": parse_amount(ing.amount),
        "unit": ing.unit or settings.default_unit,
        "optional": ing.optional,
    }


def _recipe_row(parsed: ParsedRecipe, category_id: str, user_id: str | None) -> dict:
    row = {
        "name": parsed.name,
        "category_id": category_id,
        "difficulty": parsed.difficulty,
        "description": parsed.description or None,
        "notes": parsed.notes or None,
        "tags": parsed.tags or None,
        "prep_time": parsed.prep_time,
        "cook_time": parsed.cook_time,
        "servings": parsed.servings or 1,
    }
    if user_id:
        row["user_id"] = user_id
    return row


def _error_message(error: Exception) -> str:
    """Readable message for store errors (postgrest errors carry .message)."""
    return getattr(error, "message", None) or str(error) or type(error).__name__
