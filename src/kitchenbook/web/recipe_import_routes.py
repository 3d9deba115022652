"""API endpoints for importing recipes from markdown text."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from kitchenbook.config import settings
from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.recipe_import import (
    IngredientPolicy,
    ParsedRecipe,
    format_import_summary,
    import_recipes,
    parse_recipe_markdown,
    summarize_import,
)
from kitchenbook.web.deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipe-import"])


# =============================================================================
# Request/Response Models
# =============================================================================


class ImportTextRequest(BaseModel):
    """Markdown document with one or more recipes."""

    text: str
    policy: IngredientPolicy | None = None  # Defaults to server setting


class ParsedIngredientResponse(BaseModel):
    name: str
    amount: str
    unit: str
    optional: bool = False


class ParsedStepResponse(BaseModel):
    description: str
    duration: int | None = None
    is_timer_enabled: bool = False


class ParsedRecipeResponse(BaseModel):
    """Parsed recipe preview for user review."""

    name: str
    category: str
    difficulty: int = 1
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    tags: list[str] = []
    description: str | None = None
    notes: str | None = None
    ingredients: list[ParsedIngredientResponse] = []
    steps: list[ParsedStepResponse] = []

    @classmethod
    def from_parsed(cls, recipe: ParsedRecipe) -> "ParsedRecipeResponse":
        return cls(
            name=recipe.name,
            category=recipe.category,
            difficulty=recipe.difficulty,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            servings=recipe.servings,
            tags=recipe.tags,
            description=recipe.description,
            notes=recipe.notes,
            ingredients=[ParsedIngredientResponse(**vars(ing)) for ing in recipe.ingredients],
            steps=[ParsedStepResponse(**vars(step)) for step in recipe.steps],
        )


class ParseResponse(BaseModel):
    """Preview of what an import would create."""

    recipes: list[ParsedRecipeResponse]
    error: str | None = None


class ImportResultResponse(BaseModel):
    success: bool
    recipe_name: str
    error: str | None = None
    warnings: list[str] = []
    recipe_id: str | None = None


class ImportResponse(BaseModel):
    """Per-recipe results plus a readable summary."""

    succeeded: int
    failed: int
    results: list[ImportResultResponse]
    message: str
    error: str | None = None


NO_RECIPES_MESSAGE = "No valid recipes found. Check the import format."


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/recipes/import/parse", response_model=ParseResponse)
async def parse_import(req: ImportTextRequest) -> ParseResponse:
    """Parse import text without saving anything."""
    recipes = parse_recipe_markdown(req.text, default_unit=settings.default_unit)
    return ParseResponse(
        recipes=[ParsedRecipeResponse.from_parsed(r) for r in recipes],
        error=None if recipes else NO_RECIPES_MESSAGE,
    )


@router.post("/recipes/import", response_model=ImportResponse)
async def import_text(
    req: ImportTextRequest,
    db: DatabaseAdapter = Depends(get_db),
) -> ImportResponse:
    """
    Parse import text and save every valid recipe.

    Each recipe succeeds or fails on its own; see results.
    """
    recipes = parse_recipe_markdown(req.text, default_unit=settings.default_unit)
    if not recipes:
        return ImportResponse(succeeded=0, failed=0, results=[], message=NO_RECIPES_MESSAGE, error=NO_RECIPES_MESSAGE)

    logger.info(f"Import request with {len(recipes)} recipe(s)")
    results = await import_recipes(db, recipes, policy=req.policy)
    summary = summarize_import(results)

    return ImportResponse(
        succeeded=summary.succeeded,
        failed=summary.failed,
        results=[ImportResultResponse(**vars(r)) for r in results],
        message=format_import_summary(summary, warning_preview=settings.import_warning_preview),
    )
