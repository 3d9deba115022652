"""Recipe import: markdown parsing and persistence of imported recipes."""

from .models import (
    ImportResult,
    ImportSummary,
    IngredientPolicy,
    ParsedIngredient,
    ParsedRecipe,
    ParsedStep,
    Section,
)
from .markdown import parse_recipe_markdown, parse_recipe_block, split_recipe_blocks
from .importer import import_recipes, import_single_recipe, parse_amount
from .summary import format_import_summary, summarize_import

__all__ = [
    "ImportResult",
    "ImportSummary",
    "IngredientPolicy",
    "ParsedIngredient",
    "ParsedRecipe",
    "ParsedStep",
    "Section",
    "parse_recipe_markdown",
    "parse_recipe_block",
    "split_recipe_blocks",
    "import_recipes",
    "import_single_recipe",
    "parse_amount",
    "format_import_summary",
    "summarize_import",
]
