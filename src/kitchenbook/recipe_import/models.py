"""Data models for recipe import."""

from dataclasses import dataclass, field
from enum import Enum


class Section(str, Enum):
    """Which part of a recipe block the parser is currently reading."""

    NONE = "none"
    INGREDIENTS = "ingredients"
    STEPS = "steps"


class IngredientPolicy(str, Enum):
    """How imported recipe ingredients are resolved against inventory."""

    LINKED = "linked"  # Link to inventory, auto-creating missing rows with zero stock
    UNLINKED = "unlinked"  # Store parsed name/unit on the recipe ingredient only


@dataclass
class ParsedIngredient:
    """One ingredient bullet from an import document."""

    name: str
    amount: str  # Literal text, e.g. "3", "1.5", "适量"
    unit: str = ""
    optional: bool = False


@dataclass
class ParsedStep:
    """One numbered step from an import document."""

    description: str
    duration: int | None = None  # Minutes
    is_timer_enabled: bool = False


@dataclass
class ParsedRecipe:
    """A recipe block that passed validation, ready for import."""

    name: str
    category: str
    difficulty: int = 1
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    tags: list[str] = field(default_factory=list)
    description: str | None = None
    notes: str | None = None
    ingredients: list[ParsedIngredient] = field(default_factory=list)
    steps: list[ParsedStep] = field(default_factory=list)


@dataclass
class ImportResult:
    """Outcome of importing one parsed recipe."""

    success: bool
    recipe_name: str
    error: str | None = None
    warnings: list[str] = field(default_factory=list)
    recipe_id: str | None = None


@dataclass
class ImportSummary:
    """Aggregate view of a batch import for display."""

    succeeded: int
    failed: int
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)  # "<recipe name>: <error>"
