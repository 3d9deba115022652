"""
Recipe markdown importer.

Parses the recipe import format into ParsedRecipe records:

    ## 番茄炒蛋
    **分类**: 家常菜
    **难度**: 1
    **标签**: #快手 #下饭

    ### 食材
    - 鸡蛋 3个
    - 西红柿 2个

    ### 步骤
    1. 打散鸡蛋。
    2. 炒熟出锅(5 分钟)[计时]

    ---

    ## <next recipe>

Parsing never raises. Unrecognised lines are skipped, and a block that
lacks a name, category, ingredient or step is dropped without affecting
the other blocks in the document.
"""

import logging
import re
from typing import Any, Callable

from .fields import (
    CONTINUATION_FIELDS,
    match_field,
    parse_difficulty,
    parse_minutes,
    parse_servings,
    parse_tags,
)
from .lines import DEFAULT_COUNT_UNIT, parse_ingredient_line, parse_step_line
from .models import ParsedIngredient, ParsedRecipe, ParsedStep, Section

logger = logging.getLogger(__name__)

# A line of three or more hyphens separates recipes
_DELIMITER_RE = re.compile(r"^[ \t]*-{3,}[ \t]*$", re.MULTILINE)

_NAME_RE = re.compile(r"^##(?!#)\s+(.+)$")
_SECTION_RE = re.compile(r"^#{3,}\s*(食材|步骤|ingredients|steps)", re.IGNORECASE)
_NUMBERED_RE = re.compile(r"^\d+\.")

_SECTION_NAMES = {
    "食材": Section.INGREDIENTS,
    "ingredients": Section.INGREDIENTS,
    "步骤": Section.STEPS,
    "steps": Section.STEPS,
}


def parse_recipe_markdown(markdown: str, default_unit: str = DEFAULT_COUNT_UNIT) -> list[ParsedRecipe]:
    """
    Parse an import document into recipes, in document order.

    Args:
        markdown: Full document text, one or more recipe blocks
        default_unit: Unit given to numeric amounts written without one

    Returns:
        Valid recipes only. Never raises; worst case is an empty list.
    """
    recipes: list[ParsedRecipe] = []

    for number, block in enumerate(split_recipe_blocks(markdown), start=1):
        try:
            recipe = parse_recipe_block(block, default_unit=default_unit)
        except Exception as e:
            logger.warning(f"Skipping recipe block {number}: {e}", exc_info=True)
            continue

        if recipe is None:
            logger.debug(f"Recipe block {number} is missing required fields, skipped")
            continue

        recipes.append(recipe)

    logger.info(f"Parsed {len(recipes)} recipe(s) from import document")
    return recipes


def split_recipe_blocks(markdown: str) -> list[str]:
    """Split a document on horizontal-rule lines, dropping blank blocks."""
    if not isinstance(markdown, str) or not markdown.strip():
        return []

    text = markdown.replace("\r\n", "\n").replace("\r", "\n")
    return [block for block in _DELIMITER_RE.split(text) if block.strip()]


def parse_recipe_block(block: str, default_unit: str = DEFAULT_COUNT_UNIT) -> ParsedRecipe | None:
    """Parse one recipe block. Returns None if the block is not a valid recipe."""
    lines = [line.strip() for line in block.split("\n")]
    return _RecipeBlockParser([line for line in lines if line], default_unit).parse()


def is_structural_line(line: str) -> bool:
    """Whether a line is a heading, bold label, bullet or numbered step."""
    return (
        line.startswith("##")
        or line.startswith("**")
        or line.startswith("-")
        or bool(_NUMBERED_RE.match(line))
    )


class _RecipeBlockParser:
    """
    Line dispatcher for a single recipe block.

    Each rule is a (predicate, handler) pair. Predicates return a match
    value (truthy) or None; the first rule that matches consumes the line.
    """

    def __init__(self, lines: list[str], default_unit: str):
        self.lines = lines
        self.default_unit = default_unit
        self.position = 0
        self.section = Section.NONE

        self.name = ""
        self.category = ""
        self.difficulty = 1
        self.prep_time: int | None = None
        self.cook_time: int | None = None
        self.servings: int | None = None
        self.tags: list[str] = []
        self.description = ""
        self.notes = ""
        self.ingredients: list[ParsedIngredient] = []
        self.steps: list[ParsedStep] = []

        self.rules: list[tuple[Callable[[str], Any], Callable[[Any], None]]] = [
            (self._match_name, self._set_name),
            (match_field, self._set_field),
            (self._match_section, self._enter_section),
            (self._match_ingredient, self._add_ingredient),
            (self._match_step, self._add_step),
        ]

    def parse(self) -> ParsedRecipe | None:
        while self.position < len(self.lines):
            line = self.lines[self.position]
            self.position += 1

            for predicate, handler in self.rules:
                matched = predicate(line)
                if matched is not None:
                    handler(matched)
                    break

        return self._build()

    # -- Predicates ----------------------------------------------------------

    def _match_name(self, line: str) -> str | None:
        match = _NAME_RE.match(line)
        return match.group(1).strip() if match else None

    def _match_section(self, line: str) -> Section | None:
        match = _SECTION_RE.match(line)
        return _SECTION_NAMES[match.group(1).lower()] if match else None

    def _match_ingredient(self, line: str) -> str | None:
        if self.section is Section.INGREDIENTS and line.startswith("-"):
            return line[1:].strip()
        return None

    def _match_step(self, line: str) -> str | None:
        if self.section is Section.STEPS and _NUMBERED_RE.match(line):
            return line
        return None

    # -- Handlers ------------------------------------------------------------

    def _set_name(self, name: str) -> None:
        self.name = name

    def _enter_section(self, section: Section) -> None:
        self.section = section

    def _add_ingredient(self, text: str) -> None:
        ingredient = parse_ingredient_line(text, default_unit=self.default_unit)
        if ingredient is not None:
            self.ingredients.append(ingredient)

    def _add_step(self, line: str) -> None:
        step = parse_step_line(line)
        if step is not None:
            self.steps.append(step)

    def _set_field(self, field: tuple[str, str]) -> None:
        key, value = field

        if not value and key in CONTINUATION_FIELDS:
            value = self._take_description() if key == "description" else self._take_notes()

        if key == "category":
            self.category = value
        elif key == "difficulty":
            self.difficulty = parse_difficulty(value)
        elif key == "prep_time":
            self.prep_time = parse_minutes(value)
        elif key == "cook_time":
            self.cook_time = parse_minutes(value)
        elif key == "servings":
            self.servings = parse_servings(value)
        elif key == "tags":
            self.tags = parse_tags(value)
        elif key == "description":
            self.description = value
        elif key == "notes":
            self.notes = value

    def _take_description(self) -> str:
        """Consume the following line as the description, unless it is structural."""
        if self.position < len(self.lines) and not is_structural_line(self.lines[self.position]):
            self.position += 1
            return self.lines[self.position - 1]
        return ""

    def _take_notes(self) -> str:
        """Consume following lines up to the next structural line."""
        collected = []
        while self.position < len(self.lines) and not is_structural_line(self.lines[self.position]):
            collected.append(self.lines[self.position])
            self.position += 1
        return "\n".join(collected)

    # -- Result --------------------------------------------------------------

    def _build(self) -> ParsedRecipe | None:
        if not self.name or not self.category or not self.ingredients or not self.steps:
            return None

        return ParsedRecipe(
            name=self.name,
            category=self.category,
            difficulty=self.difficulty,
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            servings=self.servings,
            tags=self.tags,
            description=self.description or None,
            notes=self.notes or None,
            ingredients=self.ingredients,
            steps=self.steps,
        )
