"""
Ingredient and step line parsing.

Ingredient format (bullet marker already removed):
    <name> <amount><unit> (<weight note>) [可选]

Step format:
    <n>. <description> (<minutes> 分钟) [计时]
"""

import re

from .models import ParsedIngredient, ParsedStep

DEFAULT_COUNT_UNIT = "个"

_OPTIONAL_RE = re.compile(r"\[(?:可选|optional)\]", re.IGNORECASE)
_PAREN_RE = re.compile(r"\([^)]*\)|（[^）]*）")
# Digits with at most one decimal point, then the unit
_AMOUNT_RE = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)(.*)$", re.DOTALL)

_STEP_MARKER_RE = re.compile(r"^\s*\d+\.\s*")
# Markers swallow the whitespace around them; removal leaves one space
_TIMER_RE = re.compile(r"\s*\[(?:计时|timer)\]\s*", re.IGNORECASE)
# Up to 9 digits; longer runs are left in the description
_DURATION_RE = re.compile(r"\s*\((\d{1,9})\s*分钟\)\s*")


def parse_ingredient_line(text: str, default_unit: str = DEFAULT_COUNT_UNIT) -> ParsedIngredient | None:
    """
    Parse one ingredient bullet.

    The amount is kept as text. Returns None when the line has no amount
    (fewer than two whitespace-separated tokens).

    Examples:
        "鸡蛋 3个" -> name="鸡蛋", amount="3", unit="个"
        "面粉 200 g (约2杯)" -> name="面粉", amount="200", unit="g"
        "香菜 适量[可选]" -> name="香菜", amount="适量", unit="", optional
        "鸡蛋 3" -> name="鸡蛋", amount="3", unit=default_unit
    """
    optional = bool(_OPTIONAL_RE.search(text))
    text = _OPTIONAL_RE.sub(" ", text)
    text = _PAREN_RE.sub(" ", text)

    parts = text.split()
    if len(parts) < 2:
        return None

    name = parts[0]
    amount_with_unit = "".join(parts[1:])

    match = _AMOUNT_RE.match(amount_with_unit)
    if not match:
        return ParsedIngredient(name=name, amount=amount_with_unit, unit="", optional=optional)

    amount, unit = match.group(1), match.group(2).strip()
    return ParsedIngredient(name=name, amount=amount, unit=unit or default_unit, optional=optional)


def parse_step_line(line: str) -> ParsedStep | None:
    """
    Parse one numbered step.

    Duration and timer flag are independent. Returns None when nothing
    is left of the description once the markers are removed.

    Examples:
        "1. 打散鸡蛋。" -> description="打散鸡蛋。"
        "2. 煮面(10 分钟)[计时]" -> description="煮面", duration=10, timer on
        "3. Rest the dough [timer]" -> timer on, no duration
        "4. 切  丝 (2 分钟)" -> description="切  丝", duration=2
    """
    text = _STEP_MARKER_RE.sub("", line, count=1)

    is_timer_enabled = bool(_TIMER_RE.search(text))
    text = _TIMER_RE.sub(" ", text)

    duration = None
    match = _DURATION_RE.search(text)
    if match:
        duration = int(match.group(1))
        text = text[: match.start()] + " " + text[match.end() :]

    text = text.strip()

    if not text:
        return None

    return ParsedStep(description=text, duration=duration, is_timer_enabled=is_timer_enabled)
