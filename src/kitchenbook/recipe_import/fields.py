"""
Metadata field lines in recipe import documents.

A field line is a bold label followed by an ASCII or fullwidth colon:

    **分类**: 家常菜
    **Prep time**：15 分钟

Labels are accepted in Chinese or English (English is case-insensitive).
"""

import re

# Bold label, colon (":" or "："), optional value
_FIELD_RE = re.compile(r"^\*\*(?P<label>[^*]+)\*\*\s*[:：]\s*(?P<value>.*)$")

FIELD_LABELS = {
    "分类": "category",
    "category": "category",
    "难度": "difficulty",
    "difficulty": "difficulty",
    "准备时间": "prep_time",
    "prep time": "prep_time",
    "烹饪时间": "cook_time",
    "cook time": "cook_time",
    "份数": "servings",
    "servings": "servings",
    "标签": "tags",
    "tags": "tags",
    "简介": "description",
    "description": "description",
    "小贴士": "notes",
    "notes": "notes",
}

# Fields whose value may continue on the following line(s) when left empty
CONTINUATION_FIELDS = {"description", "notes"}

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")
_ANY_INT_RE = re.compile(r"(\d+)")

# Longer digit runs are treated as unparseable
_MAX_DIGITS = 9


def _to_int(match: re.Match | None) -> int | None:
    if match is None or len(match.group(1)) > _MAX_DIGITS:
        return None
    return int(match.group(1))


def match_field(line: str) -> tuple[str, str] | None:
    """
    Match a bold-labelled metadata line.

    Returns (field_key, value) with the value stripped, or None when the
    line is not a field line or the label is unknown.
    """
    match = _FIELD_RE.match(line)
    if not match:
        return None

    key = FIELD_LABELS.get(match.group("label").strip().lower())
    if key is None:
        return None

    return key, match.group("value").strip()


def parse_difficulty(value: str) -> int:
    """
    Parse a difficulty rating, defaulting to 1.

    Examples:
        "3" -> 3
        "2 (easy)" -> 2
        "hard" -> 1
        "0" -> 1
    """
    return _to_int(_LEADING_INT_RE.match(value)) or 1


def parse_minutes(value: str) -> int | None:
    """
    Parse a time field to minutes using the first number found.

    Examples:
        "15 分钟" -> 15
        "about 20 min" -> 20
        "n/a" -> None
    """
    return _to_int(_ANY_INT_RE.search(value))


def parse_servings(value: str) -> int:
    """Parse a servings count, defaulting to 1 when not numeric."""
    return _to_int(_LEADING_INT_RE.match(value)) or 1


def parse_tags(value: str) -> list[str]:
    """
    Parse a tag line into tag names, in order.

    Only "#tag" tokens count; the "#" is stripped.

    Example:
        "#快手 #下饭 素食" -> ["快手", "下饭"]
    """
    return [token[1:] for token in value.split() if token.startswith("#") and len(token) > 1]
