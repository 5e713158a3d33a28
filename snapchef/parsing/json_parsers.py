import json
import logging
import math
import re
from typing import Any, Optional

from ..schemas import Ingredient, Recipe, UnitSystem
from .parser import RecipeParser

logger = logging.getLogger("snapchef.parsing")

UNKNOWN_TITLE = "Unknown Dish"

# ```json { ... } ``` (tag optional)
_FENCED_OBJECT = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL | re.IGNORECASE)
# first "{" through last "}"
_BRACED_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

_INSTRUCTION_TEXT_KEYS = ("text", "description", "step", "instruction")
_INGREDIENT_NAME_KEYS = ("name", "item", "ingredient")


def load_object(text: str) -> Optional[dict]:
    """json.loads that only accepts a top-level object."""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    return data


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and math.isfinite(value)


def _whole_number(value: Any, minimum: int) -> Optional[int]:
    if not _is_number(value):
        return None
    n = int(round(value))
    return n if n >= minimum else None


def _text_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if _is_number(value):
        return f"{value:g}" if isinstance(value, float) else str(value)
    return ""


def _format_ingredient(entry: Any) -> Optional[Ingredient]:
    if isinstance(entry, str):
        return Ingredient(name=entry)
    if _is_number(entry):
        return Ingredient(name=_text_value(entry))
    if not isinstance(entry, dict):
        return None

    # Objects without a text name keep their slot; numeric names are stringified
    name = next(
        (entry[k] for k in _INGREDIENT_NAME_KEYS if isinstance(entry.get(k), str)),
        next((_text_value(entry[k]) for k in _INGREDIENT_NAME_KEYS if _is_number(entry.get(k))), ""),
    )
    return Ingredient(
        name=name,
        quantity=_text_value(entry.get("quantity")),
        unit=_text_value(entry.get("unit")),
    )


def _format_instruction(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        return entry
    if _is_number(entry):
        return _text_value(entry)
    if isinstance(entry, dict):
        for key in _INSTRUCTION_TEXT_KEYS:
            if isinstance(entry.get(key), str):
                return entry[key]
    return None


def format_recipe(data: dict) -> Recipe:
    """
    Coerce a parsed object into a Recipe, field by field.
    Bad fields get defaults; this never rejects the object as a whole.
    """
    title = data.get("title")
    description = data.get("description")
    ingredients = data.get("ingredients")
    instructions = data.get("instructions")
    unit_system = data.get("unitSystem")

    return Recipe(
        title=title if isinstance(title, str) else UNKNOWN_TITLE,
        description=description if isinstance(description, str) else "",
        ingredients=[
            ing for ing in (_format_ingredient(e) for e in ingredients) if ing is not None
        ] if isinstance(ingredients, list) else [],
        instructions=[
            step for step in (_format_instruction(e) for e in instructions) if step is not None
        ] if isinstance(instructions, list) else [],
        cooking_time=_whole_number(data.get("cookingTime"), 0),
        servings=_whole_number(data.get("servings"), 1),
        unit_system=UnitSystem(unit_system) if unit_system in ("metric", "imperial") else None,
    )


class DirectJsonParser(RecipeParser):
    """The reply is exactly a JSON object."""

    name = "direct"

    def parse(self, text: str) -> Optional[Recipe]:
        data = load_object(text)
        if data is None:
            return None
        return format_recipe(data)


class EmbeddedJsonParser(RecipeParser):
    """
    The object sits inside surrounding noise: a ```json fence, or prose
    before/after it. A fenced block wins over a bare braced span.
    """

    name = "embedded"

    def parse(self, text: str) -> Optional[Recipe]:
        match = _FENCED_OBJECT.search(text) or _BRACED_OBJECT.search(text)
        if not match:
            return None

        candidate = match.group(1) if match.re is _FENCED_OBJECT else match.group(0)
        logger.debug("Found JSON-like span of %d chars, attempting to parse", len(candidate))
        data = load_object(candidate)
        if data is None:
            return None
        return format_recipe(data)


class TrimmedJsonParser(RecipeParser):
    """Last structured attempt: whole reply, minus surrounding whitespace and BOM."""

    name = "trimmed"

    def parse(self, text: str) -> Optional[Recipe]:
        data = load_object(text.strip().lstrip("\ufeff").strip())
        if data is None:
            return None
        return format_recipe(data)
