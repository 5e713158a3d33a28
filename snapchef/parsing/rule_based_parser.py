import re
import logging
from typing import List, Optional

from ..core.text import clean_md, strip_list_marker
from ..schemas import Ingredient, Recipe
from .parser import RecipeParser

logger = logging.getLogger("snapchef.parsing")

DEFAULT_TITLE = "Recipe from Image"
DEFAULT_DESCRIPTION = "Recipe generated from image analysis"
MISSING_INGREDIENT = Ingredient(
    name="Ingredients could not be extracted from the image",
    quantity="1",
    unit="",
)
MISSING_INSTRUCTION = (
    "Instructions could not be extracted. Please refer to the original AI response "
    "or try uploading a clearer image."
)

_TITLE_LABEL = re.compile(r"(?:Recipe|Title|Dish)\s*:\s*(.+)", re.IGNORECASE)

# Heading line: optional markdown decoration, the keyword, an optional
# "(serves 4)" aside, then a colon or end of line.
_HEADING_TAIL = r"(?:\s*\([^)\n]*\))?[*_ \t]*(?::[*_]*|$)"
_INGREDIENT_HEADING = re.compile(
    r"^[ \t#*_>-]*ingredients?" + _HEADING_TAIL, re.IGNORECASE | re.MULTILINE
)
_INSTRUCTION_HEADING = re.compile(
    r"^[ \t#*_>-]*(?:instructions?|directions?|steps?|method)" + _HEADING_TAIL,
    re.IGNORECASE | re.MULTILINE,
)

# "1 1/2", "2", "0.5", "1/2", "½", "1½"
_QTY = r"\d+\s+\d+/\d+|\d+(?:[./]\d+)?|\d*[½¼¾⅓⅔⅛]"
# quantity, optional bare unit word, then the name
_INGREDIENT_LINE = re.compile(rf"^({_QTY})\s*(?:([A-Za-z]+)\.?)?\s+(.+)$")
_BULLETED = re.compile(r"^(?:[-•*+]|\d{1,3}[.)])(?=\s)")

_MIN_INSTRUCTION_LEN = 10
_MIN_SENTENCE_LEN = 20
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_MEASURED = re.compile(r"\d+\s*(?:cup|tablespoon|teaspoon|pound|ounce|gram)", re.IGNORECASE)
_COOKING_VERB = re.compile(r"\b(?:heat|cook|bake|mix|stir|add|combine)", re.IGNORECASE)


class RuleBasedParser(RecipeParser):
    """
    Mines a recipe out of prose when no JSON could be found.
    Always returns a Recipe; empty sections get one explanatory placeholder.
    """

    name = "heuristic"

    def parse(self, text: str) -> Recipe:
        text = text or ""

        title = self._extract_title(text)
        ingredients = self._extract_ingredients(text)
        instructions = self._extract_instructions(text)

        if not ingredients and not instructions:
            ingredients, instructions = self._classify_sentences(text)

        if not ingredients:
            ingredients = [MISSING_INGREDIENT.model_copy()]
        if not instructions:
            instructions = [MISSING_INSTRUCTION]

        return Recipe(
            title=title,
            description=DEFAULT_DESCRIPTION,
            ingredients=ingredients,
            instructions=instructions,
        )

    def _extract_title(self, text: str) -> str:
        labeled = _TITLE_LABEL.search(text)
        if labeled:
            title = self._clean_title(labeled.group(1))
            if title:
                return title

        for line in text.splitlines():
            if line.strip().startswith("```"):
                continue
            title = self._clean_title(line)
            if title:
                return title
        return DEFAULT_TITLE

    def _clean_title(self, raw: str) -> str:
        return clean_md(raw).strip("*#_ \t").strip()[:200]

    def _ingredient_span(self, text: str) -> Optional[str]:
        heading = _INGREDIENT_HEADING.search(text)
        if not heading:
            return None
        end = _INSTRUCTION_HEADING.search(text, heading.end())
        return text[heading.end():end.start() if end else len(text)]

    def _instruction_span(self, text: str) -> Optional[str]:
        heading = _INSTRUCTION_HEADING.search(text)
        if not heading:
            return None
        return text[heading.end():]

    def _extract_ingredients(self, text: str) -> List[Ingredient]:
        span = self._ingredient_span(text)
        if span is None:
            return []

        ingredients = []
        for line in span.splitlines():
            line = line.strip()
            if not line:
                continue
            # Bare lines with a colon are sub-headings ("For the sauce:")
            if ":" in line and not _BULLETED.match(line):
                continue

            cleaned = clean_md(strip_list_marker(line))
            if cleaned:
                ingredients.append(self._split_ingredient(cleaned))
        return ingredients

    def _split_ingredient(self, line: str) -> Ingredient:
        match = _INGREDIENT_LINE.match(line)
        if not match:
            return Ingredient(name=line, quantity="1", unit="")

        qty, unit, name = match.groups()
        return Ingredient(name=name.strip(), quantity=qty, unit=unit or "")

    def _extract_instructions(self, text: str) -> List[str]:
        span = self._instruction_span(text)
        if span is None:
            return []

        steps = []
        for line in span.splitlines():
            cleaned = clean_md(strip_list_marker(line.strip()))
            if len(cleaned) > _MIN_INSTRUCTION_LEN:
                steps.append(cleaned)
        return steps

    def _classify_sentences(self, text: str) -> tuple[List[Ingredient], List[str]]:
        ingredients: List[Ingredient] = []
        instructions: List[str] = []

        for sentence in _SENTENCE_SPLIT.split(text):
            sentence = sentence.strip()
            if len(sentence) <= _MIN_SENTENCE_LEN:
                continue
            if "ingredient" in sentence.lower() or _MEASURED.search(sentence):
                ingredients.append(Ingredient(name=sentence, quantity="1", unit=""))
            elif _COOKING_VERB.search(sentence):
                instructions.append(sentence)

        if ingredients or instructions:
            logger.debug(
                "Sentence fallback found %d ingredient(s), %d instruction(s)",
                len(ingredients), len(instructions),
            )
        return ingredients, instructions
