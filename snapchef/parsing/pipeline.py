import logging
from typing import Optional, Sequence

from ..core.text import preview
from ..schemas import Recipe
from .parser import RecipeParser
from .json_parsers import DirectJsonParser, EmbeddedJsonParser, TrimmedJsonParser
from .rule_based_parser import RuleBasedParser

logger = logging.getLogger("snapchef.parsing")


class RecoveryPipeline:
    """
    Ordered fallback chain: structured parsers are tried first, and the
    first one that returns a Recipe wins. The rule-based parser is the
    terminal step and always produces something.
    """

    def __init__(
        self,
        parsers: Optional[Sequence[RecipeParser]] = None,
        fallback: Optional[RuleBasedParser] = None,
    ):
        self.parsers = list(parsers) if parsers is not None else [
            DirectJsonParser(),
            EmbeddedJsonParser(),
            TrimmedJsonParser(),
        ]
        self.fallback = fallback or RuleBasedParser()

    def run(self, text: Optional[str]) -> Recipe:
        text = text if isinstance(text, str) else ""
        logger.info("Parsing content: %s", preview(text))

        for parser in self.parsers:
            try:
                recipe = parser.parse(text)
            except Exception as e:
                logger.warning(f"{parser.name} parser raised, moving on: {e}")
                continue
            if recipe is not None:
                logger.info(f"Recovered recipe via {parser.name} parser")
                return recipe
            logger.info(f"{parser.name} parser found no JSON object, trying next strategy")

        logger.info("All JSON parsing failed, extracting from text")
        return self.fallback.parse(text)


_default_pipeline = RecoveryPipeline()


def recover_recipe(text: Optional[str]) -> Recipe:
    """Turn any model reply into a usable Recipe. Never raises."""
    return _default_pipeline.run(text)
