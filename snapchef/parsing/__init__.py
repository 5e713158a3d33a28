from .parser import RecipeParser
from .json_parsers import DirectJsonParser, EmbeddedJsonParser, TrimmedJsonParser, format_recipe
from .rule_based_parser import RuleBasedParser
from .pipeline import RecoveryPipeline, recover_recipe

__all__ = [
    "RecipeParser",
    "DirectJsonParser",
    "EmbeddedJsonParser",
    "TrimmedJsonParser",
    "RuleBasedParser",
    "RecoveryPipeline",
    "format_recipe",
    "recover_recipe",
]
