from abc import ABC, abstractmethod
from typing import Optional

from ..schemas import Recipe


class RecipeParser(ABC):
    """One strategy in the recovery chain."""

    name: str = "parser"

    @abstractmethod
    def parse(self, text: str) -> Optional[Recipe]:
        """Return a Recipe, or None when this strategy does not apply."""
        pass
