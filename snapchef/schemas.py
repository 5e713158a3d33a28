"""Pydantic schemas for the SnapChef API.

Request/response models for:
- Recipes (ingredients, ordered instructions)
- Recipe generation requests and the success/error envelope
- Unit system preferences
"""

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def coerce(cls, value: Any) -> "UnitSystem":
        """Unrecognized or missing preferences fall back to imperial."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == cls.METRIC.value:
            return cls.METRIC
        return cls.IMPERIAL


# --- Recipe ---

class Ingredient(BaseModel):
    name: str
    quantity: str = ""
    unit: str = ""


class Recipe(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = "Unknown Dish"
    description: Optional[str] = None
    ingredients: list[Ingredient] = []
    instructions: list[str] = []
    cooking_time: Optional[int] = Field(None, alias="cookingTime", ge=0)
    servings: Optional[int] = Field(None, gt=0)
    unit_system: Optional[UnitSystem] = Field(None, alias="unitSystem")


# --- Generate ---

class GenerateRecipeRequest(BaseModel):
    image: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("image", "imageBase64"),
        description="Base64 image data, optionally as a data: URL",
    )
    unit_system: UnitSystem = Field(
        UnitSystem.IMPERIAL,
        validation_alias=AliasChoices("unitSystem", "unit_system"),
    )

    @field_validator("unit_system", mode="before")
    @classmethod
    def _default_unit_system(cls, v):
        return UnitSystem.coerce(v)


class GenerateRecipeResponse(BaseModel):
    success: bool
    recipe: Optional[Recipe] = None
    error: Optional[str] = None


# --- Units ---

class UnitSystemOut(BaseModel):
    system: UnitSystem
    label: str
    description: str
