import logging
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ..errors import GenerationFailed, RecipeGenerationError
from ..schemas import GenerateRecipeRequest, GenerateRecipeResponse, Recipe
from ..services.recipe_service import decode_image_payload, recipe_service
from ..services.recipe_text import format_recipe_text

logger = logging.getLogger("snapchef.recipes")

router = APIRouter()


@router.post(
    "/generate-recipe",
    response_model=GenerateRecipeResponse,
    response_model_exclude_none=True,
)
def generate_recipe(payload: GenerateRecipeRequest):
    """
    Generate a recipe from a food photo.
    Errors come back as {success: false, error} via the app's exception handler.
    """
    image_bytes, mime_type = decode_image_payload(payload.image)

    try:
        recipe = recipe_service.generate_recipe(
            image_bytes,
            unit_system=payload.unit_system,
            mime_type=mime_type,
        )
    except RecipeGenerationError:
        raise
    except Exception as e:
        logger.exception("Recipe generation error")
        raise GenerationFailed() from e

    return GenerateRecipeResponse(success=True, recipe=recipe)


@router.post("/recipes/export", response_class=PlainTextResponse)
def export_recipe(recipe: Recipe):
    """Render a recipe as plain text for copying or sharing."""
    return format_recipe_text(recipe)
