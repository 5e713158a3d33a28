import base64
import binascii
import io
import logging
import re
from typing import Optional

from PIL import Image

from ..core.ai_client import ai_client
from ..errors import GenerationFailed, InvalidInput
from ..parsing import recover_recipe
from ..schemas import Ingredient, Recipe, UnitSystem
from ..settings import settings
from .prompts import build_recipe_prompt

logger = logging.getLogger("snapchef.recipes")

DEFAULT_MIME_TYPE = "image/jpeg"
_PIL_MIME_TYPES = {"JPEG": "image/jpeg", "PNG": "image/png", "WEBP": "image/webp"}
_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?,", re.IGNORECASE)


def decode_image_payload(payload: Optional[str]) -> tuple[bytes, Optional[str]]:
    """
    Decode base64 image text, with or without a data: URL prefix.
    Returns (bytes, mime type from the prefix if any).
    """
    if not payload or not payload.strip():
        raise InvalidInput()

    data = payload.strip()
    mime_type = None
    prefix = _DATA_URL.match(data)
    if prefix:
        mime_type = prefix.group("mime")
        data = data[prefix.end():]

    try:
        image_bytes = base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError):
        raise InvalidInput("Invalid image data")

    if not image_bytes:
        raise InvalidInput()
    return image_bytes, mime_type


def detect_mime_type(image_bytes: bytes) -> str:
    """Sniff JPEG/PNG/WebP; anything else is sent as JPEG."""
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            fmt = img.format
    except Exception as e:
        logger.debug(f"Could not identify image format: {e}")
        return DEFAULT_MIME_TYPE
    return _PIL_MIME_TYPES.get(fmt or "", DEFAULT_MIME_TYPE)


def sample_recipe(unit_system: UnitSystem = UnitSystem.IMPERIAL) -> Recipe:
    """Fixed payload returned when no real credential is configured."""
    return Recipe(
        title="Sample Recipe (API Key Required)",
        description=(
            "This is a sample recipe. Please configure your Gemini API key in .env "
            "to generate real recipes from images."
        ),
        ingredients=[
            Ingredient(name="Sample ingredient 1", quantity="1", unit="cup"),
            Ingredient(name="Sample ingredient 2", quantity="2", unit="tablespoons"),
            Ingredient(name="Sample ingredient 3", quantity="1", unit="piece"),
        ],
        instructions=[
            "Configure your Gemini API key (GEMINI_API_KEY) in the .env file",
            'Replace "your_gemini_api_key_here" with your actual API key',
            "Restart the server",
            "Upload an image to generate a real recipe",
        ],
        cooking_time=30,
        servings=4,
        unit_system=unit_system,
    )


class RecipeService:
    def __init__(self):
        self.mode = settings.ai_mode

    @property
    def demo_mode(self) -> bool:
        return self.mode == "mock" or not settings.has_usable_key

    def generate_recipe(
        self,
        image_bytes: Optional[bytes],
        unit_system: Optional[UnitSystem] = None,
        mime_type: Optional[str] = None,
    ) -> Recipe:
        """
        Turn one food photo into a Recipe.

        Raises InvalidInput for an empty image and GenerationFailed when the
        model call fails or comes back empty. Anything the model does return
        is recovered into a Recipe, however malformed.
        """
        if not image_bytes:
            raise InvalidInput()

        unit_system = UnitSystem.coerce(unit_system)

        if self.demo_mode:
            logger.info("API key not configured, returning sample recipe")
            return sample_recipe(unit_system)

        content = ai_client.generate_from_image(
            image_bytes,
            mime_type or detect_mime_type(image_bytes),
            build_recipe_prompt(unit_system),
            max_output_tokens=settings.ai_max_output_tokens,
            temperature=settings.ai_temperature,
        )
        if not content:
            raise GenerationFailed()

        recipe = recover_recipe(content)
        recipe.unit_system = unit_system
        return recipe


recipe_service = RecipeService()
