import pytest
from unittest.mock import patch

from snapchef.errors import GenerationFailed, InvalidInput
from snapchef.parsing.rule_based_parser import DEFAULT_TITLE, MISSING_INGREDIENT, MISSING_INSTRUCTION
from snapchef.schemas import UnitSystem
from snapchef.services.recipe_service import (
    RecipeService,
    decode_image_payload,
    detect_mime_type,
)
from snapchef.settings import settings

OMELETTE = '{"title":"Omelette","ingredients":[{"name":"egg","quantity":"2","unit":""}],"instructions":["Beat eggs","Cook in pan"]}'


@pytest.fixture
def service(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "test-key-123")
    service = RecipeService()
    service.mode = "gemini"
    return service


def test_empty_image_is_rejected_without_calling_ai(service):
    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        with pytest.raises(InvalidInput):
            service.generate_recipe(b"")
        with pytest.raises(InvalidInput):
            service.generate_recipe(None)

        mock_client.generate_from_image.assert_not_called()


def test_missing_key_returns_sample_recipe(service, monkeypatch, png_bytes):
    monkeypatch.setattr(settings, "gemini_api_key", None)

    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        recipe = service.generate_recipe(png_bytes, UnitSystem.METRIC)

        mock_client.generate_from_image.assert_not_called()

    assert "Sample" in recipe.title
    assert any("API key" in step for step in recipe.instructions)
    assert recipe.unit_system == UnitSystem.METRIC


def test_placeholder_key_returns_sample_recipe(service, monkeypatch, png_bytes):
    monkeypatch.setattr(settings, "gemini_api_key", "your_gemini_api_key_here")

    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        recipe = service.generate_recipe(png_bytes)

        mock_client.generate_from_image.assert_not_called()

    assert "Sample" in recipe.title
    assert recipe.unit_system == UnitSystem.IMPERIAL


def test_mock_mode_forces_sample_recipe(service, png_bytes):
    service.mode = "mock"

    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        recipe = service.generate_recipe(png_bytes)

        mock_client.generate_from_image.assert_not_called()

    assert "Sample" in recipe.title


def test_single_call_with_prompt_and_sampling_settings(service, png_bytes):
    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        mock_client.generate_from_image.return_value = OMELETTE

        recipe = service.generate_recipe(png_bytes, UnitSystem.METRIC)

        mock_client.generate_from_image.assert_called_once()
        args, kwargs = mock_client.generate_from_image.call_args

    image, mime_type, prompt = args
    assert image == png_bytes
    assert mime_type == "image/png"
    assert "METRIC" in prompt
    assert kwargs["temperature"] == settings.ai_temperature
    assert kwargs["max_output_tokens"] == settings.ai_max_output_tokens

    assert recipe.title == "Omelette"
    assert recipe.instructions == ["Beat eggs", "Cook in pan"]
    assert recipe.unit_system == UnitSystem.METRIC


def test_explicit_mime_type_wins(service, png_bytes):
    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        mock_client.generate_from_image.return_value = OMELETTE
        service.generate_recipe(png_bytes, mime_type="image/webp")

        assert mock_client.generate_from_image.call_args.args[1] == "image/webp"


def test_unknown_unit_system_defaults_to_imperial(service, png_bytes):
    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        mock_client.generate_from_image.return_value = OMELETTE
        recipe = service.generate_recipe(png_bytes, "kelvin")

        prompt = mock_client.generate_from_image.call_args.args[2]

    assert "IMPERIAL" in prompt
    assert recipe.unit_system == UnitSystem.IMPERIAL


def test_failed_call_raises_generation_failed(service, png_bytes):
    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        mock_client.generate_from_image.return_value = None

        with pytest.raises(GenerationFailed):
            service.generate_recipe(png_bytes)

        # no retry at this layer
        assert mock_client.generate_from_image.call_count == 1


def test_prose_reply_is_recovered_not_failed(service, png_bytes):
    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        mock_client.generate_from_image.return_value = "I think this is a lovely plate of food."

        recipe = service.generate_recipe(png_bytes)

    assert len(recipe.ingredients) == 1
    assert len(recipe.instructions) == 1
    assert "clearer image" in recipe.instructions[0]


def test_whitespace_reply_gets_placeholder_recipe(service, png_bytes):
    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        mock_client.generate_from_image.return_value = "  \n"

        recipe = service.generate_recipe(png_bytes)

    assert recipe.title == DEFAULT_TITLE
    assert recipe.ingredients == [MISSING_INGREDIENT]
    assert recipe.instructions == [MISSING_INSTRUCTION]
    assert recipe.unit_system == UnitSystem.IMPERIAL


def test_decode_image_payload(png_bytes, png_b64):
    assert decode_image_payload(png_b64) == (png_bytes, None)
    assert decode_image_payload(f"data:image/png;base64,{png_b64}") == (png_bytes, "image/png")

    wrapped = "\n".join(png_b64[i:i + 20] for i in range(0, len(png_b64), 20))
    assert decode_image_payload(wrapped)[0] == png_bytes


@pytest.mark.parametrize("payload", [None, "", "   ", "not base64!!", "data:image/png;base64,"])
def test_decode_image_payload_rejects_bad_input(payload):
    with pytest.raises(InvalidInput):
        decode_image_payload(payload)


def test_detect_mime_type(png_bytes):
    assert detect_mime_type(png_bytes) == "image/png"
    assert detect_mime_type(b"definitely not an image") == "image/jpeg"
