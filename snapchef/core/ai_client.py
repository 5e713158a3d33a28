import logging
from typing import Optional
from datetime import datetime, timezone
from google import genai
from google.genai import types

from ..settings import settings
from .text import preview

logger = logging.getLogger("snapchef.ai")


class AIClient:
    _instance = None

    def __init__(self):
        self.api_key = settings.gemini_api_key
        self.mode = settings.ai_mode  # "gemini" or "mock"
        self.model = settings.gemini_vision_model
        self._client: Optional[genai.Client] = None
        self.last_error: Optional[str] = None
        self.last_error_at: Optional[datetime] = None

        if self.mode == "gemini" and settings.has_usable_key:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(settings.ai_timeout_seconds * 1000)),
            )

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def is_available(self) -> bool:
        return self.mode == "gemini" and self._client is not None

    def generate_from_image(
        self,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
        *,
        max_output_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> Optional[str]:
        """
        Send one image plus a text prompt and return the free-form reply.
        Returns None if AI is unavailable, the call fails, or the reply is empty.
        No retry is attempted here.
        """
        if not self.is_available():
            logger.warning("AI is not available (mode=%s), skipping generation", self.mode)
            return None

        model_id = model or self.model
        config = types.GenerateContentConfig(
            max_output_tokens=max_output_tokens or settings.ai_max_output_tokens,
            temperature=settings.ai_temperature if temperature is None else temperature,
        )

        try:
            logger.info(f"Generating recipe with model={model_id} image={len(image_bytes)}B mime={mime_type}")
            response = self._client.models.generate_content(
                model=model_id,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    prompt,
                ],
                config=config,
            )
            text = response.text if response is not None else None
        except Exception as e:
            self.last_error = f"{e.__class__.__name__}: {str(e)}"
            self.last_error_at = datetime.now(timezone.utc)
            logger.error(f"Gemini generation failed: {e}")
            return None

        if not text:
            self.last_error = "Empty response"
            self.last_error_at = datetime.now(timezone.utc)
            logger.warning("Gemini returned empty response")
            return None

        logger.info("Gemini raw response: %s", preview(text))
        return text

    def status(self) -> dict:
        return {
            "ai_mode": self.mode,
            "model": self.model,
            "available": self.is_available(),
            "has_api_key": settings.has_usable_key,
            "demo_mode": settings.demo_mode,
            "last_error": self.last_error,
            "last_error_at": self.last_error_at,
        }


# Singleton instance access
ai_client = AIClient.get_instance()
