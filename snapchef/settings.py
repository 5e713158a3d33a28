import re
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.text import normalize_model_id

# Template values people leave in .env files
_PLACEHOLDER_KEY_PATTERNS = [
    re.compile(r"^your[_\-\s].*", re.IGNORECASE),
    re.compile(r".*_here$", re.IGNORECASE),
    re.compile(r"^<.*>$"),
    re.compile(r"^x{3,}$", re.IGNORECASE),
    re.compile(r"^(changeme|placeholder|none|null|todo)$", re.IGNORECASE),
]


def is_placeholder_key(value: Optional[str]) -> bool:
    """True when the credential is missing or obviously a template value."""
    if value is None:
        return True
    s = value.strip()
    if not s:
        return True
    return any(p.match(s) for p in _PLACEHOLDER_KEY_PATTERNS)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # AI
    ai_mode: str = "gemini"  # "gemini" or "mock"
    gemini_api_key: Optional[str] = None
    gemini_vision_model: str = "gemini-2.5-flash"
    ai_max_output_tokens: int = 1500
    ai_temperature: float = 0.3
    ai_timeout_seconds: float = 60.0

    # Rate limit (per-IP)
    rate_limit: str = "30/minute"
    rate_limit_enabled: bool = True

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost",
        "http://127.0.0.1",
    ]

    @field_validator("gemini_vision_model")
    @classmethod
    def _clean_model(cls, v: str) -> str:
        return normalize_model_id(v)

    @property
    def has_usable_key(self) -> bool:
        return not is_placeholder_key(self.gemini_api_key)

    @property
    def demo_mode(self) -> bool:
        return self.ai_mode.lower() == "mock" or not self.has_usable_key


settings = Settings()
