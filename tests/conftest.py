import base64
import io
import os

# Settings are read at import time; pin them before the app loads.
os.environ["AI_MODE"] = "gemini"
os.environ.pop("GEMINI_API_KEY", None)
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from PIL import Image

from snapchef.main import app
from snapchef.settings import settings
from snapchef.services.recipe_service import recipe_service


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (2, 2), color=(200, 120, 40)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_b64(png_bytes):
    return base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def demo_mode(monkeypatch):
    """No credential configured."""
    monkeypatch.setattr(settings, "gemini_api_key", None)
    monkeypatch.setattr(recipe_service, "mode", "gemini")


@pytest.fixture
def live_ai(monkeypatch):
    """Real-looking credential, with the Gemini client replaced by a mock."""
    monkeypatch.setattr(settings, "gemini_api_key", "test-key-123")
    monkeypatch.setattr(recipe_service, "mode", "gemini")
    with patch("snapchef.services.recipe_service.ai_client") as mock_client:
        yield mock_client
