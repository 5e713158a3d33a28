# SnapChef API Main Entry Point
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .errors import RecipeGenerationError
from .settings import settings
from .routers.ready import router as ready_router
from .routers.ai import router as ai_router
from .routers.recipes import router as recipes_router
from .routers.units import router as units_router

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("snapchef")

RATE_LIMITED_MESSAGE = "Too many requests. Please wait a moment and try again."
INVALID_REQUEST_MESSAGE = "Invalid request body"


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    # slowapi calls this synchronously from its middleware
    response = _rate_limit_exceeded_handler(request, exc)
    logger.warning(f"Rate limit exceeded on {request.url.path}: {exc.detail}")
    headers = {
        k: v for k, v in response.headers.items()
        if k.lower().startswith(("x-ratelimit", "retry-after"))
    }
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": RATE_LIMITED_MESSAGE},
        headers=headers,
    )


# Rate limiter (per-IP)
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)

app = FastAPI(title="SnapChef API", version="0.1.0")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RecipeGenerationError)
async def recipe_generation_error_handler(request: Request, exc: RecipeGenerationError):
    logger.warning(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"success": False, "error": INVALID_REQUEST_MESSAGE},
    )


app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(ai_router, prefix="/api", tags=["ai"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
app.include_router(units_router, prefix="/api/units", tags=["units"])

if settings.demo_mode:
    logger.info("No usable Gemini API key (or AI_MODE=mock): serving sample recipes")
