"""
Main application entry point - FastAPI app instance and configuration.
Run with: uvicorn lettercraft.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lettercraft.core.config import settings
from lettercraft.core.exceptions import InvalidRequestError, LetterError
from lettercraft.routers import letters

logger = logging.getLogger("lettercraft")
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
# Swagger UI at /docs, ReDoc at /redoc
app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# The editor front-end is served from a different origin than the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# ERROR HANDLERS
# ---------------------------------------------------------------------------
# Every error leaves the API as {"error": message}

@app.exception_handler(LetterError)
async def letter_error_handler(request: Request, exc: LetterError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.method} {request.url.path} invalid body: {exc.errors()}")
    error = InvalidRequestError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# letters.router: /api/generate-letter, /api/generate-section, /api/templates,
#                 /api/export-pdf, /api/stats
app.include_router(letters.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Does NOT call the Gemini API.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
