"""
Settings for the letter gateway, the document workspace and PDF export.
Values come from the environment, then .env, then the defaults below.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# Directory holding the bundled letter template catalog
DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """
    Every field can be overridden by an environment variable of the same
    name, for example:
        export GEMINI_API_KEY=your-google-ai-studio-key
        export STORAGE_DIR=/var/lib/lettercraft
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Title of the OpenAPI docs
    APP_NAME: str = "LetterCraft"

    # DEBUG: Enable debug mode (more verbose logging)
    DEBUG: bool = False

    # CORS_ORIGINS: Origins allowed to call the API from a browser
    CORS_ORIGINS: List[str] = ["*"]

    # ---------------------------------------------------------------------------
    # AI/LLM PROVIDER SETTINGS
    # ---------------------------------------------------------------------------
    # GEMINI_API_KEY: Google's Gemini API key used by the letter gateway
    # - Without it every generation fails with an "API key missing" error
    GEMINI_API_KEY: str = ""

    # GEMINI_MODEL: Model used for letter generation
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # AI_REQUEST_TIMEOUT: Seconds before a Gemini call is abandoned
    AI_REQUEST_TIMEOUT: int = 30

    # ---------------------------------------------------------------------------
    # LETTER TEMPLATES
    # ---------------------------------------------------------------------------
    # TEMPLATES_PATH: JSON file with the static template catalog
    # - Loaded once per process, read-only afterwards
    TEMPLATES_PATH: Path = DATA_DIR / "letter_templates.json"

    # ---------------------------------------------------------------------------
    # DOCUMENT WORKSPACE
    # ---------------------------------------------------------------------------
    # HISTORY_LIMIT: Number of recent generations kept in history
    HISTORY_LIMIT: int = 5

    # STORAGE_DIR: Where JsonFileStorage keeps one JSON document per key
    STORAGE_DIR: Path = Path(".lettercraft")

    # LETTER_API_URL: Base URL the workspace client uses to reach the gateway
    LETTER_API_URL: str = "http://localhost:8000"

    # ---------------------------------------------------------------------------
    # PDF EXPORT
    # ---------------------------------------------------------------------------
    # The fragment is rendered this many CSS pixels wide, then scaled
    PDF_RENDER_WIDTH: int = 800
    PDF_RENDER_SCALE: int = 2


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from lettercraft.core.config import settings
settings = Settings()
