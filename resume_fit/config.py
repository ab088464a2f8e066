"""
Runtime configuration.

Settings are read from environment variables (a ``.env`` file is loaded
first when present) and validated into pydantic models. Components receive
a Settings object explicitly.
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from resume_fit.exceptions import ConfigurationError

DEFAULT_LLM_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_LLM_MODEL = "openai/gpt-5.1"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class LLMSettings(BaseModel):
    """Connection settings for the OpenAI-compatible completion endpoint."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_LLM_BASE_URL
    model: str = DEFAULT_LLM_MODEL
    referer: Optional[str] = None
    title: Optional[str] = None
    max_retries: int = Field(default=3, ge=1)


class ScraperSettings(BaseModel):
    """Headless browser settings for job page scraping (seconds)."""

    headless: bool = True
    navigation_timeout: float = Field(default=30.0, gt=0)
    selector_timeout: float = Field(default=2.5, ge=0)
    settle_delay: float = Field(default=1.2, ge=0)


class Settings(BaseModel):
    """Top-level application settings."""

    log_level: str = "INFO"
    entity_fallback: bool = True
    max_upload_bytes: int = Field(default=DEFAULT_MAX_UPLOAD_BYTES, gt=0)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    scraper: ScraperSettings = Field(default_factory=ScraperSettings)


# * Environment variable -> (section, field)
ENV_MAPPING = {
    "RESUME_FIT_LOG_LEVEL": (None, "log_level"),
    "RESUME_FIT_ENTITY_FALLBACK": (None, "entity_fallback"),
    "RESUME_FIT_MAX_UPLOAD_BYTES": (None, "max_upload_bytes"),
    "OPENAI_API_KEY": ("llm", "api_key"),
    "OPENROUTER_API_KEY": ("llm", "api_key"),
    "OPENROUTER_BASE_URL": ("llm", "base_url"),
    "OPENROUTER_MODEL": ("llm", "model"),
    "OPENROUTER_REFERER": ("llm", "referer"),
    "OPENROUTER_TITLE": ("llm", "title"),
    "RESUME_FIT_LLM_MAX_RETRIES": ("llm", "max_retries"),
    "SCRAPER_HEADLESS": ("scraper", "headless"),
    "SCRAPER_NAVIGATION_TIMEOUT": ("scraper", "navigation_timeout"),
    "SCRAPER_SELECTOR_TIMEOUT": ("scraper", "selector_timeout"),
    "SCRAPER_SETTLE_DELAY": ("scraper", "settle_delay"),
}


def load_settings(environ: Optional[dict] = None, use_dotenv: bool = True) -> Settings:
    """
    Build settings from environment variables.

    Later entries in ENV_MAPPING win, so OPENROUTER_API_KEY takes precedence
    over OPENAI_API_KEY.

    Args:
        environ: Mapping to read instead of os.environ.
        use_dotenv: Whether to load a .env file first.

    Returns:
        Validated Settings.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    if use_dotenv:
        load_dotenv()

    env = os.environ if environ is None else environ
    data: dict = {"llm": {}, "scraper": {}}

    for variable, (section, field) in ENV_MAPPING.items():
        value = env.get(variable)
        if value is None or value == "":
            continue

        target = data[section] if section else data
        target[field] = value

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    return load_settings()
