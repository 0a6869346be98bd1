"""
Runtime configuration.

Values come from environment variables, optionally loaded from a ``.env`` file.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_LLM_BASE_URL = "https://api.avalai.ir/v1"
DEFAULT_MODEL = "gpt-4o"


class Settings(BaseModel):
    """Settings shared by the backend and the request orchestrator."""

    api_key: Optional[str] = None
    llm_base_url: str = DEFAULT_LLM_BASE_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = 1500
    api_url: Optional[str] = None
    api_token: Optional[str] = None
    request_timeout: float = 60.0


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Build settings from the environment.

    ``AVALAI_API_KEY`` takes precedence over ``OPENAI_API_KEY``. When
    ``PILLCHAT_API_URL`` is unset the app talks to its own backend in-process.
    """
    load_dotenv(dotenv_path)
    values = {
        "api_key": os.getenv("AVALAI_API_KEY") or os.getenv("OPENAI_API_KEY"),
        "llm_base_url": os.getenv("PILLCHAT_LLM_BASE_URL"),
        "model": os.getenv("PILLCHAT_MODEL"),
        "max_tokens": os.getenv("PILLCHAT_MAX_TOKENS"),
        "api_url": os.getenv("PILLCHAT_API_URL"),
        "api_token": os.getenv("PILLCHAT_API_TOKEN"),
        "request_timeout": os.getenv("PILLCHAT_REQUEST_TIMEOUT"),
    }
    return Settings(**{key: value for key, value in values.items() if value})
