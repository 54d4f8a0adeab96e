"""
Loads and handles config from config.yml
Secrets (OPENAI_API_KEY, BOT_TOKEN, ADMIN_KEY, ...) are loaded from .env
"""
import logging
import os
from typing import List, Dict, Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from core.sources import DEFAULT_SOURCES, SourceTable

logger = logging.getLogger(__name__)


class CacheWindow(BaseModel):
    """Shared-cache freshness and stale-while-revalidate grace, in seconds."""
    max_age: int
    stale_while_revalidate: int = 60


class CacheConfig(BaseModel):
    feed: CacheWindow = CacheWindow(max_age=120, stale_while_revalidate=60)
    breaking: CacheWindow = CacheWindow(max_age=90, stale_while_revalidate=60)
    quotes: CacheWindow = CacheWindow(max_age=300, stale_while_revalidate=120)
    studio: CacheWindow = CacheWindow(max_age=30, stale_while_revalidate=30)


class Config(BaseModel):
    # Ollama
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.1:8b"
    OLLAMA_VISION_MODEL: str = "llava:7b"
    LLM_TEMPERATURE: float = 0.2
    LLM_TIMEOUT: float = 60.0

    # Speech
    OPENAI_API_KEY: Optional[str] = None
    TTS_MODEL: str = "gpt-4o-mini-tts"
    TTS_VOICE: str = "alloy"

    # Telegram
    BOT_TOKEN: Optional[str] = None
    TELEGRAM_NOTIFY_CHAT_ID: Optional[str] = None

    # Shared secret for the webhook and admin endpoints
    ADMIN_KEY: Optional[str] = None

    # Feeds
    FETCH_TIMEOUT: float = 12.0
    MAX_FEED_ENTRIES: int = 10
    BREAKING_TOP_K: int = 5
    STUDIO_CAPACITY: int = 50
    sources: Dict[str, List[str]] = Field(default_factory=lambda: dict(DEFAULT_SOURCES))

    # Web
    CORS_ORIGIN: str = "*"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024
    cache: CacheConfig = CacheConfig()

    def source_table(self) -> SourceTable:
        return SourceTable(self.sources)


def _get_config_path() -> Optional[str]:
    """Get the path to config.yml, handling different working directories."""
    explicit = os.getenv("NEWSDESK_CONFIG")
    if explicit:
        return explicit

    if os.path.exists('resources/config.yml'):
        return 'resources/config.yml'

    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    config_path = os.path.join(project_root, 'resources', 'config.yml')
    if os.path.exists(config_path):
        return config_path

    return None


def _env(name: str, fallback: Any = None) -> Any:
    value = os.getenv(name)
    return value if value else fallback


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from config.yml and secrets from .env."""
    load_dotenv()

    config_path = path or _get_config_path()
    data: Dict[str, Any] = {}

    if config_path:
        with open(config_path, 'r', encoding='utf-8') as file:
            data = yaml.safe_load(file) or {}
    else:
        logger.warning("No config.yml found, using built-in defaults")

    data["OLLAMA_BASE_URL"] = _env("OLLAMA_BASE_URL", data.get("OLLAMA_BASE_URL", "http://localhost:11434"))
    data["OPENAI_API_KEY"] = _env("OPENAI_API_KEY")
    data["BOT_TOKEN"] = _env("BOT_TOKEN")
    data["ADMIN_KEY"] = _env("ADMIN_KEY")
    data["TELEGRAM_NOTIFY_CHAT_ID"] = _env("TELEGRAM_NOTIFY_CHAT_ID", data.get("TELEGRAM_NOTIFY_CHAT_ID"))

    if not data.get("sources"):
        data.pop("sources", None)

    config = Config(**data)
    # Fail at startup on a broken source table rather than on first request
    config.source_table()
    return config
