import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Загружаем переменные окружения только если .env файл существует
# В Docker переменные окружения уже установлены
env_file = os.path.join(os.path.dirname(__file__), '..', '..', '.env')
if os.path.exists(env_file):
    load_dotenv(env_file, override=False)
else:
    # Пробуем загрузить из текущей директории (для локального запуска)
    load_dotenv(override=False)


@dataclass
class AppConfig:
    """Application configuration"""

    # Gemini
    api_key: str = ""
    model: str = "gemini-2.5-flash-image-preview"
    base_url: str = "https://generativelanguage.googleapis.com"
    # None means no client-side timeout
    timeout: Optional[float] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Settings
    log_level: str = "INFO"
    debug: bool = False

    def __post_init__(self):
        """Missing key is not fatal: it surfaces as an auth error on the first request."""
        if not self.api_key:
            logger.warning("API_KEY environment variable not set. The application may not work correctly.")


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if not value or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        logger.error(f"Invalid IMAGE_GEN_TIMEOUT '{value}', running without a timeout.")
        return None


def _parse_port(value: Optional[str]) -> int:
    try:
        return int(value or "8000")
    except ValueError:
        logger.error(f"Invalid port '{value}', using default 8000.")
        return 8000


def load_config() -> AppConfig:
    """Load configuration from environment variables"""
    api_key = (os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY") or "").strip()
    return AppConfig(
        api_key=api_key,
        model=os.getenv("IMAGE_GEN_MODEL") or "gemini-2.5-flash-image-preview",
        base_url=os.getenv("IMAGE_GEN_BASE_URL") or "https://generativelanguage.googleapis.com",
        timeout=_parse_timeout(os.getenv("IMAGE_GEN_TIMEOUT")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_parse_port(os.getenv("PORT")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        debug=os.getenv("DEBUG", "false").lower() == "true",
    )
