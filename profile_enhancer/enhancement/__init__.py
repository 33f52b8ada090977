"""
Enhancement module - улучшение фотографий профиля через Gemini.

Модуль предоставляет:
- Кодирование загруженных файлов в base64
- Сборку инструкции для модели по опциям пользователя
- Клиент Gemini generateContent с классификацией ошибок
"""

from .encoder import file_to_base64, strip_data_uri_prefix, to_data_uri
from .errors import (
    EncodingError,
    EnhancementError,
    EnhancementFailedError,
    InvalidAPIKeyError,
    NoCandidatesError,
    NoImageError,
    UnsupportedFileError,
)
from .image_client import ImageGenerationClient
from .prompt import BackgroundStyle, EnhancementOptions, build_instruction
from .service import enhance_photo

__all__ = [
    # Service
    "enhance_photo",
    # Clients
    "ImageGenerationClient",
    # Encoding
    "file_to_base64",
    "strip_data_uri_prefix",
    "to_data_uri",
    # Instruction
    "BackgroundStyle",
    "EnhancementOptions",
    "build_instruction",
    # Errors
    "EnhancementError",
    "EncodingError",
    "NoCandidatesError",
    "NoImageError",
    "InvalidAPIKeyError",
    "EnhancementFailedError",
    "UnsupportedFileError",
]
