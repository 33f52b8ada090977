"""
Profile Enhancer

Модули:
- enhancement: кодирование фото, инструкция для модели, клиент Gemini
- service: FastAPI приложение со страницей загрузки
"""

from .enhancement import EnhancementOptions, ImageGenerationClient, enhance_photo

__all__ = [
    "EnhancementOptions",
    "ImageGenerationClient",
    "enhance_photo",
]
