"""
Сервис улучшения фотографий профиля.

Основные функции:
- Проверка загруженного файла
- Кодирование в base64 и вызов модели Gemini
"""

import io
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError

from .encoder import file_to_base64
from .errors import UnsupportedFileError
from .image_client import ImageGenerationClient
from .prompt import EnhancementOptions

logger = logging.getLogger(__name__)


def is_supported_image(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")


def detect_mime_type(data: bytes, declared: Optional[str] = None) -> Optional[str]:
    """Trust a declared image/* type, otherwise sniff the bytes with Pillow."""
    if is_supported_image(declared):
        return declared
    try:
        img = Image.open(io.BytesIO(data))
        return Image.MIME.get(img.format, declared)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
        return declared


async def enhance_photo(
    client: ImageGenerationClient,
    file,
    mime_type: Optional[str],
    options: EnhancementOptions,
) -> Dict[str, Any]:
    """
    Улучшить фотографию по выбранным опциям.

    Args:
        client: Shared Gemini client
        file: Binary file-like object (``UploadFile`` or ``BytesIO``)
        mime_type: Media type of the photo
        options: Background style and retouching toggles

    Returns:
        Dict with:
        - image: data URI of the enhanced photo
        - processing_time: seconds spent

    Raises:
        UnsupportedFileError: The file is not an image
        EnhancementError: Encoding or Gemini failure (user-facing message)
    """
    if not is_supported_image(mime_type):
        raise UnsupportedFileError()

    start_time = datetime.now()
    logger.info(f"📸 Enhancing {mime_type} photo with options: {options}")

    try:
        b64 = await file_to_base64(file, mime_type)
        image = await client.enhance_image(b64, mime_type, options)
    except Exception as e:
        total_time = (datetime.now() - start_time).total_seconds()
        logger.error(f"❌ Photo enhancement failed after {total_time:.2f}s: {e}")
        raise

    processing_time = (datetime.now() - start_time).total_seconds()
    logger.info(f"✅ Photo enhanced successfully in {processing_time:.2f}s")

    return {
        "image": image,
        "processing_time": processing_time,
    }
