"""
Profile Enhancer Service - веб-приложение для улучшения фото профиля.

Маршруты:
- /: страница загрузки и сравнения "до/после"
- /v1/photo/enhance: улучшение загруженного фото
- /v1/photo/enhance/base64: то же для base64 / data URI
"""

import io
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from profile_enhancer.core.config import load_config
from profile_enhancer.enhancement import (
    BackgroundStyle,
    EnhancementError,
    EnhancementFailedError,
    EnhancementOptions,
    ImageGenerationClient,
    UnsupportedFileError,
    enhance_photo,
)
from profile_enhancer.enhancement.encoder import decode_base64, strip_data_uri_prefix
from profile_enhancer.enhancement.service import detect_mime_type

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

# Отключаем стандартный логгер uvicorn.access
uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.handlers = []
uvicorn_access_logger.propagate = False


class CustomAccessLogMiddleware(BaseHTTPMiddleware):
    """
    Кастомный middleware для логирования запросов, исключая /health.
    """
    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.access_logger = logging.getLogger("profile_enhancer.access")

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        formatted_process_time = f"{process_time:.4f}s"

        if request.url.path != "/health":
            client = f"{request.client.host}:{request.client.port}" if request.client else "-"
            self.access_logger.info(
                f'{client} - "{request.method} {request.url.path} HTTP/{request.scope["http_version"]}" '
                f'{response.status_code} {formatted_process_time}'
            )

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config()
    app.state.config = config
    app.state.image_client = ImageGenerationClient(
        api_key=config.api_key,
        model=config.model,
        base_url=config.base_url,
        timeout=config.timeout,
    )
    logger.info(f"🚀 Gemini client ready: model={config.model}")
    try:
        yield
    finally:
        await app.state.image_client.close()
        logger.info("Gemini client closed")


app = FastAPI(
    title="Profile Enhancer Service",
    version="1.0.0",
    lifespan=lifespan,
    middleware=[Middleware(CustomAccessLogMiddleware)],
)


def get_image_client(request: Request) -> ImageGenerationClient:
    return request.app.state.image_client


# ============================================================================
# Pydantic Models
# ============================================================================

class EnhancementOptionsModel(BaseModel):
    background_style: str = BackgroundStyle.AI_CHOICE.value
    adjust_brightness: bool = True
    smooth_skin: bool = True

    def to_options(self) -> EnhancementOptions:
        return EnhancementOptions(
            background_style=self.background_style,
            adjust_brightness=self.adjust_brightness,
            smooth_skin=self.smooth_skin,
        )


class PhotoEnhanceRequest(BaseModel):
    # raw base64 or a full data URI
    image: str
    mime_type: Optional[str] = None
    options: EnhancementOptionsModel = EnhancementOptionsModel()


class OptionsResponse(BaseModel):
    background_styles: List[str]
    defaults: EnhancementOptionsModel


def _error_response(error: EnhancementError) -> Dict[str, Any]:
    return {
        "status": "error",
        "error_type": error.error_type,
        "message": error.message,
    }


async def _run_enhancement(client, file, mime_type, options: EnhancementOptions) -> Dict[str, Any]:
    try:
        result = await enhance_photo(client, file, mime_type, options)
        return {
            "status": "success",
            "result": result,
        }

    except UnsupportedFileError as e:
        logger.error(f"❌ Validation error: {e}")
        raise HTTPException(status_code=400, detail=e.message)

    except EnhancementError as e:
        return _error_response(e)

    except Exception as e:
        logger.error(f"❌ Photo enhancement error: {e}", exc_info=True)
        return _error_response(EnhancementFailedError())


# ============================================================================
# Page & Health Check
# ============================================================================

@app.get("/", include_in_schema=False)
def index() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/v1/photo/options", response_model=OptionsResponse)
def photo_options() -> OptionsResponse:
    return OptionsResponse(
        background_styles=[style.value for style in BackgroundStyle],
        defaults=EnhancementOptionsModel(),
    )


# ============================================================================
# Photo Enhancement Endpoints
# ============================================================================

@app.post("/v1/photo/enhance")
async def photo_enhance(
    file: UploadFile = File(...),
    background_style: str = Form(BackgroundStyle.AI_CHOICE.value),
    adjust_brightness: bool = Form(True),
    smooth_skin: bool = Form(True),
    client: ImageGenerationClient = Depends(get_image_client),
) -> Dict[str, Any]:
    """
    Улучшение загруженной фотографии (multipart/form-data).
    """
    mime_type = file.content_type
    if not mime_type or not mime_type.startswith("image/"):
        data = await file.read()
        await file.seek(0)
        mime_type = detect_mime_type(data, mime_type)

    options = EnhancementOptions(
        background_style=background_style,
        adjust_brightness=adjust_brightness,
        smooth_skin=smooth_skin,
    )
    logger.info(f"📸 Enhance request for {file.filename} ({mime_type})")
    return await _run_enhancement(client, file, mime_type, options)


@app.post("/v1/photo/enhance/base64")
async def photo_enhance_base64(
    req: PhotoEnhanceRequest,
    client: ImageGenerationClient = Depends(get_image_client),
) -> Dict[str, Any]:
    """
    Улучшение фотографии, переданной как base64 или data URI.
    """
    image = req.image.strip()
    mime_type = req.mime_type
    try:
        if image.startswith("data:"):
            if not mime_type:
                mime_type = image[len("data:"):].split(";", 1)[0].split(",", 1)[0] or None
            image = strip_data_uri_prefix(image)
        data = decode_base64(image)
    except EnhancementError as e:
        return _error_response(e)

    mime_type = detect_mime_type(data, mime_type)
    return await _run_enhancement(client, io.BytesIO(data), mime_type, req.options.to_options())


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    from profile_enhancer.__main__ import main

    main()
