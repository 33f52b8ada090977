import logging
import time
from typing import Any, Dict, Optional

import httpx

from .encoder import to_data_uri
from .errors import (
    EnhancementError,
    EnhancementFailedError,
    InvalidAPIKeyError,
    NoCandidatesError,
    NoImageError,
)
from .prompt import EnhancementOptions, build_instruction

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash-image-preview"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"


class GeminiAPIError(Exception):
    """Non-2xx answer from generateContent. Never shown to the user."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini API error {status_code}: {body}")


class ImageGenerationClient:
    """
    Gemini image model client for profile photo enhancement.

    One instance lives for the whole application; every call to
    ``enhance_image`` is a single independent generateContent request
    (no retry, no shared state between calls).
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
            "Accept": "*/*",
        }
        # sent per request; an injected client's own headers stay untouched
        self.client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def close(self):
        """Explicit client shutdown."""
        await self.client.aclose()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    def build_request_body(self, b64: str, mime_type: str, options: EnhancementOptions) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"inline_data": {"mime_type": mime_type, "data": b64}},
                        {"text": build_instruction(options)},
                    ],
                }
            ],
            "generationConfig": {
                "responseModalities": ["IMAGE", "TEXT"]
            },
        }

    @staticmethod
    def extract_image(data: Dict[str, Any]) -> str:
        """
        Return the first inline image of the first candidate as a data URI.

        Accepts both camelCase (REST) and snake_case part keys.
        """
        candidates = data.get("candidates") or []
        if not candidates:
            raise NoCandidatesError()

        content = candidates[0].get("content") or {}
        for part in content.get("parts") or []:
            inline = part.get("inlineData") or part.get("inline_data")
            if inline and inline.get("data"):
                mime = inline.get("mimeType") or inline.get("mime_type") or "image/png"
                return to_data_uri(mime, inline["data"])

        raise NoImageError()

    async def enhance_image(self, b64: str, mime_type: str, options: EnhancementOptions) -> str:
        """
        Send the photo and the editing instruction, return a data:image/...;base64,... URI.

        Raises one of the EnhancementError subclasses; the raw cause is logged.
        """
        start = time.monotonic()
        body = self.build_request_body(b64, mime_type, options)

        logger.debug("Sending request to Gemini model=%s, options=%s", self.model, options)

        try:
            resp = await self.client.post(self.endpoint, json=body, headers=self.headers)
            if resp.status_code >= 400:
                raise GeminiAPIError(resp.status_code, resp.text)

            image_uri = self.extract_image(resp.json())
        except EnhancementError as e:
            logger.error("Gemini response rejected: %s", e.message)
            raise
        except Exception as e:
            logger.exception("Error enhancing image with Gemini API: %s", e)
            if "api key" in str(e).lower():
                raise InvalidAPIKeyError() from e
            raise EnhancementFailedError() from e

        elapsed = time.monotonic() - start
        logger.info("Gemini execution time: %.2fs", elapsed)
        return image_uri
