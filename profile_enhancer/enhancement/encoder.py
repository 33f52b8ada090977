import base64
import binascii
import inspect
import logging

from .errors import EncodingError

logger = logging.getLogger(__name__)


def to_data_uri(mime_type: str, b64: str) -> str:
    """Convert raw base64 to a browser-ready data URI."""
    return f"data:{mime_type};base64,{b64}"


def strip_data_uri_prefix(value: str) -> str:
    """Return the payload after the ``data:<mime>;base64,`` prefix."""
    # base64 text never contains a comma
    _, sep, payload = value.rpartition(",")
    if not sep or not payload:
        raise EncodingError()
    return payload


def decode_base64(b64: str) -> bytes:
    """Strict base64 decode, raising EncodingError on malformed input."""
    try:
        return base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError() from e


async def file_to_base64(file, mime_type: str = "application/octet-stream") -> str:
    """
    Read a binary file-like object and return its raw base64 payload.

    ``file.read()`` may be a coroutine (Starlette ``UploadFile``) or a plain
    method (``io.BytesIO``). An empty file is an encoding failure, never an
    empty payload.
    """
    try:
        data = file.read()
        if inspect.isawaitable(data):
            data = await data
    except Exception as e:
        logger.error("Failed to read uploaded file: %s", e)
        raise EncodingError() from e

    if not isinstance(data, (bytes, bytearray)) or not data:
        raise EncodingError()

    encoded = base64.b64encode(bytes(data)).decode("utf-8")
    logger.debug("Encoded %d bytes of %s", len(data), mime_type)
    return encoded
