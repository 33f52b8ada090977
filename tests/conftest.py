import io

import pytest
from PIL import Image


class FakeImageClient:
    """Stands in for ImageGenerationClient in route and service tests."""

    def __init__(self, result="data:image/png;base64,ABC123", error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def enhance_image(self, b64, mime_type, options):
        self.calls.append((b64, mime_type, options))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 120, 80)).save(buf, format="PNG")
    return buf.getvalue()
