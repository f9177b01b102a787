# Test fixtures and configuration
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ai_fitting.config import FittingConfig
from ai_fitting.models import ImageSelection


class FakeGenerationService:
    """Stands in for the Gemini service; records every call."""

    def __init__(self, result: str = "Zm9v", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls = []
        self.on_call = None  # optional coroutine function run mid-call

    async def generate(self, person, top, bottom):
        self.calls.append((person, top, bottom))
        if self.on_call is not None:
            await self.on_call()
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def minimal_png_bytes():
    """Minimal valid PNG image bytes."""
    return bytes([
        0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
        0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,  # IHDR chunk
        0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,  # 1x1 dimensions
        0x08, 0x02, 0x00, 0x00, 0x00, 0x90, 0x77, 0x53,
        0xDE, 0x00, 0x00, 0x00, 0x0C, 0x49, 0x44, 0x41,  # IDAT chunk
        0x54, 0x08, 0xD7, 0x63, 0xF8, 0xCF, 0xC0, 0x00,
        0x00, 0x00, 0x03, 0x00, 0x01, 0x00, 0x05, 0xFE,
        0xD4, 0xAA, 0x00, 0x00, 0x00, 0x00, 0x49, 0x45,  # IEND chunk
        0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82
    ])


@pytest.fixture
def jpeg_bytes():
    """JPEG magic bytes followed by filler."""
    return b'\xff\xd8\xff\xe0' + b'\x00' * 32


@pytest.fixture
def webp_bytes():
    """WEBP container header followed by filler."""
    return b'RIFF\x24\x00\x00\x00WEBPVP8 ' + b'\x00' * 32


@pytest.fixture
def person_image(minimal_png_bytes):
    return ImageSelection(data=minimal_png_bytes, mime_type="image/png", filename="person.png")


@pytest.fixture
def top_image(jpeg_bytes):
    return ImageSelection(data=jpeg_bytes, mime_type="image/jpeg", filename="top.jpg")


@pytest.fixture
def bottom_image(webp_bytes):
    return ImageSelection(data=webp_bytes, mime_type="image/webp", filename="bottom.webp")


@pytest.fixture
def config():
    """Config with a dummy credential and English messages."""
    return FittingConfig(api_key="test-key", locale="en")


@pytest.fixture
def fake_service():
    return FakeGenerationService()


@pytest.fixture
def temp_image_file(tmp_path, minimal_png_bytes):
    """Create a temporary PNG file."""
    img_path = tmp_path / "test_image.png"
    img_path.write_bytes(minimal_png_bytes)
    return img_path
