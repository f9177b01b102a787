"""Image selection models."""

import base64
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


ACCEPTED_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")


class Slot(str, Enum):
    """The three independent upload slots."""
    PERSON = "person"
    TOP = "top"
    BOTTOM = "bottom"


class ImageSelection(BaseModel):
    """A user-chosen image blob plus its MIME type."""

    data: bytes
    mime_type: str
    filename: str | None = None

    model_config = ConfigDict(frozen=True)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @classmethod
    def from_path(cls, path: Path) -> "ImageSelection":
        data = path.read_bytes()
        return cls(data=data, mime_type=detect_mime_type(data, path.name), filename=path.name)


def detect_mime_type(data: bytes, filename: str | None = None) -> str | None:
    """Detect the image format from magic bytes, then from the file extension."""
    if data[:3] == b'\xff\xd8\xff':
        return "image/jpeg"
    if data[:8] == b'\x89PNG\r\n\x1a\n':
        return "image/png"
    if data[:4] == b'RIFF' and data[8:12] == b'WEBP':
        return "image/webp"
    if data[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"

    if filename:
        suffix = Path(filename).suffix.lower()
        return {
            ".jpg": "image/jpeg",
            ".jpeg": "image/jpeg",
            ".png": "image/png",
            ".webp": "image/webp",
            ".gif": "image/gif",
        }.get(suffix)
    return None


def is_accepted(mime_type: str | None) -> bool:
    return mime_type in ACCEPTED_MIME_TYPES
