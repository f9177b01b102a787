"""One-shot download of a generated image."""

from pydantic import BaseModel


class Download(BaseModel):
    """A file the browser should save. Nothing is written server-side."""

    filename: str
    data: bytes
    media_type: str = "image/png"

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'
