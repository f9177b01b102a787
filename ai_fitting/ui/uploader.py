"""Single-image uploader with a live preview."""

from typing import Callable

from ..models import ACCEPTED_MIME_TYPES, ImageSelection
from .previews import PreviewStore


class ImageUploader:
    """Captures one image and reports it (or its absence) to the owner.

    The previous preview is always released before a new one is created.
    """

    accept = ", ".join(ACCEPTED_MIME_TYPES)

    def __init__(
        self,
        label: str,
        icon: str,
        on_select: Callable[[ImageSelection | None], object],
        previews: PreviewStore,
    ):
        self.label = label
        self.icon = icon
        self.on_select = on_select
        self.previews = previews
        self.preview_url: str | None = None
        # Mirrors the file input's value; reset on clear so the same file can be picked again
        self.input_value: str | None = None

    @property
    def has_image(self) -> bool:
        return self.preview_url is not None

    def select(self, selection: ImageSelection | None) -> None:
        """Handle a file picker change. ``None`` means nothing was picked."""
        self._release_preview()
        if selection is None:
            self.on_select(None)
            return

        self.preview_url = self.previews.create(selection)
        self.input_value = selection.filename or ""
        self.on_select(selection)

    def clear(self) -> None:
        """Remove the image and reset the input."""
        self._release_preview()
        self.on_select(None)
        self.input_value = None

    def close(self) -> None:
        """Release the preview on teardown without notifying the owner."""
        self._release_preview()

    def _release_preview(self) -> None:
        if self.preview_url is not None:
            self.previews.revoke(self.preview_url)
            self.preview_url = None
