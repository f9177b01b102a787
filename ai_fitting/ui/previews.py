"""Preview handles for uploaded images.

A handle is a URL the page can display. It stays valid until it is revoked,
which the uploader does whenever its image is replaced or cleared.
"""

import uuid

from ..models import ImageSelection


class PreviewStore:
    """In-memory registry of displayable preview handles."""

    def __init__(self, prefix: str = "/previews"):
        self.prefix = prefix.rstrip("/")
        self._items: dict[str, ImageSelection] = {}

    def create(self, selection: ImageSelection) -> str:
        """Register a selection and return its preview URL."""
        handle = uuid.uuid4().hex
        self._items[handle] = selection
        return f"{self.prefix}/{handle}"

    def revoke(self, url: str) -> None:
        """Release a preview URL. Unknown URLs are ignored."""
        self._items.pop(self._handle_from_url(url), None)

    def get(self, handle: str) -> ImageSelection | None:
        return self._items.get(handle)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, url: str) -> bool:
        return self._handle_from_url(url) in self._items

    def _handle_from_url(self, url: str) -> str:
        return url.rsplit("/", 1)[-1]
