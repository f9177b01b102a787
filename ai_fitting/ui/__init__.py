"""Uploaders, preview handles and rendering."""

from .previews import PreviewStore
from .uploader import ImageUploader
from .render import (
    ResultPanelView,
    SessionView,
    UploaderView,
    render_page,
    render_result_panel,
    render_session,
)

__all__ = [
    "PreviewStore",
    "ImageUploader",
    "UploaderView",
    "ResultPanelView",
    "SessionView",
    "render_result_panel",
    "render_session",
    "render_page",
]
