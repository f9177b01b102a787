"""Data models for the AI fitting app."""

from .image import ACCEPTED_MIME_TYPES, ImageSelection, Slot, detect_mime_type, is_accepted
from .state import (
    Failed,
    FittingState,
    Idle,
    Loading,
    OperationState,
    Succeeded,
    complete,
    fail,
    reset,
    select_image,
    start_loading,
)
from .download import Download

__all__ = [
    "ACCEPTED_MIME_TYPES",
    "ImageSelection",
    "Slot",
    "detect_mime_type",
    "is_accepted",
    "Idle",
    "Loading",
    "Failed",
    "Succeeded",
    "OperationState",
    "FittingState",
    "select_image",
    "start_loading",
    "complete",
    "fail",
    "reset",
    "Download",
]
