"""AI fashion fitting: composite garment photos onto a person with Gemini."""

from .config import FittingConfig, load_config
from .controller import FittingController
from .services import FittingGenerationService
from .session import FittingSession

__all__ = [
    "FittingConfig",
    "load_config",
    "FittingController",
    "FittingGenerationService",
    "FittingSession",
]
