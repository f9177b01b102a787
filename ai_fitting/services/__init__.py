"""External service clients."""

from .gemini_client import FittingGenerationService, build_instruction

__all__ = ["FittingGenerationService", "build_instruction"]
