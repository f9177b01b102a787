"""Gemini client for virtual try-on image generation."""

import base64
import logging

from google import genai
from google.genai import types

from ..config import FittingConfig
from ..errors import (
    GenerationFailedError,
    MissingGarmentImageError,
    NoImageGeneratedError,
)
from ..messages import get_message
from ..models import ImageSelection

logger = logging.getLogger(__name__)


def build_instruction(has_top: bool, has_bottom: bool, locale: str = "ko") -> str:
    """Compose the instruction that refers to each garment by image position.

    The person is always image 1; garments follow in top, bottom order.
    """
    descriptions = []
    position = 2
    if has_top:
        descriptions.append(get_message("prompt_top", locale, position=position))
        position += 1
    if has_bottom:
        descriptions.append(get_message("prompt_bottom", locale, position=position))

    garments = get_message("prompt_joiner", locale).join(descriptions)
    prompt = get_message("prompt_body", locale, garments=garments)
    prompt += get_message("prompt_keep", locale)
    return prompt


def to_image_part(selection: ImageSelection) -> types.Part:
    """Wrap an image as an inline-data part. The SDK base64-encodes it on the wire."""
    return types.Part.from_bytes(data=selection.data, mime_type=selection.mime_type)


def extract_image_data(response: types.GenerateContentResponse) -> bytes | None:
    """Return the bytes of the first inline image in the response."""
    for candidate in response.candidates or []:
        if candidate.content is None:
            continue
        for part in candidate.content.parts or []:
            if part.inline_data is not None and part.inline_data.data:
                return part.inline_data.data
        # Only the first candidate is considered
        break
    return None


class FittingGenerationService:
    """Composites garment images onto a person image with a Gemini image model."""

    def __init__(
        self,
        config: FittingConfig,
        client: genai.Client | None = None,
    ):
        self.config = config
        self._client = client

    @property
    def locale(self) -> str:
        return self.config.locale

    @property
    def client(self) -> genai.Client:
        """Get or create the Gemini client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.config.require_api_key())
        return self._client

    def build_contents(
        self,
        person: ImageSelection,
        top: ImageSelection | None,
        bottom: ImageSelection | None,
    ) -> types.Content:
        """Build the single multimodal message: images first, instruction last."""
        parts = [to_image_part(person)]
        for garment in (top, bottom):
            if garment is not None:
                parts.append(to_image_part(garment))

        prompt = build_instruction(top is not None, bottom is not None, self.locale)
        parts.append(types.Part.from_text(text=prompt))
        return types.Content(role="user", parts=parts)

    async def generate(
        self,
        person: ImageSelection,
        top: ImageSelection | None,
        bottom: ImageSelection | None,
    ) -> str:
        """Generate a try-on image.

        Args:
            person: The person photo, sent as image 1
            top: Optional top garment photo
            bottom: Optional bottom garment photo

        Returns:
            Base64-encoded PNG data of the generated image
        """
        # Both checks happen before any network call
        self.config.require_api_key()
        if top is None and bottom is None:
            raise MissingGarmentImageError(get_message("missing_garment_image", self.locale))

        contents = self.build_contents(person, top, bottom)

        try:
            response = await self.client.aio.models.generate_content(
                model=self.config.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_modalities=[types.Modality.IMAGE],
                ),
            )
        except Exception as e:
            logger.error("Error calling Gemini API: %s", e)
            raise GenerationFailedError(get_message("generation_failed", self.locale)) from e

        image_data = extract_image_data(response)
        if image_data is None:
            logger.warning("Gemini response contained no inline image")
            raise NoImageGeneratedError(get_message("no_image_generated", self.locale))

        return base64.b64encode(image_data).decode("ascii")
